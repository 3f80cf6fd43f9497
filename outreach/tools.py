import functools
import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple
from urllib.parse import urlparse

import requests

from .config import Settings, load_settings
from .schemas import Evidence, JobSignal, NewsItem

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

NEWS_URL = "https://newsdata.io/api/1/news"
JSEARCH_HOST = "jsearch.p.rapidapi.com"
JSEARCH_URL = f"https://{JSEARCH_HOST}/search"
LOGO_URL = "https://logo.clearbit.com/{domain}"
FAVICON_URL = "https://www.google.com/s2/favicons?domain={host}&sz=32"

MAX_NEWS_ITEMS = 5
MAX_JOB_SIGNALS = 8


def optional_source(name: str) -> Callable:
    """Turn any failure of an evidence provider into an empty result.

    Callers only ever see a list; which provider failed is logged here.
    """
    def decorator(fetch):
        @functools.wraps(fetch)
        def wrapper(*args, **kwargs) -> list:
            try:
                return fetch(*args, **kwargs)
            except Exception as e:
                logger.warning(f"Failed to fetch {name}: {e}")
                return []
        return wrapper
    return decorator


def derive_domain(website: Optional[str]) -> Tuple[str, str]:
    """Return ``(domain, logo_url)`` for a website, or empty strings."""
    if not website:
        return "", ""
    try:
        url = website if website.startswith(("http://", "https://")) else f"https://{website}"
        host = urlparse(url).hostname or ""
    except ValueError as e:
        logger.info(f"Failed to extract domain from website {website!r}: {e}")
        return "", ""
    domain = host[4:] if host.startswith("www.") else host
    if not domain:
        return "", ""
    return domain, LOGO_URL.format(domain=domain)


def _news_item(item: dict) -> NewsItem:
    link = item["link"]
    description = item.get("description") or (item.get("content") or "")[:200]
    favicon = item.get("source_icon") or FAVICON_URL.format(host=urlparse(link).hostname)
    return NewsItem(
        title=item["title"],
        description=description,
        url=link,
        published_at=item.get("pubDate") or "",
        source=item.get("source_id") or "Unknown Source",
        favicon=favicon,
    )


@optional_source("news")
def fetch_news(company_name: str, settings: Settings) -> List[NewsItem]:
    if not settings.news_enabled:
        return []
    logger.info("Fetching real-time news headlines...")
    response = requests.get(
        NEWS_URL,
        params={
            "apikey": settings.news_api_key,
            "q": f'"{company_name}"',
            "language": "en",
            "size": 10,
            "category": "business,technology",
        },
        timeout=settings.http_timeout,
    )
    response.raise_for_status()
    results = response.json().get("results") or []
    news = [_news_item(item) for item in results[:MAX_NEWS_ITEMS]]
    logger.info(f"Found {len(news)} relevant news articles")
    return news


def _job_signal(job: dict) -> JobSignal:
    city = job.get("job_city")
    country = job.get("job_country")
    location = ", ".join(filter(None, (city, country))) or "Remote"
    return JobSignal(
        title=job["job_title"],
        company=job.get("employer_name") or "",
        location=location,
        type=job.get("job_employment_type") or "Full-time",
        posted=job.get("job_posted_at_datetime_utc") or datetime.now(timezone.utc).isoformat(),
    )


@optional_source("job signals")
def fetch_jobs(company_name: str, settings: Settings) -> List[JobSignal]:
    if not settings.jobs_enabled:
        return []
    logger.info("Searching for hiring signals...")
    response = requests.get(
        JSEARCH_URL,
        params={
            "query": f"{company_name} jobs",
            "page": 1,
            "num_pages": 1,
            "date_posted": "month",
        },
        headers={
            "X-RapidAPI-Key": settings.jsearch_api_key,
            "X-RapidAPI-Host": JSEARCH_HOST,
        },
        timeout=settings.http_timeout,
    )
    response.raise_for_status()
    data = response.json().get("data") or []
    jobs = [_job_signal(job) for job in data[:MAX_JOB_SIGNALS]]
    logger.info(f"Found {len(jobs)} active job postings")
    return jobs


def collect_evidence(company_name: str, website: Optional[str] = None,
                     settings: Optional[Settings] = None) -> Evidence:
    """Gather domain, logo, news and job postings for a company.

    Library entry point for callers that want evidence without running the
    brief graph. The graph calls ``derive_domain``, ``fetch_news`` and
    ``fetch_jobs`` as separate nodes so the two providers run in parallel.
    Never raises for provider problems; missing sources come back empty.
    """
    settings = settings or load_settings()
    domain, logo = derive_domain(website)
    return Evidence(
        company_domain=domain,
        company_logo=logo,
        news=fetch_news(company_name, settings),
        jobs=fetch_jobs(company_name, settings),
    )
