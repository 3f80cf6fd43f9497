import logging
from typing import Dict, List, Optional, Sequence, Tuple

from .schemas import Confidence, JobSignal, NewsItem, TechStackItem

logger = logging.getLogger(__name__)

MAX_TECH_ITEMS = 8

# name -> (substrings, confidence). Declaration order is the output order.
TECH_PATTERNS: Dict[str, Tuple[Tuple[str, ...], Confidence]] = {
    # Frontend
    "React": (("react", "reactjs", "react.js"), Confidence.DETECTED),
    "Vue.js": (("vue", "vuejs", "vue.js"), Confidence.DETECTED),
    "Angular": (("angular", "angularjs"), Confidence.DETECTED),
    "TypeScript": (("typescript", "ts developer"), Confidence.DETECTED),
    "JavaScript": (("javascript", "js developer", "frontend"), Confidence.LIKELY),
    # Backend
    "Node.js": (("node", "nodejs", "node.js", "express"), Confidence.DETECTED),
    "Python": (("python", "django", "flask", "fastapi"), Confidence.DETECTED),
    "Java": (("java developer", "spring boot", "java engineer"), Confidence.DETECTED),
    "Go": (("golang", "go developer", "go engineer"), Confidence.DETECTED),
    "Ruby": (("ruby", "rails", "ruby on rails"), Confidence.DETECTED),
    # Cloud & infrastructure
    "AWS": (("aws", "amazon web services", "ec2", "s3"), Confidence.DETECTED),
    "Google Cloud": (("gcp", "google cloud", "gke"), Confidence.DETECTED),
    "Azure": (("azure", "microsoft azure"), Confidence.DETECTED),
    "Docker": (("docker", "container", "kubernetes", "k8s"), Confidence.DETECTED),
    "Terraform": (("terraform", "infrastructure as code"), Confidence.DETECTED),
    # Databases
    "PostgreSQL": (("postgres", "postgresql"), Confidence.DETECTED),
    "MongoDB": (("mongo", "mongodb"), Confidence.DETECTED),
    "Redis": (("redis", "cache"), Confidence.DETECTED),
    "MySQL": (("mysql",), Confidence.DETECTED),
    # AI/ML
    "TensorFlow": (("tensorflow", "tf"), Confidence.DETECTED),
    "PyTorch": (("pytorch",), Confidence.DETECTED),
    "Machine Learning": (("ml engineer", "machine learning", "data scientist"), Confidence.LIKELY),
    # DevOps
    "Jenkins": (("jenkins", "ci/cd"), Confidence.DETECTED),
    "GitHub Actions": (("github actions", "gh actions"), Confidence.DETECTED),
}

# (keywords, name, source), checked after the pattern table
INDUSTRY_RULES: List[Tuple[Tuple[str, ...], str, str]] = [
    (("fintech", "financial"), "Financial APIs", "industry context"),
    (("ecommerce", "e-commerce"), "E-commerce Platform", "industry context"),
    (("saas", "software as a service"), "SaaS Architecture", "business model"),
]

FALLBACK_STACK = [
    TechStackItem(name="Web Technologies", confidence=Confidence.INFERRED, source="default assumption"),
    TechStackItem(name="Cloud Infrastructure", confidence=Confidence.LIKELY, source="modern business assumption"),
]


def _contains_any(text: str, patterns: Sequence[str]) -> bool:
    return any(pattern in text for pattern in patterns)


def infer_tech_stack(
    company_name: str,
    website: Optional[str] = None,
    job_signals: Sequence[JobSignal] = (),
    news_items: Sequence[NewsItem] = (),
) -> List[TechStackItem]:
    """Guess a company's technology stack from the text collected about it.

    Pure keyword matching over the company name, website, job postings and
    news. The result is never empty and holds at most ``MAX_TECH_ITEMS``
    entries, in table order.
    """
    company_text = company_name.lower()
    website_text = (website or "").lower()
    job_text = " ".join(f"{job.title} {job.company}" for job in job_signals).lower()
    news_text = " ".join(f"{item.title} {item.description}" for item in news_items).lower()
    all_text = f"{company_text} {website_text} {job_text} {news_text}"

    tech_stack: List[TechStackItem] = []
    for name, (patterns, confidence) in TECH_PATTERNS.items():
        if not _contains_any(all_text, patterns):
            continue
        if _contains_any(job_text, patterns):
            source = "job postings"
        elif _contains_any(news_text, patterns):
            source = "news analysis"
        elif _contains_any(website_text, patterns):
            source = "website"
        else:
            source = "inferred"
        tech_stack.append(TechStackItem(name=name, confidence=confidence, source=source))

    for keywords, name, source in INDUSTRY_RULES:
        if _contains_any(all_text, keywords):
            tech_stack.append(TechStackItem(name=name, confidence=Confidence.INFERRED, source=source))

    if not tech_stack:
        tech_stack = [item.model_copy() for item in FALLBACK_STACK]

    tech_stack = tech_stack[:MAX_TECH_ITEMS]
    logger.info(f"Detected {len(tech_stack)} technologies for {company_name}")
    return tech_stack
