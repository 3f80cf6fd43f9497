from unittest.mock import MagicMock, patch

import pytest
import requests

from outreach.tools import collect_evidence, derive_domain, fetch_jobs, fetch_news


def mock_response(payload, status_error=None):
    response = MagicMock()
    response.json.return_value = payload
    if status_error:
        response.raise_for_status.side_effect = status_error
    return response


@pytest.mark.parametrize("website,domain", [
    ("example.com", "example.com"),
    ("www.Example.com", "example.com"),
    ("https://www.acme.io/about", "acme.io"),
    ("http://blog.acme.io", "blog.acme.io"),
])
def test_derive_domain(website, domain):
    assert derive_domain(website) == (domain, f"https://logo.clearbit.com/{domain}")


@pytest.mark.parametrize("website", [None, "", "https://[broken", "https://"])
def test_derive_domain_failure_is_empty(website):
    assert derive_domain(website) == ("", "")


@patch("outreach.tools.requests.get")
def test_fetch_news_skipped_without_key(mock_get, no_keys):
    assert fetch_news("Acme", no_keys) == []
    mock_get.assert_not_called()


@patch("outreach.tools.requests.get")
def test_fetch_news_maps_results(mock_get, all_keys):
    results = [
        {
            "title": f"Acme news {i}",
            "description": None,
            "content": "x" * 300,
            "link": f"https://news.example.org/{i}",
            "pubDate": "2024-05-01 10:00:00",
            "source_id": None,
            "source_icon": None,
        }
        for i in range(7)
    ]
    results[0]["source_icon"] = "https://icons.test/a.png"
    mock_get.return_value = mock_response({"results": results})

    news = fetch_news("Acme", all_keys)

    assert len(news) == 5
    assert news[0].favicon == "https://icons.test/a.png"
    assert news[1].favicon == "https://www.google.com/s2/favicons?domain=news.example.org&sz=32"
    assert news[1].description == "x" * 200
    assert news[1].source == "Unknown Source"
    assert news[1].published_at == "2024-05-01 10:00:00"
    params = mock_get.call_args.kwargs["params"]
    assert params["q"] == '"Acme"'
    assert params["category"] == "business,technology"
    assert params["apikey"] == "news-key"


@patch("outreach.tools.requests.get")
def test_fetch_news_swallows_errors(mock_get, all_keys):
    mock_get.return_value = mock_response({}, status_error=requests.HTTPError("429 Too Many Requests"))
    assert fetch_news("Acme", all_keys) == []

    mock_get.side_effect = requests.ConnectionError("unreachable")
    assert fetch_news("Acme", all_keys) == []

    mock_get.side_effect = None
    mock_get.return_value = mock_response({"results": [{"title": "no link"}]})
    assert fetch_news("Acme", all_keys) == []


@patch("outreach.tools.requests.get")
def test_fetch_jobs_maps_results(mock_get, all_keys):
    data = [
        {"job_title": "Backend Engineer", "employer_name": "Acme", "job_city": "Berlin",
         "job_country": "DE", "job_employment_type": "FULLTIME",
         "job_posted_at_datetime_utc": "2024-05-01T00:00:00.000Z"},
        {"job_title": "Designer", "employer_name": "Acme", "job_country": "US"},
        {"job_title": "Support", "employer_name": "Acme"},
        {"job_title": "Sales", "employer_name": "Acme", "job_city": "Austin"},
    ] + [{"job_title": f"Role {i}", "employer_name": "Acme"} for i in range(10)]
    mock_get.return_value = mock_response({"data": data})

    jobs = fetch_jobs("Acme", all_keys)

    assert len(jobs) == 8
    assert jobs[0].location == "Berlin, DE"
    assert jobs[0].type == "FULLTIME"
    assert jobs[1].location == "US"
    assert jobs[2].location == "Remote"
    assert jobs[2].type == "Full-time"
    assert jobs[2].posted
    assert jobs[3].location == "Austin"
    assert mock_get.call_args.kwargs["params"]["query"] == "Acme jobs"
    assert mock_get.call_args.kwargs["params"]["date_posted"] == "month"
    assert mock_get.call_args.kwargs["headers"]["X-RapidAPI-Key"] == "jobs-key"


@patch("outreach.tools.requests.get")
def test_fetch_jobs_swallows_errors(mock_get, all_keys):
    mock_get.side_effect = requests.Timeout("slow")
    assert fetch_jobs("Acme", all_keys) == []


@patch("outreach.tools.requests.get")
def test_collect_evidence_without_keys(mock_get, no_keys):
    evidence = collect_evidence("Acme", "acme.io", no_keys)
    assert evidence.company_domain == "acme.io"
    assert evidence.company_logo == "https://logo.clearbit.com/acme.io"
    assert evidence.news == []
    assert evidence.jobs == []
    mock_get.assert_not_called()
