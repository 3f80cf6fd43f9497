import os
import sqlite3

import pytest

os.environ["BRIEFS_DB_PATH"] = ":memory:"
for key in ("NEWS_API_KEY", "JSEARCH_API_KEY", "GOOGLE_API_KEY"):
    os.environ[key] = ""

from outreach import history  # noqa: E402
from outreach.config import Settings  # noqa: E402


@pytest.fixture
def memory_db(monkeypatch):
    connection = history.init_db(sqlite3.connect(":memory:", check_same_thread=False))
    monkeypatch.setattr(history, "conn", connection)
    yield connection
    connection.close()


@pytest.fixture
def no_keys():
    return Settings()


@pytest.fixture
def all_keys():
    return Settings(news_api_key="news-key", jsearch_api_key="jobs-key", google_api_key="llm-key")
