import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


class Settings(BaseModel):
    """Runtime options. A missing provider key just switches that source off."""
    news_api_key: Optional[str] = None
    jsearch_api_key: Optional[str] = None
    google_api_key: Optional[str] = None
    completion_model: str = "gemini-1.5-flash"
    db_path: str = "briefs.db"
    http_timeout: float = 15.0

    @property
    def news_enabled(self) -> bool:
        return bool(self.news_api_key)

    @property
    def jobs_enabled(self) -> bool:
        return bool(self.jsearch_api_key)

    @property
    def synthesis_enabled(self) -> bool:
        return bool(self.google_api_key)


def load_settings() -> Settings:
    return Settings(
        news_api_key=os.getenv("NEWS_API_KEY") or None,
        jsearch_api_key=os.getenv("JSEARCH_API_KEY") or None,
        google_api_key=os.getenv("GOOGLE_API_KEY") or None,
        completion_model=os.getenv("COMPLETION_MODEL", "gemini-1.5-flash"),
        db_path=os.getenv("BRIEFS_DB_PATH", "briefs.db"),
        http_timeout=float(os.getenv("HTTP_TIMEOUT", "15")),
    )
