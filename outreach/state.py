from typing import List, Optional, TypedDict

from .schemas import AiAnalysis, Brief, JobSignal, NewsItem, TechStackItem


class BriefState(TypedDict, total=False):
    company_name: str
    website: Optional[str]
    user_intent: str
    company_domain: str
    company_logo: str
    news: List[NewsItem]
    job_signals: List[JobSignal]
    tech_stack: List[TechStackItem]
    analysis: AiAnalysis
    brief: Brief  # Row returned by the store
