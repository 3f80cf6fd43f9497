from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Confidence(str, Enum):
    """Strength of a technology guess, strongest first."""
    DETECTED = "detected"
    LIKELY = "likely"
    INFERRED = "inferred"


class BriefRequest(CamelModel):
    company_name: str = Field(..., min_length=1)
    website: Optional[str] = None
    user_intent: str = Field(..., min_length=1)


class NewsItem(CamelModel):
    """Headline returned by the news provider."""
    title: str
    description: str = ""
    url: str
    published_at: str = ""
    source: str = "Unknown Source"
    favicon: Optional[str] = None


class JobSignal(CamelModel):
    """Open job posting returned by the job provider."""
    title: str
    company: str = ""
    location: str = "Remote"
    type: str = "Full-time"
    posted: str = ""


class TechStackItem(CamelModel):
    name: str
    confidence: Confidence
    source: str

    model_config = ConfigDict(use_enum_values=True)


class AiAnalysis(CamelModel):
    """Narrative sections produced by the language model.

    Unknown keys returned by the model are kept as extra fields.
    """
    summary: str = "Strategic analysis in progress..."
    key_insights: List[str] = Field(default_factory=list)
    pitch_angle: str = "Personalized recommendations being generated..."
    subject_line: str = "Crafting compelling subject line..."
    what_not_to_pitch: str = "Risk assessment in progress..."
    signal_tag: str = "Processing market signals..."
    confidence_notes: str = "Analysis based on real-time data"

    model_config = ConfigDict(extra="allow")


class Evidence(CamelModel):
    """Everything collected about a company before synthesis."""
    company_domain: str = ""
    company_logo: str = ""
    news: List[NewsItem] = Field(default_factory=list)
    jobs: List[JobSignal] = Field(default_factory=list)


class Brief(CamelModel):
    """Stored brief, as returned by the store."""
    id: str
    created_at: str
    company_name: str
    website: Optional[str] = None
    user_intent: str
    summary: str
    news: List[NewsItem] = Field(default_factory=list)
    tech_stack: List[str] = Field(default_factory=list)
    pitch_angle: str
    subject_line: str
    what_not_to_pitch: str
    signal_tag: str
    job_signals: List[JobSignal] = Field(default_factory=list)
    tech_stack_detail: List[TechStackItem] = Field(default_factory=list)
    key_insights: List[str] = Field(default_factory=list)
    confidence_notes: str = ""
    company_logo: str = ""
    company_domain: str = ""
