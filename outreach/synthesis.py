import json
import logging
import re
from datetime import datetime
from typing import Any, Optional, Sequence

from langchain_core.prompts import ChatPromptTemplate
from langchain_google_genai import ChatGoogleGenerativeAI
from pydantic import ValidationError

from .config import Settings, load_settings
from .schemas import AiAnalysis, JobSignal, NewsItem, TechStackItem

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an expert B2B strategist. Generate strategic insights in JSON format only, "
    "based on real data signals. Be specific and avoid generic business language."
)

BRIEF_PROMPT = """You are an expert B2B strategist analyzing real company data. Generate a strategic brief based on ACTUAL signals, not generic assumptions.

COMPANY: {company_name}
WEBSITE: {website}
DOMAIN: {domain}
USER INTENT: {user_intent}

REAL-TIME NEWS HEADLINES:
{news_context}

HIRING SIGNALS (Current Job Postings):
{job_context}

DETECTED TECH STACK:
{tech_context}

Generate a strategic brief with these sections:

1. EXECUTIVE SUMMARY (2-3 sentences with specific "why now" timing based on actual signals)
2. KEY INSIGHTS (3-4 bullet points referencing real data from news/jobs)
3. STRATEGIC PITCH ANGLE (creative, specific to their current situation, avoid generic phrases)
4. EMAIL SUBJECT LINE (personalized, reference specific signal)
5. WHAT NOT TO PITCH (based on their actual stage/focus from signals)
6. SIGNAL TAG (descriptive label like "Scaling AI Team" or "Post-Funding Growth")

RULES:
- Reference specific news headlines, job titles, or tech signals
- Avoid generic phrases like "cutting-edge solution" or "ideal time to pitch"
- Use real market triggers and timing
- Be specific about WHY NOW based on actual data
- If no strong signals, be honest about limited data

Format as JSON with keys: summary, keyInsights, pitchAngle, subjectLine, whatNotToPitch, signalTag, confidenceNotes"""

JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


def _display_date(value: str) -> str:
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date().isoformat()
    except (AttributeError, ValueError):
        return value


def build_prompt(
    company_name: str,
    website: Optional[str],
    domain: str,
    user_intent: str,
    news: Sequence[NewsItem],
    jobs: Sequence[JobSignal],
    tech_stack: Sequence[TechStackItem],
) -> str:
    if news:
        news_context = "\n".join(
            f'"{item.title}" ({item.source}, {_display_date(item.published_at)})' for item in news
        )
    else:
        news_context = "No recent news found"
    if jobs:
        job_context = "\n".join(f"{job.title} in {job.location} ({job.type})" for job in jobs)
    else:
        job_context = "No current job postings found"
    tech_context = ", ".join(f"{tech.name} ({tech.confidence})" for tech in tech_stack)

    return BRIEF_PROMPT.format(
        company_name=company_name,
        website=website or "Not provided",
        domain=domain or "Unknown",
        user_intent=user_intent,
        news_context=news_context,
        job_context=job_context,
        tech_context=tech_context,
    )


def extract_analysis(text: Any, default: AiAnalysis) -> AiAnalysis:
    """Merge the first ``{...}`` block found in ``text`` onto ``default``.

    Keys that do not fit the AiAnalysis shape are dropped, unknown keys are
    kept. On any failure ``default`` comes back unchanged.
    """
    if not isinstance(text, str):
        return default
    match = JSON_OBJECT.search(text)
    if not match:
        logger.info("No JSON object in AI response, using fallback")
        return default
    try:
        parsed = json.loads(match.group(0))
    except (ValueError, RecursionError) as e:
        logger.info(f"Failed to parse AI response as JSON, using fallback: {e}")
        return default
    if not isinstance(parsed, dict):
        return default

    base = default.model_dump(by_alias=True)
    try:
        return AiAnalysis.model_validate({**base, **parsed})
    except ValidationError as e:
        bad_fields = {err["loc"][0] for err in e.errors() if err["loc"]}
        logger.info(f"Dropping malformed AI fields: {sorted(map(str, bad_fields))}")
        kept = {key: value for key, value in parsed.items() if key not in bad_fields}
    try:
        return AiAnalysis.model_validate({**base, **kept})
    except ValidationError:
        return default


def build_llm(settings: Settings) -> ChatGoogleGenerativeAI:
    return ChatGoogleGenerativeAI(
        model=settings.completion_model,
        google_api_key=settings.google_api_key,
        temperature=0.7,
        max_output_tokens=1500,
        max_retries=1,  # initial request only
    )


def _message_text(content: Any) -> Optional[str]:
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = [part if isinstance(part, str) else str(part.get("text", "")) for part in content
                 if isinstance(part, (str, dict))]
        return "".join(parts)
    return None


def synthesize(
    company_name: str,
    website: Optional[str],
    domain: str,
    user_intent: str,
    news: Sequence[NewsItem],
    jobs: Sequence[JobSignal],
    tech_stack: Sequence[TechStackItem],
    settings: Optional[Settings] = None,
) -> AiAnalysis:
    settings = settings or load_settings()
    analysis = AiAnalysis()
    if not settings.synthesis_enabled:
        return analysis

    logger.info("Generating strategic insights with the language model...")
    prompt = ChatPromptTemplate.from_messages([
        ("system", SYSTEM_PROMPT),
        ("human", "{brief_prompt}"),
    ])
    try:
        chain = prompt | build_llm(settings)
        output = chain.invoke({
            "brief_prompt": build_prompt(company_name, website, domain, user_intent, news, jobs, tech_stack)
        })
        content = _message_text(getattr(output, "content", None))
        if not content:
            logger.warning("AI response had no content, using fallback")
            return analysis
        analysis = extract_analysis(content, analysis)
    except Exception as e:
        logger.warning(f"Failed to get AI analysis: {e}")
        return AiAnalysis()
    logger.info("AI analysis generated")
    return analysis
