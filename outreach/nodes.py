import logging

from langchain_core.runnables import RunnableConfig

from .config import Settings, load_settings
from .history import save_brief
from .state import BriefState
from .synthesis import synthesize
from .tech import infer_tech_stack
from .tools import derive_domain, fetch_jobs, fetch_news

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _settings(config: RunnableConfig) -> Settings:
    settings = (config or {}).get("configurable", {}).get("settings")
    return settings or load_settings()


def domain_resolution(state: BriefState) -> dict:
    logger.info(f"Creating strategic brief for {state['company_name']}...")
    domain, logo = derive_domain(state.get("website"))
    return {"company_domain": domain, "company_logo": logo}


def news_collection(state: BriefState, config: RunnableConfig) -> dict:
    return {"news": fetch_news(state["company_name"], _settings(config))}


def job_collection(state: BriefState, config: RunnableConfig) -> dict:
    return {"job_signals": fetch_jobs(state["company_name"], _settings(config))}


def tech_inference(state: BriefState) -> dict:
    tech_stack = infer_tech_stack(
        state["company_name"],
        state.get("website"),
        state.get("job_signals", []),
        state.get("news", []),
    )
    return {"tech_stack": tech_stack}


def synthesis(state: BriefState, config: RunnableConfig) -> dict:
    analysis = synthesize(
        state["company_name"],
        state.get("website"),
        state.get("company_domain", ""),
        state["user_intent"],
        state.get("news", []),
        state.get("job_signals", []),
        state.get("tech_stack", []),
        settings=_settings(config),
    )
    return {"analysis": analysis}


def persistence(state: BriefState) -> dict:
    analysis = state["analysis"]
    tech_stack = state.get("tech_stack", [])
    record = {
        "companyName": state["company_name"],
        "website": state.get("website"),
        "userIntent": state["user_intent"],
        "summary": analysis.summary,
        "news": [item.model_dump(by_alias=True) for item in state.get("news", [])],
        "techStack": [tech.name for tech in tech_stack],
        "pitchAngle": analysis.pitch_angle,
        "subjectLine": analysis.subject_line,
        "whatNotToPitch": analysis.what_not_to_pitch,
        "signalTag": analysis.signal_tag,
        "jobSignals": [job.model_dump(by_alias=True) for job in state.get("job_signals", [])],
        "techStackDetail": [tech.model_dump(by_alias=True) for tech in tech_stack],
        "keyInsights": analysis.key_insights or [],
        "confidenceNotes": analysis.confidence_notes or "Analysis based on available data",
        "companyLogo": state.get("company_logo", ""),
        "companyDomain": state.get("company_domain", ""),
    }
    brief = save_brief(record)
    logger.info(f"Strategic brief {brief.id} created")
    return {"brief": brief}
