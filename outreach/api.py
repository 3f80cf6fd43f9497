import logging

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .config import load_settings
from .exceptions import InvalidBriefRequest, PersistenceError
from .graph import app
from .history import list_briefs
from .schemas import BriefRequest

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}

api_app = FastAPI()


def _json(content: dict, status_code: int = 200) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, headers=CORS_HEADERS)


def parse_request(body) -> BriefRequest:
    if not isinstance(body, dict):
        raise InvalidBriefRequest()
    try:
        return BriefRequest.model_validate(body)
    except ValidationError as e:
        raise InvalidBriefRequest() from e


@api_app.options("/create-brief")
async def create_brief_preflight():
    return Response(status_code=200, headers=CORS_HEADERS)


@api_app.post("/create-brief")
async def create_brief(request: Request):
    try:
        brief_request = parse_request(await request.json())
        inputs = {
            "company_name": brief_request.company_name,
            "website": brief_request.website,
            "user_intent": brief_request.user_intent,
        }
        config = {"configurable": {"settings": load_settings()}}
        result = await app.ainvoke(inputs, config=config)
        logger.info("Strategic brief created successfully")
        return _json({"success": True, "brief": result["brief"].model_dump(by_alias=True)})
    except InvalidBriefRequest as e:
        return _json({"error": str(e)}, status_code=400)
    except PersistenceError as e:
        return _json({"error": "Failed to save brief to database", "details": str(e)}, status_code=500)
    except Exception as e:
        logger.error(f"Error creating brief: {e}", exc_info=True)
        return _json({"error": "Internal server error", "details": str(e)}, status_code=500)


@api_app.get("/briefs")
async def get_briefs():
    try:
        briefs = list_briefs()
    except PersistenceError as e:
        return _json({"error": "Failed to load briefs", "details": str(e)}, status_code=500)
    return _json({"briefs": [brief.model_dump(by_alias=True) for brief in briefs]})


@api_app.get("/")
async def root():
    return {"message": "Outreach Brief Generator API"}
