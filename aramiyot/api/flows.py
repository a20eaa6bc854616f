"""
JSON endpoints for the non-streaming AI flows
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from ..flows import Flows
from ..models.resources import dump_resource
from ..services.recommendations import build_activity_prompt, recommendations_to_resources
from ..utils.logger import setup_logger
from .dependencies import get_flows, read_json_body

logger = setup_logger(__name__)
router = APIRouter(prefix="/api/flows", tags=["flows"])


@router.post("/chat")
async def chat(request: Request, flows: Flows = Depends(get_flows)):
    """Complete chat response in one JSON object"""
    data = await read_json_body(request)
    result = await flows.run_chat_flow(data)
    return result.model_dump(by_alias=True)


@router.post("/recommendations")
async def recommendations(
    request: Request,
    cards: bool = Query(False, description="Map the first three recommendations to display cards"),
    query: Optional[str] = Query(None, description="Search text the recommendations are for"),
    flows: Flows = Depends(get_flows)
):
    """
    Personalized recommendations

    Returns the raw flow output, or with ``cards=true`` at most three tip
    resources built from it. Without ``userActivity`` in the body the
    activity text is built from ``query``.
    """
    data = await read_json_body(request, allow_empty=True)
    if "userActivity" not in data and "user_activity" not in data:
        data["userActivity"] = build_activity_prompt(query)
    result = await flows.run_recommendation_flow(data)

    if not cards:
        return result.model_dump(by_alias=True)

    logger.debug(f"Mapping {len(result.recommendations)} recommendations to cards")
    return {
        "resources": [dump_resource(card) for card in recommendations_to_resources(result.recommendations, query)]
    }


@router.post("/hospital-suggestions")
async def hospital_suggestions(request: Request, flows: Flows = Depends(get_flows)):
    data = await read_json_body(request)
    result = await flows.run_hospital_suggestion_flow(data)
    return result.model_dump(by_alias=True, exclude_none=True)
