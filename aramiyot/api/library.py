"""
Wellness library: catalog, hospital directory, reviews and offline copies
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..data.catalog import AUDIO_BOOK_SUMMARIES, HOSPITALS, get_resource, list_resources
from ..models.resources import ResourceBase, ReviewCreateRequest, dump_resource
from ..services import OfflineService, ReviewService
from ..utils.logger import setup_logger
from .dependencies import get_offline_service, get_review_service

logger = setup_logger(__name__)
router = APIRouter(prefix="/api/library", tags=["library"])


def _require_resource(resource_id: str) -> ResourceBase:
    resource = get_resource(resource_id)
    if resource is None:
        raise HTTPException(status_code=404, detail=f"Resource not found: {resource_id}")
    return resource


@router.get("/resources")
async def resources(category: Optional[str] = Query(None, description="Filter by category")):
    return {"resources": [dump_resource(r) for r in list_resources(category)]}


@router.get("/resources/{resource_id}")
async def resource_detail(resource_id: str):
    return dump_resource(_require_resource(resource_id))


@router.get("/audio-summaries")
async def audio_summaries():
    return {"resources": [dump_resource(r) for r in AUDIO_BOOK_SUMMARIES]}


@router.get("/hospitals")
async def hospitals():
    return {"hospitals": [h.model_dump(by_alias=True, exclude_none=True) for h in HOSPITALS]}


@router.get("/resources/{resource_id}/reviews")
async def list_reviews(resource_id: str, reviews: ReviewService = Depends(get_review_service)):
    _require_resource(resource_id)
    return {"reviews": [r.model_dump(by_alias=True, mode="json") for r in reviews.list_reviews(resource_id)]}


@router.post("/resources/{resource_id}/reviews", status_code=status.HTTP_201_CREATED)
async def add_review(
    resource_id: str,
    request: ReviewCreateRequest,
    reviews: ReviewService = Depends(get_review_service)
):
    _require_resource(resource_id)
    review = reviews.add_review(resource_id, request.user_name, request.rating, request.comment)
    return review.model_dump(by_alias=True, mode="json")


@router.post("/resources/{resource_id}/offline")
async def save_offline(resource_id: str, offline: OfflineService = Depends(get_offline_service)):
    """
    Save a resource for offline use

    Returns ``saved: false`` for resource types with nothing to keep offline.
    """
    resource = _require_resource(resource_id)
    saved = offline.save(resource)
    return {"resourceId": resource_id, "saved": saved}


@router.get("/resources/{resource_id}/offline")
async def load_offline(resource_id: str, offline: OfflineService = Depends(get_offline_service)):
    copy = offline.load(resource_id)
    if copy is None:
        raise HTTPException(status_code=404, detail=f"Resource {resource_id} is not saved offline")
    return copy
