"""User statistics route handlers."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from courtla.database.store import InMemoryStore, get_store
from courtla.models.schemas import ApiResponse, Statistics
from courtla.services import statistics_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/statistics", tags=["statistics"])


def _get_statistics_or_404(store: InMemoryStore, user_id: Optional[str]) -> Statistics:
    if not user_id or not user_id.strip():
        raise HTTPException(status_code=400, detail="User ID is required")
    stats = statistics_service.get_statistics(store, user_id.strip())
    if stats is None:
        raise HTTPException(status_code=404, detail="Statistics not found for this user")
    return stats


@router.get("", response_model=ApiResponse[Statistics], response_model_exclude_none=True)
async def get_statistics(
    user_id: Optional[str] = Query(None, alias="userId"),
    store: InMemoryStore = Depends(get_store),
):
    """Get statistics for the user given by the ``userId`` query parameter."""
    return ApiResponse(data=_get_statistics_or_404(store, user_id))


@router.get("/{user_id}", response_model=ApiResponse[Statistics], response_model_exclude_none=True)
async def get_user_statistics(user_id: str, store: InMemoryStore = Depends(get_store)):
    """Get statistics for a specific user."""
    return ApiResponse(data=_get_statistics_or_404(store, user_id))
