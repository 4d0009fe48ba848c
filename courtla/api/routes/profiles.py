"""User profile route handlers."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from courtla.database.store import InMemoryStore, get_store
from courtla.models.schemas import (
    ApiResponse,
    CreateProfileRequest,
    UpdateProfileRequest,
    UserProfile,
)
from courtla.services import profile_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/profile", tags=["profile"])

PROFILE_NOT_FOUND = "Profile not found"
USER_ID_REQUIRED = "User ID is required"


def _require_user_id(user_id: Optional[str]) -> str:
    if not user_id or not user_id.strip():
        raise HTTPException(status_code=400, detail=USER_ID_REQUIRED)
    return user_id.strip()


def _get_profile_or_404(store: InMemoryStore, user_id: Optional[str]) -> UserProfile:
    profile = profile_service.get_profile(store, _require_user_id(user_id))
    if profile is None:
        raise HTTPException(status_code=404, detail=PROFILE_NOT_FOUND)
    return profile


def _update_profile_or_404(
    store: InMemoryStore, user_id: Optional[str], payload: UpdateProfileRequest
) -> UserProfile:
    profile = profile_service.update_profile(store, _require_user_id(user_id), payload)
    if profile is None:
        raise HTTPException(status_code=404, detail=PROFILE_NOT_FOUND)
    return profile


@router.get("", response_model=ApiResponse[UserProfile], response_model_exclude_none=True)
async def get_profile(
    user_id: Optional[str] = Query(None, alias="userId"),
    store: InMemoryStore = Depends(get_store),
):
    """Get the profile given by the ``userId`` query parameter."""
    return ApiResponse(data=_get_profile_or_404(store, user_id))


@router.get("/{user_id}", response_model=ApiResponse[UserProfile], response_model_exclude_none=True)
async def get_user_profile(user_id: str, store: InMemoryStore = Depends(get_store)):
    """Get a specific user's profile."""
    return ApiResponse(data=_get_profile_or_404(store, user_id))


@router.put("", response_model=ApiResponse[UserProfile], response_model_exclude_none=True)
async def update_profile(
    payload: UpdateProfileRequest,
    user_id: Optional[str] = Query(None, alias="userId"),
    store: InMemoryStore = Depends(get_store),
):
    """Update the profile given by the ``userId`` query parameter."""
    profile = _update_profile_or_404(store, user_id, payload)
    return ApiResponse(data=profile, message="Profile updated successfully")


@router.put("/{user_id}", response_model=ApiResponse[UserProfile], response_model_exclude_none=True)
async def update_user_profile(
    user_id: str,
    payload: UpdateProfileRequest,
    store: InMemoryStore = Depends(get_store),
):
    """
    Update a specific user's profile.

    Only fields present in the body change; ``createdAt`` never changes and
    ``updatedAt`` is bumped on every call.
    """
    profile = _update_profile_or_404(store, user_id, payload)
    return ApiResponse(data=profile, message="Profile updated successfully")


@router.post("", status_code=201, response_model=ApiResponse[UserProfile], response_model_exclude_none=True)
async def create_profile(payload: CreateProfileRequest, store: InMemoryStore = Depends(get_store)):
    """Create a profile. Skill level defaults to 5.0."""
    try:
        profile = profile_service.create_profile(store, payload)
        return ApiResponse(data=profile, message="Profile created successfully")
    except Exception as e:
        logger.error("Error creating profile: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create profile")
