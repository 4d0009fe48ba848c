"""Court route handlers (listing, filtering, creation, live updates)."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from courtla.database.store import InMemoryStore, get_store
from courtla.models.schemas import (
    ApiResponse,
    Court,
    CourtFilter,
    CreateCourtRequest,
    SkillLevelRange,
    UpdateCourtPlayersRequest,
    UpdateCourtSkillRequest,
)
from courtla.services import court_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/courts", tags=["courts"])

COURT_NOT_FOUND = "Court not found"


@router.get("", response_model=ApiResponse[List[Court]], response_model_exclude_none=True)
async def list_courts(store: InMemoryStore = Depends(get_store)):
    """List all courts."""
    try:
        return ApiResponse(data=court_service.list_courts(store))
    except Exception as e:
        logger.error("Error fetching courts: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch courts")


@router.get("/filter", response_model=ApiResponse[List[Court]], response_model_exclude_none=True)
async def filter_courts(
    is_indoor: Optional[bool] = Query(None, alias="isIndoor"),
    skill_level_min: Optional[float] = Query(None, alias="skillLevelMin", ge=0, le=10),
    skill_level_max: Optional[float] = Query(None, alias="skillLevelMax", ge=0, le=10),
    surface_type: Optional[str] = Query(None, alias="surfaceType", min_length=1, max_length=50),
    is_lighted: Optional[bool] = Query(None, alias="isLighted"),
    min_player_count: Optional[int] = Query(None, alias="minPlayerCount", ge=0, le=100),
    latitude: Optional[float] = Query(None, ge=-90, le=90),
    longitude: Optional[float] = Query(None, ge=-180, le=180),
    radius: Optional[float] = Query(None, ge=0, le=100, description="Kilometers"),
    store: InMemoryStore = Depends(get_store),
):
    """
    Filter courts by attributes and location.

    Every supplied parameter narrows the result. The radius search needs
    latitude, longitude and radius together. When latitude and longitude are
    both given the result is sorted nearest first.
    """
    if surface_type is not None:
        surface_type = surface_type.strip() or None
    court_filter = CourtFilter(
        is_indoor=is_indoor,
        skill_level_min=skill_level_min,
        skill_level_max=skill_level_max,
        surface_type=surface_type,
        is_lighted=is_lighted,
        min_player_count=min_player_count,
        latitude=latitude,
        longitude=longitude,
        radius=radius,
    )
    try:
        return ApiResponse(data=court_service.search_courts(store, court_filter))
    except Exception as e:
        logger.error("Error filtering courts: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to filter courts")


@router.get("/surface-types", response_model=ApiResponse[List[str]], response_model_exclude_none=True)
async def list_surface_types(store: InMemoryStore = Depends(get_store)):
    """Distinct surface types across all courts, sorted."""
    return ApiResponse(data=court_service.get_surface_types(store.list_courts()))


@router.get("/skill-range", response_model=ApiResponse[SkillLevelRange], response_model_exclude_none=True)
async def get_skill_range(store: InMemoryStore = Depends(get_store)):
    """Lowest and highest court skill level."""
    return ApiResponse(data=court_service.get_skill_level_range(store.list_courts()))


@router.get("/{court_id}", response_model=ApiResponse[Court], response_model_exclude_none=True)
async def get_court(court_id: str, store: InMemoryStore = Depends(get_store)):
    """Get a court by id."""
    court = court_service.get_court(store, court_id)
    if court is None:
        raise HTTPException(status_code=404, detail=COURT_NOT_FOUND)
    return ApiResponse(data=court)


@router.post(
    "",
    status_code=201,
    response_model=ApiResponse[Court],
    response_model_exclude_none=True,
)
async def create_court(payload: CreateCourtRequest, store: InMemoryStore = Depends(get_store)):
    """
    Create a court.

    The id is always assigned by the server; new courts start with no
    players and skill level 5.0.
    """
    try:
        court = court_service.create_court(store, payload)
        return ApiResponse(data=court, message="Court created successfully")
    except Exception as e:
        logger.error("Error creating court: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create court")


@router.put("/{court_id}/players", response_model=ApiResponse[Court], response_model_exclude_none=True)
async def update_court_players(
    court_id: str,
    payload: UpdateCourtPlayersRequest,
    store: InMemoryStore = Depends(get_store),
):
    """Set the number of players currently at a court."""
    court = court_service.update_player_count(store, court_id, payload.player_count)
    if court is None:
        raise HTTPException(status_code=404, detail=COURT_NOT_FOUND)
    return ApiResponse(data=court, message="Court player count updated successfully")


@router.put("/{court_id}/skill", response_model=ApiResponse[Court], response_model_exclude_none=True)
async def update_court_skill(
    court_id: str,
    payload: UpdateCourtSkillRequest,
    store: InMemoryStore = Depends(get_store),
):
    """Set a court's skill level."""
    court = court_service.update_skill_level(store, court_id, payload.skill_level)
    if court is None:
        raise HTTPException(status_code=404, detail=COURT_NOT_FOUND)
    return ApiResponse(data=court, message="Court skill level updated successfully")
