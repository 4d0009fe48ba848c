"""Pickup game route handlers."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from courtla.database.store import InMemoryStore, get_store
from courtla.models.schemas import (
    ApiResponse,
    CreateGameRequest,
    Game,
    JoinGameRequest,
    LeaveGameRequest,
    UpdateGameStatusRequest,
)
from courtla.services import court_service, game_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/games", tags=["games"])

GAME_NOT_FOUND = "Game not found"


@router.get("", response_model=ApiResponse[List[Game]], response_model_exclude_none=True)
async def list_games(store: InMemoryStore = Depends(get_store)):
    """List all games."""
    try:
        return ApiResponse(data=game_service.list_games(store))
    except Exception as e:
        logger.error("Error fetching games: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch games")


@router.get("/upcoming", response_model=ApiResponse[List[Game]], response_model_exclude_none=True)
async def list_upcoming_games(store: InMemoryStore = Depends(get_store)):
    """List games flagged as upcoming."""
    try:
        return ApiResponse(data=game_service.list_upcoming_games(store))
    except Exception as e:
        logger.error("Error fetching upcoming games: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch upcoming games")


@router.get("/{game_id}", response_model=ApiResponse[Game], response_model_exclude_none=True)
async def get_game(game_id: str, store: InMemoryStore = Depends(get_store)):
    """Get a game by id."""
    game = game_service.get_game(store, game_id)
    if game is None:
        raise HTTPException(status_code=404, detail=GAME_NOT_FOUND)
    return ApiResponse(data=game)


@router.post("", status_code=201, response_model=ApiResponse[Game], response_model_exclude_none=True)
async def create_game(payload: CreateGameRequest, store: InMemoryStore = Depends(get_store)):
    """
    Schedule a game at an existing court.

    The creator is added as the first player.
    """
    court = court_service.get_court(store, payload.court_id)
    if court is None:
        raise HTTPException(status_code=404, detail="Court not found")
    try:
        game = game_service.create_game(store, payload, court)
        return ApiResponse(data=game, message="Game created successfully")
    except Exception as e:
        logger.error("Error creating game: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create game")


@router.post("/{game_id}/join", response_model=ApiResponse[Game], response_model_exclude_none=True)
async def join_game(
    game_id: str,
    payload: JoinGameRequest,
    store: InMemoryStore = Depends(get_store),
):
    """Join a game that has room and that the user is not already in."""
    try:
        game = game_service.join_game(store, game_id, payload.user_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if game is None:
        raise HTTPException(status_code=404, detail=GAME_NOT_FOUND)
    return ApiResponse(data=game, message="Successfully joined the game")


@router.post("/{game_id}/leave", response_model=ApiResponse[Game], response_model_exclude_none=True)
async def leave_game(
    game_id: str,
    payload: LeaveGameRequest,
    store: InMemoryStore = Depends(get_store),
):
    """Leave a game the user is in."""
    try:
        game = game_service.leave_game(store, game_id, payload.user_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if game is None:
        raise HTTPException(status_code=404, detail=GAME_NOT_FOUND)
    return ApiResponse(data=game, message="Successfully left the game")


@router.put("/{game_id}/status", response_model=ApiResponse[Game], response_model_exclude_none=True)
async def update_game_status(
    game_id: str,
    payload: UpdateGameStatusRequest,
    store: InMemoryStore = Depends(get_store),
):
    """
    Set a game's status to any of upcoming, in_progress, completed or
    cancelled. ``isUpcoming`` follows the new status.
    """
    try:
        status = game_service.parse_status(payload.status)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    game = game_service.update_status(store, game_id, status)
    if game is None:
        raise HTTPException(status_code=404, detail=GAME_NOT_FOUND)
    return ApiResponse(data=game, message="Game status updated successfully")
