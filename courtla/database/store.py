"""
In-memory data store for courts, games, profiles and statistics.

One ``InMemoryStore`` lives on ``app.state.store`` for the lifetime of the
process and is handed to route handlers through the ``get_store`` dependency.
Lookups return ``None`` for unknown ids; callers decide what that means.
"""

import logging
import threading
import uuid
from datetime import timedelta
from typing import Any, Dict, List, Optional

from fastapi import Request

from courtla.models.schemas import Court, Game, Statistics, UserProfile
from courtla.utils.datetime_utils import utcnow

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


class InMemoryStore:
    """Process-lifetime key/value maps, one per entity type."""

    def __init__(self):
        self.courts: Dict[str, Court] = {}
        self.games: Dict[str, Game] = {}
        self.profiles: Dict[str, UserProfile] = {}
        self.statistics: Dict[str, Statistics] = {}
        # Held by check-then-write sequences (e.g. joining a game).
        self.lock = threading.RLock()

    # ------------------------------------------------------------------
    # Courts
    # ------------------------------------------------------------------

    def list_courts(self) -> List[Court]:
        return list(self.courts.values())

    def get_court(self, court_id: str) -> Optional[Court]:
        return self.courts.get(court_id)

    def create_court(self, fields: Dict[str, Any]) -> Court:
        """Create a court with a fresh id; any ``id`` in ``fields`` is replaced."""
        court = Court(**{**fields, "id": _new_id()})
        self.courts[court.id] = court
        return court

    def update_court(self, court_id: str, updates: Dict[str, Any]) -> Optional[Court]:
        court = self.courts.get(court_id)
        if court is None:
            return None
        updated = court.model_copy(update=updates)
        self.courts[court_id] = updated
        return updated

    # ------------------------------------------------------------------
    # Games
    # ------------------------------------------------------------------

    def list_games(self) -> List[Game]:
        return list(self.games.values())

    def list_upcoming_games(self) -> List[Game]:
        return [game for game in self.games.values() if game.is_upcoming]

    def get_game(self, game_id: str) -> Optional[Game]:
        return self.games.get(game_id)

    def create_game(self, fields: Dict[str, Any]) -> Game:
        """Create a game with a fresh id; any ``id`` in ``fields`` is replaced."""
        game = Game(**{**fields, "id": _new_id()})
        self.games[game.id] = game
        return game

    def update_game(self, game_id: str, updates: Dict[str, Any]) -> Optional[Game]:
        game = self.games.get(game_id)
        if game is None:
            return None
        updated = game.model_copy(update=updates)
        self.games[game_id] = updated
        return updated

    # ------------------------------------------------------------------
    # Profiles
    # ------------------------------------------------------------------

    def list_profiles(self) -> List[UserProfile]:
        return list(self.profiles.values())

    def get_profile(self, profile_id: str) -> Optional[UserProfile]:
        return self.profiles.get(profile_id)

    def create_profile(self, fields: Dict[str, Any]) -> UserProfile:
        """Create a profile with a fresh id and creation timestamps."""
        now = utcnow()
        profile = UserProfile(
            **{**fields, "id": _new_id(), "created_at": now, "updated_at": now}
        )
        self.profiles[profile.id] = profile
        return profile

    def update_profile(self, profile_id: str, updates: Dict[str, Any]) -> Optional[UserProfile]:
        """
        Merge ``updates`` into a profile and bump ``updated_at``.

        ``created_at`` and ``id`` are never changed. ``updated_at`` always
        moves strictly forward, even when the clock has not ticked.
        """
        profile = self.profiles.get(profile_id)
        if profile is None:
            return None

        updates = {k: v for k, v in updates.items() if k not in ("id", "created_at")}
        now = utcnow()
        if now <= profile.updated_at:
            now = profile.updated_at + timedelta(microseconds=1)
        updates["updated_at"] = now

        updated = profile.model_copy(update=updates)
        self.profiles[profile_id] = updated
        return updated

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def get_statistics(self, user_id: str) -> Optional[Statistics]:
        return self.statistics.get(user_id)

    def update_statistics(self, user_id: str, updates: Dict[str, Any]) -> Optional[Statistics]:
        stats = self.statistics.get(user_id)
        if stats is None:
            return None
        updates = {k: v for k, v in updates.items() if k != "user_id"}
        updated = stats.model_copy(update=updates)
        self.statistics[user_id] = updated
        return updated

    def counts(self) -> Dict[str, int]:
        """Number of records per collection."""
        return {
            "courts": len(self.courts),
            "games": len(self.games),
            "profiles": len(self.profiles),
            "statistics": len(self.statistics),
        }


def get_store(request: Request) -> InMemoryStore:
    """
    Dependency function for FastAPI to get the application's store.

    Usage in FastAPI routes:
        async def my_route(store: InMemoryStore = Depends(get_store)):
            ...
    """
    return request.app.state.store
