"""User profile service."""

import logging
from typing import Optional

from courtla.database.store import InMemoryStore
from courtla.models.schemas import CreateProfileRequest, UpdateProfileRequest, UserProfile

logger = logging.getLogger(__name__)


def get_profile(store: InMemoryStore, user_id: str) -> Optional[UserProfile]:
    return store.get_profile(user_id)


def create_profile(store: InMemoryStore, payload: CreateProfileRequest) -> UserProfile:
    """Create a profile with no games or hours played."""
    profile = store.create_profile(
        {
            "username": payload.username,
            "email": payload.email,
            "skill_level": payload.skill_level,
            "total_games": 0,
            "total_hours": 0,
        }
    )
    logger.info("Created profile %s (%s)", profile.id, profile.username)
    return profile


def update_profile(
    store: InMemoryStore, user_id: str, payload: UpdateProfileRequest
) -> Optional[UserProfile]:
    """Apply the fields set on ``payload``; ``updated_at`` is always bumped."""
    updates = payload.model_dump(exclude_unset=True, exclude_none=True)
    return store.update_profile(user_id, updates)
