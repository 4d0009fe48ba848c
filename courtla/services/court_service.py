"""
Court discovery service: CRUD, filtering, distance sorting and facets.

Filtering and sorting are pure functions over lists of ``Court`` so they can
be reused and tested without a store.
"""

import logging
from typing import Dict, Iterable, List, Optional

from courtla.database.store import InMemoryStore
from courtla.models.schemas import Court, CourtFilter, CreateCourtRequest, SkillLevelRange
from courtla.utils.geo_utils import calculate_distance_km

logger = logging.getLogger(__name__)

DEFAULT_SKILL_LEVEL = 5.0


# ---------------------------------------------------------------------------
# Filtering / sorting
# ---------------------------------------------------------------------------


def _matches(court: Court, court_filter: CourtFilter) -> bool:
    if court_filter.is_indoor is not None and court.is_indoor != court_filter.is_indoor:
        return False
    if court_filter.skill_level_min is not None and court.skill_level < court_filter.skill_level_min:
        return False
    if court_filter.skill_level_max is not None and court.skill_level > court_filter.skill_level_max:
        return False
    if court_filter.surface_type is not None and court.surface_type != court_filter.surface_type:
        return False
    if court_filter.is_lighted is not None and court.is_lighted != court_filter.is_lighted:
        return False
    if (
        court_filter.min_player_count is not None
        and court.player_count < court_filter.min_player_count
    ):
        return False

    # Radius search needs all three of latitude, longitude and radius
    if (
        court_filter.latitude is not None
        and court_filter.longitude is not None
        and court_filter.radius is not None
    ):
        distance = calculate_distance_km(
            court_filter.latitude, court_filter.longitude, court.latitude, court.longitude
        )
        if distance > court_filter.radius:
            return False

    return True


def filter_courts(courts: Iterable[Court], court_filter: CourtFilter) -> List[Court]:
    """
    Return the courts satisfying every predicate set on ``court_filter``.

    Input order is preserved. An empty filter returns every court.
    """
    return [court for court in courts if _matches(court, court_filter)]


def sort_courts_by_distance(
    courts: Iterable[Court], latitude: float, longitude: float
) -> List[Court]:
    """Return a new list ordered nearest first; ties keep their input order."""
    return sorted(
        courts,
        key=lambda c: calculate_distance_km(latitude, longitude, c.latitude, c.longitude),
    )


def get_surface_types(courts: Iterable[Court]) -> List[str]:
    """Sorted unique surface types."""
    return sorted({court.surface_type for court in courts})


def get_skill_level_range(courts: Iterable[Court]) -> SkillLevelRange:
    """Lowest and highest skill level, or the full 0-10 scale when empty."""
    levels = [court.skill_level for court in courts]
    if not levels:
        return SkillLevelRange(min=0, max=10)
    return SkillLevelRange(min=min(levels), max=max(levels))


def search_courts(store: InMemoryStore, court_filter: CourtFilter) -> List[Court]:
    """
    Filter all courts, then sort by distance when a reference point is given.

    The reference point only needs latitude and longitude; radius is optional.
    """
    courts = filter_courts(store.list_courts(), court_filter)
    if court_filter.latitude is not None and court_filter.longitude is not None:
        courts = sort_courts_by_distance(courts, court_filter.latitude, court_filter.longitude)
    return courts


# ---------------------------------------------------------------------------
# CRUD
# ---------------------------------------------------------------------------


def list_courts(store: InMemoryStore) -> List[Court]:
    return store.list_courts()


def get_court(store: InMemoryStore, court_id: str) -> Optional[Court]:
    return store.get_court(court_id)


def create_court(store: InMemoryStore, payload: CreateCourtRequest) -> Court:
    """Create a court with no players and the default skill level."""
    fields: Dict = payload.model_dump()
    fields.update(player_count=0, skill_level=DEFAULT_SKILL_LEVEL)
    court = store.create_court(fields)
    logger.info("Created court %s (%s)", court.id, court.name)
    return court


def update_player_count(store: InMemoryStore, court_id: str, player_count: int) -> Optional[Court]:
    return store.update_court(court_id, {"player_count": player_count})


def update_skill_level(store: InMemoryStore, court_id: str, skill_level: float) -> Optional[Court]:
    return store.update_court(court_id, {"skill_level": skill_level})
