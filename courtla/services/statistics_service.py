"""
Statistics service.

Statistics are read-only over HTTP; ``update_statistics`` is the internal
entry point for merging new aggregates into a user's record.
"""

import logging
from typing import Any, Dict, Optional

from courtla.database.store import InMemoryStore
from courtla.models.schemas import Statistics

logger = logging.getLogger(__name__)


def get_statistics(store: InMemoryStore, user_id: str) -> Optional[Statistics]:
    return store.get_statistics(user_id)


def update_statistics(
    store: InMemoryStore, user_id: str, updates: Dict[str, Any]
) -> Optional[Statistics]:
    """
    Merge ``updates`` (snake_case field names) over a user's statistics.

    Args:
        store: Data store
        user_id: Owner of the statistics record
        updates: Partial record; ``user_id`` is ignored

    Returns:
        The updated record, or None if the user has no statistics
    """
    unknown = set(updates) - set(Statistics.model_fields)
    if unknown:
        raise ValueError(f"Unknown statistics fields: {', '.join(sorted(unknown))}")

    stats = store.update_statistics(user_id, updates)
    if stats is not None:
        logger.debug("Updated statistics for %s: %s", user_id, sorted(updates))
    return stats
