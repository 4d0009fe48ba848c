"""
Pickup game service: scheduling, membership and status changes.

Missing games are reported as ``None``. Rule violations (full game, duplicate
or absent player, unknown status) raise ``ValueError`` with a user-facing
message.
"""

import logging
from typing import Any, List, Optional

from courtla.database.store import InMemoryStore
from courtla.models.schemas import Court, CreateGameRequest, Game, GameStatus
from courtla.utils.datetime_utils import utcnow

logger = logging.getLogger(__name__)

GAME_FULL = "Game is full"
ALREADY_IN_GAME = "User is already in the game"
NOT_IN_GAME = "User is not in the game"
INVALID_STATUS = "Invalid game status"


def list_games(store: InMemoryStore) -> List[Game]:
    return store.list_games()


def list_upcoming_games(store: InMemoryStore) -> List[Game]:
    return store.list_upcoming_games()


def get_game(store: InMemoryStore, game_id: str) -> Optional[Game]:
    return store.get_game(game_id)


def create_game(store: InMemoryStore, payload: CreateGameRequest, court: Court) -> Game:
    """
    Schedule a game at ``court`` with the creator as its only player.

    ``court_name`` is copied from the court at this moment.
    """
    game = store.create_game(
        {
            "court_id": court.id,
            "court_name": court.name,
            "date_time": payload.date_time,
            "player_count": 1,
            "skill_level": payload.skill_level,
            "is_upcoming": payload.date_time > utcnow(),
            "status": GameStatus.UPCOMING,
            "created_by": payload.created_by,
            "players": [payload.created_by],
            "max_players": payload.max_players,
        }
    )
    logger.info("Created game %s at court %s by %s", game.id, court.id, payload.created_by)
    return game


def join_game(store: InMemoryStore, game_id: str, user_id: str) -> Optional[Game]:
    """
    Add ``user_id`` to a game.

    Raises:
        ValueError: If the game is full or the user already joined.
    """
    with store.lock:
        game = store.get_game(game_id)
        if game is None:
            return None
        if len(game.players) >= game.max_players:
            raise ValueError(GAME_FULL)
        if user_id in game.players:
            raise ValueError(ALREADY_IN_GAME)

        players = game.players + [user_id]
        return store.update_game(game_id, {"players": players, "player_count": len(players)})


def leave_game(store: InMemoryStore, game_id: str, user_id: str) -> Optional[Game]:
    """
    Remove ``user_id`` from a game.

    Raises:
        ValueError: If the user is not in the game.
    """
    with store.lock:
        game = store.get_game(game_id)
        if game is None:
            return None
        if user_id not in game.players:
            raise ValueError(NOT_IN_GAME)

        players = list(game.players)
        players.remove(user_id)
        return store.update_game(game_id, {"players": players, "player_count": len(players)})


def parse_status(value: Any) -> GameStatus:
    """
    Convert a raw status value to ``GameStatus``.

    Raises:
        ValueError: If ``value`` is not one of the known status strings.
    """
    if not isinstance(value, str):
        raise ValueError(INVALID_STATUS)
    try:
        return GameStatus(value)
    except ValueError:
        raise ValueError(INVALID_STATUS)


def update_status(store: InMemoryStore, game_id: str, status: GameStatus) -> Optional[Game]:
    """Set a game's status. Transitions are not restricted."""
    return store.update_game(
        game_id, {"status": status, "is_upcoming": status == GameStatus.UPCOMING}
    )
