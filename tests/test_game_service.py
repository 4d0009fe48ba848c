"""
Tests for game_service: scheduling, membership rules and status changes.
"""

from datetime import timedelta

import pytest

from courtla.models.schemas import CreateGameRequest, GameStatus
from courtla.services import game_service
from courtla.utils.datetime_utils import utcnow


def make_request(**overrides):
    fields = {
        "court_id": "court-4",
        "date_time": utcnow() + timedelta(hours=3),
        "skill_level": 6.0,
        "max_players": 4,
        "created_by": "user-9",
    }
    fields.update(overrides)
    return CreateGameRequest(**fields)


@pytest.fixture
def new_game(store):
    court = store.get_court("court-4")
    return game_service.create_game(store, make_request(), court)


class TestCreateGame:
    def test_creator_is_only_player(self, new_game):
        assert new_game.players == ["user-9"]
        assert new_game.player_count == 1
        assert new_game.status == GameStatus.UPCOMING
        assert new_game.is_upcoming

    def test_court_name_is_copied(self, store, new_game):
        assert new_game.court_name == "YMCA - Downtown LA"
        # Renaming the court later does not touch the game
        store.update_court("court-4", {"name": "YMCA Renamed"})
        assert store.get_game(new_game.id).court_name == "YMCA - Downtown LA"

    def test_past_date_is_not_upcoming(self, store):
        court = store.get_court("court-1")
        game = game_service.create_game(
            store, make_request(date_time=utcnow() - timedelta(days=1)), court
        )
        assert game.is_upcoming is False
        assert game.status == GameStatus.UPCOMING

    def test_naive_datetime_treated_as_utc(self, store):
        court = store.get_court("court-1")
        naive = (utcnow() + timedelta(days=1)).replace(tzinfo=None)
        game = game_service.create_game(store, make_request(date_time=naive), court)
        assert game.is_upcoming
        assert game.date_time.tzinfo is not None


class TestJoinGame:
    def test_join_appends_player(self, store, new_game):
        game = game_service.join_game(store, new_game.id, "user-10")
        assert game.players == ["user-9", "user-10"]
        assert game.player_count == 2

    def test_join_missing_game(self, store):
        assert game_service.join_game(store, "nope", "user-1") is None

    def test_join_twice_rejected(self, store, new_game):
        with pytest.raises(ValueError, match="already in the game"):
            game_service.join_game(store, new_game.id, "user-9")

    def test_join_full_game_rejected(self, store, new_game):
        for user in ("a", "b", "c"):
            game_service.join_game(store, new_game.id, user)

        with pytest.raises(ValueError, match="Game is full"):
            game_service.join_game(store, new_game.id, "d")
        assert store.get_game(new_game.id).player_count == 4

    def test_full_check_runs_before_duplicate_check(self, store, new_game):
        for user in ("a", "b", "c"):
            game_service.join_game(store, new_game.id, user)
        with pytest.raises(ValueError, match="Game is full"):
            game_service.join_game(store, new_game.id, "a")


class TestLeaveGame:
    def test_leave_removes_player(self, store):
        game = game_service.leave_game(store, "game-1", "user-2")
        assert game.players == ["user-1", "user-3"]
        assert game.player_count == 2

    def test_leave_absent_player_rejected(self, store):
        with pytest.raises(ValueError, match="not in the game"):
            game_service.leave_game(store, "game-1", "user-42")
        assert store.get_game("game-1").player_count == 3

    def test_leave_missing_game(self, store):
        assert game_service.leave_game(store, "nope", "user-1") is None

    def test_creator_can_leave(self, store, new_game):
        game = game_service.leave_game(store, new_game.id, "user-9")
        assert game.players == []
        assert game.player_count == 0


class TestStatus:
    @pytest.mark.parametrize("value", ["upcoming", "in_progress", "completed", "cancelled"])
    def test_parse_known_status(self, value):
        assert game_service.parse_status(value).value == value

    @pytest.mark.parametrize("value", ["", "done", "UPCOMING", "started", 5, None, ["upcoming"]])
    def test_parse_unknown_status(self, value):
        with pytest.raises(ValueError, match="Invalid game status"):
            game_service.parse_status(value)

    def test_status_drives_is_upcoming(self, store):
        game = game_service.update_status(store, "game-1", GameStatus.COMPLETED)
        assert game.status == GameStatus.COMPLETED
        assert game.is_upcoming is False

        game = game_service.update_status(store, "game-1", GameStatus.UPCOMING)
        assert game.is_upcoming is True

    def test_any_transition_allowed(self, store):
        game_service.update_status(store, "game-2", GameStatus.CANCELLED)
        game = game_service.update_status(store, "game-2", GameStatus.IN_PROGRESS)
        assert game.status == GameStatus.IN_PROGRESS

    def test_update_missing_game(self, store):
        assert game_service.update_status(store, "nope", GameStatus.COMPLETED) is None
