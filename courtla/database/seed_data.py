"""
Seed the in-memory store with sample courts, games, profiles and statistics.

Runs once at application startup. Idempotent: records whose id already exists
are left untouched, so calling it twice does not reset user edits.
"""

import logging
from datetime import datetime
from typing import Dict

import pytz

from courtla.database.store import InMemoryStore
from courtla.models.schemas import (
    ActivityDataPoint,
    Court,
    Game,
    GameStats,
    GameStatus,
    SkillDataPoint,
    Statistics,
    UserProfile,
)
from courtla.utils.datetime_utils import days_from_now, utcnow

logger = logging.getLogger(__name__)

SAMPLE_COURTS = [
    {
        "id": "court-1",
        "name": "Venice Beach Courts",
        "latitude": 33.9850,
        "longitude": -118.4695,
        "address": "1800 Ocean Front Walk, Venice, CA 90291",
        "is_indoor": False,
        "surface_type": "Concrete",
        "is_lighted": True,
        "player_count": 12,
        "skill_level": 7.5,
        "description": "Famous outdoor courts with ocean views. Multiple courts available.",
    },
    {
        "id": "court-2",
        "name": "LA Fitness - Santa Monica",
        "latitude": 34.0195,
        "longitude": -118.4912,
        "address": "1234 Wilshire Blvd, Santa Monica, CA 90401",
        "is_indoor": True,
        "surface_type": "Wood",
        "is_lighted": True,
        "player_count": 8,
        "skill_level": 6.0,
        "description": "Indoor court with professional flooring. Membership required.",
    },
    {
        "id": "court-3",
        "name": "Pan Pacific Park",
        "latitude": 34.0762,
        "longitude": -118.3614,
        "address": "7600 Beverly Blvd, Los Angeles, CA 90036",
        "is_indoor": False,
        "surface_type": "Asphalt",
        "is_lighted": True,
        "player_count": 15,
        "skill_level": 8.0,
        "description": "Popular outdoor courts with multiple hoops. Great for pickup games.",
    },
    {
        "id": "court-4",
        "name": "YMCA - Downtown LA",
        "latitude": 34.0522,
        "longitude": -118.2437,
        "address": "401 S Hope St, Los Angeles, CA 90071",
        "is_indoor": True,
        "surface_type": "Wood",
        "is_lighted": True,
        "player_count": 6,
        "skill_level": 5.5,
        "description": "Indoor court with professional equipment. YMCA membership required.",
    },
    {
        "id": "court-5",
        "name": "Echo Park Lake Courts",
        "latitude": 34.0778,
        "longitude": -118.2608,
        "address": "751 Echo Park Ave, Los Angeles, CA 90026",
        "is_indoor": False,
        "surface_type": "Concrete",
        "is_lighted": False,
        "player_count": 10,
        "skill_level": 6.5,
        "description": "Scenic outdoor courts by the lake. Popular in the evenings.",
    },
]


def _sample_games() -> list:
    return [
        Game(
            id="game-1",
            court_id="court-1",
            court_name="Venice Beach Courts",
            date_time=days_from_now(1),
            player_count=3,
            skill_level=7.0,
            is_upcoming=True,
            status=GameStatus.UPCOMING,
            created_by="user-1",
            players=["user-1", "user-2", "user-3"],
            max_players=10,
        ),
        Game(
            id="game-2",
            court_id="court-3",
            court_name="Pan Pacific Park",
            date_time=days_from_now(2),
            player_count=3,
            skill_level=8.0,
            is_upcoming=True,
            status=GameStatus.UPCOMING,
            created_by="user-2",
            players=["user-2", "user-4", "user-5"],
            max_players=15,
        ),
    ]


def _sample_profiles() -> list:
    now = utcnow()
    return [
        UserProfile(
            id="user-1",
            username="baller23",
            email="baller23@example.com",
            skill_level=7.5,
            total_games=45,
            total_hours=120,
            favorite_court="Venice Beach Courts",
            created_at=datetime(2023, 1, 15, tzinfo=pytz.UTC),
            updated_at=now,
        ),
        UserProfile(
            id="user-2",
            username="hoopmaster",
            email="hoopmaster@example.com",
            skill_level=8.0,
            total_games=67,
            total_hours=180,
            favorite_court="Pan Pacific Park",
            created_at=datetime(2022, 11, 20, tzinfo=pytz.UTC),
            updated_at=now,
        ),
    ]


def _sample_statistics() -> list:
    now = utcnow()
    return [
        Statistics(
            user_id="user-1",
            total_games=45,
            total_hours=120,
            win_rate=0.65,
            average_skill_level=7.5,
            favorite_court="Venice Beach Courts",
            games_played=[
                GameStats(
                    game_id="game-1",
                    court_name="Venice Beach Courts",
                    date=days_from_now(-7),
                    result="win",
                    skill_level=7.5,
                    duration=2.5,
                )
            ],
            skill_progress=[
                SkillDataPoint(date=days_from_now(-30), skill_level=7.0),
                SkillDataPoint(date=now, skill_level=7.5),
            ],
            weekly_activity=[ActivityDataPoint(date=now, games_played=3, hours_played=8)],
            monthly_activity=[ActivityDataPoint(date=now, games_played=12, hours_played=32)],
            yearly_activity=[ActivityDataPoint(date=now, games_played=45, hours_played=120)],
        )
    ]


def seed_store(store: InMemoryStore) -> Dict[str, int]:
    """
    Load the sample records into ``store``.

    Returns:
        Count of newly created records per collection.
    """
    created = {"courts": 0, "games": 0, "profiles": 0, "statistics": 0}

    for row in SAMPLE_COURTS:
        if row["id"] not in store.courts:
            store.courts[row["id"]] = Court(**row)
            created["courts"] += 1

    for game in _sample_games():
        if game.id not in store.games:
            store.games[game.id] = game
            created["games"] += 1

    for profile in _sample_profiles():
        if profile.id not in store.profiles:
            store.profiles[profile.id] = profile
            created["profiles"] += 1

    for stats in _sample_statistics():
        if stats.user_id not in store.statistics:
            store.statistics[stats.user_id] = stats
            created["statistics"] += 1

    logger.info(
        "Seed data loaded: %d courts, %d games, %d profiles, %d statistics",
        created["courts"],
        created["games"],
        created["profiles"],
        created["statistics"],
    )
    return created
