"""
Pydantic models for API request/response validation.

Records are stored and returned as these models. JSON keys are camelCase
(``isIndoor``, ``playerCount``); Python attributes stay snake_case.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Generic, List, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from courtla.utils.datetime_utils import ensure_utc

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys, populated by either name."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CamelRequest(CamelModel):
    """Base for request bodies: strips surrounding whitespace from strings."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True
    )


# ---------------------------------------------------------------------------
# Envelope
# ---------------------------------------------------------------------------


class ApiResponse(BaseModel, Generic[T]):
    """Uniform response envelope returned by every endpoint."""

    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None
    error: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""

    success: bool
    message: str
    timestamp: str
    version: str


# ---------------------------------------------------------------------------
# Courts
# ---------------------------------------------------------------------------


class Court(CamelModel):
    """A basketball court listing."""

    id: str
    name: str
    latitude: float
    longitude: float
    address: str
    is_indoor: bool
    surface_type: str
    is_lighted: bool
    player_count: int = 0
    skill_level: float = 5.0
    description: str = ""


class CreateCourtRequest(CamelRequest):
    """Request to create a court. Any client-supplied id is ignored."""

    name: str = Field(min_length=1, max_length=100)
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    address: str = Field(min_length=1, max_length=200)
    is_indoor: bool
    surface_type: str = Field(min_length=1, max_length=50)
    is_lighted: bool
    description: str = Field(default="", max_length=500)


class UpdateCourtPlayersRequest(CamelRequest):
    """Request to set the number of players at a court."""

    player_count: int = Field(ge=0, le=100)


class UpdateCourtSkillRequest(CamelRequest):
    """Request to set a court's skill level."""

    skill_level: float = Field(ge=0, le=10)


class CourtFilter(BaseModel):
    """
    Optional court predicates, ANDed together. ``None`` means unconstrained.

    The radius predicate applies only when latitude, longitude and radius
    are all set.
    """

    is_indoor: Optional[bool] = None
    skill_level_min: Optional[float] = None
    skill_level_max: Optional[float] = None
    surface_type: Optional[str] = None
    is_lighted: Optional[bool] = None
    min_player_count: Optional[int] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    radius: Optional[float] = None  # kilometers


class SkillLevelRange(BaseModel):
    """Lowest and highest court skill level."""

    min: float
    max: float


# ---------------------------------------------------------------------------
# Games
# ---------------------------------------------------------------------------


class GameStatus(str, Enum):
    """Lifecycle status of a pickup game. Any status may follow any other."""

    UPCOMING = "upcoming"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Game(CamelModel):
    """A scheduled pickup game at a court."""

    id: str
    court_id: str
    # Snapshot of the court name at creation; not kept in sync with renames.
    court_name: str
    date_time: datetime
    player_count: int
    skill_level: float
    is_upcoming: bool
    status: GameStatus
    created_by: str
    players: List[str] = []
    max_players: int


class CreateGameRequest(CamelRequest):
    """Request to schedule a game. The creator joins automatically."""

    court_id: str = Field(min_length=1)
    date_time: datetime
    skill_level: float = Field(ge=0, le=10)
    max_players: int = Field(ge=2, le=20)
    created_by: str = Field(min_length=1)

    @field_validator("date_time", mode="before")
    @classmethod
    def _require_iso_string(cls, value: Any) -> Any:
        # Unix timestamps (numbers or digit strings) are not ISO 8601
        if isinstance(value, datetime):
            return value
        if not isinstance(value, str) or value.strip().lstrip("-").replace(".", "", 1).isdigit():
            raise ValueError("dateTime must be an ISO 8601 date string")
        return value

    @field_validator("date_time")
    @classmethod
    def _normalize_date_time(cls, value: datetime) -> datetime:
        return ensure_utc(value)


class JoinGameRequest(CamelRequest):
    """Request to join a game."""

    user_id: str = Field(min_length=1)


class LeaveGameRequest(CamelRequest):
    """Request to leave a game."""

    user_id: str = Field(min_length=1)


class UpdateGameStatusRequest(CamelRequest):
    """
    Request to change a game's status.

    Left untyped so any unknown, missing or non-string value is reported as
    an invalid status rather than a generic validation failure.
    """

    status: Optional[Any] = None


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------


class GameStats(CamelModel):
    """One game in a user's history."""

    game_id: str
    court_name: str
    date: datetime
    result: Literal["win", "loss", "draw"]
    skill_level: float
    duration: float  # hours


class SkillDataPoint(CamelModel):
    date: datetime
    skill_level: float


class ActivityDataPoint(CamelModel):
    date: datetime
    games_played: int
    hours_played: float


class Statistics(CamelModel):
    """Aggregated statistics for a user."""

    user_id: str
    total_games: int
    total_hours: float
    win_rate: float
    average_skill_level: float
    favorite_court: str
    games_played: List[GameStats] = []
    skill_progress: List[SkillDataPoint] = []
    weekly_activity: List[ActivityDataPoint] = []
    monthly_activity: List[ActivityDataPoint] = []
    yearly_activity: List[ActivityDataPoint] = []


# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------


class UserProfile(CamelModel):
    """A player's profile."""

    id: str
    username: str
    email: str
    skill_level: float
    total_games: int = 0
    total_hours: float = 0
    favorite_court: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class CreateProfileRequest(CamelRequest):
    """Request to create a profile."""

    username: str = Field(min_length=1, max_length=50)
    email: EmailStr
    skill_level: float = Field(default=5.0, ge=0, le=10)


class UpdateProfileRequest(CamelRequest):
    """Partial profile update; omitted fields are left unchanged."""

    username: Optional[str] = Field(default=None, min_length=1, max_length=50)
    email: Optional[EmailStr] = None
    skill_level: Optional[float] = Field(default=None, ge=0, le=10)
    favorite_court: Optional[str] = Field(default=None, min_length=1, max_length=100)
