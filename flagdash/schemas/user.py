from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, Field

from flagdash.schemas.game import EquippedCosmetics, GameMode, LeagueTier

AchievementType = Literal["WR", "NR", "LEAGUE_WIN", "DAILY_WIN"]


class AchievementEntry(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    type: AchievementType
    timestamp: int
    mode: GameMode | None = None
    time_ms: int | None = None
    detail: str | None = None


class ModeRecord(BaseModel):
    pb: int | None = None
    sb: int | None = None
    season_id: str = ""


class WeeklyLeagueState(BaseModel):
    current_tier: LeagueTier = LeagueTier.QUALIFYING
    best_time_ms: int | None = None
    is_eliminated: bool = False
    last_updated_day: int = 0
    week_id: str = ""


class User(BaseModel):
    username: str
    password_hash: str = ""
    country_code: str = ""
    total_games: int = 0
    xp: int = 0
    level: int = 1
    medals: list[str] = Field(default_factory=list)
    achievements: list[AchievementEntry] = Field(default_factory=list)
    records: dict[GameMode, ModeRecord] = Field(default_factory=dict)
    unlocked_cosmetics: list[str] = Field(default_factory=list)
    equipped_cosmetics: EquippedCosmetics = Field(default_factory=EquippedCosmetics)
    weekly_state: WeeklyLeagueState | None = None
    current_streak: int = 0
    last_played_date: str = ""
    last_daily_standard: str = ""
    last_daily_thematic: str = ""


class OperationResult(BaseModel):
    success: bool
    message: str
    user: User | None = None
