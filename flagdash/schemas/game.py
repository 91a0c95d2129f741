from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field


class GameMode(str, Enum):
    COMPETITIVE_5 = "COMPETITIVE_5"
    COMPETITIVE = "COMPETITIVE"
    COMPETITIVE_20 = "COMPETITIVE_20"
    DAILY_STANDARD = "DAILY_STANDARD"
    DAILY_THEMATIC = "DAILY_THEMATIC"
    WEEKLY_LEAGUE = "WEEKLY_LEAGUE"
    NATIONS_LEAGUE = "NATIONS_LEAGUE"

    @property
    def is_competitive(self) -> bool:
        return self in COMPETITIVE_MODES

    @property
    def keeps_history(self) -> bool:
        return self in HISTORY_MODES

    @property
    def is_daily(self) -> bool:
        return self in (GameMode.DAILY_STANDARD, GameMode.DAILY_THEMATIC)


COMPETITIVE_MODES = frozenset({GameMode.COMPETITIVE_5, GameMode.COMPETITIVE, GameMode.COMPETITIVE_20})
HISTORY_MODES = COMPETITIVE_MODES | {GameMode.NATIONS_LEAGUE}
BEST_TIME_MODES = frozenset({GameMode.DAILY_STANDARD, GameMode.DAILY_THEMATIC, GameMode.WEEKLY_LEAGUE})

_QUESTION_COUNTS = {
    GameMode.COMPETITIVE_5: 5,
    GameMode.COMPETITIVE: 10,
    GameMode.COMPETITIVE_20: 20,
}


def questions_count(mode: GameMode) -> int:
    return _QUESTION_COUNTS.get(mode, 10)


class LeagueTier(str, Enum):
    QUALIFYING = "QUALIFYING"
    BRONZE = "BRONZE"
    SILVER = "SILVER"
    GOLD = "GOLD"
    PLATINUM = "PLATINUM"
    DIAMOND = "DIAMOND"
    MASTER = "MASTER"


class EquippedCosmetics(BaseModel):
    frame_id: str | None = None
    banner_id: str | None = None
    name_style_id: str | None = None


class MatchResult(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    username: str
    country_code: str
    mode: GameMode
    time_ms: int
    timestamp: int
    season_id: str = ""
    level: int = 1
    equipped_cosmetics: EquippedCosmetics = Field(default_factory=EquippedCosmetics)


class LeaderboardStats(BaseModel):
    rank: int
    total: int
    percentile: int
