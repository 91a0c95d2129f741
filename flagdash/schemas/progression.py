from pydantic import BaseModel, Field

from flagdash.schemas.game import GameMode, MatchResult
from flagdash.schemas.user import User


class ResultDiffs(BaseModel):
    """Signed distance in ms to each reference time before this match; None when there was none."""
    wr: int | None = None
    nr: int | None = None
    pb: int | None = None
    sb: int | None = None


class LastGame(BaseModel):
    mode: GameMode
    time_ms: int
    rank: int | None = None


class MatchSummary(BaseModel):
    user: User
    entry: MatchResult
    badges: list[str] = Field(default_factory=list)
    rank: int
    total: int
    percentile: int
    diffs: ResultDiffs = Field(default_factory=ResultDiffs)
    unlocked_cosmetics: list[str] = Field(default_factory=list)


class YesterdayWinners(BaseModel):
    standard: str | None = None
    thematic: str | None = None
