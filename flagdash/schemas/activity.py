from uuid import uuid4

from pydantic import BaseModel, Field

from flagdash.schemas.game import GameMode


class ActivityLogEntry(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    username: str
    country_code: str
    mode: GameMode
    time_ms: int
    timestamp: int
    badges: list[str] = Field(default_factory=list)
