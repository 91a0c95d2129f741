from pydantic import BaseModel, Field

from flagdash.schemas.game import GameMode


class WorldRecord(BaseModel):
    time_ms: int
    username: str
    country_code: str


class NationalRecord(BaseModel):
    time_ms: int
    username: str


class ModeRecords(BaseModel):
    wr: WorldRecord | None = None
    nr: dict[str, NationalRecord] = Field(default_factory=dict)


GlobalRecords = dict[GameMode, ModeRecords]
