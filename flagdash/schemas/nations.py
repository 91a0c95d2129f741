from pydantic import BaseModel


class NationDailyStats(BaseModel):
    country_code: str
    total_time_ms: int
    contributing_times: int
    penalty_ms: int


class NationPointsEntry(BaseModel):
    country_code: str
    points: int
