from __future__ import annotations

import logging
from collections import defaultdict

from pydantic import TypeAdapter

from flagdash.core.clock import Clock
from flagdash.core.config import settings
from flagdash.schemas.game import GameMode
from flagdash.schemas.nations import NationDailyStats, NationPointsEntry
from flagdash.services.kv_store import KeyValueStore, dump_json, load_json
from flagdash.services.leaderboard import LeaderboardStore

logger = logging.getLogger(__name__)

NATION_POINTS_KEY = "flagdash_nation_points_v1"

_points_adapter = TypeAdapter(dict[str, int])


def aggregate_country_times(times_by_country: dict[str, list[int]]) -> list[NationDailyStats]:
    """Sum each country's fastest times, padding missing contributors with a fixed penalty."""
    top_n = settings.NATION_TOP_CONTRIBUTORS
    stats = []
    for code, times in times_by_country.items():
        best = sorted(times)[:top_n]
        penalty = (top_n - len(best)) * settings.NATION_PENALTY_MS
        stats.append(
            NationDailyStats(
                country_code=code,
                total_time_ms=sum(best) + penalty,
                contributing_times=len(best),
                penalty_ms=penalty,
            )
        )
    stats.sort(key=lambda s: s.total_time_ms)
    return stats


def points_for_rank(rank: int) -> int:
    return max(0, settings.NATION_POINTS_TOP_RANKS - rank)


class NationAggregator:
    def __init__(self, store: KeyValueStore, leaderboard: LeaderboardStore, clock: Clock | None = None):
        self.store = store
        self.leaderboard = leaderboard
        self.clock = clock or leaderboard.clock

    def daily_stats(self) -> list[NationDailyStats]:
        today = self.clock.today()
        grouped: dict[str, list[int]] = defaultdict(list)
        for e in self.leaderboard.query(GameMode.NATIONS_LEAGUE):
            if self.clock.local_date(e.timestamp) == today:
                grouped[e.country_code].append(e.time_ms)
        return aggregate_country_times(grouped)

    def _load_points(self) -> dict[str, int]:
        return load_json(self.store, NATION_POINTS_KEY, _points_adapter, dict)

    def award_daily_points(self) -> dict[str, int]:
        # Not idempotent: callers must run this once per day
        stats = self.daily_stats()
        points = self._load_points()
        if not stats:
            return points

        for rank, stat in enumerate(stats):
            awarded = points_for_rank(rank)
            if awarded > 0:
                points[stat.country_code] = points.get(stat.country_code, 0) + awarded

        dump_json(self.store, NATION_POINTS_KEY, _points_adapter, points)
        logger.info(f"Awarded nation points for {self.clock.today_str()} to {min(len(stats), settings.NATION_POINTS_TOP_RANKS)} countries")
        return points

    def total_points(self) -> list[NationPointsEntry]:
        rows = [NationPointsEntry(country_code=code, points=pts) for code, pts in self._load_points().items()]
        rows.sort(key=lambda r: r.points, reverse=True)
        return rows
