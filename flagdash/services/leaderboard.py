from __future__ import annotations

import logging
import math

from pydantic import TypeAdapter

from flagdash.core.clock import Clock
from flagdash.core.config import settings
from flagdash.schemas.game import GameMode, LeaderboardStats, MatchResult
from flagdash.schemas.progression import YesterdayWinners
from flagdash.services.kv_store import KeyValueStore, dump_json, load_json

logger = logging.getLogger(__name__)

LEADERBOARD_KEY = "flagdash_leaderboard_v1"

_entries_adapter = TypeAdapter(list[MatchResult])


def _sort_by_time(entries: list[MatchResult]) -> list[MatchResult]:
    return sorted(entries, key=lambda e: e.time_ms)


def compute_stats(entries: list[MatchResult], time_ms: int) -> LeaderboardStats:
    """Rank is the 1-based position of the first entry with exactly ``time_ms``; unknown times rank after everyone."""
    total = len(entries)
    position = next((i for i, e in enumerate(entries) if e.time_ms == time_ms), -1)
    rank = position + 1 if position >= 0 else total + 1
    if total <= 0:
        return LeaderboardStats(rank=rank, total=0, percentile=100)
    # Unknown times report percentile 0
    percentile = math.ceil((position + 1) * 100 / total)
    return LeaderboardStats(rank=rank, total=total, percentile=percentile)


class LeaderboardStore:
    def __init__(self, store: KeyValueStore, clock: Clock | None = None, cap: int | None = None):
        self.store = store
        self.clock = clock or Clock()
        self.cap = cap or settings.LEADERBOARD_CAP

    def _load(self) -> list[MatchResult]:
        return load_json(self.store, LEADERBOARD_KEY, _entries_adapter, list)

    def _save(self, entries: list[MatchResult]):
        dump_json(self.store, LEADERBOARD_KEY, _entries_adapter, entries)

    def record(self, entry: MatchResult) -> list[MatchResult]:
        entries = self._load()
        entry.season_id = self.clock.season_id()

        if entry.mode.keeps_history:
            entries.append(entry)
        else:
            existing_idx = next(
                (
                    i for i, e in enumerate(entries)
                    if e.username == entry.username and e.mode == entry.mode and e.season_id == entry.season_id
                ),
                None,
            )
            if existing_idx is None:
                entries.append(entry)
            elif entry.time_ms < entries[existing_idx].time_ms:
                entries[existing_idx] = entry
            else:
                logger.debug(
                    f"Discarded {entry.mode.value} time {entry.time_ms} for {entry.username}: "
                    f"best is {entries[existing_idx].time_ms}"
                )

        capped = _sort_by_time(entries)[: self.cap]
        if len(entries) > self.cap:
            logger.info(f"Leaderboard truncated from {len(entries)} to {self.cap} entries")
        self._save(capped)
        return capped

    def query(self, mode: GameMode | None = None, season_id: str | None = None) -> list[MatchResult]:
        entries = self._load()
        if mode is not None:
            entries = [e for e in entries if e.mode == mode]
        if season_id:
            entries = [e for e in entries if e.season_id == season_id]
        return _sort_by_time(entries)

    def rank_of(self, time_ms: int, mode: GameMode, season_id: str) -> LeaderboardStats:
        return compute_stats(self.query(mode, season_id), time_ms)

    def update_user_level(self, username: str, level: int) -> bool:
        entries = self._load()
        changed = False
        for e in entries:
            if e.username == username and e.level != level:
                e.level = level
                changed = True
        if changed:
            self._save(entries)
        return changed

    def yesterday_winners(self) -> YesterdayWinners:
        yesterday = self.clock.yesterday()

        def best(mode: GameMode) -> str | None:
            rows = [e for e in self.query(mode) if self.clock.local_date(e.timestamp) == yesterday]
            return rows[0].username if rows else None

        return YesterdayWinners(
            standard=best(GameMode.DAILY_STANDARD),
            thematic=best(GameMode.DAILY_THEMATIC),
        )
