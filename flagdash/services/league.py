"""
Weekly elimination league.

A league week starts on Saturday (league day 1) in the game timezone. Each
day a surviving player must have posted a weekly-league time and rank inside
the cutoff for their tier to be promoted; otherwise they are eliminated until
the next week. Players who finish the week alive get a tier medal.

The state machine runs lazily: ``check_weekly_progress`` is called whenever a
player is loaded or finishes a match, and catches up with whatever days have
passed since the last evaluation.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from flagdash.core.clock import Clock
from flagdash.core.config import settings
from flagdash.schemas.game import GameMode, LeagueTier, MatchResult
from flagdash.schemas.user import AchievementEntry, User, WeeklyLeagueState
from flagdash.services.leaderboard import LeaderboardStore

logger = logging.getLogger(__name__)

# Tier reached after surviving each league day (index 0 = Saturday)
TIER_PROGRESSION: list[LeagueTier] = [
    LeagueTier.QUALIFYING,
    LeagueTier.BRONZE,
    LeagueTier.SILVER,
    LeagueTier.GOLD,
    LeagueTier.PLATINUM,
    LeagueTier.DIAMOND,
    LeagueTier.MASTER,
]

# Share of the field that survives each tier; MASTER never cuts anyone
CUTOFFS: dict[LeagueTier, float] = {
    LeagueTier.QUALIFYING: 0.8,
    LeagueTier.BRONZE: 0.7,
    LeagueTier.SILVER: 0.6,
    LeagueTier.GOLD: 0.5,
    LeagueTier.PLATINUM: 0.4,
    LeagueTier.DIAMOND: 0.3,
    LeagueTier.MASTER: 1.0,
}


def fresh_state(current_day: int, week_id: str) -> WeeklyLeagueState:
    return WeeklyLeagueState(
        current_tier=LeagueTier.QUALIFYING,
        best_time_ms=None,
        is_eliminated=False,
        last_updated_day=current_day,
        week_id=week_id,
    )


def league_percentile(entries: list[MatchResult], username: str) -> tuple[float, int]:
    """Return ``(1 - rank_index / total, total)`` for ``username`` among time-sorted entries."""
    total = len(entries) or 1
    # Absent from the window: index -1, which always passes
    rank_index = next((i for i, e in enumerate(entries) if e.username == username), -1)
    return 1 - (rank_index / total), len(entries)


def passes_cutoff(tier: LeagueTier, percentile: float, participants: int) -> bool:
    if participants < settings.WEEKLY_LEAGUE_MIN_PLAYERS:
        return True
    required = CUTOFFS.get(tier, 0.5)
    return percentile >= (1 - required)


def next_tier(current_day: int) -> LeagueTier:
    return TIER_PROGRESSION[min(current_day - 1, len(TIER_PROGRESSION) - 1)]


class WeeklyLeagueEngine:
    def __init__(self, leaderboard: LeaderboardStore, clock: Clock | None = None):
        self.leaderboard = leaderboard
        self.clock = clock or leaderboard.clock

    def current_week_id(self) -> str:
        return self.clock.week_id()

    def current_day(self) -> int:
        return self.clock.league_day()

    def _recent_weekly_entries(self) -> list[MatchResult]:
        cutoff = self.clock.now_ms() - int(timedelta(days=settings.WEEKLY_LEAGUE_WINDOW_DAYS).total_seconds() * 1000)
        return [e for e in self.leaderboard.query(GameMode.WEEKLY_LEAGUE) if e.timestamp > cutoff]

    def check_weekly_progress(self, user: User) -> bool:
        """Advance ``user.weekly_state`` in place; returns True when anything changed."""
        week_id = self.current_week_id()
        current_day = self.current_day()

        state = user.weekly_state
        if state is None:
            user.weekly_state = fresh_state(current_day, week_id)
            return True

        if state.week_id != week_id:
            self._close_week(user, state)
            user.weekly_state = fresh_state(current_day, week_id)
            return True

        if state.last_updated_day >= current_day:
            return False

        if not state.is_eliminated:
            self._advance_day(user, state, current_day)
        state.last_updated_day = current_day
        return True

    def _close_week(self, user: User, state: WeeklyLeagueState):
        if state.is_eliminated or state.best_time_ms is None:
            return
        user.medals.append(f"{state.current_tier.value}_{state.week_id}")
        user.achievements.append(
            AchievementEntry(
                type="LEAGUE_WIN",
                timestamp=self.clock.now_ms(),
                detail=state.current_tier.value,
                mode=GameMode.WEEKLY_LEAGUE,
            )
        )
        logger.info(f"{user.username} finished week {state.week_id} in {state.current_tier.value}")

    def _advance_day(self, user: User, state: WeeklyLeagueState, current_day: int):
        if state.last_updated_day != 0 and current_day - state.last_updated_day > 1:
            state.is_eliminated = True
            logger.info(f"{user.username} eliminated: skipped a league day ({state.last_updated_day} -> {current_day})")
            return

        if state.best_time_ms is None and state.last_updated_day > 0:
            state.is_eliminated = True
            logger.info(f"{user.username} eliminated: no time posted in {state.current_tier.value}")
            return

        entries = self._recent_weekly_entries()
        percentile, participants = league_percentile(entries, user.username)
        if passes_cutoff(state.current_tier, percentile, participants):
            state.current_tier = next_tier(current_day)
            state.best_time_ms = None
        else:
            state.is_eliminated = True
            logger.info(
                f"{user.username} eliminated in {state.current_tier.value}: "
                f"percentile {percentile:.2f} of {participants}"
            )

    def record_weekly_time(self, user: User, time_ms: int) -> bool:
        state = user.weekly_state
        if state is None or state.is_eliminated:
            return False
        if state.best_time_ms is None or time_ms < state.best_time_ms:
            state.best_time_ms = time_ms
            return True
        return False
