"""
Match-end orchestration.

``process_match_end`` is the single entry point a finished match goes
through: leaderboard, records, personal bests, weekly league, streak, XP,
cosmetic unlocks and the activity feed, in that order. Session load runs the
lazy backfills (yesterday's daily wins, weekly league catch-up).
"""

from __future__ import annotations

import logging
from datetime import date, timedelta

from flagdash.core.clock import Clock
from flagdash.core.config import settings
from flagdash.core.exceptions import InvalidMatchError
from flagdash.schemas.activity import ActivityLogEntry
from flagdash.schemas.game import GameMode, MatchResult
from flagdash.schemas.progression import LastGame, MatchSummary, ResultDiffs
from flagdash.schemas.user import AchievementEntry, User
from flagdash.services.accounts import AccountStore
from flagdash.services.achievements import AchievementEvaluator
from flagdash.services.activity import ActivityLog
from flagdash.services.kv_store import KeyValueStore
from flagdash.services.leaderboard import LeaderboardStore
from flagdash.services.league import WeeklyLeagueEngine
from flagdash.services.nations import NationAggregator
from flagdash.services.records import RecordTracker

logger = logging.getLogger(__name__)

_WR_MEDALS = {
    GameMode.COMPETITIVE_5: "MEDAL_WR_5",
    GameMode.COMPETITIVE: "MEDAL_WR_10",
    GameMode.COMPETITIVE_20: "MEDAL_WR_20",
}

_DAILY_WIN_DETAILS = (
    ("standard", "Standard", GameMode.DAILY_STANDARD),
    ("thematic", "Thematic", GameMode.DAILY_THEMATIC),
)

_DAILY_STAMP_FIELDS = {
    GameMode.DAILY_STANDARD: "last_daily_standard",
    GameMode.DAILY_THEMATIC: "last_daily_thematic",
}


def update_streak(user: User, today: date) -> None:
    today_str = today.isoformat()
    if user.last_played_date == today_str:
        return
    if user.last_played_date == (today - timedelta(days=1)).isoformat():
        user.current_streak += 1
    else:
        user.current_streak = 1
    user.last_played_date = today_str


def _diff(time_ms: int, reference: int | None) -> int | None:
    return None if reference is None else time_ms - reference


class ProgressionOrchestrator:
    def __init__(
        self,
        store: KeyValueStore,
        clock: Clock | None = None,
        evaluator: AchievementEvaluator | None = None,
    ):
        self.clock = clock or Clock()
        self.leaderboard = LeaderboardStore(store, self.clock)
        self.records = RecordTracker(store)
        self.activity = ActivityLog(store)
        self.nations = NationAggregator(store, self.leaderboard, self.clock)
        self.accounts = AccountStore(store, self.clock)
        self.league = WeeklyLeagueEngine(self.leaderboard, self.clock)
        self.evaluator = evaluator or AchievementEvaluator()

    def _reference_diffs(self, user: User, mode: GameMode, time_ms: int, season_id: str) -> ResultDiffs:
        wr = self.records.world_record(mode) if mode.is_competitive else None
        nr = self.records.national_record(mode, user.country_code) if mode.is_competitive else None
        rec = user.records.get(mode)
        pb = rec.pb if rec else None
        sb = rec.sb if rec and rec.season_id == season_id else None
        return ResultDiffs(
            wr=_diff(time_ms, wr.time_ms if wr else None),
            nr=_diff(time_ms, nr.time_ms if nr else None),
            pb=_diff(time_ms, pb),
            sb=_diff(time_ms, sb),
        )

    def process_match_end(self, username: str, mode: GameMode, time_ms: int, xp_gained: int = 0) -> MatchSummary:
        if time_ms <= 0:
            raise InvalidMatchError(time_ms, "time must be positive")

        user = self.accounts.require_user(username)
        now_ms = self.clock.now_ms()
        season_id = self.clock.season_id()
        today = self.clock.today()

        if mode == GameMode.WEEKLY_LEAGUE:
            self.league.check_weekly_progress(user)

        diffs = self._reference_diffs(user, mode, time_ms, season_id)

        entry = MatchResult(
            username=user.username,
            country_code=user.country_code,
            mode=mode,
            time_ms=time_ms,
            timestamp=now_ms,
            level=user.level,
            equipped_cosmetics=user.equipped_cosmetics.model_copy(),
        )
        self.leaderboard.record(entry)

        badges = self.records.submit(entry)
        for badge in badges:
            user.achievements.append(
                AchievementEntry(type=badge, timestamp=now_ms, mode=mode, time_ms=time_ms)
            )

        badges += self.accounts.apply_time(user, mode, time_ms)

        if mode == GameMode.WEEKLY_LEAGUE:
            self.league.record_weekly_time(user, time_ms)
        elif mode.is_daily:
            setattr(user, _DAILY_STAMP_FIELDS[mode], today.isoformat())

        user.total_games += 1
        update_streak(user, today)

        old_level = user.level
        self.accounts.grant_xp(user, xp_gained)

        stats = self.leaderboard.rank_of(time_ms, mode, season_id)
        unlocked = self.evaluator.evaluate(user, LastGame(mode=mode, time_ms=time_ms, rank=stats.rank))

        self.accounts.save_user(user)
        if user.level != old_level:
            self.leaderboard.update_user_level(user.username, user.level)

        self.activity.add(
            ActivityLogEntry(
                username=user.username,
                country_code=user.country_code,
                mode=mode,
                time_ms=time_ms,
                timestamp=now_ms,
                badges=list(badges),
            )
        )

        logger.debug(f"Processed {mode.value} match for {username}: {time_ms}ms, badges={badges}")
        return MatchSummary(
            user=user,
            entry=entry,
            badges=badges,
            rank=stats.rank,
            total=stats.total,
            percentile=stats.percentile,
            diffs=diffs,
            unlocked_cosmetics=unlocked,
        )

    def _daily_win_changes(self, user: User) -> bool:
        winners = self.leaderboard.yesterday_winners()
        now_ms = self.clock.now_ms()
        window_ms = settings.DAILY_WIN_WINDOW_HOURS * 60 * 60 * 1000
        changed = False

        for attr, detail, mode in _DAILY_WIN_DETAILS:
            if getattr(winners, attr) != user.username:
                continue
            already = any(
                a.type == "DAILY_WIN" and a.detail == detail and (now_ms - a.timestamp) < window_ms
                for a in user.achievements
            )
            if already:
                continue
            user.achievements.append(
                AchievementEntry(type="DAILY_WIN", detail=detail, timestamp=now_ms, mode=mode)
            )
            logger.info(f"{user.username} won yesterday's {detail} daily")
            changed = True
        return changed

    def check_daily_win_achievement(self, user: User) -> User:
        if self._daily_win_changes(user):
            self.evaluator.evaluate(user)
            self.accounts.save_user(user)
        return user

    def refresh_user(self, user: User) -> User:
        changed = self._daily_win_changes(user)
        changed = self.league.check_weekly_progress(user) or changed
        if changed:
            self.evaluator.evaluate(user)
            self.accounts.save_user(user)
        return user

    def login(self, username: str, password: str):
        result = self.accounts.login(username, password)
        if result.success and result.user is not None:
            result.user = self.refresh_user(result.user)
            self.accounts.save_session(result.user)
        return result

    def load_session(self) -> User | None:
        user = self.accounts.get_session()
        if user is None:
            return None
        return self.refresh_user(user)

    def advance_weekly_league(self) -> int:
        """Run the weekly state machine for every stored user; returns how many changed."""
        changed = 0
        for user in self.accounts.list_users():
            if self.league.check_weekly_progress(user):
                self.accounts.save_user(user)
                changed += 1
        return changed

    def player_medals(self, username: str) -> list[str]:
        medals = []
        records = self.records.get_records()
        for mode, medal in _WR_MEDALS.items():
            mode_records = records.get(mode)
            if mode_records and mode_records.wr and mode_records.wr.username == username:
                medals.append(medal)

        winners = self.leaderboard.yesterday_winners()
        if winners.standard == username:
            medals.append("MEDAL_DAILY_WIN")
        if winners.thematic == username:
            medals.append("MEDAL_THEMATIC_WIN")

        user = self.accounts.get_user(username)
        if user is not None:
            medals.extend(user.medals)
        return medals
