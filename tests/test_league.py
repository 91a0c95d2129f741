from datetime import datetime

import pytest

from flagdash.schemas.game import GameMode, LeagueTier
from flagdash.schemas.user import User, WeeklyLeagueState
from flagdash.services.league import (
    TIER_PROGRESSION,
    league_percentile,
    next_tier,
    passes_cutoff,
)
from tests.testkit import make_entry

WEEK = "2024-03-09"


def _field(leaderboard, clock, count: int, *, user_rank: int, username: str = "me", prefix: str = "rival"):
    """Post ``count`` weekly-league times with ``username`` at 1-based ``user_rank``."""
    for n in range(count):
        name = username if n + 1 == user_rank else f"{prefix}{n}"
        leaderboard.record(make_entry(clock, name, GameMode.WEEKLY_LEAGUE, 20000 + n * 1000))


def _user(**state) -> User:
    return User(username="me", country_code="es", weekly_state=WeeklyLeagueState(**state))


def test_new_player_starts_in_qualifying_today(league):
    user = User(username="me")
    assert league.check_weekly_progress(user) is True
    assert user.weekly_state.current_tier == LeagueTier.QUALIFYING
    assert user.weekly_state.last_updated_day == 5
    assert user.weekly_state.week_id == WEEK
    assert user.weekly_state.best_time_ms is None


def test_same_day_is_a_no_op(league):
    user = _user(current_tier=LeagueTier.SILVER, last_updated_day=5, week_id=WEEK, best_time_ms=30000)
    assert league.check_weekly_progress(user) is False
    assert user.weekly_state.current_tier == LeagueTier.SILVER


def test_skipping_a_day_eliminates(league, clock):
    clock.set(clock.now().replace(day=11, tzinfo=None))  # Monday, league day 3
    user = _user(current_tier=LeagueTier.QUALIFYING, last_updated_day=1, week_id=WEEK, best_time_ms=25000)

    assert league.check_weekly_progress(user) is True
    assert user.weekly_state.is_eliminated is True
    assert user.weekly_state.last_updated_day == 3


def test_top_of_large_field_is_promoted(league, leaderboard, clock):
    _field(leaderboard, clock, 10, user_rank=2)
    user = _user(current_tier=LeagueTier.GOLD, last_updated_day=4, week_id=WEEK, best_time_ms=21000)

    league.check_weekly_progress(user)

    state = user.weekly_state
    assert state.is_eliminated is False
    assert state.current_tier == LeagueTier.PLATINUM
    assert state.best_time_ms is None
    assert state.last_updated_day == 5


def test_bottom_of_large_field_is_eliminated(league, leaderboard, clock):
    _field(leaderboard, clock, 10, user_rank=10)
    user = _user(current_tier=LeagueTier.GOLD, last_updated_day=4, week_id=WEEK, best_time_ms=29000)

    league.check_weekly_progress(user)

    assert user.weekly_state.is_eliminated is True
    assert user.weekly_state.current_tier == LeagueTier.GOLD


def test_small_field_always_passes(league, leaderboard, clock):
    _field(leaderboard, clock, 3, user_rank=3)
    user = _user(current_tier=LeagueTier.DIAMOND, last_updated_day=4, week_id=WEEK, best_time_ms=22000)

    league.check_weekly_progress(user)

    assert user.weekly_state.is_eliminated is False


def test_no_time_posted_eliminates(league):
    user = _user(current_tier=LeagueTier.BRONZE, last_updated_day=4, week_id=WEEK, best_time_ms=None)
    league.check_weekly_progress(user)
    assert user.weekly_state.is_eliminated is True


def test_old_weekly_entries_are_ignored(league, leaderboard, clock):
    clock.advance(days=-8)
    _field(leaderboard, clock, 9, user_rank=1, username="someone", prefix="old")
    clock.advance(days=8)
    _field(leaderboard, clock, 3, user_rank=3)
    user = _user(current_tier=LeagueTier.DIAMOND, last_updated_day=4, week_id=WEEK, best_time_ms=22000)

    league.check_weekly_progress(user)

    assert user.weekly_state.is_eliminated is False


def test_week_rollover_awards_medal_to_survivors(league, clock):
    user = _user(current_tier=LeagueTier.SILVER, last_updated_day=7, week_id="2024-03-02", best_time_ms=25000)

    assert league.check_weekly_progress(user) is True

    assert user.medals == ["SILVER_2024-03-02"]
    assert len(user.achievements) == 1
    win = user.achievements[0]
    assert win.type == "LEAGUE_WIN"
    assert win.detail == "SILVER"
    assert win.mode == GameMode.WEEKLY_LEAGUE
    assert user.weekly_state.week_id == WEEK
    assert user.weekly_state.current_tier == LeagueTier.QUALIFYING


def test_week_rollover_without_medal_when_eliminated(league):
    user = _user(current_tier=LeagueTier.GOLD, is_eliminated=True, last_updated_day=6, week_id="2024-03-02", best_time_ms=25000)
    league.check_weekly_progress(user)
    assert user.medals == []
    assert user.achievements == []
    assert user.weekly_state.is_eliminated is False


def test_record_weekly_time_keeps_the_best(league):
    user = _user(last_updated_day=5, week_id=WEEK)
    assert league.record_weekly_time(user, 30000) is True
    assert league.record_weekly_time(user, 31000) is False
    assert league.record_weekly_time(user, 28000) is True
    assert user.weekly_state.best_time_ms == 28000

    user.weekly_state.is_eliminated = True
    assert league.record_weekly_time(user, 1000) is False


def test_percentile_and_cutoff_math(leaderboard, clock):
    _field(leaderboard, clock, 10, user_rank=2)
    entries = leaderboard.query(GameMode.WEEKLY_LEAGUE)

    pct, participants = league_percentile(entries, "me")
    assert participants == 10
    assert pct == 0.9
    assert passes_cutoff(LeagueTier.GOLD, pct, participants) is True
    assert passes_cutoff(LeagueTier.DIAMOND, 0.69, participants) is False
    assert passes_cutoff(LeagueTier.MASTER, 0.0, participants) is True

    ghost_pct, ghost_participants = league_percentile(entries, "ghost")
    assert ghost_pct == pytest.approx(1.1)
    assert ghost_participants == 10
    assert league_percentile([], "me") == (2.0, 0)


def test_next_tier_follows_league_day():
    assert next_tier(2) == LeagueTier.BRONZE
    assert next_tier(7) == LeagueTier.MASTER
    assert TIER_PROGRESSION[0] == LeagueTier.QUALIFYING


def test_player_whose_best_is_older_than_the_window_still_passes(league, leaderboard, clock):
    clock.set(datetime(2024, 3, 4, 12, 0))
    leaderboard.record(make_entry(clock, "me", GameMode.WEEKLY_LEAGUE, 15000))

    clock.set(datetime(2024, 3, 12, 12, 0))
    # slower than the monthly best, so the leaderboard keeps the old entry
    leaderboard.record(make_entry(clock, "me", GameMode.WEEKLY_LEAGUE, 16000))
    for n in range(9):
        leaderboard.record(make_entry(clock, f"rival{n}", GameMode.WEEKLY_LEAGUE, 30000 + n * 100))

    clock.set(datetime(2024, 3, 13, 12, 0))
    user = _user(current_tier=LeagueTier.GOLD, last_updated_day=4, week_id=WEEK, best_time_ms=16000)
    league.check_weekly_progress(user)

    state = user.weekly_state
    assert state.is_eliminated is False
    assert state.current_tier == LeagueTier.PLATINUM
    assert state.last_updated_day == 5
