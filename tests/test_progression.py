from __future__ import annotations

import pytest

from flagdash.core.exceptions import InvalidMatchError, UserNotFoundError
from flagdash.schemas.game import GameMode, LeagueTier
from tests.testkit import seed_user


def _daily_wins(user):
    return [a for a in user.achievements if a.type == "DAILY_WIN"]


def test_first_competitive_match(orchestrator, usernames):
    name = usernames.next("ana")
    seed_user(orchestrator.accounts, name, country_code="es")

    summary = orchestrator.process_match_end(name, GameMode.COMPETITIVE, 12000, xp_gained=50)

    assert summary.badges == ["WR", "NR", "PB", "SB"]
    assert (summary.rank, summary.total, summary.percentile) == (1, 1, 100)
    assert (summary.diffs.wr, summary.diffs.nr, summary.diffs.pb, summary.diffs.sb) == (None, None, None, None)
    assert summary.unlocked_cosmetics == ["frame_rookie", "name_world"]
    assert [a.type for a in summary.user.achievements] == ["WR", "NR"]
    assert summary.user.achievements[0].time_ms == 12000

    stored = orchestrator.accounts.get_user(name)
    assert stored.total_games == 1
    assert stored.xp == 50
    assert stored.current_streak == 1
    assert stored.last_played_date == "2024-03-13"
    assert stored.records[GameMode.COMPETITIVE].pb == 12000

    [log] = orchestrator.activity.recent()
    assert log.username == name
    assert log.badges == ["WR", "NR", "PB", "SB"]


def test_slower_match_reports_diffs(orchestrator, usernames):
    name = usernames.next()
    seed_user(orchestrator.accounts, name)
    orchestrator.process_match_end(name, GameMode.COMPETITIVE, 12000)

    summary = orchestrator.process_match_end(name, GameMode.COMPETITIVE, 13000)

    assert summary.badges == []
    assert (summary.diffs.wr, summary.diffs.nr, summary.diffs.pb, summary.diffs.sb) == (1000, 1000, 1000, 1000)
    assert (summary.rank, summary.total) == (2, 2)


def test_rejects_bad_input(orchestrator, usernames):
    name = usernames.next()
    seed_user(orchestrator.accounts, name)

    with pytest.raises(InvalidMatchError):
        orchestrator.process_match_end(name, GameMode.COMPETITIVE, 0)
    with pytest.raises(UserNotFoundError):
        orchestrator.process_match_end("ghost", GameMode.COMPETITIVE, 9000)
    assert orchestrator.leaderboard.query() == []


def test_daily_modes_stamp_the_day(orchestrator, usernames):
    name = usernames.next()
    seed_user(orchestrator.accounts, name)

    summary = orchestrator.process_match_end(name, GameMode.DAILY_STANDARD, 40000)
    assert summary.badges == ["PB", "SB"]
    assert summary.user.last_daily_standard == "2024-03-13"
    assert summary.user.last_daily_thematic == ""

    orchestrator.process_match_end(name, GameMode.DAILY_THEMATIC, 42000)
    assert orchestrator.accounts.get_user(name).last_daily_thematic == "2024-03-13"


def test_non_daily_modes_leave_daily_stamps_alone(orchestrator, usernames):
    assert [m for m in GameMode if m.is_daily] == [GameMode.DAILY_STANDARD, GameMode.DAILY_THEMATIC]

    name = usernames.next()
    seed_user(orchestrator.accounts, name)
    for mode in (GameMode.COMPETITIVE, GameMode.WEEKLY_LEAGUE, GameMode.NATIONS_LEAGUE):
        orchestrator.process_match_end(name, mode, 30000)

    stored = orchestrator.accounts.get_user(name)
    assert (stored.last_daily_standard, stored.last_daily_thematic) == ("", "")


def test_play_streak(orchestrator, clock, usernames):
    name = usernames.next()
    seed_user(orchestrator.accounts, name)

    orchestrator.process_match_end(name, GameMode.COMPETITIVE, 12000)
    clock.advance(days=1)
    orchestrator.process_match_end(name, GameMode.COMPETITIVE, 12000)
    orchestrator.process_match_end(name, GameMode.COMPETITIVE, 12000)
    assert orchestrator.accounts.get_user(name).current_streak == 2

    clock.advance(days=2)
    orchestrator.process_match_end(name, GameMode.COMPETITIVE, 12000)
    assert orchestrator.accounts.get_user(name).current_streak == 1


def test_level_up_rewrites_leaderboard_levels(orchestrator, usernames):
    name = usernames.next()
    seed_user(orchestrator.accounts, name)

    summary = orchestrator.process_match_end(name, GameMode.COMPETITIVE_5, 8000, xp_gained=900)

    assert summary.user.level == 4
    assert [e.level for e in orchestrator.leaderboard.query(GameMode.COMPETITIVE_5)] == [4]


def test_activity_log_keeps_newest_four(orchestrator, usernames):
    name = usernames.next()
    seed_user(orchestrator.accounts, name)
    for t in range(10000, 16000, 1000):
        orchestrator.process_match_end(name, GameMode.COMPETITIVE_20, t)

    assert [e.time_ms for e in orchestrator.activity.recent()] == [15000, 14000, 13000, 12000]


def test_daily_win_is_awarded_once(orchestrator, clock, usernames):
    name = usernames.next()
    rival = usernames.next()
    seed_user(orchestrator.accounts, name)
    seed_user(orchestrator.accounts, rival)
    orchestrator.process_match_end(name, GameMode.DAILY_STANDARD, 40000)
    orchestrator.process_match_end(rival, GameMode.DAILY_STANDARD, 45000)
    clock.advance(days=1)

    user = orchestrator.accounts.get_user(name)
    orchestrator.check_daily_win_achievement(user)
    orchestrator.check_daily_win_achievement(user)

    [win] = _daily_wins(user)
    assert win.detail == "Standard"
    assert win.mode == GameMode.DAILY_STANDARD

    reloaded = orchestrator.accounts.get_user(name)
    orchestrator.check_daily_win_achievement(reloaded)
    assert len(_daily_wins(orchestrator.accounts.get_user(name))) == 1
    assert "banner_sunrise" in reloaded.unlocked_cosmetics

    assert _daily_wins(orchestrator.check_daily_win_achievement(orchestrator.accounts.get_user(rival))) == []


def test_weekly_league_match_tracks_best_time(orchestrator, clock, usernames):
    name = usernames.next()
    seed_user(orchestrator.accounts, name)

    summary = orchestrator.process_match_end(name, GameMode.WEEKLY_LEAGUE, 30000)
    state = summary.user.weekly_state
    assert (state.current_tier, state.best_time_ms, state.last_updated_day) == (LeagueTier.QUALIFYING, 30000, 5)

    clock.advance(days=1)
    summary = orchestrator.process_match_end(name, GameMode.WEEKLY_LEAGUE, 29000)
    state = summary.user.weekly_state
    assert state.is_eliminated is False
    assert state.current_tier == LeagueTier.DIAMOND
    assert state.best_time_ms == 29000


def test_player_medals(orchestrator, clock, usernames):
    name = usernames.next()
    user = seed_user(orchestrator.accounts, name, medals=["GOLD_2024-03-02"])
    orchestrator.process_match_end(user.username, GameMode.COMPETITIVE_5, 9000)
    orchestrator.process_match_end(user.username, GameMode.DAILY_STANDARD, 40000)
    clock.advance(days=1)

    assert orchestrator.player_medals(name) == ["MEDAL_WR_5", "MEDAL_DAILY_WIN", "GOLD_2024-03-02"]
    assert orchestrator.player_medals("ghost") == []


@pytest.mark.regression
def test_login_and_session_backfill(orchestrator, clock, usernames):
    name = usernames.next()
    assert orchestrator.accounts.register(name, "pw", "it").success is True

    result = orchestrator.login(name, "pw")
    assert result.success is True
    assert result.user.weekly_state is not None

    orchestrator.process_match_end(name, GameMode.DAILY_THEMATIC, 50000)
    clock.advance(days=1)

    user = orchestrator.load_session()
    assert user.username == name
    [win] = _daily_wins(user)
    assert win.detail == "Thematic"
    assert user.weekly_state.last_updated_day == 6
    assert _daily_wins(orchestrator.accounts.get_user(name)) == [win]

    orchestrator.accounts.clear_session()
    assert orchestrator.load_session() is None


def test_advance_weekly_league_for_all_users(orchestrator, clock, usernames):
    for _ in range(3):
        seed_user(orchestrator.accounts, usernames.next())

    assert orchestrator.advance_weekly_league() == 3
    assert orchestrator.advance_weekly_league() == 0

    clock.advance(days=1)
    assert orchestrator.advance_weekly_league() == 3
    assert all(u.weekly_state.is_eliminated for u in orchestrator.accounts.list_users())
