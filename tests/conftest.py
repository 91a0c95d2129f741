from __future__ import annotations

from datetime import datetime
from uuid import uuid4

import pytest

from flagdash.core.clock import FixedClock
from flagdash.services.accounts import AccountStore
from flagdash.services.activity import ActivityLog
from flagdash.services.kv_store import MemoryKeyValueStore
from flagdash.services.leaderboard import LeaderboardStore
from flagdash.services.league import WeeklyLeagueEngine
from flagdash.services.nations import NationAggregator
from flagdash.services.progression import ProgressionOrchestrator
from flagdash.services.records import RecordTracker
from tests.testkit import UsernameFactory

# Wednesday, league day 5 of the week starting Saturday 2024-03-09
DEFAULT_NOW = datetime(2024, 3, 13, 12, 0)


@pytest.fixture
def store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(DEFAULT_NOW)


@pytest.fixture
def leaderboard(store, clock) -> LeaderboardStore:
    return LeaderboardStore(store, clock)


@pytest.fixture
def records(store) -> RecordTracker:
    return RecordTracker(store)


@pytest.fixture
def accounts(store, clock) -> AccountStore:
    return AccountStore(store, clock)


@pytest.fixture
def activity(store) -> ActivityLog:
    return ActivityLog(store)


@pytest.fixture
def league(leaderboard, clock) -> WeeklyLeagueEngine:
    return WeeklyLeagueEngine(leaderboard, clock)


@pytest.fixture
def nations(store, leaderboard, clock) -> NationAggregator:
    return NationAggregator(store, leaderboard, clock)


@pytest.fixture
def orchestrator(store, clock) -> ProgressionOrchestrator:
    return ProgressionOrchestrator(store, clock)


@pytest.fixture
def usernames() -> UsernameFactory:
    return UsernameFactory(seed=uuid4().hex[:8])
