from pydantic import TypeAdapter

from flagdash.core.clock import Clock
from flagdash.core.logger import setup_logging
from flagdash.db.session import SessionLocal
from flagdash.services.kv_store import SqlKeyValueStore, dump_json, load_json
from flagdash.services.leaderboard import LeaderboardStore
from flagdash.services.nations import NationAggregator

AWARDED_MARKER_KEY = "flagdash_nation_points_awarded_v1"

_marker_adapter = TypeAdapter(str)

logger = setup_logging()


def main():
    store = SqlKeyValueStore(SessionLocal)
    clock = Clock()
    today = clock.today_str()

    if load_json(store, AWARDED_MARKER_KEY, _marker_adapter, str) == today:
        print(f"skip: puntos de naciones ya otorgados para {today}")
        return

    aggregator = NationAggregator(store, LeaderboardStore(store, clock), clock)
    points = aggregator.award_daily_points()
    dump_json(store, AWARDED_MARKER_KEY, _marker_adapter, today)
    logger.info(f"Nation points ledger now holds {len(points)} countries")
    print(f"ok: puntos de naciones otorgados para {today}")


if __name__ == "__main__":
    main()
