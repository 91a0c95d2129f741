from flagdash.core.logger import setup_logging
from flagdash.db.session import SessionLocal
from flagdash.services.kv_store import SqlKeyValueStore
from flagdash.services.progression import ProgressionOrchestrator

logger = setup_logging()


def main():
    orchestrator = ProgressionOrchestrator(SqlKeyValueStore(SessionLocal))
    changed = orchestrator.advance_weekly_league()
    logger.info(f"Weekly league advanced for {changed} users (week {orchestrator.league.current_week_id()})")
    print(f"ok: liga semanal actualizada ({changed} usuarios)")


if __name__ == "__main__":
    main()
