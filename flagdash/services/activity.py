from pydantic import TypeAdapter

from flagdash.core.config import settings
from flagdash.schemas.activity import ActivityLogEntry
from flagdash.services.kv_store import KeyValueStore, dump_json, load_json

ACTIVITY_KEY = "flagdash_activity_log_v1"

_activity_adapter = TypeAdapter(list[ActivityLogEntry])


class ActivityLog:
    def __init__(self, store: KeyValueStore, size: int | None = None):
        self.store = store
        self.size = size or settings.ACTIVITY_LOG_SIZE

    def recent(self) -> list[ActivityLogEntry]:
        return load_json(self.store, ACTIVITY_KEY, _activity_adapter, list)[: self.size]

    def add(self, entry: ActivityLogEntry) -> list[ActivityLogEntry]:
        logs = load_json(self.store, ACTIVITY_KEY, _activity_adapter, list)
        # newest first
        capped = [entry, *logs][: self.size]
        dump_json(self.store, ACTIVITY_KEY, _activity_adapter, capped)
        return capped
