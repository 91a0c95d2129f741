from __future__ import annotations

import logging

from pydantic import TypeAdapter

from flagdash.schemas.game import GameMode, MatchResult
from flagdash.schemas.records import GlobalRecords, ModeRecords, NationalRecord, WorldRecord
from flagdash.services.kv_store import KeyValueStore, dump_json, load_json

logger = logging.getLogger(__name__)

RECORDS_KEY = "flagdash_global_records_v1"

_records_adapter = TypeAdapter(GlobalRecords)


class RecordTracker:
    """World and national records per competitive mode; times only ever improve."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def get_records(self) -> GlobalRecords:
        return load_json(self.store, RECORDS_KEY, _records_adapter, dict)

    def world_record(self, mode: GameMode) -> WorldRecord | None:
        mode_records = self.get_records().get(mode)
        return mode_records.wr if mode_records else None

    def national_record(self, mode: GameMode, country_code: str) -> NationalRecord | None:
        mode_records = self.get_records().get(mode)
        return mode_records.nr.get(country_code) if mode_records else None

    def submit(self, entry: MatchResult) -> list[str]:
        if not entry.mode.is_competitive:
            return []

        records = self.get_records()
        mode_records = records.setdefault(entry.mode, ModeRecords())
        broken: list[str] = []

        if mode_records.wr is None or entry.time_ms < mode_records.wr.time_ms:
            mode_records.wr = WorldRecord(
                time_ms=entry.time_ms, username=entry.username, country_code=entry.country_code
            )
            broken.append("WR")

        current_nr = mode_records.nr.get(entry.country_code)
        if current_nr is None or entry.time_ms < current_nr.time_ms:
            mode_records.nr[entry.country_code] = NationalRecord(time_ms=entry.time_ms, username=entry.username)
            broken.append("NR")

        if broken:
            dump_json(self.store, RECORDS_KEY, _records_adapter, records)
            logger.info(f"{entry.username} set {'/'.join(broken)} in {entry.mode.value}: {entry.time_ms}ms")
        return broken

    def badges_for(self, mode: GameMode, country_code: str, time_ms: int) -> list[str]:
        if not mode.is_competitive:
            return []
        mode_records = self.get_records().get(mode)
        if mode_records is None:
            return []
        badges = []
        if mode_records.wr is not None and mode_records.wr.time_ms == time_ms:
            badges.append("WR")
        nr = mode_records.nr.get(country_code)
        if nr is not None and nr.time_ms == time_ms:
            badges.append("NR")
        return badges
