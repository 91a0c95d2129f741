"""
Key-value persistence substrate.

Each logical store (users, leaderboard, records, ...) lives under one fixed
string key holding a JSON document. Readers go through ``load_json`` so a
missing key or a corrupt document degrades to the empty default instead of
failing the caller.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Protocol, TypeVar

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.orm import Session

from flagdash.models.kv_entry import KvEntry

logger = logging.getLogger(__name__)

T = TypeVar("T")


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def keys(self) -> Iterable[str]: ...


class MemoryKeyValueStore:
    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)


class SqlKeyValueStore:
    """Stores every key as one row of ``kv_entries``; each write is its own transaction."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get(self, key: str) -> str | None:
        db = self.session_factory()
        try:
            row = db.get(KvEntry, key)
            return row.value if row else None
        finally:
            db.close()

    def set(self, key: str, value: str) -> None:
        db = self.session_factory()
        try:
            db.merge(KvEntry(key=key, value=value, updated_at=datetime.now(timezone.utc)))
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def delete(self, key: str) -> None:
        db = self.session_factory()
        try:
            row = db.get(KvEntry, key)
            if row is not None:
                db.delete(row)
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def keys(self) -> list[str]:
        db = self.session_factory()
        try:
            return [k for (k,) in db.query(KvEntry.key).order_by(KvEntry.key).all()]
        finally:
            db.close()


def load_json(store: KeyValueStore, key: str, adapter: TypeAdapter[T], default: Callable[[], T]) -> T:
    raw = store.get(key)
    if raw is None:
        return default()
    try:
        return adapter.validate_json(raw)
    except (ValidationError, ValueError) as exc:
        logger.warning(f"Corrupt data under '{key}', falling back to empty default: {exc}")
        return default()


def dump_json(store: KeyValueStore, key: str, adapter: TypeAdapter[Any], value: Any) -> None:
    store.set(key, adapter.dump_json(value).decode("utf-8"))

