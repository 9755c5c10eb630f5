"""Local persistence for checklist records and the visit history index."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Optional

from pydantic import ValidationError

from utils.kvstore import KeyValueStore, StoreError
from utils.timefmt import to_datetime, to_iso

from .models import ChecklistRecord
from .validators import ChecklistPayload

logger = logging.getLogger(__name__)

HISTORY_KEY = "infracheck_history"
SAVED_DATA_KEY = "infracheck_saved_data"


class ChecklistRepository:
    """Saved records and last-visit timestamps keyed by location name.

    Both indexes live as JSON objects in the injected store. They are written
    one after the other without a transaction, so a failure in between can
    leave a visit recorded without its record (or the reverse).

    Store or decoding failures never propagate: they are logged and the
    operation behaves as if nothing was persisted.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    # ------------------------------------------------------------ raw blobs
    def _read_map(self, key: str) -> dict[str, Any]:
        try:
            raw = self._store.get(key)
        except StoreError as exc:
            logger.warning("Failed to read %s: %s", key, exc)
            return {}
        if not raw:
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Ignoring corrupt %s blob: %s", key, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring %s blob of type %s", key, type(data).__name__)
            return {}
        return data

    def _write_map(self, key: str, data: dict[str, Any]) -> bool:
        try:
            self._store.set(key, json.dumps(data, ensure_ascii=False))
        except StoreError as exc:
            logger.warning("Failed to save %s: %s", key, exc)
            return False
        return True

    # ------------------------------------------------------------ records
    def save(self, record: ChecklistRecord) -> bool:
        if not record.location_name:
            logger.debug("Not saving checklist without a location name")
            return False
        saved = self._read_map(SAVED_DATA_KEY)
        payload = ChecklistPayload.from_record(record)
        saved[record.location_name] = payload.model_dump(by_alias=True)
        return self._write_map(SAVED_DATA_KEY, saved)

    def load_by_location(self, name: str) -> Optional[ChecklistRecord]:
        saved = self._read_map(SAVED_DATA_KEY)
        data = saved.get(name)
        if data is None:
            return None
        try:
            return ChecklistPayload.model_validate(data).to_record()
        except ValidationError as exc:
            logger.warning("Saved checklist for %r is invalid: %s", name, exc)
            return None

    def saved_locations(self) -> list[str]:
        return list(self._read_map(SAVED_DATA_KEY))

    # ------------------------------------------------------------ visits
    def record_visit(self, name: str, timestamp: datetime) -> bool:
        if not name:
            return False
        history = self._read_map(HISTORY_KEY)
        history[name] = to_iso(timestamp)
        return self._write_map(HISTORY_KEY, history)

    def last_visit(self, name: str) -> Optional[datetime]:
        value = self._read_map(HISTORY_KEY).get(name)
        return to_datetime(value) if isinstance(value, str) else None

    def recent_visits(self, limit: Optional[int] = None) -> list[tuple[str, datetime]]:
        """Locations ordered by most recent visit first."""
        visits: list[tuple[str, datetime]] = []
        for name, value in self._read_map(HISTORY_KEY).items():
            dt = to_datetime(value) if isinstance(value, str) else None
            if dt is None:
                logger.debug("Skipping unparseable visit timestamp for %r", name)
                continue
            visits.append((name, dt))
        visits.sort(key=lambda item: item[1], reverse=True)
        return visits if limit is None else visits[:limit]


__all__ = ["ChecklistRepository", "HISTORY_KEY", "SAVED_DATA_KEY"]
