from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[3]))

import pytest

from modules.checklist.models import ChecklistRecord
from modules.checklist.repository import ChecklistRepository
from utils.kvstore import MemoryStore

VISIT = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def repo(store) -> ChecklistRepository:
    return ChecklistRepository(store)


@pytest.fixture()
def make_record():
    def _make(**overrides) -> ChecklistRecord:
        values = {
            "location_name": "CSC",
            "technician_name": "Ana Souza",
            "responsible_name": "Carlos",
            "visit_date": VISIT,
        }
        values.update(overrides)
        return ChecklistRecord(**values)

    return _make
