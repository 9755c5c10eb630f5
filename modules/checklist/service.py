"""Business rules for editing and finalizing checklist records.

Every command takes a record snapshot and returns a new one; records are
never mutated in place.
"""

from __future__ import annotations

import logging
from dataclasses import fields, replace
from datetime import datetime
from typing import Any, Optional, Sequence, TypeVar

from utils.timefmt import now_local

from .conclusion import generate_conclusion
from .models import (
    AntennaGroup,
    AntennaVendor,
    Brand,
    CableCondition,
    ChecklistRecord,
    FirewallVendor,
    ProblematicMachine,
    ReportBundle,
    SwitchGroup,
    parse_brand,
)
from .repository import ChecklistRepository
from .validators import clamp_positive

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = {
    "location_name": "Nome do Local",
    "technician_name": "Nome do Técnico",
}

_LIST_FIELDS = {"switches", "antennas", "problematic_machines"}

T = TypeVar("T", SwitchGroup, AntennaGroup, ProblematicMachine)


class ChecklistIncompleteError(ValueError):
    """Raised when a report is requested before required fields are filled."""

    def __init__(self, missing: Sequence[str]):
        super().__init__("Preencha o Nome do Local e do Técnico para continuar.")
        self.missing = list(missing)


# ---------------------------------------------------------------- lifecycle

def new_record(now: Optional[datetime] = None, *, location_name: str = "") -> ChecklistRecord:
    return ChecklistRecord(location_name=location_name, visit_date=now or now_local())


def resume_record(
    repository: ChecklistRepository,
    location_name: str,
    now: Optional[datetime] = None,
) -> ChecklistRecord:
    """Start a visit for ``location_name``, pre-filled from its saved record."""
    now = now or now_local()
    saved = repository.load_by_location(location_name)
    if saved is None:
        logger.debug("No saved checklist for %r, starting empty", location_name)
        return new_record(now, location_name=location_name)
    return replace(saved, visit_date=now)


# ---------------------------------------------------------------- scalar fields

def update_fields(record: ChecklistRecord, **changes: Any) -> ChecklistRecord:
    """Set scalar fields; list fields have dedicated commands."""
    known = {f.name for f in fields(ChecklistRecord)}
    for name in changes:
        if name not in known:
            raise KeyError(f"Unknown checklist field: {name}")
        if name in _LIST_FIELDS:
            raise KeyError(f"Use the item commands to change {name}")
    if "cable_condition" in changes:
        changes["cable_condition"] = CableCondition.parse(changes["cable_condition"])
    if isinstance(changes.get("firewall_brand"), str):
        changes["firewall_brand"] = parse_brand(changes["firewall_brand"], FirewallVendor)
    machines_ok = changes.pop("all_machines_ok", None)
    record = replace(record, **changes)
    if machines_ok is not None:
        record = set_all_machines_ok(record, bool(machines_ok))
    return record


def set_cable_condition(record: ChecklistRecord, value: str | CableCondition) -> ChecklistRecord:
    return replace(record, cable_condition=CableCondition.parse(value))


def set_firewall_brand(record: ChecklistRecord, brand: Brand | str) -> ChecklistRecord:
    if isinstance(brand, str):
        brand = parse_brand(brand, FirewallVendor)
    return replace(record, firewall_brand=brand)


def set_all_machines_ok(record: ChecklistRecord, ok: bool) -> ChecklistRecord:
    """Toggle the machines flag; a problem entry is added when none exists."""
    if not ok and not record.problematic_machines:
        return replace(
            record,
            all_machines_ok=False,
            problematic_machines=(ProblematicMachine(),),
        )
    return replace(record, all_machines_ok=ok)


# ---------------------------------------------------------------- list items

def _update_item(items: tuple[T, ...], item_id: str, changes: dict[str, Any]) -> tuple[T, ...]:
    if not any(item.id == item_id for item in items):
        raise KeyError(f"Item not found: {item_id}")
    if "id" in changes:
        raise KeyError("Item ids cannot be changed")
    return tuple(replace(item, **changes) if item.id == item_id else item for item in items)


def _remove_item(items: tuple[T, ...], item_id: str) -> tuple[T, ...]:
    if not any(item.id == item_id for item in items):
        raise KeyError(f"Item not found: {item_id}")
    return tuple(item for item in items if item.id != item_id)


def add_switch(record: ChecklistRecord) -> ChecklistRecord:
    return replace(record, switches=record.switches + (SwitchGroup(),))


def update_switch(record: ChecklistRecord, switch_id: str, **changes: Any) -> ChecklistRecord:
    for key in ("quantity", "ports"):
        if key in changes:
            changes[key] = clamp_positive(changes[key])
    return replace(record, switches=_update_item(record.switches, switch_id, changes))


def remove_switch(record: ChecklistRecord, switch_id: str) -> ChecklistRecord:
    return replace(record, switches=_remove_item(record.switches, switch_id))


def add_antenna(record: ChecklistRecord) -> ChecklistRecord:
    return replace(record, antennas=record.antennas + (AntennaGroup(),))


def update_antenna(record: ChecklistRecord, antenna_id: str, **changes: Any) -> ChecklistRecord:
    if "quantity" in changes:
        changes["quantity"] = clamp_positive(changes["quantity"])
    if isinstance(changes.get("brand"), str):
        changes["brand"] = parse_brand(changes["brand"], AntennaVendor)
    return replace(record, antennas=_update_item(record.antennas, antenna_id, changes))


def remove_antenna(record: ChecklistRecord, antenna_id: str) -> ChecklistRecord:
    return replace(record, antennas=_remove_item(record.antennas, antenna_id))


def add_machine(record: ChecklistRecord) -> ChecklistRecord:
    return replace(
        record,
        problematic_machines=record.problematic_machines + (ProblematicMachine(),),
    )


def update_machine(record: ChecklistRecord, machine_id: str, **changes: Any) -> ChecklistRecord:
    return replace(
        record,
        problematic_machines=_update_item(record.problematic_machines, machine_id, changes),
    )


def remove_machine(record: ChecklistRecord, machine_id: str) -> ChecklistRecord:
    return replace(
        record,
        problematic_machines=_remove_item(record.problematic_machines, machine_id),
    )


# ---------------------------------------------------------------- finalize

def missing_required_fields(record: ChecklistRecord) -> list[str]:
    return [name for name in REQUIRED_FIELDS if not getattr(record, name).strip()]


def ensure_complete(record: ChecklistRecord) -> None:
    missing = missing_required_fields(record)
    if missing:
        raise ChecklistIncompleteError(missing)


def save_checklist(
    repository: ChecklistRepository,
    record: ChecklistRecord,
    now: Optional[datetime] = None,
) -> None:
    """Persist the record and stamp its location's last visit."""
    if not record.location_name:
        return
    repository.record_visit(record.location_name, now or now_local())
    repository.save(record)


def generate_report(
    repository: ChecklistRepository,
    record: ChecklistRecord,
    now: Optional[datetime] = None,
) -> ReportBundle:
    """Validate, persist and compute the conclusion once for all exports."""
    ensure_complete(record)
    save_checklist(repository, record, now)
    conclusion = generate_conclusion(record)
    logger.info("Report generated for %r", record.location_name)
    return ReportBundle(record=record, conclusion=conclusion)


__all__ = [
    "ChecklistIncompleteError",
    "new_record",
    "resume_record",
    "update_fields",
    "set_cable_condition",
    "set_firewall_brand",
    "set_all_machines_ok",
    "add_switch",
    "update_switch",
    "remove_switch",
    "add_antenna",
    "update_antenna",
    "remove_antenna",
    "add_machine",
    "update_machine",
    "remove_machine",
    "missing_required_fields",
    "ensure_complete",
    "save_checklist",
    "generate_report",
]
