"""Pydantic schemas for persisted checklist payloads.

The JSON layout (camelCase keys, brands as plain strings, ISO timestamps) is
the one kept in the local store; :meth:`ChecklistPayload.to_record` and
:meth:`ChecklistPayload.from_record` are the only places where tagged brand
values are converted to and from text.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from utils.timefmt import to_datetime, to_iso

from .models import (
    AntennaGroup,
    AntennaVendor,
    CableCondition,
    ChecklistRecord,
    FirewallVendor,
    ProblematicMachine,
    SwitchGroup,
    brand_text,
    new_id,
    parse_brand,
)


def clamp_positive(value: Any) -> int:
    """Coerce numeric input to an integer of at least 1.

    Blank, malformed, or non-positive input becomes 1 rather than an error.
    """
    if isinstance(value, bool):
        return 1
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        try:
            number = int(float(str(value).strip()))
        except (TypeError, ValueError, OverflowError):
            return 1
    return number if number > 0 else 1


class _Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SwitchPayload(_Payload):
    id: str = Field(default_factory=new_id)
    quantity: int = 1
    brand: str = ""
    model: str = ""
    ports: int = 24
    condition_ok: bool = True
    notes: str = ""

    @field_validator("quantity", "ports", mode="before")
    @classmethod
    def positive(cls, value: Any) -> int:
        return clamp_positive(value)


class AntennaPayload(_Payload):
    id: str = Field(default_factory=new_id)
    quantity: int = 1
    brand: str = AntennaVendor.UNIFI.value
    is_working: bool = True
    notes: str = ""

    @field_validator("quantity", mode="before")
    @classmethod
    def positive(cls, value: Any) -> int:
        return clamp_positive(value)


class MachinePayload(_Payload):
    id: str = Field(default_factory=new_id)
    identifier: str = ""
    processor_gen: str = ""
    os_updated: bool = True
    problem_description: str = ""


class ChecklistPayload(_Payload):
    location_name: str = ""
    responsible_name: str = ""
    visit_date: str

    cable_condition: Literal["Organizado", "Parcial", "Desorganizado"] = "Organizado"
    cable_notes: str = ""

    switches: list[SwitchPayload] = Field(default_factory=list)
    antennas: list[AntennaPayload] = Field(default_factory=list)

    has_firewall: bool = False
    firewall_brand: str = FirewallVendor.FORTINET.value
    firewall_working: bool = True
    firewall_notes: str = ""

    all_machines_ok: bool = True
    problematic_machines: list[MachinePayload] = Field(default_factory=list)

    network_points_ok: bool = True
    network_points_notes: str = ""

    employees_satisfied: bool = True
    complaints: str = ""

    observations: str = ""
    technician_name: str = ""

    @field_validator("visit_date")
    @classmethod
    def validate_iso(cls, value: str) -> str:
        if to_datetime(value) is None:
            raise ValueError("visitDate must be an ISO-8601 timestamp")
        return value

    @classmethod
    def from_record(cls, record: ChecklistRecord) -> "ChecklistPayload":
        return cls(
            location_name=record.location_name,
            responsible_name=record.responsible_name,
            visit_date=to_iso(record.visit_date),
            cable_condition=record.cable_condition.value,
            cable_notes=record.cable_notes,
            switches=[
                SwitchPayload(
                    id=s.id,
                    quantity=s.quantity,
                    brand=s.brand,
                    model=s.model,
                    ports=s.ports,
                    condition_ok=s.condition_ok,
                    notes=s.notes,
                )
                for s in record.switches
            ],
            antennas=[
                AntennaPayload(
                    id=a.id,
                    quantity=a.quantity,
                    brand=brand_text(a.brand),
                    is_working=a.is_working,
                    notes=a.notes,
                )
                for a in record.antennas
            ],
            has_firewall=record.has_firewall,
            firewall_brand=brand_text(record.firewall_brand),
            firewall_working=record.firewall_working,
            firewall_notes=record.firewall_notes,
            all_machines_ok=record.all_machines_ok,
            problematic_machines=[
                MachinePayload(
                    id=m.id,
                    identifier=m.identifier,
                    processor_gen=m.processor_gen,
                    os_updated=m.os_updated,
                    problem_description=m.problem_description,
                )
                for m in record.problematic_machines
            ],
            network_points_ok=record.network_points_ok,
            network_points_notes=record.network_points_notes,
            employees_satisfied=record.employees_satisfied,
            complaints=record.complaints,
            observations=record.observations,
            technician_name=record.technician_name,
        )

    def to_record(self) -> ChecklistRecord:
        visit_date = to_datetime(self.visit_date)
        if visit_date is None:
            raise ValueError(f"visitDate is not an ISO-8601 timestamp: {self.visit_date!r}")
        return ChecklistRecord(
            location_name=self.location_name,
            responsible_name=self.responsible_name,
            visit_date=visit_date,
            cable_condition=CableCondition.parse(self.cable_condition),
            cable_notes=self.cable_notes,
            switches=tuple(
                SwitchGroup(
                    id=s.id,
                    quantity=s.quantity,
                    brand=s.brand,
                    model=s.model,
                    ports=s.ports,
                    condition_ok=s.condition_ok,
                    notes=s.notes,
                )
                for s in self.switches
            ),
            antennas=tuple(
                AntennaGroup(
                    id=a.id,
                    quantity=a.quantity,
                    brand=parse_brand(a.brand, AntennaVendor),
                    is_working=a.is_working,
                    notes=a.notes,
                )
                for a in self.antennas
            ),
            has_firewall=self.has_firewall,
            firewall_brand=parse_brand(self.firewall_brand, FirewallVendor),
            firewall_working=self.firewall_working,
            firewall_notes=self.firewall_notes,
            all_machines_ok=self.all_machines_ok,
            problematic_machines=tuple(
                ProblematicMachine(
                    id=m.id,
                    identifier=m.identifier,
                    processor_gen=m.processor_gen,
                    os_updated=m.os_updated,
                    problem_description=m.problem_description,
                )
                for m in self.problematic_machines
            ),
            network_points_ok=self.network_points_ok,
            network_points_notes=self.network_points_notes,
            employees_satisfied=self.employees_satisfied,
            complaints=self.complaints,
            observations=self.observations,
            technician_name=self.technician_name,
        )
