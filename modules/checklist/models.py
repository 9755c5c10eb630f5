"""Datamodel definitions for the site-visit checklist."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Type, TypeVar, Union

from utils.timefmt import now_local


class CableCondition(str, Enum):
    ORGANIZED = "Organizado"
    PARTIAL = "Parcial"
    DISORGANIZED = "Desorganizado"

    @classmethod
    def parse(cls, value: "str | CableCondition") -> "CableCondition":
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Invalid cable condition: {value!r}") from None


class AntennaVendor(str, Enum):
    UNIFI = "UniFi"
    ARUBA = "Aruba"


class FirewallVendor(str, Enum):
    FORTINET = "Fortinet"
    SONICWALL = "SonicWall"


@dataclass(frozen=True, slots=True)
class Known:
    vendor: Enum

    def __str__(self) -> str:
        return self.vendor.value


@dataclass(frozen=True, slots=True)
class Custom:
    name: str

    def __str__(self) -> str:
        return self.name


Brand = Union[Known, Custom]

V = TypeVar("V", bound=Enum)


def parse_brand(text: str, vendors: Type[V]) -> Brand:
    """Map a stored brand string back to a tagged value."""
    for vendor in vendors:
        if vendor.value == text:
            return Known(vendor)
    return Custom(text)


def brand_text(brand: Brand) -> str:
    return str(brand)


def new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True, slots=True)
class SwitchGroup:
    id: str = field(default_factory=new_id)
    quantity: int = 1
    brand: str = ""
    model: str = ""
    ports: int = 24
    condition_ok: bool = True
    notes: str = ""


@dataclass(frozen=True, slots=True)
class AntennaGroup:
    id: str = field(default_factory=new_id)
    quantity: int = 1
    brand: Brand = Known(AntennaVendor.UNIFI)
    is_working: bool = True
    notes: str = ""


@dataclass(frozen=True, slots=True)
class ProblematicMachine:
    id: str = field(default_factory=new_id)
    identifier: str = ""
    processor_gen: str = ""
    os_updated: bool = True
    problem_description: str = ""


@dataclass(frozen=True, slots=True)
class ChecklistRecord:
    location_name: str = ""
    responsible_name: str = ""
    visit_date: datetime = field(default_factory=now_local)

    cable_condition: CableCondition = CableCondition.ORGANIZED
    cable_notes: str = ""

    switches: tuple[SwitchGroup, ...] = ()
    antennas: tuple[AntennaGroup, ...] = ()

    has_firewall: bool = False
    firewall_brand: Brand = Known(FirewallVendor.FORTINET)
    firewall_working: bool = True
    firewall_notes: str = ""

    all_machines_ok: bool = True
    problematic_machines: tuple[ProblematicMachine, ...] = ()

    network_points_ok: bool = True
    network_points_notes: str = ""

    employees_satisfied: bool = True
    complaints: str = ""

    observations: str = ""
    technician_name: str = ""

    @property
    def switch_count(self) -> int:
        return sum(s.quantity for s in self.switches)

    @property
    def antenna_count(self) -> int:
        return sum(a.quantity for a in self.antennas)


@dataclass(frozen=True, slots=True)
class ReportBundle:
    """A finalized record together with the conclusion rendered for it."""

    record: ChecklistRecord
    conclusion: str
