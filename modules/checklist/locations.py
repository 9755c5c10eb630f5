"""Autocomplete index of known site names."""

from __future__ import annotations

import json
import logging
import unicodedata
from typing import Iterable, Sequence

from utils.kvstore import KeyValueStore, StoreError

logger = logging.getLogger(__name__)

CUSTOM_LOCATIONS_KEY = "infracheck_custom_locations"

PREDEFINED_LOCATIONS: Sequence[str] = (
    "Volkswagen T7", "Toyota T7", "RAM Castelo Branco", "Marketing", "Compliance Galpão",
    "Primeira Mão T7", "Primeira Mão Off Road T7", "BYD Marista",
    "Tudo Chevrolet Mutirão", "Nissan 85", "Primeira Mão 85",
    "BMW Carros", "CRT", "Jeep / RAM BR", "Triumph", "BMW Motos",
    "Seminovos Motos", "Tudo Chevrolet Buriti", "Toyota Buriti",
    "Primeira Mão Buriti", "Hyundai T9", "Jeep T9", "BYD Cidade Jardim",
    "Hyundai Cidade Jardim", "Primeira Mão Cidade Jardim", "Outlet Shopping",
    "Primeira Mão Shopping", "Toyota Anapolis", "Hyundai Anapolis",
    "Primeira Mão Anapolis", "Jeep / RAM Anapolis", "Nissan Anapolis",
    "Fazendinha", "Primeira Mão Galpão", "Primeira Mão Digital Galpão",
    "Corretora", "Seguros", "CSC", "DP", "Contabilidade", "Controladoria",
    "Administrativo", "Diretoria", "Auditoria Galpão", "Compras Galpão",
    "RH Galpão", "Compras CRT", "CRT Galpão", "Marketing BYD",
    "CRM T.I", "Compliance Galpão", "CRC",
)


def _collation_key(value: str) -> tuple[str, str]:
    decomposed = unicodedata.normalize("NFKD", value)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold(), value


class LocationIndex:
    """Baseline site names plus names learned from user input.

    Learned names are append-only and persisted under
    ``infracheck_custom_locations`` as a JSON list.
    """

    def __init__(
        self,
        store: KeyValueStore,
        baseline: Iterable[str] = PREDEFINED_LOCATIONS,
    ) -> None:
        self._store = store
        self._baseline = list(baseline)
        self._custom = self._load_custom()

    def _load_custom(self) -> list[str]:
        try:
            raw = self._store.get(CUSTOM_LOCATIONS_KEY)
        except StoreError as exc:
            logger.warning("Failed to load custom locations: %s", exc)
            return []
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Ignoring corrupt custom locations: %s", exc)
            return []
        if not isinstance(data, list):
            return []
        return [str(item) for item in data if isinstance(item, str)]

    @property
    def custom(self) -> list[str]:
        return list(self._custom)

    def all(self) -> list[str]:
        return list(dict.fromkeys([*self._baseline, *self._custom]))

    def suggest(self, query: str) -> list[str]:
        if not query:
            return []
        needle = query.lower()
        matches = [loc for loc in self.all() if needle in loc.lower()]
        matches.sort(
            key=lambda loc: (not loc.lower().startswith(needle), _collation_key(loc))
        )
        return matches

    def learn(self, name: str) -> bool:
        """Remember ``name`` if it is new; returns True when it was added."""
        trimmed = (name or "").strip()
        if len(trimmed) <= 1:
            return False
        if trimmed in self._baseline or trimmed in self._custom:
            return False
        self._custom.append(trimmed)
        try:
            self._store.set(CUSTOM_LOCATIONS_KEY, json.dumps(self._custom, ensure_ascii=False))
        except StoreError as exc:
            logger.warning("Failed to persist custom location %r: %s", trimmed, exc)
        else:
            logger.info("Learned new location %r", trimmed)
        return True


__all__ = ["LocationIndex", "PREDEFINED_LOCATIONS", "CUSTOM_LOCATIONS_KEY"]
