"""Shared helpers for the report renderers."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from utils.timefmt import epoch_millis

_WHITESPACE = re.compile(r"\s+")
_UNSAFE = re.compile(r'[/\\:*?"<>|]')


def bool_to_text(value: bool) -> str:
    return "Sim" if value else "Não"


def report_filename(location_name: str, extension: str, stamp: Optional[datetime] = None) -> str:
    """``Relatorio_<location>[_<epoch ms>].<ext>`` with whitespace runs as ``_``."""
    name = _UNSAFE.sub("_", _WHITESPACE.sub("_", location_name))
    suffix = f"_{epoch_millis(stamp)}" if stamp is not None else ""
    return f"Relatorio_{name}{suffix}.{extension.lstrip('.')}"
