"""Application settings switches used by the checklist tool.

Values come from environment variables first and then from an optional
``app.ini`` in the data directory::

    [app]
    dev = true

    [export]
    dir = C:/Users/tech/Documents/Relatorios

Defaults apply when neither source is set.
"""

from __future__ import annotations

import configparser
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

DB_FILENAME = "infracheck.db"


def data_dir() -> Path:
    """Directory holding the local store and the optional ``app.ini``."""
    return Path(os.environ.get("INFRACHECK_DATA_DIR", "data"))


def _read_ini(section: str, key: str) -> str | None:
    ini_path = data_dir() / "app.ini"
    if not ini_path.exists():
        return None
    try:
        cp = configparser.ConfigParser()
        cp.read(ini_path, encoding="utf-8")
        value = cp.get(section, key, fallback=None)
    except configparser.Error as exc:
        logger.warning("Ignoring unreadable %s: %s", ini_path, exc)
        return None
    return value.strip() if value else None


def dev_mode() -> bool:
    raw = os.environ.get("INFRACHECK_DEV")
    if raw is None:
        raw = _read_ini("app", "dev") or "0"
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def export_dir() -> Path:
    """Where exported reports are written."""
    raw = os.environ.get("INFRACHECK_EXPORT_DIR") or _read_ini("export", "dir")
    if raw:
        return Path(raw)
    return data_dir() / "exports"


def db_path() -> Path:
    return data_dir() / DB_FILENAME


__all__ = ["data_dir", "dev_mode", "export_dir", "db_path", "DB_FILENAME"]
