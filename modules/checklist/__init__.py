"""Site-visit checklist module entry point."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from utils.kvstore import KeyValueStore

__all__ = ["create_window"]


def create_window(store: KeyValueStore, export_dir: Optional[Path] = None):
    """Build the checklist window with its repository and location index over ``store``."""
    from .locations import LocationIndex
    from .repository import ChecklistRepository
    from .ui.checklist_window import ChecklistWindow

    return ChecklistWindow(
        ChecklistRepository(store),
        LocationIndex(store),
        export_dir=export_dir,
    )
