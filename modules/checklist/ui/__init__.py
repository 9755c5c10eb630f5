"""Qt user interface for the checklist module."""

from .checklist_window import ChecklistWindow

__all__ = ["ChecklistWindow"]
