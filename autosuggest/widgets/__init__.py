"""Widget library for the Textual UI."""

from __future__ import annotations

from .auto_suggestor import AutoSuggestor
from .selection_status import SelectionStatus

__all__ = ["AutoSuggestor", "SelectionStatus"]
