"""Status strip that mirrors the last committed suggestion."""

from __future__ import annotations

from rich.text import Text
from textual.widgets import Static

from autosuggest.models import SuggestionBinding


class SelectionStatus(Static):
    """Compact status strip rendered above Textual's footer."""

    DEFAULT_CSS = """
    SelectionStatus {
        height: 1;
        padding: 0 1;
        background: $surface-darken-3;
        color: $text;
    }
    """

    def __init__(self, binding: SuggestionBinding, *, backend_label: str = "sqlite") -> None:
        super().__init__("", id="selection-status")
        self._binding = binding
        self._backend_label = backend_label
        self._selected: tuple[str | None, str] | None = None

    def on_mount(self) -> None:
        self._render_status()

    @property
    def selected(self) -> tuple[str | None, str] | None:
        return self._selected

    def set_backend_label(self, label: str) -> None:
        self._backend_label = label
        self._render_status()

    def show_selection(self, row_id: str | None, label: str) -> None:
        self._selected = (row_id, label)
        self._render_status()

    def _render_status(self) -> None:
        binding = self._binding
        parts = [
            f"Backend: {self._backend_label}",
            f"Table: {binding.table}",
            f"Columns: {', '.join(binding.search_columns)}",
        ]
        if self._selected is None:
            parts.append("Selected: —")
        else:
            row_id, label = self._selected
            parts.append(f"Selected: {label} (id {row_id if row_id is not None else '∅'})")
        self.update(Text(" | ".join(parts)))


__all__ = ["SelectionStatus"]
