"""Shared dataclasses describing a suggestion binding and its results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Sequence

SelectCallback = Callable[[str | None, str], None]

LABEL_SEPARATOR = " | "


@dataclass(frozen=True, slots=True)
class SuggestionBinding:
    """Table and columns a suggestor searches; fixed once constructed."""

    table: str
    search_columns: tuple[str, ...]
    id_column: str
    icon: object | None = None

    def __post_init__(self) -> None:
        if not self.search_columns:
            raise ValueError("At least one search column is required.")

    @classmethod
    def create(
        cls,
        table: str,
        search_columns: Sequence[str],
        id_column: str,
        icon: object | None = None,
    ) -> SuggestionBinding:
        return cls(table=table, search_columns=tuple(search_columns), id_column=id_column, icon=icon)


@dataclass(frozen=True, slots=True)
class SuggestionRow:
    """One entry shown in the popup."""

    id: str | None
    label: str

    @classmethod
    def from_values(cls, row_id: object, values: Sequence[object]) -> SuggestionRow:
        label = LABEL_SEPARATOR.join("" if value is None else str(value) for value in values)
        return cls(id=None if row_id is None else str(row_id), label=label)


@dataclass(frozen=True, slots=True)
class SuggestionFont:
    """Text style applied to suggestion entries."""

    text_style: str = "none"
    color: str | None = None


@dataclass(frozen=True, slots=True)
class PopupSettings:
    """Presentation settings read each time the popup is shown."""

    width: int = 36
    height: int = 8
    font: SuggestionFont = field(default_factory=SuggestionFont)


__all__ = [
    "LABEL_SEPARATOR",
    "PopupSettings",
    "SelectCallback",
    "SuggestionBinding",
    "SuggestionFont",
    "SuggestionRow",
]
