"""Debounced database autocomplete popup bound to a text input."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Sequence

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.geometry import Offset
from textual.message import Message
from textual.widgets import Input, OptionList
from textual.widgets.option_list import Option

from autosuggest.debounce import DEFAULT_DELAY, Debouncer
from autosuggest.models import (
    PopupSettings,
    SelectCallback,
    SuggestionBinding,
    SuggestionFont,
    SuggestionRow,
)
from autosuggest.query import SuggestionFetcher, fetcher_for

LOG = logging.getLogger(__name__)


class AutoSuggestor(Container):
    """Suggestion popup that searches a table as the bound input changes.

    The widget floats on the screen overlay, anchored to the bottom-left of
    ``target``. It listens to the target's message stream, so it has to be
    mounted on the same screen as the input. The connection is borrowed:
    the widget never opens or closes it.
    """

    DEFAULT_CSS = """
    AutoSuggestor {
        overlay: screen;
        display: none;
        width: 36;
        height: 8;
        background: $surface;
    }

    AutoSuggestor > OptionList {
        width: 1fr;
        height: 1fr;
        border: round $primary 40%;
        padding: 0;
    }

    AutoSuggestor > OptionList:focus {
        border: round $primary;
    }
    """

    BINDINGS = [
        Binding("escape", "dismiss", "Close suggestions", show=False),
    ]

    class Selected(Message):
        """Posted after a suggestion is written into the bound input."""

        def __init__(self, suggestor: AutoSuggestor, row_id: str | None, label: str) -> None:
            super().__init__()
            self.suggestor = suggestor
            self.row_id = row_id
            self.label = label

        @property
        def control(self) -> AutoSuggestor:
            return self.suggestor

    def __init__(
        self,
        target: Input,
        connection: Any,
        table: str,
        search_columns: Sequence[str],
        id_column: str,
        icon: object | None = None,
        on_select: SelectCallback | None = None,
        *,
        fetcher: SuggestionFetcher | None = None,
        debounce_delay: float = DEFAULT_DELAY,
        settings: PopupSettings | None = None,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self._target = target
        self._connection = connection
        self._binding = SuggestionBinding.create(table, search_columns, id_column, icon)
        self._on_select = on_select
        self._fetcher = fetcher or fetcher_for(connection, self._binding)
        self._debouncer = Debouncer(debounce_delay)
        self._settings = settings or PopupSettings()
        self._option_list = OptionList()
        self._rows: tuple[SuggestionRow, ...] = ()
        self._label_ids: dict[str, str | None] = {}
        self._committed_value: str | None = None
        self._generation = 0
        self._subscribed = False

    def compose(self) -> ComposeResult:
        yield self._option_list

    def on_mount(self) -> None:
        self._target.message_signal.subscribe(self, self._handle_target_message)
        self._subscribed = True

    def on_unmount(self) -> None:
        self.detach()

    @property
    def target(self) -> Input:
        return self._target

    @property
    def binding(self) -> SuggestionBinding:
        return self._binding

    @property
    def settings(self) -> PopupSettings:
        return self._settings

    @property
    def debouncer(self) -> Debouncer:
        return self._debouncer

    @property
    def option_list(self) -> OptionList:
        return self._option_list

    @property
    def is_open(self) -> bool:
        """True while the popup is displayed."""

        return bool(self.display)

    @property
    def labels(self) -> tuple[str, ...]:
        """Labels currently listed, in query order."""

        return tuple(row.label for row in self._rows)

    @property
    def label_ids(self) -> dict[str, str | None]:
        """Copy of the label to id mapping captured by the last query."""

        return dict(self._label_ids)

    def set_suggestion_font(self, font: SuggestionFont | str) -> None:
        """Set the style used for suggestions; applied the next time the popup shows."""

        if isinstance(font, str):
            font = SuggestionFont(text_style=font)
        self._settings = replace(self._settings, font=font)

    def set_popup_size(self, width: int, height: int) -> None:
        """Set the popup size in cells; applied the next time the popup shows."""

        self._settings = replace(self._settings, width=width, height=height)

    def detach(self) -> None:
        """Stop listening to the bound input and hide the popup."""

        self._debouncer.cancel()
        if self._subscribed:
            self._target.message_signal.unsubscribe(self)
            self._subscribed = False
        self._hide()

    async def refresh_suggestions(self) -> None:
        """Query for the current input text and update the popup.

        Any fetch error hides the popup. A result is dropped when the input
        changed or a suggestion was committed while the query was running.
        """

        if not self.is_attached:
            return
        term = self._target.value.strip()
        if not term:
            self._hide()
            return
        generation = self._generation
        try:
            rows = await self._fetcher.fetch(term)
        except Exception:
            LOG.exception(
                "Suggestion query failed",
                extra={"table": self._binding.table},
            )
            rows = []
        if not self.is_attached or generation != self._generation:
            return
        self._present(rows)

    def action_dismiss(self) -> None:
        self._hide()
        self._target.focus()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        index = event.option_index
        if 0 <= index < len(self._rows):
            self._commit(self._rows[index].label)

    def _handle_target_message(self, message: Message) -> None:
        if isinstance(message, Input.Changed):
            if message.input is self._target:
                self._handle_text_changed(message.value)
        elif isinstance(message, events.Key):
            if message.key == "down" and self.display:
                self._option_list.focus()

    def _handle_text_changed(self, value: str) -> None:
        self._generation += 1
        committed = self._committed_value
        self._committed_value = None
        if committed is not None and value == committed:
            return
        self._debouncer.submit(self.refresh_suggestions)

    def _present(self, rows: Sequence[SuggestionRow]) -> None:
        label_ids: dict[str, str | None] = {}
        for row in rows:
            label_ids[row.label] = row.id
        self._rows = tuple(rows)
        self._label_ids = label_ids
        if not rows:
            self._hide()
            return
        option_list = self._option_list
        option_list.clear_options()
        option_list.add_options([Option(Text(row.label)) for row in rows])
        option_list.highlighted = 0
        self._apply_settings()
        region = self._target.region
        self.absolute_offset = Offset(region.x, region.bottom)
        self.display = True
        self.refresh(layout=True)

    def _apply_settings(self) -> None:
        settings = self._settings
        self.styles.width = settings.width
        self.styles.height = settings.height
        self._option_list.styles.text_style = settings.font.text_style
        self._option_list.styles.color = settings.font.color

    def _commit(self, label: str) -> None:
        self._debouncer.cancel()
        self._generation += 1
        row_id = self._label_ids.get(label)
        if self._target.value != label:
            self._committed_value = label
            self._target.value = label
        self._target.cursor_position = len(label)
        if self._on_select is not None:
            self._on_select(row_id, label)
        self.post_message(self.Selected(self, row_id, label))
        self._hide()
        self._target.focus()

    def _hide(self) -> None:
        self.display = False


__all__ = ["AutoSuggestor"]
