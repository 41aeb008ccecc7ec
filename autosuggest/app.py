"""Textual application entry point for autosuggest."""

from __future__ import annotations

import logging
import sqlite3
from typing import Any

import asyncpg
from textual.app import App, ComposeResult
from textual.containers import Vertical
from textual.widgets import Footer, Header, Input, Static

from .config import AppConfig, load_config, save_config
from .demo import open_sqlite
from .providers import PopupSizeProvider, SuggestionStyleProvider
from .widgets import AutoSuggestor, SelectionStatus

LOG = logging.getLogger(__name__)


def _load_app_config() -> AppConfig:
    """Load configuration with a small wrapper for future overrides."""

    return load_config()


class AutosuggestApp(App[None]):
    """Lookup screen wiring an input to a database-backed suggestor."""

    TITLE = "autosuggest"
    COMMANDS = App.COMMANDS | {PopupSizeProvider, SuggestionStyleProvider}
    CSS = """
    Screen {
        layout: vertical;
    }
    #main-column {
        layout: vertical;
        padding: 1 2;
        height: 1fr;
    }
    #main-column .panel-title {
        text-style: bold;
        margin-bottom: 1;
    }
    #lookup-input {
        width: 60;
        border: heavy $primary;
    }
    #lookup-hint {
        color: $text-muted;
        margin-top: 1;
    }
    """

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+p", "command_palette", "Command Palette"),
    ]

    def __init__(self, *, connection: Any | None = None) -> None:
        super().__init__()
        self._config = _load_app_config()
        self._binding = self._config.binding.to_binding()
        self._connection = connection
        self._owns_connection = connection is None
        self._suggestor: AutoSuggestor | None = None
        self._selections: list[tuple[str | None, str]] = []

    def compose(self) -> ComposeResult:
        """Compose the root layout."""

        yield Header()
        yield Vertical(
            Static(f"Search {self._binding.table}", classes="panel-title"),
            Input(placeholder=f"Type to search {', '.join(self._binding.search_columns)}", id="lookup-input"),
            Static("↓ moves into the suggestions, Enter or click picks one.", id="lookup-hint"),
            id="main-column",
        )
        yield SelectionStatus(self._binding, backend_label=self._backend_label())
        yield Footer()

    async def on_mount(self) -> None:
        if self._config.theme in self.available_themes:
            self.theme = self._config.theme
        if self._connection is None:
            self._connection = await self._open_connection()
        self.query_one(SelectionStatus).set_backend_label(self._backend_label())
        field = self.query_one("#lookup-input", Input)
        binding = self._binding
        suggestor = AutoSuggestor(
            field,
            self._connection,
            binding.table,
            binding.search_columns,
            binding.id_column,
            on_select=self._record_selection,
            debounce_delay=self._config.debounce_delay,
            settings=self._config.popup.to_settings(),
            id="suggestions",
        )
        await self.mount(suggestor)
        self._suggestor = suggestor
        field.focus()

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def suggestor(self) -> AutoSuggestor | None:
        """Expose the mounted suggestor for tests and providers."""

        return self._suggestor

    @property
    def selections(self) -> tuple[tuple[str | None, str], ...]:
        """Selections reported through the suggestor callback."""

        return tuple(self._selections)

    def apply_popup_size(self, width: int, height: int) -> None:
        """Resize the popup and persist the choice."""

        if self._suggestor is None:
            return
        self._suggestor.set_popup_size(width, height)
        self._config = self._config.with_popup(width=width, height=height)
        save_config(self._config)
        self.notify(f"Popup size set to {width}x{height}.", severity="information")

    def apply_suggestion_style(self, text_style: str) -> None:
        """Restyle suggestions and persist the choice."""

        if self._suggestor is None:
            return
        font = self._config.popup.model_copy(update={"text_style": text_style}).to_settings().font
        self._suggestor.set_suggestion_font(font)
        self._config = self._config.with_popup(text_style=text_style)
        save_config(self._config)
        self.notify(f"Suggestion style set to {text_style}.", severity="information")

    def on_auto_suggestor_selected(self, message: AutoSuggestor.Selected) -> None:
        self.query_one(SelectionStatus).show_selection(message.row_id, message.label)

    def _record_selection(self, row_id: str | None, label: str) -> None:
        LOG.info("Suggestion selected", extra={"row_id": row_id, "label": label})
        self._selections.append((row_id, label))

    def _backend_label(self) -> str:
        if isinstance(self._connection, asyncpg.Connection):
            return "postgres"
        if self._config.database.sqlite_path:
            return f"sqlite ({self._config.database.sqlite_path})"
        return "sqlite (demo)"

    async def _open_connection(self) -> Any:
        dsn = self._config.database.dsn
        if dsn:
            try:
                return await asyncpg.connect(dsn=dsn)
            except (OSError, asyncpg.PostgresError) as exc:
                LOG.exception("Failed to connect to PostgreSQL", extra={"dsn": dsn})
                self.notify(
                    f"PostgreSQL unavailable, using demo data ({str(exc).splitlines()[0][:120]}).",
                    severity="warning",
                )
        return open_sqlite(self._config)

    async def _close_connection(self) -> None:
        connection = self._connection
        self._connection = None
        if connection is None or not self._owns_connection:
            return
        try:
            if isinstance(connection, asyncpg.Connection):
                await connection.close()
            elif isinstance(connection, sqlite3.Connection):
                connection.close()
        except Exception:
            LOG.exception("Failed to close connection")

    async def _shutdown(self) -> None:
        await self._close_connection()
        await super()._shutdown()


def main() -> None:
    """Invoke the Textual application."""

    AutosuggestApp().run()


if __name__ == "__main__":
    main()
