"""App-level tests for the lookup screen."""

from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from autosuggest.app import AutosuggestApp
from autosuggest.config import AppConfig, BindingConfig
from autosuggest.demo import seed_database
from autosuggest.providers import PopupSizeProvider, SuggestionStyleProvider
from autosuggest.widgets import SelectionStatus


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    config_path = tmp_path / "config.toml"
    monkeypatch.setattr("autosuggest.config.CONFIG_FILE", config_path)
    monkeypatch.setattr("autosuggest.app._load_app_config", lambda: AppConfig(debounce_ms=20))
    return config_path


class _DummyScreen:
    """Minimal stub so providers can reference an app without a running screen stack."""

    def __init__(self, app: AutosuggestApp) -> None:
        self.app = app
        self.focused = None


async def _wait_for_suggestions(pilot, app: AutosuggestApp) -> None:  # type: ignore[no-untyped-def]
    for _ in range(100):
        if app.suggestor is not None and app.suggestor.is_open:
            return
        await pilot.pause(0.02)
    raise AssertionError("suggestions never appeared")


@pytest.mark.anyio
async def test_app_searches_demo_data_and_records_selection() -> None:
    app = AutosuggestApp()

    async with app.run_test() as pilot:
        await pilot.pause()
        assert app.suggestor is not None
        await pilot.press("j", "o")
        await _wait_for_suggestions(pilot, app)

        assert app.suggestor.labels[0] == "John Carter | Boston"
        assert "Ben Okafor | Johannesburg" in app.suggestor.labels

        await pilot.press("down")
        await pilot.pause()
        await pilot.press("enter")
        await pilot.pause()

        assert app.selections == (("1", "John Carter | Boston"),)
        assert app.query_one(SelectionStatus).selected == ("1", "John Carter | Boston")


@pytest.mark.anyio
async def test_app_uses_supplied_connection_without_closing_it() -> None:
    connection = sqlite3.connect(":memory:")
    connection.execute("CREATE TABLE customers (id INTEGER PRIMARY KEY, name TEXT, city TEXT)")
    connection.execute("INSERT INTO customers VALUES (77, 'Zed', 'Zagreb')")
    app = AutosuggestApp(connection=connection)

    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("z")
        await _wait_for_suggestions(pilot, app)

        assert app.suggestor is not None
        assert app.suggestor.labels == ("Zed | Zagreb",)

    assert connection.execute("SELECT COUNT(*) FROM customers").fetchone() == (1,)
    connection.close()


@pytest.mark.anyio
async def test_app_reads_sqlite_file_from_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    db_path = tmp_path / "crm.db"
    seeded = sqlite3.connect(db_path)
    seed_database(seeded)
    seeded.close()
    config = AppConfig(
        debounce_ms=20,
        database={"sqlite_path": str(db_path)},
        binding=BindingConfig(table="customers", search_columns=["email"], id_column="id"),
    )
    monkeypatch.setattr("autosuggest.app._load_app_config", lambda: config)
    app = AutosuggestApp()

    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("k", "e", "n", "j")
        await _wait_for_suggestions(pilot, app)

        assert app.suggestor is not None
        assert app.suggestor.labels == ("kenji.s@example.com",)


@pytest.mark.anyio
async def test_popup_size_provider_persists_choice(isolated_config: Path) -> None:
    app = AutosuggestApp()

    async with app.run_test() as pilot:
        await pilot.pause()
        provider = PopupSizeProvider(_DummyScreen(app))
        hits = [hit async for hit in provider.discover()]
        compact = next(hit for hit in hits if "Compact" in (hit.display or ""))
        await compact.command()

        assert app.suggestor is not None
        assert (app.suggestor.settings.width, app.suggestor.settings.height) == (28, 6)
        assert "width = 28" in isolated_config.read_text()


@pytest.mark.anyio
async def test_suggestion_style_provider_updates_font(isolated_config: Path) -> None:
    app = AutosuggestApp()

    async with app.run_test() as pilot:
        await pilot.pause()
        provider = SuggestionStyleProvider(_DummyScreen(app))
        hits = [hit async for hit in provider.discover()]
        bold = next(hit for hit in hits if "Bold" in (hit.display or ""))
        await bold.command()

        assert app.suggestor is not None
        assert app.suggestor.settings.font.text_style == "bold"
        assert 'text_style = "bold"' in isolated_config.read_text()
