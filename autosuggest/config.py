"""App configuration loading helpers."""

from __future__ import annotations

from pathlib import Path

import tomllib

from pydantic import BaseModel, Field

from .models import PopupSettings, SuggestionBinding, SuggestionFont

CONFIG_FILE = Path.home() / ".config" / "autosuggest" / "config.toml"


class DatabaseConfig(BaseModel):
    """Where the demo app gets its connection from."""

    sqlite_path: str | None = None
    dsn: str | None = None


class BindingConfig(BaseModel):
    """Table/columns searched by the suggestor."""

    table: str = "customers"
    search_columns: list[str] = Field(default_factory=lambda: ["name", "city"])
    id_column: str = "id"

    def to_binding(self) -> SuggestionBinding:
        return SuggestionBinding.create(self.table, self.search_columns, self.id_column)


class PopupConfig(BaseModel):
    """Initial popup presentation settings."""

    width: int = 36
    height: int = 8
    text_style: str = "none"
    color: str | None = None

    def to_settings(self) -> PopupSettings:
        return PopupSettings(
            width=self.width,
            height=self.height,
            font=SuggestionFont(text_style=self.text_style, color=self.color),
        )


class AppConfig(BaseModel):
    """Shape of the application configuration file."""

    theme: str = "textual-dark"
    debounce_ms: int = 300
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    binding: BindingConfig = Field(default_factory=BindingConfig)
    popup: PopupConfig = Field(default_factory=PopupConfig)

    @property
    def debounce_delay(self) -> float:
        return max(self.debounce_ms, 0) / 1000

    def with_popup(self, **updates: object) -> AppConfig:
        """Return a copy with popup settings changes applied."""

        popup = self.popup.model_copy(update=updates)
        return self.model_copy(update={"popup": popup})


def load_config() -> AppConfig:
    """Load configuration from disk; fall back to defaults if missing."""

    try:
        data = _read_config_file()
    except FileNotFoundError:
        return AppConfig()
    except (tomllib.TOMLDecodeError, OSError):
        return AppConfig()

    return AppConfig(
        theme=data.get("theme", AppConfig.model_fields["theme"].default),
        debounce_ms=data.get("debounce_ms", AppConfig.model_fields["debounce_ms"].default),
        database=data.get("database", DatabaseConfig()),
        binding=data.get("binding", BindingConfig()),
        popup=data.get("popup", PopupConfig()),
    )


def save_config(config: AppConfig) -> None:
    """Persist configuration to disk."""

    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    lines: list[str] = [
        f'theme = "{config.theme}"',
        f"debounce_ms = {config.debounce_ms}",
    ]
    database = config.database
    if database.sqlite_path or database.dsn:
        lines.append("")
        lines.append("[database]")
        if database.sqlite_path:
            lines.append(f'sqlite_path = "{database.sqlite_path}"')
        if database.dsn:
            lines.append(f'dsn = "{database.dsn}"')
    binding = config.binding
    lines.append("")
    lines.append("[binding]")
    lines.append(f'table = "{binding.table}"')
    columns = ", ".join(f'"{column}"' for column in binding.search_columns)
    lines.append(f"search_columns = [{columns}]")
    lines.append(f'id_column = "{binding.id_column}"')
    popup = config.popup
    lines.append("")
    lines.append("[popup]")
    lines.append(f"width = {popup.width}")
    lines.append(f"height = {popup.height}")
    lines.append(f'text_style = "{popup.text_style}"')
    if popup.color:
        lines.append(f'color = "{popup.color}"')
    CONFIG_FILE.write_text("\n".join(lines) + "\n")


def _read_config_file() -> dict[str, object]:
    with CONFIG_FILE.open("rb") as handle:
        raw = tomllib.load(handle)
    data: dict[str, object] = {}
    if not isinstance(raw, dict):
        return data
    theme = raw.get("theme")
    if isinstance(theme, str):
        data["theme"] = theme
    debounce_ms = raw.get("debounce_ms")
    if isinstance(debounce_ms, int) and not isinstance(debounce_ms, bool):
        data["debounce_ms"] = debounce_ms
    database = raw.get("database")
    if isinstance(database, dict):
        parsed_db: dict[str, object] = {}
        for key in ("sqlite_path", "dsn"):
            value = database.get(key)
            if isinstance(value, str) and value:
                parsed_db[key] = value
        data["database"] = DatabaseConfig(**parsed_db)
    binding = raw.get("binding")
    if isinstance(binding, dict):
        parsed_binding: dict[str, object] = {}
        for key in ("table", "id_column"):
            value = binding.get(key)
            if isinstance(value, str) and value:
                parsed_binding[key] = value
        columns = binding.get("search_columns")
        if isinstance(columns, list):
            names = [str(column) for column in columns if str(column)]
            if names:
                parsed_binding["search_columns"] = names
        data["binding"] = BindingConfig(**parsed_binding)
    popup = raw.get("popup")
    if isinstance(popup, dict):
        parsed_popup: dict[str, object] = {}
        for key in ("width", "height"):
            value = popup.get(key)
            if isinstance(value, int) and not isinstance(value, bool) and value > 0:
                parsed_popup[key] = value
        for key in ("text_style", "color"):
            value = popup.get(key)
            if isinstance(value, str) and value:
                parsed_popup[key] = value
        data["popup"] = PopupConfig(**parsed_popup)
    return data


__all__ = [
    "AppConfig",
    "BindingConfig",
    "CONFIG_FILE",
    "DatabaseConfig",
    "PopupConfig",
    "load_config",
    "save_config",
]
