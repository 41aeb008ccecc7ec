"""Debounced database autocomplete popup for Textual inputs."""

from __future__ import annotations

from .debounce import Debouncer
from .models import PopupSettings, SuggestionBinding, SuggestionFont, SuggestionRow
from .query import (
    AsyncpgSuggestionFetcher,
    DbApiSuggestionFetcher,
    SuggestionFetcher,
    SuggestionQueryError,
    build_search_query,
)
from .widgets import AutoSuggestor

__all__ = [
    "AsyncpgSuggestionFetcher",
    "AutoSuggestor",
    "DbApiSuggestionFetcher",
    "Debouncer",
    "PopupSettings",
    "SuggestionBinding",
    "SuggestionFetcher",
    "SuggestionFont",
    "SuggestionQueryError",
    "SuggestionRow",
    "build_search_query",
]
