"""Suggestion query construction and execution."""

from __future__ import annotations

import logging
import sys
from typing import Any, Iterable, Protocol, Sequence

import asyncpg

from .models import SuggestionBinding, SuggestionRow

LOG = logging.getLogger(__name__)

SUGGESTION_LIMIT = 10

_PLACEHOLDERS: dict[str, str] = {
    "qmark": "?",
    "format": "%s",
    "pyformat": "%s",
    "numeric": ":{index}",
    "dollar": "${index}",
}


class SuggestionQueryError(RuntimeError):
    """Raised when a suggestion query fails to execute."""


class SuggestionFetcher(Protocol):
    """Interface implemented by suggestion fetchers.

    Implementations should raise ``SuggestionQueryError`` for driver failures;
    the widget treats any exception from ``fetch`` as an empty result.
    """

    async def fetch(self, term: str) -> list[SuggestionRow]: ...


def build_search_query(
    binding: SuggestionBinding,
    term: str,
    *,
    paramstyle: str = "qmark",
) -> tuple[str, tuple[str, ...]]:
    """Return the search statement and its bound values.

    Table and column names come from trusted configuration and are written
    into the statement as-is; the search term is only ever a bound value.
    """

    try:
        placeholder = _PLACEHOLDERS[paramstyle]
    except KeyError:
        raise ValueError(f"Unsupported paramstyle: {paramstyle}") from None
    conditions = [
        f"{column} LIKE {placeholder.format(index=index)}"
        for index, column in enumerate(binding.search_columns, start=1)
    ]
    columns = ", ".join((binding.id_column, *binding.search_columns))
    sql = (
        f"SELECT {columns} FROM {binding.table}"
        f" WHERE {' OR '.join(conditions)}"
        f" LIMIT {SUGGESTION_LIMIT}"
    )
    pattern = f"%{term}%"
    return sql, tuple(pattern for _ in binding.search_columns)


def rows_to_suggestions(
    records: Iterable[Sequence[Any]],
    *,
    limit: int = SUGGESTION_LIMIT,
) -> list[SuggestionRow]:
    """Convert positional ``(id, col1, ..., colN)`` rows into suggestions."""

    suggestions: list[SuggestionRow] = []
    for record in records:
        if len(suggestions) >= limit:
            break
        values = tuple(record)
        if not values:
            continue
        suggestions.append(SuggestionRow.from_values(values[0], values[1:]))
    return suggestions


class DbApiSuggestionFetcher:
    """Runs the search on a PEP 249 connection owned by the caller.

    The query executes synchronously and blocks the event loop until the
    driver returns.
    """

    def __init__(self, connection: Any, binding: SuggestionBinding, *, paramstyle: str = "qmark") -> None:
        if paramstyle not in _PLACEHOLDERS:
            raise ValueError(f"Unsupported paramstyle: {paramstyle}")
        self._connection = connection
        self._binding = binding
        self._paramstyle = paramstyle

    @property
    def paramstyle(self) -> str:
        return self._paramstyle

    async def fetch(self, term: str) -> list[SuggestionRow]:
        sql, params = build_search_query(self._binding, term, paramstyle=self._paramstyle)
        LOG.debug("Running suggestion query", extra={"sql": sql, "table": self._binding.table})
        try:
            cursor = self._connection.cursor()
            try:
                cursor.execute(sql, params)
                records = cursor.fetchall()
            finally:
                cursor.close()
        except Exception as exc:
            raise SuggestionQueryError(str(exc)) from exc
        return rows_to_suggestions(records)


class AsyncpgSuggestionFetcher:
    """Runs the search on an asyncpg connection owned by the caller."""

    def __init__(self, connection: Any, binding: SuggestionBinding) -> None:
        self._connection = connection
        self._binding = binding

    async def fetch(self, term: str) -> list[SuggestionRow]:
        sql, params = build_search_query(self._binding, term, paramstyle="dollar")
        LOG.debug("Running suggestion query", extra={"sql": sql, "table": self._binding.table})
        try:
            records = await self._connection.fetch(sql, *params)
        except Exception as exc:
            raise SuggestionQueryError(str(exc)) from exc
        return rows_to_suggestions(tuple(record.values()) for record in records)


def fetcher_for(connection: Any, binding: SuggestionBinding) -> SuggestionFetcher:
    """Pick the fetcher matching the connection's driver."""

    if isinstance(connection, asyncpg.Connection):
        return AsyncpgSuggestionFetcher(connection, binding)
    return DbApiSuggestionFetcher(connection, binding, paramstyle=driver_paramstyle(connection))


def driver_paramstyle(connection: Any) -> str:
    """Return the PEP 249 ``paramstyle`` declared by the connection's driver module."""

    package = type(connection).__module__.partition(".")[0]
    driver = sys.modules.get(package)
    paramstyle = getattr(driver, "paramstyle", None)
    return paramstyle if isinstance(paramstyle, str) else "qmark"


__all__ = [
    "AsyncpgSuggestionFetcher",
    "DbApiSuggestionFetcher",
    "SUGGESTION_LIMIT",
    "SuggestionFetcher",
    "SuggestionQueryError",
    "build_search_query",
    "driver_paramstyle",
    "fetcher_for",
    "rows_to_suggestions",
]
