"""Sample data and connection helpers for the demo app."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from .config import AppConfig

SAMPLE_CUSTOMERS: tuple[tuple[int, str, str, str], ...] = (
    (1, "John Carter", "Boston", "john.carter@example.com"),
    (2, "Joanne Reyes", "Austin", "joanne.reyes@example.com"),
    (3, "Anna Kowalski", "Chicago", "anna.k@example.com"),
    (4, "Ben Okafor", "Johannesburg", "ben.okafor@example.com"),
    (5, "Cara Lindqvist", "Stockholm", "cara.l@example.com"),
    (6, "Diego Alvarez", "Madrid", "diego.a@example.com"),
    (7, "Elif Demir", "Istanbul", "elif.d@example.com"),
    (8, "Farah Haddad", "Amman", "farah.h@example.com"),
    (9, "Jonas Berg", "Oslo", "jonas.berg@example.com"),
    (10, "Johanna Weber", "Berlin", "johanna.w@example.com"),
    (11, "Kenji Sato", "Osaka", "kenji.s@example.com"),
    (12, "Lucia Romano", "Rome", "lucia.r@example.com"),
    (13, "Jordan Miles", "Denver", "jordan.m@example.com"),
    (14, "Priya Nair", "Kochi", "priya.n@example.com"),
    (15, "Siobhan O'Brien", "Dublin", "siobhan.obrien@example.com"),
)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS customers (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    city TEXT,
    email TEXT
)
""".strip()


def seed_database(connection: sqlite3.Connection) -> int:
    """Create the ``customers`` table and insert the sample rows."""

    connection.execute(_SCHEMA)
    cursor = connection.executemany(
        "INSERT OR IGNORE INTO customers (id, name, city, email) VALUES (?, ?, ?, ?)",
        SAMPLE_CUSTOMERS,
    )
    connection.commit()
    return cursor.rowcount


def postgres_seed_sql() -> str:
    """Return a psql script that creates ``customers`` and inserts the sample rows.

    psql reads the script from stdin, so values are written as quoted literals.
    """

    values = ",\n".join(
        f"    ({row_id}, {_sql_literal(name)}, {_sql_literal(city)}, {_sql_literal(email)})"
        for row_id, name, city, email in SAMPLE_CUSTOMERS
    )
    return (
        f"{_SCHEMA};\n"
        "INSERT INTO customers (id, name, city, email) VALUES\n"
        f"{values}\n"
        "ON CONFLICT DO NOTHING;\n"
    )


def _sql_literal(value: str | None) -> str:
    if value is None:
        return "NULL"
    return "'" + value.replace("'", "''") + "'"


def open_sqlite(config: AppConfig) -> sqlite3.Connection:
    """Open the configured sqlite file, or a seeded in-memory database."""

    path = config.database.sqlite_path
    if path:
        return sqlite3.connect(Path(path).expanduser())
    connection = sqlite3.connect(":memory:")
    seed_database(connection)
    return connection


__all__ = ["SAMPLE_CUSTOMERS", "open_sqlite", "postgres_seed_sql", "seed_database"]
