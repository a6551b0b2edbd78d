"""Lightweight database helpers for the search history table."""
from __future__ import annotations

import os
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, List, Optional, Tuple
from urllib.parse import unquote, urlparse

try:  # Optional import for MySQL support
    import pymysql
    from pymysql.cursors import DictCursor
except ImportError:  # pragma: no cover - pymysql is optional
    pymysql = None  # type: ignore
    DictCursor = None  # type: ignore

from forecast.core.abstractions import SearchRecord


TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"

# Driver exceptions that mean "the store failed", as opposed to programming errors.
DATABASE_ERRORS: Tuple[type, ...] = (sqlite3.Error,)
if pymysql is not None:
    DATABASE_ERRORS += (pymysql.MySQLError,)


class DatabaseSession:
    """Minimal DB-API session wrapper with context aware placeholders."""

    def __init__(self, connection, placeholder: str):
        self.connection = connection
        self.placeholder = placeholder

    # -- DB-API compatibility -------------------------------------------------
    def _prepare_sql(self, sql: str) -> str:
        if self.placeholder == "?":
            return sql
        return sql.replace("?", self.placeholder)

    def execute(self, sql: str, params: tuple = ()):
        cursor = self.connection.cursor()
        cursor.execute(self._prepare_sql(sql), params)
        return cursor

    def fetchall(self, sql: str, params: tuple = ()):
        cursor = self.execute(sql, params)
        rows = cursor.fetchall()
        cursor.close()
        return rows

    def commit(self) -> None:
        self.connection.commit()

    def rollback(self) -> None:
        self.connection.rollback()

    def close(self) -> None:
        self.connection.close()


class SessionFactory:
    def __init__(self, url: str, placeholder: str, driver: str):
        self.url = url
        self.placeholder = placeholder
        self.driver = driver

    @classmethod
    def from_url(cls, url: str) -> "SessionFactory":
        driver, placeholder = detect_driver(url)
        return cls(url, placeholder, driver)

    def __call__(self) -> DatabaseSession:
        connection = create_connection(self.url, self.driver)
        return DatabaseSession(connection, self.placeholder)


# ---------------------------------------------------------------------------

def default_database_url() -> str:
    return os.getenv("DATABASE_URL", "sqlite:///weather.db")


def detect_driver(url: str) -> tuple[str, str]:
    parsed = urlparse(url)
    if parsed.scheme.startswith("mysql"):
        if pymysql is None:
            raise RuntimeError("PyMySQL is required for MySQL connections")
        return "mysql", "%s"
    if parsed.scheme.startswith("sqlite") or parsed.scheme == "":
        return "sqlite", "?"
    raise ValueError(f"Unsupported database scheme: {parsed.scheme}")


def sqlite_path(url: str) -> str:
    """Return the file path of a ``sqlite:///relative`` or ``sqlite:////absolute`` URL."""
    parsed = urlparse(url)
    path = unquote(parsed.netloc + parsed.path)
    if parsed.scheme and path.startswith("/"):
        path = path[1:]
    if not path:
        raise ValueError(f"SQLite URL {url!r} does not name a database file")
    return os.path.abspath(path)


def check_database_url(url: str) -> None:
    """Raise ``ValueError`` when ``url`` cannot name a usable database."""
    driver, _ = detect_driver(url)
    if driver == "sqlite":
        sqlite_path(url)


def create_connection(url: str, driver: str):
    if driver == "sqlite":
        connection = sqlite3.connect(sqlite_path(url))
        connection.row_factory = sqlite3.Row
        return connection

    if driver == "mysql":
        assert pymysql is not None and DictCursor is not None
        parsed = urlparse(url)
        params = {
            "host": parsed.hostname or "localhost",
            "user": unquote(parsed.username) if parsed.username else None,
            "password": unquote(parsed.password) if parsed.password else None,
            "database": parsed.path.lstrip("/") or None,
            "port": parsed.port or 3306,
            "cursorclass": DictCursor,
            "autocommit": False,
        }
        return pymysql.connect(**params)

    raise ValueError(f"Unsupported driver: {driver}")


@contextmanager
def session_scope(session_factory: SessionFactory):
    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


# ---------------------------------------------------------------------------

_SQLITE_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS cities (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name VARCHAR(255) NOT NULL,
        lat FLOAT NOT NULL,
        `long` FLOAT NOT NULL,
        created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS idx_cities_name
    ON cities (name)
    """,
)

_MYSQL_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS cities (
        id INTEGER NOT NULL AUTO_INCREMENT PRIMARY KEY,
        name VARCHAR(255) NOT NULL,
        lat DOUBLE NOT NULL,
        `long` DOUBLE NOT NULL,
        created_at DATETIME(6) NOT NULL DEFAULT CURRENT_TIMESTAMP(6),
        INDEX idx_cities_name (name)
    )
    """,
)


def run_migrations(session_factory: SessionFactory) -> None:
    """Create the ``cities`` table and its name index if they are missing."""
    statements = _MYSQL_SCHEMA if session_factory.driver == "mysql" else _SQLITE_SCHEMA
    with session_scope(session_factory) as session:
        for statement in statements:
            session.execute(statement).close()


# ---------------------------------------------------------------------------

def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def parse_timestamp(value: Any) -> datetime:
    if not isinstance(value, datetime):
        value = datetime.fromisoformat(str(value))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _search_from_row(row) -> SearchRecord:
    return SearchRecord(
        id=int(row["id"]),
        name=row["name"],
        latitude=float(row["lat"]),
        longitude=float(row["long"]),
        created_at=parse_timestamp(row["created_at"]),
    )


def insert_search(
    session: DatabaseSession,
    *,
    name: str,
    latitude: float,
    longitude: float,
    created_at: Optional[datetime] = None,
) -> SearchRecord:
    created_at = created_at or utcnow()
    stamp = format_timestamp(created_at)
    cursor = session.execute(
        "INSERT INTO cities (name, lat, `long`, created_at) VALUES (?, ?, ?, ?)",
        (name, latitude, longitude, stamp),
    )
    search_id = cursor.lastrowid
    cursor.close()
    return SearchRecord(
        id=int(search_id),
        name=name,
        latitude=latitude,
        longitude=longitude,
        created_at=parse_timestamp(stamp),
    )


def fetch_recent_searches(session: DatabaseSession, limit: int) -> List[SearchRecord]:
    rows = session.fetchall(
        "SELECT id, name, lat, `long`, created_at FROM cities "
        "ORDER BY created_at DESC, id DESC LIMIT ?",
        (limit,),
    )
    return [_search_from_row(row) for row in rows]
