"""
Async database access helpers (raw SQL) using asyncpg.

`Database` owns one connection pool. FastAPI creates it on startup, keeps it
on `app.state.db` and closes it on shutdown (see `api/main.py`). Routes get it
through `core.dependencies.get_db`; nothing reaches for a global pool.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import asyncio
import os
from typing import Any, Iterable
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg


class StoreUnavailableError(RuntimeError):
    """
    The database cannot be reached at all (refused, dropped, pool closed).

    This is the only storage failure that is surfaced to API callers
    (as HTTP 503). Query-level errors stay ordinary asyncpg exceptions.
    """


# Errors that mean "no usable connection", as opposed to a bad query.
_CONNECTIVITY_ERRORS: tuple[type[BaseException], ...] = (
    OSError,
    asyncpg.exceptions.CannotConnectNowError,
    asyncpg.exceptions.ConnectionDoesNotExistError,
    asyncpg.exceptions.ConnectionFailureError,
)

# Opening the pool can also time out; a query timeout stays a query error.
_CONNECT_ERRORS: tuple[type[BaseException], ...] = _CONNECTIVITY_ERRORS + (asyncio.TimeoutError,)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


def pool_min_size() -> int:
    return max(1, _env_int("DB_POOL_MIN_SIZE", 1))


def pool_max_size() -> int:
    return max(pool_min_size(), _env_int("DB_POOL_MAX_SIZE", 10))


def command_timeout_s() -> int:
    return _env_int("DB_COMMAND_TIMEOUT_S", 30)


def quote_ident(name: str) -> str:
    """
    Quote an identifier for PostgreSQL.

    Needed for the camelCase columns (e.g. "authorId"), which Postgres would
    otherwise fold to lower case.
    """
    return '"' + str(name).replace('"', '""') + '"'


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


class Database:
    """
    Thin handle around an asyncpg pool.

    The pool caps concurrent connections at `max_size`; extra acquisitions
    wait for a free connection instead of failing.
    """

    def __init__(self, pool: asyncpg.Pool) -> None:
        self._pool = pool

    @classmethod
    async def connect(
        cls,
        dsn: str | None = None,
        *,
        min_size: int | None = None,
        max_size: int | None = None,
    ) -> "Database":
        try:
            pool = await asyncpg.create_pool(
                dsn=dsn or database_url(),
                min_size=min_size or pool_min_size(),
                max_size=max_size or pool_max_size(),
                command_timeout=command_timeout_s(),
            )
        except _CONNECT_ERRORS as exc:
            raise StoreUnavailableError(str(exc) or exc.__class__.__name__) from exc
        return cls(pool)

    async def close(self) -> None:
        await self._pool.close()

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        try:
            row = await self._pool.fetchrow(sql, *args)
        except asyncio.TimeoutError:
            raise
        except _CONNECTIVITY_ERRORS as exc:
            raise StoreUnavailableError(str(exc) or exc.__class__.__name__) from exc
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        try:
            rows = await self._pool.fetch(sql, *args)
        except asyncio.TimeoutError:
            raise
        except _CONNECTIVITY_ERRORS as exc:
            raise StoreUnavailableError(str(exc) or exc.__class__.__name__) from exc
        return [_record_to_dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> None:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL). No result returned.
        """
        try:
            await self._pool.execute(sql, *args)
        except asyncio.TimeoutError:
            raise
        except _CONNECTIVITY_ERRORS as exc:
            raise StoreUnavailableError(str(exc) or exc.__class__.__name__) from exc


def placeholders(count: int, *, start: int = 1) -> str:
    return ", ".join(f"${i}" for i in range(start, start + count))


def column_list(columns: Iterable[str]) -> str:
    return ", ".join(quote_ident(c) for c in columns)


async def sync_id_sequence(db: Database, table: str) -> None:
    """
    Move the table's id sequence past MAX(id).

    Rows inserted with explicit ids do not advance identity sequences.
    """
    await db.execute(
        f"SELECT setval(pg_get_serial_sequence($1, 'id'), "
        f"GREATEST((SELECT COALESCE(MAX(id), 0) FROM {quote_ident(table)}), 1))",
        table,
    )
