"""
Async database access (raw SQL) using asyncpg.

`Database` owns the connection pool. FastAPI constructs it on startup, keeps
it on `app.state.db` and closes it on shutdown (see `api/main.py`).
Repositories receive it (or a transaction-bound `Gateway`) explicitly.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

# `serial` columns are int4; asyncpg refuses to encode anything wider.
INT4_MIN = -(2**31)
INT4_MAX = 2**31 - 1


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


class Gateway:
    """
    Run parameterized statements against a pool or a single connection.

    Both `asyncpg.Pool` and `asyncpg.Connection` expose fetchrow/fetch/execute,
    so the same gateway works inside and outside a transaction.
    """

    def __init__(self, executor: asyncpg.Pool | asyncpg.Connection | None = None) -> None:
        self._executor = executor

    def _target(self) -> asyncpg.Pool | asyncpg.Connection:
        if self._executor is None:
            raise RuntimeError("Database is not connected. Call connect() on startup.")
        return self._executor

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        row = await self._target().fetchrow(sql, *args)
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        rows = await self._target().fetch(sql, *args)
        return [_record_to_dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> str:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL). Returns the command status, e.g. "DELETE 3".
        """
        return await self._target().execute(sql, *args)


class Database(Gateway):
    """
    Process-wide store client: one pool, explicit connect/close.
    """

    def __init__(
        self,
        dsn: str,
        *,
        min_size: int = 1,
        max_size: int = 5,
        command_timeout: float = 30,
    ) -> None:
        super().__init__(None)
        self.dsn = dsn
        self.min_size = min_size
        self.max_size = max_size
        self.command_timeout = command_timeout

    @classmethod
    def from_env(cls) -> "Database":
        return cls(
            database_url(),
            min_size=_env_int("DB_POOL_MIN_SIZE", 1),
            max_size=_env_int("DB_POOL_MAX_SIZE", 5),
            command_timeout=_env_int("DB_COMMAND_TIMEOUT", 30),
        )

    @property
    def is_connected(self) -> bool:
        return self._executor is not None

    async def connect(self) -> None:
        if self._executor is not None:
            return None
        self._executor = await asyncpg.create_pool(
            dsn=self.dsn,
            min_size=self.min_size,
            max_size=self.max_size,
            command_timeout=self.command_timeout,
        )

    async def close(self) -> None:
        if self._executor is None:
            return None
        pool = self._executor
        self._executor = None
        await pool.close()

    def pool(self) -> asyncpg.Pool:
        return self._target()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[Gateway]:
        """
        Yield a gateway bound to one connection inside a transaction.

        Commits when the block exits normally; rolls back and re-raises otherwise.
        """
        async with self.pool().acquire() as conn:  # type: asyncpg.Connection
            async with conn.transaction():
                yield Gateway(conn)
