"""Connection handling for the SQLite snapshot store."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiosqlite

MEMORY_DATABASE = ":memory:"


class AsyncConnectionManager:
    """Manages aiosqlite connections for one database.

    Applies the schema once, on first use. File databases get a fresh
    connection per operation and run in WAL mode. A ``:memory:`` database only
    lives as long as its connection, so one persistent connection is kept
    until ``close``.
    """

    def __init__(self, db_path: str, schema: str) -> None:
        self._db_path = db_path
        self._schema = schema
        self._initialized = False
        self._init_lock: asyncio.Lock | None = None
        self._persistent_conn: aiosqlite.Connection | None = None

    @property
    def is_memory(self) -> bool:
        return self._db_path == MEMORY_DATABASE

    def _get_lock(self) -> asyncio.Lock:
        # Created lazily so the lock binds to the running event loop.
        if self._init_lock is None:
            self._init_lock = asyncio.Lock()
        return self._init_lock

    async def _ensure_initialized(self) -> None:
        if self._initialized:
            return
        async with self._get_lock():
            if self._initialized:
                return
            if self.is_memory:
                self._persistent_conn = await aiosqlite.connect(MEMORY_DATABASE)
                await self._persistent_conn.executescript(self._schema)
            else:
                async with aiosqlite.connect(self._db_path) as db:
                    await db.execute("PRAGMA journal_mode=WAL")
                    await db.executescript(self._schema)
            self._initialized = True

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[aiosqlite.Connection]:
        """Yield a connection, closing it afterwards unless it is persistent."""
        await self._ensure_initialized()
        if self.is_memory:
            if self._persistent_conn is None:
                raise RuntimeError("memory database connection not initialized")
            yield self._persistent_conn
            return
        db = await aiosqlite.connect(self._db_path)
        try:
            yield db
        finally:
            await db.close()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """Yield a connection and commit on success, roll back on error."""
        async with self.connection() as db:
            try:
                yield db
            except BaseException:
                await db.rollback()
                raise
            await db.commit()

    async def close(self) -> None:
        """Close the persistent connection of a ``:memory:`` database."""
        if self._persistent_conn is not None:
            await self._persistent_conn.close()
            self._persistent_conn = None
            self._initialized = False
