"""SQLite-backed local workspace file store."""

from __future__ import annotations

import time
from pathlib import Path

import aiosqlite

from storage.models import VFile


def _now_ms() -> int:
    return int(time.time() * 1000)


class SQLiteFileStore:
    """Path-keyed file table with async access.

    One instance per workspace. Call ``initialize()`` once before use; all
    callers share the same instance and the event loop serialises access.
    """

    def __init__(self, db_path: Path | str) -> None:
        self.db_path = Path(db_path)
        self._conn: aiosqlite.Connection | None = None

    async def initialize(self) -> None:
        if self._conn is not None:
            return
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = await aiosqlite.connect(str(self.db_path))
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute(
            """
            CREATE TABLE IF NOT EXISTS files (
                path       TEXT PRIMARY KEY,
                content    TEXT NOT NULL,
                updated_at INTEGER NOT NULL
            )
            """
        )
        await conn.commit()
        self._conn = conn

    async def close(self) -> None:
        if self._conn is not None:
            await self._conn.close()
            self._conn = None

    async def list(self) -> list[VFile]:
        conn = self._require_conn()
        async with conn.execute("SELECT path, content, updated_at FROM files ORDER BY path") as cursor:
            rows = await cursor.fetchall()
        return [VFile(path=row[0], content=row[1], updated_at=row[2]) for row in rows]

    async def get(self, path: str) -> VFile | None:
        conn = self._require_conn()
        async with conn.execute(
            "SELECT path, content, updated_at FROM files WHERE path = ?",
            (path,),
        ) as cursor:
            row = await cursor.fetchone()
        if row is None:
            return None
        return VFile(path=row[0], content=row[1], updated_at=row[2])

    async def put(self, path: str, content: str) -> None:
        conn = self._require_conn()
        await conn.execute(
            """
            INSERT INTO files (path, content, updated_at)
            VALUES (?, ?, ?)
            ON CONFLICT(path) DO UPDATE SET
                content = excluded.content,
                updated_at = excluded.updated_at
            """,
            (path, content, _now_ms()),
        )
        await conn.commit()

    async def delete(self, path: str) -> None:
        conn = self._require_conn()
        await conn.execute("DELETE FROM files WHERE path = ?", (path,))
        await conn.commit()

    def _require_conn(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise RuntimeError(
                f"SQLiteFileStore({self.db_path}) is not initialized. "
                "Call `await store.initialize()` at application start."
            )
        return self._conn
