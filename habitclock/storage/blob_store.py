"""SQLite persistence for dense analytics arrays.

One array per (control, model, season window), stored as little-endian
float64 chunks so a single row never has to hold a whole 1 MB+ blob.
Uses WAL mode for concurrent read access while the recorder writes.
"""

import logging
import os
from datetime import UTC, datetime

import aiosqlite
import numpy as np

from habitclock.analytics.dense_array import array_size, ensure_array_shape
from habitclock.errors import ArrayShapeError

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 100_000
_WIRE_DTYPE = np.dtype("<f8")


class DenseArrayStore:
    """Async SQLite store for per-(control, model, window) dense arrays."""

    def __init__(self, db_path: str, chunk_size: int = DEFAULT_CHUNK_SIZE):
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.db_path = db_path
        self.chunk_size = chunk_size
        self._conn: aiosqlite.Connection | None = None

    async def initialize(self) -> None:
        """Create database, enable WAL mode, and ensure schema exists."""
        if self.db_path != ":memory:":
            os.makedirs(os.path.dirname(self.db_path) or ".", exist_ok=True)

        self._conn = await aiosqlite.connect(self.db_path)
        self._conn.row_factory = aiosqlite.Row

        await self._conn.execute("PRAGMA journal_mode=WAL")
        await self._conn.execute("PRAGMA busy_timeout=5000")

        await self._conn.execute("""
            CREATE TABLE IF NOT EXISTS analytics_blobs (
                control_id TEXT NOT NULL,
                model_id TEXT NOT NULL,
                window_id TEXT NOT NULL,
                num_states INTEGER NOT NULL,
                length INTEGER NOT NULL,
                version INTEGER NOT NULL DEFAULT 1,
                updated_at TEXT NOT NULL,
                PRIMARY KEY (control_id, model_id, window_id)
            )
        """)
        await self._conn.execute("""
            CREATE TABLE IF NOT EXISTS analytics_blob_chunks (
                control_id TEXT NOT NULL,
                model_id TEXT NOT NULL,
                window_id TEXT NOT NULL,
                chunk_index INTEGER NOT NULL,
                data BLOB NOT NULL,
                PRIMARY KEY (control_id, model_id, window_id, chunk_index)
            )
        """)
        await self._conn.commit()

    async def close(self) -> None:
        """Close the database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    def _require_conn(self) -> aiosqlite.Connection:
        if not self._conn:
            raise RuntimeError("DenseArrayStore not initialized")
        return self._conn

    async def load(self, control_id: str, model_id: str, window_id: str, num_states: int) -> np.ndarray | None:
        """Load an array, or None if nothing is stored for the key.

        Raises ArrayShapeError when the stored array does not have the length
        ``num_states`` requires (for example after the control's state count changed).
        """
        conn = self._require_conn()
        key = (control_id, model_id, window_id)
        cursor = await conn.execute(
            "SELECT num_states, length FROM analytics_blobs WHERE control_id = ? AND model_id = ? AND window_id = ?",
            key,
        )
        meta = await cursor.fetchone()
        if meta is None:
            return None

        expected = array_size(num_states)
        if meta["length"] != expected:
            raise ArrayShapeError(expected, meta["length"], num_states)

        cursor = await conn.execute(
            """SELECT data FROM analytics_blob_chunks
               WHERE control_id = ? AND model_id = ? AND window_id = ?
               ORDER BY chunk_index ASC""",
            key,
        )
        chunks = [np.frombuffer(row["data"], dtype=_WIRE_DTYPE) for row in await cursor.fetchall()]
        values = np.concatenate(chunks) if chunks else np.zeros(0, dtype=_WIRE_DTYPE)
        return ensure_array_shape(values.astype(np.float64), num_states)

    async def save(self, control_id: str, model_id: str, window_id: str, num_states: int, array) -> int:
        """Replace the stored array for the key in one transaction. Returns the new version."""
        conn = self._require_conn()
        values = ensure_array_shape(array, num_states).astype(_WIRE_DTYPE, copy=False)
        key = (control_id, model_id, window_id)
        chunks = [
            (*key, index, values[start : start + self.chunk_size].tobytes())
            for index, start in enumerate(range(0, len(values), self.chunk_size))
        ]

        await conn.execute("BEGIN")
        try:
            await conn.execute(
                "DELETE FROM analytics_blob_chunks WHERE control_id = ? AND model_id = ? AND window_id = ?",
                key,
            )
            await conn.executemany(
                """INSERT INTO analytics_blob_chunks (control_id, model_id, window_id, chunk_index, data)
                   VALUES (?, ?, ?, ?, ?)""",
                chunks,
            )
            await conn.execute(
                """INSERT INTO analytics_blobs (control_id, model_id, window_id, num_states, length, version, updated_at)
                   VALUES (?, ?, ?, ?, ?, 1, ?)
                   ON CONFLICT (control_id, model_id, window_id) DO UPDATE SET
                       num_states = excluded.num_states,
                       length = excluded.length,
                       version = analytics_blobs.version + 1,
                       updated_at = excluded.updated_at""",
                (*key, num_states, len(values), datetime.now(UTC).isoformat()),
            )
            cursor = await conn.execute(
                "SELECT version FROM analytics_blobs WHERE control_id = ? AND model_id = ? AND window_id = ?",
                key,
            )
            version = (await cursor.fetchone())["version"]
            await conn.commit()
        except Exception:
            await conn.rollback()
            raise
        logger.debug("Saved %s/%s/%s v%d in %d chunks", control_id, model_id, window_id, version, len(chunks))
        return version

    async def delete(self, control_id: str, model_id: str, window_id: str) -> bool:
        """Delete a stored array. Returns True if one existed."""
        conn = self._require_conn()
        key = (control_id, model_id, window_id)
        await conn.execute(
            "DELETE FROM analytics_blob_chunks WHERE control_id = ? AND model_id = ? AND window_id = ?",
            key,
        )
        cursor = await conn.execute(
            "DELETE FROM analytics_blobs WHERE control_id = ? AND model_id = ? AND window_id = ?",
            key,
        )
        await conn.commit()
        return cursor.rowcount > 0

    async def list_keys(self, control_id: str | None = None) -> list[dict]:
        """Stored (control, model, window) keys with their metadata, optionally for one control."""
        conn = self._require_conn()
        query = "SELECT control_id, model_id, window_id, num_states, version, updated_at FROM analytics_blobs"
        params: tuple = ()
        if control_id is not None:
            query += " WHERE control_id = ?"
            params = (control_id,)
        cursor = await conn.execute(query + " ORDER BY control_id, model_id, window_id", params)
        return [dict(row) for row in await cursor.fetchall()]
