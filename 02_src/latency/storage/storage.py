"""SQLite timing store implementation."""

from pathlib import Path
from typing import Protocol

import aiosqlite

from ..config import resolve_db_path
from ..models import Backend, TimingSample


class ITimingStore(Protocol):
    """Append-only persistence for timing samples."""

    async def init(self) -> None:
        """Initialize database and create tables."""
        ...

    async def close(self) -> None:
        """Close database connection."""
        ...

    async def append(self, sample: TimingSample) -> None:
        """Persist a sample. Re-appending the same (backend, sequence) overwrites it."""
        ...

    async def scan_all(self) -> list[TimingSample]:
        """Return every persisted sample."""
        ...

    async def contains(self, backend: Backend, sequence: int) -> bool:
        """Check whether a sample exists for (backend, sequence)."""
        ...


class TimingStore:
    """SQLite timing store."""

    def __init__(self, db_path: str | Path | None = None):
        if db_path is None:
            self._db_path = resolve_db_path()
        else:
            self._db_path = resolve_db_path(db_path)
        self._conn: aiosqlite.Connection | None = None

    async def init(self) -> None:
        """Initialize database and create tables."""
        self._conn = await aiosqlite.connect(self._db_path)

        schema_path = Path(__file__).parent / "schema.sql"
        with open(schema_path, "r", encoding="utf-8") as f:
            schema_sql = f.read()
        await self._conn.executescript(schema_sql)
        await self._conn.commit()

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    async def append(self, sample: TimingSample) -> None:
        """Persist a sample."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        await self._conn.execute(
            """
            INSERT OR REPLACE INTO timing_samples
            (backend, sequence, dispatch_timestamp, delivery_timestamp)
            VALUES (?, ?, ?, ?)
            """,
            (
                Backend(sample.backend).value,
                sample.sequence,
                sample.dispatch_timestamp,
                sample.delivery_timestamp,
            ),
        )
        await self._conn.commit()

    async def scan_all(self) -> list[TimingSample]:
        """Return every sample, ordered by backend then sequence."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        cursor = await self._conn.execute(
            """
            SELECT backend, sequence, dispatch_timestamp, delivery_timestamp
            FROM timing_samples
            ORDER BY backend ASC, sequence ASC
            """
        )
        rows = await cursor.fetchall()

        return [
            TimingSample(
                backend=Backend(row[0]),
                sequence=row[1],
                dispatch_timestamp=row[2],
                delivery_timestamp=row[3],
            )
            for row in rows
        ]

    async def contains(self, backend: Backend, sequence: int) -> bool:
        """Check whether a sample exists for (backend, sequence)."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        cursor = await self._conn.execute(
            """
            SELECT 1 FROM timing_samples
            WHERE backend = ? AND sequence = ?
            """,
            (Backend(backend).value, sequence),
        )
        row = await cursor.fetchone()
        return row is not None
