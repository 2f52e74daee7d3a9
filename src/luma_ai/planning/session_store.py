"""SQLite storage for the latest deterministic planning session."""

import json
import logging
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import datetime
from pathlib import Path

import aiosqlite

from luma_ai.planning.config import DEFAULT_WAL_MODE, SCHEMA_VERSION
from luma_ai.planning.exceptions import DatabaseError, SessionNotFoundError
from luma_ai.planning.item_compression import PlanningSession
from luma_ai.planning.models import Item, ItemCapacity

logger = logging.getLogger(__name__)


class SessionStore:
    """Persists planning sessions as one row per session."""

    def __init__(self, db_path: str, wal_mode: bool = DEFAULT_WAL_MODE) -> None:
        """
        Initialize session store.

        Args:
            db_path: Path to SQLite database file (use ":memory:" for in-memory)
            wal_mode: Enable WAL mode for concurrent access
        """
        self.db_path = db_path
        self.wal_mode = wal_mode
        self._connection: aiosqlite.Connection | None = None

    async def initialize(self) -> None:
        """Open the connection and create the schema if needed."""
        if self._connection is None:
            if self.db_path != ":memory:":
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            self._connection = await aiosqlite.connect(self.db_path)
            self._connection.row_factory = aiosqlite.Row

            # WAL is not supported in :memory:
            if self.wal_mode and self.db_path != ":memory:":
                await self._connection.execute("PRAGMA journal_mode=WAL")

        await self._create_schema()

    async def _create_schema(self) -> None:
        async with self._get_connection() as conn:
            await conn.execute(
                """
                CREATE TABLE IF NOT EXISTS schema_version (
                    version INTEGER PRIMARY KEY,
                    applied_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
                )
                """
            )

            cursor = await conn.execute("SELECT MAX(version) FROM schema_version")
            result = await cursor.fetchone()
            current_version = result[0] if result and result[0] is not None else 0

            if current_version < SCHEMA_VERSION:
                await self._apply_migrations(conn, current_version)

            await conn.commit()

    async def _apply_migrations(
        self, conn: aiosqlite.Connection, from_version: int
    ) -> None:
        if from_version < 1:
            await conn.execute(
                """
                CREATE TABLE IF NOT EXISTS planning_sessions (
                    id TEXT PRIMARY KEY,
                    items TEXT NOT NULL,
                    capacity TEXT,
                    override INTEGER NOT NULL DEFAULT 0,
                    emotional_id TEXT,
                    updated_at TIMESTAMP NOT NULL
                )
                """
            )
            await conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_sessions_updated_at "
                "ON planning_sessions(updated_at)"
            )
            await conn.execute(
                "INSERT OR REPLACE INTO schema_version (version) VALUES (?)",
                (SCHEMA_VERSION,),
            )

    @asynccontextmanager
    async def _get_connection(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Get database connection context manager.

        Raises:
            DatabaseError: If connection is not initialized
        """
        if self._connection is None:
            raise DatabaseError("Session store not initialized")
        yield self._connection

    async def close(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    async def save(self, session: PlanningSession) -> str:
        """
        Insert a new session or update the existing row.

        Sessions without items are not written.

        Args:
            session: Session to persist; `session_id` is set on first save

        Returns:
            Session ID, or an empty string if nothing was written
        """
        if not session.items:
            return session.session_id or ""

        payload = (
            json.dumps([asdict(item) for item in session.items]),
            session.capacity.value if session.capacity else None,
            session.override,
            session.emotional_id,
            datetime.now().isoformat(),
        )

        try:
            async with self._get_connection() as conn:
                if session.session_id:
                    cursor = await conn.execute(
                        """
                        UPDATE planning_sessions
                        SET items = ?, capacity = ?, override = ?,
                            emotional_id = ?, updated_at = ?
                        WHERE id = ?
                        """,
                        (*payload, session.session_id),
                    )
                    if cursor.rowcount == 0:
                        raise SessionNotFoundError(
                            f"Session with ID {session.session_id} not found"
                        )
                else:
                    session.session_id = str(uuid.uuid4())
                    await conn.execute(
                        """
                        INSERT INTO planning_sessions (
                            items, capacity, override, emotional_id, updated_at, id
                        ) VALUES (?, ?, ?, ?, ?, ?)
                        """,
                        (*payload, session.session_id),
                    )
                await conn.commit()
        except DatabaseError:
            raise
        except Exception as e:
            raise DatabaseError(f"Failed to save session: {e}") from e

        logger.debug(f"Saved planning session {session.session_id}")
        return session.session_id

    async def load_latest(self) -> PlanningSession | None:
        """
        Load the most recently updated session.

        Returns:
            PlanningSession, or None if nothing has been saved
        """
        async with self._get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM planning_sessions ORDER BY updated_at DESC LIMIT 1"
            )
            row = await cursor.fetchone()

        if row is None:
            return None
        return self._row_to_session(row)

    def _row_to_session(self, row: aiosqlite.Row) -> PlanningSession:
        return PlanningSession(
            items=[Item(**item) for item in json.loads(row["items"])],
            capacity=ItemCapacity(row["capacity"]) if row["capacity"] else None,
            override=row["override"] or 0,
            emotional_id=row["emotional_id"],
            session_id=row["id"],
        )
