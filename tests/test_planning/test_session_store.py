"""Tests for planning session storage."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import patch

import pytest

from luma_ai.planning.exceptions import DatabaseError, SessionNotFoundError
from luma_ai.planning.item_compression import PlanningSession
from luma_ai.planning.models import Item, ItemCapacity
from luma_ai.planning.session_store import SessionStore


def make_session(*labels: str) -> PlanningSession:
    return PlanningSession(
        items=[Item(id=f"i{n}", label=label) for n, label in enumerate(labels)]
    )


@pytest.mark.unit
class TestSessionStoreSchema:
    """Test cases for schema creation."""

    @pytest.mark.asyncio
    async def test_schema_creates_sessions_table(self) -> None:
        """Test that initialization creates the planning_sessions table."""
        store = SessionStore(":memory:")
        await store.initialize()

        async with store._get_connection() as conn:
            cursor = await conn.execute(
                "SELECT name FROM sqlite_master "
                "WHERE type='table' AND name='planning_sessions'"
            )
            result = await cursor.fetchone()
            assert result is not None

            cursor = await conn.execute("SELECT MAX(version) FROM schema_version")
            version = await cursor.fetchone()
            assert version[0] == 1

        await store.close()

    @pytest.mark.asyncio
    async def test_initialize_twice_is_safe(self) -> None:
        """Test repeated initialization keeps a single schema version row."""
        store = SessionStore(":memory:")
        await store.initialize()
        await store.initialize()

        async with store._get_connection() as conn:
            cursor = await conn.execute("SELECT COUNT(*) FROM schema_version")
            count = await cursor.fetchone()
            assert count[0] == 1

        await store.close()

    @pytest.mark.asyncio
    async def test_uninitialized_store_raises(self) -> None:
        """Test using the store before initialize raises DatabaseError."""
        store = SessionStore(":memory:")

        with pytest.raises(DatabaseError, match="not initialized"):
            await store.load_latest()

    @pytest.mark.asyncio
    async def test_file_database_creates_parent_directory(self, tmp_path: Path) -> None:
        """Test a file path gets its directory created."""
        db_path = tmp_path / "nested" / "sessions.db"
        store = SessionStore(str(db_path))
        await store.initialize()
        await store.close()

        assert db_path.exists()


@pytest.mark.unit
class TestSessionStoreSaveLoad:
    """Test cases for saving and loading sessions."""

    @pytest.fixture
    async def store(self) -> AsyncGenerator[SessionStore]:
        """Create an initialized in-memory store."""
        store = SessionStore(":memory:")
        await store.initialize()
        yield store
        await store.close()

    @pytest.mark.asyncio
    async def test_load_latest_empty(self, store: SessionStore) -> None:
        """Test nothing saved loads as None."""
        assert await store.load_latest() is None

    @pytest.mark.asyncio
    async def test_save_and_load_round_trip(self, store: SessionStore) -> None:
        """Test all session fields survive storage."""
        session = make_session("call mom", "buy milk", "taxes")
        session.select_capacity("medium")
        session.show_more()
        session.toggle_emotional("i2")
        session.items[2].emotional = True

        session_id = await store.save(session)
        loaded = await store.load_latest()

        assert session_id == session.session_id
        assert loaded == session
        assert loaded.capacity is ItemCapacity.MEDIUM

    @pytest.mark.asyncio
    async def test_session_without_capacity(self, store: SessionStore) -> None:
        """Test a session saved before choosing capacity loads without one."""
        await store.save(make_session("one"))

        loaded = await store.load_latest()

        assert loaded is not None
        assert loaded.capacity is None
        assert loaded.visible_items() == []

    @pytest.mark.asyncio
    async def test_empty_session_is_not_written(self, store: SessionStore) -> None:
        """Test sessions without items are skipped."""
        session_id = await store.save(PlanningSession())

        assert session_id == ""
        assert await store.load_latest() is None

    @pytest.mark.asyncio
    async def test_second_save_updates_row(self, store: SessionStore) -> None:
        """Test saving again updates instead of inserting."""
        session = make_session("one", "two")
        first_id = await store.save(session)

        session.select_capacity("low")
        second_id = await store.save(session)

        assert first_id == second_id
        async with store._get_connection() as conn:
            cursor = await conn.execute("SELECT COUNT(*) FROM planning_sessions")
            count = await cursor.fetchone()
            assert count[0] == 1

    @pytest.mark.asyncio
    async def test_update_missing_session_raises(self, store: SessionStore) -> None:
        """Test saving with an unknown id raises SessionNotFoundError."""
        session = make_session("one")
        session.session_id = "missing"

        with pytest.raises(SessionNotFoundError):
            await store.save(session)

    @pytest.mark.asyncio
    async def test_load_latest_returns_most_recent(self, store: SessionStore) -> None:
        """Test the most recently updated session is loaded."""
        timestamps = iter(
            ["2026-01-01T09:00:00", "2026-01-01T10:00:00", "2026-01-01T11:00:00"]
        )
        with patch("luma_ai.planning.session_store.datetime") as mock_datetime:
            mock_datetime.now.return_value.isoformat.side_effect = lambda: next(
                timestamps
            )

            older = make_session("older")
            newer = make_session("newer")
            await store.save(older)
            await store.save(newer)

            older.select_capacity("high")
            await store.save(older)

        loaded = await store.load_latest()

        assert loaded is not None
        assert loaded.session_id == older.session_id
        assert loaded.capacity is ItemCapacity.HIGH
