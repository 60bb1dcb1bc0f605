"""Tests for the persistence gateway."""
import pytest

from folio.errors import ConflictError, StorageError
from folio.infrastructure.database import Database


@pytest.mark.asyncio
async def test_execute_reports_insert_id_and_count(async_db):
    result = await async_db.execute(
        "INSERT INTO users (username, password, created_at) VALUES (?, ?, ?)",
        ("alice", "hash", "2024-01-01T00:00:00.000000+00:00")
    )

    assert result.last_insert_id == 1
    assert result.rows_affected == 1


@pytest.mark.asyncio
async def test_query_returns_dict_rows(async_db):
    await async_db.execute(
        "INSERT INTO users (username, password, created_at) VALUES (?, ?, ?)",
        ("alice", "hash", "2024-01-01T00:00:00.000000+00:00")
    )

    rows = await async_db.query("SELECT username FROM users")

    assert rows == [{"username": "alice"}]
    assert await async_db.query("SELECT * FROM users WHERE id = ?", (99,)) == []


@pytest.mark.asyncio
async def test_unique_violation_raises_conflict(async_db):
    params = ("alice", "hash", "2024-01-01T00:00:00.000000+00:00")
    sql = "INSERT INTO users (username, password, created_at) VALUES (?, ?, ?)"
    await async_db.execute(sql, params)

    with pytest.raises(ConflictError):
        await async_db.execute(sql, params)

    # Connection is still usable afterwards
    assert len(await async_db.query("SELECT * FROM users")) == 1


@pytest.mark.asyncio
async def test_bad_sql_raises_storage_error(async_db):
    with pytest.raises(StorageError):
        await async_db.query("SELECT * FROM no_such_table")


@pytest.mark.asyncio
async def test_not_connected():
    db = Database(":memory:")

    assert not db.is_connected
    with pytest.raises(StorageError):
        await db.query("SELECT 1")
