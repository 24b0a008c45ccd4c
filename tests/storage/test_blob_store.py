"""Tests for habitclock.storage.blob_store: DenseArrayStore with SQLite persistence."""

import os

import numpy as np
import pytest
import pytest_asyncio

from habitclock.analytics.dense_array import array_size, create_dense_array
from habitclock.errors import ArrayShapeError
from habitclock.storage.blob_store import DenseArrayStore


@pytest_asyncio.fixture
async def store(tmp_path):
    """Create a DenseArrayStore with a temp database and small chunks."""
    ds = DenseArrayStore(str(tmp_path / "analytics.db"), chunk_size=7_000)
    await ds.initialize()
    yield ds
    await ds.close()


def _sample(num_states: int) -> np.ndarray:
    array = create_dense_array(num_states)
    array[::997] = np.arange(len(array[::997]), dtype=np.float64) + 0.25
    return array


class TestInitialization:
    async def test_creates_db_file(self, tmp_path):
        db_path = str(tmp_path / "nested" / "analytics.db")
        ds = DenseArrayStore(db_path)
        await ds.initialize()
        assert os.path.exists(db_path)
        await ds.close()

    async def test_wal_mode_enabled(self, store):
        cursor = await store._conn.execute("PRAGMA journal_mode")
        row = await cursor.fetchone()
        assert row[0] == "wal"

    async def test_uninitialized_store_raises(self, tmp_path):
        ds = DenseArrayStore(str(tmp_path / "x.db"))
        with pytest.raises(RuntimeError, match="not initialized"):
            await ds.load("c", "m", "2024-Q1", 2)

    def test_rejects_bad_chunk_size(self):
        with pytest.raises(ValueError):
            DenseArrayStore("x.db", chunk_size=0)


class TestRoundTrip:
    async def test_missing_key_loads_none(self, store):
        assert await store.load("kitchen", "m1", "2024-Q1", 2) is None

    async def test_save_and_load(self, store):
        array = _sample(2)
        await store.save("kitchen", "m1", "2024-Q1", 2, array)
        loaded = await store.load("kitchen", "m1", "2024-Q1", 2)
        assert loaded.dtype == np.float64
        np.testing.assert_array_equal(loaded, array)

    async def test_chunked_on_disk(self, store):
        await store.save("kitchen", "m1", "2024-Q1", 2, _sample(2))
        cursor = await store._conn.execute("SELECT COUNT(*) FROM analytics_blob_chunks")
        row = await cursor.fetchone()
        assert row[0] == -(-array_size(2) // 7_000)

    async def test_version_increments(self, store):
        assert await store.save("kitchen", "m1", "2024-Q1", 2, _sample(2)) == 1
        assert await store.save("kitchen", "m1", "2024-Q1", 2, _sample(2)) == 2

    async def test_overwrite_with_different_state_count(self, store):
        await store.save("kitchen", "m1", "2024-Q1", 2, _sample(2))
        await store.save("kitchen", "m1", "2024-Q1", 3, _sample(3))
        loaded = await store.load("kitchen", "m1", "2024-Q1", 3)
        assert len(loaded) == array_size(3)

    async def test_keys_are_independent(self, store):
        await store.save("kitchen", "m1", "2024-Q1", 2, _sample(2))
        await store.save("kitchen", "m1", "2024-Q2", 2, create_dense_array(2))
        loaded = await store.load("kitchen", "m1", "2024-Q1", 2)
        assert loaded.any()


class TestShapeErrors:
    async def test_load_with_wrong_state_count(self, store):
        await store.save("kitchen", "m1", "2024-Q1", 2, _sample(2))
        with pytest.raises(ArrayShapeError):
            await store.load("kitchen", "m1", "2024-Q1", 3)

    async def test_save_rejects_misshaped_array(self, store):
        with pytest.raises(ArrayShapeError):
            await store.save("kitchen", "m1", "2024-Q1", 2, np.zeros(10))
        assert await store.list_keys() == []


class TestKeys:
    async def test_list_and_delete(self, store):
        await store.save("kitchen", "m1", "2024-Q1", 2, _sample(2))
        await store.save("hall", "m1", "2024-Q1", 6, create_dense_array(6))

        keys = await store.list_keys()
        assert [(k["control_id"], k["num_states"]) for k in keys] == [("hall", 6), ("kitchen", 2)]
        assert [k["control_id"] for k in await store.list_keys("kitchen")] == ["kitchen"]

        assert await store.delete("kitchen", "m1", "2024-Q1") is True
        assert await store.delete("kitchen", "m1", "2024-Q1") is False
        assert await store.load("kitchen", "m1", "2024-Q1", 2) is None
        cursor = await store._conn.execute("SELECT COUNT(*) FROM analytics_blob_chunks WHERE control_id = 'kitchen'")
        assert (await cursor.fetchone())[0] == 0
