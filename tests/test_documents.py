"""
Unit tests for the Redis JSON document store.
"""

import json

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from nucampsite.config.provider import StorageConfig
from nucampsite.errors import StorageError
from nucampsite.modules.storage import DocumentStore, StorageModule


@pytest.mark.asyncio
async def test_put_and_get(mock_redis_with_data):
    store = DocumentStore(mock_redis_with_data, "thing")

    await store.put({"_id": "t1", "name": "tent"})

    assert await store.get("t1") == {"_id": "t1", "name": "tent"}
    assert json.loads(mock_redis_with_data._storage["thing:t1"])["name"] == "tent"
    assert mock_redis_with_data._storage["things:all"] == {"t1"}


@pytest.mark.asyncio
async def test_put_with_explicit_id(mock_redis_with_data):
    store = DocumentStore(mock_redis_with_data, "thing")

    await store.put({"_id": "generated", "owner": "u1"}, doc_id="u1")

    assert (await store.get("u1"))["_id"] == "generated"
    assert await store.get("generated") is None


@pytest.mark.asyncio
async def test_delete_returns_document(mock_redis_with_data):
    store = DocumentStore(mock_redis_with_data, "thing")
    await store.put({"_id": "t1"})

    assert await store.delete("t1") == {"_id": "t1"}
    assert await store.delete("t1") is None
    assert mock_redis_with_data._storage["things:all"] == set()


@pytest.mark.asyncio
async def test_all_sorted_by_creation_and_cleans_stale(mock_redis_with_data):
    store = DocumentStore(mock_redis_with_data, "thing")
    await store.put({"_id": "b", "createdAt": "2024-02-01"})
    await store.put({"_id": "a", "createdAt": "2024-01-01"})
    await mock_redis_with_data.sadd("things:all", "ghost")

    docs = await store.all()

    assert [d["_id"] for d in docs] == ["a", "b"]
    assert "ghost" not in mock_redis_with_data._storage["things:all"]


@pytest.mark.asyncio
async def test_clear_counts_deleted(mock_redis_with_data):
    store = DocumentStore(mock_redis_with_data, "thing")
    await store.put({"_id": "a"})
    await store.put({"_id": "b"})

    assert await store.clear() == 2
    assert await store.all() == []
    assert await store.clear() == 0


@pytest.mark.asyncio
async def test_redis_failures_become_storage_errors(mock_redis):
    mock_redis.get.side_effect = RedisConnectionError("down")
    mock_redis.set.side_effect = RedisConnectionError("down")
    mock_redis.smembers.side_effect = RedisConnectionError("down")
    store = DocumentStore(mock_redis, "thing")

    with pytest.raises(StorageError):
        await store.get("a")
    with pytest.raises(StorageError):
        await store.put({"_id": "a"})
    with pytest.raises(StorageError):
        await store.all()
    with pytest.raises(StorageError):
        await store.clear()


def test_storage_module_url():
    module = StorageModule(StorageConfig(host="redis", port=6380, db=2, password="pw"))

    assert module.url == "redis://redis:6380/2"
    assert module.password == "pw"


@pytest.mark.asyncio
async def test_stale_index_cleanup_failure_is_storage_error(mock_redis):
    mock_redis.smembers.return_value = {"gone"}
    mock_redis.srem.side_effect = RedisConnectionError("down")
    store = DocumentStore(mock_redis, "thing")

    with pytest.raises(StorageError):
        await store.all()
