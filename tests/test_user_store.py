"""
Unit tests for the Redis-backed credential store.
"""

import json

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from nucampsite.errors import StorageError, UsernameTaken
from nucampsite.modules.api.models import User
from nucampsite.modules.users import UserStore


@pytest.fixture
def user():
    return User(username="alice", hash="stored-hash", firstname="Alice")


@pytest.mark.asyncio
async def test_create_claims_username_with_nx(mock_redis, user):
    store = UserStore(mock_redis)

    await store.create(user)

    mock_redis.set.assert_any_call("user:username:alice", user.id, nx=True)
    doc_call = mock_redis.set.call_args_list[-1]
    assert doc_call[0][0] == f"user:{user.id}"
    stored = json.loads(doc_call[0][1])
    assert stored["_id"] == user.id
    assert stored["username"] == "alice"
    assert stored["hash"] == "stored-hash"
    mock_redis.sadd.assert_called_once_with("users:all", user.id)


@pytest.mark.asyncio
async def test_create_claims_facebook_index(mock_redis):
    store = UserStore(mock_redis)
    user = User(username="Jane Doe", facebook_id="fb-1")

    await store.create(user)

    mock_redis.set.assert_any_call("user:facebook:fb-1", user.id, nx=True)


@pytest.mark.asyncio
async def test_create_taken_username_writes_nothing(mock_redis, user):
    mock_redis.set.return_value = None  # NX claim lost
    store = UserStore(mock_redis)

    with pytest.raises(UsernameTaken):
        await store.create(user)

    assert mock_redis.set.call_count == 1
    mock_redis.sadd.assert_not_called()
    mock_redis.delete.assert_not_called()


@pytest.mark.asyncio
async def test_create_linked_facebook_id_releases_username(mock_redis):
    mock_redis.set.side_effect = [True, None]
    store = UserStore(mock_redis)
    user = User(username="Jane Doe", facebook_id="fb-1")

    with pytest.raises(StorageError):
        await store.create(user)

    mock_redis.delete.assert_called_once_with("user:username:Jane Doe")
    mock_redis.sadd.assert_not_called()


@pytest.mark.asyncio
async def test_create_redis_failure_is_storage_error(mock_redis, user):
    mock_redis.set.side_effect = [True, RedisConnectionError("down")]
    store = UserStore(mock_redis)

    with pytest.raises(StorageError):
        await store.create(user)

    mock_redis.delete.assert_called_once_with("user:username:alice")


@pytest.mark.asyncio
async def test_find_by_username_uses_index(mock_redis, user):
    mock_redis.get.side_effect = [user.id, json.dumps(user.to_document())]
    store = UserStore(mock_redis)

    found = await store.find_by_username("alice")

    assert found.id == user.id
    assert mock_redis.get.call_args_list[0][0][0] == "user:username:alice"
    assert mock_redis.get.call_args_list[1][0][0] == f"user:{user.id}"


@pytest.mark.asyncio
async def test_find_unknown_returns_none(mock_redis):
    store = UserStore(mock_redis)

    assert await store.find_by_username("nobody") is None
    assert await store.find_by_facebook_id("fb-404") is None
    assert await store.find_by_id("missing") is None


@pytest.mark.asyncio
async def test_lookup_failure_is_storage_error(mock_redis):
    mock_redis.get.side_effect = RedisConnectionError("down")
    store = UserStore(mock_redis)

    with pytest.raises(StorageError):
        await store.find_by_username("alice")


@pytest.mark.asyncio
async def test_save_links_facebook_identity(mock_redis_with_data, user):
    store = UserStore(mock_redis_with_data)
    await store.create(user)

    linked = user.touched(facebook_id="fb-9")
    await store.save(linked)

    found = await store.find_by_facebook_id("fb-9")
    assert found.id == user.id
    assert found.username == "alice"


@pytest.mark.asyncio
async def test_list_users_oldest_first(mock_redis_with_data):
    store = UserStore(mock_redis_with_data)
    first = await store.create(User(username="first", created_at="2024-01-01T00:00:00+00:00"))
    second = await store.create(User(username="second", created_at="2024-02-01T00:00:00+00:00"))

    users = await store.list_users()

    assert [u.id for u in users] == [first.id, second.id]


def test_public_user_has_no_hash(user):
    public = user.public()

    assert "hash" not in public
    assert public["_id"] == user.id
    assert public["username"] == "alice"
    assert "facebookId" in public
