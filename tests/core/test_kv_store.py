"""Key-value store adapters and the store manager."""

import pytest

from farm_market.core.storage import kv_store as kv
from farm_market.core.storage.kv_store import (
    InMemoryKeyValueStore,
    RedisKeyValueStore,
    StoreManager,
    escape_glob,
)


class DummyRedis:
    """Minimal async Redis double with glob-less prefix matching on SCAN."""

    def __init__(self, page_size=2):
        self.data = {}
        self.page_size = page_size
        self.scan_calls = []
        self.closed = False

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value):
        self.data[key] = value

    async def delete(self, key):
        return 1 if self.data.pop(key, None) is not None else 0

    async def scan(self, cursor, match=None, count=None):
        self.scan_calls.append(match)
        prefix = match[:-1].replace("\\", "")
        keys = sorted(k for k in self.data if k.startswith(prefix))
        page = keys[cursor : cursor + self.page_size]
        next_cursor = cursor + self.page_size
        if next_cursor >= len(keys):
            next_cursor = 0
        return next_cursor, page

    async def mget(self, keys):
        return [self.data.get(k) for k in keys]

    async def ping(self):
        return True

    async def aclose(self):
        self.closed = True


def test_escape_glob():
    assert escape_glob("message:conv-a*b:") == "message:conv-a\\*b:"
    assert escape_glob("a?[b]") == "a\\?\\[b\\]"


@pytest.mark.asyncio
async def test_in_memory_store_roundtrip_and_scan():
    store = InMemoryKeyValueStore()
    await store.set("review:12:a", {"rating": 4})
    await store.set("review:123:b", {"rating": 1})

    assert await store.get("review:12:a") == {"rating": 4}
    assert await store.get("missing") is None
    assert await store.scan_prefix("review:12:") == [{"rating": 4}]

    assert await store.delete("review:12:a") is True
    assert await store.delete("review:12:a") is False


@pytest.mark.asyncio
async def test_redis_store_scans_every_page_with_namespace():
    client = DummyRedis(page_size=2)
    store = RedisKeyValueStore(client, namespace="fm:", scan_batch_size=2)
    for i in range(5):
        await store.set(f"listing:{i}", {"id": str(i)})
    await store.set("listings-archive:1", {"id": "archived"})

    values = await store.scan_prefix("listing:")
    assert sorted(v["id"] for v in values) == ["0", "1", "2", "3", "4"]
    assert client.scan_calls[0] == "fm:listing:*"
    assert "fm:listing:0" in client.data


@pytest.mark.asyncio
async def test_redis_store_skips_keys_deleted_between_scan_and_mget():
    client = DummyRedis()
    store = RedisKeyValueStore(client)
    await store.set("order:1", {"id": "1"})

    async def vanished_mget(keys):
        return [None for _ in keys]

    client.mget = vanished_mget
    assert await store.scan_prefix("order:") == []


@pytest.mark.asyncio
async def test_redis_store_delete_and_close():
    client = DummyRedis()
    store = RedisKeyValueStore(client)
    await store.set("watchlist:u:1", {"id": "1"})
    assert await store.delete("watchlist:u:1") is True
    assert await store.delete("watchlist:u:1") is False
    await store.close()
    assert client.closed is True


@pytest.mark.asyncio
async def test_store_manager_uses_memory_without_redis(monkeypatch):
    monkeypatch.setattr(kv.settings, "redis_url", None)
    manager = StoreManager()
    store = await manager.init_store()
    assert isinstance(store, InMemoryKeyValueStore)
    assert manager.failed_init is False


@pytest.mark.asyncio
async def test_store_manager_connects_and_falls_back(monkeypatch):
    dummy = DummyRedis()
    monkeypatch.setattr(kv.settings, "redis_url", "redis://example")
    monkeypatch.setattr(kv.redis, "from_url", lambda url, **kwargs: dummy)

    manager = StoreManager()
    store = await manager.init_store()
    assert isinstance(store, RedisKeyValueStore)
    assert manager.failed_init is False

    def boom(*args, **kwargs):
        raise RuntimeError("bad url")

    monkeypatch.setattr(kv.redis, "from_url", boom)
    store = await manager.init_store()
    assert isinstance(store, InMemoryKeyValueStore)
    assert manager.failed_init is True


@pytest.mark.asyncio
async def test_store_manager_raises_in_production(monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("unreachable")

    monkeypatch.setattr(kv.settings, "redis_url", "redis://example")
    monkeypatch.setattr(kv.settings, "environment", "production")
    monkeypatch.setattr(kv.redis, "from_url", boom)

    manager = StoreManager()
    with pytest.raises(RuntimeError):
        await manager.init_store()
    assert manager.failed_init is True
