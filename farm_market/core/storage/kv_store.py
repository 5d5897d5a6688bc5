"""Key-value store facade with graceful degradation.

Every marketplace record lives under a string key (`listing:<id>`, `message:<conv>:<id>`, ...)
as a JSON document. The only primitives are exact-key get/set/delete and a prefix scan.

Features:
- `RedisKeyValueStore`: async Redis backend; prefix scans use SCAN MATCH with glob
  characters in the prefix escaped, then MGET in batches.
- `InMemoryKeyValueStore`: process-local dict used when Redis is not configured, so
  development and tests run without a server.
- `StoreManager`: owns the active backend for the app lifespan; `get_store` is the
  FastAPI dependency handlers receive.

There are no cross-key transactions: a write is atomic per key only, and concurrent
writers to the same key are last-write-wins.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Optional

import redis.asyncio as redis

from farm_market.core.config import settings

logger = logging.getLogger(__name__)

_GLOB_SPECIALS = re.compile(r"([*?\[\]\\])")


def escape_glob(prefix: str) -> str:
    """Escape Redis glob metacharacters so a prefix is matched literally."""
    return _GLOB_SPECIALS.sub(r"\\\1", prefix)


def encode_record(value: Any) -> str:
    return json.dumps(value, default=str, separators=(",", ":"))


def decode_record(data: Any) -> Any:
    if data is None:
        return None
    if isinstance(data, bytes):
        data = data.decode("utf-8")
    return json.loads(data)


class KeyValueStore:
    """Interface every backend implements: exact-key access plus prefix scan."""

    backend_name = "abstract"

    async def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    async def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    async def delete(self, key: str) -> bool:
        raise NotImplementedError

    async def scan_prefix(self, prefix: str) -> List[Any]:
        """Return every value whose key starts with `prefix`, in no particular order."""
        raise NotImplementedError

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        return None


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store. Values are round-tripped through JSON like the Redis backend."""

    backend_name = "memory"

    def __init__(self):
        self._data: Dict[str, str] = {}

    async def get(self, key: str) -> Optional[Any]:
        return decode_record(self._data.get(key))

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = encode_record(value)

    async def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    async def scan_prefix(self, prefix: str) -> List[Any]:
        return [
            decode_record(raw)
            for key, raw in list(self._data.items())
            if key.startswith(prefix)
        ]

    def keys(self) -> List[str]:
        return list(self._data)

    def clear(self) -> None:
        self._data.clear()


class RedisKeyValueStore(KeyValueStore):
    """Async Redis backend. `namespace` is prepended to every key."""

    backend_name = "redis"

    def __init__(
        self,
        client: redis.Redis,
        *,
        namespace: str = "",
        scan_batch_size: int = 500,
    ):
        self.redis = client
        self.namespace = namespace
        self.scan_batch_size = scan_batch_size

    @classmethod
    def from_url(cls, url: str, **kwargs) -> "RedisKeyValueStore":
        client = redis.from_url(
            url,
            encoding="utf-8",
            decode_responses=True,
            socket_timeout=5,
        )
        return cls(client, **kwargs)

    def _key(self, key: str) -> str:
        return f"{self.namespace}{key}"

    async def get(self, key: str) -> Optional[Any]:
        return decode_record(await self.redis.get(self._key(key)))

    async def set(self, key: str, value: Any) -> None:
        await self.redis.set(self._key(key), encode_record(value))

    async def delete(self, key: str) -> bool:
        return bool(await self.redis.delete(self._key(key)))

    async def scan_prefix(self, prefix: str) -> List[Any]:
        pattern = escape_glob(self._key(prefix)) + "*"
        keys: List[str] = []
        cursor = 0
        while True:
            cursor, batch = await self.redis.scan(
                cursor, match=pattern, count=self.scan_batch_size
            )
            keys.extend(batch)
            if cursor == 0:
                break

        # SCAN may return a key more than once while the keyspace is rehashing.
        unique_keys = list(dict.fromkeys(keys))
        values: List[Any] = []
        for start in range(0, len(unique_keys), self.scan_batch_size):
            chunk = unique_keys[start : start + self.scan_batch_size]
            raw_values = await self.redis.mget(chunk)
            # A key deleted between SCAN and MGET comes back as None.
            values.extend(decode_record(raw) for raw in raw_values if raw is not None)
        return values

    async def ping(self) -> bool:
        return bool(await self.redis.ping())

    async def close(self) -> None:
        close_method = getattr(self.redis, "aclose", None) or getattr(
            self.redis, "close", None
        )
        if close_method:
            await close_method()


class StoreManager:
    """Owns the active store; falls back to memory when Redis is absent or unreachable."""

    def __init__(self):
        self.store: Optional[KeyValueStore] = None
        self.failed_init = False

    async def init_store(self) -> KeyValueStore:
        """Connect to Redis when configured, otherwise use the in-memory backend."""
        if not settings.redis_url:
            logger.warning("REDIS_URL not set. Using in-memory key-value store.")
            self.store = InMemoryKeyValueStore()
            self.failed_init = False
            return self.store

        try:
            store = RedisKeyValueStore.from_url(
                settings.redis_url,
                namespace=settings.kv_key_namespace,
                scan_batch_size=settings.kv_scan_batch_size,
            )
            await store.ping()
        except Exception as e:
            if settings.environment.lower() == "production":
                logger.error("Failed to initialize Redis store: %s", e)
                self.failed_init = True
                raise
            logger.error(
                "Failed to initialize Redis store, using in-memory store: %s", e
            )
            self.store = InMemoryKeyValueStore()
            self.failed_init = True
            return self.store

        self.store = store
        self.failed_init = False
        logger.info("Redis key-value store initialized successfully.")
        return self.store

    async def close(self) -> None:
        if self.store is None:
            return
        await self.store.close()
        self.store = None


store_manager = StoreManager()


def get_store() -> KeyValueStore:
    """FastAPI dependency returning the active store (lazily in-memory if startup was skipped)."""
    if store_manager.store is None:
        store_manager.store = InMemoryKeyValueStore()
    return store_manager.store
