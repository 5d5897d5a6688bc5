"""Key-value persistence primitives."""

from .kv_store import (
    InMemoryKeyValueStore,
    KeyValueStore,
    RedisKeyValueStore,
    StoreManager,
    get_store,
    store_manager,
)

__all__ = [
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "RedisKeyValueStore",
    "StoreManager",
    "store_manager",
    "get_store",
]
