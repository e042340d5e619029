"""
持久化存储适配层：单 Key 字符串的异步读写

对外只暴露 get / set 两个能力，TodoListContainer 不关心底层是 Redis 还是内存。
"""

from todolist.config import Settings
from todolist.store.base import KeyValueStore, RedisKeys
from todolist.store.memory_store import MemoryStore
from todolist.store.redis_client import RedisStore, create_redis_client


def create_store(settings: Settings) -> KeyValueStore:
    """按配置选择存储后端"""
    if settings.STORE_BACKEND == "memory":
        return MemoryStore()
    return RedisStore(create_redis_client(settings))


__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "RedisKeys",
    "RedisStore",
    "create_redis_client",
    "create_store",
]
