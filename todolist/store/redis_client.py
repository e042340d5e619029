"""
Redis 存储适配器：连接池 + KeyValueStore 实现
"""

import redis.asyncio as aioredis

from todolist.config import Settings


def create_redis_client(settings: Settings) -> aioredis.Redis:
    """按配置创建带连接池的 Redis 客户端"""
    pool = aioredis.ConnectionPool.from_url(
        settings.REDIS_URL,
        max_connections=settings.REDIS_MAX_CONNECTIONS,
        decode_responses=True,
        socket_timeout=5,
        socket_connect_timeout=5,
        retry_on_timeout=True,
    )
    return aioredis.Redis(connection_pool=pool)


class RedisStore:
    """基于 Redis String 的 KeyValueStore"""

    def __init__(self, redis: aioredis.Redis):
        self.redis = redis

    async def get(self, key: str) -> str | None:
        return await self.redis.get(key)

    async def set(self, key: str, value: str) -> None:
        # 不设置过期时间：列表需要跨进程重启保留
        await self.redis.set(key, value)

    async def ping(self) -> bool:
        return bool(await self.redis.ping())

    async def aclose(self) -> None:
        await self.redis.aclose()
