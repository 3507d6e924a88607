"""
Redis connection setup using redis-py async client.

Provides a shared redis instance used for admin login throttling.
Use a ``rediss://`` URL to connect over TLS.
"""

import redis.asyncio as aioredis

from ecodeli_admin.config import settings

redis = aioredis.from_url(settings.REDIS_URL, decode_responses=True)


async def get_redis() -> aioredis.Redis:
    """FastAPI dependency that provides the Redis client."""
    return redis
