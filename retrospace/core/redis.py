from typing import Optional
from redis import asyncio as aioredis

from retrospace.core.store import KeyValueStore


class RedisStore(KeyValueStore):
    """Key-value store backed by redis, for clients sharing a local cache host."""
    
    def __init__(self, url: str, client: Optional[aioredis.Redis] = None):
        self.url = url
        self.redis: Optional[aioredis.Redis] = client
    
    async def open(self) -> None:
        """Initialize Redis connection."""
        if self.redis is None:
            self.redis = aioredis.from_url(
                self.url,
                encoding="utf-8",
                decode_responses=True,
            )
    
    async def close(self) -> None:
        """Close Redis connection."""
        if self.redis is not None:
            await self.redis.aclose()
            self.redis = None
    
    async def read(self, key: str) -> Optional[str]:
        return await self.redis.get(key)
    
    async def write(self, key: str, value: str) -> None:
        await self.redis.set(key, value)
    
    async def delete(self, key: str) -> None:
        await self.redis.delete(key)
