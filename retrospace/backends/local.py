import asyncio
import logging
from typing import List, Type, TypeVar

from pydantic import ValidationError

from retrospace.backends.base import Backend
from retrospace.core.errors import Malformed, NotFound
from retrospace.core.store import KeyValueStore
from retrospace.schemas import Entity, User, Post, Message

logger = logging.getLogger(__name__)

USERS_KEY = "retrospace_users_v1"
POSTS_KEY = "retrospace_posts_v1"
MESSAGES_KEY = "retrospace_messages_v1"

E = TypeVar("E", bound=Entity)


class LocalBackend(Backend):
    """Fallback backend keeping each collection as one JSON document.
    
    Absent or unreadable documents read as empty collections; the store is
    owned by the caller, so ``start``/``close`` leave it alone. Every write is
    a read-modify-write of a whole collection and runs under one lock, so
    background tasks never write back a list read before another write.
    """
    
    name = "local"
    
    def __init__(self, store: KeyValueStore):
        self.store = store
        self._lock = asyncio.Lock()
    
    async def _load(self, key: str, schema: Type[E]) -> List[E]:
        try:
            documents = await self.store.read_json(key)
        except Malformed as exc:
            logger.warning("Discarding malformed collection %s: %s", key, exc)
            return []
        
        if documents is None:
            return []
        if not isinstance(documents, list):
            logger.warning("Discarding malformed collection %s: not a list", key)
            return []
        
        try:
            return [schema.from_document(doc) for doc in documents]
        except ValidationError as exc:
            logger.warning("Discarding malformed collection %s: %s", key, exc)
            return []
    
    async def _save(self, key: str, records: List[Entity]) -> None:
        await self.store.write_json(key, [record.to_document() for record in records])
    
    async def _replace(self, key: str, schema: Type[E], record: E) -> E:
        async with self._lock:
            records = await self._load(key, schema)
            for index, existing in enumerate(records):
                if existing.id == record.id:
                    records[index] = record
                    await self._save(key, records)
                    return record
        raise NotFound(f"{schema.__name__} {record.id} not found")
    
    # Users
    async def get_users(self) -> List[User]:
        return await self._load(USERS_KEY, User)
    
    async def create_user(self, user: User) -> User:
        async with self._lock:
            users = await self.get_users()
            users.append(user)
            await self._save(USERS_KEY, users)
        return user
    
    async def update_user(self, user: User) -> User:
        return await self._replace(USERS_KEY, User, user)
    
    # Posts
    async def get_posts(self) -> List[Post]:
        return await self._load(POSTS_KEY, Post)
    
    async def create_post(self, post: Post) -> Post:
        async with self._lock:
            posts = await self.get_posts()
            posts.insert(0, post)  # Newest first
            await self._save(POSTS_KEY, posts)
        return post
    
    async def update_post(self, post: Post) -> Post:
        return await self._replace(POSTS_KEY, Post, post)
    
    async def delete_post(self, post_id: str) -> None:
        async with self._lock:
            posts = await self.get_posts()
            remaining = [post for post in posts if post.id != post_id]
            if len(remaining) != len(posts):
                await self._save(POSTS_KEY, remaining)
    
    # Messages
    async def get_messages(self) -> List[Message]:
        return await self._load(MESSAGES_KEY, Message)
    
    async def create_message(self, message: Message) -> Message:
        async with self._lock:
            messages = await self.get_messages()
            messages.append(message)
            await self._save(MESSAGES_KEY, messages)
        return message
    
    async def update_message(self, message: Message) -> Message:
        return await self._replace(MESSAGES_KEY, Message, message)
    
    async def clear(self) -> None:
        """Drop the three local collections."""
        async with self._lock:
            for key in (USERS_KEY, POSTS_KEY, MESSAGES_KEY):
                await self.store.delete(key)
