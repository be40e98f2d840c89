import asyncio
import logging
from typing import List, NamedTuple, Optional

from retrospace.backends import Backend, LocalBackend, RemoteBackend
from retrospace.core.errors import Conflict
from retrospace.schemas import User, Post, Message

logger = logging.getLogger(__name__)


class Snapshot(NamedTuple):
    """Full collections as returned by one reload."""
    
    users: List[User]
    posts: List[Post]
    messages: List[Message]


class PersistenceGateway:
    """Uniform CRUD facade over the remote service or the local fallback.
    
    The active backend is chosen once by ``connect()`` and held for the rest
    of the session. There is no failover later on: if the service goes away
    mid-session, calls raise ``Unreachable`` instead of silently switching to
    a store that may have diverged.
    """
    
    def __init__(self, local: LocalBackend, remote: Optional[RemoteBackend] = None):
        self.local = local
        self.remote = remote
        self._backend: Optional[Backend] = None
    
    async def connect(self) -> Backend:
        """Probe the remote service and fix the backend for this session."""
        if self._backend is not None:
            return self._backend
        
        if self.remote is not None and await self.remote.check_health():
            self._backend = self.remote
            logger.info("Using remote data service at %s", self.remote.base_url)
        else:
            self._backend = self.local
            logger.warning("Remote data service unavailable, using local store")
        return self._backend
    
    async def close(self) -> None:
        if self.remote is not None:
            await self.remote.close()
    
    @property
    def backend(self) -> Backend:
        if self._backend is None:
            raise RuntimeError("Gateway is not connected")
        return self._backend
    
    @property
    def online(self) -> bool:
        """Whether the remote service was reachable at startup."""
        return self._backend is not None and self._backend is self.remote
    
    async def reload(self) -> Snapshot:
        users, posts, messages = await asyncio.gather(
            self.get_users(), self.get_posts(), self.get_messages()
        )
        return Snapshot(users, posts, messages)
    
    # Users
    async def get_users(self) -> List[User]:
        return await self.backend.get_users()
    
    async def create_user(self, user: User) -> User:
        """Create a user unless the username is taken (case-insensitive).
        
        The check runs against a fresh read of the collection right before the
        insert. It is advisory only: two concurrent signups can both pass it.
        """
        latest = await self.backend.get_users()
        wanted = user.username.lower()
        if any(existing.username.lower() == wanted for existing in latest):
            raise Conflict(f"Username {user.username!r} is taken")
        return await self.backend.create_user(user)
    
    async def update_user(self, user: User) -> User:
        return await self.backend.update_user(user)
    
    # Posts
    async def get_posts(self) -> List[Post]:
        return await self.backend.get_posts()
    
    async def create_post(self, post: Post) -> Post:
        return await self.backend.create_post(post)
    
    async def update_post(self, post: Post) -> Post:
        return await self.backend.update_post(post)
    
    async def delete_post(self, post_id: str) -> None:
        await self.backend.delete_post(post_id)
    
    # Messages
    async def get_messages(self) -> List[Message]:
        return await self.backend.get_messages()
    
    async def create_message(self, message: Message) -> Message:
        return await self.backend.create_message(message)
    
    async def update_message(self, message: Message) -> Message:
        return await self.backend.update_message(message)
