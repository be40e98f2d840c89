from abc import ABC, abstractmethod
from typing import List

from retrospace.schemas import User, Post, Message


class Backend(ABC):
    """CRUD surface shared by the remote service client and the local store.
    
    Writes are whole-record: callers build the full updated entity and hand it
    over. Backends do not cache and do not enforce username uniqueness; the
    gateway above them does.
    """
    
    name: str = "backend"
    
    async def start(self) -> None:
        """Acquire connections."""
    
    async def close(self) -> None:
        """Release connections."""
    
    # Users
    @abstractmethod
    async def get_users(self) -> List[User]:
        ...
    
    @abstractmethod
    async def create_user(self, user: User) -> User:
        ...
    
    @abstractmethod
    async def update_user(self, user: User) -> User:
        ...
    
    # Posts
    @abstractmethod
    async def get_posts(self) -> List[Post]:
        ...
    
    @abstractmethod
    async def create_post(self, post: Post) -> Post:
        ...
    
    @abstractmethod
    async def update_post(self, post: Post) -> Post:
        ...
    
    @abstractmethod
    async def delete_post(self, post_id: str) -> None:
        ...
    
    # Messages
    @abstractmethod
    async def get_messages(self) -> List[Message]:
        ...
    
    @abstractmethod
    async def create_message(self, message: Message) -> Message:
        ...
    
    @abstractmethod
    async def update_message(self, message: Message) -> Message:
        ...
