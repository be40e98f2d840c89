"""
Client-side entry point.

``Retrospace`` owns the local store, the gateway and the in-memory snapshot of
users, posts and messages. Every mutating action runs the relevant service
and then reloads all three collections; the snapshot is never patched in
place except by optimistic profile edits, which the next reload reconciles.
Issued profile writes always finish: later actions and reloads wait for them
first, and so does ``close()``.
"""
import asyncio
import logging
from typing import Coroutine, List, Optional, Set

from retrospace.backends import LocalBackend, RemoteBackend
from retrospace.config import settings
from retrospace.core.errors import Forbidden, NotFound
from retrospace.core.redis import RedisStore
from retrospace.core.store import FileStore, KeyValueStore
from retrospace.schemas import User, Post, Message, PostType
from retrospace.services import (
    PersistenceGateway, SessionManager, SocialGraph, Moderation, ProfileEditor,
    AccountService, PostService, AutoReplier, TextGenerator, MessageService,
    compose_feed, profile_feed, inbox, unread_count, ensure_active, ensure_admin,
)

logger = logging.getLogger(__name__)


class Retrospace:
    def __init__(
        self,
        store: KeyValueStore,
        remote: Optional[RemoteBackend] = None,
        replier: Optional[AutoReplier] = None,
    ):
        self.store = store
        self.gateway = PersistenceGateway(LocalBackend(store), remote)
        self.session = SessionManager(store)
        self.accounts = AccountService(self.gateway, self.session)
        self.graph = SocialGraph(self.gateway)
        self.posts_service = PostService(self.gateway)
        self.messages_service = MessageService(self.gateway)
        self.moderation = Moderation(self.gateway, self.session)
        self.profile = ProfileEditor(self.gateway)
        self.replier = replier or AutoReplier(self.gateway)

        self.users: List[User] = []
        self.posts: List[Post] = []
        self.messages: List[Message] = []
        self.current_user_id: Optional[str] = None
        self._replies: Set[asyncio.Task] = set()
        self._writes: Set[asyncio.Task] = set()

    @classmethod
    def from_settings(cls, generator: Optional[TextGenerator] = None) -> "Retrospace":
        """Build a client from configuration: file or redis store plus the remote service."""
        if settings.redis_url:
            store = RedisStore(settings.redis_url)
        else:
            store = FileStore(settings.local_store_path)
        remote = RemoteBackend(settings.remote_url, probe_timeout=settings.health_timeout)
        client = cls(store, remote)
        if generator is not None:
            client.replier.generator = generator
        return client

    # Lifecycle
    async def start(self) -> None:
        """Open the store, pick the backend, load data and restore the session."""
        await self.store.open()
        await self.gateway.connect()
        await self.reload()
        self.current_user_id = await self.session.restore(self.users)

    async def close(self) -> None:
        """Finish issued profile writes, drop pending replies, release resources."""
        await self._flush_writes()
        for task in list(self._replies):
            task.cancel()
        await asyncio.gather(*self._replies, return_exceptions=True)
        await self.gateway.close()
        await self.store.close()

    async def reload(self) -> None:
        await self._flush_writes()
        self.users, self.posts, self.messages = await self.gateway.reload()

    def _background(self, coro: Coroutine) -> asyncio.Task:
        return _track(self._replies, asyncio.create_task(coro))

    async def _flush_writes(self) -> None:
        # Issued writes always run to completion; failures are logged by the editor
        await asyncio.gather(*self._writes)

    # Lookups
    @property
    def online(self) -> bool:
        return self.gateway.online

    @property
    def current_user(self) -> Optional[User]:
        return next((u for u in self.users if u.id == self.current_user_id), None)

    @property
    def suspended(self) -> bool:
        """Whether only the suspension view may be shown."""
        user = self.current_user
        return user is not None and user.is_banned

    def find_user(self, user_id: str) -> User:
        for user in self.users:
            if user.id == user_id:
                return user
        raise NotFound(f"User {user_id} not found")

    def find_post(self, post_id: str) -> Post:
        for post in self.posts:
            if post.id == post_id:
                return post
        raise NotFound(f"Post {post_id} not found")

    async def _acting(self) -> User:
        """The acting user, once earlier optimistic writes have landed."""
        await self._flush_writes()
        return self._actor()

    def _actor(self) -> User:
        user = self.current_user
        if user is None:
            raise Forbidden("Not logged in")
        ensure_active(user)
        return user

    async def _admin(self) -> User:
        user = await self._acting()
        ensure_admin(user)
        return user

    # Reads
    def feed(self, query: Optional[str] = None) -> List[Post]:
        return compose_feed(self.current_user, self.posts, self.users, query)

    def profile_posts(self, profile_id: str, query: Optional[str] = None) -> List[Post]:
        return profile_feed(self.current_user, profile_id, self.posts, self.users, query)

    def inbox(self) -> List[Message]:
        user = self.current_user
        return inbox(user, self.messages) if user else []

    def unread_count(self) -> int:
        user = self.current_user
        return unread_count(user, self.messages) if user else 0

    # Accounts
    async def signup(self, username: str) -> User:
        user = await self.accounts.signup(username)
        await self.reload()
        self.current_user_id = user.id
        return user

    async def login(self, username: str) -> User:
        user = await self.accounts.login(username)
        await self.reload()
        self.current_user_id = user.id
        return user

    async def logout(self) -> None:
        await self.accounts.logout()
        self.current_user_id = None

    # Posts
    async def publish(
        self,
        content: str,
        post_type: PostType = "status",
        title: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Post:
        author = await self._acting()
        post = await self.posts_service.create_post(author, content, post_type, title, category)
        await self.reload()

        candidates = self.replier.candidates_for(author, self.users)
        if candidates:
            self._background(self._auto_reply(post.id, candidates))
        return post

    async def _auto_reply(self, post_id: str, candidates: List[User]) -> None:
        if await self.replier.reply(post_id, candidates) is not None:
            await self.reload()

    async def edit_post(self, post_id: str, content: str) -> Post:
        post = await self.posts_service.edit_post(await self._acting(), self.find_post(post_id), content)
        await self.reload()
        return post

    async def comment(self, post_id: str, text: str) -> Post:
        post = await self.posts_service.add_comment(
            await self._acting(), self.find_post(post_id), text, self.users
        )
        await self.reload()
        return post

    async def like(self, post_id: str) -> Post:
        post = await self.posts_service.toggle_like(await self._acting(), self.find_post(post_id), self.users)
        await self.reload()
        return post

    # Social graph
    async def follow(self, target_id: str) -> None:
        await self.graph.follow(await self._acting(), self.find_user(target_id))
        await self.reload()

    async def block(self, target_id: str) -> None:
        await self.graph.block(await self._acting(), self.find_user(target_id))
        await self.reload()

    # Messages
    async def send_message(self, receiver_id: str, content: str) -> Message:
        message = await self.messages_service.send(await self._acting(), receiver_id, content)
        await self.reload()
        return message

    async def mark_read(self, message_id: str) -> Message:
        viewer = await self._acting()
        message = next((m for m in self.messages if m.id == message_id), None)
        if message is None:
            raise NotFound(f"Message {message_id} not found")
        message = await self.messages_service.mark_read(viewer, message)
        await self.reload()
        return message

    # Profile
    async def apply_theme_preset(self, index: int) -> User:
        user = await self.profile.apply_preset(await self._acting(), index)
        await self.reload()
        return user

    def update_profile(self, **fields) -> User:
        """Optimistic profile edit; see ``_apply_optimistic``."""
        return self._apply_optimistic(self.profile.edit_profile(self._actor(), **fields))

    def update_theme(self, **fields) -> User:
        """Optimistic theme edit; see ``_apply_optimistic``."""
        return self._apply_optimistic(self.profile.edit_theme(self._actor(), **fields))

    def _apply_optimistic(self, updated: User) -> User:
        # Visible right away; the write runs on its own and is not awaited
        self.users = [updated if u.id == updated.id else u for u in self.users]
        _track(self._writes, self.profile.persist_in_background(updated))
        return updated

    # Moderation
    async def ban(self, user_id: str, duration_minutes: int) -> User:
        await self._admin()
        user = await self.moderation.ban(user_id, duration_minutes)
        await self.reload()
        return user

    async def unban(self, user_id: str) -> User:
        await self._admin()
        user = await self.moderation.unban(user_id)
        await self.reload()
        return user

    async def delete_post(self, post_id: str) -> None:
        await self._admin()
        await self.moderation.delete_post(post_id)
        await self.reload()

    async def wipe_local(self) -> None:
        await self._admin()
        await self.moderation.wipe_local()
        self.current_user_id = None
        await self.reload()


def _track(tasks: Set[asyncio.Task], task: asyncio.Task) -> asyncio.Task:
    tasks.add(task)
    task.add_done_callback(tasks.discard)
    return task
