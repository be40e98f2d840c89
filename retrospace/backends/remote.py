"""
Remote data service client.

Talks JSON over HTTP to the service in ``retrospace.main``. Only the
reachability probe carries a timeout; regular calls wait for the service.
Transport failures surface as ``Unreachable`` and are never retried here.
"""
import logging
from typing import Any, List, Optional, Type

import httpx
from pydantic import ValidationError

from retrospace.backends.base import Backend
from retrospace.core.errors import Conflict, Malformed, NotFound, Unreachable
from retrospace.schemas import Entity, User, Post, Message

logger = logging.getLogger(__name__)


class RemoteBackend(Backend):
    name = "remote"
    
    def __init__(
        self,
        base_url: str,
        probe_timeout: float = 2.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url
        self.probe_timeout = probe_timeout
        self._http = client
        self._owns_client = client is None
    
    async def start(self) -> None:
        if self._http is None:
            self._http = httpx.AsyncClient(base_url=self.base_url, timeout=None)
    
    async def close(self) -> None:
        if self._http is not None and self._owns_client:
            await self._http.aclose()
            self._http = None
    
    async def check_health(self) -> bool:
        """Single reachability probe; any answer other than 2xx counts as down."""
        await self.start()
        try:
            resp = await self._http.get("/health", timeout=self.probe_timeout)
        except httpx.HTTPError as exc:
            logger.info("Remote service at %s unreachable: %s", self.base_url, exc)
            return False
        return resp.is_success
    
    async def _request(self, method: str, path: str, payload: Any = None) -> Any:
        try:
            resp = await self._http.request(method, path, json=payload)
        except httpx.HTTPError as exc:
            raise Unreachable(f"{method} {path} failed: {exc}") from exc
        
        if resp.status_code == 404:
            raise NotFound(_detail(resp))
        if resp.status_code == 409:
            raise Conflict(_detail(resp))
        if resp.is_error:
            raise Unreachable(f"{method} {path} returned {resp.status_code}")
        
        try:
            return resp.json()
        except ValueError as exc:
            raise Malformed(f"{method} {path} returned invalid JSON") from exc
    
    async def _fetch(self, path: str, schema: Type[Entity]) -> list:
        documents = await self._request("GET", path)
        try:
            return [schema.from_document(doc) for doc in documents]
        except (TypeError, ValidationError) as exc:
            raise Malformed(f"GET {path} returned unexpected records") from exc
    
    async def _send(self, method: str, path: str, record: Entity) -> Entity:
        document = await self._request(method, path, record.to_document())
        try:
            return type(record).from_document(document)
        except (TypeError, ValidationError) as exc:
            raise Malformed(f"{method} {path} returned an unexpected record") from exc
    
    # Users
    async def get_users(self) -> List[User]:
        return await self._fetch("/users", User)
    
    async def create_user(self, user: User) -> User:
        return await self._send("POST", "/users", user)
    
    async def update_user(self, user: User) -> User:
        return await self._send("PUT", f"/users/{user.id}", user)
    
    # Posts
    async def get_posts(self) -> List[Post]:
        return await self._fetch("/posts", Post)
    
    async def create_post(self, post: Post) -> Post:
        return await self._send("POST", "/posts", post)
    
    async def update_post(self, post: Post) -> Post:
        return await self._send("PUT", f"/posts/{post.id}", post)
    
    async def delete_post(self, post_id: str) -> None:
        await self._request("DELETE", f"/posts/{post_id}")
    
    # Messages
    async def get_messages(self) -> List[Message]:
        return await self._fetch("/messages", Message)
    
    async def create_message(self, message: Message) -> Message:
        return await self._send("POST", "/messages", message)
    
    async def update_message(self, message: Message) -> Message:
        return await self._send("PUT", f"/messages/{message.id}", message)


def _detail(resp: httpx.Response) -> str:
    try:
        return str(resp.json().get("detail", resp.text))
    except (ValueError, AttributeError):
        return resp.text
