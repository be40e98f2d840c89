import logging
from typing import Callable, Optional

from retrospace.core.errors import Forbidden, NotFound
from retrospace.schemas import User, now_ms
from retrospace.services.gateway import PersistenceGateway
from retrospace.services.session import SessionManager

logger = logging.getLogger(__name__)

PERMANENT = -1


def ensure_active(user: User) -> None:
    """Ban gate checked on entry to every write action.
    
    ``banned_until`` is not consulted: an expired ban still blocks until an
    admin lifts it.
    """
    if user.is_banned:
        raise Forbidden(f"Account {user.username} is suspended")


def ensure_admin(user: User) -> None:
    ensure_active(user)
    if not user.is_admin:
        raise Forbidden(f"{user.username} is not an administrator")


def ban_expired(user: User, now: Optional[int] = None) -> bool:
    """Whether a timed ban has run out. Informational only, nothing unbans."""
    if not user.is_banned or user.banned_until is None:
        return False
    return user.banned_until <= (now if now is not None else now_ms())


class Moderation:
    """Ban, unban, post removal and the local wipe."""
    
    def __init__(
        self,
        gateway: PersistenceGateway,
        session: SessionManager,
        clock: Callable[[], int] = now_ms,
    ):
        self.gateway = gateway
        self.session = session
        self.clock = clock
    
    async def _get_user(self, user_id: str) -> User:
        for user in await self.gateway.get_users():
            if user.id == user_id:
                return user
        raise NotFound(f"User {user_id} not found")
    
    async def ban(self, user_id: str, duration_minutes: int) -> User:
        user = await self._get_user(user_id)
        until = None if duration_minutes == PERMANENT else self.clock() + duration_minutes * 60_000
        banned = user.model_copy(update={"is_banned": True, "banned_until": until})
        logger.info("Banning %s until %s", user_id, until or "further notice")
        return await self.gateway.update_user(banned)
    
    async def unban(self, user_id: str) -> User:
        user = await self._get_user(user_id)
        logger.info("Unbanning %s", user_id)
        return await self.gateway.update_user(user.model_copy(update={"is_banned": False}))
    
    async def delete_post(self, post_id: str) -> None:
        logger.info("Deleting post %s", post_id)
        await self.gateway.delete_post(post_id)
    
    async def wipe_local(self) -> None:
        """Clear the local collections and the session. Remote data is untouched."""
        await self.gateway.local.clear()
        await self.session.set_session(None)
        logger.warning("Local store wiped")
