import logging
import random
from typing import Iterable, Optional

from retrospace.config import settings
from retrospace.core.errors import Forbidden, NotFound
from retrospace.schemas import User, new_id
from retrospace.services.gateway import PersistenceGateway
from retrospace.services.profile import PRESET_THEMES
from retrospace.services.session import SessionManager

logger = logging.getLogger(__name__)


class AccountService:
    """Signup, login and logout.
    
    Identity is a bare username lookup; there are no credentials.
    """
    
    def __init__(
        self,
        gateway: PersistenceGateway,
        session: SessionManager,
        reserved_usernames: Optional[Iterable[str]] = None,
    ):
        self.gateway = gateway
        self.session = session
        reserved = settings.reserved_usernames if reserved_usernames is None else reserved_usernames
        self.reserved = {name.lower() for name in reserved}
    
    async def signup(self, username: str) -> User:
        """Create an account and log it in.
        
        The very first account and reserved usernames become admins; nothing
        changes that flag afterwards. Raises ``Conflict`` when the name is
        taken in any letter case.
        """
        username = username.strip()
        if not username:
            raise ValueError("Username is required")
        
        existing = await self.gateway.get_users()
        user = User(
            id=new_id("user"),
            username=username,
            avatar_url=f"https://picsum.photos/150/150?random={random.randint(0, 10**9)}",
            tagline="New to Retrospace!",
            mood="New",
            is_online=True,
            theme=PRESET_THEMES[0].model_copy(deep=True),
            is_admin=not existing or username.lower() in self.reserved,
        )
        
        created = await self.gateway.create_user(user)
        await self.session.set_session(created.id)
        logger.info("Signed up %s (admin=%s)", created.username, created.is_admin)
        return created
    
    async def login(self, username: str) -> User:
        wanted = username.strip().lower()
        for user in await self.gateway.get_users():
            if user.username.lower() == wanted:
                if user.is_banned:
                    raise Forbidden(f"Account {user.username} is banned")
                await self.session.set_session(user.id)
                return user
        raise NotFound(f"User {username!r} not found")
    
    async def logout(self) -> None:
        await self.session.set_session(None)
