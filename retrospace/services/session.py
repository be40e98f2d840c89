import logging
from typing import Iterable, Optional

from retrospace.core.errors import Malformed
from retrospace.core.store import KeyValueStore
from retrospace.schemas import User

logger = logging.getLogger(__name__)

SESSION_KEY = "retrospace_session_v1"


class SessionManager:
    """Remembers the current viewer id in the local store.
    
    Always uses the local store, whichever data backend is active.
    """
    
    def __init__(self, store: KeyValueStore):
        self.store = store
    
    async def get_session(self) -> Optional[str]:
        try:
            user_id = await self.store.read_json(SESSION_KEY)
        except Malformed as exc:
            logger.warning("Ignoring malformed session: %s", exc)
            return None
        return user_id if isinstance(user_id, str) and user_id else None
    
    async def set_session(self, user_id: Optional[str]) -> None:
        if user_id:
            await self.store.write_json(SESSION_KEY, user_id)
        else:
            await self.store.delete(SESSION_KEY)
    
    async def restore(self, users: Iterable[User]) -> Optional[str]:
        """Return the stored viewer id if that user still exists."""
        user_id = await self.get_session()
        if user_id is None:
            return None
        if any(user.id == user_id for user in users):
            return user_id
        logger.info("Session user %s no longer exists, starting logged out", user_id)
        return None
