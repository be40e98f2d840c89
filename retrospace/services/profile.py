import asyncio
import logging
from typing import Iterable, List

from retrospace.core.errors import RetrospaceError
from retrospace.schemas import User, UserTheme
from retrospace.services.gateway import PersistenceGateway
from retrospace.services.moderation import ensure_active

logger = logging.getLogger(__name__)

PRESET_THEMES: List[UserTheme] = [
    UserTheme(border_radius="0px", background_color="#FFFFFF", font_family="Arial, sans-serif",
              text_color="#333333", header_color="#E8FDC1", panel_color="#FFFFFF"),
    UserTheme(border_radius="0px", background_color="#000000", font_family="Courier New, monospace",
              text_color="#00FF00", header_color="#111111", panel_color="#1a1a1a"),
    UserTheme(border_radius="15px", background_color="#ffeaf4", font_family="Comic Sans MS",
              text_color="#d63384", header_color="#ffb3d9", panel_color="#fff0f5"),
    UserTheme(border_radius="4px", background_color="#f0f0f0", font_family="Verdana, sans-serif",
              text_color="#000066", header_color="#ccccff", panel_color="#ffffff"),
]

PROFILE_FIELDS = {"avatar_url", "tagline", "bio", "mood", "top_friends", "is_online"}


def top_friends(profile: User, users: Iterable[User]) -> List[User]:
    """Resolve ``top_friends`` ids in display order, skipping unknown ids."""
    users_by_id = {user.id: user for user in users}
    return [users_by_id[uid] for uid in profile.top_friends if uid in users_by_id]


class ProfileEditor:
    """Profile and theme edits.
    
    Field edits are optimistic: ``edit_profile``/``edit_theme`` only build the
    updated record, the caller swaps it into its in-memory view and hands it
    to ``persist_in_background``. Background writes land one at a time in the
    order they were issued. A failed write is logged and the next full
    reload brings back the stored state.
    """
    
    def __init__(self, gateway: PersistenceGateway):
        self.gateway = gateway
        self._write_lock = asyncio.Lock()
    
    def edit_profile(self, user: User, **fields) -> User:
        ensure_active(user)
        unknown = set(fields) - PROFILE_FIELDS
        if unknown:
            raise ValueError(f"Not editable: {', '.join(sorted(unknown))}")
        return user.model_copy(update=fields)
    
    def edit_theme(self, user: User, **fields) -> User:
        ensure_active(user)
        unknown = set(fields) - set(UserTheme.model_fields)
        if unknown:
            raise ValueError(f"Unknown theme fields: {', '.join(sorted(unknown))}")
        return user.model_copy(update={"theme": user.theme.model_copy(update=fields)})
    
    def persist_in_background(self, user: User) -> asyncio.Task:
        return asyncio.create_task(self._persist(user))
    
    async def _persist(self, user: User) -> None:
        async with self._write_lock:
            try:
                await self.gateway.update_user(user)
            except RetrospaceError as exc:
                logger.warning("Profile write for %s failed, kept until reload: %s", user.id, exc)
    
    async def apply_preset(self, user: User, index: int) -> User:
        ensure_active(user)
        theme = PRESET_THEMES[index].model_copy(deep=True)
        return await self.gateway.update_user(user.model_copy(update={"theme": theme}))
