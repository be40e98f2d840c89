"""
Follow and block relationships.

Edges live as mirrored id lists on both User records (``following`` on one
side, ``followers`` on the other). Toggles are computed on in-memory copies
first, then persisted as separate writes, and callers reload afterwards to
observe the result. The writes are not atomic: if the second one fails the
edge is one-sided until the same toggle is issued again.
"""
import logging
from typing import List, Tuple

from retrospace.schemas import User
from retrospace.services.gateway import PersistenceGateway

logger = logging.getLogger(__name__)


def _with(ids: List[str], value: str) -> List[str]:
    return ids if value in ids else [*ids, value]


def _without(ids: List[str], value: str) -> List[str]:
    return [item for item in ids if item != value]


def toggle_follow(viewer: User, target: User) -> Tuple[User, User]:
    """Flip the viewer -> target follow edge on both records."""
    if viewer.id == target.id:
        return viewer, target
    
    if target.id in viewer.following:
        return (
            viewer.model_copy(update={"following": _without(viewer.following, target.id)}),
            target.model_copy(update={"followers": _without(target.followers, viewer.id)}),
        )
    
    # A blocked user is never followed
    if target.id in viewer.blocked_users:
        return viewer, target
    
    return (
        viewer.model_copy(update={"following": _with(viewer.following, target.id)}),
        target.model_copy(update={"followers": _with(target.followers, viewer.id)}),
    )


def toggle_block(viewer: User, target: User) -> Tuple[User, User]:
    """Flip ``target`` in the viewer's block list.
    
    Blocking drops the viewer's follow edge to the target; unblocking leaves
    it dropped.
    """
    if viewer.id == target.id:
        return viewer, target
    
    if target.id in viewer.blocked_users:
        return (
            viewer.model_copy(update={"blocked_users": _without(viewer.blocked_users, target.id)}),
            target,
        )
    
    if target.id in viewer.following:
        viewer, target = toggle_follow(viewer, target)
    
    return (
        viewer.model_copy(update={"blocked_users": _with(viewer.blocked_users, target.id)}),
        target,
    )


class SocialGraph:
    """Applies graph toggles and persists the touched records."""
    
    def __init__(self, gateway: PersistenceGateway):
        self.gateway = gateway
    
    async def follow(self, viewer: User, target: User) -> Tuple[User, User]:
        updated_viewer, updated_target = toggle_follow(viewer, target)
        await self._persist((viewer, updated_viewer), (target, updated_target))
        return updated_viewer, updated_target
    
    async def block(self, viewer: User, target: User) -> Tuple[User, User]:
        updated_viewer, updated_target = toggle_block(viewer, target)
        await self._persist((viewer, updated_viewer), (target, updated_target))
        return updated_viewer, updated_target
    
    async def _persist(self, *changes: Tuple[User, User]) -> None:
        # Viewer first, then target; each is its own write
        for before, after in changes:
            if after != before:
                await self.gateway.update_user(after)
                logger.debug("Persisted graph change for %s", after.id)
