"""
Simulated friend replies.

Shortly after a post is published, another user "replies" with text supplied
by an external generator. The reply task races with moderation: the post may
be deleted before the reply lands, which is treated as a silent no-op.
"""
import asyncio
import logging
import random
from typing import List, Optional, Protocol

from retrospace.config import settings
from retrospace.core.errors import NotFound
from retrospace.schemas import User, Post, Comment, new_id
from retrospace.services.gateway import PersistenceGateway

logger = logging.getLogger(__name__)

FALLBACK_COMMENT = "omg cool post!!"


class TextGenerator(Protocol):
    async def comment_for(self, content: str) -> str:
        ...


class CannedTextGenerator:
    """Generator used when no external text service is configured."""
    
    async def comment_for(self, content: str) -> str:
        return FALLBACK_COMMENT


class AutoReplier:
    def __init__(
        self,
        gateway: PersistenceGateway,
        generator: Optional[TextGenerator] = None,
        delay: Optional[float] = None,
        probability: Optional[float] = None,
        rng: Optional[random.Random] = None,
    ):
        self.gateway = gateway
        self.generator = generator or CannedTextGenerator()
        self.delay = settings.auto_reply_delay if delay is None else delay
        self.probability = settings.auto_reply_probability if probability is None else probability
        self.rng = rng or random.Random()
    
    def candidates_for(self, author: User, users: List[User]) -> List[User]:
        """Users who may reply to a new post by ``author``.
        
        Empty when there is nobody to reply or the dice say no this time.
        """
        candidates = [
            user for user in users
            if user.id != author.id and user.id not in author.blocked_users
        ]
        if not candidates or self.rng.random() >= self.probability:
            return []
        return candidates
    
    async def reply(self, post_id: str, candidates: List[User]) -> Optional[Post]:
        await asyncio.sleep(self.delay)
        
        target = next((p for p in await self.gateway.get_posts() if p.id == post_id), None)
        if target is None:
            logger.debug("Post %s is gone, skipping auto reply", post_id)
            return None
        
        text = await self._generate(target.content)
        friend = self.rng.choice(candidates)
        comment = Comment(
            id=new_id("c"),
            author_id=friend.id,
            author_name=friend.username,
            content=text,
        )
        try:
            return await self.gateway.update_post(
                target.model_copy(update={"comments": [*target.comments, comment]})
            )
        except NotFound:
            logger.debug("Post %s deleted before the auto reply landed", post_id)
            return None
    
    async def _generate(self, content: str) -> str:
        try:
            text = await self.generator.comment_for(content)
        except Exception as exc:
            logger.warning("Text generator failed: %s, using canned reply", exc)
            return FALLBACK_COMMENT
        return text.strip().strip("\"'") or FALLBACK_COMMENT
