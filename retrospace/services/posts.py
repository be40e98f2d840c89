from typing import Iterable, Optional

from retrospace.core.errors import Forbidden
from retrospace.schemas import User, Post, PostType, Comment, new_id, display_time
from retrospace.services.feed import extract_tags, index_users, is_visible
from retrospace.services.gateway import PersistenceGateway
from retrospace.services.moderation import ensure_active


class PostService:
    """Post writes: create, edit, comment, like.
    
    Every method builds the whole updated Post and hands it to the gateway;
    callers reload afterwards. Comments and likes are refused across a block
    in either direction, the same rule that hides the post from the feed.
    """
    
    def __init__(self, gateway: PersistenceGateway):
        self.gateway = gateway
    
    async def create_post(
        self,
        author: User,
        content: str,
        post_type: PostType = "status",
        title: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Post:
        ensure_active(author)
        if not content.strip():
            raise ValueError("Post content is required")
        
        is_blog = post_type == "blog"
        post = Post(
            id=new_id("p"),
            type=post_type,
            author_id=author.id,
            author_name=author.username,
            author_avatar=author.avatar_url,
            title=(title or "Untitled") if is_blog else None,
            category=(category or "Life") if is_blog else None,
            content=content,
            timestamp=display_time(),
            tags=extract_tags(content),
        )
        return await self.gateway.create_post(post)
    
    async def edit_post(self, actor: User, post: Post, content: str) -> Post:
        ensure_active(actor)
        if post.author_id != actor.id:
            raise Forbidden("Only the author can edit a post")
        if not content.strip():
            raise ValueError("Post content is required")
        
        edited = post.model_copy(update={
            "content": content,
            "tags": extract_tags(content),
            "is_edited": True,
        })
        return await self.gateway.update_post(edited)
    
    async def add_comment(
        self, actor: User, post: Post, text: str, users: Iterable[User]
    ) -> Post:
        self._check_interaction(actor, post, users)
        if not text.strip():
            raise ValueError("Comment is empty")
        
        comment = Comment(
            id=new_id("c"),
            author_id=actor.id,
            author_name=actor.username,
            content=text,
        )
        return await self.gateway.update_post(
            post.model_copy(update={"comments": [*post.comments, comment]})
        )
    
    async def toggle_like(self, actor: User, post: Post, users: Iterable[User]) -> Post:
        self._check_interaction(actor, post, users)
        if actor.id in post.likes:
            likes = [uid for uid in post.likes if uid != actor.id]
        else:
            likes = [*post.likes, actor.id]
        return await self.gateway.update_post(post.model_copy(update={"likes": likes}))
    
    @staticmethod
    def _check_interaction(actor: User, post: Post, users: Iterable[User]) -> None:
        ensure_active(actor)
        if not is_visible(post, actor, index_users(users)):
            raise Forbidden("Cannot interact with this post")
