from retrospace.schemas.base import Entity, new_id, now_ms, display_time
from retrospace.schemas.user import User, UserTheme
from retrospace.schemas.post import Post, PostType, Comment
from retrospace.schemas.message import Message

__all__ = [
    "Entity", "new_id", "now_ms", "display_time",
    "User", "UserTheme", "Post", "PostType", "Comment", "Message",
]
