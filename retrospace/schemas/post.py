from typing import Optional, List, Literal
from pydantic import Field
from retrospace.schemas.base import Entity

PostType = Literal["status", "blog"]


class Comment(Entity):
    id: str
    author_id: str
    author_name: str       # Snapshot taken when the comment is written
    content: str
    timestamp: str = "just now"


class Post(Entity):
    id: str
    type: PostType = "status"
    author_id: str
    
    # Snapshotted at creation, never refreshed from the author record
    author_name: str
    author_avatar: str = ""
    
    # Blog only
    title: Optional[str] = None
    category: Optional[str] = None
    
    content: str
    timestamp: str = ""
    comments: List[Comment] = Field(default_factory=list)
    likes: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    is_edited: bool = False
    
    def __repr__(self) -> str:
        return f"<Post(id={self.id}, author_id={self.author_id})>"
