from typing import Optional, List
from pydantic import Field
from retrospace.schemas.base import Entity


class UserTheme(Entity):
    """Profile presentation settings, opaque to the core and copied verbatim."""
    
    background_url: str = ""
    background_color: str = "#FFFFFF"
    font_family: str = "Arial, sans-serif"
    text_color: str = "#333333"
    header_color: str = "#E8FDC1"
    panel_color: str = "#FFFFFF"
    music_url: Optional[str] = None
    cursor_url: Optional[str] = None
    border_radius: Optional[str] = None


class User(Entity):
    id: str
    username: str = Field(..., min_length=1, max_length=50)
    avatar_url: str = ""
    tagline: str = ""
    bio: Optional[str] = None
    mood: str = ""
    is_online: bool = False
    top_friends: List[str] = Field(default_factory=list)
    theme: UserTheme = Field(default_factory=UserTheme)
    
    # Set at creation only
    is_admin: bool = False
    
    # Moderation; banned_until is epoch ms, None means permanent
    is_banned: bool = False
    banned_until: Optional[int] = None
    
    # Social graph, stored as lists without duplicates
    blocked_users: List[str] = Field(default_factory=list)
    followers: List[str] = Field(default_factory=list)
    following: List[str] = Field(default_factory=list)
    
    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username})>"
