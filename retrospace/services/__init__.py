from retrospace.services.gateway import PersistenceGateway, Snapshot
from retrospace.services.session import SessionManager
from retrospace.services.graph import SocialGraph, toggle_follow, toggle_block
from retrospace.services.feed import (
    Segment, extract_tags, split_tags, is_visible, matches_query, compose_feed, profile_feed
)
from retrospace.services.moderation import Moderation, PERMANENT, ensure_active, ensure_admin, ban_expired
from retrospace.services.profile import ProfileEditor, PRESET_THEMES, top_friends
from retrospace.services.accounts import AccountService
from retrospace.services.posts import PostService
from retrospace.services.replies import AutoReplier, TextGenerator, CannedTextGenerator
from retrospace.services.messages import MessageService, inbox, unread_count

__all__ = [
    "PersistenceGateway", "Snapshot", "SessionManager",
    "SocialGraph", "toggle_follow", "toggle_block",
    "Segment", "extract_tags", "split_tags", "is_visible", "matches_query",
    "compose_feed", "profile_feed",
    "Moderation", "PERMANENT", "ensure_active", "ensure_admin", "ban_expired",
    "ProfileEditor", "PRESET_THEMES", "top_friends",
    "AccountService", "PostService",
    "AutoReplier", "TextGenerator", "CannedTextGenerator",
    "MessageService", "inbox", "unread_count",
]
