"""
Feed composition.

Pure functions over full collections: given a viewer, the posts and the
users, decide which posts the viewer sees, in storage order (newest first).
Tag handling lives here too so that extraction at write time and splitting at
display time share one token grammar.
"""
import re
from typing import Dict, Iterable, List, NamedTuple, Optional

from retrospace.schemas import User, Post

TAG_PATTERN = re.compile(r"#[A-Za-z0-9_]+")


class Segment(NamedTuple):
    text: str
    is_tag: bool


def extract_tags(content: str) -> List[str]:
    """Distinct hashtag tokens in order of first appearance."""
    tags: List[str] = []
    for match in TAG_PATTERN.finditer(content):
        if match.group() not in tags:
            tags.append(match.group())
    return tags


def split_tags(content: str) -> List[Segment]:
    """Split content into plain-text and tag segments.
    
    Joining the segment texts gives back the original content, so a renderer
    can make every tag segment its own search link.
    """
    segments: List[Segment] = []
    position = 0
    for match in TAG_PATTERN.finditer(content):
        if match.start() > position:
            segments.append(Segment(content[position:match.start()], False))
        segments.append(Segment(match.group(), True))
        position = match.end()
    if position < len(content):
        segments.append(Segment(content[position:], False))
    return segments


def index_users(users: Iterable[User]) -> Dict[str, User]:
    return {user.id: user for user in users}


def is_visible(post: Post, viewer: Optional[User], users_by_id: Dict[str, User]) -> bool:
    """Block-driven visibility of one post for one viewer.
    
    Hidden when the viewer blocked the author or the author blocked the
    viewer. Anonymous viewers see everything, and an author missing from the
    user collection counts as not blocking anyone.
    """
    if viewer is None:
        return True
    if post.author_id in viewer.blocked_users:
        return False
    author = users_by_id.get(post.author_id)
    if author is not None and viewer.id in author.blocked_users:
        return False
    return True


def matches_query(post: Post, query: str) -> bool:
    needle = query.lower()
    content = post.content.lower()
    if needle.startswith("#"):
        # Tag set or plain text, either one is enough
        return any(tag.lower() == needle for tag in post.tags) or needle in content
    return (
        needle in content
        or needle in post.author_name.lower()
        or (post.title is not None and needle in post.title.lower())
    )


def compose_feed(
    viewer: Optional[User],
    posts: Iterable[Post],
    users: Iterable[User],
    query: Optional[str] = None,
) -> List[Post]:
    """Visible, search-filtered posts, input order preserved."""
    users_by_id = index_users(users)
    visible = [post for post in posts if is_visible(post, viewer, users_by_id)]
    if query:
        visible = [post for post in visible if matches_query(post, query)]
    return visible


def profile_feed(
    viewer: Optional[User],
    profile_id: str,
    posts: Iterable[Post],
    users: Iterable[User],
    query: Optional[str] = None,
) -> List[Post]:
    """The composed feed restricted to posts written by one user."""
    return [
        post for post in compose_feed(viewer, posts, users, query)
        if post.author_id == profile_id
    ]
