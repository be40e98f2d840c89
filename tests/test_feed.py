import pytest

from retrospace.services import (
    Segment, compose_feed, extract_tags, is_visible, matches_query, profile_feed, split_tags
)
from retrospace.services.graph import toggle_block


class TestTags:
    """Hashtag grammar tests."""

    def test_extract(self):
        assert extract_tags("going to the #mall with #friends") == ["#mall", "#friends"]

    def test_extract_distinct_in_order(self):
        assert extract_tags("#a #b #a #under_score #b2!") == ["#a", "#b", "#under_score", "#b2"]

    def test_extract_none(self):
        assert extract_tags("no tags # here either") == []

    def test_split_segments(self):
        segments = split_tags("going to the #mall with #friends!")

        assert segments == [
            Segment("going to the ", False),
            Segment("#mall", True),
            Segment(" with ", False),
            Segment("#friends", True),
            Segment("!", False),
        ]

    def test_split_rejoins_to_content(self):
        content = "#start middle#glued end #tail"

        segments = split_tags(content)

        assert "".join(s.text for s in segments) == content
        assert [s.text for s in segments if s.is_tag] == extract_tags(content)

    def test_split_plain_text(self):
        assert split_tags("just words") == [Segment("just words", False)]
        assert split_tags("") == []


class TestVisibility:
    """Block-driven visibility tests."""

    def test_anonymous_sees_everything(self, make_user, make_post):
        author = make_user("alice", blocked_users=["user-bob"])
        post = make_post(author, "hi")

        assert is_visible(post, None, {author.id: author})

    @pytest.mark.parametrize("blocker", ["viewer", "author"])
    def test_block_hides_either_way(self, make_user, make_post, blocker):
        """Test a post is hidden whoever placed the block."""
        viewer, author = make_user("viewer"), make_user("author")
        if blocker == "viewer":
            viewer, author = toggle_block(viewer, author)
        else:
            author, viewer = toggle_block(author, viewer)
        posts = [make_post(author, "secret")]

        assert compose_feed(viewer, posts, [viewer, author]) == []
        assert compose_feed(author, posts, [viewer, author]) == posts

    def test_missing_author_fails_open(self, make_user, make_post):
        viewer = make_user("viewer")
        post = make_post(make_user("ghost"), "still here")

        assert compose_feed(viewer, [post], [viewer]) == [post]

    def test_order_preserved(self, make_user, make_post):
        viewer, a, b = make_user("viewer"), make_user("a"), make_user("b", blocked_users=["user-viewer"])
        posts = [
            make_post(a, "3", id="p-3"),
            make_post(b, "2", id="p-2"),
            make_post(a, "1", id="p-1"),
        ]

        feed = compose_feed(viewer, posts, [viewer, a, b])

        assert [p.id for p in feed] == ["p-3", "p-1"]


class TestSearch:
    """Search filter tests."""

    def test_hashtag_matches_tag_any_case(self, make_user, make_post):
        post = make_post(make_user("a"), "off to the #Mall", tags=["#Mall"])

        assert matches_query(post, "#mall")

    def test_hashtag_matches_plain_content(self, make_user, make_post):
        """Test a hashtag query also finds posts whose tag set missed it."""
        post = make_post(make_user("a"), "meet at the #mall later", tags=[])

        assert matches_query(post, "#MALL")

    def test_hashtag_does_not_match_author_or_title(self, make_user, make_post):
        post = make_post(make_user("#mall"), "nothing", title="#mall", type="blog")

        assert not matches_query(post, "#mall")

    @pytest.mark.parametrize("query", ["PIZZA", "alice", "diary"])
    def test_text_matches_content_author_title(self, make_user, make_post, query):
        post = make_post(make_user("Alice"), "I love pizza", type="blog", title="Dear Diary")

        assert matches_query(post, query)

    def test_text_no_match(self, make_user, make_post):
        post = make_post(make_user("Alice"), "I love pizza")

        assert not matches_query(post, "tacos")

    def test_search_runs_after_visibility(self, make_user, make_post):
        viewer = make_user("viewer", blocked_users=["user-b"])
        a, b = make_user("a"), make_user("b")
        posts = [make_post(a, "#mall trip", id="p-a"), make_post(b, "#mall too", id="p-b")]

        feed = compose_feed(viewer, posts, [viewer, a, b], query="#mall")

        assert [p.id for p in feed] == ["p-a"]

    def test_empty_query_keeps_everything(self, make_user, make_post):
        posts = [make_post(make_user("a"), "x", id="p-1")]

        assert compose_feed(None, posts, [], query="") == posts

    def test_profile_feed(self, make_user, make_post):
        a, b = make_user("a"), make_user("b")
        posts = [make_post(a, "mine", id="p-1"), make_post(b, "theirs", id="p-2")]

        assert [p.id for p in profile_feed(None, "user-b", posts, [a, b])] == ["p-2"]
