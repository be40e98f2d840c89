import pytest

from retrospace.core.errors import Forbidden, NotFound
from retrospace.services import Moderation, PERMANENT, ensure_active, ensure_admin, ban_expired

NOW = 1_700_000_000_000


@pytest.fixture
def moderation(local_gateway, session) -> Moderation:
    return Moderation(local_gateway, session, clock=lambda: NOW)


class TestBanGate:
    """Write-gate tests for suspended accounts."""

    @pytest.mark.parametrize("banned_until", [None, NOW - 1, NOW + 60_000])
    def test_banned_user_blocked_regardless_of_expiry(self, make_user, banned_until):
        """Test the gate ignores bannedUntil entirely."""
        user = make_user("tom", is_banned=True, banned_until=banned_until)

        with pytest.raises(Forbidden):
            ensure_active(user)

    def test_active_user_passes(self, make_user):
        ensure_active(make_user("tom", banned_until=NOW - 1))

    def test_admin_gate(self, make_user):
        ensure_admin(make_user("admin", is_admin=True))

        with pytest.raises(Forbidden):
            ensure_admin(make_user("tom"))
        with pytest.raises(Forbidden):
            ensure_admin(make_user("boss", is_admin=True, is_banned=True))

    def test_ban_expired(self, make_user):
        assert ban_expired(make_user("a", is_banned=True, banned_until=NOW - 1), now=NOW)
        assert not ban_expired(make_user("b", is_banned=True, banned_until=NOW + 1), now=NOW)
        assert not ban_expired(make_user("c", is_banned=True), now=NOW)
        assert not ban_expired(make_user("d", banned_until=NOW - 1), now=NOW)


class TestModeration:
    """Ban, unban, delete and wipe tests."""

    @pytest.mark.asyncio
    async def test_timed_ban(self, moderation, local_gateway, make_user):
        await local_gateway.create_user(make_user("tom"))

        banned = await moderation.ban("user-tom", 60)

        assert banned.is_banned is True
        assert banned.banned_until == NOW + 60 * 60_000
        stored = (await local_gateway.get_users())[0]
        assert stored.banned_until == NOW + 3_600_000

    @pytest.mark.asyncio
    async def test_permanent_ban(self, moderation, local_gateway, make_user):
        await local_gateway.create_user(make_user("tom"))

        banned = await moderation.ban("user-tom", PERMANENT)

        assert banned.is_banned is True
        assert banned.banned_until is None

    @pytest.mark.asyncio
    async def test_unban_keeps_banned_until(self, moderation, local_gateway, make_user):
        await local_gateway.create_user(make_user("tom"))
        await moderation.ban("user-tom", 5)

        user = await moderation.unban("user-tom")

        assert user.is_banned is False
        assert user.banned_until == NOW + 5 * 60_000
        ensure_active(user)

    @pytest.mark.asyncio
    async def test_ban_unknown_user(self, moderation):
        with pytest.raises(NotFound):
            await moderation.ban("user-ghost", 10)

    @pytest.mark.asyncio
    async def test_delete_post(self, moderation, local_gateway, make_user, make_post):
        author = make_user("tom")
        await local_gateway.create_post(make_post(author, "one", id="p-1"))
        await local_gateway.create_post(make_post(author, "two", id="p-2"))

        await moderation.delete_post("p-1")
        await moderation.delete_post("p-1")

        assert [p.id for p in await local_gateway.get_posts()] == ["p-2"]

    @pytest.mark.asyncio
    async def test_wipe_local(self, moderation, local_gateway, session, store, make_user, make_post):
        """Test the wipe empties every local collection and the session."""
        user = await local_gateway.create_user(make_user("tom"))
        await local_gateway.create_post(make_post(user, "hi"))
        await session.set_session(user.id)

        await moderation.wipe_local()

        users, posts, messages = await local_gateway.reload()
        assert (users, posts, messages) == ([], [], [])
        assert await session.get_session() is None
        assert store.data == {}
