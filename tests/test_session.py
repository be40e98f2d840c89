import pytest

from retrospace.services.session import SESSION_KEY


class TestSession:
    """Session pointer tests."""
    
    @pytest.mark.asyncio
    async def test_set_get_clear(self, session, store):
        assert await session.get_session() is None
        
        await session.set_session("user-1")
        assert await session.get_session() == "user-1"
        
        await session.set_session(None)
        assert await session.get_session() is None
        assert SESSION_KEY not in store.data
    
    @pytest.mark.asyncio
    async def test_restore_existing_user(self, session, make_user):
        await session.set_session("user-alice")
        
        assert await session.restore([make_user("alice")]) == "user-alice"
    
    @pytest.mark.asyncio
    async def test_restore_missing_user_logs_out(self, session, make_user):
        """Test a session pointing at a vanished user is treated as absent."""
        await session.set_session("user-gone")
        
        assert await session.restore([make_user("alice")]) is None
    
    @pytest.mark.asyncio
    async def test_malformed_session(self, session, store):
        store.data[SESSION_KEY] = "not-json"
        
        assert await session.get_session() is None
        assert await session.restore([]) is None
