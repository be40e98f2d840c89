import pytest

from retrospace.core.errors import Malformed
from retrospace.core.redis import RedisStore
from retrospace.core.store import FileStore


class FakeRedis:
    """Minimal stand-in for a redis.asyncio client."""
    
    def __init__(self):
        self.data = {}
        self.closed = False
    
    async def get(self, key):
        return self.data.get(key)
    
    async def set(self, key, value):
        self.data[key] = value
        return True
    
    async def delete(self, key):
        return 1 if self.data.pop(key, None) is not None else 0
    
    async def aclose(self):
        self.closed = True


class TestFileStore:
    """File-backed local store tests."""
    
    @pytest.mark.asyncio
    async def test_open_creates_directory(self, tmp_path):
        store = FileStore(str(tmp_path / "nested" / "store"))
        
        await store.open()
        
        assert (tmp_path / "nested" / "store").is_dir()
    
    @pytest.mark.asyncio
    async def test_json_round_trip_and_delete(self, tmp_path):
        store = FileStore(str(tmp_path))
        await store.open()
        
        await store.write_json("retrospace_posts_v1", [{"id": "p-1"}])
        assert await store.read_json("retrospace_posts_v1") == [{"id": "p-1"}]
        assert (tmp_path / "retrospace_posts_v1.json").is_file()
        
        await store.delete("retrospace_posts_v1")
        assert await store.read("retrospace_posts_v1") is None
    
    @pytest.mark.asyncio
    async def test_missing_key_reads_none(self, tmp_path):
        store = FileStore(str(tmp_path))
        await store.open()
        
        assert await store.read_json("absent") is None
        await store.delete("absent")  # No error
    
    @pytest.mark.asyncio
    async def test_corrupt_document_raises_malformed(self, tmp_path):
        store = FileStore(str(tmp_path))
        await store.open()
        (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
        
        with pytest.raises(Malformed):
            await store.read_json("broken")


class TestRedisStore:
    """Redis-backed local store tests."""
    
    @pytest.mark.asyncio
    async def test_round_trip(self):
        fake = FakeRedis()
        store = RedisStore("redis://localhost:6379", client=fake)
        await store.open()
        
        await store.write_json("retrospace_session_v1", "user-1")
        assert fake.data["retrospace_session_v1"] == '"user-1"'
        assert await store.read_json("retrospace_session_v1") == "user-1"
        
        await store.delete("retrospace_session_v1")
        assert await store.read_json("retrospace_session_v1") is None
    
    @pytest.mark.asyncio
    async def test_close_releases_client(self):
        fake = FakeRedis()
        store = RedisStore("redis://localhost:6379", client=fake)
        
        await store.close()
        
        assert fake.closed
        assert store.redis is None
