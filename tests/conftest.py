from typing import AsyncGenerator, Dict, Optional
import httpx
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool

from retrospace.main import app
from retrospace.database import Base, get_db
from retrospace.backends import LocalBackend, RemoteBackend
from retrospace.core.store import KeyValueStore
from retrospace.schemas import User, Post
from retrospace.services import PersistenceGateway, SessionManager

# Test database URL
TEST_DATABASE_URL = "sqlite+aiosqlite:///./test.db"

# Create test engine
test_engine = create_async_engine(
    TEST_DATABASE_URL,
    poolclass=NullPool,
)

TestSessionLocal = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


@pytest.fixture(scope="function")
async def db_engine():
    """Create fresh tables for each test."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield test_engine

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


class MemoryStore(KeyValueStore):
    """In-memory key-value store for testing."""

    def __init__(self):
        self.data: Dict[str, str] = {}
        self.opened = False
        self.closed = False

    async def open(self):
        self.opened = True

    async def close(self):
        self.closed = True

    async def read(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def write(self, key: str, value: str):
        self.data[key] = value

    async def delete(self, key: str):
        self.data.pop(key, None)


@pytest.fixture
def store() -> MemoryStore:
    """Create an in-memory local store."""
    return MemoryStore()


@pytest.fixture
def session(store: MemoryStore) -> SessionManager:
    return SessionManager(store)


@pytest.fixture
async def local_gateway(store: MemoryStore) -> PersistenceGateway:
    """Gateway with no remote service, connected to the local store."""
    gateway = PersistenceGateway(LocalBackend(store))
    await gateway.connect()
    return gateway


@pytest.fixture
async def client(db_engine) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client for the data service with overridden dependencies."""

    async def override_get_db():
        async with TestSessionLocal() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def remote(client: AsyncClient) -> AsyncGenerator[RemoteBackend, None]:
    """Remote backend talking to the in-process data service."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test/api"
    ) as http:
        yield RemoteBackend("http://test/api", client=http)


@pytest.fixture
async def remote_gateway(store: MemoryStore, remote: RemoteBackend) -> PersistenceGateway:
    gateway = PersistenceGateway(LocalBackend(store), remote)
    await gateway.connect()
    return gateway


@pytest.fixture
async def offline_remote() -> AsyncGenerator[RemoteBackend, None]:
    """Remote backend whose every connection attempt is refused."""

    def refuse(request: httpx.Request):
        raise httpx.ConnectError("Connection refused", request=request)

    async with AsyncClient(
        transport=httpx.MockTransport(refuse),
        base_url="http://offline/api"
    ) as http:
        yield RemoteBackend("http://offline/api", client=http)


def _make_user(username: str, **fields) -> User:
    return User(id=f"user-{username.lower()}", username=username, **fields)


def _make_post(author: User, content: str, **fields) -> Post:
    fields.setdefault("id", f"p-{abs(hash((author.id, content))) % 10**8}")
    return Post(
        author_id=author.id,
        author_name=author.username,
        author_avatar=author.avatar_url,
        content=content,
        **fields,
    )


@pytest.fixture
def make_user():
    """Factory for User records with predictable ids (``user-<name>``)."""
    return _make_user


@pytest.fixture
def make_post():
    """Factory for Post records by a given author."""
    return _make_post
