"""Pytest configuration and fixtures for useraccounts.

Environment is set before any useraccounts import so Settings validate
(SECRET_KEY is required). HTTP tests run against useraccounts.main:app with
the primary store and Redis replaced by in-memory fakes through
dependency_overrides; repository tests use an aiosqlite database.
"""

import os
from dataclasses import replace
from unittest.mock import AsyncMock

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production-use-0123456789")
os.environ["REDIS_ENABLED"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from useraccounts.core.config import get_settings  # noqa: E402

get_settings.cache_clear()

from useraccounts.api.v1.dependencies import get_cache, get_user_repo  # noqa: E402
from useraccounts.application.services.user_service import UserAccessService  # noqa: E402
from useraccounts.domain.entities.user import UserRecord  # noqa: E402
from useraccounts.domain.exceptions import DuplicateUsernameException  # noqa: E402
from useraccounts.infrastructure.cache.redis_cache import CacheService  # noqa: E402
from useraccounts.infrastructure.cache.user_cache import UserCache  # noqa: E402
from useraccounts.infrastructure.persistence.database import Base  # noqa: E402
from useraccounts.main import app  # noqa: E402
from useraccounts.shared.utils.generators import generate_object_id  # noqa: E402


class FakeRedis:
    """Subset of redis.asyncio.Redis used by CacheService, kept in a dict."""

    def __init__(self) -> None:
        self.store: dict[str, str] = {}
        self.ttls: dict[str, int | None] = {}

    async def ping(self) -> bool:
        return True

    async def aclose(self) -> None:
        return None

    async def get(self, key: str) -> str | None:
        return self.store.get(key)

    async def set(self, key: str, value: str, ex: int | None = None) -> bool:
        self.store[key] = value
        self.ttls[key] = ex
        return True

    async def delete(self, *keys: str) -> int:
        return sum(1 for k in keys if self.store.pop(k, None) is not None)

    async def exists(self, *keys: str) -> int:
        return sum(1 for k in keys if k in self.store)

    async def incr(self, key: str) -> int:
        value = int(self.store.get(key, "0")) + 1
        self.store[key] = str(value)
        return value


class FakeUserRepository:
    """In-memory primary store (implements IUserRepository).

    Returns copies so callers cannot mutate stored rows without save().
    """

    def __init__(self) -> None:
        self.rows: dict[str, UserRecord] = {}
        self.calls: list[str] = []

    async def find_all(self) -> list[UserRecord]:
        self.calls.append("find_all")
        return [replace(r) for r in self.rows.values()]

    async def find_by_id(self, user_id: str) -> UserRecord | None:
        self.calls.append("find_by_id")
        row = self.rows.get(user_id)
        return replace(row) if row else None

    async def find_by_username(self, username: str) -> UserRecord | None:
        self.calls.append("find_by_username")
        for row in self.rows.values():
            if row.username == username:
                return replace(row)
        return None

    async def save(self, record: UserRecord) -> UserRecord:
        self.calls.append("save")
        for row in self.rows.values():
            if row.username == record.username and row.id != record.id:
                raise DuplicateUsernameException(record.username)
        if record.id is None:
            record.id = generate_object_id()
        self.rows[record.id] = replace(record)
        return record

    async def delete_by_id(self, user_id: str) -> None:
        self.calls.append("delete_by_id")
        self.rows.pop(user_id, None)


class FakePasswordHasher:
    """Deterministic, reversible-looking hasher for unit tests."""

    def hash(self, plaintext: str) -> str:
        return f"hashed:{plaintext}"


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def cache_service(fake_redis: FakeRedis) -> CacheService:
    """CacheService connected to the in-memory FakeRedis."""
    return CacheService(redis_client=fake_redis)


@pytest.fixture
def user_cache(cache_service: CacheService) -> UserCache:
    return UserCache(cache_service)


@pytest.fixture
def user_repo() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def password_hasher() -> FakePasswordHasher:
    return FakePasswordHasher()


@pytest.fixture
def session_invalidator() -> AsyncMock:
    invalidator = AsyncMock()
    invalidator.invalidate = AsyncMock(return_value=None)
    return invalidator


@pytest.fixture
def access_service(
    user_repo: FakeUserRepository,
    user_cache: UserCache,
    password_hasher: FakePasswordHasher,
    session_invalidator: AsyncMock,
) -> UserAccessService:
    """UserAccessService over the in-memory store, FakeRedis cache and fake hasher."""
    return UserAccessService(
        user_repo=user_repo,
        cache=user_cache,
        password_hasher=password_hasher,
        session_invalidator=session_invalidator,
    )


@pytest.fixture
async def client(
    user_repo: FakeUserRepository,
    cache_service: CacheService,
) -> AsyncClient:
    """Async HTTP client against the FastAPI app with in-memory stores."""
    app.dependency_overrides[get_user_repo] = lambda: user_repo
    app.dependency_overrides[get_cache] = lambda: cache_service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def register_and_login(client: AsyncClient):
    """Return an async helper: register username/password, log in, return (id, headers)."""

    async def _register_and_login(username: str, password: str) -> tuple[str, dict[str, str]]:
        created = await client.post(
            "/api/v1/users", json={"username": username, "password": password}
        )
        assert created.status_code == 200, created.text
        user_id = created.json()["message"].rsplit(" ", 1)[-1]
        login = await client.post(
            "/api/v1/auth/login", json={"username": username, "password": password}
        )
        assert login.status_code == 200, login.text
        token = login.json()["access_token"]
        return user_id, {"Authorization": f"Bearer {token}"}

    return _register_and_login


@pytest.fixture
async def db_session() -> AsyncSession:
    """Session on a fresh in-memory SQLite database with the schema created."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session
    await engine.dispose()
