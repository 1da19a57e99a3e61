import os

# 在导入应用之前固定测试配置
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ.pop("OPENAI_API_KEY", None)

import httpx
import pytest
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession

from inkwell import models  # noqa: F401
from inkwell.database import Base, get_db
from inkwell.main import app
from inkwell.modules.notebook import SessionContext, register_user
from inkwell.schemas import UserCreate


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


async def login_headers(client, email, name="Test User", password="secret123"):
    response = await client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    response = await client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
async def alice(client):
    return await login_headers(client, "alice@example.com", name="Alice")


@pytest.fixture
async def bob(client):
    return await login_headers(client, "bob@example.com", name="Bob")


async def make_context(db, email, name="Test User"):
    result = await register_user(db, UserCreate(name=name, email=email, password="secret123"))
    assert result.success, result.error
    return SessionContext.for_user(result.data.id)


@pytest.fixture
async def alice_ctx(db):
    return await make_context(db, "alice@example.com", "Alice")


@pytest.fixture
async def bob_ctx(db):
    return await make_context(db, "bob@example.com", "Bob")
