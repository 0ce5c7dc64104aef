"""Test fixtures and configuration."""

import os
from datetime import datetime, timedelta, timezone

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DEBUG", "false")

import jwt
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.core.config import settings
from app.database.database import Database
from app.main import app


@pytest_asyncio.fixture
async def database(tmp_path):
    """Throw-away SQLite database with every table created."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'backoffice_test.db'}")
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def session_factory(database):
    return database.session_factory


@pytest.fixture
def add_rows(session_factory):
    """Persist ORM objects in one transaction."""

    async def _add(*rows):
        async with session_factory() as session:
            session.add_all(rows)
            await session.commit()

    return _add


@pytest_asyncio.fixture
async def client(database):
    app.state.database = database
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    del app.state.database


def make_token(user_id="1", expires_in=timedelta(hours=1)) -> str:
    payload = {"userId": user_id, "exp": datetime.now(timezone.utc) + expires_in}
    return jwt.encode(payload, settings.APP_SECRET_STRING, algorithm=settings.ALGORITHM)


@pytest.fixture
def token_factory():
    return make_token


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {make_token()}"}
