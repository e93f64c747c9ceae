"""Shared fixtures: an in-memory database and seeded accounts."""

import httpx
import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from components.accountant.models import Accountant, AccountantCredentials
from components.core.access import Role
from components.core.database import DatabaseManager
from components.core.security import get_password_hash
from restapi.router import create_app

from factories import USER_PASSWORD, add_all, make_user


@pytest.fixture
async def db_manager():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    manager = DatabaseManager(engine)
    await manager.create_all()
    yield manager
    await manager.dispose()


@pytest.fixture
async def session(db_manager):
    async with db_manager.get_db() as session:
        yield session


@pytest.fixture
async def users(session):
    """Two active users with credentials."""
    return await add_all(
        session,
        make_user(1, username="johndoe1", first_name="John", last_name="Doe"),
        make_user(2, username="janesmith2", first_name="Jane", last_name="Smith"),
    )


@pytest.fixture
async def accountant(session):
    accountant = Accountant(
        id=1,
        first_name="Alice",
        last_name="Johnson",
        role=Role.ACCOUNTANT,
        credentials=AccountantCredentials(
            username="accountant1", password=get_password_hash(USER_PASSWORD)
        ),
    )
    await add_all(session, accountant)
    return accountant


@pytest.fixture
async def client(db_manager):
    app = create_app(db_manager)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
