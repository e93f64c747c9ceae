"""Database initialization and dependency injection."""

from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator, AsyncIterator, Optional

import fastapi
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.database import DatabaseManager
# Import all models to ensure they're registered
import components.user.models
import components.accountant.models
import components.loan.models


@lru_cache()
def get_db_manager() -> DatabaseManager:
    """Return the process-wide DatabaseManager built from settings."""
    return DatabaseManager()


async def get_db(request: fastapi.Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for getting database sessions."""
    async with request.app.state.db_manager.get_db() as session:
        yield session


def init_db(app: fastapi.FastAPI, manager: Optional[DatabaseManager] = None) -> None:
    """Attach a DatabaseManager to the application state."""
    app.state.db_manager = manager or get_db_manager()


@asynccontextmanager
async def lifespan(app: fastapi.FastAPI) -> AsyncIterator[None]:
    """Create tables on startup and release the engine on shutdown."""
    manager: DatabaseManager = app.state.db_manager
    await manager.create_all()
    yield
    await manager.dispose()
