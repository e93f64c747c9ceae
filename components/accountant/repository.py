"""Repository for accountant operations."""

from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from components.accountant.models import Accountant, AccountantCredentials


class AccountantRepository:
    """Repository for accountant operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def get_by_username(self, username: str) -> Optional[Accountant]:
        """Get accountant by the username of its credentials."""
        result = await self.session.execute(
            select(Accountant)
            .join(Accountant.credentials)
            .options(selectinload(Accountant.credentials))
            .where(AccountantCredentials.username == username)
        )
        return result.scalar_one_or_none()

    async def username_exists(self, username: str) -> bool:
        """Check if accountant credentials with given username exist."""
        result = await self.session.execute(
            select(AccountantCredentials.id).where(AccountantCredentials.username == username)
        )
        return result.scalar_one_or_none() is not None

    async def save(self, accountant: Accountant) -> Accountant:
        """Insert or update an accountant."""
        self.session.add(accountant)
        await self.session.commit()
        await self.session.refresh(accountant)
        return accountant
