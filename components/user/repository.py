"""Repository for user operations."""

from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from components.user.models import Credentials, User


class UserRepository:
    """Repository for user operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        result = await self.session.execute(
            select(User).where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_with_credentials(self, user_id: int) -> Optional[User]:
        """Get user by ID with credentials loaded."""
        result = await self.session.execute(
            select(User)
            .options(selectinload(User.credentials))
            .where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by the username of its credentials."""
        result = await self.session.execute(
            select(User)
            .join(User.credentials)
            .options(selectinload(User.credentials))
            .where(Credentials.username == username)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        result = await self.session.execute(
            select(User).where(User.email == email)
        )
        return result.scalar_one_or_none()

    async def get_all(self) -> List[User]:
        """Get all users with credentials loaded, in id order."""
        result = await self.session.execute(
            select(User).options(selectinload(User.credentials)).order_by(User.id)
        )
        return list(result.scalars().all())

    async def username_exists(self, username: str) -> bool:
        """Check if user credentials with given username exist."""
        result = await self.session.execute(
            select(Credentials.id).where(Credentials.username == username)
        )
        return result.scalar_one_or_none() is not None

    async def save(self, user: User) -> User:
        """Insert or update a user."""
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)
        return user
