"""Repository for loan operations."""

from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from components.loan.models import Loan


class LoanRepository:
    """Repository for loan operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def get_by_id(self, loan_id: int) -> Optional[Loan]:
        """Get loan by ID."""
        result = await self.session.execute(
            select(Loan).where(Loan.id == loan_id)
        )
        return result.scalar_one_or_none()

    async def get_by_id_and_owner(self, loan_id: int, user_id: int) -> Optional[Loan]:
        """Get loan by ID only if it belongs to the given user."""
        result = await self.session.execute(
            select(Loan).where(Loan.id == loan_id, Loan.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_all_by_owner(self, user_id: int) -> List[Loan]:
        """Get all loans of a user in id order."""
        result = await self.session.execute(
            select(Loan).where(Loan.user_id == user_id).order_by(Loan.id)
        )
        return list(result.scalars().all())

    async def get_all(self) -> List[Loan]:
        """Get all loans in id order."""
        result = await self.session.execute(select(Loan).order_by(Loan.id))
        return list(result.scalars().all())

    async def save(self, loan: Loan) -> Loan:
        """Insert or update a loan."""
        self.session.add(loan)
        await self.session.commit()
        await self.session.refresh(loan)
        return loan

    async def delete(self, loan: Loan) -> None:
        """Delete a loan."""
        await self.session.delete(loan)
        await self.session.commit()
