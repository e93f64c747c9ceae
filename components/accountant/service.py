"""Accountant-side administration of users and loan requests."""

import logging
from typing import List, Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from components.core.exceptions import (
    InvalidOperationError,
    NotFoundError,
    UnauthorizedError,
    ValidationFailedError,
)
from components.core.validators import enum_member
from components.loan.enums import LoanStatus
from components.loan.repository import LoanRepository
from components.loan.schemas import LoanResponse
from components.user.repository import UserRepository
from components.user.schemas import UserProfile

logger = logging.getLogger(__name__)

LOAN_STATUS_MESSAGE = (
    "LoanStatus must be a valid enum value. Use 0 for InProgress, 1 for Approved, or 2 for Denied."
)


class AccountantService:
    """
    Review and moderation operations for accountants.

    Role enforcement happens at the transport boundary; these operations do
    not act on the caller's own account, so there is no ownership check.
    """

    def __init__(self, session: AsyncSession, log: Optional[logging.Logger] = None):
        self.users = UserRepository(session)
        self.loans = LoanRepository(session)
        self.log = log or logger

    async def view_all_users(self) -> List[UserProfile]:
        """List all users with their usernames."""
        self.log.info("Fetching all users.")
        users = await self.users.get_all()
        self.log.info("Fetched %d users.", len(users))
        return [UserProfile.from_model(user) for user in users]

    async def get_all_loan_requests(self) -> List[LoanResponse]:
        """List every loan regardless of owner or status."""
        self.log.info("Fetching all loan requests.")
        loans = await self.loans.get_all()
        self.log.info("Fetched %d loan requests.", len(loans))
        return [LoanResponse.from_model(loan) for loan in loans]

    async def block_or_unblock_user(self, user_id: int, is_blocked: bool) -> bool:
        """Set the blocked flag; fails if the user is already in that state."""
        action = "blocked" if is_blocked else "unblocked"
        self.log.info("Attempting to set user %s %s.", user_id, action)

        user = await self.users.get_by_id(user_id)
        if user is None:
            self.log.warning("User with ID %s not found.", user_id)
            raise NotFoundError("User not found.")

        if user.is_blocked == is_blocked:
            self.log.warning("User with ID %s is already %s.", user_id, action)
            raise InvalidOperationError(f"User is already {action}.")

        user.is_blocked = is_blocked
        await self.users.save(user)
        self.log.info("User with ID %s successfully %s.", user_id, action)
        return True

    async def change_loan_status(
        self, user_id: int, loan_id: int, new_status: Union[LoanStatus, int]
    ) -> bool:
        """
        Move a user's loan to ``new_status``.

        Any two distinct statuses are allowed. A loan that exists but belongs
        to somebody else is reported as not found for the specified user.
        """
        try:
            new_status = enum_member(LoanStatus, new_status, LOAN_STATUS_MESSAGE)
        except ValueError as exc:
            self.log.warning("Rejected loan status %r for loan %s.", new_status, loan_id)
            raise ValidationFailedError([str(exc)]) from exc
        self.log.info(
            "Changing status of loan %s of user %s to %s.", loan_id, user_id, new_status.name
        )

        user = await self.users.get_by_id(user_id)
        if user is None:
            self.log.warning("User with ID %s not found.", user_id)
            raise NotFoundError("User not found.")

        if user.is_blocked:
            self.log.warning("User with ID %s is blocked.", user_id)
            raise UnauthorizedError("User is blocked.")

        loan = await self.loans.get_by_id_and_owner(loan_id, user_id)
        if loan is None:
            self.log.warning("Loan with ID %s not found for user with ID %s.", loan_id, user_id)
            raise NotFoundError("Loan not found for the specified user.")

        if loan.status == new_status:
            self.log.warning("Loan with ID %s already has status %s.", loan_id, new_status.name)
            raise InvalidOperationError(f"Loan is already {new_status.label}.")

        loan.status = new_status
        await self.loans.save(loan)
        self.log.info("Changed status of loan %s to %s.", loan_id, new_status.name)
        return True

    async def delete_loan(self, loan_id: int) -> bool:
        """Delete any loan, whatever its owner or status."""
        self.log.info("Attempting to delete loan with ID %s.", loan_id)

        loan = await self.loans.get_by_id(loan_id)
        if loan is None:
            self.log.warning("Loan with ID %s not found.", loan_id)
            raise NotFoundError("Loan not found.")

        await self.loans.delete(loan)
        self.log.info("Loan with ID %s successfully deleted.", loan_id)
        return True
