"""Loan lifecycle operations performed by a loan's owner."""

import logging
from typing import Any, List, Mapping, Optional, Union

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.access import Role, authorize_owner, authorize_self_action, check_user_active
from components.core.exceptions import InvalidOperationError, NotFoundError, ValidationFailedError
from components.core.validators import validation_error_messages
from components.loan.enums import LoanStatus
from components.loan.models import Loan
from components.loan.repository import LoanRepository
from components.loan.schemas import LoanRequest, LoanResponse
from components.user.repository import UserRepository

logger = logging.getLogger(__name__)

LoanPayload = Union[LoanRequest, Mapping[str, Any]]
CallerId = Union[int, str, None]
CallerRole = Union[Role, str, None]


def validate_loan_request(payload: LoanPayload) -> LoanRequest:
    """Return a validated LoanRequest or raise ValidationFailedError."""
    if isinstance(payload, LoanRequest):
        return payload
    try:
        return LoanRequest.model_validate(payload)
    except ValidationError as exc:
        raise ValidationFailedError(validation_error_messages(exc)) from exc


class LoanService:
    """
    Create, edit, delete and list loans on behalf of their owner.

    Every mutating operation checks, in order: payload, role, ownership,
    that the user exists and is not blocked, and only then looks the loan up.
    """

    def __init__(self, session: AsyncSession, log: Optional[logging.Logger] = None):
        self.users = UserRepository(session)
        self.loans = LoanRepository(session)
        self.log = log or logger

    async def _active_user(self, user_id: int):
        user = await self.users.get_by_id(user_id)
        if user is None or user.is_blocked:
            self.log.warning("User %s is either invalid or blocked.", user_id)
        return check_user_active(user)

    async def _owned_loan_in_progress(self, loan_id: int, user_id: int, action: str) -> Loan:
        loan = await self.loans.get_by_id_and_owner(loan_id, user_id)
        if loan is None:
            self.log.warning("Loan %s not found for user %s.", loan_id, user_id)
            raise NotFoundError("Loan not found.")

        if loan.status != LoanStatus.IN_PROGRESS:
            self.log.warning(
                "Loan %s status is %s, %s is not allowed.", loan_id, loan.status.name, action
            )
            raise InvalidOperationError(f"You can only {action} loans that are in progress.")
        return loan

    async def add_loan_request(
        self,
        loan_request: LoanPayload,
        user_id: int,
        role: CallerRole,
        logged_in_user_id: CallerId,
    ) -> LoanResponse:
        """Submit a new loan request; it always starts in progress."""
        self.log.info("Processing loan request for user %s.", user_id)
        request = validate_loan_request(loan_request)
        authorize_self_action(
            role, logged_in_user_id, user_id, Role.USER,
            role_message="User does not have sufficient permissions.",
            ownership_message="You can only add loans for your own account.",
        )
        user = await self._active_user(user_id)

        loan = Loan(
            user_id=user.id,
            loan_type=request.loan_type,
            amount=request.amount,
            currency=request.currency,
            period=request.period,
            status=LoanStatus.IN_PROGRESS,
        )
        try:
            loan = await self.loans.save(loan)
        except SQLAlchemyError:
            self.log.exception("Error saving loan request for user %s.", user_id)
            raise

        self.log.info("Loan request saved for user %s with loan ID %s.", user_id, loan.id)
        return LoanResponse.from_model(loan)

    async def view_all_loans(self, user_id: int, logged_in_user_id: CallerId) -> List[LoanResponse]:
        """List every loan of the user, oldest first."""
        self.log.info("User %s requested loans of user %s.", logged_in_user_id, user_id)
        authorize_owner(logged_in_user_id, user_id, "You can only view your own loans.")

        loans = await self.loans.get_all_by_owner(user_id)
        if not loans:
            self.log.warning("No loans found for user %s.", user_id)
            raise NotFoundError("No loans found for this user.")

        self.log.info("Retrieved %d loans for user %s.", len(loans), user_id)
        return [LoanResponse.from_model(loan) for loan in loans]

    async def update_loan(
        self,
        loan_id: int,
        loan_request: LoanPayload,
        user_id: int,
        role: CallerRole,
        logged_in_user_id: CallerId,
    ) -> LoanResponse:
        """Overwrite the terms of a loan that is still in progress."""
        self.log.info("Starting update of loan %s by user %s.", loan_id, user_id)
        request = validate_loan_request(loan_request)
        authorize_self_action(
            role, logged_in_user_id, user_id, Role.USER,
            role_message="Only users can update loans.",
            ownership_message="You can only update your own loans.",
        )
        await self._active_user(user_id)
        loan = await self._owned_loan_in_progress(loan_id, user_id, "update")

        loan.loan_type = request.loan_type
        loan.amount = request.amount
        loan.currency = request.currency
        loan.period = request.period
        loan = await self.loans.save(loan)

        self.log.info("Loan %s updated by user %s.", loan_id, user_id)
        return LoanResponse.from_model(loan)

    async def delete_loan(
        self,
        user_id: int,
        loan_id: int,
        role: CallerRole,
        logged_in_user_id: CallerId,
    ) -> bool:
        """Withdraw a loan request that is still in progress."""
        self.log.info("User %s is attempting to delete loan %s.", user_id, loan_id)
        authorize_self_action(
            role, logged_in_user_id, user_id, Role.USER,
            role_message="Only users can delete loans.",
            ownership_message="You can only delete your own loans.",
        )
        await self._active_user(user_id)
        loan = await self._owned_loan_in_progress(loan_id, user_id, "delete")

        await self.loans.delete(loan)
        self.log.info("Loan %s deleted by user %s.", loan_id, user_id)
        return True
