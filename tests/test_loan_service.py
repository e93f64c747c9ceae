from decimal import Decimal

import pytest
from sqlalchemy import func, select

from components.core.access import Role
from components.core.exceptions import (
    InvalidOperationError,
    NotFoundError,
    UnauthorizedError,
    ValidationFailedError,
)
from components.loan.enums import Currency, LoanStatus, LoanType, Period
from components.loan.models import Loan
from components.loan.schemas import LoanRequest
from components.loan.service import LoanService

from factories import add_all, make_loan, make_user


def loan_request(**overrides):
    payload = dict(
        loan_type=LoanType.AUTO,
        amount=Decimal("1000"),
        currency=Currency.GEL,
        period=Period.THREE_MONTH,
    )
    payload.update(overrides)
    return LoanRequest(**payload)


async def loan_count(session):
    return (await session.execute(select(func.count(Loan.id)))).scalar_one()


async def refetch(session, loan_id):
    return await session.get(Loan, loan_id, populate_existing=True)


@pytest.fixture
def service(session):
    return LoanService(session)


class TestAddLoanRequest:

    async def test_creates_loan_in_progress(self, session, service, users):
        result = await service.add_loan_request(loan_request(), 1, "User", "1")

        assert result.loan_type == LoanType.AUTO
        assert result.amount == Decimal("1000")
        assert result.currency == Currency.GEL
        assert result.period == Period.THREE_MONTH
        assert result.loan_status == LoanStatus.IN_PROGRESS

        owned = await service.view_all_loans(1, "1")
        assert [loan.loan_id for loan in owned] == [result.loan_id]

    async def test_accepts_raw_payload(self, service, users):
        result = await service.add_loan_request(
            {"loan_type": 2, "amount": "250.50", "currency": 1, "period": 2}, 1, Role.USER, "1"
        )

        assert result.loan_type == LoanType.INSTALLMENT
        assert result.amount == Decimal("250.50")
        assert result.currency == Currency.EUR
        assert result.period == Period.SIX_MONTH

    async def test_rejects_wrong_role(self, session, service, users):
        with pytest.raises(UnauthorizedError, match="User does not have sufficient permissions."):
            await service.add_loan_request(loan_request(), 1, "Admin", "1")
        assert await loan_count(session) == 0

    async def test_rejects_other_account_before_user_lookup(self, session, service):
        # No user exists at all, the ownership check fires first.
        with pytest.raises(UnauthorizedError) as exc_info:
            await service.add_loan_request(loan_request(), 1, "User", "2")
        assert exc_info.value.message == "You can only add loans for your own account."

    async def test_rejects_blocked_user(self, session, service):
        await add_all(session, make_user(1, is_blocked=True))

        with pytest.raises(UnauthorizedError, match="Invalid user or user is blocked."):
            await service.add_loan_request(loan_request(), 1, "User", "1")
        assert await loan_count(session) == 0

    async def test_rejects_missing_user(self, service):
        with pytest.raises(UnauthorizedError, match="Invalid user or user is blocked."):
            await service.add_loan_request(loan_request(), 999, "User", "999")

    @pytest.mark.parametrize("payload, message", [
        ({"loan_type": 5, "amount": 10, "currency": 0, "period": 0},
         "LoanType must be a valid enum value. Use 0 for Fast, 1 for Auto, or 2 for Installement."),
        ({"loan_type": 0, "amount": 10, "currency": 3, "period": 0},
         "Currency must be a valid enum value. Use 0 for USD, 1 for EUR, or 2 for GEL."),
        ({"loan_type": 0, "amount": 10, "currency": 0, "period": -1},
         "Period must be a valid enum value. Use 0 for OneMonth, 1 for ThreeMonth, or 2 for SixMonth."),
        ({"loan_type": 0, "amount": 0, "currency": 0, "period": 0},
         "Amount must be a positive value greater than 0."),
        ({"loan_type": 0, "amount": -5, "currency": 0, "period": 0},
         "Amount must be a positive value greater than 0."),
    ])
    async def test_validates_payload_before_anything_else(self, session, service, payload, message):
        # Wrong role and no user: validation still wins.
        with pytest.raises(ValidationFailedError) as exc_info:
            await service.add_loan_request(payload, 1, "Accountant", "2")
        assert message in exc_info.value.errors
        assert await loan_count(session) == 0


class TestUpdateLoan:

    async def test_updates_terms_and_keeps_status(self, session, service, users):
        await add_all(session, make_loan(1, 1))

        result = await service.update_loan(
            1, loan_request(loan_type=LoanType.FAST, amount=Decimal("777"), currency=Currency.EUR),
            1, "User", "1",
        )

        assert result.loan_id == 1
        assert result.loan_type == LoanType.FAST
        assert result.amount == Decimal("777")
        assert result.currency == Currency.EUR
        assert result.period == Period.THREE_MONTH
        assert result.loan_status == LoanStatus.IN_PROGRESS

        stored = await refetch(session, 1)
        assert stored.loan_type == LoanType.FAST
        assert stored.amount == Decimal("777")

    @pytest.mark.parametrize("status", [LoanStatus.APPROVED, LoanStatus.DENIED])
    async def test_rejects_loan_not_in_progress(self, session, service, users, status):
        await add_all(session, make_loan(1, 1, status=status))

        with pytest.raises(InvalidOperationError) as exc_info:
            await service.update_loan(1, loan_request(amount=Decimal("1")), 1, "User", "1")
        assert exc_info.value.message == "You can only update loans that are in progress."

        stored = await refetch(session, 1)
        assert stored.amount == Decimal("50000")
        assert stored.loan_type == LoanType.AUTO
        assert stored.status == status

    @pytest.mark.parametrize("role, caller_id", [
        ("Accountant", "1"), ("Accountant", "2"), ("Admin", "1"), (None, "1"),
    ])
    async def test_rejects_non_user_role(self, session, service, users, role, caller_id):
        await add_all(session, make_loan(1, 1))

        with pytest.raises(UnauthorizedError, match="Only users can update loans."):
            await service.update_loan(1, loan_request(amount=Decimal("1")), 1, role, caller_id)
        assert (await refetch(session, 1)).amount == Decimal("50000")

    async def test_rejects_other_owner(self, session, service, users):
        await add_all(session, make_loan(1, 1))

        with pytest.raises(UnauthorizedError, match="You can only update your own loans."):
            await service.update_loan(1, loan_request(), 1, "User", "2")

    async def test_rejects_blocked_user(self, session, service):
        await add_all(session, make_user(1, is_blocked=True), make_loan(1, 1))

        with pytest.raises(UnauthorizedError, match="Invalid user or user is blocked."):
            await service.update_loan(1, loan_request(), 1, "User", "1")

    async def test_loan_of_another_user_is_not_found(self, session, service, users):
        await add_all(session, make_loan(1, 2))

        with pytest.raises(NotFoundError, match="Loan not found."):
            await service.update_loan(1, loan_request(), 1, "User", "1")

    async def test_missing_loan(self, service, users):
        with pytest.raises(NotFoundError, match="Loan not found."):
            await service.update_loan(42, loan_request(), 1, "User", "1")

    async def test_invalid_payload(self, session, service, users):
        await add_all(session, make_loan(1, 1))

        with pytest.raises(ValidationFailedError):
            await service.update_loan(
                1, {"loan_type": 1, "amount": 0, "currency": 1, "period": 1}, 1, "User", "1"
            )


class TestDeleteLoan:

    async def test_deletes_loan_in_progress(self, session, service, users):
        await add_all(session, make_loan(1, 1), make_loan(2, 1))

        assert await service.delete_loan(1, 1, "User", "1") is True

        assert await loan_count(session) == 1
        remaining = await service.view_all_loans(1, "1")
        assert [loan.loan_id for loan in remaining] == [2]

    @pytest.mark.parametrize("status", [LoanStatus.APPROVED, LoanStatus.DENIED])
    async def test_rejects_loan_not_in_progress(self, session, service, users, status):
        await add_all(session, make_loan(1, 1, status=status))

        with pytest.raises(InvalidOperationError, match="You can only delete loans that are in progress."):
            await service.delete_loan(1, 1, "User", "1")
        assert (await refetch(session, 1)) is not None

    async def test_rejects_accountant(self, session, service, users):
        await add_all(session, make_loan(1, 1))

        with pytest.raises(UnauthorizedError, match="Only users can delete loans."):
            await service.delete_loan(1, 1, Role.ACCOUNTANT, "1")
        assert await loan_count(session) == 1

    async def test_rejects_other_owner(self, session, service, users):
        await add_all(session, make_loan(1, 1))

        with pytest.raises(UnauthorizedError, match="You can only delete your own loans."):
            await service.delete_loan(1, 1, "User", "2")
        assert await loan_count(session) == 1

    async def test_rejects_blocked_user(self, session, service):
        await add_all(session, make_user(1, is_blocked=True), make_loan(1, 1))

        with pytest.raises(UnauthorizedError, match="Invalid user or user is blocked."):
            await service.delete_loan(1, 1, "User", "1")
        assert await loan_count(session) == 1

    async def test_missing_loan(self, service, users):
        with pytest.raises(NotFoundError, match="Loan not found."):
            await service.delete_loan(1, 999, "User", "1")


class TestViewAllLoans:

    async def test_lists_only_own_loans_in_id_order(self, session, service, users):
        await add_all(
            session,
            make_loan(3, 1, status=LoanStatus.DENIED),
            make_loan(1, 1),
            make_loan(2, 2),
        )

        loans = await service.view_all_loans(1, "1")

        assert [loan.loan_id for loan in loans] == [1, 3]
        assert loans[1].loan_status == LoanStatus.DENIED

    async def test_no_loans(self, service, users):
        with pytest.raises(NotFoundError, match="No loans found for this user."):
            await service.view_all_loans(1, "1")

    async def test_rejects_other_account(self, session, service, users):
        await add_all(session, make_loan(1, 1))

        with pytest.raises(UnauthorizedError, match="You can only view your own loans."):
            await service.view_all_loans(1, "2")
