"""Accountant endpoints for the API."""

from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from components.accountant.service import AccountantService
from components.core.init_db import get_db
from components.core.schemas import Message
from components.loan.enums import LoanStatus
from components.loan.schemas import LoanResponse
from components.user.schemas import UserProfile
from restapi.endpoints.auth import require_accountant

router = APIRouter(
    prefix="/api/accountant",
    tags=["accountant"],
    dependencies=[Depends(require_accountant)],
    responses={404: {"description": "Not found"}},
)


@router.get("/view-users", response_model=List[UserProfile])
async def view_all_users(db: AsyncSession = Depends(get_db)):
    """Get all users."""
    return await AccountantService(db).view_all_users()


@router.get("/view-loan-requests", response_model=List[LoanResponse])
async def get_all_loan_requests(db: AsyncSession = Depends(get_db)):
    """Get all loan requests."""
    return await AccountantService(db).get_all_loan_requests()


@router.patch("/block-or-unblock-user/{user_id}", response_model=Message)
async def block_or_unblock_user(
    user_id: int,
    is_blocked: bool = Query(..., description="True to block the user, false to unblock"),
    db: AsyncSession = Depends(get_db)
):
    """Block or unblock a user."""
    await AccountantService(db).block_or_unblock_user(user_id, is_blocked)
    action = "blocked" if is_blocked else "unblocked"
    return Message(message=f"User successfully {action}.")


@router.patch("/change-loan-status/{user_id}/{loan_id}", response_model=Message)
async def change_loan_status(
    user_id: int,
    loan_id: int,
    new_status: int = Query(..., ge=0, le=2, description="0 InProgress, 1 Approved, 2 Denied"),
    db: AsyncSession = Depends(get_db)
):
    """Change the status of a user's loan."""
    status = LoanStatus(new_status)
    await AccountantService(db).change_loan_status(user_id, loan_id, status)
    return Message(message=f"Loan status successfully changed to {status.label}.")


@router.delete("/delete-loan/{loan_id}", response_model=Message)
async def delete_loan(
    loan_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Delete any loan."""
    await AccountantService(db).delete_loan(loan_id)
    return Message(message="Loan successfully deleted.")
