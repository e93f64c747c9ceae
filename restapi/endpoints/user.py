"""User self-service endpoints for the API."""

from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.access import CallerIdentity
from components.core.init_db import get_db
from components.core.schemas import Message
from components.loan.schemas import LoanRequest, LoanResponse
from components.loan.service import LoanService
from components.user.schemas import UserProfile
from components.user.service import UserService
from restapi.endpoints.auth import get_current_caller, require_user

router = APIRouter(
    prefix="/api/user",
    tags=["users"],
    dependencies=[Depends(require_user)],
    responses={404: {"description": "Not found"}},
)


@router.post("/loan-request", response_model=LoanResponse)
async def add_loan_request(
    loan_request: LoanRequest,
    db: AsyncSession = Depends(get_db),
    caller: CallerIdentity = Depends(get_current_caller)
):
    """Submit a loan request for the logged in user."""
    return await LoanService(db).add_loan_request(
        loan_request, int(caller.user_id), caller.role, caller.user_id
    )


@router.get("/user-cabinet/{user_id}", response_model=UserProfile)
async def view_user_cabinet(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    caller: CallerIdentity = Depends(get_current_caller)
):
    """Get the profile of the logged in user."""
    return await UserService(db).view_user_cabinet(user_id, caller.user_id)


@router.get("/{user_id}/view-loans-history", response_model=List[LoanResponse])
async def view_all_loans(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    caller: CallerIdentity = Depends(get_current_caller)
):
    """Get all loans of the logged in user."""
    return await LoanService(db).view_all_loans(user_id, caller.user_id)


@router.put("/users/{user_id}/loans/{loan_id}/update-loan", response_model=LoanResponse)
async def update_loan(
    user_id: int,
    loan_id: int,
    loan_request: LoanRequest,
    db: AsyncSession = Depends(get_db),
    caller: CallerIdentity = Depends(get_current_caller)
):
    """Edit a loan that is still in progress."""
    return await LoanService(db).update_loan(
        loan_id, loan_request, user_id, caller.role, caller.user_id
    )


@router.delete("/users/{user_id}/loans/{loan_id}/delete-loan", response_model=Message)
async def delete_loan(
    user_id: int,
    loan_id: int,
    db: AsyncSession = Depends(get_db),
    caller: CallerIdentity = Depends(get_current_caller)
):
    """Delete a loan that is still in progress."""
    await LoanService(db).delete_loan(user_id, loan_id, caller.role, caller.user_id)
    return Message(message="Loan has been successfully deleted.")
