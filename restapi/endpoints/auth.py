"""Authentication endpoints for registration and login."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from components.accountant.schemas import AccountantProfile, AccountantRegisterRequest
from components.auth.schemas import LoginRequest, LoginResponse
from components.auth.service import AuthService
from components.core.access import CallerIdentity, Role
from components.core.exceptions import UnauthorizedError
from components.core.init_db import get_db
from components.core.security import verify_token
from components.user.schemas import RegisterRequest, UserProfile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["authentication"])
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/auth/login")


async def get_current_caller(token: str = Depends(oauth2_scheme)) -> CallerIdentity:
    """Get the caller identity from a JWT token."""
    payload = verify_token(token)
    if payload is None or not payload.get("sub"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return CallerIdentity.from_claims(payload.get("role"), payload["sub"])


async def require_accountant(
    caller: CallerIdentity = Depends(get_current_caller),
) -> CallerIdentity:
    """Allow only accountants through."""
    if not caller.is_(Role.ACCOUNTANT):
        logger.warning("Caller %s with role %s denied accountant access.", caller.user_id, caller.role)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have permission to access this resource.",
        )
    return caller


async def require_user(
    caller: CallerIdentity = Depends(get_current_caller),
) -> CallerIdentity:
    """Allow only users through."""
    if not caller.is_(Role.USER):
        logger.warning("Caller %s with role %s denied user access.", caller.user_id, caller.role)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have permission to access this resource.",
        )
    return caller


@router.post("/register", response_model=UserProfile)
async def register(
    request: RegisterRequest,
    db: AsyncSession = Depends(get_db)
) -> UserProfile:
    """Register a new user."""
    return await AuthService(db).register(request)


@router.post("/register-accountant", response_model=AccountantProfile)
async def register_accountant(
    request: AccountantRegisterRequest,
    db: AsyncSession = Depends(get_db)
) -> AccountantProfile:
    """Register a new accountant."""
    return await AuthService(db).register_accountant(request)


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db)
) -> LoginResponse:
    """Login a user or accountant and return a JWT token."""
    try:
        return await AuthService(db).login(request)
    except UnauthorizedError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=exc.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc
