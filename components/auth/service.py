"""Registration and login of users and accountants."""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from components.accountant.models import Accountant, AccountantCredentials
from components.accountant.repository import AccountantRepository
from components.accountant.schemas import AccountantProfile, AccountantRegisterRequest
from components.auth.schemas import LoginRequest, LoginResponse
from components.core.access import Role
from components.core.exceptions import AlreadyExistsError, UnauthorizedError
from components.core.security import create_access_token, get_password_hash, verify_password
from components.user.models import Credentials, User
from components.user.repository import UserRepository
from components.user.schemas import RegisterRequest, UserProfile

logger = logging.getLogger(__name__)

INVALID_LOGIN = "Invalid username or password."


class AuthService:
    """Creates accounts and issues access tokens."""

    def __init__(self, session: AsyncSession, log: Optional[logging.Logger] = None):
        self.session = session
        self.users = UserRepository(session)
        self.accountants = AccountantRepository(session)
        self.log = log or logger

    async def register(self, request: RegisterRequest) -> UserProfile:
        """Register an unblocked user together with its credentials."""
        self.log.info("Started registration for user with email %s.", request.email)

        if await self.users.get_by_email(request.email):
            self.log.warning("Registration failed: email %s already in use.", request.email)
            raise AlreadyExistsError("Email already in use.")

        if await self.users.username_exists(request.username):
            self.log.warning("Registration failed: username %s already in use.", request.username)
            raise AlreadyExistsError("Username already in use.")

        credentials = Credentials(
            username=request.username,
            password=get_password_hash(request.password),
        )
        user = User(
            first_name=request.first_name,
            last_name=request.last_name,
            age=request.age,
            email=request.email,
            salary=request.salary or 0,
            is_blocked=False,
            role=Role.USER,
            credentials=credentials,
        )
        try:
            user = await self.users.save(user)
        except IntegrityError as exc:
            await self.session.rollback()
            self.log.warning("Registration failed: %s was taken concurrently.", request.email)
            raise AlreadyExistsError("Email or username already in use.") from exc

        self.log.info("User registration successful for %s.", request.email)
        return UserProfile.from_model(user, credentials)

    async def register_accountant(self, request: AccountantRegisterRequest) -> AccountantProfile:
        """Register an accountant together with its credentials."""
        self.log.info("Started accountant registration for username %s.", request.username)

        if await self.accountants.username_exists(request.username):
            self.log.warning("Registration failed: username %s already in use.", request.username)
            raise AlreadyExistsError("Username already in use.")

        credentials = AccountantCredentials(
            username=request.username,
            password=get_password_hash(request.password),
        )
        accountant = Accountant(
            first_name=request.first_name,
            last_name=request.last_name,
            role=Role.ACCOUNTANT,
            credentials=credentials,
        )
        try:
            accountant = await self.accountants.save(accountant)
        except IntegrityError as exc:
            await self.session.rollback()
            self.log.warning(
                "Registration failed: username %s was taken concurrently.", request.username
            )
            raise AlreadyExistsError("Username already in use.") from exc

        self.log.info("Accountant registered with username %s.", request.username)
        return AccountantProfile(
            accountant_id=accountant.id,
            first_name=accountant.first_name,
            last_name=accountant.last_name,
            username=credentials.username,
        )

    async def login(self, request: LoginRequest) -> LoginResponse:
        """Check the password of a user or accountant and issue a token."""
        self.log.info("Login attempt for username %s.", request.username)

        account = None
        user = await self.users.get_by_username(request.username)
        if user is not None and verify_password(request.password, user.credentials.password):
            account = user
        else:
            accountant = await self.accountants.get_by_username(request.username)
            if accountant is not None and verify_password(request.password, accountant.credentials.password):
                account = accountant

        if account is None:
            self.log.warning("Invalid username or password for %s.", request.username)
            raise UnauthorizedError(INVALID_LOGIN)

        token = create_access_token(
            data={
                "sub": str(account.id),
                "name": request.username,
                "role": Role(account.role).value,
            }
        )
        self.log.info("Login successful for username %s.", request.username)
        return LoginResponse(token=token)
