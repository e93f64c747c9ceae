"""Caller identity and the access checks shared by the services."""

import enum
import logging
from dataclasses import dataclass
from typing import Optional, TypeVar, Union

from components.core.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

INVALID_OR_BLOCKED_USER = "Invalid user or user is blocked."


class Role(str, enum.Enum):
    """Closed set of roles an authenticated caller can carry."""
    USER = "User"
    ACCOUNTANT = "Accountant"

    @classmethod
    def parse(cls, value: Union["Role", str, None]) -> Union["Role", str, None]:
        """Return the matching Role, or the raw value when it names no role."""
        try:
            return cls(value)
        except ValueError:
            return value


@dataclass(frozen=True)
class CallerIdentity:
    """Authenticated (role, id) pair asserted by the transport layer."""
    role: Union[Role, str]
    user_id: str

    @classmethod
    def from_claims(cls, role: Optional[str], user_id: Union[int, str]) -> "CallerIdentity":
        return cls(role=Role.parse(role), user_id=str(user_id))

    def is_(self, role: Role) -> bool:
        return self.role == role


def authorize_owner(caller_id: Union[int, str, None], target_user_id: Union[int, str], message: str) -> None:
    """Fail unless the caller is acting on their own account."""
    if caller_id is None or str(target_user_id) != str(caller_id):
        logger.warning(
            "Caller %s attempted to act on account %s.", caller_id, target_user_id
        )
        raise UnauthorizedError(message)


def authorize_self_action(
    role: Union[Role, str, None],
    caller_id: Union[int, str, None],
    target_user_id: Union[int, str],
    required_role: Role,
    role_message: str,
    ownership_message: str,
) -> None:
    """
    Check that the caller holds ``required_role`` and owns ``target_user_id``.

    The role is checked first, so a role mismatch is reported even when the
    ids differ as well.
    """
    if role != required_role:
        logger.warning(
            "Caller %s with role %s lacks role %s.", caller_id, role, required_role.value
        )
        raise UnauthorizedError(role_message)
    authorize_owner(caller_id, target_user_id, ownership_message)


UserT = TypeVar("UserT")


def check_user_active(user: Optional[UserT]) -> UserT:
    """Return the user if it exists and is not blocked."""
    if user is None or getattr(user, "is_blocked", False):
        raise UnauthorizedError(INVALID_OR_BLOCKED_USER)
    return user
