"""Self-service operations on a user's own account."""

import logging
from typing import Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from components.core.access import authorize_owner
from components.core.exceptions import NotFoundError
from components.user.repository import UserRepository
from components.user.schemas import UserProfile

logger = logging.getLogger(__name__)


class UserService:
    """Profile operations available to a logged in user."""

    def __init__(self, session: AsyncSession, log: Optional[logging.Logger] = None):
        self.users = UserRepository(session)
        self.log = log or logger

    async def view_user_cabinet(self, user_id: int, logged_in_user_id: Union[int, str]) -> UserProfile:
        """Return the profile of ``user_id`` to the user themselves."""
        self.log.info("User %s requested the cabinet of user %s.", logged_in_user_id, user_id)
        authorize_owner(logged_in_user_id, user_id, "You can only view your own cabinet.")

        user = await self.users.get_with_credentials(user_id)
        if user is None:
            self.log.warning("User not found with ID %s.", user_id)
            raise NotFoundError("User not found.")

        return UserProfile.from_model(user)
