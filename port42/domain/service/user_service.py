"""User domain service."""

import logfire

from port42.domain.error import NotFoundError
from port42.domain.model.user import User
from port42.domain.repository import UserRepository
from port42.domain.value import UserId

from .base import Service


class UserService(Service):
    """Domain service for user lookups and reputation."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def get_user_by_id(self, user_id: UserId) -> User | None:
        """Get user by ID, None if missing."""
        with logfire.span("user_service.get_user_by_id", user_id=str(user_id)):
            return await self.user_repository.find_by_id(user_id)

    async def adjust_reputation(
        self,
        user_id: UserId,
        reputation_delta: int,
        upvote_delta: int = 0,
        downvote_delta: int = 0,
    ) -> User | None:
        """Atomically adjust a user's reputation (floored at 0).

        Args:
            user_id: User whose content was voted on
            reputation_delta: Reputation change
            upvote_delta: Change to upvotes received
            downvote_delta: Change to downvotes received

        Returns:
            Updated user, None if the user no longer exists
        """
        with logfire.span(
            "user_service.adjust_reputation",
            user_id=str(user_id),
            reputation_delta=reputation_delta,
        ):
            user = await self.user_repository.adjust_reputation(
                user_id,
                reputation_delta,
                upvote_delta=upvote_delta,
                downvote_delta=downvote_delta,
            )
            if user:
                logfire.info(
                    "Reputation adjusted",
                    user_id=str(user_id),
                    reputation=user.reputation,
                    delta=reputation_delta,
                )
            else:
                logfire.warn("Reputation owner not found", user_id=str(user_id))
            return user
