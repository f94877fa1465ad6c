"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from port42.domain.model.user import User
from port42.domain.value import UserId, Username


class UserRepository(ABC):
    """Repository for User aggregate."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_username(self, username: Username) -> Optional[User]:
        """Find a user by username."""
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass

    @abstractmethod
    async def adjust_reputation(
        self,
        user_id: UserId,
        reputation_delta: int,
        upvote_delta: int = 0,
        downvote_delta: int = 0,
    ) -> Optional[User]:
        """Atomically shift reputation and received-vote totals.

        Every counter is floored at zero.

        Args:
            user_id: User to update
            reputation_delta: Change to reputation
            upvote_delta: Change to total_upvotes
            downvote_delta: Change to total_downvotes

        Returns:
            The updated user, or None if the user does not exist
        """
        pass
