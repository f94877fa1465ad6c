"""In-memory user repository for testing."""

from datetime import datetime
from typing import Optional

from port42.domain.model.user import User
from port42.domain.repository.user import UserRepository
from port42.domain.value import UserId, Username


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_username(self, username: Username) -> Optional[User]:
        """Find a user by username."""
        for user in self._users.values():
            if user.username == username:
                return user
        return None

    async def save(self, user: User) -> User:
        """Save or update a user."""
        self._users[user.id] = user
        return user

    async def adjust_reputation(
        self,
        user_id: UserId,
        reputation_delta: int,
        upvote_delta: int = 0,
        downvote_delta: int = 0,
    ) -> Optional[User]:
        """Atomically shift reputation and received-vote totals (minimum 0)."""
        user = self._users.get(user_id)
        if not user:
            return None
        updated_user = user.model_copy(
            update={
                "reputation": max(0, user.reputation + reputation_delta),
                "total_upvotes": max(0, user.total_upvotes + upvote_delta),
                "total_downvotes": max(0, user.total_downvotes + downvote_delta),
                "updated_at": datetime.now(),
            }
        )
        self._users[user_id] = updated_user
        return updated_user
