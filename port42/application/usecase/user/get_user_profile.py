"""Get user profile use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from port42.domain.service import UserService
from port42.domain.value import UserId, UserLevel


class GetUserProfileRequest(BaseModel):
    """Get user profile request."""

    user_id: str  # UUID string


class GetUserProfileResponse(BaseModel):
    """Get user profile response."""

    user_id: str
    username: str
    display_name: str | None
    reputation: int
    level: UserLevel
    total_upvotes: int
    total_downvotes: int
    is_moderator: bool
    created_at: datetime


class GetUserProfileUseCase:
    """Use case for getting a user's public profile."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize get user profile use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: GetUserProfileRequest) -> GetUserProfileResponse:
        """Execute get user profile flow.

        The email address is never part of the public profile.

        Raises:
            NotFoundError: If the user does not exist
        """
        user = await self.user_service.get_by_id(UserId(UUID(request.user_id)))

        return GetUserProfileResponse(
            user_id=str(user.id),
            username=user.username.root,
            display_name=user.display_name,
            reputation=user.reputation,
            level=user.level,
            total_upvotes=user.total_upvotes,
            total_downvotes=user.total_downvotes,
            is_moderator=user.is_moderator,
            created_at=user.created_at,
        )
