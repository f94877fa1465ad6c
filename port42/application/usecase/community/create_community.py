"""Create community use case."""

from uuid import UUID

from pydantic import BaseModel

from port42.domain.service import CommunityService
from port42.domain.value import UserId

from .list_communities import CommunityItem


class CreateCommunityRequest(BaseModel):
    """Create community request."""

    name: str
    description: str
    icon: str | None = None
    color: str | None = None
    user_id: str  # User ID from authenticated user


class CreateCommunityResponse(BaseModel):
    """Create community response."""

    community: CommunityItem


class CreateCommunityUseCase:
    """Use case for opening a new community."""

    def __init__(self, community_service: CommunityService) -> None:
        """Initialize create community use case.

        Args:
            community_service: Community domain service
        """
        self.community_service = community_service

    async def execute(self, request: CreateCommunityRequest) -> CreateCommunityResponse:
        """Execute create community flow.

        Raises:
            NotFoundError: If the creator does not exist
            ConflictError: If the name is already taken
            InvalidArgumentError: If the name has no usable characters
        """
        community = await self.community_service.create_community(
            creator_id=UserId(UUID(request.user_id)),
            name=request.name,
            description=request.description,
            icon=request.icon,
            color=request.color,
        )
        return CreateCommunityResponse(
            community=CommunityItem.from_community(community)
        )
