"""Toggle community membership use case."""

from uuid import UUID

from pydantic import BaseModel

from port42.domain.service import CommunityService
from port42.domain.value import CommunityId, UserId


class ToggleMembershipRequest(BaseModel):
    """Toggle membership request."""

    community_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class ToggleMembershipResponse(BaseModel):
    """Toggle membership response."""

    community_id: str
    is_member: bool
    member_count: int


class ToggleMembershipUseCase:
    """Use case for joining or leaving a community."""

    def __init__(self, community_service: CommunityService) -> None:
        self.community_service = community_service

    async def execute(self, request: ToggleMembershipRequest) -> ToggleMembershipResponse:
        """Execute toggle membership flow.

        Raises:
            NotFoundError: If the community or user does not exist
        """
        community, is_member = await self.community_service.toggle_membership(
            community_id=CommunityId(UUID(request.community_id)),
            user_id=UserId(UUID(request.user_id)),
        )
        return ToggleMembershipResponse(
            community_id=str(community.id),
            is_member=is_member,
            member_count=community.member_count,
        )
