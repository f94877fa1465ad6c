"""Get community use case."""

from pydantic import BaseModel

from port42.domain.service import CommunityService
from port42.domain.value import Slug

from .list_communities import CommunityItem


class GetCommunityRequest(BaseModel):
    """Get community request."""

    slug: str


class GetCommunityUseCase:
    """Use case for looking up a community by its slug."""

    def __init__(self, community_service: CommunityService) -> None:
        self.community_service = community_service

    async def execute(self, request: GetCommunityRequest) -> CommunityItem:
        """Execute get community flow.

        Raises:
            NotFoundError: If no community has this slug
            ValidationError: If the slug is malformed
        """
        community = await self.community_service.get_by_slug(Slug(request.slug))
        return CommunityItem.from_community(community)
