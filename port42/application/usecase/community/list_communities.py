"""List communities use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from port42.domain.model import Community
from port42.domain.service import CommunityService


class CommunityItem(BaseModel):
    """Community item in response."""

    community_id: str
    name: str
    slug: str
    description: str
    icon: str
    color: str
    resource_count: int
    member_count: int
    created_at: datetime

    @classmethod
    def from_community(cls, community: Community) -> "CommunityItem":
        return cls(
            community_id=str(community.id),
            name=community.name,
            slug=community.slug.root,
            description=community.description,
            icon=community.icon,
            color=community.color,
            resource_count=community.resource_count,
            member_count=community.member_count,
            created_at=community.created_at,
        )


class ListCommunitiesResponse(BaseModel):
    """List communities response."""

    communities: list[CommunityItem]


class ListCommunitiesUseCase:
    """Use case for listing all communities."""

    def __init__(self, community_service: CommunityService) -> None:
        """Initialize list communities use case.

        Args:
            community_service: Community domain service
        """
        self.community_service = community_service

    async def execute(self) -> ListCommunitiesResponse:
        """Execute list communities flow.

        Returns:
            Every community, ordered by name
        """
        with logfire.span("list_communities.execute"):
            communities = await self.community_service.list_communities()
            items = [CommunityItem.from_community(c) for c in communities]
            logfire.info("Communities listed", count=len(items))
            return ListCommunitiesResponse(communities=items)
