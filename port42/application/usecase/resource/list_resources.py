"""List resources use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from port42.domain.service import ResourceService, VoteService
from port42.domain.value import (
    CommunityId,
    Difficulty,
    ResourceSort,
    ResourceType,
    UserId,
    VotableType,
)

from .common import ResourceItem


class ListResourcesRequest(BaseModel):
    """List resources request."""

    sort: ResourceSort = ResourceSort.NEWEST
    community_id: str | None = None
    resource_type: ResourceType | None = None
    difficulty: Difficulty | None = None
    limit: int = Field(default=20, ge=1, le=100)
    offset: int = Field(default=0, ge=0)
    user_id: str | None = None  # Viewer, if authenticated


class ListResourcesResponse(BaseModel):
    """List resources response."""

    resources: list[ResourceItem]
    total: int
    limit: int
    offset: int


class ListResourcesUseCase:
    """Use case for browsing resources."""

    def __init__(
        self, resource_service: ResourceService, vote_service: VoteService
    ) -> None:
        self.resource_service = resource_service
        self.vote_service = vote_service

    async def execute(self, request: ListResourcesRequest) -> ListResourcesResponse:
        """Execute list resources flow.

        Args:
            request: Filters, sort and paging, plus the optional viewer

        Returns:
            Page of resources with the viewer's vote on each
        """
        resources, total = await self.resource_service.list_resources(
            sort=request.sort,
            community_id=CommunityId(UUID(request.community_id))
            if request.community_id
            else None,
            resource_type=request.resource_type,
            difficulty=request.difficulty,
            limit=request.limit,
            offset=request.offset,
        )

        choices = {}
        if request.user_id and resources:
            choices = await self.vote_service.get_user_choices(
                user_id=UserId(UUID(request.user_id)),
                votable_type=VotableType.RESOURCE,
                votable_ids=[resource.id for resource in resources],
            )

        return ListResourcesResponse(
            resources=[
                ResourceItem.from_resource(r, user_choice=choices.get(r.id))
                for r in resources
            ],
            total=total,
            limit=request.limit,
            offset=request.offset,
        )
