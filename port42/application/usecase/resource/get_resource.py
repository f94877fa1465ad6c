"""Get resource use case."""

from uuid import UUID

from pydantic import BaseModel

from port42.domain.service import ResourceService, VoteService
from port42.domain.value import ResourceId, UserId, VotableType

from .common import ResourceItem


class GetResourceRequest(BaseModel):
    """Get resource request."""

    resource_id: str  # UUID string
    user_id: str | None = None  # Viewer, if authenticated


class GetResourceResponse(BaseModel):
    """Get resource response."""

    resource: ResourceItem


class GetResourceUseCase:
    """Use case for viewing a resource (counts as a view)."""

    def __init__(
        self, resource_service: ResourceService, vote_service: VoteService
    ) -> None:
        """Initialize get resource use case.

        Args:
            resource_service: Resource domain service
            vote_service: Vote domain service (viewer's vote)
        """
        self.resource_service = resource_service
        self.vote_service = vote_service

    async def execute(self, request: GetResourceRequest) -> GetResourceResponse:
        """Execute get resource flow.

        Steps:
        1. Load the active resource
        2. Record a view
        3. Look up the viewer's vote (if authenticated)

        Raises:
            NotFoundError: If the resource does not exist or was removed
        """
        resource_id = ResourceId(UUID(request.resource_id))

        resource = await self.resource_service.get_active_resource(resource_id)
        await self.resource_service.record_view(resource_id)

        user_choice = None
        if request.user_id:
            user_choice = await self.vote_service.get_user_choice(
                UserId(UUID(request.user_id)), VotableType.RESOURCE, resource_id
            )

        resource = resource.model_copy(update={"views": resource.views + 1})
        return GetResourceResponse(
            resource=ResourceItem.from_resource(resource, user_choice=user_choice)
        )
