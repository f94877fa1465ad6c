"""Delete resource use case."""

from uuid import UUID

from pydantic import BaseModel

from port42.domain.service import ResourceService
from port42.domain.value import ResourceId, UserId


class DeleteResourceRequest(BaseModel):
    """Delete resource request."""

    resource_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class DeleteResourceResponse(BaseModel):
    """Delete resource response."""

    resource_id: str
    community_id: str
    deleted: bool


class DeleteResourceUseCase:
    """Use case for soft-deleting a resource (submitter or moderator)."""

    def __init__(self, resource_service: ResourceService) -> None:
        self.resource_service = resource_service

    async def execute(self, request: DeleteResourceRequest) -> DeleteResourceResponse:
        """Execute delete resource flow.

        Raises:
            NotFoundError: If the resource is missing or already removed
            PermissionDeniedError: If the user is neither submitter nor moderator
        """
        resource = await self.resource_service.deactivate_resource(
            resource_id=ResourceId(UUID(request.resource_id)),
            requester_id=UserId(UUID(request.user_id)),
        )
        return DeleteResourceResponse(
            resource_id=str(resource.id),
            community_id=str(resource.community_id),
            deleted=not resource.is_active,
        )
