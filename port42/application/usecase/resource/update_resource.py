"""Update resource use case."""

from uuid import UUID

from pydantic import BaseModel

from port42.domain.service import ResourceService
from port42.domain.value import Difficulty, ResourceId, ResourceType, UserId

from .common import ResourceItem


class UpdateResourceRequest(BaseModel):
    """Update resource request.

    Fields left unset keep their current value.
    """

    resource_id: str  # UUID string
    user_id: str  # User ID from authenticated user
    title: str | None = None
    description: str | None = None
    resource_type: ResourceType | None = None
    difficulty: Difficulty | None = None
    tags: list[str] | None = None


class UpdateResourceResponse(BaseModel):
    """Update resource response."""

    resource: ResourceItem


class UpdateResourceUseCase:
    """Use case for editing a resource (submitter or moderator)."""

    def __init__(self, resource_service: ResourceService) -> None:
        self.resource_service = resource_service

    async def execute(self, request: UpdateResourceRequest) -> UpdateResourceResponse:
        """Execute update resource flow.

        Raises:
            NotFoundError: If the resource is missing or removed
            PermissionDeniedError: If the user is neither submitter nor moderator
        """
        resource = await self.resource_service.update_resource(
            resource_id=ResourceId(UUID(request.resource_id)),
            editor_id=UserId(UUID(request.user_id)),
            title=request.title,
            description=request.description,
            resource_type=request.resource_type,
            difficulty=request.difficulty,
            tags=request.tags,
        )
        return UpdateResourceResponse(resource=ResourceItem.from_resource(resource))
