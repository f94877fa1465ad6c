"""Submit resource use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from port42.domain.service import ResourceService
from port42.domain.value import CommunityId, Difficulty, ResourceType, UserId

from .common import ResourceItem


class SubmitResourceRequest(BaseModel):
    """Submit resource request."""

    title: str
    url: str
    description: str = ""
    resource_type: ResourceType = ResourceType.ARTICLE
    difficulty: Difficulty = Difficulty.BEGINNER
    tags: list[str] = Field(default_factory=list)
    community_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class SubmitResourceResponse(BaseModel):
    """Submit resource response."""

    resource: ResourceItem


class SubmitResourceUseCase:
    """Use case for submitting a link into a community."""

    def __init__(self, resource_service: ResourceService) -> None:
        """Initialize submit resource use case.

        Args:
            resource_service: Resource domain service
        """
        self.resource_service = resource_service

    async def execute(self, request: SubmitResourceRequest) -> SubmitResourceResponse:
        """Execute submit resource flow.

        Raises:
            NotFoundError: If the community or submitter does not exist
            ConflictError: If the URL has already been submitted
        """
        resource = await self.resource_service.submit_resource(
            submitter_id=UserId(UUID(request.user_id)),
            community_id=CommunityId(UUID(request.community_id)),
            title=request.title,
            url=request.url,
            description=request.description,
            resource_type=request.resource_type,
            difficulty=request.difficulty,
            tags=request.tags,
        )
        return SubmitResourceResponse(resource=ResourceItem.from_resource(resource))
