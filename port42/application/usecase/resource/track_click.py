"""Track click use case."""

from uuid import UUID

from pydantic import BaseModel

from port42.domain.service import ResourceService
from port42.domain.value import ResourceId


class TrackClickRequest(BaseModel):
    """Track click request."""

    resource_id: str  # UUID string


class TrackClickUseCase:
    """Use case for counting an outbound click on a resource link."""

    def __init__(self, resource_service: ResourceService) -> None:
        self.resource_service = resource_service

    async def execute(self, request: TrackClickRequest) -> None:
        await self.resource_service.record_click(ResourceId(UUID(request.resource_id)))
