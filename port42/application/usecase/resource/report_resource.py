"""Report resource use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from port42.domain.service import ResourceService
from port42.domain.value import ReportReason, ResourceId, UserId


class ReportResourceRequest(BaseModel):
    """Report resource request."""

    resource_id: str  # UUID string
    reason: ReportReason
    description: str | None = None
    user_id: str  # User ID from authenticated user


class ReportResourceResponse(BaseModel):
    """Report resource response."""

    report_id: str
    resource_id: str
    reason: ReportReason
    created_at: datetime


class ReportResourceUseCase:
    """Use case for flagging a resource for moderation."""

    def __init__(self, resource_service: ResourceService) -> None:
        self.resource_service = resource_service

    async def execute(self, request: ReportResourceRequest) -> ReportResourceResponse:
        """Execute report resource flow.

        Raises:
            NotFoundError: If the resource does not exist
            ConflictError: If the user already reported it
        """
        report = await self.resource_service.report_resource(
            resource_id=ResourceId(UUID(request.resource_id)),
            reporter_id=UserId(UUID(request.user_id)),
            reason=request.reason,
            description=request.description,
        )
        return ReportResourceResponse(
            report_id=str(report.id),
            resource_id=str(report.resource_id),
            reason=report.reason,
            created_at=report.created_at,
        )
