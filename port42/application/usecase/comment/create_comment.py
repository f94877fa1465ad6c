"""Create comment use case."""

from uuid import UUID

from pydantic import BaseModel

from port42.adapter.realtime import RealtimeOutbox
from port42.application.usecase.base import BaseUseCase
from port42.domain.service import CommentService
from port42.domain.value import (
    CommentId,
    ConnectionId,
    RealtimeEventType,
    ResourceId,
    UserId,
)

from .common import CommentItem


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    resource_id: str  # UUID string
    content: str
    author_id: str  # User ID from authenticated user
    parent_id: str | None = None  # Parent comment ID for replies
    connection_id: str | None = None  # Caller's realtime connection, not echoed


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment: CommentItem


class CreateCommentUseCase(BaseUseCase):
    """Use case for commenting on a resource or replying to another comment."""

    def __init__(
        self,
        comment_service: CommentService,
        outbox: RealtimeOutbox,
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            outbox: Realtime events released once the request commits
        """
        self.comment_service = comment_service
        self.outbox = outbox

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Steps:
        1. Create comment via comment service (validates resource and parent,
           computes depth, increments the resource's comment count)
        2. Queue comment_added for everyone viewing the resource

        Args:
            request: Create comment request

        Returns:
            The created comment

        Raises:
            NotFoundError: If the resource or parent comment does not exist
            InvalidArgumentError: If content is invalid or the parent belongs
                to another resource
        """
        resource_id = ResourceId(UUID(request.resource_id))
        parent_id = CommentId(UUID(request.parent_id)) if request.parent_id else None

        comment = await self.comment_service.create_comment(
            resource_id=resource_id,
            author_id=UserId(UUID(request.author_id)),
            content=request.content,
            parent_id=parent_id,
        )
        item = CommentItem.from_comment(comment)

        self.outbox.add(
            resource_id,
            RealtimeEventType.COMMENT_ADDED,
            {
                "resource_id": str(resource_id),
                "comment": item.model_dump(mode="json"),
            },
            exclude=ConnectionId(request.connection_id)
            if request.connection_id
            else None,
        )

        return CreateCommentResponse(comment=item)
