"""Delete comment use case."""

from uuid import UUID

from pydantic import BaseModel

from port42.domain.service import CommentService
from port42.domain.value import CommentId, UserId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment_id: str
    resource_id: str
    deleted: bool


class DeleteCommentUseCase:
    """Use case for soft-deleting a comment (author or moderator)."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Raises:
            NotFoundError: If the comment does not exist or is already deleted
            PermissionDeniedError: If the user is neither author nor moderator
        """
        comment = await self.comment_service.soft_delete(
            comment_id=CommentId(UUID(request.comment_id)),
            requester_id=UserId(UUID(request.user_id)),
        )
        return DeleteCommentResponse(
            comment_id=str(comment.id),
            resource_id=str(comment.resource_id),
            deleted=comment.is_deleted,
        )
