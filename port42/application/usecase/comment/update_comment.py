"""Update comment use case."""

from uuid import UUID

from pydantic import BaseModel

from port42.domain.service import CommentService, VoteService
from port42.domain.value import CommentId, UserId, VotableType

from .common import CommentItem


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: str  # UUID string
    content: str
    user_id: str  # User ID from authenticated user


class UpdateCommentResponse(BaseModel):
    """Update comment response."""

    comment: CommentItem


class UpdateCommentUseCase:
    """Use case for editing a comment's content."""

    def __init__(
        self,
        comment_service: CommentService,
        vote_service: VoteService,
    ) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment domain service
            vote_service: Vote domain service (editor's own vote state)
        """
        self.comment_service = comment_service
        self.vote_service = vote_service

    async def execute(self, request: UpdateCommentRequest) -> UpdateCommentResponse:
        """Execute update comment flow.

        Args:
            request: Update comment request

        Returns:
            The edited comment, including its edit history

        Raises:
            NotFoundError: If the comment does not exist or has been deleted
            PermissionDeniedError: If the user is not the author
            InvalidArgumentError: If the new content is invalid
        """
        comment_id = CommentId(UUID(request.comment_id))
        user_id = UserId(UUID(request.user_id))

        comment = await self.comment_service.edit_comment(
            comment_id=comment_id,
            editor_id=user_id,
            new_content=request.content,
        )
        user_choice = await self.vote_service.get_user_choice(
            user_id, VotableType.COMMENT, comment_id
        )

        return UpdateCommentResponse(
            comment=CommentItem.from_comment(comment, user_choice=user_choice)
        )
