"""Get comments use case."""

from uuid import UUID

from pydantic import BaseModel

from port42.domain.service import CommentNode, CommentService, VoteService
from port42.domain.value import CommentSort, ResourceId, UserId, VotableType, VoteType

from .common import CommentItem


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    resource_id: str  # UUID string
    sort: CommentSort = CommentSort.NEWEST
    limit: int | None = None
    offset: int = 0
    user_id: str | None = None  # Viewer, if authenticated


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    resource_id: str
    comments: list[CommentItem]
    total: int  # Top-level comments across all pages
    limit: int
    offset: int
    has_more: bool


class GetCommentsUseCase:
    """Use case for reading one page of a resource's threaded discussion."""

    def __init__(
        self,
        comment_service: CommentService,
        vote_service: VoteService,
    ) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
            vote_service: Vote service for the viewer's own votes
        """
        self.comment_service = comment_service
        self.vote_service = vote_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Top-level comments are paginated in the requested order, each with its
        whole reply tree attached oldest-first. Deleted comments stay in place
        with redacted content so their replies remain reachable.

        Args:
            request: Get comments request

        Returns:
            Page of comment trees with the viewer's vote on each comment
        """
        page = await self.comment_service.list_thread(
            resource_id=ResourceId(UUID(request.resource_id)),
            sort=request.sort,
            limit=request.limit,
            offset=request.offset,
        )

        # Batch query for the viewer's votes across the whole page
        choices: dict[UUID, VoteType] = {}
        if request.user_id:
            choices = await self.vote_service.get_user_choices(
                user_id=UserId(UUID(request.user_id)),
                votable_type=VotableType.COMMENT,
                votable_ids=[comment.id for comment in page.all_comments()],
            )

        def to_item(node: CommentNode) -> CommentItem:
            return CommentItem.from_comment(
                node.comment,
                user_choice=choices.get(node.comment.id),
                replies=[to_item(reply) for reply in node.replies],
            )

        return GetCommentsResponse(
            resource_id=request.resource_id,
            comments=[to_item(node) for node in page.comments],
            total=page.total_top_level,
            limit=page.limit,
            offset=page.offset,
            has_more=page.has_more,
        )
