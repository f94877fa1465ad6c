"""Cast vote use case."""

from uuid import UUID

from pydantic import BaseModel

from port42.adapter.realtime import RealtimeOutbox
from port42.application.usecase.base import BaseUseCase
from port42.domain.service import CommentService, VoteService
from port42.domain.value import (
    CommentId,
    ConnectionId,
    RealtimeEventType,
    ResourceId,
    UserId,
    VotableType,
    VoteType,
)


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    votable_type: VotableType
    votable_id: str  # UUID string
    choice: str  # up, down or remove; validated by the vote service
    user_id: str  # User ID from authenticated user
    connection_id: str | None = None  # Caller's realtime connection, not echoed


class CastVoteResponse(BaseModel):
    """Cast vote response."""

    votable_type: VotableType
    votable_id: str
    upvotes: int
    downvotes: int
    score: int
    user_choice: VoteType | None


class CastVoteUseCase(BaseUseCase):
    """Use case for voting up, down, or withdrawing a vote on a resource or comment."""

    def __init__(
        self,
        vote_service: VoteService,
        comment_service: CommentService,
        outbox: RealtimeOutbox,
    ) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
            comment_service: Comment domain service (room lookup for comment votes)
            outbox: Realtime events released once the request commits
        """
        self.vote_service = vote_service
        self.comment_service = comment_service
        self.outbox = outbox

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Steps:
        1. Apply the vote via the vote service
        2. Queue votes_updated for the room of the resource the entity
           belongs to (a comment's resource for comment votes)

        Args:
            request: Cast vote request

        Returns:
            New tallies and the voter's current choice

        Raises:
            InvalidArgumentError: If the choice is invalid
            NotFoundError: If the entity does not exist
            ConflictError: If the same user is voting concurrently on it
        """
        votable_id = UUID(request.votable_id)

        result = await self.vote_service.apply_vote(
            votable_type=request.votable_type,
            votable_id=votable_id,
            user_id=UserId(UUID(request.user_id)),
            choice=request.choice,
        )

        if request.votable_type == VotableType.RESOURCE:
            room = ResourceId(votable_id)
        else:
            comment = await self.comment_service.get_comment(CommentId(votable_id))
            room = comment.resource_id

        self.outbox.add(
            room,
            RealtimeEventType.VOTES_UPDATED,
            {
                "resource_id": str(room),
                "entity_type": request.votable_type.value,
                "entity_id": request.votable_id,
                "upvotes": result.upvotes,
                "downvotes": result.downvotes,
                "score": result.score,
            },
            exclude=ConnectionId(request.connection_id)
            if request.connection_id
            else None,
        )

        return CastVoteResponse(
            votable_type=request.votable_type,
            votable_id=request.votable_id,
            upvotes=result.upvotes,
            downvotes=result.downvotes,
            score=result.score,
            user_choice=result.user_choice,
        )
