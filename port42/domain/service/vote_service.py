"""Vote domain service.

Applies a user's vote to a resource or comment. The per-user vote record is
swapped first (delete, then insert), and the entity's counters move by the
difference in one atomic update, so concurrent voters never lose each
other's votes.
"""

from datetime import datetime
from uuid import UUID, uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from port42.config import ReputationSettings
from port42.domain.error import ConflictError, InvalidArgumentError
from port42.domain.model.vote import Vote, VoteResult, VoteTally
from port42.domain.repository import VoteRepository
from port42.domain.value import (
    CommentId,
    ResourceId,
    UserId,
    VotableType,
    VoteChoice,
    VoteId,
    VoteType,
)

from .base import Service
from .comment_service import CommentService
from .resource_service import ResourceService
from .user_service import UserService


def reputation_delta(
    previous: VoteType | None,
    new: VoteType | None,
    settings: ReputationSettings,
) -> int:
    """Reputation change for a resource owner when a vote moves.

    Each transition counts on its own: losing an upvote, losing a downvote,
    gaining an upvote, gaining a downvote.

    Args:
        previous: The voter's earlier vote, None if they had not voted
        new: The voter's vote now, None if removed
        settings: Reputation weights

    Returns:
        Net reputation delta (0 when the vote did not change)
    """
    delta = 0
    if previous == VoteType.UP and new != VoteType.UP:
        delta -= settings.upvote_weight
    if previous == VoteType.DOWN and new != VoteType.DOWN:
        delta += settings.downvote_weight
    if new == VoteType.UP and previous != VoteType.UP:
        delta += settings.upvote_weight
    if new == VoteType.DOWN and previous != VoteType.DOWN:
        delta -= settings.downvote_weight
    return delta


def tally_delta(previous: VoteType | None, new: VoteType | None) -> tuple[int, int]:
    """(upvote, downvote) counter changes for a vote moving from previous to new."""
    up = int(new == VoteType.UP) - int(previous == VoteType.UP)
    down = int(new == VoteType.DOWN) - int(previous == VoteType.DOWN)
    return up, down


class VoteService(Service):
    """Domain service for vote operations."""

    def __init__(
        self,
        vote_repository: VoteRepository,
        resource_service: ResourceService,
        comment_service: CommentService,
        user_service: UserService,
        reputation_settings: ReputationSettings,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            resource_service: Resource domain service
            comment_service: Comment domain service
            user_service: User domain service
            reputation_settings: Reputation weights for resource votes
        """
        self.vote_repository = vote_repository
        self.resource_service = resource_service
        self.comment_service = comment_service
        self.user_service = user_service
        self.reputation_settings = reputation_settings

    @staticmethod
    def parse_choice(choice: VoteChoice | str) -> VoteChoice:
        """Coerce a raw choice.

        Raises:
            InvalidArgumentError: If the choice is not up, down or remove
        """
        try:
            return VoteChoice(choice)
        except ValueError:
            raise InvalidArgumentError(
                f"Invalid vote choice {choice!r}, expected one of: up, down, remove"
            )

    async def apply_vote(
        self,
        votable_type: VotableType,
        votable_id: UUID,
        user_id: UserId,
        choice: VoteChoice | str,
    ) -> VoteResult:
        """Apply a user's vote choice to a resource or comment.

        Steps:
        1. Delete the user's existing vote record, learning the previous choice
        2. Insert the new record unless the choice is remove
        3. Shift the entity's counters by the difference in one atomic update
        4. For resource votes by someone other than the owner, adjust the
           owner's reputation

        Voting the same choice twice is a no-op for the tallies.

        Args:
            votable_type: Resource or comment
            votable_id: Entity ID
            user_id: Voter
            choice: up, down or remove

        Returns:
            New tallies, score and the voter's current choice

        Raises:
            InvalidArgumentError: If the choice is invalid
            NotFoundError: If the voter or the entity does not exist
            ConflictError: If the same user is voting concurrently on this entity
        """
        choice = self.parse_choice(choice)

        with logfire.span(
            "vote_service.apply_vote",
            votable_type=votable_type.value,
            votable_id=str(votable_id),
            user_id=str(user_id),
            choice=choice.value,
        ):
            await self.user_service.get_by_id(user_id)

            if votable_type == VotableType.RESOURCE:
                resource = await self.resource_service.get_active_resource(
                    ResourceId(votable_id)
                )
                owner_id = resource.submitted_by
            else:
                comment = await self.comment_service.get_comment(
                    CommentId(votable_id)
                )
                owner_id = comment.author_id

            previous_vote = await self.vote_repository.delete_by_user_and_votable(
                user_id, votable_type, votable_id
            )
            previous = previous_vote.vote_type if previous_vote else None
            new = choice.as_vote_type()

            if new is not None:
                vote = Vote(
                    id=VoteId(uuid4()),
                    user_id=user_id,
                    votable_type=votable_type,
                    votable_id=votable_id,
                    vote_type=new,
                    created_at=datetime.now(),
                )
                try:
                    await self.vote_repository.save(vote)
                except IntegrityError:
                    logfire.warn(
                        "Concurrent vote by same user",
                        user_id=str(user_id),
                        votable_id=str(votable_id),
                    )
                    raise ConflictError("Another vote by this user is in progress")

            up_delta, down_delta = tally_delta(previous, new)
            tally = await self._apply_tally_delta(
                votable_type, votable_id, up_delta, down_delta
            )

            if votable_type == VotableType.RESOURCE and owner_id != user_id:
                delta = reputation_delta(previous, new, self.reputation_settings)
                if delta or up_delta or down_delta:
                    await self.user_service.adjust_reputation(
                        owner_id,
                        delta,
                        upvote_delta=up_delta,
                        downvote_delta=down_delta,
                    )

            logfire.info(
                "Vote applied",
                votable_type=votable_type.value,
                votable_id=str(votable_id),
                previous=previous.value if previous else None,
                new=new.value if new else None,
                upvotes=tally.upvotes,
                downvotes=tally.downvotes,
            )
            return VoteResult.from_tally(tally, new)

    async def _apply_tally_delta(
        self,
        votable_type: VotableType,
        votable_id: UUID,
        up_delta: int,
        down_delta: int,
    ) -> VoteTally:
        if votable_type == VotableType.RESOURCE:
            return await self.resource_service.apply_vote_delta(
                ResourceId(votable_id), up_delta, down_delta
            )
        return await self.comment_service.apply_vote_delta(
            CommentId(votable_id), up_delta, down_delta
        )

    async def get_user_choices(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: list[UUID],
    ) -> dict[UUID, VoteType]:
        """Map each entity the user has voted on to the direction of that vote.

        Args:
            user_id: User ID
            votable_type: Resource or comment
            votable_ids: Entities to check

        Returns:
            Vote direction per voted entity; entities without a vote are absent
        """
        if not votable_ids:
            return {}

        # Batch query to fetch all votes at once (avoid N+1)
        votes = await self.vote_repository.find_by_user_and_votables(
            user_id=user_id,
            votable_type=votable_type,
            votable_ids=votable_ids,
        )
        return {UUID(str(vote.votable_id)): vote.vote_type for vote in votes}

    async def get_user_choice(
        self, user_id: UserId, votable_type: VotableType, votable_id: UUID
    ) -> VoteType | None:
        vote = await self.vote_repository.find_by_user_and_votable(
            user_id, votable_type, votable_id
        )
        return vote.vote_type if vote else None

    async def recount_tally(
        self, votable_type: VotableType, votable_id: UUID
    ) -> VoteTally:
        """Count an entity's tally directly from its vote records.

        Used to check that stored counters agree with the record set.
        """
        with logfire.span(
            "vote_service.recount_tally",
            votable_type=votable_type.value,
            votable_id=str(votable_id),
        ):
            upvotes = await self.vote_repository.count_by_votable(
                votable_type, votable_id, VoteType.UP
            )
            downvotes = await self.vote_repository.count_by_votable(
                votable_type, votable_id, VoteType.DOWN
            )
            return VoteTally(upvotes=upvotes, downvotes=downvotes)
