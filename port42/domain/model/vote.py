"""Vote records and tallies.

A vote is a per-(user, entity) record; an entity's tally is the count of
those records by direction. Score is always derived from the tally.
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field, computed_field

from port42.domain.model.common import DomainModel
from port42.domain.value import UserId, VotableType, VoteId, VoteType
from port42.domain.value.common import ValueObject


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per user per entity (enforced by a unique constraint)
    - Polymorphic reference to a resource or a comment
    """

    id: VoteId
    user_id: UserId
    votable_type: VotableType
    votable_id: UUID  # ResourceId or CommentId
    vote_type: VoteType
    created_at: datetime = Field(default_factory=datetime.now)


class VoteTally(ValueObject):
    """Up/down counters of a votable entity."""

    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)

    @computed_field
    @property
    def score(self) -> int:
        """Net score (upvotes - downvotes)."""
        return self.upvotes - self.downvotes


class VoteResult(ValueObject):
    """Outcome of applying a vote, as seen by the voter."""

    upvotes: int
    downvotes: int
    score: int
    user_choice: VoteType | None

    @classmethod
    def from_tally(cls, tally: VoteTally, user_choice: VoteType | None) -> "VoteResult":
        return cls(
            upvotes=tally.upvotes,
            downvotes=tally.downvotes,
            score=tally.score,
            user_choice=user_choice,
        )
