"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from uuid import UUID

from port42.domain.model.vote import Vote
from port42.domain.value import UserId, VotableType, VoteType


class VoteRepository(ABC):
    """Repository for per-user vote records.

    Each (user, votable_type, votable_id) has at most one record.
    """

    @abstractmethod
    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Find a user's vote on a specific entity.

        Args:
            user_id: The user's ID
            votable_type: Type of entity (resource or comment)
            votable_id: ID of the entity

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> List[Vote]:
        """Find a user's votes on multiple entities (batch query).

        Args:
            user_id: The user's ID
            votable_type: Type of the entities
            votable_ids: Entity IDs to check

        Returns:
            Votes by the user on the given entities
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Insert a vote record.

        Raises:
            IntegrityError: If the user already has a vote on this entity
        """
        pass

    @abstractmethod
    async def delete_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Atomically delete a user's vote on an entity.

        Returns:
            The deleted vote, or None if the user had not voted
        """
        pass

    @abstractmethod
    async def count_by_votable(
        self,
        votable_type: VotableType,
        votable_id: UUID,
        vote_type: VoteType,
    ) -> int:
        """Count vote records of one direction on an entity."""
        pass
