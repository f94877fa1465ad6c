"""PostgreSQL implementation of Vote repository."""

from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import and_, delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from port42.domain.model import Vote
from port42.domain.repository import VoteRepository
from port42.domain.value import UserId, VotableType, VoteType
from port42.persistence.mappers import row_to_vote, vote_to_dict
from port42.persistence.retry import idempotent_read, mutation
from port42.persistence.tables import votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _match(self, user_id: UserId, votable_type: VotableType, votable_id: UUID):
        return and_(
            votes_table.c.user_id == user_id,
            votes_table.c.votable_type == votable_type.value,
            votes_table.c.votable_id == votable_id,
        )

    @idempotent_read
    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Find a user's vote on a specific item."""
        stmt = select(votes_table).where(
            self._match(user_id, votable_type, votable_id)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    @idempotent_read
    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> List[Vote]:
        """Find a user's votes on multiple items (batch query)."""
        if not votable_ids:
            return []

        stmt = select(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.votable_type == votable_type.value,
                votes_table.c.votable_id.in_(votable_ids),
            )
        )
        result = await self.session.execute(stmt)
        rows = result.fetchall()
        return [row_to_vote(row._asdict()) for row in rows]

    @mutation
    async def save(self, vote: Vote) -> Vote:
        """Insert a vote record."""
        stmt = insert(votes_table).values(**vote_to_dict(vote))
        await self.session.execute(stmt)
        await self.session.flush()
        return vote

    @mutation
    async def delete_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Delete a user's vote, returning the removed record.

        DELETE ... RETURNING lets exactly one of two concurrent requests see
        the previous vote, so it is only ever subtracted once.
        """
        stmt = (
            delete(votes_table)
            .where(self._match(user_id, votable_type, votable_id))
            .returning(votes_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_vote(row._asdict()) if row else None

    @idempotent_read
    async def count_by_votable(
        self,
        votable_type: VotableType,
        votable_id: UUID,
        vote_type: VoteType,
    ) -> int:
        """Count vote records of one direction on an entity."""
        stmt = (
            select(func.count())
            .select_from(votes_table)
            .where(votes_table.c.votable_type == votable_type.value)
            .where(votes_table.c.votable_id == votable_id)
            .where(votes_table.c.vote_type == vote_type.value)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
