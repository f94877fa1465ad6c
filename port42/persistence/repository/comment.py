"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional, Sequence

from sqlalchemy import desc, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from port42.domain.model import REDACTED_CONTENT, Comment, VoteTally
from port42.domain.repository import CommentRepository
from port42.domain.value import CommentId, CommentSort, ResourceId
from port42.persistence.mappers import comment_to_dict, row_to_comment, row_to_tally
from port42.persistence.retry import idempotent_read, mutation
from port42.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @idempotent_read
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    @idempotent_read
    async def find_top_level(
        self,
        resource_id: ResourceId,
        sort: CommentSort,
        limit: int,
        offset: int,
    ) -> List[Comment]:
        """Find one page of top-level comments, deleted ones included."""
        order_by = {
            CommentSort.NEWEST: [desc(comments_table.c.created_at)],
            CommentSort.OLDEST: [comments_table.c.created_at],
            CommentSort.MOST_VOTED: [
                desc(comments_table.c.upvotes - comments_table.c.downvotes),
                desc(comments_table.c.created_at),
            ],
        }[sort]

        stmt = (
            select(comments_table)
            .where(comments_table.c.resource_id == resource_id)
            .where(comments_table.c.parent_id.is_(None))
            .order_by(*order_by, comments_table.c.id)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    @idempotent_read
    async def count_top_level(self, resource_id: ResourceId) -> int:
        """Count top-level comments of a resource, deleted ones included."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.resource_id == resource_id)
            .where(comments_table.c.parent_id.is_(None))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    @idempotent_read
    async def find_replies(self, root_ids: Sequence[CommentId]) -> List[Comment]:
        """Find every reply in the given threads, oldest first."""
        if not root_ids:
            return []

        stmt = (
            select(comments_table)
            .where(comments_table.c.root_id.in_(root_ids))
            .order_by(comments_table.c.created_at, comments_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    @mutation
    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        stmt = comments_table.insert().values(**comment_to_dict(comment))
        await self.session.execute(stmt)
        await self.session.flush()
        return comment

    @mutation
    async def edit_content(
        self, comment_id: CommentId, content: str
    ) -> Optional[Comment]:
        """Replace content, appending the prior content to the edit history.

        The history entry is built from the row's current content inside the
        same UPDATE, so two concurrent edits each record what they replaced.
        """
        history_entry = func.jsonb_build_array(
            func.jsonb_build_object(
                "prior_content",
                comments_table.c.content,
                "edited_at",
                func.now(),
            )
        )
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .where(comments_table.c.is_deleted.is_(False))
            .values(
                content=content,
                is_edited=True,
                edit_history=comments_table.c.edit_history.op("||")(history_entry),
                updated_at=func.now(),
            )
            .returning(comments_table)
        )

        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_comment(row._asdict()) if row else None

    @mutation
    async def soft_delete(self, comment_id: CommentId) -> Optional[Comment]:
        """Mark a comment deleted and redact its content."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .where(comments_table.c.is_deleted.is_(False))
            .values(
                content=REDACTED_CONTENT,
                is_deleted=True,
                deleted_at=func.now(),
                updated_at=func.now(),
            )
            .returning(comments_table)
        )

        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_comment(row._asdict()) if row else None

    @mutation
    async def apply_vote_delta(
        self, comment_id: CommentId, upvote_delta: int, downvote_delta: int
    ) -> Optional[VoteTally]:
        """Atomically shift the vote counters, flooring each at zero."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(
                upvotes=func.greatest(comments_table.c.upvotes + upvote_delta, 0),
                downvotes=func.greatest(
                    comments_table.c.downvotes + downvote_delta, 0
                ),
            )
            .returning(comments_table.c.upvotes, comments_table.c.downvotes)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_tally(dict(row)) if row else None
