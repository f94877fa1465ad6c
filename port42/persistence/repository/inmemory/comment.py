"""In-memory comment repository for testing."""

from datetime import datetime
from typing import Optional, Sequence

from port42.domain.model.comment import REDACTED_CONTENT, Comment, EditRecord
from port42.domain.model.vote import VoteTally
from port42.domain.repository.comment import CommentRepository
from port42.domain.value import CommentId, CommentSort, ResourceId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    def _top_level(self, resource_id: ResourceId) -> list[Comment]:
        return [
            c
            for c in self._comments.values()
            if c.resource_id == resource_id and c.parent_id is None
        ]

    async def find_top_level(
        self,
        resource_id: ResourceId,
        sort: CommentSort,
        limit: int,
        offset: int,
    ) -> list[Comment]:
        """Find one page of top-level comments, deleted ones included."""
        comments = sorted(self._top_level(resource_id), key=lambda c: str(c.id))

        if sort == CommentSort.OLDEST:
            comments.sort(key=lambda c: c.created_at)
        elif sort == CommentSort.MOST_VOTED:
            comments.sort(key=lambda c: (c.score, c.created_at), reverse=True)
        else:
            comments.sort(key=lambda c: c.created_at, reverse=True)

        return comments[offset : offset + limit]

    async def count_top_level(self, resource_id: ResourceId) -> int:
        return len(self._top_level(resource_id))

    async def find_replies(self, root_ids: Sequence[CommentId]) -> list[Comment]:
        """Find every reply in the given threads, oldest first."""
        roots = set(root_ids)
        replies = [c for c in self._comments.values() if c.root_id in roots]
        replies.sort(key=lambda c: (c.created_at, str(c.id)))
        return replies

    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        self._comments[comment.id] = comment
        return comment

    async def edit_content(
        self, comment_id: CommentId, content: str
    ) -> Optional[Comment]:
        """Replace content, appending the prior content to the edit history."""
        comment = self._comments.get(comment_id)
        if not comment or comment.is_deleted:
            return None

        now = datetime.now()
        updated = comment.model_copy(
            update={
                "content": content,
                "is_edited": True,
                "edit_history": [
                    *comment.edit_history,
                    EditRecord(prior_content=comment.content, edited_at=now),
                ],
                "updated_at": now,
            }
        )
        self._comments[comment_id] = updated
        return updated

    async def soft_delete(self, comment_id: CommentId) -> Optional[Comment]:
        """Mark a comment deleted and redact its content."""
        comment = self._comments.get(comment_id)
        if not comment or comment.is_deleted:
            return None

        now = datetime.now()
        deleted = comment.model_copy(
            update={
                "content": REDACTED_CONTENT,
                "is_deleted": True,
                "deleted_at": now,
                "updated_at": now,
            }
        )
        self._comments[comment_id] = deleted
        return deleted

    async def apply_vote_delta(
        self, comment_id: CommentId, upvote_delta: int, downvote_delta: int
    ) -> Optional[VoteTally]:
        """Shift the vote counters, flooring each at zero."""
        comment = self._comments.get(comment_id)
        if not comment:
            return None

        updated = comment.model_copy(
            update={
                "upvotes": max(0, comment.upvotes + upvote_delta),
                "downvotes": max(0, comment.downvotes + downvote_delta),
            }
        )
        self._comments[comment_id] = updated
        return VoteTally(upvotes=updated.upvotes, downvotes=updated.downvotes)
