"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from port42.domain.model.comment import Comment
from port42.domain.model.vote import VoteTally
from port42.domain.value import CommentId, CommentSort, ResourceId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Mutations after creation are single atomic statements guarded on
    ``is_deleted`` so concurrent edits and deletes never overwrite each other.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_top_level(
        self,
        resource_id: ResourceId,
        sort: CommentSort,
        limit: int,
        offset: int,
    ) -> List[Comment]:
        """Find one page of top-level comments of a resource.

        Deleted comments are included so their replies stay reachable.

        Args:
            resource_id: Owning resource
            sort: Ordering of the top-level comments
            limit: Page size
            offset: Number of top-level comments to skip

        Returns:
            Top-level comments in the requested order
        """
        pass

    @abstractmethod
    async def count_top_level(self, resource_id: ResourceId) -> int:
        """Count top-level comments of a resource, deleted ones included."""
        pass

    @abstractmethod
    async def find_replies(self, root_ids: Sequence[CommentId]) -> List[Comment]:
        """Find every reply in the given threads.

        Args:
            root_ids: Top-level comment IDs

        Returns:
            All non-top-level comments whose root is one of ``root_ids``,
            oldest first
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment.

        Args:
            comment: The comment to insert

        Returns:
            The stored comment
        """
        pass

    @abstractmethod
    async def edit_content(
        self, comment_id: CommentId, content: str
    ) -> Optional[Comment]:
        """Replace content and append the prior content to the edit history.

        Args:
            comment_id: Comment to edit
            content: New content

        Returns:
            The updated comment, or None if it does not exist or is deleted
        """
        pass

    @abstractmethod
    async def soft_delete(self, comment_id: CommentId) -> Optional[Comment]:
        """Mark a comment deleted and redact its content.

        Returns:
            The deleted comment, or None if it does not exist or was already
            deleted
        """
        pass

    @abstractmethod
    async def apply_vote_delta(
        self, comment_id: CommentId, upvote_delta: int, downvote_delta: int
    ) -> Optional[VoteTally]:
        """Atomically shift the vote counters, flooring each at zero.

        Returns:
            The new tally, or None if the comment does not exist
        """
        pass
