"""Comment domain service.

Maintains threaded comments under a resource: creation with a capped depth,
author-only edits with history, soft deletion, and thread rendering.
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import uuid4

import logfire

from port42.config import CommentSettings
from port42.domain.error import (
    ContentDeletedError,
    InvalidArgumentError,
    NotFoundError,
    PermissionDeniedError,
)
from port42.domain.model.comment import Comment, reply_depth
from port42.domain.model.vote import VoteTally
from port42.domain.repository import CommentRepository
from port42.domain.value import CommentId, CommentSort, ResourceId, UserId

from .base import Service
from .resource_service import ResourceService
from .user_service import UserService


@dataclass
class CommentNode:
    """A comment with its replies attached, oldest reply first."""

    comment: Comment
    replies: list["CommentNode"] = field(default_factory=list)

    def walk(self):
        """Yield this comment and every descendant, depth first."""
        yield self.comment
        for reply in self.replies:
            yield from reply.walk()


@dataclass
class ThreadPage:
    """One page of top-level comments with their full reply trees."""

    resource_id: ResourceId
    comments: list[CommentNode]
    total_top_level: int
    limit: int
    offset: int

    @property
    def has_more(self) -> bool:
        return self.offset + len(self.comments) < self.total_top_level

    def all_comments(self) -> list[Comment]:
        return [comment for node in self.comments for comment in node.walk()]


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        resource_service: ResourceService,
        user_service: UserService,
        comment_settings: CommentSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            resource_service: Resource domain service (comment counters)
            user_service: User domain service (authors, moderators)
            comment_settings: Content and paging limits
        """
        self.comment_repository = comment_repository
        self.resource_service = resource_service
        self.user_service = user_service
        self.settings = comment_settings

    def _validate_content(self, content: str) -> str:
        content = content.strip()
        if not content or len(content) > self.settings.max_length:
            raise InvalidArgumentError(
                f"Comment must be between 1 and {self.settings.max_length} characters"
            )
        return content

    async def create_comment(
        self,
        resource_id: ResourceId,
        author_id: UserId,
        content: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment on a resource or reply to another comment.

        The insert and the resource's comment counter share the request
        transaction, so neither is committed without the other.

        Args:
            resource_id: Resource being discussed
            author_id: Author user ID
            content: Comment text
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment

        Raises:
            InvalidArgumentError: If content is empty or too long, or the parent
                belongs to another resource
            NotFoundError: If the author, resource or parent does not exist
        """
        with logfire.span(
            "comment_service.create_comment",
            resource_id=str(resource_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            content = self._validate_content(content)
            author = await self.user_service.get_by_id(author_id)
            await self.resource_service.get_active_resource(resource_id)

            parent = None
            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if not parent:
                    logfire.warn(
                        "Parent comment not found",
                        parent_id=str(parent_id),
                        resource_id=str(resource_id),
                    )
                    raise NotFoundError("Comment", str(parent_id))
                if parent.resource_id != resource_id:
                    logfire.warn(
                        "Parent comment does not belong to resource",
                        parent_id=str(parent_id),
                        parent_resource_id=str(parent.resource_id),
                        target_resource_id=str(resource_id),
                    )
                    raise InvalidArgumentError(
                        "Parent comment does not belong to this resource"
                    )

            now = datetime.now()
            comment = Comment(
                id=CommentId(uuid4()),
                resource_id=resource_id,
                author_id=author.id,
                author_username=author.username,
                content=content,
                parent_id=parent.id if parent else None,
                root_id=parent.thread_root_id if parent else None,
                depth=reply_depth(parent),
                created_at=now,
                updated_at=now,
            )

            saved = await self.comment_repository.save(comment)
            await self.resource_service.increment_comment_count(resource_id)

            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                resource_id=str(resource_id),
                depth=saved.depth,
            )
            return saved

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            return await self.comment_repository.find_by_id(comment_id)

    async def get_comment(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID.

        Raises:
            NotFoundError: If comment not found
        """
        comment = await self.get_comment_by_id(comment_id)
        if not comment:
            logfire.warn("Comment not found", comment_id=str(comment_id))
            raise NotFoundError("Comment", str(comment_id))
        return comment

    async def edit_comment(
        self, comment_id: CommentId, editor_id: UserId, new_content: str
    ) -> Comment:
        """Edit a comment's content. Only the author may edit.

        The previous content is appended to the edit history by the same
        statement that replaces it.

        Args:
            comment_id: Comment to edit
            editor_id: User attempting the edit
            new_content: Replacement content

        Returns:
            Updated comment

        Raises:
            InvalidArgumentError: If content is empty or too long
            NotFoundError: If the comment does not exist
            ContentDeletedError: If the comment has been deleted
            PermissionDeniedError: If the editor is not the author
        """
        with logfire.span(
            "comment_service.edit_comment",
            comment_id=str(comment_id),
            editor_id=str(editor_id),
        ):
            new_content = self._validate_content(new_content)
            comment = await self.get_comment(comment_id)

            if comment.is_deleted:
                raise ContentDeletedError("Comment", str(comment_id))
            if comment.author_id != editor_id:
                logfire.warn(
                    "Unauthorized comment edit attempt",
                    comment_id=str(comment_id),
                    author_id=str(comment.author_id),
                    editor_id=str(editor_id),
                )
                raise PermissionDeniedError(
                    "edit", "comment", str(comment_id), str(editor_id)
                )

            updated = await self.comment_repository.edit_content(
                comment_id, new_content
            )
            if not updated:
                # Deleted between the read and the update
                raise ContentDeletedError("Comment", str(comment_id))

            logfire.info(
                "Comment edited",
                comment_id=str(comment_id),
                edits=len(updated.edit_history),
            )
            return updated

    async def soft_delete(self, comment_id: CommentId, requester_id: UserId) -> Comment:
        """Soft-delete a comment. Allowed for the author or a moderator.

        The comment stays in its thread with redacted content; replies are
        left untouched. The resource's comment counter drops by one, once.

        Args:
            comment_id: Comment to delete
            requester_id: User requesting deletion

        Returns:
            The deleted comment

        Raises:
            NotFoundError: If the comment does not exist
            ContentDeletedError: If the comment is already deleted
            PermissionDeniedError: If the requester is neither author nor moderator
        """
        with logfire.span(
            "comment_service.soft_delete",
            comment_id=str(comment_id),
            requester_id=str(requester_id),
        ):
            comment = await self.get_comment(comment_id)
            if comment.is_deleted:
                raise ContentDeletedError("Comment", str(comment_id))

            if comment.author_id != requester_id:
                requester = await self.user_service.get_user_by_id(requester_id)
                if not requester or not requester.is_moderator:
                    logfire.warn(
                        "Unauthorized comment delete attempt",
                        comment_id=str(comment_id),
                        requester_id=str(requester_id),
                    )
                    raise PermissionDeniedError(
                        "delete", "comment", str(comment_id), str(requester_id)
                    )

            deleted = await self.comment_repository.soft_delete(comment_id)
            if not deleted:
                # A concurrent delete won; it already decremented the counter
                raise ContentDeletedError("Comment", str(comment_id))

            await self.resource_service.decrement_comment_count(comment.resource_id)

            logfire.info(
                "Comment deleted",
                comment_id=str(comment_id),
                resource_id=str(comment.resource_id),
                by_moderator=comment.author_id != requester_id,
            )
            return deleted

    async def list_thread(
        self,
        resource_id: ResourceId,
        sort: CommentSort = CommentSort.NEWEST,
        limit: int | None = None,
        offset: int = 0,
    ) -> ThreadPage:
        """List one page of a resource's discussion.

        Top-level comments are paginated in ``sort`` order. Every reply in
        those threads is loaded with a single query and attached under its
        parent, oldest first, whatever the top-level order.

        Args:
            resource_id: Resource whose comments to list
            sort: Top-level ordering
            limit: Page size (defaults to the configured page size)
            offset: Top-level comments to skip

        Returns:
            Thread page with reply trees attached

        Raises:
            NotFoundError: If the resource does not exist
            InvalidArgumentError: If the paging parameters are out of range
        """
        limit = self.settings.page_size if limit is None else limit
        if limit < 1 or limit > self.settings.max_page_size or offset < 0:
            raise InvalidArgumentError(
                f"limit must be 1-{self.settings.max_page_size} and offset >= 0"
            )

        with logfire.span(
            "comment_service.list_thread",
            resource_id=str(resource_id),
            sort=sort.value,
            limit=limit,
            offset=offset,
        ):
            await self.resource_service.get_active_resource(resource_id)

            top_level = await self.comment_repository.find_top_level(
                resource_id, sort, limit, offset
            )
            total = await self.comment_repository.count_top_level(resource_id)

            nodes = {comment.id: CommentNode(comment) for comment in top_level}
            replies = await self.comment_repository.find_replies(list(nodes))
            replies.sort(key=lambda c: (c.created_at, str(c.id)))

            for reply in replies:
                nodes[reply.id] = CommentNode(reply)
            for reply in replies:
                parent = nodes.get(reply.parent_id) if reply.parent_id else None
                if parent is None:
                    logfire.warn(
                        "Orphaned reply skipped",
                        comment_id=str(reply.id),
                        parent_id=str(reply.parent_id),
                    )
                    continue
                parent.replies.append(nodes[reply.id])

            logfire.info(
                "Thread listed",
                resource_id=str(resource_id),
                top_level=len(top_level),
                replies=len(replies),
            )
            return ThreadPage(
                resource_id=resource_id,
                comments=[nodes[comment.id] for comment in top_level],
                total_top_level=total,
                limit=limit,
                offset=offset,
            )

    async def apply_vote_delta(
        self, comment_id: CommentId, upvote_delta: int, downvote_delta: int
    ) -> VoteTally:
        """Atomically shift the comment's vote counters.

        Raises:
            NotFoundError: If the comment does not exist
        """
        tally = await self.comment_repository.apply_vote_delta(
            comment_id, upvote_delta, downvote_delta
        )
        if tally is None:
            raise NotFoundError("Comment", str(comment_id))
        return tally
