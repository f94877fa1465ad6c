"""Comment entity.

Comments form threads under a resource. Nesting is capped: a reply to a
comment at the maximum depth is stored at that same depth, still pointing at
its real parent.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from port42.domain.model.common import DomainModel
from port42.domain.value import CommentId, ResourceId, UserId, Username
from port42.domain.value.common import ValueObject

MAX_COMMENT_DEPTH = 5
REDACTED_CONTENT = "[deleted]"


class EditRecord(ValueObject):
    """Content of a comment before one edit."""

    prior_content: str
    edited_at: datetime


class Comment(DomainModel):
    """Comment entity.

    Threading is managed through:
    - parent_id: Direct parent comment (None for top-level)
    - root_id: Top-level ancestor (None for top-level), used to load a whole
      thread in one query
    - depth: min(parent.depth + 1, MAX_COMMENT_DEPTH), 0 for top-level
    """

    id: CommentId
    resource_id: ResourceId
    author_id: UserId
    author_username: Username
    content: str = Field(min_length=1)
    parent_id: Optional[CommentId] = None
    root_id: Optional[CommentId] = None
    depth: int = Field(default=0, ge=0, le=MAX_COMMENT_DEPTH)
    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)
    is_edited: bool = False
    is_deleted: bool = False
    edit_history: list[EditRecord] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    deleted_at: Optional[datetime] = None

    @property
    def score(self) -> int:
        return self.upvotes - self.downvotes

    @property
    def thread_root_id(self) -> CommentId:
        """Top-level comment of the thread this comment belongs to."""
        return self.root_id or self.id


def reply_depth(parent: Comment | None) -> int:
    """Depth of a new comment replying to ``parent``."""
    if parent is None:
        return 0
    return min(parent.depth + 1, MAX_COMMENT_DEPTH)
