"""Comment response items shared by the comment use cases."""

from datetime import datetime

from pydantic import BaseModel

from port42.domain.model import Comment, EditRecord
from port42.domain.value import VoteType


class CommentItem(BaseModel):
    """A comment as returned to clients, with its replies nested."""

    comment_id: str
    resource_id: str
    author_id: str
    author_username: str
    content: str
    parent_id: str | None
    depth: int
    upvotes: int
    downvotes: int
    score: int
    is_edited: bool
    is_deleted: bool
    edit_history: list[EditRecord]
    created_at: datetime
    updated_at: datetime
    user_choice: VoteType | None = None
    replies: list["CommentItem"] = []

    @classmethod
    def from_comment(
        cls,
        comment: Comment,
        user_choice: VoteType | None = None,
        replies: list["CommentItem"] | None = None,
    ) -> "CommentItem":
        return cls(
            comment_id=str(comment.id),
            resource_id=str(comment.resource_id),
            author_id=str(comment.author_id),
            author_username=comment.author_username.root,
            content=comment.content,
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            depth=comment.depth,
            upvotes=comment.upvotes,
            downvotes=comment.downvotes,
            score=comment.score,
            is_edited=comment.is_edited,
            is_deleted=comment.is_deleted,
            # Prior versions of a deleted comment stay hidden
            edit_history=[] if comment.is_deleted else comment.edit_history,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
            user_choice=user_choice,
            replies=replies or [],
        )
