"""Domain model entities for Port42."""

from port42.domain.model.comment import (
    MAX_COMMENT_DEPTH,
    REDACTED_CONTENT,
    Comment,
    EditRecord,
)
from port42.domain.model.community import Community
from port42.domain.model.resource import Report, Resource
from port42.domain.model.user import User
from port42.domain.model.vote import Vote, VoteResult, VoteTally

__all__ = [
    "MAX_COMMENT_DEPTH",
    "REDACTED_CONTENT",
    "Comment",
    "Community",
    "EditRecord",
    "Report",
    "Resource",
    "User",
    "Vote",
    "VoteResult",
    "VoteTally",
]
