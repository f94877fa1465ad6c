"""Domain value objects for Port42."""

from port42.domain.value.identifiers import (
    CommentId,
    CommunityId,
    ConnectionId,
    ReportId,
    ResourceId,
    UserId,
    VoteId,
)
from port42.domain.value.types import (
    CommentSort,
    Difficulty,
    RealtimeEventType,
    ReportReason,
    ResourceSort,
    ResourceType,
    Slug,
    UserLevel,
    Username,
    VotableType,
    VoteChoice,
    VoteType,
)

__all__ = [
    # Identifiers
    "UserId",
    "CommunityId",
    "ResourceId",
    "CommentId",
    "VoteId",
    "ReportId",
    "ConnectionId",
    # Types
    "CommentSort",
    "Difficulty",
    "RealtimeEventType",
    "ReportReason",
    "ResourceSort",
    "ResourceType",
    "Slug",
    "UserLevel",
    "Username",
    "VotableType",
    "VoteChoice",
    "VoteType",
]
