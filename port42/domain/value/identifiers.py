"""Strongly typed identifiers for Port42 entities.

NewType keeps resource, comment and user IDs from being mixed up while
remaining plain UUIDs at runtime.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
CommunityId = NewType("CommunityId", UUID)
ResourceId = NewType("ResourceId", UUID)
CommentId = NewType("CommentId", UUID)
VoteId = NewType("VoteId", UUID)
ReportId = NewType("ReportId", UUID)

# Realtime connections are process-local and never persisted
ConnectionId = NewType("ConnectionId", str)
