"""Resource aggregate root.

Resources are links submitted into a community. They accumulate votes,
comments, views and clicks, and can be reported for moderation.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from port42.domain.model.common import DomainModel
from port42.domain.value import (
    CommunityId,
    Difficulty,
    ReportId,
    ReportReason,
    ResourceId,
    ResourceType,
    UserId,
    Username,
)


class Resource(DomainModel):
    """Resource aggregate root."""

    id: ResourceId
    title: str = Field(min_length=5, max_length=200)
    url: str = Field(min_length=1, max_length=2048)
    description: str = Field(default="", max_length=1000)
    resource_type: ResourceType = ResourceType.ARTICLE
    difficulty: Difficulty = Difficulty.BEGINNER
    tags: list[str] = Field(default_factory=list, max_length=10)
    community_id: CommunityId
    submitted_by: UserId
    submitter_username: Username
    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)
    comment_count: int = Field(default=0, ge=0)
    views: int = Field(default=0, ge=0)
    clicks: int = Field(default=0, ge=0)
    is_active: bool = True
    is_reported: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Only http(s) links can be submitted."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        """Normalise tags to lowercase and reject long ones."""
        tags = [tag.strip().lower() for tag in v if tag.strip()]
        if any(len(tag) > 30 for tag in tags):
            raise ValueError("Tags must be at most 30 characters")
        return tags

    @property
    def score(self) -> int:
        return self.upvotes - self.downvotes


class Report(DomainModel):
    """A user's moderation flag on a resource (one per user per resource)."""

    id: ReportId
    resource_id: ResourceId
    user_id: UserId
    reason: ReportReason
    description: Optional[str] = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=datetime.now)
