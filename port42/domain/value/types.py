"""Domain value types for Port42.

Enumerations and validated wrappers shared by the models, services and the
HTTP layer.
"""

import re
from enum import Enum

from pydantic import field_validator

from port42.domain.value.common import RootValueObject


class VoteType(str, Enum):
    """Direction of a stored vote record."""

    UP = "up"
    DOWN = "down"


class VoteChoice(str, Enum):
    """Choice a user submits when voting.

    ``REMOVE`` withdraws any existing vote and is never stored.
    """

    UP = "up"
    DOWN = "down"
    REMOVE = "remove"

    def as_vote_type(self) -> VoteType | None:
        """Stored direction for this choice, None for REMOVE."""
        if self is VoteChoice.REMOVE:
            return None
        return VoteType(self.value)


class VotableType(str, Enum):
    """Type of entity that can be voted on."""

    RESOURCE = "resource"
    COMMENT = "comment"


class CommentSort(str, Enum):
    """Ordering of top-level comments in a thread."""

    NEWEST = "newest"
    OLDEST = "oldest"
    MOST_VOTED = "most_voted"


class ResourceSort(str, Enum):
    """Ordering of resource listings."""

    NEWEST = "newest"
    OLDEST = "oldest"
    POPULAR = "popular"
    CONTROVERSIAL = "controversial"
    DISCUSSED = "discussed"


class ResourceType(str, Enum):
    """Kind of content a resource links to."""

    ARTICLE = "article"
    VIDEO = "video"
    COURSE = "course"
    TOOL = "tool"
    DOCUMENTATION = "documentation"
    TUTORIAL = "tutorial"
    BOOK = "book"
    PODCAST = "podcast"
    OTHER = "other"


class Difficulty(str, Enum):
    """Audience level of a resource."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class ReportReason(str, Enum):
    """Moderation flag reasons for resources."""

    SPAM = "spam"
    INAPPROPRIATE = "inappropriate"
    BROKEN_LINK = "broken-link"
    DUPLICATE = "duplicate"
    OTHER = "other"


class UserLevel(str, Enum):
    """Rank derived from reputation."""

    NEWBIE = "Newbie"
    APPRENTICE = "Apprentice"
    HACKER = "Hacker"
    ELITE = "Elite"
    LEGEND = "Legend"

    @classmethod
    def from_reputation(cls, reputation: int) -> "UserLevel":
        """Map a reputation score to its level."""
        if reputation < 100:
            return cls.NEWBIE
        if reputation < 500:
            return cls.APPRENTICE
        if reputation < 1000:
            return cls.HACKER
        if reputation < 5000:
            return cls.ELITE
        return cls.LEGEND


class RealtimeEventType(str, Enum):
    """Events pushed to resource rooms."""

    COMMENT_ADDED = "comment_added"
    VOTES_UPDATED = "votes_updated"


class Username(RootValueObject[str]):
    """Public username.

    3-30 characters: letters, digits, underscores and hyphens.
    """

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username format."""
        if not re.match(r"^[A-Za-z0-9_-]{3,30}$", v):
            raise ValueError(
                "Username must be 3-30 characters of letters, digits, '_' or '-'"
            )
        return v


class Slug(RootValueObject[str]):
    """URL-safe community slug.

    Lowercase alphanumeric with single hyphens, 1-50 characters.
    Examples: 'python', 'web-development'
    """

    @field_validator("root")
    @classmethod
    def validate_slug_format(cls, v: str) -> str:
        """Validate slug format."""
        if not re.match(r"^[a-z0-9]+(?:-[a-z0-9]+)*$", v):
            raise ValueError(
                "Slug must be lowercase alphanumeric with hyphens, "
                "no leading/trailing hyphens or consecutive hyphens"
            )
        if len(v) > 50:
            raise ValueError("Slug must be 1-50 characters")
        return v
