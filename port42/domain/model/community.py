"""Community entity.

Topic groups (Python, Linux, ...) that resources are submitted into and
users join.
"""

import re
from datetime import datetime
from typing import Optional

from pydantic import Field

from port42.domain.model.common import DomainModel
from port42.domain.value import CommunityId, Slug, UserId


class Community(DomainModel):
    """Community entity."""

    id: CommunityId
    name: str = Field(min_length=2, max_length=50)
    slug: Slug
    description: str = Field(max_length=500)
    icon: str = "🌐"
    color: str = Field(default="#00ff41", pattern=r"^#[0-9A-Fa-f]{6}$")
    resource_count: int = Field(default=0, ge=0)
    member_count: int = Field(default=0, ge=0)
    # Seeded communities have no creator
    created_by: Optional[UserId] = None
    created_at: datetime = Field(default_factory=datetime.now)


def slugify(name: str) -> str:
    """Derive a URL slug from a community name.

    Lowercases, drops anything but letters, digits, whitespace and hyphens,
    then joins words with single hyphens.

    >>> slugify("Web Dev & Design!")
    'web-dev-design'
    """
    slug = re.sub(r"[^a-z0-9\s-]", "", name.lower())
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")
