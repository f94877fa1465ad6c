"""User aggregate root.

Users are created by the auth collaborator; this service only reads them and
moves their reputation as their resources are voted on.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from port42.domain.model.common import DomainModel
from port42.domain.value import UserId, UserLevel, Username


class User(DomainModel):
    """User aggregate root."""

    id: UserId
    username: Username
    email: Optional[str] = None
    display_name: Optional[str] = Field(default=None, max_length=50)
    reputation: int = Field(default=0, ge=0)
    total_upvotes: int = Field(default=0, ge=0)
    total_downvotes: int = Field(default=0, ge=0)
    is_moderator: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def level(self) -> UserLevel:
        return UserLevel.from_reputation(self.reputation)
