"""Resource response items shared by the resource use cases."""

from datetime import datetime

from pydantic import BaseModel

from port42.domain.model import Resource
from port42.domain.value import Difficulty, ResourceType, VoteType


class ResourceItem(BaseModel):
    """A resource as returned to clients."""

    resource_id: str
    title: str
    url: str
    description: str
    resource_type: ResourceType
    difficulty: Difficulty
    tags: list[str]
    community_id: str
    submitted_by: str
    submitter_username: str
    upvotes: int
    downvotes: int
    score: int
    comment_count: int
    views: int
    clicks: int
    created_at: datetime
    user_choice: VoteType | None = None

    @classmethod
    def from_resource(
        cls, resource: Resource, user_choice: VoteType | None = None
    ) -> "ResourceItem":
        return cls(
            resource_id=str(resource.id),
            title=resource.title,
            url=resource.url,
            description=resource.description,
            resource_type=resource.resource_type,
            difficulty=resource.difficulty,
            tags=resource.tags,
            community_id=str(resource.community_id),
            submitted_by=str(resource.submitted_by),
            submitter_username=resource.submitter_username.root,
            upvotes=resource.upvotes,
            downvotes=resource.downvotes,
            score=resource.score,
            comment_count=resource.comment_count,
            views=resource.views,
            clicks=resource.clicks,
            created_at=resource.created_at,
            user_choice=user_choice,
        )
