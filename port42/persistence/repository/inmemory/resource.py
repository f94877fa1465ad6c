"""In-memory resource repository for testing."""

from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError

from port42.domain.model.resource import Report, Resource
from port42.domain.model.vote import VoteTally
from port42.domain.repository.resource import ResourceRepository
from port42.domain.value import (
    CommunityId,
    Difficulty,
    ResourceId,
    ResourceSort,
    ResourceType,
)


class InMemoryResourceRepository(ResourceRepository):
    """In-memory implementation of ResourceRepository for testing."""

    def __init__(self) -> None:
        self._resources: dict[ResourceId, Resource] = {}
        self._reports: list[Report] = []

    async def find_by_id(self, resource_id: ResourceId) -> Optional[Resource]:
        """Find a resource by ID."""
        return self._resources.get(resource_id)

    async def find_by_url(self, url: str) -> Optional[Resource]:
        for resource in self._resources.values():
            if resource.url == url:
                return resource
        return None

    def _filtered(
        self,
        community_id: Optional[CommunityId],
        resource_type: Optional[ResourceType],
        difficulty: Optional[Difficulty],
    ) -> list[Resource]:
        return [
            r
            for r in self._resources.values()
            if r.is_active
            and (community_id is None or r.community_id == community_id)
            and (resource_type is None or r.resource_type == resource_type)
            and (difficulty is None or r.difficulty == difficulty)
        ]

    async def find_all(
        self,
        sort: ResourceSort = ResourceSort.NEWEST,
        community_id: Optional[CommunityId] = None,
        resource_type: Optional[ResourceType] = None,
        difficulty: Optional[Difficulty] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Resource]:
        """List active resources with optional filters."""
        resources = self._filtered(community_id, resource_type, difficulty)

        if sort == ResourceSort.OLDEST:
            resources.sort(key=lambda r: r.created_at)
        elif sort == ResourceSort.POPULAR:
            resources.sort(key=lambda r: (r.upvotes, r.created_at), reverse=True)
        elif sort == ResourceSort.CONTROVERSIAL:
            resources.sort(key=lambda r: (r.downvotes, r.created_at), reverse=True)
        elif sort == ResourceSort.DISCUSSED:
            resources.sort(key=lambda r: (r.comment_count, r.created_at), reverse=True)
        else:
            resources.sort(key=lambda r: r.created_at, reverse=True)

        return resources[offset : offset + limit]

    async def count(
        self,
        community_id: Optional[CommunityId] = None,
        resource_type: Optional[ResourceType] = None,
        difficulty: Optional[Difficulty] = None,
    ) -> int:
        return len(self._filtered(community_id, resource_type, difficulty))

    async def save(self, resource: Resource) -> Resource:
        """Insert a new resource.

        Raises:
            IntegrityError: If the URL is already taken
        """
        existing = await self.find_by_url(resource.url)
        if existing and existing.id != resource.id:
            raise IntegrityError("Duplicate resource URL", None, Exception())
        self._resources[resource.id] = resource
        return resource

    def _update(self, resource_id: ResourceId, **changes) -> Optional[Resource]:
        resource = self._resources.get(resource_id)
        if not resource:
            return None
        updated = resource.model_copy(update=changes)
        self._resources[resource_id] = updated
        return updated

    async def update_details(self, resource: Resource) -> Optional[Resource]:
        stored = self._resources.get(resource.id)
        if not stored or not stored.is_active:
            return None
        return self._update(
            resource.id,
            title=resource.title,
            description=resource.description,
            resource_type=resource.resource_type,
            difficulty=resource.difficulty,
            tags=resource.tags,
            updated_at=resource.updated_at,
        )

    async def deactivate(self, resource_id: ResourceId) -> bool:
        resource = self._resources.get(resource_id)
        if not resource or not resource.is_active:
            return False
        self._update(resource_id, is_active=False, updated_at=datetime.now())
        return True

    async def apply_vote_delta(
        self, resource_id: ResourceId, upvote_delta: int, downvote_delta: int
    ) -> Optional[VoteTally]:
        resource = self._resources.get(resource_id)
        if not resource:
            return None
        updated = self._update(
            resource_id,
            upvotes=max(0, resource.upvotes + upvote_delta),
            downvotes=max(0, resource.downvotes + downvote_delta),
            updated_at=datetime.now(),
        )
        return VoteTally(upvotes=updated.upvotes, downvotes=updated.downvotes)

    async def increment_comment_count(self, resource_id: ResourceId) -> bool:
        resource = self._resources.get(resource_id)
        if not resource:
            return False
        self._update(resource_id, comment_count=resource.comment_count + 1)
        return True

    async def decrement_comment_count(self, resource_id: ResourceId) -> None:
        resource = self._resources.get(resource_id)
        if resource:
            self._update(resource_id, comment_count=max(0, resource.comment_count - 1))

    async def increment_views(self, resource_id: ResourceId) -> None:
        resource = self._resources.get(resource_id)
        if resource:
            self._update(resource_id, views=resource.views + 1)

    async def increment_clicks(self, resource_id: ResourceId) -> bool:
        resource = self._resources.get(resource_id)
        if not resource or not resource.is_active:
            return False
        self._update(resource_id, clicks=resource.clicks + 1)
        return True

    async def add_report(self, report: Report) -> Report:
        """Store a report and flag the resource.

        Raises:
            IntegrityError: If the user already reported this resource
        """
        for existing in self._reports:
            if (
                existing.resource_id == report.resource_id
                and existing.user_id == report.user_id
            ):
                raise IntegrityError("Duplicate report", None, Exception())
        self._reports.append(report)
        self._update(report.resource_id, is_reported=True)
        return report
