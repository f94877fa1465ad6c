"""Resource repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from port42.domain.model.resource import Report, Resource
from port42.domain.model.vote import VoteTally
from port42.domain.value import (
    CommunityId,
    Difficulty,
    ResourceId,
    ResourceSort,
    ResourceType,
)


class ResourceRepository(ABC):
    """Repository for Resource aggregate.

    Counters (votes, comments, views, clicks) are only ever changed through
    atomic increments, never by saving a modified copy.
    """

    @abstractmethod
    async def find_by_id(self, resource_id: ResourceId) -> Optional[Resource]:
        """Find a resource by ID.

        Args:
            resource_id: The resource's unique identifier

        Returns:
            The resource if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_url(self, url: str) -> Optional[Resource]:
        """Find a resource by its submitted URL."""
        pass

    @abstractmethod
    async def find_all(
        self,
        sort: ResourceSort = ResourceSort.NEWEST,
        community_id: Optional[CommunityId] = None,
        resource_type: Optional[ResourceType] = None,
        difficulty: Optional[Difficulty] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Resource]:
        """List active resources with optional filters.

        Args:
            sort: Ordering
            community_id: Only resources in this community
            resource_type: Only resources of this type
            difficulty: Only resources of this difficulty
            limit: Page size
            offset: Number of resources to skip

        Returns:
            Matching active resources
        """
        pass

    @abstractmethod
    async def count(
        self,
        community_id: Optional[CommunityId] = None,
        resource_type: Optional[ResourceType] = None,
        difficulty: Optional[Difficulty] = None,
    ) -> int:
        """Count active resources matching the same filters as find_all."""
        pass

    @abstractmethod
    async def save(self, resource: Resource) -> Resource:
        """Insert a new resource.

        Raises:
            IntegrityError: If the URL has already been submitted
        """
        pass

    @abstractmethod
    async def update_details(self, resource: Resource) -> Optional[Resource]:
        """Overwrite the editable fields of an active resource.

        Only title, description, resource_type, difficulty, tags and
        updated_at are written; counters are left as stored.

        Returns:
            The stored resource, or None if it is missing or inactive
        """
        pass

    @abstractmethod
    async def deactivate(self, resource_id: ResourceId) -> bool:
        """Soft-delete a resource.

        Returns:
            True if this call flipped the resource from active to inactive
        """
        pass

    @abstractmethod
    async def apply_vote_delta(
        self, resource_id: ResourceId, upvote_delta: int, downvote_delta: int
    ) -> Optional[VoteTally]:
        """Atomically shift the vote counters, flooring each at zero.

        Returns:
            The new tally, or None if the resource does not exist
        """
        pass

    @abstractmethod
    async def increment_comment_count(self, resource_id: ResourceId) -> bool:
        """Atomically increment comment_count.

        Returns:
            True if the resource exists
        """
        pass

    @abstractmethod
    async def decrement_comment_count(self, resource_id: ResourceId) -> None:
        """Atomically decrement comment_count (minimum 0)."""
        pass

    @abstractmethod
    async def increment_views(self, resource_id: ResourceId) -> None:
        """Atomically increment views by 1."""
        pass

    @abstractmethod
    async def increment_clicks(self, resource_id: ResourceId) -> bool:
        """Atomically increment clicks by 1.

        Returns:
            True if the resource exists
        """
        pass

    @abstractmethod
    async def add_report(self, report: Report) -> Report:
        """Store a report and flag the resource as reported.

        Raises:
            IntegrityError: If the user already reported this resource
        """
        pass
