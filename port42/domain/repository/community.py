"""Community repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from port42.domain.model.community import Community
from port42.domain.value import CommunityId, Slug, UserId


class CommunityRepository(ABC):
    """Repository for Community entity."""

    @abstractmethod
    async def find_by_id(self, community_id: CommunityId) -> Optional[Community]:
        """Find a community by ID."""
        pass

    @abstractmethod
    async def find_by_slug(self, slug: Slug) -> Optional[Community]:
        """Find a community by slug."""
        pass

    @abstractmethod
    async def find_by_name(self, name: str) -> Optional[Community]:
        """Find a community by name, ignoring case."""
        pass

    @abstractmethod
    async def find_all(self) -> List[Community]:
        """List all communities ordered by name."""
        pass

    @abstractmethod
    async def save(self, community: Community) -> Community:
        """Save a community (create or update).

        Raises:
            IntegrityError: If the name or slug is already taken
        """
        pass

    @abstractmethod
    async def increment_resource_count(self, community_id: CommunityId) -> None:
        """Atomically increment resource_count by 1."""
        pass

    @abstractmethod
    async def decrement_resource_count(self, community_id: CommunityId) -> None:
        """Atomically decrement resource_count by 1 (minimum 0)."""
        pass

    @abstractmethod
    async def is_member(self, community_id: CommunityId, user_id: UserId) -> bool:
        """Check whether a user has joined a community."""
        pass

    @abstractmethod
    async def add_member(self, community_id: CommunityId, user_id: UserId) -> bool:
        """Record a membership and bump member_count.

        Returns:
            True if the user was not already a member
        """
        pass

    @abstractmethod
    async def remove_member(self, community_id: CommunityId, user_id: UserId) -> bool:
        """Drop a membership and lower member_count (minimum 0).

        Returns:
            True if the user was a member
        """
        pass
