"""In-memory community repository for testing."""

from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from port42.domain.model.community import Community
from port42.domain.repository.community import CommunityRepository
from port42.domain.value import CommunityId, Slug, UserId


class InMemoryCommunityRepository(CommunityRepository):
    """In-memory implementation of CommunityRepository for testing."""

    def __init__(self) -> None:
        self._communities: dict[CommunityId, Community] = {}
        self._members: set[tuple[CommunityId, UserId]] = set()

    async def find_by_id(self, community_id: CommunityId) -> Optional[Community]:
        return self._communities.get(community_id)

    async def find_by_slug(self, slug: Slug) -> Optional[Community]:
        for community in self._communities.values():
            if community.slug == slug:
                return community
        return None

    async def find_by_name(self, name: str) -> Optional[Community]:
        for community in self._communities.values():
            if community.name.lower() == name.lower():
                return community
        return None

    async def find_all(self) -> List[Community]:
        return sorted(self._communities.values(), key=lambda c: c.name)

    async def save(self, community: Community) -> Community:
        """Save a community.

        Raises:
            IntegrityError: If another community has the same name or slug
        """
        for other in self._communities.values():
            if other.id != community.id and (
                other.name == community.name or other.slug == community.slug
            ):
                raise IntegrityError("Duplicate community", None, Exception())
        self._communities[community.id] = community
        return community

    def _adjust(self, community_id: CommunityId, field: str, delta: int) -> None:
        community = self._communities.get(community_id)
        if community:
            self._communities[community_id] = community.model_copy(
                update={field: max(0, getattr(community, field) + delta)}
            )

    async def increment_resource_count(self, community_id: CommunityId) -> None:
        self._adjust(community_id, "resource_count", 1)

    async def decrement_resource_count(self, community_id: CommunityId) -> None:
        self._adjust(community_id, "resource_count", -1)

    async def is_member(self, community_id: CommunityId, user_id: UserId) -> bool:
        return (community_id, user_id) in self._members

    async def add_member(self, community_id: CommunityId, user_id: UserId) -> bool:
        if (community_id, user_id) in self._members:
            return False
        self._members.add((community_id, user_id))
        self._adjust(community_id, "member_count", 1)
        return True

    async def remove_member(self, community_id: CommunityId, user_id: UserId) -> bool:
        if (community_id, user_id) not in self._members:
            return False
        self._members.discard((community_id, user_id))
        self._adjust(community_id, "member_count", -1)
        return True
