"""PostgreSQL implementation of Community repository."""

from typing import List, Optional

from sqlalchemy import and_, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from port42.domain.model import Community
from port42.domain.repository import CommunityRepository
from port42.domain.value import CommunityId, Slug, UserId
from port42.persistence.mappers import community_to_dict, row_to_community
from port42.persistence.retry import idempotent_read, mutation
from port42.persistence.tables import communities_table, community_members_table


class PostgresCommunityRepository(CommunityRepository):
    """PostgreSQL implementation of CommunityRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @idempotent_read
    async def find_by_id(self, community_id: CommunityId) -> Optional[Community]:
        """Find a community by ID."""
        stmt = select(communities_table).where(communities_table.c.id == community_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_community(dict(row)) if row else None

    @idempotent_read
    async def find_by_slug(self, slug: Slug) -> Optional[Community]:
        """Find a community by slug."""
        stmt = select(communities_table).where(communities_table.c.slug == slug.root)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_community(dict(row)) if row else None

    @idempotent_read
    async def find_by_name(self, name: str) -> Optional[Community]:
        """Find a community by name, ignoring case."""
        stmt = select(communities_table).where(
            func.lower(communities_table.c.name) == name.lower()
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_community(dict(row)) if row else None

    @idempotent_read
    async def find_all(self) -> List[Community]:
        """List all communities ordered by name."""
        stmt = select(communities_table).order_by(communities_table.c.name)
        result = await self.session.execute(stmt)
        return [row_to_community(dict(row)) for row in result.mappings().all()]

    @mutation
    async def save(self, community: Community) -> Community:
        """Save a community (create or update)."""
        existing = await self.find_by_id(community.id)
        community_dict = community_to_dict(community)

        if existing:
            stmt = (
                communities_table.update()
                .where(communities_table.c.id == community.id)
                .values(**community_dict)
            )
        else:
            stmt = communities_table.insert().values(**community_dict)
        await self.session.execute(stmt)

        await self.session.flush()
        return community

    @mutation
    async def increment_resource_count(self, community_id: CommunityId) -> None:
        """Atomically increment resource_count by 1."""
        stmt = (
            communities_table.update()
            .where(communities_table.c.id == community_id)
            .values(resource_count=communities_table.c.resource_count + 1)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    @mutation
    async def decrement_resource_count(self, community_id: CommunityId) -> None:
        """Atomically decrement resource_count by 1 (minimum 0)."""
        stmt = (
            communities_table.update()
            .where(communities_table.c.id == community_id)
            .values(
                resource_count=func.greatest(communities_table.c.resource_count - 1, 0)
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()

    @idempotent_read
    async def is_member(self, community_id: CommunityId, user_id: UserId) -> bool:
        """Check whether a user has joined a community."""
        stmt = select(community_members_table.c.user_id).where(
            and_(
                community_members_table.c.community_id == community_id,
                community_members_table.c.user_id == user_id,
            )
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    @mutation
    async def add_member(self, community_id: CommunityId, user_id: UserId) -> bool:
        """Insert the membership row, then count it if it was new."""
        stmt = (
            insert(community_members_table)
            .values(community_id=community_id, user_id=user_id)
            .on_conflict_do_nothing()
            .returning(community_members_table.c.user_id)
        )
        result = await self.session.execute(stmt)
        if result.first() is None:
            return False

        await self.session.execute(
            communities_table.update()
            .where(communities_table.c.id == community_id)
            .values(member_count=communities_table.c.member_count + 1)
        )
        await self.session.flush()
        return True

    @mutation
    async def remove_member(self, community_id: CommunityId, user_id: UserId) -> bool:
        """Delete the membership row, then uncount it if it existed."""
        stmt = (
            community_members_table.delete()
            .where(
                and_(
                    community_members_table.c.community_id == community_id,
                    community_members_table.c.user_id == user_id,
                )
            )
            .returning(community_members_table.c.user_id)
        )
        result = await self.session.execute(stmt)
        if result.first() is None:
            return False

        await self.session.execute(
            communities_table.update()
            .where(communities_table.c.id == community_id)
            .values(
                member_count=func.greatest(communities_table.c.member_count - 1, 0)
            )
        )
        await self.session.flush()
        return True
