"""PostgreSQL implementation of Resource repository."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import and_, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from port42.domain.model import Report, Resource, VoteTally
from port42.domain.repository import ResourceRepository
from port42.domain.value import (
    CommunityId,
    Difficulty,
    ResourceId,
    ResourceSort,
    ResourceType,
)
from port42.persistence.mappers import (
    report_to_dict,
    resource_to_dict,
    row_to_resource,
    row_to_tally,
)
from port42.persistence.retry import idempotent_read, mutation
from port42.persistence.tables import resource_reports_table, resources_table


class PostgresResourceRepository(ResourceRepository):
    """PostgreSQL implementation of ResourceRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @idempotent_read
    async def find_by_id(self, resource_id: ResourceId) -> Optional[Resource]:
        """Find a resource by ID."""
        stmt = select(resources_table).where(resources_table.c.id == resource_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_resource(dict(row)) if row else None

    @idempotent_read
    async def find_by_url(self, url: str) -> Optional[Resource]:
        """Find a resource by its submitted URL."""
        stmt = select(resources_table).where(resources_table.c.url == url)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_resource(dict(row)) if row else None

    def _filters(
        self,
        community_id: Optional[CommunityId],
        resource_type: Optional[ResourceType],
        difficulty: Optional[Difficulty],
    ):
        conditions = [resources_table.c.is_active.is_(True)]
        if community_id:
            conditions.append(resources_table.c.community_id == community_id)
        if resource_type:
            conditions.append(resources_table.c.resource_type == resource_type.value)
        if difficulty:
            conditions.append(resources_table.c.difficulty == difficulty.value)
        return and_(*conditions)

    @idempotent_read
    async def find_all(
        self,
        sort: ResourceSort = ResourceSort.NEWEST,
        community_id: Optional[CommunityId] = None,
        resource_type: Optional[ResourceType] = None,
        difficulty: Optional[Difficulty] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Resource]:
        """List active resources with optional filters."""
        order_by = {
            ResourceSort.NEWEST: [desc(resources_table.c.created_at)],
            ResourceSort.OLDEST: [resources_table.c.created_at],
            ResourceSort.POPULAR: [
                desc(resources_table.c.upvotes),
                desc(resources_table.c.created_at),
            ],
            ResourceSort.CONTROVERSIAL: [
                desc(resources_table.c.downvotes),
                desc(resources_table.c.created_at),
            ],
            ResourceSort.DISCUSSED: [
                desc(resources_table.c.comment_count),
                desc(resources_table.c.created_at),
            ],
        }[sort]

        stmt = (
            select(resources_table)
            .where(self._filters(community_id, resource_type, difficulty))
            .order_by(*order_by, resources_table.c.id)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_resource(dict(row)) for row in result.mappings().all()]

    @idempotent_read
    async def count(
        self,
        community_id: Optional[CommunityId] = None,
        resource_type: Optional[ResourceType] = None,
        difficulty: Optional[Difficulty] = None,
    ) -> int:
        """Count active resources matching the filters."""
        stmt = (
            select(func.count())
            .select_from(resources_table)
            .where(self._filters(community_id, resource_type, difficulty))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    @mutation
    async def save(self, resource: Resource) -> Resource:
        """Insert a new resource."""
        stmt = resources_table.insert().values(**resource_to_dict(resource))
        await self.session.execute(stmt)
        await self.session.flush()
        return resource

    @mutation
    async def update_details(self, resource: Resource) -> Optional[Resource]:
        """Overwrite the editable fields of an active resource."""
        stmt = (
            resources_table.update()
            .where(resources_table.c.id == resource.id)
            .where(resources_table.c.is_active.is_(True))
            .values(
                title=resource.title,
                description=resource.description,
                resource_type=resource.resource_type.value,
                difficulty=resource.difficulty.value,
                tags=resource.tags,
                updated_at=resource.updated_at,
            )
            .returning(resources_table)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_resource(dict(row)) if row else None

    @mutation
    async def deactivate(self, resource_id: ResourceId) -> bool:
        """Flip is_active off, once."""
        stmt = (
            resources_table.update()
            .where(resources_table.c.id == resource_id)
            .where(resources_table.c.is_active.is_(True))
            .values(is_active=False, updated_at=datetime.now())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    @mutation
    async def apply_vote_delta(
        self, resource_id: ResourceId, upvote_delta: int, downvote_delta: int
    ) -> Optional[VoteTally]:
        """Atomically shift the vote counters, flooring each at zero."""
        stmt = (
            resources_table.update()
            .where(resources_table.c.id == resource_id)
            .values(
                upvotes=func.greatest(resources_table.c.upvotes + upvote_delta, 0),
                downvotes=func.greatest(
                    resources_table.c.downvotes + downvote_delta, 0
                ),
                updated_at=datetime.now(),
            )
            .returning(resources_table.c.upvotes, resources_table.c.downvotes)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_tally(dict(row)) if row else None

    @mutation
    async def increment_comment_count(self, resource_id: ResourceId) -> bool:
        """Atomically increment comment_count by 1."""
        stmt = (
            resources_table.update()
            .where(resources_table.c.id == resource_id)
            .values(comment_count=resources_table.c.comment_count + 1)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    @mutation
    async def decrement_comment_count(self, resource_id: ResourceId) -> None:
        """Atomically decrement comment_count by 1 (minimum 0)."""
        stmt = (
            resources_table.update()
            .where(resources_table.c.id == resource_id)
            .where(resources_table.c.comment_count > 0)
            .values(comment_count=resources_table.c.comment_count - 1)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    @mutation
    async def increment_views(self, resource_id: ResourceId) -> None:
        """Atomically increment views by 1."""
        stmt = (
            resources_table.update()
            .where(resources_table.c.id == resource_id)
            .values(views=resources_table.c.views + 1)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    @mutation
    async def increment_clicks(self, resource_id: ResourceId) -> bool:
        """Atomically increment clicks by 1."""
        stmt = (
            resources_table.update()
            .where(resources_table.c.id == resource_id)
            .where(resources_table.c.is_active.is_(True))
            .values(clicks=resources_table.c.clicks + 1)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    @mutation
    async def add_report(self, report: Report) -> Report:
        """Store a report and flag the resource as reported."""
        await self.session.execute(
            resource_reports_table.insert().values(**report_to_dict(report))
        )
        await self.session.execute(
            resources_table.update()
            .where(resources_table.c.id == report.resource_id)
            .values(is_reported=True)
        )
        await self.session.flush()
        return report
