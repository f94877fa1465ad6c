"""Resource domain service."""

from datetime import datetime
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from port42.domain.error import ConflictError, NotFoundError, PermissionDeniedError
from port42.domain.model.resource import Report, Resource
from port42.domain.model.vote import VoteTally
from port42.domain.repository import ResourceRepository
from port42.domain.value import (
    CommunityId,
    Difficulty,
    ReportId,
    ReportReason,
    ResourceId,
    ResourceSort,
    ResourceType,
    UserId,
)

from .base import Service
from .community_service import CommunityService
from .user_service import UserService


class ResourceService(Service):
    """Domain service for resource submission, lookup and counters."""

    def __init__(
        self,
        resource_repository: ResourceRepository,
        community_service: CommunityService,
        user_service: UserService,
    ) -> None:
        """Initialize resource service.

        Args:
            resource_repository: Resource repository
            community_service: Community domain service
            user_service: User domain service
        """
        self.resource_repository = resource_repository
        self.community_service = community_service
        self.user_service = user_service

    async def get_resource_by_id(self, resource_id: ResourceId) -> Resource | None:
        """Get a resource by ID.

        Args:
            resource_id: Resource ID

        Returns:
            Resource if found, None otherwise
        """
        with logfire.span(
            "resource_service.get_resource_by_id", resource_id=str(resource_id)
        ):
            return await self.resource_repository.find_by_id(resource_id)

    async def get_active_resource(self, resource_id: ResourceId) -> Resource:
        """Get a resource that can be voted on, commented on or viewed.

        Raises:
            NotFoundError: If the resource is missing or has been removed
        """
        resource = await self.get_resource_by_id(resource_id)
        if not resource or not resource.is_active:
            logfire.warn("Resource not found", resource_id=str(resource_id))
            raise NotFoundError("Resource", str(resource_id))
        return resource

    async def submit_resource(
        self,
        submitter_id: UserId,
        community_id: CommunityId,
        title: str,
        url: str,
        description: str = "",
        resource_type: ResourceType = ResourceType.ARTICLE,
        difficulty: Difficulty = Difficulty.BEGINNER,
        tags: list[str] | None = None,
    ) -> Resource:
        """Submit a new resource into a community.

        Args:
            submitter_id: Submitting user
            community_id: Target community
            title: Resource title
            url: Link (unique across all resources)
            description: Optional description
            resource_type: Kind of content
            difficulty: Audience level
            tags: Optional tags

        Returns:
            The stored resource

        Raises:
            NotFoundError: If the submitter or community does not exist
            ConflictError: If the URL has already been submitted
        """
        with logfire.span(
            "resource_service.submit_resource",
            submitter_id=str(submitter_id),
            community_id=str(community_id),
            url=url,
        ):
            submitter = await self.user_service.get_by_id(submitter_id)
            await self.community_service.get_by_id(community_id)

            existing = await self.resource_repository.find_by_url(url)
            if existing:
                logfire.warn(
                    "Duplicate resource URL",
                    url=url,
                    existing_id=str(existing.id),
                )
                raise ConflictError("This resource has already been submitted")

            now = datetime.now()
            resource = Resource(
                id=ResourceId(uuid4()),
                title=title,
                url=url,
                description=description,
                resource_type=resource_type,
                difficulty=difficulty,
                tags=tags or [],
                community_id=community_id,
                submitted_by=submitter.id,
                submitter_username=submitter.username,
                created_at=now,
                updated_at=now,
            )

            try:
                saved = await self.resource_repository.save(resource)
            except IntegrityError:
                # Lost a race with a concurrent submission of the same URL
                logfire.warn("Duplicate resource URL on insert", url=url)
                raise ConflictError("This resource has already been submitted")

            await self.community_service.increment_resource_count(community_id)

            logfire.info(
                "Resource submitted",
                resource_id=str(saved.id),
                community_id=str(community_id),
            )
            return saved

    async def _check_can_manage(
        self, resource: Resource, user_id: UserId, action: str
    ) -> None:
        if resource.submitted_by == user_id:
            return
        user = await self.user_service.get_user_by_id(user_id)
        if not user or not user.is_moderator:
            logfire.warn(
                f"Unauthorized resource {action} attempt",
                resource_id=str(resource.id),
                user_id=str(user_id),
            )
            raise PermissionDeniedError(
                action, "resource", str(resource.id), str(user_id)
            )

    async def update_resource(
        self,
        resource_id: ResourceId,
        editor_id: UserId,
        title: str | None = None,
        description: str | None = None,
        resource_type: ResourceType | None = None,
        difficulty: Difficulty | None = None,
        tags: list[str] | None = None,
    ) -> Resource:
        """Edit a resource's details.

        Fields left as None keep their stored value. The URL, community and
        counters cannot be edited.

        Args:
            resource_id: Resource to edit
            editor_id: The submitter or a moderator
            title: New title
            description: New description
            resource_type: New kind of content
            difficulty: New audience level
            tags: Replacement tag list

        Returns:
            The updated resource

        Raises:
            NotFoundError: If the resource is missing or removed
            PermissionDeniedError: If the editor is neither submitter nor moderator
            ValidationError: If a new value breaks the resource's field rules
        """
        with logfire.span(
            "resource_service.update_resource",
            resource_id=str(resource_id),
            editor_id=str(editor_id),
        ):
            resource = await self.get_active_resource(resource_id)
            await self._check_can_manage(resource, editor_id, "edit")

            changes: dict = {
                "title": title,
                "description": description,
                "resource_type": resource_type,
                "difficulty": difficulty,
                "tags": tags,
            }
            changes = {k: v for k, v in changes.items() if v is not None}
            # Rebuild rather than model_copy so the field validators run
            edited = Resource(
                **(resource.model_dump() | changes | {"updated_at": datetime.now()})
            )

            updated = await self.resource_repository.update_details(edited)
            if updated is None:
                # Removed between the lookup and the write
                raise NotFoundError("Resource", str(resource_id))

            logfire.info(
                "Resource updated",
                resource_id=str(resource_id),
                fields=sorted(changes),
            )
            return updated

    async def deactivate_resource(
        self, resource_id: ResourceId, requester_id: UserId
    ) -> Resource:
        """Soft-delete a resource and drop it from its community's count.

        Votes and comments on the resource are kept but no new ones are
        accepted, and it no longer appears in listings.

        Raises:
            NotFoundError: If the resource is missing or already removed
            PermissionDeniedError: If the requester is neither submitter nor moderator
        """
        with logfire.span(
            "resource_service.deactivate_resource",
            resource_id=str(resource_id),
            requester_id=str(requester_id),
        ):
            resource = await self.get_active_resource(resource_id)
            await self._check_can_manage(resource, requester_id, "delete")

            flipped = await self.resource_repository.deactivate(resource_id)
            if not flipped:
                # A concurrent delete won; it already decremented the count
                raise NotFoundError("Resource", str(resource_id))

            await self.community_service.decrement_resource_count(
                resource.community_id
            )

            logfire.info(
                "Resource deleted",
                resource_id=str(resource_id),
                community_id=str(resource.community_id),
                by_moderator=resource.submitted_by != requester_id,
            )
            return resource.model_copy(update={"is_active": False})

    async def list_resources(
        self,
        sort: ResourceSort = ResourceSort.NEWEST,
        community_id: CommunityId | None = None,
        resource_type: ResourceType | None = None,
        difficulty: Difficulty | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Resource], int]:
        """List active resources.

        Returns:
            The requested page and the total number of matching resources
        """
        with logfire.span(
            "resource_service.list_resources",
            sort=sort.value,
            community_id=str(community_id) if community_id else None,
            limit=limit,
            offset=offset,
        ):
            resources = await self.resource_repository.find_all(
                sort=sort,
                community_id=community_id,
                resource_type=resource_type,
                difficulty=difficulty,
                limit=limit,
                offset=offset,
            )
            total = await self.resource_repository.count(
                community_id=community_id,
                resource_type=resource_type,
                difficulty=difficulty,
            )
            return resources, total

    async def record_view(self, resource_id: ResourceId) -> None:
        with logfire.span("resource_service.record_view", resource_id=str(resource_id)):
            await self.resource_repository.increment_views(resource_id)

    async def record_click(self, resource_id: ResourceId) -> None:
        """Track an outbound click.

        Raises:
            NotFoundError: If the resource does not exist
        """
        with logfire.span(
            "resource_service.record_click", resource_id=str(resource_id)
        ):
            found = await self.resource_repository.increment_clicks(resource_id)
            if not found:
                raise NotFoundError("Resource", str(resource_id))

    async def report_resource(
        self,
        resource_id: ResourceId,
        reporter_id: UserId,
        reason: ReportReason,
        description: str | None = None,
    ) -> Report:
        """Flag a resource for moderation.

        Raises:
            NotFoundError: If the resource does not exist
            ConflictError: If this user already reported the resource
        """
        with logfire.span(
            "resource_service.report_resource",
            resource_id=str(resource_id),
            reporter_id=str(reporter_id),
            reason=reason.value,
        ):
            await self.get_active_resource(resource_id)

            report = Report(
                id=ReportId(uuid4()),
                resource_id=resource_id,
                user_id=reporter_id,
                reason=reason,
                description=description,
                created_at=datetime.now(),
            )
            try:
                saved = await self.resource_repository.add_report(report)
            except IntegrityError:
                logfire.warn(
                    "Duplicate report attempt",
                    resource_id=str(resource_id),
                    reporter_id=str(reporter_id),
                )
                raise ConflictError("You have already reported this resource")

            logfire.info(
                "Resource reported", resource_id=str(resource_id), reason=reason.value
            )
            return saved

    async def increment_comment_count(self, resource_id: ResourceId) -> None:
        """Atomically increment the live comment counter.

        Raises:
            NotFoundError: If the resource disappeared
        """
        with logfire.span(
            "resource_service.increment_comment_count", resource_id=str(resource_id)
        ):
            found = await self.resource_repository.increment_comment_count(
                resource_id
            )
            if not found:
                raise NotFoundError("Resource", str(resource_id))

    async def decrement_comment_count(self, resource_id: ResourceId) -> None:
        """Atomically decrement the live comment counter (minimum 0)."""
        with logfire.span(
            "resource_service.decrement_comment_count", resource_id=str(resource_id)
        ):
            await self.resource_repository.decrement_comment_count(resource_id)

    async def apply_vote_delta(
        self, resource_id: ResourceId, upvote_delta: int, downvote_delta: int
    ) -> VoteTally:
        """Atomically shift the resource's vote counters.

        Raises:
            NotFoundError: If the resource does not exist
        """
        tally = await self.resource_repository.apply_vote_delta(
            resource_id, upvote_delta, downvote_delta
        )
        if tally is None:
            raise NotFoundError("Resource", str(resource_id))
        return tally
