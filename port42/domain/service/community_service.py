"""Community domain service."""

from datetime import datetime
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from port42.domain.error import ConflictError, InvalidArgumentError, NotFoundError
from port42.domain.model.community import Community, slugify
from port42.domain.repository import CommunityRepository
from port42.domain.value import CommunityId, Slug, UserId

from .base import Service
from .user_service import UserService


class CommunityService(Service):
    """Domain service for communities and their members."""

    def __init__(
        self, community_repository: CommunityRepository, user_service: UserService
    ) -> None:
        self.community_repository = community_repository
        self.user_service = user_service

    async def get_by_id(self, community_id: CommunityId) -> Community:
        """Get community by ID.

        Raises:
            NotFoundError: If community not found
        """
        with logfire.span(
            "community_service.get_by_id", community_id=str(community_id)
        ):
            community = await self.community_repository.find_by_id(community_id)
            if not community:
                logfire.warn("Community not found", community_id=str(community_id))
                raise NotFoundError("Community", str(community_id))
            return community

    async def get_by_slug(self, slug: Slug) -> Community:
        """Get community by slug.

        Raises:
            NotFoundError: If community not found
        """
        with logfire.span("community_service.get_by_slug", slug=slug.root):
            community = await self.community_repository.find_by_slug(slug)
            if not community:
                logfire.warn("Community not found", slug=slug.root)
                raise NotFoundError("Community", slug.root)
            return community

    async def list_communities(self) -> list[Community]:
        with logfire.span("community_service.list_communities"):
            return await self.community_repository.find_all()

    async def create_community(
        self,
        creator_id: UserId,
        name: str,
        description: str,
        icon: str | None = None,
        color: str | None = None,
    ) -> Community:
        """Create a community and make its creator the first member.

        The slug is derived from the name.

        Args:
            creator_id: Creating user
            name: Display name, unique ignoring case
            description: What the community is about
            icon: Emoji or image URL, defaults to a globe
            color: Hex theme color, defaults to terminal green

        Returns:
            The stored community

        Raises:
            NotFoundError: If the creator does not exist
            InvalidArgumentError: If the name yields an empty slug
            ConflictError: If the name or slug is already taken
        """
        name = name.strip()
        with logfire.span(
            "community_service.create_community",
            creator_id=str(creator_id),
            name=name,
        ):
            await self.user_service.get_by_id(creator_id)

            slug = slugify(name)
            if not slug:
                raise InvalidArgumentError(
                    "Community name must contain letters or digits"
                )

            taken = await self.community_repository.find_by_name(name)
            if not taken:
                taken = await self.community_repository.find_by_slug(Slug(root=slug))
            if taken:
                logfire.warn("Duplicate community", name=name, slug=slug)
                raise ConflictError("A community with this name already exists")

            community = Community(
                id=CommunityId(uuid4()),
                name=name,
                slug=Slug(root=slug),
                description=description,
                created_by=creator_id,
                created_at=datetime.now(),
                **{k: v for k, v in {"icon": icon, "color": color}.items() if v},
            )

            try:
                await self.community_repository.save(community)
            except IntegrityError:
                logfire.warn("Duplicate community on insert", name=name, slug=slug)
                raise ConflictError("A community with this name already exists")

            await self.community_repository.add_member(community.id, creator_id)

            logfire.info(
                "Community created", community_id=str(community.id), slug=slug
            )
            return await self.get_by_id(community.id)

    async def toggle_membership(
        self, community_id: CommunityId, user_id: UserId
    ) -> tuple[Community, bool]:
        """Join the community if not a member, otherwise leave it.

        Returns:
            The community with its new member count, and whether the user is
            now a member

        Raises:
            NotFoundError: If the community or user does not exist
        """
        with logfire.span(
            "community_service.toggle_membership",
            community_id=str(community_id),
            user_id=str(user_id),
        ):
            await self.get_by_id(community_id)
            await self.user_service.get_by_id(user_id)

            # A concurrent toggle may already have made the same change; the
            # repository counts each membership row once either way
            if await self.community_repository.is_member(community_id, user_id):
                await self.community_repository.remove_member(community_id, user_id)
                is_member = False
            else:
                await self.community_repository.add_member(community_id, user_id)
                is_member = True

            logfire.info(
                "Membership toggled",
                community_id=str(community_id),
                user_id=str(user_id),
                is_member=is_member,
            )
            return await self.get_by_id(community_id), is_member

    async def is_member(self, community_id: CommunityId, user_id: UserId) -> bool:
        return await self.community_repository.is_member(community_id, user_id)

    async def increment_resource_count(self, community_id: CommunityId) -> None:
        with logfire.span(
            "community_service.increment_resource_count",
            community_id=str(community_id),
        ):
            await self.community_repository.increment_resource_count(community_id)

    async def decrement_resource_count(self, community_id: CommunityId) -> None:
        with logfire.span(
            "community_service.decrement_resource_count",
            community_id=str(community_id),
        ):
            await self.community_repository.decrement_resource_count(community_id)
