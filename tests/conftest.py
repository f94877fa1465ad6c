"""Test configuration and fixtures."""

from datetime import datetime, timedelta
from uuid import uuid4

from port42.config import Settings
from port42.domain.model.comment import Comment
from port42.domain.model.community import Community
from port42.domain.model.resource import Resource
from port42.domain.model.user import User
from port42.domain.repository import (
    CommunityRepository,
    ResourceRepository,
    UserRepository,
)
from port42.domain.value import (
    CommentId,
    CommunityId,
    ResourceId,
    Slug,
    UserId,
    Username,
)
from port42.util.jwt import create_token


def make_user(
    username: str = "alice",
    reputation: int = 0,
    is_moderator: bool = False,
) -> User:
    """Build a user with a fresh ID."""
    return User(
        id=UserId(uuid4()),
        username=Username(root=username),
        display_name=username.capitalize(),
        reputation=reputation,
        is_moderator=is_moderator,
    )


def make_community(slug: str = "python", name: str | None = None) -> Community:
    """Build a community with a fresh ID."""
    return Community(
        id=CommunityId(uuid4()),
        name=name or slug.replace("-", " ").title(),
        slug=Slug(root=slug),
        description=f"All about {slug}",
    )


def make_resource(
    submitter: User,
    community: Community,
    url: str | None = None,
    title: str = "Understanding asyncio",
    created_at: datetime | None = None,
    **overrides,
) -> Resource:
    """Build a resource owned by ``submitter`` in ``community``.

    URLs are unique per resource unless one is given.
    """
    resource_id = ResourceId(uuid4())
    created_at = created_at or datetime.now()
    return Resource(
        id=resource_id,
        title=title,
        url=url or f"https://example.com/{resource_id}",
        community_id=community.id,
        submitted_by=submitter.id,
        submitter_username=submitter.username,
        created_at=created_at,
        updated_at=created_at,
        **overrides,
    )


def make_comment(
    resource: Resource,
    author: User,
    content: str = "Great link",
    parent: Comment | None = None,
    age: timedelta = timedelta(0),
) -> Comment:
    """Build a comment, optionally replying to ``parent``.

    ``age`` pushes ``created_at`` into the past for ordering tests.
    """
    created_at = datetime.now() - age
    return Comment(
        id=CommentId(uuid4()),
        resource_id=resource.id,
        author_id=author.id,
        author_username=author.username,
        content=content,
        parent_id=parent.id if parent else None,
        root_id=parent.thread_root_id if parent else None,
        depth=min(parent.depth + 1, 5) if parent else 0,
        created_at=created_at,
        updated_at=created_at,
    )


async def seed_resource(env, owner_reputation: int = 0) -> tuple[User, Resource]:
    """Store an owner, a community and one resource in ``env``'s repositories.

    Returns:
        The owner and the stored resource
    """
    user_repo = await env.get(UserRepository)
    community_repo = await env.get(CommunityRepository)
    resource_repo = await env.get(ResourceRepository)

    owner = await user_repo.save(make_user("owner", reputation=owner_reputation))
    community = await community_repo.save(make_community())
    resource = await resource_repo.save(make_resource(owner, community))
    return owner, resource


def auth_headers(user: User) -> dict[str, str]:
    """Bearer header for ``user``, signed with the configured secret."""
    token = create_token(str(user.id), user.username.root, Settings().auth)
    return {"Authorization": f"Bearer {token}"}


def store(client, container, repository_type, entity):
    """Save ``entity`` through the app's container from synchronous test code.

    Runs on the TestClient's event loop, the one the app itself uses.
    """

    async def _save():
        repository = await container.get(repository_type)
        return await repository.save(entity)

    return client.portal.call(_save)


async def save_user(env, username: str = "alice", **kwargs) -> User:
    """Build a user and store it in ``env``'s user repository."""
    user_repo = await env.get(UserRepository)
    return await user_repo.save(make_user(username, **kwargs))


async def seed_unique_resource(env) -> tuple[User, Resource]:
    """Like ``seed_resource``, with names unique per call.

    Integration tests commit to a shared database, so usernames, community
    names and slugs must not repeat across runs.
    """
    suffix = uuid4().hex[:12]
    user_repo = await env.get(UserRepository)
    community_repo = await env.get(CommunityRepository)
    resource_repo = await env.get(ResourceRepository)

    owner = await user_repo.save(make_user(f"owner-{suffix}"))
    community = await community_repo.save(make_community(f"c-{suffix}"))
    resource = await resource_repo.save(make_resource(owner, community))
    return owner, resource
