"""Unit tests for ResourceService."""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest
from pydantic import ValidationError

from port42.domain.error import ConflictError, NotFoundError, PermissionDeniedError
from port42.domain.repository import (
    CommunityRepository,
    ResourceRepository,
    UserRepository,
)
from port42.domain.service import CommentService, ResourceService, VoteService
from port42.domain.value import (
    Difficulty,
    ReportReason,
    ResourceSort,
    ResourceType,
    VotableType,
)
from tests.conftest import (
    make_community,
    make_resource,
    make_user,
    save_user,
    seed_resource,
)
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


class TestSubmitResource:
    """Tests for submit_resource method."""

    @pytest.mark.asyncio
    async def test_submit_stores_resource_and_counts_it(self, unit_env):
        """A submission is stored under its community and bumps its count."""
        # Arrange
        resource_service = await unit_env.get(ResourceService)
        user_repo = await unit_env.get(UserRepository)
        community_repo = await unit_env.get(CommunityRepository)
        submitter = await user_repo.save(make_user("alice"))
        community = await community_repo.save(make_community("linux"))

        # Act
        result = await resource_service.submit_resource(
            submitter_id=submitter.id,
            community_id=community.id,
            title="The Linux command line",
            url="https://linuxcommand.org/tlcl.php",
            resource_type=ResourceType.BOOK,
            tags=["Shell", " bash "],
        )

        # Assert
        assert result.submitter_username == submitter.username
        assert result.resource_type == ResourceType.BOOK
        assert result.tags == ["shell", "bash"]
        assert (result.upvotes, result.downvotes, result.comment_count) == (0, 0, 0)

        stored_community = await community_repo.find_by_id(community.id)
        assert stored_community.resource_count == 1

    @pytest.mark.asyncio
    async def test_submit_duplicate_url_raises_conflict(self, unit_env):
        """A URL can only be submitted once."""
        # Arrange
        resource_service = await unit_env.get(ResourceService)
        owner, resource = await seed_resource(unit_env)

        # Act & Assert
        with pytest.raises(ConflictError, match="already been submitted"):
            await resource_service.submit_resource(
                submitter_id=owner.id,
                community_id=resource.community_id,
                title="Same link again",
                url=resource.url,
            )

    @pytest.mark.asyncio
    async def test_submit_to_unknown_community_raises_error(self, unit_env):
        """The target community must exist."""
        # Arrange
        resource_service = await unit_env.get(ResourceService)
        user_repo = await unit_env.get(UserRepository)
        submitter = await user_repo.save(make_user("alice"))

        # Act & Assert
        with pytest.raises(NotFoundError, match="Community"):
            await resource_service.submit_resource(
                submitter_id=submitter.id,
                community_id=uuid4(),
                title="Nowhere to go",
                url="https://example.com/nowhere",
            )

    @pytest.mark.asyncio
    async def test_submit_non_http_url_raises_error(self, unit_env):
        """Only http(s) links are accepted."""
        # Arrange
        resource_service = await unit_env.get(ResourceService)
        owner, resource = await seed_resource(unit_env)

        # Act & Assert
        with pytest.raises(ValueError, match="http"):
            await resource_service.submit_resource(
                submitter_id=owner.id,
                community_id=resource.community_id,
                title="Local file link",
                url="file:///etc/passwd",
            )


class TestListResources:
    """Tests for list_resources method."""

    @pytest.mark.asyncio
    async def test_filters_and_sorts(self, unit_env):
        """Filters narrow the page and the total; sort orders it."""
        # Arrange
        resource_service = await unit_env.get(ResourceService)
        resource_repo = await unit_env.get(ResourceRepository)
        community_repo = await unit_env.get(CommunityRepository)
        owner, first = await seed_resource(unit_env)
        python = await community_repo.find_by_id(first.community_id)
        ctf = await community_repo.save(make_community("ctf"))
        now = datetime.now()

        popular = await resource_repo.save(
            make_resource(
                owner,
                python,
                title="Popular video",
                created_at=now - timedelta(days=2),
                upvotes=10,
                resource_type=ResourceType.VIDEO,
            )
        )
        await resource_repo.save(
            make_resource(owner, ctf, title="Other community", upvotes=50)
        )
        await resource_repo.save(
            make_resource(owner, python, title="Hidden resource", is_active=False)
        )

        # Act
        resources, total = await resource_service.list_resources(
            sort=ResourceSort.POPULAR, community_id=python.id
        )
        videos, video_total = await resource_service.list_resources(
            community_id=python.id, resource_type=ResourceType.VIDEO
        )

        # Assert
        assert [r.id for r in resources] == [popular.id, first.id]
        assert total == 2
        assert [r.id for r in videos] == [popular.id]
        assert video_total == 1

    @pytest.mark.asyncio
    async def test_pagination(self, unit_env):
        """Limit and offset page through newest first."""
        # Arrange
        resource_service = await unit_env.get(ResourceService)
        resource_repo = await unit_env.get(ResourceRepository)
        community_repo = await unit_env.get(CommunityRepository)
        owner, _ = await seed_resource(unit_env)
        community = await community_repo.save(make_community("devops"))
        now = datetime.now()
        created = [
            await resource_repo.save(
                make_resource(
                    owner,
                    community,
                    title=f"Resource number {i}",
                    created_at=now - timedelta(hours=i),
                    difficulty=Difficulty.EXPERT,
                )
            )
            for i in range(5)
        ]

        # Act
        page, total = await resource_service.list_resources(
            community_id=community.id, limit=2, offset=2
        )

        # Assert
        assert total == 5
        assert [r.id for r in page] == [created[2].id, created[3].id]


class TestCountersAndReports:
    """Tests for clicks, views and reports."""

    @pytest.mark.asyncio
    async def test_record_click_and_view(self, unit_env):
        """Clicks and views are counted separately."""
        # Arrange
        resource_service = await unit_env.get(ResourceService)
        resource_repo = await unit_env.get(ResourceRepository)
        _, resource = await seed_resource(unit_env)

        # Act
        await resource_service.record_click(resource.id)
        await resource_service.record_click(resource.id)
        await resource_service.record_view(resource.id)

        # Assert
        stored = await resource_repo.find_by_id(resource.id)
        assert (stored.clicks, stored.views) == (2, 1)

    @pytest.mark.asyncio
    async def test_record_click_unknown_resource_raises_error(self, unit_env):
        """Clicks on unknown resources are not-found errors."""
        # Arrange
        resource_service = await unit_env.get(ResourceService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await resource_service.record_click(uuid4())

    @pytest.mark.asyncio
    async def test_report_flags_resource_once_per_user(self, unit_env):
        """A user can report a resource once; the resource is flagged."""
        # Arrange
        resource_service = await unit_env.get(ResourceService)
        resource_repo = await unit_env.get(ResourceRepository)
        _, resource = await seed_resource(unit_env)
        reporter = make_user("reporter")

        # Act
        report = await resource_service.report_resource(
            resource.id, reporter.id, ReportReason.BROKEN_LINK, "404s now"
        )
        with pytest.raises(ConflictError):
            await resource_service.report_resource(
                resource.id, reporter.id, ReportReason.SPAM
            )

        # Assert
        assert report.reason == ReportReason.BROKEN_LINK
        stored = await resource_repo.find_by_id(resource.id)
        assert stored.is_reported is True

    @pytest.mark.asyncio
    async def test_comment_count_never_negative(self, unit_env):
        """Decrementing an empty counter leaves it at zero."""
        # Arrange
        resource_service = await unit_env.get(ResourceService)
        resource_repo = await unit_env.get(ResourceRepository)
        _, resource = await seed_resource(unit_env)

        # Act
        await resource_service.decrement_comment_count(resource.id)

        # Assert
        stored = await resource_repo.find_by_id(resource.id)
        assert stored.comment_count == 0

    @pytest.mark.asyncio
    async def test_inactive_resource_is_not_found(self, unit_env):
        """Removed resources cannot be fetched for interaction."""
        # Arrange
        resource_service = await unit_env.get(ResourceService)
        resource_repo = await unit_env.get(ResourceRepository)
        owner, resource = await seed_resource(unit_env)
        community_repo = await unit_env.get(CommunityRepository)
        community = await community_repo.find_by_id(resource.community_id)
        hidden = await resource_repo.save(
            make_resource(owner, community, is_active=False)
        )

        # Act & Assert
        with pytest.raises(NotFoundError):
            await resource_service.get_active_resource(hidden.id)
        assert await resource_service.get_resource_by_id(hidden.id) is not None


class TestUpdateResource:
    """Tests for update_resource method."""

    @pytest.mark.asyncio
    async def test_submitter_edits_details(self, unit_env):
        """Only the given fields change; URL and counters are kept."""
        # Arrange
        resource_service = await unit_env.get(ResourceService)
        resource_repo = await unit_env.get(ResourceRepository)
        owner, resource = await seed_resource(unit_env)
        await resource_repo.apply_vote_delta(resource.id, 2, 1)

        # Act
        result = await resource_service.update_resource(
            resource.id,
            owner.id,
            title="Understanding asyncio, revised",
            difficulty=Difficulty.ADVANCED,
            tags=["Async", "python"],
        )

        # Assert
        assert result.title == "Understanding asyncio, revised"
        assert result.difficulty == Difficulty.ADVANCED
        assert result.tags == ["async", "python"]
        assert result.description == resource.description
        assert result.url == resource.url
        assert (result.upvotes, result.downvotes) == (2, 1)
        assert await resource_repo.find_by_id(resource.id) == result

    @pytest.mark.asyncio
    async def test_moderator_may_edit(self, unit_env):
        """Moderators can edit resources they did not submit."""
        # Arrange
        resource_service = await unit_env.get(ResourceService)
        _, resource = await seed_resource(unit_env)
        moderator = await save_user(unit_env, "mod", is_moderator=True)

        # Act
        result = await resource_service.update_resource(
            resource.id, moderator.id, resource_type=ResourceType.VIDEO
        )

        # Assert
        assert result.resource_type == ResourceType.VIDEO

    @pytest.mark.asyncio
    async def test_other_user_is_denied(self, unit_env):
        """Regular users cannot edit someone else's resource."""
        # Arrange
        resource_service = await unit_env.get(ResourceService)
        resource_repo = await unit_env.get(ResourceRepository)
        _, resource = await seed_resource(unit_env)
        stranger = await save_user(unit_env, "stranger")

        # Act & Assert
        with pytest.raises(PermissionDeniedError):
            await resource_service.update_resource(
                resource.id, stranger.id, title="Something else entirely"
            )
        assert (await resource_repo.find_by_id(resource.id)).title == resource.title

    @pytest.mark.asyncio
    async def test_invalid_title_is_rejected(self, unit_env):
        """Edits go through the same field rules as submissions."""
        # Arrange
        resource_service = await unit_env.get(ResourceService)
        owner, resource = await seed_resource(unit_env)

        # Act & Assert
        with pytest.raises(ValidationError):
            await resource_service.update_resource(resource.id, owner.id, title="abc")

    @pytest.mark.asyncio
    async def test_deleted_resource_cannot_be_edited(self, unit_env):
        """Removed resources are not found for editing."""
        # Arrange
        resource_service = await unit_env.get(ResourceService)
        owner, resource = await seed_resource(unit_env)
        await resource_service.deactivate_resource(resource.id, owner.id)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await resource_service.update_resource(
                resource.id, owner.id, title="Back from the dead"
            )


class TestDeactivateResource:
    """Tests for deactivate_resource method."""

    @pytest.mark.asyncio
    async def test_delete_hides_resource_and_uncounts_it(self, unit_env):
        """A deleted resource leaves listings and its community's count."""
        # Arrange
        resource_service = await unit_env.get(ResourceService)
        community_repo = await unit_env.get(CommunityRepository)
        owner, resource = await seed_resource(unit_env)
        await community_repo.increment_resource_count(resource.community_id)

        # Act
        result = await resource_service.deactivate_resource(resource.id, owner.id)

        # Assert
        assert result.is_active is False
        resources, total = await resource_service.list_resources()
        assert (resources, total) == ([], 0)
        community = await community_repo.find_by_id(resource.community_id)
        assert community.resource_count == 0
        with pytest.raises(NotFoundError):
            await resource_service.get_active_resource(resource.id)

    @pytest.mark.asyncio
    async def test_second_delete_is_not_found(self, unit_env):
        """Deleting twice fails and uncounts the resource only once."""
        # Arrange
        resource_service = await unit_env.get(ResourceService)
        community_repo = await unit_env.get(CommunityRepository)
        owner, resource = await seed_resource(unit_env)
        await community_repo.increment_resource_count(resource.community_id)
        await community_repo.increment_resource_count(resource.community_id)
        await resource_service.deactivate_resource(resource.id, owner.id)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await resource_service.deactivate_resource(resource.id, owner.id)
        community = await community_repo.find_by_id(resource.community_id)
        assert community.resource_count == 1

    @pytest.mark.asyncio
    async def test_moderator_may_delete_but_stranger_may_not(self, unit_env):
        """Deletion follows the same rule as editing."""
        # Arrange
        resource_service = await unit_env.get(ResourceService)
        _, resource = await seed_resource(unit_env)
        stranger = await save_user(unit_env, "stranger")
        moderator = await save_user(unit_env, "mod", is_moderator=True)

        # Act & Assert
        with pytest.raises(PermissionDeniedError):
            await resource_service.deactivate_resource(resource.id, stranger.id)
        result = await resource_service.deactivate_resource(resource.id, moderator.id)
        assert result.is_active is False

    @pytest.mark.asyncio
    async def test_deleted_resource_rejects_votes_and_comments(self, unit_env):
        """No new votes or comments land on a removed resource."""
        # Arrange
        resource_service = await unit_env.get(ResourceService)
        vote_service = await unit_env.get(VoteService)
        comment_service = await unit_env.get(CommentService)
        owner, resource = await seed_resource(unit_env)
        voter = await save_user(unit_env, "voter")
        await resource_service.deactivate_resource(resource.id, owner.id)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await vote_service.apply_vote(
                VotableType.RESOURCE, resource.id, voter.id, "up"
            )
        with pytest.raises(NotFoundError):
            await comment_service.create_comment(
                resource.id, voter.id, "Is this still around?"
            )
