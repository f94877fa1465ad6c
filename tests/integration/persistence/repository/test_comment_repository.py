"""Integration tests for CommentRepository.

These tests run the JSONB edit-history append, the soft delete and the
floored vote counters against PostgreSQL.
"""

import pytest

from port42.domain.model.comment import REDACTED_CONTENT
from port42.domain.repository import CommentRepository
from tests.conftest import make_comment, seed_unique_resource
from tests.harness import create_env_fixture

# Integration test fixture - real PostgreSQL
integration_env = create_env_fixture(unmock={"persistence"})


class TestCommentEditHistoryIntegration:
    """edit_content appends the replaced text with ``||``."""

    @pytest.mark.asyncio
    async def test_history_records_each_prior_version_in_order(
        self, integration_env
    ):
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        owner, resource = await seed_unique_resource(integration_env)
        comment = await comment_repo.save(
            make_comment(resource, owner, content="first draft")
        )

        # Act
        await comment_repo.edit_content(comment.id, "second draft")
        edited = await comment_repo.edit_content(comment.id, "final")

        # Assert
        assert edited.content == "final"
        assert edited.is_edited is True
        assert [e.prior_content for e in edited.edit_history] == [
            "first draft",
            "second draft",
        ]
        stored = await comment_repo.find_by_id(comment.id)
        assert stored.edit_history == edited.edit_history

    @pytest.mark.asyncio
    async def test_deleted_comment_cannot_be_edited(self, integration_env):
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        owner, resource = await seed_unique_resource(integration_env)
        comment = await comment_repo.save(make_comment(resource, owner))
        await comment_repo.soft_delete(comment.id)

        # Act
        result = await comment_repo.edit_content(comment.id, "too late")

        # Assert
        assert result is None
        assert (await comment_repo.find_by_id(comment.id)).edit_history == []


class TestCommentSoftDeleteIntegration:
    @pytest.mark.asyncio
    async def test_soft_delete_is_idempotent(self, integration_env):
        """The first delete redacts and returns the row, the second returns None."""
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        owner, resource = await seed_unique_resource(integration_env)
        comment = await comment_repo.save(make_comment(resource, owner))

        # Act
        first = await comment_repo.soft_delete(comment.id)
        second = await comment_repo.soft_delete(comment.id)

        # Assert
        assert first.is_deleted is True
        assert first.content == REDACTED_CONTENT
        assert first.deleted_at is not None
        assert second is None


class TestCommentVoteCountersIntegration:
    @pytest.mark.asyncio
    async def test_vote_delta_round_trip_and_floor(self, integration_env):
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        owner, resource = await seed_unique_resource(integration_env)
        comment = await comment_repo.save(make_comment(resource, owner))

        # Act
        up = await comment_repo.apply_vote_delta(comment.id, 1, 0)
        switched = await comment_repo.apply_vote_delta(comment.id, -1, 1)
        removed = await comment_repo.apply_vote_delta(comment.id, 0, -1)
        floored = await comment_repo.apply_vote_delta(comment.id, 0, -1)

        # Assert
        assert (up.upvotes, up.downvotes) == (1, 0)
        assert (switched.upvotes, switched.downvotes) == (0, 1)
        assert (removed.upvotes, removed.downvotes) == (0, 0)
        assert (floored.upvotes, floored.downvotes) == (0, 0)
