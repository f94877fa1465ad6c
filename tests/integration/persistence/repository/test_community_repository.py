"""Integration tests for CommunityRepository membership and counters."""

from uuid import uuid4

import pytest

from port42.domain.repository import CommunityRepository
from tests.conftest import make_community, save_user
from tests.harness import create_env_fixture

# Integration test fixture - real PostgreSQL
integration_env = create_env_fixture(unmock={"persistence"})


class TestCommunityMembershipIntegration:
    @pytest.mark.asyncio
    async def test_membership_rows_are_counted_once(self, integration_env):
        """Repeated joins and leaves only move member_count on a real change."""
        # Arrange
        community_repo = await integration_env.get(CommunityRepository)
        community = await community_repo.save(make_community(f"c-{uuid4().hex[:12]}"))
        user = await save_user(integration_env, f"m-{uuid4().hex[:12]}")

        # Act
        joined = await community_repo.add_member(community.id, user.id)
        joined_again = await community_repo.add_member(community.id, user.id)
        after_join = await community_repo.find_by_id(community.id)
        left = await community_repo.remove_member(community.id, user.id)
        left_again = await community_repo.remove_member(community.id, user.id)
        after_leave = await community_repo.find_by_id(community.id)

        # Assert
        assert (joined, joined_again) == (True, False)
        assert after_join.member_count == 1
        assert (left, left_again) == (True, False)
        assert after_leave.member_count == 0
        assert not await community_repo.is_member(community.id, user.id)

    @pytest.mark.asyncio
    async def test_find_by_name_ignores_case(self, integration_env):
        # Arrange
        community_repo = await integration_env.get(CommunityRepository)
        community = await community_repo.save(make_community(f"c-{uuid4().hex[:12]}"))

        # Act
        found = await community_repo.find_by_name(community.name.upper())

        # Assert
        assert found.id == community.id

    @pytest.mark.asyncio
    async def test_resource_count_floor(self, integration_env):
        # Arrange
        community_repo = await integration_env.get(CommunityRepository)
        community = await community_repo.save(make_community(f"c-{uuid4().hex[:12]}"))
        await community_repo.increment_resource_count(community.id)

        # Act
        await community_repo.decrement_resource_count(community.id)
        await community_repo.decrement_resource_count(community.id)

        # Assert
        assert (await community_repo.find_by_id(community.id)).resource_count == 0
