"""Integration tests for VoteRepository.

These tests verify the vote record swap against PostgreSQL: the unique
constraint and DELETE ... RETURNING, plus the floored tally updates the vote
service pairs with them.
"""

from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from port42.domain.error import NotFoundError
from port42.domain.model.vote import Vote
from port42.domain.repository import ResourceRepository, VoteRepository
from port42.domain.service import VoteService
from port42.domain.value import VotableType, VoteId, VoteType
from tests.conftest import make_user, save_user, seed_unique_resource
from tests.harness import create_env_fixture

# Integration test fixture - real PostgreSQL
integration_env = create_env_fixture(unmock={"persistence"})


def make_vote(user_id, votable_id, vote_type: VoteType) -> Vote:
    return Vote(
        id=VoteId(uuid4()),
        user_id=user_id,
        votable_type=VotableType.RESOURCE,
        votable_id=votable_id,
        vote_type=vote_type,
    )


class TestVoteRepositoryIntegration:
    """Integration tests for PostgresVoteRepository."""

    @pytest.mark.asyncio
    async def test_second_vote_record_violates_unique_constraint(
        self, integration_env
    ):
        """The database holds at most one record per user and entity."""
        # Arrange
        vote_repo = await integration_env.get(VoteRepository)
        session = await integration_env.get(AsyncSession)
        _, resource = await seed_unique_resource(integration_env)
        voter = await save_user(integration_env, f"v-{uuid4().hex[:12]}")
        await vote_repo.save(make_vote(voter.id, resource.id, VoteType.UP))

        # Act & Assert
        with pytest.raises(IntegrityError):
            async with session.begin_nested():
                await vote_repo.save(make_vote(voter.id, resource.id, VoteType.DOWN))

        stored = await vote_repo.find_by_user_and_votable(
            voter.id, VotableType.RESOURCE, resource.id
        )
        assert stored.vote_type == VoteType.UP

    @pytest.mark.asyncio
    async def test_delete_returns_removed_record_once(self, integration_env):
        """DELETE ... RETURNING hands back the old vote, then nothing."""
        # Arrange
        vote_repo = await integration_env.get(VoteRepository)
        _, resource = await seed_unique_resource(integration_env)
        voter = await save_user(integration_env, f"v-{uuid4().hex[:12]}")
        vote = await vote_repo.save(make_vote(voter.id, resource.id, VoteType.DOWN))

        # Act
        first = await vote_repo.delete_by_user_and_votable(
            voter.id, VotableType.RESOURCE, resource.id
        )
        second = await vote_repo.delete_by_user_and_votable(
            voter.id, VotableType.RESOURCE, resource.id
        )

        # Assert
        assert first.id == vote.id
        assert first.vote_type == VoteType.DOWN
        assert second is None
        assert (
            await vote_repo.count_by_votable(
                VotableType.RESOURCE, resource.id, VoteType.DOWN
            )
            == 0
        )

    @pytest.mark.asyncio
    async def test_batch_lookup_only_returns_own_votes(self, integration_env):
        # Arrange
        vote_repo = await integration_env.get(VoteRepository)
        _, resource = await seed_unique_resource(integration_env)
        alice = await save_user(integration_env, f"a-{uuid4().hex[:12]}")
        bob = await save_user(integration_env, f"b-{uuid4().hex[:12]}")
        await vote_repo.save(make_vote(alice.id, resource.id, VoteType.UP))
        await vote_repo.save(make_vote(bob.id, resource.id, VoteType.DOWN))

        # Act
        votes = await vote_repo.find_by_user_and_votables(
            alice.id, VotableType.RESOURCE, [resource.id, uuid4()]
        )

        # Assert
        assert [(v.user_id, v.vote_type) for v in votes] == [(alice.id, VoteType.UP)]


class TestVoteServiceIntegration:
    """The vote service's record swap and counters on PostgreSQL."""

    @pytest.mark.asyncio
    async def test_up_down_remove_keeps_counters_in_step(self, integration_env):
        """Switching and removing a vote moves each counter exactly once."""
        # Arrange
        vote_service = await integration_env.get(VoteService)
        resource_repo = await integration_env.get(ResourceRepository)
        _, resource = await seed_unique_resource(integration_env)
        voter = await save_user(integration_env, f"v-{uuid4().hex[:12]}")

        # Act
        up = await vote_service.apply_vote(
            VotableType.RESOURCE, resource.id, voter.id, "up"
        )
        down = await vote_service.apply_vote(
            VotableType.RESOURCE, resource.id, voter.id, "down"
        )
        removed = await vote_service.apply_vote(
            VotableType.RESOURCE, resource.id, voter.id, "remove"
        )

        # Assert
        assert (up.upvotes, up.downvotes) == (1, 0)
        assert (down.upvotes, down.downvotes) == (0, 1)
        assert (removed.upvotes, removed.downvotes) == (0, 0)
        assert removed.user_choice is None
        stored = await resource_repo.find_by_id(resource.id)
        assert (stored.upvotes, stored.downvotes) == (0, 0)

    @pytest.mark.asyncio
    async def test_unknown_voter_is_not_found_instead_of_conflict(
        self, integration_env
    ):
        """A voter missing from users is rejected before the FK is hit."""
        # Arrange
        vote_service = await integration_env.get(VoteService)
        _, resource = await seed_unique_resource(integration_env)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await vote_service.apply_vote(
                VotableType.RESOURCE, resource.id, make_user("ghost").id, "up"
            )
