"""Unit tests for VoteService."""

from uuid import uuid4

import pytest

from port42.domain.error import InvalidArgumentError, NotFoundError
from port42.domain.repository import (
    CommentRepository,
    CommunityRepository,
    ResourceRepository,
    UserRepository,
    VoteRepository,
)
from port42.domain.service import VoteService
from port42.domain.value import VotableType, VoteType
from tests.conftest import (
    make_comment,
    make_resource,
    make_user,
    save_user,
    seed_resource,
)
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


class TestApplyVoteOnResource:
    """Tests for apply_vote on resources."""

    @pytest.mark.asyncio
    async def test_two_voters_switching_and_removing(self, unit_env):
        """Tallies follow each voter's latest choice."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        _, resource = await seed_resource(unit_env)
        alice = await save_user(unit_env, "alice")
        bob = await save_user(unit_env, "bob")

        # Act & Assert
        result = await vote_service.apply_vote(
            VotableType.RESOURCE, resource.id, alice.id, "up"
        )
        assert (result.upvotes, result.downvotes, result.score) == (1, 0, 1)
        assert result.user_choice == VoteType.UP

        result = await vote_service.apply_vote(
            VotableType.RESOURCE, resource.id, bob.id, "down"
        )
        assert (result.upvotes, result.downvotes, result.score) == (1, 1, 0)
        assert result.user_choice == VoteType.DOWN

        result = await vote_service.apply_vote(
            VotableType.RESOURCE, resource.id, bob.id, "up"
        )
        assert (result.upvotes, result.downvotes, result.score) == (2, 0, 2)

        result = await vote_service.apply_vote(
            VotableType.RESOURCE, resource.id, alice.id, "remove"
        )
        assert (result.upvotes, result.downvotes, result.score) == (1, 0, 1)
        assert result.user_choice is None

    @pytest.mark.asyncio
    async def test_same_choice_twice_is_idempotent(self, unit_env):
        """Repeating a vote must not count it twice."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        _, resource = await seed_resource(unit_env)
        voter = await save_user(unit_env, "voter")

        # Act
        await vote_service.apply_vote(VotableType.RESOURCE, resource.id, voter.id, "up")
        result = await vote_service.apply_vote(
            VotableType.RESOURCE, resource.id, voter.id, "up"
        )

        # Assert
        assert result.upvotes == 1
        assert (
            await vote_repo.count_by_votable(
                VotableType.RESOURCE, resource.id, VoteType.UP
            )
            == 1
        )

    @pytest.mark.asyncio
    async def test_up_then_remove_restores_tally(self, unit_env):
        """Voting and withdrawing leaves the counters where they started."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        resource_repo = await unit_env.get(ResourceRepository)
        _, resource = await seed_resource(unit_env)
        voter = await save_user(unit_env, "voter")

        # Act
        await vote_service.apply_vote(VotableType.RESOURCE, resource.id, voter.id, "up")
        result = await vote_service.apply_vote(
            VotableType.RESOURCE, resource.id, voter.id, "remove"
        )

        # Assert
        stored = await resource_repo.find_by_id(resource.id)
        assert (result.upvotes, result.downvotes) == (0, 0)
        assert (stored.upvotes, stored.downvotes) == (0, 0)

    @pytest.mark.asyncio
    async def test_remove_without_vote_is_noop(self, unit_env):
        """Withdrawing a vote that was never cast changes nothing."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        user_repo = await unit_env.get(UserRepository)
        owner, resource = await seed_resource(unit_env, owner_reputation=10)
        voter = await save_user(unit_env, "voter")

        # Act
        result = await vote_service.apply_vote(
            VotableType.RESOURCE, resource.id, voter.id, "remove"
        )

        # Assert
        assert (result.upvotes, result.downvotes) == (0, 0)
        assert (await user_repo.find_by_id(owner.id)).reputation == 10

    @pytest.mark.asyncio
    async def test_stored_tally_matches_recount(self, unit_env):
        """Counters agree with a direct count of vote records."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        resource_repo = await unit_env.get(ResourceRepository)
        _, resource = await seed_resource(unit_env)
        voters = [await save_user(unit_env, f"voter{i}") for i in range(5)]

        # Act
        for i, voter in enumerate(voters):
            choice = "up" if i % 2 == 0 else "down"
            await vote_service.apply_vote(
                VotableType.RESOURCE, resource.id, voter.id, choice
            )
        await vote_service.apply_vote(
            VotableType.RESOURCE, resource.id, voters[0].id, "down"
        )

        # Assert
        stored = await resource_repo.find_by_id(resource.id)
        recount = await vote_service.recount_tally(VotableType.RESOURCE, resource.id)
        assert (stored.upvotes, stored.downvotes) == (2, 3)
        assert (recount.upvotes, recount.downvotes) == (2, 3)

    @pytest.mark.asyncio
    async def test_invalid_choice_raises_error(self, unit_env):
        """Unknown choices are rejected before anything is written."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        _, resource = await seed_resource(unit_env)
        voter = await save_user(unit_env, "voter")

        # Act & Assert
        with pytest.raises(InvalidArgumentError, match="Invalid vote choice"):
            await vote_service.apply_vote(
                VotableType.RESOURCE, resource.id, voter.id, "sideways"
            )

    @pytest.mark.asyncio
    async def test_nonexistent_resource_raises_error(self, unit_env):
        """Voting on an unknown resource is a not-found error."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        voter = await save_user(unit_env, "voter")
        missing_id = uuid4()

        # Act & Assert
        with pytest.raises(NotFoundError):
            await vote_service.apply_vote(
                VotableType.RESOURCE, missing_id, voter.id, "up"
            )
        assert (
            await vote_repo.find_by_user_and_votable(
                voter.id, VotableType.RESOURCE, missing_id
            )
            is None
        )

    @pytest.mark.asyncio
    async def test_unknown_voter_raises_error(self, unit_env):
        """Votes from users that do not exist are refused and leave no record."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        resource_repo = await unit_env.get(ResourceRepository)
        _, resource = await seed_resource(unit_env)
        ghost = make_user("ghost")

        # Act & Assert
        with pytest.raises(NotFoundError):
            await vote_service.apply_vote(
                VotableType.RESOURCE, resource.id, ghost.id, "up"
            )
        assert (
            await vote_repo.find_by_user_and_votable(
                ghost.id, VotableType.RESOURCE, resource.id
            )
            is None
        )
        stored = await resource_repo.find_by_id(resource.id)
        assert (stored.upvotes, stored.downvotes) == (0, 0)


class TestReputation:
    """Tests for owner reputation on resource votes."""

    @pytest.mark.asyncio
    async def test_reputation_follows_vote_transitions(self, unit_env):
        """Upvotes add 5, downvotes cost 2, and undoing either reverses it."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        user_repo = await unit_env.get(UserRepository)
        owner, resource = await seed_resource(unit_env)
        alice = await save_user(unit_env, "alice")
        bob = await save_user(unit_env, "bob")

        async def reputation() -> int:
            return (await user_repo.find_by_id(owner.id)).reputation

        # Act & Assert
        await vote_service.apply_vote(VotableType.RESOURCE, resource.id, alice.id, "up")
        assert await reputation() == 5

        await vote_service.apply_vote(VotableType.RESOURCE, resource.id, bob.id, "down")
        assert await reputation() == 3

        await vote_service.apply_vote(VotableType.RESOURCE, resource.id, bob.id, "up")
        assert await reputation() == 10

        await vote_service.apply_vote(
            VotableType.RESOURCE, resource.id, alice.id, "remove"
        )
        assert await reputation() == 5

        stored = await user_repo.find_by_id(owner.id)
        assert stored.total_upvotes == 1
        assert stored.total_downvotes == 0

    @pytest.mark.asyncio
    async def test_reputation_never_negative(self, unit_env):
        """A downvote on an owner with no reputation leaves it at zero."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        user_repo = await unit_env.get(UserRepository)
        owner, resource = await seed_resource(unit_env, owner_reputation=0)
        critic = await save_user(unit_env, "critic")

        # Act
        await vote_service.apply_vote(
            VotableType.RESOURCE, resource.id, critic.id, "down"
        )

        # Assert
        assert (await user_repo.find_by_id(owner.id)).reputation == 0

    @pytest.mark.asyncio
    async def test_self_vote_does_not_change_reputation(self, unit_env):
        """Owners can vote on their own resource but gain nothing from it."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        user_repo = await unit_env.get(UserRepository)
        owner, resource = await seed_resource(unit_env)

        # Act
        result = await vote_service.apply_vote(
            VotableType.RESOURCE, resource.id, owner.id, "up"
        )

        # Assert
        assert result.upvotes == 1
        assert (await user_repo.find_by_id(owner.id)).reputation == 0


class TestApplyVoteOnComment:
    """Tests for apply_vote on comments."""

    @pytest.mark.asyncio
    async def test_comment_vote_updates_comment_tally(self, unit_env):
        """Comment votes move the comment's counters, not the resource's."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        comment_repo = await unit_env.get(CommentRepository)
        resource_repo = await unit_env.get(ResourceRepository)
        user_repo = await unit_env.get(UserRepository)
        owner, resource = await seed_resource(unit_env)
        author = await user_repo.save(make_user("author"))
        comment = await comment_repo.save(make_comment(resource, author))

        # Act
        result = await vote_service.apply_vote(
            VotableType.COMMENT, comment.id, owner.id, "down"
        )

        # Assert
        assert (result.upvotes, result.downvotes, result.score) == (0, 1, -1)
        stored_comment = await comment_repo.find_by_id(comment.id)
        assert stored_comment.downvotes == 1
        stored_resource = await resource_repo.find_by_id(resource.id)
        assert (stored_resource.upvotes, stored_resource.downvotes) == (0, 0)

    @pytest.mark.asyncio
    async def test_comment_vote_does_not_change_reputation(self, unit_env):
        """Only resource votes feed reputation."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        comment_repo = await unit_env.get(CommentRepository)
        user_repo = await unit_env.get(UserRepository)
        _, resource = await seed_resource(unit_env)
        author = await user_repo.save(make_user("author", reputation=7))
        comment = await comment_repo.save(make_comment(resource, author))
        fan = await save_user(unit_env, "fan")

        # Act
        await vote_service.apply_vote(
            VotableType.COMMENT, comment.id, fan.id, "up"
        )

        # Assert
        assert (await user_repo.find_by_id(author.id)).reputation == 7

    @pytest.mark.asyncio
    async def test_nonexistent_comment_raises_error(self, unit_env):
        """Voting on an unknown comment is a not-found error."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        voter = await save_user(unit_env, "voter")

        # Act & Assert
        with pytest.raises(NotFoundError):
            await vote_service.apply_vote(
                VotableType.COMMENT, uuid4(), voter.id, "up"
            )


class TestGetUserChoices:
    """Tests for get_user_choices."""

    @pytest.mark.asyncio
    async def test_returns_only_voted_entities(self, unit_env):
        """Entities without a vote by the user are absent from the map."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        resource_repo = await unit_env.get(ResourceRepository)
        community_repo = await unit_env.get(CommunityRepository)
        owner, first = await seed_resource(unit_env)
        community = await community_repo.find_by_id(first.community_id)
        second = await resource_repo.save(make_resource(owner, community))
        voter = await save_user(unit_env, "voter")

        await vote_service.apply_vote(VotableType.RESOURCE, first.id, voter.id, "down")

        # Act
        choices = await vote_service.get_user_choices(
            voter.id, VotableType.RESOURCE, [first.id, second.id]
        )

        # Assert
        assert choices == {first.id: VoteType.DOWN}

    @pytest.mark.asyncio
    async def test_empty_ids_returns_empty_map(self, unit_env):
        """No IDs means no lookup."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        voter = await save_user(unit_env, "voter")

        # Act & Assert
        assert await vote_service.get_user_choices(
            voter.id, VotableType.COMMENT, []
        ) == {}
