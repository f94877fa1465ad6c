"""Unit tests for CastVoteUseCase."""

from typing import Any

import pytest

from port42.adapter.realtime import RealtimeNotifier, RealtimeOutbox
from port42.application.usecase.vote import CastVoteRequest, CastVoteUseCase
from port42.domain.error import InvalidArgumentError, NotFoundError
from port42.domain.repository import CommentRepository
from port42.domain.value import VotableType, VoteType
from tests.conftest import make_comment, make_user, save_user, seed_resource
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class RecordingConnection:
    def __init__(self) -> None:
        self.sent: list[dict[str, Any]] = []

    async def send_json(self, data: Any) -> None:
        self.sent.append(data)


class TestCastVoteUseCase:
    """Tests for CastVoteUseCase."""

    @pytest.mark.asyncio
    async def test_resource_vote_notifies_room(self, unit_env):
        """A resource vote queues the new tally for the resource room."""
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        notifier = await unit_env.get(RealtimeNotifier)
        outbox = await unit_env.get(RealtimeOutbox)
        _, resource = await seed_resource(unit_env)
        viewer = RecordingConnection()
        notifier.subscribe(notifier.register(viewer), resource.id)
        voter = await save_user(unit_env, "voter")

        # Act
        response = await use_case.execute(
            CastVoteRequest(
                votable_type=VotableType.RESOURCE,
                votable_id=str(resource.id),
                choice="up",
                user_id=str(voter.id),
            )
        )
        await notifier.flush()
        held_back = list(viewer.sent)
        released = outbox.release()
        await notifier.flush()

        # Assert
        assert (response.upvotes, response.downvotes, response.score) == (1, 0, 1)
        assert response.user_choice == VoteType.UP
        assert held_back == []
        assert released == 1
        assert viewer.sent == [
            {
                "type": "votes_updated",
                "data": {
                    "resource_id": str(resource.id),
                    "entity_type": "resource",
                    "entity_id": str(resource.id),
                    "upvotes": 1,
                    "downvotes": 0,
                    "score": 1,
                },
            }
        ]

    @pytest.mark.asyncio
    async def test_comment_vote_notifies_comment_resource_room(self, unit_env):
        """Comment votes go to the room of the resource the comment is on."""
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        notifier = await unit_env.get(RealtimeNotifier)
        outbox = await unit_env.get(RealtimeOutbox)
        comment_repo = await unit_env.get(CommentRepository)
        owner, resource = await seed_resource(unit_env)
        comment = await comment_repo.save(make_comment(resource, owner))
        voter = await save_user(unit_env, "voter")
        voter_socket = RecordingConnection()
        viewer = RecordingConnection()
        voter_socket_id = notifier.register(voter_socket)
        notifier.subscribe(voter_socket_id, resource.id)
        notifier.subscribe(notifier.register(viewer), resource.id)

        # Act
        response = await use_case.execute(
            CastVoteRequest(
                votable_type=VotableType.COMMENT,
                votable_id=str(comment.id),
                choice="down",
                user_id=str(voter.id),
                connection_id=voter_socket_id,
            )
        )
        outbox.release()
        await notifier.flush()

        # Assert
        assert response.score == -1
        assert voter_socket.sent == []
        [message] = viewer.sent
        assert message["data"]["resource_id"] == str(resource.id)
        assert message["data"]["entity_type"] == "comment"
        assert message["data"]["entity_id"] == str(comment.id)
        assert message["data"]["downvotes"] == 1

    @pytest.mark.asyncio
    async def test_invalid_choice_publishes_nothing(self, unit_env):
        """Rejected votes leave the room quiet."""
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        outbox = await unit_env.get(RealtimeOutbox)
        _, resource = await seed_resource(unit_env)
        voter = await save_user(unit_env, "voter")

        # Act
        with pytest.raises(InvalidArgumentError):
            await use_case.execute(
                CastVoteRequest(
                    votable_type=VotableType.RESOURCE,
                    votable_id=str(resource.id),
                    choice="meh",
                    user_id=str(voter.id),
                )
            )

        # Assert
        assert outbox.pending == []

    @pytest.mark.asyncio
    async def test_unknown_voter_is_not_found(self, unit_env):
        """A voter missing from the user store is rejected before any write."""
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        outbox = await unit_env.get(RealtimeOutbox)
        _, resource = await seed_resource(unit_env)
        ghost = make_user("ghost")

        # Act
        with pytest.raises(NotFoundError):
            await use_case.execute(
                CastVoteRequest(
                    votable_type=VotableType.RESOURCE,
                    votable_id=str(resource.id),
                    choice="up",
                    user_id=str(ghost.id),
                )
            )

        # Assert
        assert outbox.pending == []
