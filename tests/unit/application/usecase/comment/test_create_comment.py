"""Unit tests for CreateCommentUseCase."""

from typing import Any
from uuid import uuid4

import pytest

from port42.adapter.realtime import RealtimeNotifier, RealtimeOutbox
from port42.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
)
from port42.domain.error import NotFoundError
from port42.domain.repository import ResourceRepository
from tests.conftest import seed_resource
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class RecordingConnection:
    def __init__(self) -> None:
        self.sent: list[dict[str, Any]] = []

    async def send_json(self, data: Any) -> None:
        self.sent.append(data)


class TestCreateCommentUseCase:
    """Tests for CreateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_create_comment_notifies_resource_room(self, unit_env):
        """Once released, viewers get comment_added; the author's socket does not."""
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)
        notifier = await unit_env.get(RealtimeNotifier)
        outbox = await unit_env.get(RealtimeOutbox)
        owner, resource = await seed_resource(unit_env)

        viewer = RecordingConnection()
        author_socket = RecordingConnection()
        viewer_id = notifier.register(viewer)
        author_socket_id = notifier.register(author_socket)
        notifier.subscribe(viewer_id, resource.id)
        notifier.subscribe(author_socket_id, resource.id)

        # Act
        response = await use_case.execute(
            CreateCommentRequest(
                resource_id=str(resource.id),
                content="Bookmarked",
                author_id=str(owner.id),
                connection_id=author_socket_id,
            )
        )
        await notifier.flush()
        held_back = list(viewer.sent)
        outbox.release()
        await notifier.flush()

        # Assert
        assert response.comment.content == "Bookmarked"
        assert response.comment.depth == 0
        assert held_back == []
        assert author_socket.sent == []
        [message] = viewer.sent
        assert message["type"] == "comment_added"
        assert message["data"]["resource_id"] == str(resource.id)
        assert message["data"]["comment"]["comment_id"] == response.comment.comment_id

    @pytest.mark.asyncio
    async def test_reply_carries_parent(self, unit_env):
        """Replies report their parent and depth."""
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)
        resource_repo = await unit_env.get(ResourceRepository)
        owner, resource = await seed_resource(unit_env)
        parent = await use_case.execute(
            CreateCommentRequest(
                resource_id=str(resource.id),
                content="Parent",
                author_id=str(owner.id),
            )
        )

        # Act
        reply = await use_case.execute(
            CreateCommentRequest(
                resource_id=str(resource.id),
                content="Child",
                author_id=str(owner.id),
                parent_id=parent.comment.comment_id,
            )
        )

        # Assert
        assert reply.comment.parent_id == parent.comment.comment_id
        assert reply.comment.depth == 1
        assert (await resource_repo.find_by_id(resource.id)).comment_count == 2

    @pytest.mark.asyncio
    async def test_failed_create_publishes_nothing(self, unit_env):
        """No event is published when the comment is rejected."""
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)
        notifier = await unit_env.get(RealtimeNotifier)
        outbox = await unit_env.get(RealtimeOutbox)
        owner, resource = await seed_resource(unit_env)
        viewer = RecordingConnection()
        notifier.subscribe(notifier.register(viewer), resource.id)

        # Act
        with pytest.raises(NotFoundError):
            await use_case.execute(
                CreateCommentRequest(
                    resource_id=str(resource.id),
                    content="Orphan",
                    author_id=str(owner.id),
                    parent_id=str(uuid4()),
                )
            )
        outbox.release()
        await notifier.flush()

        # Assert
        assert outbox.pending == []
        assert viewer.sent == []
