"""Resource rooms and per-connection delivery queues.

Each connected client may sit in at most one resource room. Publishing to a
room enqueues the event on every member's bounded queue; a per-connection
pump task drains that queue to the socket. A slow or dead connection only
ever fills its own queue, so delivery to the rest of the room never waits
on it.

All room and queue mutation happens in plain (non-async) methods on the
event loop thread, so no lock is needed.
"""

import asyncio
import contextlib
from dataclasses import dataclass, field
from typing import Any, Protocol
from uuid import uuid4

import logfire

from port42.config import RealtimeSettings
from port42.domain.value import ConnectionId, RealtimeEventType, ResourceId


class RealtimeConnection(Protocol):
    """Anything that can push a JSON message to a client (a Starlette WebSocket)."""

    async def send_json(self, data: Any) -> None: ...


@dataclass
class _Subscriber:
    connection: RealtimeConnection
    queue: asyncio.Queue
    room: ResourceId | None = None
    task: asyncio.Task | None = field(default=None, repr=False)


class RealtimeNotifier:
    """Fans out resource events to the connections viewing that resource.

    Delivery is best effort: events for a connection that is gone, or whose
    queue overflowed, are lost. Clients refetch state when they reconnect.
    """

    def __init__(self, settings: RealtimeSettings) -> None:
        self.settings = settings
        self._subscribers: dict[ConnectionId, _Subscriber] = {}
        self._rooms: dict[ResourceId, set[ConnectionId]] = {}

    def register(self, connection: RealtimeConnection) -> ConnectionId:
        """Start delivering to a newly accepted connection.

        Must be called from inside the running event loop.

        Returns:
            Identifier the client can send back to exclude its own echoes
        """
        connection_id = ConnectionId(str(uuid4()))
        subscriber = _Subscriber(
            connection=connection,
            queue=asyncio.Queue(maxsize=self.settings.queue_size),
        )
        subscriber.task = asyncio.create_task(
            self._pump(connection_id, subscriber),
            name=f"realtime-pump-{connection_id}",
        )
        self._subscribers[connection_id] = subscriber
        logfire.info("Realtime connection registered", connection_id=connection_id)
        return connection_id

    async def unregister(self, connection_id: ConnectionId) -> None:
        """Forget a connection and stop its pump. Safe to call twice."""
        subscriber = self._discard(connection_id)
        if subscriber is None:
            return
        if subscriber.task and subscriber.task is not asyncio.current_task():
            subscriber.task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await subscriber.task
        logfire.info("Realtime connection unregistered", connection_id=connection_id)

    def subscribe(self, connection_id: ConnectionId, resource_id: ResourceId) -> bool:
        """Move a connection into a resource room, leaving its previous room.

        Returns:
            False if the connection is not registered
        """
        subscriber = self._subscribers.get(connection_id)
        if subscriber is None:
            return False

        self._leave_room(connection_id, subscriber)
        self._rooms.setdefault(resource_id, set()).add(connection_id)
        subscriber.room = resource_id
        logfire.debug(
            "Joined resource room",
            connection_id=connection_id,
            resource_id=str(resource_id),
        )
        return True

    def unsubscribe(self, connection_id: ConnectionId) -> ResourceId | None:
        """Remove a connection from whatever room it is in.

        Returns:
            The room left, None if it was in none
        """
        subscriber = self._subscribers.get(connection_id)
        if subscriber is None:
            return None
        return self._leave_room(connection_id, subscriber)

    def publish(
        self,
        resource_id: ResourceId,
        event_type: RealtimeEventType,
        payload: dict[str, Any],
        exclude: ConnectionId | None = None,
    ) -> int:
        """Queue an event for every connection in a resource room.

        An empty room is a no-op.

        Args:
            resource_id: Room to publish to
            event_type: Event name sent as the message ``type``
            payload: JSON-serialisable event body sent as ``data``
            exclude: Connection that caused the event, skipped if given

        Returns:
            Number of connections the event was queued for
        """
        members = self._rooms.get(resource_id)
        if not members:
            return 0

        message = {"type": event_type.value, "data": payload}
        delivered = 0
        for connection_id in list(members):
            if connection_id == exclude:
                continue
            if self._enqueue(connection_id, message):
                delivered += 1

        logfire.debug(
            "Realtime event published",
            resource_id=str(resource_id),
            event_type=event_type.value,
            recipients=delivered,
        )
        return delivered

    def send(self, connection_id: ConnectionId, message: dict[str, Any]) -> bool:
        """Queue a message for a single connection (acks, errors, pongs)."""
        return self._enqueue(connection_id, message)

    def room_members(self, resource_id: ResourceId) -> set[ConnectionId]:
        return set(self._rooms.get(resource_id, ()))

    def room_of(self, connection_id: ConnectionId) -> ResourceId | None:
        subscriber = self._subscribers.get(connection_id)
        return subscriber.room if subscriber else None

    @property
    def connection_count(self) -> int:
        return len(self._subscribers)

    async def flush(self) -> None:
        """Wait until every queued message has been sent or dropped."""
        await asyncio.gather(
            *(subscriber.queue.join() for subscriber in self._subscribers.values())
        )

    async def close(self) -> None:
        """Stop every pump task and forget all connections."""
        for connection_id in list(self._subscribers):
            await self.unregister(connection_id)
        logfire.info("Realtime notifier closed")

    def _enqueue(self, connection_id: ConnectionId, message: dict[str, Any]) -> bool:
        subscriber = self._subscribers.get(connection_id)
        if subscriber is None:
            return False

        queue = subscriber.queue
        if queue.full():
            # Drop the oldest pending event
            queue.get_nowait()
            queue.task_done()
            logfire.warn(
                "Realtime queue full, dropped oldest event",
                connection_id=connection_id,
            )
        queue.put_nowait(message)
        return True

    def _leave_room(
        self, connection_id: ConnectionId, subscriber: _Subscriber
    ) -> ResourceId | None:
        room = subscriber.room
        if room is None:
            return None

        members = self._rooms.get(room)
        if members is not None:
            members.discard(connection_id)
            if not members:
                del self._rooms[room]
        subscriber.room = None
        return room

    def _discard(self, connection_id: ConnectionId) -> _Subscriber | None:
        subscriber = self._subscribers.pop(connection_id, None)
        if subscriber is None:
            return None

        self._leave_room(connection_id, subscriber)
        # Release anyone waiting in flush()
        while not subscriber.queue.empty():
            subscriber.queue.get_nowait()
            subscriber.queue.task_done()
        return subscriber

    async def _pump(self, connection_id: ConnectionId, subscriber: _Subscriber) -> None:
        while True:
            message = await subscriber.queue.get()
            try:
                await asyncio.wait_for(
                    subscriber.connection.send_json(message),
                    timeout=self.settings.send_timeout_seconds,
                )
            except Exception as e:
                # Any transport failure means the client is gone or too slow
                logfire.warn(
                    "Realtime send failed, dropping connection",
                    connection_id=connection_id,
                    error=str(e) or type(e).__name__,
                )
                subscriber.queue.task_done()
                self._discard(connection_id)
                return
            subscriber.queue.task_done()
