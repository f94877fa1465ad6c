"""Realtime events held back until the request's transaction commits.

Use cases add events while the request transaction is still open. The DI
container releases them to the notifier once the transaction has committed,
and discards them when the request fails or the commit is rolled back, so a
room never hears about a change that was not stored.
"""

from dataclasses import dataclass
from typing import Any

import logfire

from port42.domain.value import ConnectionId, RealtimeEventType, ResourceId

from .notifier import RealtimeNotifier


@dataclass(frozen=True)
class PendingEvent:
    """An event waiting for its transaction to commit."""

    resource_id: ResourceId
    event_type: RealtimeEventType
    payload: dict[str, Any]
    exclude: ConnectionId | None = None


class RealtimeOutbox:
    """One request's pending realtime events."""

    def __init__(self, notifier: RealtimeNotifier) -> None:
        self.notifier = notifier
        self._pending: list[PendingEvent] = []

    @property
    def pending(self) -> list[PendingEvent]:
        return list(self._pending)

    def add(
        self,
        resource_id: ResourceId,
        event_type: RealtimeEventType,
        payload: dict[str, Any],
        exclude: ConnectionId | None = None,
    ) -> None:
        """Queue an event for the resource room.

        Args:
            resource_id: Room to notify
            event_type: Event name sent to clients
            payload: Event data
            exclude: Connection that caused the change, not echoed
        """
        self._pending.append(PendingEvent(resource_id, event_type, payload, exclude))

    def release(self) -> int:
        """Publish every pending event in the order it was added.

        Delivery is best effort: a publish failure is logged and the
        remaining events are still published.

        Returns:
            Number of events handed to the notifier
        """
        events, self._pending = self._pending, []
        released = 0
        for event in events:
            try:
                self.notifier.publish(
                    event.resource_id,
                    event.event_type,
                    event.payload,
                    exclude=event.exclude,
                )
                released += 1
            except Exception as e:
                logfire.error(
                    "Realtime publish failed",
                    resource_id=str(event.resource_id),
                    event_type=event.event_type.value,
                    error=str(e),
                )
        return released

    def discard(self) -> int:
        """Drop pending events after a failed request or rollback."""
        events, self._pending = self._pending, []
        if events:
            logfire.info("Realtime events discarded", count=len(events))
        return len(events)
