"""Realtime fan-out of resource events to WebSocket clients."""

from .notifier import RealtimeConnection, RealtimeNotifier
from .outbox import PendingEvent, RealtimeOutbox

__all__ = ["PendingEvent", "RealtimeConnection", "RealtimeNotifier", "RealtimeOutbox"]
