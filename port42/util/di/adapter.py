"""Adapter DI providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide

from port42.adapter.realtime import RealtimeNotifier, RealtimeOutbox
from port42.config import RealtimeSettings
from port42.util.di.base import ProviderBase


class ProdAdapterProvider(ProviderBase):
    """Adapter provider - concrete, no mocks needed.

    The realtime notifier holds process-wide room state, so it lives for the
    whole application and is shared by HTTP routes and the WebSocket endpoint.
    """

    scope = Scope.APP

    @provide
    async def get_realtime_notifier(
        self, settings: RealtimeSettings
    ) -> AsyncIterator[RealtimeNotifier]:
        """Provide the realtime notifier, closing its connections on shutdown."""
        notifier = RealtimeNotifier(settings)
        yield notifier
        await notifier.close()

    @provide(scope=Scope.REQUEST)
    async def get_realtime_outbox(
        self, notifier: RealtimeNotifier
    ) -> AsyncIterator[RealtimeOutbox]:
        """Provide the request's outbox.

        Pending events are published when the request scope closes cleanly
        and dropped when it closes with an error. The Postgres session takes
        the outbox as a dependency, so this finalizer runs after the commit.
        """
        outbox = RealtimeOutbox(notifier)
        try:
            yield outbox
        except Exception:
            outbox.discard()
            raise
        outbox.release()
