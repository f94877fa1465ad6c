"""Logfire setup for the API process and the migration script.

Services log directly through ``logfire``; this module only configures the
SDK and instruments the frameworks:

    with logfire.span("vote_service.apply_vote", votable_id=str(votable_id)):
        ...
        logfire.info("Vote applied", upvotes=tally.upvotes)
"""

from typing import Any

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from port42.config import Settings

SERVICE_NAME = "port42-api"

# Polled by the load balancer every few seconds
UNTRACED_URLS = ["/health"]

# Session cookie must not land in traces
SCRUB_PATTERNS = ["auth_token"]


def should_send_to_logfire(settings: Settings) -> bool:
    """Explicit setting wins; otherwise send only when a token is configured."""
    observability = settings.observability
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once per process, before the app is imported.

    Console output is always on. Cloud export follows
    ``OBSERVABILITY__SEND_TO_LOGFIRE`` and ``OBSERVABILITY__LOGFIRE_TOKEN``.

    Args:
        settings: Application settings
    """
    send_to_logfire = should_send_to_logfire(settings)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
        scrubbing=logfire.ScrubbingOptions(extra_patterns=SCRUB_PATTERNS),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
    )


def _request_attributes(request: Any, attributes: dict[str, Any]) -> dict[str, Any]:
    # WebSocket connections have no method; tag them so realtime traffic
    # can be filtered apart from HTTP
    result = {**attributes}
    method = getattr(request, "method", None)
    result["transport"] = "http" if method else "websocket"
    if method:
        result["method"] = method
    url = getattr(request, "url", None)
    if url is not None:
        result["path"] = url.path
    client = getattr(request, "client", None)
    if client:
        result["client_host"] = client.host
    return result


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request and WebSocket session except the health check.

    Args:
        app: FastAPI application instance
    """
    logfire.instrument_fastapi(
        app,
        capture_headers=True,
        request_attributes_mapper=_request_attributes,
        excluded_urls=UNTRACED_URLS,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries on the engine, tagging each statement with its span.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        enable_commenter=True,
    )
    logfire.debug("SQLAlchemy instrumented")
