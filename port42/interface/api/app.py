"""FastAPI application."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from port42.config import Settings
from port42.interface.api.routes import (
    comments,
    communities,
    health,
    realtime,
    resources,
    users,
    votes,
)
from port42.interface.error import register_error_handlers
from port42.util.di.container import create_container, setup_di
from port42.util.observability import instrument_fastapi


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Close the DI container on shutdown (disposes the engine, stops realtime pumps)."""
    yield
    await app.state.dishka_container.close()


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Build the Port42 HTTP and WebSocket application.

    Logfire is configured by start_app.py before this runs; tests leave it
    unconfigured.

    Args:
        container: DI container to use instead of the production one
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Port42 API",
        description="Backend API for Port42 - a community hub for sharing and discussing developer resources",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Traces HTTP requests and WebSocket sessions
    instrument_fastapi(app_instance)

    # Tests pass a container with in-memory persistence
    if container is None:
        container = create_container()
    setup_di(app_instance, container)

    # Must wrap the DI middleware, see register_error_handlers
    register_error_handlers(app_instance)

    # Setup CORS middleware (outermost, so error responses carry CORS headers)
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "User-Agent",
            "Cache-Control",
            "X-Requested-With",
            "X-Connection-Id",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    app_instance.include_router(health.router)
    app_instance.include_router(resources.router)
    app_instance.include_router(comments.router)
    app_instance.include_router(votes.router)
    app_instance.include_router(communities.router)
    app_instance.include_router(users.router)
    app_instance.include_router(realtime.router)

    return app_instance


# Served by uvicorn as port42.interface.api.app:app
app = create_app()
