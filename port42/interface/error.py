"""Interface layer error handling.

Domain errors become JSON bodies of the form
``{"error": <kind>, "message": <text>}`` with a status derived from the kind.
"""

import logfire
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from port42.domain.error import DomainError

KIND_STATUS: dict[str, int] = {
    "not_found": status.HTTP_404_NOT_FOUND,
    "invalid_argument": status.HTTP_400_BAD_REQUEST,
    "permission_denied": status.HTTP_403_FORBIDDEN,
    "conflict": status.HTTP_409_CONFLICT,
    "transient_store_error": status.HTTP_503_SERVICE_UNAVAILABLE,
}

STATUS_KIND: dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "invalid_argument",
    status.HTTP_401_UNAUTHORIZED: "unauthenticated",
    status.HTTP_403_FORBIDDEN: "permission_denied",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
    status.HTTP_409_CONFLICT: "conflict",
}


def error_body(kind: str, message: str) -> dict[str, str]:
    return {"error": kind, "message": message}


def status_for(error: DomainError) -> int:
    """HTTP status for a domain error, 500 for kinds with no mapping."""
    return KIND_STATUS.get(error.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logfire.error(
            "Request failed",
            path=request.url.path,
            kind=exc.kind,
            error=str(exc),
        )
    else:
        logfire.warn(
            "Request rejected",
            path=request.url.path,
            kind=exc.kind,
            error=str(exc),
        )
    return JSONResponse(status_code=status_code, content=error_body(exc.kind, str(exc)))


async def handle_validation_error(request: Request, exc: Exception) -> JSONResponse:
    """Malformed bodies, query params and identifiers are invalid arguments."""
    if isinstance(exc, RequestValidationError):
        message = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
    else:
        message = str(exc)
    logfire.warn("Invalid request", path=request.url.path, error=message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("invalid_argument", message),
    )


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    kind = STATUS_KIND.get(exc.status_code, "error")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(kind, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the JSON error handlers on an application.

    Domain errors are translated by an HTTP middleware rather than an
    exception handler, so they propagate through the DI request scope first
    and the request transaction is rolled back. Call this after DI setup so
    the middleware wraps the container middleware.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(HTTPException, handle_http_exception)

    @app.middleware("http")
    async def translate_errors(request: Request, call_next):
        try:
            return await call_next(request)
        except DomainError as e:
            return await handle_domain_error(request, e)
        except ValueError as e:
            # Malformed UUIDs and pydantic errors raised inside use cases
            return await handle_validation_error(request, e)
