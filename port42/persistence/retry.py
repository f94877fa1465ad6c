"""Transient store failure handling for Postgres repositories.

Timeouts and dropped connections surface as ``TransientStoreError``. A read
is retried once, after a rollback, but only while the request transaction has
not written anything yet; retrying after a write would silently discard it.
Writes are never retried.
"""

import asyncio
import functools
from typing import Any, Awaitable, Callable, TypeVar

import logfire
from sqlalchemy.exc import DBAPIError, IntegrityError, InterfaceError, OperationalError

from port42.domain.error import TransientStoreError

T = TypeVar("T")

# Marks a session that has issued a write in the current transaction
WRITES_FLAG = "port42.has_writes"

READ_RETRY_BACKOFF_SECONDS = 0.05


def is_transient(error: BaseException) -> bool:
    """Whether an error is a timeout or connection loss rather than a data error."""
    if isinstance(error, IntegrityError):
        return False
    if isinstance(error, (OperationalError, InterfaceError, TimeoutError)):
        return True
    if isinstance(error, DBAPIError):
        return bool(error.connection_invalidated)
    return False


def idempotent_read(
    func: Callable[..., Awaitable[T]],
) -> Callable[..., Awaitable[T]]:
    """Decorate a repository read method with a single retry on transient failure."""

    @functools.wraps(func)
    async def wrapper(self: Any, *args: Any, **kwargs: Any) -> T:
        try:
            return await func(self, *args, **kwargs)
        except Exception as e:
            if not is_transient(e):
                raise
            session = self.session
            if session.info.get(WRITES_FLAG):
                logfire.error(
                    "Transient store error after writes, not retrying",
                    operation=func.__qualname__,
                    error=str(e),
                )
                raise TransientStoreError("The data store is unavailable") from e

            logfire.warn(
                "Transient store error on read, retrying",
                operation=func.__qualname__,
                error=str(e),
            )
            await session.rollback()
            await asyncio.sleep(READ_RETRY_BACKOFF_SECONDS)
            try:
                return await func(self, *args, **kwargs)
            except Exception as retry_error:
                if is_transient(retry_error):
                    logfire.error(
                        "Transient store error on retry",
                        operation=func.__qualname__,
                        error=str(retry_error),
                    )
                    raise TransientStoreError(
                        "The data store is unavailable"
                    ) from retry_error
                raise

    return wrapper


def mutation(
    func: Callable[..., Awaitable[T]],
) -> Callable[..., Awaitable[T]]:
    """Decorate a repository write method.

    Flags the session as written and maps transient failures without retrying.
    """

    @functools.wraps(func)
    async def wrapper(self: Any, *args: Any, **kwargs: Any) -> T:
        self.session.info[WRITES_FLAG] = True
        try:
            return await func(self, *args, **kwargs)
        except Exception as e:
            if not is_transient(e):
                raise
            logfire.error(
                "Transient store error on write",
                operation=func.__qualname__,
                error=str(e),
            )
            raise TransientStoreError("The data store is unavailable") from e

    return wrapper
