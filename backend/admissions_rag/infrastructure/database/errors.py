"""Translation of database driver failures into the domain error taxonomy."""

import functools
import logging
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from admissions_rag.domain.exceptions import UpstreamUnavailableError

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


def storage_errors(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
    """Re-raise SQLAlchemy and connection failures as ``UpstreamUnavailableError``.

    Driver-level errors (connection refused, server gone, lock timeouts) are
    marked retryable; ORM/statement errors are not.
    """

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        try:
            return await func(*args, **kwargs)
        except (SQLAlchemyError, OSError) as exc:
            logger.error("Storage call %s failed: %s", func.__qualname__, exc)
            raise UpstreamUnavailableError(
                "storage",
                f"{type(exc).__name__} in {func.__name__}",
                retryable=isinstance(exc, (DBAPIError, OSError)),
            ) from exc

    return wrapper
