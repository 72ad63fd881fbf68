"""Translate SQLAlchemy failures into the domain StorageError."""

from __future__ import annotations

import functools
import logging
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from adminpass.domain.exceptions import StorageError

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def translate_storage_errors(
    operation: str,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Decorator for repository methods: SQLAlchemyError -> StorageError(operation).

    Domain exceptions raised inside the method (e.g. ActivePasswordConflictError)
    pass through untouched.
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return await func(*args, **kwargs)
            except SQLAlchemyError as e:
                logger.error("Storage operation %s failed: %s", operation, e.__class__.__name__)
                raise StorageError(f"Storage operation failed: {operation}", operation=operation) from e

        return wrapper

    return decorator
