"""Deadline wrapper for external calls that may never return."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

T = TypeVar("T")


class OperationTimeoutError(TimeoutError):
    """Raised when a bounded call exceeds its deadline."""

    def __init__(self, operation: str, seconds: float) -> None:
        self.operation = operation
        self.seconds = seconds
        self.message = f"{operation} timed out. Please check your connection and try again."
        super().__init__(self.message)


async def bounded(awaitable: Awaitable[T], seconds: float, *, operation: str = "Request") -> T:
    """Await ``awaitable`` for at most ``seconds``.

    The underlying call is cancelled when the deadline passes and an
    :class:`OperationTimeoutError` is raised in its place.
    """
    try:
        return await asyncio.wait_for(awaitable, timeout=seconds)
    except TimeoutError as exc:
        if isinstance(exc, OperationTimeoutError):
            raise
        raise OperationTimeoutError(operation, seconds) from exc
