"""
Deadline for outbound Square calls.

A timed out call is only abandoned by the caller. The request keeps running
against Square, so a payment can still be created or captured after the
handler has reported a failure.
"""

import asyncio
from typing import Awaitable, Optional, TypeVar

from .errors import SquareTimeoutError

T = TypeVar("T")

DEFAULT_TIMEOUT_SECONDS = 30.0


async def with_timeout(
    awaitable: Awaitable[T],
    timeout: Optional[float] = DEFAULT_TIMEOUT_SECONDS,
    message: str = "Request timeout",
) -> T:
    """
    Await a Square call, giving up after ``timeout`` seconds.

    Args:
        awaitable: The in-flight Square API call
        timeout: Deadline in seconds; None waits indefinitely
        message: Prefix for the timeout error message

    Returns:
        The call's result if it finishes in time

    Raises:
        SquareTimeoutError: The deadline passed. The error carries the
            still-running task in ``pending``.
    """
    task = asyncio.ensure_future(awaitable)
    try:
        return await asyncio.wait_for(asyncio.shield(task), timeout=timeout)
    except asyncio.TimeoutError:
        raise SquareTimeoutError(
            f"{message}: timed out after {timeout:g}s; "
            "the request was not cancelled and may still complete on Square",
            timeout=timeout,
            pending=task,
        ) from None
