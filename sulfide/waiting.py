from __future__ import annotations

import asyncio
import inspect
import logging
import time
from typing import Any, Awaitable, Callable, Union

from sulfide.errors import WaitTimeoutError

logger = logging.getLogger("sulfide")

Predicate = Callable[[], Union[Any, Awaitable[Any]]]


async def sleep(ms: float) -> None:
    """Suspend the current coroutine for ``ms`` milliseconds."""
    await asyncio.sleep(max(0.0, ms) / 1000.0)


async def wait_until(
    predicate: Predicate,
    timeout_ms: int,
    poll_interval_ms: int,
    description: str = "condition",
) -> Any:
    """
    Call ``predicate`` until it returns a truthy value or the deadline passes.

    The predicate may be a plain function or a coroutine function. At least
    one attempt is always made, and the timeout is only reported once
    ``timeout_ms`` has fully elapsed.

    Returns:
        The first truthy value returned by the predicate

    Raises:
        WaitTimeoutError: The deadline elapsed first
    """
    deadline = time.monotonic() + max(0, timeout_ms) / 1000.0
    attempts = 0

    while True:
        attempts += 1
        result = predicate()
        if inspect.isawaitable(result):
            result = await result
        if result:
            return result

        remaining = deadline - time.monotonic()
        if remaining <= 0:
            break
        await asyncio.sleep(min(poll_interval_ms / 1000.0, remaining))

    logger.debug(f"[Sulfide] Gave up waiting for {description} after {attempts} attempts")
    raise WaitTimeoutError(f"Timed out after {timeout_ms}ms waiting for {description}")
