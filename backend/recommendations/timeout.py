from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from ..llm.errors import ProviderTimeoutError

T = TypeVar("T")

DEFAULT_TIMEOUT_MESSAGE = "Request timeout: The operation took too long to complete"


async def with_timeout(
    operation: Awaitable[T],
    ms: int,
    message: str = DEFAULT_TIMEOUT_MESSAGE,
    *,
    provider: str | None = None,
) -> T:
    """Race ``operation`` against a ``ms`` millisecond deadline.

    On timeout ``ProviderTimeoutError(message)`` is raised and the operation is
    left running in the background; its eventual result is discarded. The same
    happens when the caller itself is cancelled. The timer is cleaned up by
    ``wait_for`` when the operation finishes first.
    """
    task = asyncio.ensure_future(operation)
    try:
        return await asyncio.wait_for(asyncio.shield(task), timeout=ms / 1000)
    except asyncio.TimeoutError:
        raise ProviderTimeoutError(message, provider=provider) from None
    finally:
        # Abandoned tasks must not be reported as unretrieved.
        task.add_done_callback(_discard_result)


def _discard_result(task: asyncio.Future) -> None:
    if not task.cancelled():
        task.exception()
