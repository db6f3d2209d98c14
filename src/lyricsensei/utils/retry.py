"""Async retry with exponential backoff for external service calls."""

import asyncio
from typing import Any, Awaitable, Callable, Optional, Tuple, Type, TypeVar

from ..utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

# Default retry settings
DEFAULT_MAX_RETRIES = 2
DEFAULT_BASE_DELAY = 0.5  # seconds
DEFAULT_MAX_DELAY = 8.0  # seconds
DEFAULT_BACKOFF_FACTOR = 2.0


async def retry_async(
    func: Callable[..., Awaitable[T]],
    *args: Any,
    max_retries: int = DEFAULT_MAX_RETRIES,
    base_delay: float = DEFAULT_BASE_DELAY,
    max_delay: float = DEFAULT_MAX_DELAY,
    backoff_factor: float = DEFAULT_BACKOFF_FACTOR,
    exceptions: Tuple[Type[BaseException], ...] = (Exception,),
    should_retry: Optional[Callable[[BaseException], bool]] = None,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    **kwargs: Any,
) -> T:
    """
    Await ``func(*args, **kwargs)``, retrying on failure with exponential backoff.

    Args:
        func: Coroutine function to call
        max_retries: Maximum number of retry attempts after the first call
        base_delay: Initial delay between retries in seconds
        max_delay: Maximum delay between retries in seconds
        backoff_factor: Multiplier for delay after each retry
        exceptions: Exception types that are candidates for a retry
        should_retry: Optional predicate; an exception it rejects is raised at once
        sleep: Awaitable sleep function (injectable for tests)

    Returns:
        Result of the awaited call

    Raises:
        The last exception if all retries fail
    """
    delay = base_delay
    name = getattr(func, "__name__", repr(func))

    for attempt in range(max_retries + 1):
        try:
            return await func(*args, **kwargs)
        except exceptions as e:
            if should_retry is not None and not should_retry(e):
                raise
            if attempt >= max_retries:
                logger.warning(f"All {max_retries} retries exhausted for {name}: {e}")
                raise

            logger.debug(f"Retry {attempt + 1}/{max_retries} for {name}: {e}")
            await sleep(delay)
            delay = min(delay * backoff_factor, max_delay)

    # Unreachable: the loop either returns or raises
    raise RuntimeError("Unexpected state in retry logic")
