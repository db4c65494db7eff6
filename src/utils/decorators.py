import asyncio
from functools import wraps
from typing import Any, Awaitable, Callable, Optional, Tuple, Type

from loguru import logger


_RAISE = object()


def retry_async(
    attempts: int = 3,
    delay: float = 2.0,
    backoff: float = 1.5,
    default_value: Any = _RAISE,
    exceptions: Tuple[Type[BaseException], ...] = (Exception,),
    sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
    label: str = "",
    context: str = "",
):
    """
    Retry an async function up to `attempts` times in total.

    The pause before the next attempt starts at `delay` seconds and is
    multiplied by `backoff` after every retry. When all attempts fail the
    last exception is re-raised, or `default_value` is returned if one
    was given.
    """
    if attempts < 1:
        raise ValueError("attempts must be at least 1")

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            pause = delay
            sleeper = sleep or asyncio.sleep
            name = label or func.__name__

            for attempt in range(1, attempts + 1):
                try:
                    return await func(*args, **kwargs)
                except exceptions as e:
                    if attempt < attempts:
                        logger.warning(
                            f"{context} | Retrying {name} ({attempt}/{attempts}): {e}"
                        )
                        await sleeper(pause)
                        pause *= backoff
                        continue

                    if default_value is _RAISE:
                        raise
                    logger.error(f"{context} | {name} failed after {attempts} attempts: {e}")
                    return default_value

        return wrapper

    return decorator
