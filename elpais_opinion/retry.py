"""
elpais_opinion/retry.py
-----------------------
Fixed-delay retry for any fallible zero-argument coroutine factory.
"""
import asyncio
from typing import Awaitable, Callable, TypeVar

from elpais_opinion.errors import SessionConnectionError

T = TypeVar("T")


async def attempt(
    action: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    delay_ms: int = 5000,
    *,
    label: str = "",
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
) -> T:
    """
    Await ``action()`` up to *max_attempts* times, pausing *delay_ms*
    between failures. Returns the first successful result.

    Raises:
        SessionConnectionError: every attempt failed; chained from the
            last underlying error.
    """
    prefix = f"  [{label}] " if label else "  "
    last_error: Exception | None = None

    for n in range(1, max_attempts + 1):
        try:
            return await action()
        except Exception as exc:
            last_error = exc
            print(f"{prefix}Attempt {n} failed: {exc}")
            if n < max_attempts:
                print(f"{prefix}Retrying in {delay_ms / 1000:g} seconds...")
                await sleep(delay_ms / 1000)

    raise SessionConnectionError(
        f"gave up after {max_attempts} attempt(s): {last_error}", last_error
    ) from last_error
