# ================================================================================
# Retry Module
# ================================================================================
#
# Retry-with-backoff executor for flaky UI operations.
#
# Key Features:
#   - Configurable attempt count
#   - Exponential or linear backoff, capped at a maximum delay
#   - Jitter bounded by half the base delay
#   - Fatal errors short-circuit (no further attempts, no sleep)
#   - Optional per-attempt callback (sync or async)
#
# Usage:
#   await retry(lambda: locator.click())
#   await retry(fetch_prices, RetryOptions(retries=4, base_delay_ms=1500))
#
# ================================================================================

from __future__ import annotations

import asyncio
import inspect
import random
import time
from dataclasses import dataclass, replace
from functools import wraps
from typing import Any, Awaitable, Callable, List, Optional, TypeVar

from loguru import logger

from .config_loader import get_config
from .error_handler import error_message, is_fatal


T = TypeVar("T")

OnRetry = Callable[[int, BaseException], Any]


@dataclass(frozen=True)
class RetryOptions:
    """
    Configuration for one retry invocation.

    Attributes:
        retries: Total number of attempts (>= 1)
        base_delay_ms: Delay before the second attempt
        max_delay_ms: Upper bound for any single delay
        exponential: base * 2^(attempt-1) when True, base * attempt otherwise
        jitter: Add a random value in [0, base_delay_ms * 0.5)
        on_retry: Called with (attempt, error) after each retryable failure
    """
    retries: int = 2
    base_delay_ms: float = 3000
    max_delay_ms: float = 9000
    exponential: bool = True
    jitter: bool = True
    on_retry: Optional[OnRetry] = None

    def __post_init__(self) -> None:
        if self.retries < 1:
            raise ValueError(f"retries must be >= 1 (got {self.retries})")

    @classmethod
    def from_config(cls, **overrides: Any) -> "RetryOptions":
        """Build options from the `retry` config section, then apply overrides."""
        config = get_config()
        values = {
            "retries": int(config.get("retry.retries", 2)),
            "base_delay_ms": float(config.get("retry.base_delay_ms", 3000)),
            "max_delay_ms": float(config.get("retry.max_delay_ms", 9000)),
            "exponential": bool(config.get("retry.exponential", True)),
            "jitter": bool(config.get("retry.jitter", True)),
        }
        values.update(overrides)
        return cls(**values)


@dataclass
class AttemptRecord:
    """A failed attempt, kept for the final diagnostic log line."""
    attempt: int
    duration_ms: float
    message: str


def compute_delay(
    base_ms: float,
    attempt: int,
    max_ms: float,
    exponential: bool = True,
    jitter: bool = True,
) -> float:
    """
    Compute the pause after a failed attempt.

    Jitter is scaled to the base delay, not to the grown delay.

    Args:
        base_ms: Base delay in milliseconds
        attempt: 1-based number of the attempt that just failed
        max_ms: Cap for the returned delay
        exponential: Exponential (True) or linear (False) growth
        jitter: Add random jitter

    Returns:
        Delay in milliseconds, within [0, max_ms]
    """
    if exponential:
        delay = base_ms * (2 ** (attempt - 1))
    else:
        delay = base_ms * attempt

    if jitter:
        delay += random.random() * base_ms * 0.5

    return max(0.0, min(delay, max_ms))


async def sleep_ms(ms: float) -> None:
    """Suspend the current task for `ms` milliseconds."""
    await asyncio.sleep(ms / 1000)


async def _notify(callback: OnRetry, attempt: int, error: BaseException) -> None:
    try:
        result = callback(attempt, error)
        if inspect.isawaitable(result):
            await result
    except Exception as callback_error:
        logger.error(f"Retry callback error: {callback_error}")


async def retry(
    operation: Callable[[], Awaitable[T]],
    options: Optional[RetryOptions] = None,
    **overrides: Any,
) -> T:
    """
    Run an async operation until it succeeds or attempts run out.

    Args:
        operation: Zero-argument callable returning an awaitable
        options: RetryOptions; defaults apply when omitted
        **overrides: Field overrides, e.g. retry(op, retries=5)

    Returns:
        The first successful result

    Raises:
        The fatal error immediately, or the last attempt's error once all
        attempts have failed.
    """
    opts = options or RetryOptions()
    if overrides:
        opts = replace(opts, **overrides)

    history: List[AttemptRecord] = []
    last_error: Optional[BaseException] = None

    for attempt in range(1, opts.retries + 1):
        start = time.monotonic()
        try:
            result = await operation()
            if attempt > 1:
                logger.debug(f"Retry succeeded on attempt {attempt}/{opts.retries}")
            return result
        except Exception as error:
            duration_ms = (time.monotonic() - start) * 1000
            message = error_message(error)
            last_error = error

            if is_fatal(error):
                logger.error(f"Fatal error (no retry) → {message}")
                raise

            history.append(AttemptRecord(attempt, duration_ms, message))
            logger.warning(
                f"Retry attempt {attempt}/{opts.retries} failed ({duration_ms:.0f}ms)\n   → {message}"
            )

            if opts.on_retry is not None:
                await _notify(opts.on_retry, attempt, error)

            if attempt < opts.retries:
                delay = compute_delay(
                    opts.base_delay_ms,
                    attempt,
                    opts.max_delay_ms,
                    opts.exponential,
                    opts.jitter,
                )
                logger.debug(f"⏳ Waiting {delay:.0f}ms before retry {attempt + 1}...")
                await sleep_ms(delay)

    logger.error(
        f"All {opts.retries} retry attempts FAILED:\n"
        + "\n".join(
            f"   #{record.attempt} ({record.duration_ms:.0f}ms) → {record.message}"
            for record in history
        )
    )
    raise last_error


def with_retry(options: Optional[RetryOptions] = None):
    """
    Decorator adding retry logic to an `async def` function.

    Args:
        options: RetryOptions controlling the retry behavior
    """
    def decorator(func: Callable[..., Awaitable[T]]):
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            return await retry(lambda: func(*args, **kwargs), options)

        return wrapper
    return decorator


__all__ = [
    "AttemptRecord",
    "RetryOptions",
    "compute_delay",
    "retry",
    "sleep_ms",
    "with_retry",
]
