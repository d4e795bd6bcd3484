"""
goalcache.orchestration.retry - Bounded Retry with Exponential Backoff
========================================================================

Object-storage requests fail transiently (connection resets, throttling,
5xx responses). Every archive operation therefore runs its storage call
through ``do_with_retry``, which re-attempts the call according to a
``RetryPolicy`` before giving up and raising the last error.

The policy is a plain value object and the sleep function is injectable,
so callers (and tests) can swap the backoff curve or run without real
delays:

    >>> attempts = []
    >>> async def no_sleep(delay): attempts.append(delay)
    >>> await do_with_retry(op, RetryPolicy(max_retries=2), sleep=no_sleep)

Delay Progression (default settings):
    Retry 0: ~1.0s   (1.0 * 2^0, plus up to 10% jitter)
    Retry 1: ~2.0s   (1.0 * 2^1, plus jitter)
    Retry 2: ~4.0s   (1.0 * 2^2, plus jitter)
    ...
    Retry N: capped at 60.0s (max_delay)
"""

from __future__ import annotations

import asyncio
import random
from typing import TYPE_CHECKING, Awaitable, Callable, TypeVar

import structlog
from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from goalcache.core.config import GoalCacheSettings


logger = structlog.get_logger()

T = TypeVar("T")

SleepFn = Callable[[float], Awaitable[None]]


# =============================================================================
# RetryPolicy
# =============================================================================
class RetryPolicy(BaseModel):
    """How often and how patiently to retry a failed storage request.

    The delay before retry ``attempt`` (zero-based) is:

        base  = initial_delay * (backoff_multiplier ** attempt)
        delay = min(base + uniform(0, base * jitter), max_delay)

    Attributes:
        max_retries: Retries after the first attempt. 0 disables retrying.
        initial_delay: Delay in seconds before the first retry.
        max_delay: Cap on any single delay in seconds.
        backoff_multiplier: Growth factor of the delay per retry.
        jitter: Fraction of the base delay added as random noise.

    Example:
        >>> policy = RetryPolicy(max_retries=5, initial_delay=0.5)
        >>> policy.max_attempts
        6
    """

    max_retries: int = Field(
        default=3,
        ge=0,
        le=20,
        description="Retries after the first attempt before giving up",
    )
    initial_delay: float = Field(
        default=1.0,
        ge=0,
        le=30.0,
        description="Delay in seconds before the first retry",
    )
    max_delay: float = Field(
        default=60.0,
        ge=0,
        le=300.0,
        description="Maximum delay cap in seconds",
    )
    backoff_multiplier: float = Field(
        default=2.0,
        ge=1.0,
        le=10.0,
        description="Multiplier for exponential backoff",
    )
    jitter: float = Field(
        default=0.1,
        ge=0.0,
        le=1.0,
        description="Fraction of the base delay added as random jitter",
    )

    @classmethod
    def from_settings(cls, settings: GoalCacheSettings) -> RetryPolicy:
        """Build a policy from the retry fields of the process settings."""
        return cls(
            max_retries=settings.max_retries,
            initial_delay=settings.retry_initial_delay,
            max_delay=settings.retry_max_delay,
        )

    @property
    def max_attempts(self) -> int:
        """Total number of attempts, the first one included."""
        return self.max_retries + 1

    def calculate_delay(self, attempt: int) -> float:
        """Calculate the delay before retry number ``attempt`` (zero-based).

        Args:
            attempt: 0 for the first retry, 1 for the second, and so on.

        Returns:
            Delay in seconds, never more than max_delay.
        """
        base_delay = self.initial_delay * (self.backoff_multiplier ** attempt)
        jitter = random.uniform(0, base_delay * self.jitter)
        return min(base_delay + jitter, self.max_delay)


# =============================================================================
# Retry Runner
# =============================================================================
async def do_with_retry(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    *,
    description: str = "operation",
    sleep: SleepFn = asyncio.sleep,
) -> T:
    """Run ``operation`` until it succeeds or the retry budget is spent.

    Every exception counts as a failed attempt, except cancellation, which
    propagates immediately. After the last attempt the final exception is
    raised unchanged.

    Args:
        operation: Zero-argument coroutine factory; called once per attempt.
        policy: Retry budget and backoff curve.
        description: Human-readable name of the operation for log lines.
        sleep: Awaitable used to wait between attempts.

    Returns:
        Whatever ``operation`` returns on its first successful attempt.
    """
    attempt = 0
    while True:
        try:
            return await operation()
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            if attempt >= policy.max_retries:
                logger.debug(
                    "retries_exhausted",
                    description=description,
                    attempts=attempt + 1,
                    error=str(exc),
                )
                raise
            delay = policy.calculate_delay(attempt)
            logger.warning(
                "retrying_after_failure",
                description=description,
                attempt=attempt + 1,
                max_attempts=policy.max_attempts,
                delay_seconds=round(delay, 2),
                error=str(exc),
            )
            await sleep(delay)
            attempt += 1
