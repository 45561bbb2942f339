"""Service for executing AWS calls with automatic retries.

Implements exponential backoff with jitter for transient errors such as
throttling. Which errors count as transient is decided by a predicate
supplied per call, since each listing API has its own retryable codes.
"""

import asyncio
import logging
import random
import time
from typing import Any, Awaitable, Callable, Optional, TypeVar

from lambstock.domain.models.inventory import RetryPolicy

logger = logging.getLogger(__name__)

T = TypeVar("T")

RetryPredicate = Callable[[BaseException], bool]
SleepFunc = Callable[[float], Awaitable[Any]]


class RetryExecutor:
    """Runs async operations under a RetryPolicy."""

    def __init__(
        self,
        policy: Optional[RetryPolicy] = None,
        sleep: SleepFunc = asyncio.sleep,
        rng: Optional[random.Random] = None,
    ):
        """Initializes the RetryExecutor.

        Args:
            policy: Backoff settings. Defaults to 100ms base delay, jitter, 15 retries.
            sleep: Awaitable used to wait between attempts (injectable for tests).
            rng: Random source for jitter.
        """
        self.policy = policy or RetryPolicy()
        self._sleep = sleep
        self._rng = rng or random.Random()

        logger.debug(
            f"RetryExecutor initialized: max_retries={self.policy.max_retries}, "
            f"base_delay={self.policy.base_delay}s, jitter={self.policy.jitter}"
        )

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        is_retryable: RetryPredicate,
        endpoint_name: Optional[str] = None,
    ) -> T:
        """Executes an async operation, retrying errors the predicate accepts.

        Args:
            operation: Zero-argument callable returning an awaitable.
            is_retryable: Decides whether a raised error is worth retrying.
            endpoint_name: Name used in log messages.

        Returns:
            The result of the first successful attempt.

        Raises:
            Exception: The last error, unchanged, once it is not retryable or
                the retry budget is exhausted.
        """
        effective_endpoint = endpoint_name or getattr(operation, "__name__", "operation")
        attempt = 0

        while True:
            start_time = time.perf_counter()
            try:
                result = await operation()
            except Exception as e:
                if not is_retryable(e):
                    logger.debug(f"Non-retryable error calling {effective_endpoint} on attempt {attempt + 1}: {type(e).__name__}")
                    raise
                if attempt >= self.policy.max_retries:
                    logger.error(
                        f"Max retries ({self.policy.max_retries}) reached for {effective_endpoint}. Last error: {e}"
                    )
                    raise
                delay = self.policy.delay_for(attempt, self._rng)
                logger.warning(
                    f"Retryable error calling {effective_endpoint} on attempt "
                    f"{attempt + 1}/{self.policy.max_retries + 1}: {type(e).__name__}. "
                    f"Waiting {delay:.2f}s..."
                )
                await self._sleep(delay)
                attempt += 1
                continue

            latency_ms = (time.perf_counter() - start_time) * 1000
            logger.debug(f"{effective_endpoint} succeeded on attempt {attempt + 1} in {latency_ms:.1f}ms")
            return result
