"""
Fluent Cache Operation Builder

Wraps CacheExpander.execute with a strategy, an optional TTL override and
blind retries with exponential backoff.

Retry Policy (tenacity):
- ``with_retry(n)`` allows n + 1 attempts in total
- After failed attempt k (counted from 1) the builder sleeps
  RETRY_BASE_DELAY * 2 ** (k - 1): 0.1s, 0.2s, 0.4s, ...
- Every exception type is retried, including validation failures
- The last error is re-raised unchanged

TTL Override:
The override is handed to the expander as a per-call policy. The expander's
own policy is never touched, so it is unchanged after the call whether the
operation succeeds, fails or is cancelled.
"""

import asyncio
from collections.abc import Awaitable, Callable
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from cachekit.core.config.constants import RETRY_BACKOFF_BASE, RETRY_BASE_DELAY, Stage
from cachekit.core.exceptions import ValidationError
from cachekit.core.interfaces.feed import CacheFeed
from cachekit.core.interfaces.repository import DataRepository
from cachekit.core.logging.logger import get_logger, log_stage
from cachekit.core.strategy import CacheStrategy
from cachekit.core.ttl import FixedTtl, to_timedelta

if TYPE_CHECKING:
    from cachekit.services.cache_expander import CacheExpander

logger = get_logger(__name__)


class CacheOperationBuilder:
    """
    Fluent configuration for a single cache operation.

    Usage:
        await (
            expander.builder()
            .with_strategy(CacheStrategy.REFRESH)
            .with_ttl(timedelta(minutes=5))
            .with_retry(2)
            .execute(feeder, repository)
        )
    """

    def __init__(
        self,
        expander: "CacheExpander",
        *,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        base_delay: float = RETRY_BASE_DELAY,
    ):
        self._expander = expander
        self._strategy = CacheStrategy.REFRESH
        self._ttl_override: timedelta | None = None
        self._retries = 0
        self._sleep = sleep
        self._base_delay = base_delay
        self.attempts = 0

    def with_strategy(self, strategy: CacheStrategy | str) -> "CacheOperationBuilder":
        self._strategy = CacheStrategy.parse(strategy)
        return self

    def with_ttl(self, ttl: timedelta | int | float) -> "CacheOperationBuilder":
        """Use a fixed TTL for every write-through of this operation."""
        self._ttl_override = to_timedelta(ttl)
        return self

    def with_retry(self, retries: int) -> "CacheOperationBuilder":
        """Retry up to ``retries`` times after the first attempt."""
        if retries < 0:
            raise ValidationError(f"Retry count must not be negative, got {retries}")
        self._retries = retries
        return self

    def _log_retry(self, retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        log_stage(
            logger, Stage.RETRY, "Cache operation failed, retrying", level="warning",
            attempt=retry_state.attempt_number,
            max_attempts=self._retries + 1,
            delay_seconds=retry_state.next_action.sleep if retry_state.next_action else None,
            error_type=type(error).__name__ if error else None,
            error=str(error) if error else None,
        )

    async def execute(self, feeder: CacheFeed, repository: DataRepository) -> Any:
        """
        Run the operation with the configured strategy, TTL and retries.

        Returns:
            The resolved entity, or None

        Raises:
            The error of the last attempt, unchanged
        """
        ttl_policy = FixedTtl(self._ttl_override) if self._ttl_override is not None else None
        self.attempts = 0
        result = None

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._retries + 1),
            wait=wait_exponential(multiplier=self._base_delay, exp_base=RETRY_BACKOFF_BASE),
            retry=retry_if_exception_type(Exception),
            before_sleep=self._log_retry,
            sleep=self._sleep,
            reraise=True,
        )

        async for attempt in retrying:
            with attempt:
                self.attempts = attempt.retry_state.attempt_number
                result = await self._expander.execute(
                    feeder, repository, self._strategy, ttl_policy=ttl_policy
                )

        return result
