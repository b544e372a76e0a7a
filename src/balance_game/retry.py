"""Bounded exponential-backoff retry around a single HTTP call."""

import asyncio
import random
from collections.abc import Awaitable, Callable

import httpx
from fastapi import status

from balance_game.config import settings
from balance_game.observability import get_logger

logger = get_logger(__name__)

# Rate limited, service unavailable
TRANSIENT_STATUS_CODES = frozenset({status.HTTP_429_TOO_MANY_REQUESTS, status.HTTP_503_SERVICE_UNAVAILABLE})


class BackoffRetryExecutor:
    """Retry an async HTTP action on transient failures.

    An attempt is retried when the action raises one of ``retry_on`` or
    returns a response with a transient status code. The wait before retry
    ``n`` (0-based) is ``base_delay * 2**n`` plus up to ``max_jitter``
    seconds of random jitter. Any other response is returned at once.

    Exhausting every attempt returns ``None``: callers treat it as
    "generation unavailable". There is no cancellation beyond the attempt
    budget, so wrap the call in ``asyncio.timeout`` for bounded latency.

    Example:
        ```python
        executor = BackoffRetryExecutor(max_attempts=3)
        response = await executor.call(lambda: client.post(url, json=body))
        if response is None:
            ...
        ```
    """

    def __init__(
        self,
        max_attempts: int | None = None,
        base_delay: float | None = None,
        max_jitter: float | None = None,
        transient_statuses: frozenset[int] = TRANSIENT_STATUS_CODES,
        retry_on: tuple[type[BaseException], ...] = (httpx.TransportError,),
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        rng: Callable[[], float] = random.random,
    ) -> None:
        """Initialize the executor.

        Args:
            max_attempts: Total attempts including the first. Defaults to settings.
            base_delay: Delay before the first retry, in seconds. Defaults to settings.
            max_jitter: Upper bound of the random extra delay. Defaults to settings.
            transient_statuses: Response codes that are retried.
            retry_on: Exception types treated as network failures.
            sleep: Awaitable sleep, replaceable in tests.
            rng: Source of uniform [0, 1) values for the jitter.
        """
        self._max_attempts = max_attempts if max_attempts is not None else settings.llm_max_attempts
        self._base_delay = base_delay if base_delay is not None else settings.llm_backoff_base
        self._max_jitter = max_jitter if max_jitter is not None else settings.llm_backoff_jitter
        self._transient_statuses = transient_statuses
        self._retry_on = retry_on
        self._sleep = sleep
        self._rng = rng

        if self._max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    def backoff_delay(self, attempt: int) -> float:
        """Seconds to wait after the given 0-based failed attempt."""
        return self._base_delay * (2**attempt) + self._rng() * self._max_jitter

    async def call(self, action: Callable[[], Awaitable[httpx.Response]]) -> httpx.Response | None:
        """Run the action until it yields a non-transient response.

        Args:
            action: Zero-argument coroutine factory performing one request

        Returns:
            The first non-transient response, or None once attempts run out
        """
        for attempt in range(self._max_attempts):
            try:
                response = await action()
            except self._retry_on as e:
                outcome = f"{type(e).__name__}: {e}"
            else:
                if response.status_code not in self._transient_statuses:
                    return response
                outcome = f"HTTP {response.status_code}"

            if attempt + 1 >= self._max_attempts:
                logger.error(
                    "Giving up after transient failures",
                    attempts=self._max_attempts,
                    last_outcome=outcome,
                )
                break

            delay = self.backoff_delay(attempt)
            logger.warning(
                "Transient failure, retrying",
                attempt=attempt + 1,
                max_attempts=self._max_attempts,
                outcome=outcome,
                delay=round(delay, 2),
            )
            await self._sleep(delay)

        return None


async def call_with_retry(
    action: Callable[[], Awaitable[httpx.Response]],
    max_attempts: int,
) -> httpx.Response | None:
    """Run an action through a default-configured executor."""
    return await BackoffRetryExecutor(max_attempts=max_attempts).call(action)
