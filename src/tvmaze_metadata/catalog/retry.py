"""Retry policy for rate-limited catalog requests.

TVmaze answers HTTP 429 when a client exceeds its request budget. The
policy re-sends such requests after a delay; every other response is
returned to the client untouched.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

import httpx

from tvmaze_metadata.config.models import RetryConfig

logger = logging.getLogger(__name__)

RATE_LIMITED = 429


class RetryPolicy:
    """Retry HTTP 429 responses a bounded number of times.

    Waits for the Retry-After header when the server sends one, otherwise
    for the configured delay. No wait exceeds max_delay_seconds.
    """

    def __init__(
        self,
        max_attempts: int = 3,
        delay_seconds: float = 2.0,
        max_delay_seconds: float = 60.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize the policy.

        Args:
            max_attempts: Total attempts per request, including the first.
            delay_seconds: Fallback delay between attempts.
            max_delay_seconds: Cap on any single wait.
            sleep: Awaitable sleep function (injected in tests).
        """
        self.max_attempts = max(1, max_attempts)
        self.delay_seconds = delay_seconds
        self.max_delay_seconds = max_delay_seconds
        self._sleep = sleep

    @classmethod
    def from_config(cls, config: RetryConfig) -> RetryPolicy:
        """Create a policy from RetryConfig."""
        return cls(
            max_attempts=config.max_attempts,
            delay_seconds=config.delay_seconds,
            max_delay_seconds=config.max_delay_seconds,
        )

    def _delay_for(self, response: httpx.Response) -> float:
        delay = self.delay_seconds
        retry_after = response.headers.get("Retry-After")
        if retry_after:
            try:
                delay = max(0.0, float(retry_after))
            except ValueError:
                pass
        return min(delay, self.max_delay_seconds)

    async def send(
        self, request: Callable[[], Awaitable[httpx.Response]]
    ) -> httpx.Response:
        """Issue a request, repeating it while it is rate limited.

        Args:
            request: Zero-argument coroutine function performing the call.

        Returns:
            The first non-429 response, or the last 429 response once
            attempts are exhausted.
        """
        attempt = 1
        while True:
            response = await request()
            if response.status_code != RATE_LIMITED or attempt >= self.max_attempts:
                return response
            delay = self._delay_for(response)
            logger.info(
                "Rate limited by catalog (attempt %d/%d), retrying in %.1fs",
                attempt,
                self.max_attempts,
                delay,
            )
            await self._sleep(delay)
            attempt += 1
