"""Unit tests for the 429 retry policy."""

from unittest.mock import AsyncMock

import httpx
import pytest

from tvmaze_metadata.catalog.retry import RetryPolicy
from tvmaze_metadata.config.models import RetryConfig


def responder(*responses: httpx.Response) -> AsyncMock:
    """Async request callable returning the given responses in order."""
    return AsyncMock(side_effect=list(responses))


class TestRetryPolicy:
    """Tests for RetryPolicy.send."""

    @pytest.mark.asyncio
    async def test_success_not_retried(self):
        sleep = AsyncMock()
        request = responder(httpx.Response(200))
        response = await RetryPolicy(sleep=sleep).send(request)

        assert response.status_code == 200
        assert request.await_count == 1
        sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_other_errors_not_retried(self):
        request = responder(httpx.Response(503))
        response = await RetryPolicy(sleep=AsyncMock()).send(request)
        assert response.status_code == 503
        assert request.await_count == 1

    @pytest.mark.asyncio
    async def test_retries_rate_limited(self):
        sleep = AsyncMock()
        request = responder(httpx.Response(429), httpx.Response(200))
        response = await RetryPolicy(delay_seconds=1.5, sleep=sleep).send(request)

        assert response.status_code == 200
        sleep.assert_awaited_once_with(1.5)

    @pytest.mark.asyncio
    async def test_honours_retry_after(self):
        sleep = AsyncMock()
        request = responder(
            httpx.Response(429, headers={"Retry-After": "7"}), httpx.Response(200)
        )
        await RetryPolicy(sleep=sleep).send(request)
        sleep.assert_awaited_once_with(7.0)

    @pytest.mark.asyncio
    async def test_retry_after_capped_at_max_delay(self):
        sleep = AsyncMock()
        request = responder(
            httpx.Response(429, headers={"Retry-After": "3600"}), httpx.Response(200)
        )
        await RetryPolicy(max_delay_seconds=60, sleep=sleep).send(request)
        sleep.assert_awaited_once_with(60)

    @pytest.mark.asyncio
    async def test_invalid_retry_after_uses_delay(self):
        sleep = AsyncMock()
        request = responder(
            httpx.Response(429, headers={"Retry-After": "later"}),
            httpx.Response(200),
        )
        await RetryPolicy(delay_seconds=3, sleep=sleep).send(request)
        sleep.assert_awaited_once_with(3)

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self):
        sleep = AsyncMock()
        request = responder(*(httpx.Response(429) for _ in range(3)))
        response = await RetryPolicy(max_attempts=3, sleep=sleep).send(request)

        assert response.status_code == 429
        assert request.await_count == 3
        assert sleep.await_count == 2

    def test_from_config(self):
        policy = RetryPolicy.from_config(RetryConfig(max_attempts=5, delay_seconds=0.2))
        assert policy.max_attempts == 5
        assert policy.delay_seconds == 0.2
        assert policy.max_delay_seconds == 60.0

    def test_from_config_max_delay(self):
        policy = RetryPolicy.from_config(RetryConfig(max_delay_seconds=5))
        assert policy.max_delay_seconds == 5
