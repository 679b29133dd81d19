"""
Retry Policy Tests

Tests for the single rate-limit retry around a synthesis call.
"""
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.models.job import JobSpec
from app.services.retry_policy import RetryPolicy
from app.services.synthesis_client import RateLimited, SynthesisFailure, SynthesisSuccess

SPEC = JobSpec(voice='Puck', model='gemini-2.5-flash-tts', text='Hello world')
SUCCESS = SynthesisSuccess(audio=b'\x00\x00', mime_type=None)


def make_policy(*outcomes):
    client = MagicMock()
    client.synthesize = AsyncMock(side_effect=list(outcomes))
    sleep = AsyncMock(return_value=None)
    return RetryPolicy(client, sleep=sleep), client, sleep


class TestRetryPolicy:

    @pytest.mark.asyncio
    async def test_success_without_retry(self):
        policy, client, sleep = make_policy(SUCCESS)

        assert await policy.execute(SPEC) == SUCCESS
        assert client.synthesize.await_count == 1
        sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rate_limited_then_success(self):
        """Test a rate limit waits the advised delay, rounded up, then retries once."""
        policy, client, sleep = make_policy(RateLimited(retry_after=2.3), SUCCESS)

        assert await policy.execute(SPEC) == SUCCESS
        assert client.synthesize.await_count == 2
        sleep.assert_awaited_once_with(3)

    @pytest.mark.asyncio
    async def test_rate_limited_twice_fails_with_fixed_message(self):
        policy, client, sleep = make_policy(RateLimited(retry_after=10), RateLimited(retry_after=10))

        outcome = await policy.execute(SPEC)

        assert outcome == SynthesisFailure('rate limit exceeded, try again shortly')
        assert client.synthesize.await_count == 2
        sleep.assert_awaited_once_with(10)

    @pytest.mark.asyncio
    async def test_failure_is_not_retried(self):
        policy, client, sleep = make_policy(SynthesisFailure('Synthesis API error (500): boom'))

        outcome = await policy.execute(SPEC)

        assert outcome == SynthesisFailure('Synthesis API error (500): boom')
        assert client.synthesize.await_count == 1
        sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failure_after_rate_limit_keeps_upstream_text(self):
        policy, client, sleep = make_policy(RateLimited(retry_after=1), SynthesisFailure('upstream'))

        assert await policy.execute(SPEC) == SynthesisFailure('upstream')
        assert client.synthesize.await_count == 2
