"""
Rate-limit-aware retry around a single synthesis call.
"""
import asyncio
import logging
import math
from typing import Awaitable, Callable, Union

from app.config import RATE_LIMIT_MESSAGE
from app.models.job import JobSpec
from app.services.synthesis_client import RateLimited, SynthesisFailure, SynthesisSuccess

logger = logging.getLogger(__name__)


class RetryPolicy:
    """
    Wraps a synthesis client with at most one retry.

    A rate-limited call waits for the server-advised delay (rounded up
    to whole seconds) and is attempted once more. A second rate limit,
    or any other failure, is final.
    """

    def __init__(self, client, sleep: Callable[[float], Awaitable[None]] = asyncio.sleep):
        self._client = client
        self._sleep = sleep

    async def execute(self, spec: JobSpec) -> Union[SynthesisSuccess, SynthesisFailure]:
        outcome = await self._client.synthesize(spec)
        if not isinstance(outcome, RateLimited):
            return outcome

        delay = math.ceil(outcome.retry_after)
        logger.info('Rate limited on voice %s, retrying in %ds', spec.voice, delay)
        await self._sleep(delay)

        outcome = await self._client.synthesize(spec)
        if isinstance(outcome, RateLimited):
            logger.warning('Rate limited again on voice %s, giving up', spec.voice)
            return SynthesisFailure(RATE_LIMIT_MESSAGE)
        return outcome
