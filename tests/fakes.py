"""
Test doubles shared across test modules.
"""
import asyncio
from typing import Dict, List

from app.models.job import JobSpec
from app.services.synthesis_client import SynthesisSuccess


PCM_PAYLOAD = b'\x01\x00\xff\x7f' * 25


class FakeSynthesisClient:
    """
    Scripted stand-in for SynthesisClient.

    Outcomes are queued per voice; voices without a script succeed with raw PCM.
    Tracks how many calls are in flight at once.
    """

    def __init__(self, delay: float = 0.0):
        self.delay = delay
        self.outcomes: Dict[str, List] = {}
        self.calls: List[JobSpec] = []
        self.running = 0
        self.max_running = 0

    def script(self, voice: str, *outcomes):
        self.outcomes.setdefault(voice, []).extend(outcomes)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return None

    async def synthesize(self, spec: JobSpec):
        self.calls.append(spec)
        self.running += 1
        self.max_running = max(self.max_running, self.running)
        try:
            await asyncio.sleep(self.delay)
        finally:
            self.running -= 1

        queued = self.outcomes.get(spec.voice)
        if queued:
            outcome = queued.pop(0)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome
        return SynthesisSuccess(audio=PCM_PAYLOAD, mime_type='audio/L16;codec=pcm;rate=24000')
