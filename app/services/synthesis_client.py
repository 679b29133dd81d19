"""
HTTP client for the hosted speech synthesis endpoint.

Each call performs exactly one request/response exchange and classifies
the outcome; retrying is left to the caller.
"""
import base64
import binascii
import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

import httpx

from app.config import SYNTHESIS_BASE_URL, REQUEST_TIMEOUT_SECONDS, DEFAULT_RETRY_DELAY_SECONDS
from app.models.job import JobSpec

logger = logging.getLogger(__name__)

_DURATION_RE = re.compile(r'^\s*(\d+(?:\.\d+)?)\s*s?\s*$')


@dataclass(frozen=True)
class SynthesisSuccess:
    """Audio returned by the API, with the container type it reported."""
    audio: bytes
    mime_type: Optional[str] = None


@dataclass(frozen=True)
class RateLimited:
    """The API asked us to back off for retry_after seconds."""
    retry_after: float = DEFAULT_RETRY_DELAY_SECONDS


@dataclass(frozen=True)
class SynthesisFailure:
    """Any other error; reason is suitable for showing to the user."""
    reason: str


SynthesisOutcome = Union[SynthesisSuccess, RateLimited, SynthesisFailure]


def resolve_style_directive(spec: JobSpec) -> Optional[str]:
    """Custom style wins over the style tag; blank values count as absent."""
    if spec.custom_style and spec.custom_style.strip():
        return spec.custom_style
    if spec.style_tag and spec.style_tag.strip():
        return spec.style_tag
    return None


def build_prompt(spec: JobSpec) -> str:
    # The 'Say:' prefix keeps the model from answering the text instead of speaking it
    directive = resolve_style_directive(spec)
    if directive:
        return f'{directive}: {spec.text}'
    return f'Say: {spec.text}'


def _parse_duration(value: Any) -> Optional[float]:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        seconds = float(value)
    elif isinstance(value, str):
        match = _DURATION_RE.match(value)
        if not match:
            return None
        seconds = float(match.group(1))
    else:
        return None
    # JSON Infinity and NaN, or digit strings too long for a float
    if not math.isfinite(seconds) or seconds < 0:
        return None
    return seconds


def parse_retry_delay(payload: Any, headers: Optional[Mapping[str, str]] = None) -> float:
    """
    Extract the server-advised retry delay in seconds.

    Looks for a 'retryDelay' duration (e.g. '36s') in the error details,
    then a Retry-After header, and falls back to the default delay.
    """
    error = payload.get('error') if isinstance(payload, dict) else None
    details = error.get('details') if isinstance(error, dict) else None
    if isinstance(details, list):
        for detail in details:
            if isinstance(detail, dict) and 'retryDelay' in detail:
                delay = _parse_duration(detail['retryDelay'])
                if delay is not None:
                    return delay

    if headers is not None:
        delay = _parse_duration(headers.get('retry-after'))
        if delay is not None:
            return delay

    return float(DEFAULT_RETRY_DELAY_SECONDS)


def extract_audio(payload: Any) -> SynthesisOutcome:
    """Pull the first inline audio part out of a generateContent response."""
    try:
        parts = payload['candidates'][0]['content']['parts']
    except (KeyError, IndexError, TypeError):
        return SynthesisFailure('No audio returned from API')

    for part in parts or []:
        inline_data = part.get('inlineData') if isinstance(part, dict) else None
        if not isinstance(inline_data, dict) or not inline_data.get('data'):
            continue
        try:
            audio = base64.b64decode(inline_data['data'], validate=True)
        except (binascii.Error, ValueError, TypeError):
            return SynthesisFailure('Malformed audio payload returned from API')
        return SynthesisSuccess(audio=audio, mime_type=inline_data.get('mimeType'))

    return SynthesisFailure('No audio returned from API')


class SynthesisClient:
    """
    Async client for the speech synthesis endpoint.

    Usage:
        async with SynthesisClient(api_key) as client:
            outcome = await client.synthesize(spec)
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = SYNTHESIS_BASE_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip('/')
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def start(self):
        """Create the underlying httpx.AsyncClient."""
        self._client = httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    async def close(self):
        """Close the httpx client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    def _request_body(self, spec: JobSpec) -> dict:
        return {
            'contents': [{'role': 'user', 'parts': [{'text': build_prompt(spec)}]}],
            'generationConfig': {
                'responseModalities': ['AUDIO'],
                'speechConfig': {
                    'voiceConfig': {
                        'prebuiltVoiceConfig': {'voiceName': spec.voice},
                    },
                },
            },
        }

    async def synthesize(self, spec: JobSpec) -> SynthesisOutcome:
        """Perform one synthesis request for a job spec."""
        if self._client is None:
            raise RuntimeError('SynthesisClient not started')

        url = f'{self._base_url}/models/{spec.model}:generateContent'
        try:
            response = await self._client.post(
                url,
                json=self._request_body(spec),
                headers={'x-goog-api-key': self._api_key},
            )
        except httpx.HTTPError as e:
            logger.warning('Synthesis request for voice %s failed: %s', spec.voice, e)
            return SynthesisFailure(f'Network error contacting synthesis API: {e}')

        if response.status_code == 429:
            try:
                payload = response.json()
            except ValueError:
                payload = None
            return RateLimited(retry_after=parse_retry_delay(payload, response.headers))

        if not response.is_success:
            return SynthesisFailure(f'Synthesis API error ({response.status_code}): {response.text}')

        try:
            payload = response.json()
        except ValueError:
            return SynthesisFailure('Malformed response from synthesis API')

        return extract_audio(payload)
