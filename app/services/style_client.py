"""
Clients for writing style directives with a hosted text model.
"""
import json
import logging
import re
from typing import Any, Dict, List, Optional, Sequence

import httpx

from app.config import SYNTHESIS_BASE_URL, STYLE_MODEL, REFINE_STYLE_MODEL, REQUEST_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

STYLE_COUNT = 10

SYSTEM_PROMPT = f"""You write style instructions for a text-to-speech voice actor.

Given the user's goal, return ONLY a JSON array of {STYLE_COUNT} strings, with no other text.
Each string is a style instruction under 120 words, written as flowing prose that
covers who is speaking, where, and how they deliver the lines (pace, tone, accent, energy).
Make every instruction clearly different from the others, and be specific about accents."""

REFINE_PROMPT = """You write a single style instruction for a text-to-speech voice actor.

Return ONLY the instruction as plain prose under 120 words: no labels, quotes or markdown.
Describe the speaker, the setting and the delivery (pace, tone, accent, dynamics) as one
coherent character, naming accents precisely. When the user asks for changes to an earlier
instruction, keep what they did not mention and change only what they asked for."""

CONVERSATION_ROLES = ('user', 'model')

_FENCE_START = re.compile(r'^```(?:json)?\n?')
_FENCE_END = re.compile(r'\n?```$')


class TextGenerationError(RuntimeError):
    """Raised when the text model could not produce a usable answer."""


class StyleGenerationError(TextGenerationError):
    """Raised when style directives could not be produced."""


def parse_styles(raw: str) -> List[str]:
    """
    Parse the model's reply into a list of style strings.

    Tolerates a markdown code fence around the JSON array.
    """
    cleaned = _FENCE_END.sub('', _FENCE_START.sub('', raw.strip()))
    try:
        styles = json.loads(cleaned)
    except ValueError:
        raise StyleGenerationError('Failed to parse styles from AI response')

    if not isinstance(styles, list):
        raise StyleGenerationError('Failed to parse styles from AI response')

    styles = [str(s).strip() for s in styles]
    styles = [s for s in styles if s]
    if not styles:
        raise StyleGenerationError('No styles generated')
    return styles


class TextModelClient:
    """
    Async client for one-shot generateContent calls to a text model.

    Subclasses set `error_class` so callers can tell their failures apart.
    """

    error_class = TextGenerationError

    def __init__(
        self,
        api_key: str,
        base_url: str = SYNTHESIS_BASE_URL,
        model: str = STYLE_MODEL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip('/')
        self._model = model
        self._timeout = timeout
        self._transport = transport

    async def _generate_text(
        self,
        system_prompt: str,
        contents: List[Dict[str, Any]],
        temperature: float,
        model: Optional[str] = None,
    ) -> str:
        """Send the conversation and return the first text part, or '' when there is none."""
        body = {
            'system_instruction': {'parts': [{'text': system_prompt}]},
            'contents': contents,
            'generationConfig': {
                'responseModalities': ['TEXT'],
                'temperature': temperature,
            },
        }
        url = f'{self._base_url}/models/{model or self._model}:generateContent'

        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            try:
                response = await client.post(url, json=body, headers={'x-goog-api-key': self._api_key})
            except httpx.HTTPError as e:
                logger.warning('Text model request failed: %s', e)
                raise self.error_class(f'Network error contacting text API: {e}')

        if not response.is_success:
            raise self.error_class(f'Text API error ({response.status_code}): {response.text}')

        try:
            text = response.json()['candidates'][0]['content']['parts'][0]['text']
        except (ValueError, KeyError, IndexError, TypeError):
            return ''
        return (text or '').strip()


class StyleClient(TextModelClient):
    """Asks a text model for style directives."""

    error_class = StyleGenerationError

    async def generate_styles(self, description: str) -> List[str]:
        """
        Generate diverse style directives for a description.

        Raises:
            StyleGenerationError: on blank input, API errors or unusable output
        """
        if not description or not description.strip():
            raise StyleGenerationError('description is required')

        raw = await self._generate_text(
            SYSTEM_PROMPT,
            [{'role': 'user', 'parts': [{'text': description}]}],
            temperature=1.2,
        )
        if not raw:
            raise StyleGenerationError('No styles generated')
        return parse_styles(raw)

    async def refine_style(self, description: str, history: Sequence[Dict[str, str]] = ()) -> str:
        """
        Write one style directive, continuing an earlier conversation.

        `history` holds prior turns as {'role': 'user' | 'model', 'content': ...};
        the new description is sent as the final user turn.

        Raises:
            StyleGenerationError: on blank input, unknown roles, API errors or an empty answer
        """
        if not description or not description.strip():
            raise StyleGenerationError('description is required')

        contents = []
        for turn in history:
            if turn.get('role') not in CONVERSATION_ROLES:
                raise StyleGenerationError(f"invalid conversation role: {turn.get('role')}")
            contents.append({'role': turn['role'], 'parts': [{'text': turn.get('content', '')}]})
        contents.append({'role': 'user', 'parts': [{'text': description}]})

        style = await self._generate_text(
            REFINE_PROMPT, contents, temperature=1.0, model=REFINE_STYLE_MODEL,
        )
        if not style:
            raise StyleGenerationError('No style generated')
        return style
