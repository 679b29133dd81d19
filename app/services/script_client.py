"""
Adds inline performance tags to a script without changing its words.
"""
from typing import Optional

from app.services.style_client import TextGenerationError, TextModelClient

UPGRADE_PROMPT = """You prepare short scripts for a text-to-speech voice by adding inline tags.

Never change, add or remove any of the script's words. Only insert tags in square
brackets directly before the sentence they affect, e.g. [excited], [whispers], [pause],
[slow and deliberate], [PAUSE=1s] or a short stage direction like [as if sharing a secret].

Tag roughly every two or three lines and at most once per sentence. Build contrast:
a quiet setup, rising momentum, a [pause] before the biggest line, and an untagged
closing call to action. Use CAPS inside the text for single-word emphasis.

Return only the tagged script as plain text."""


class ScriptUpgradeError(TextGenerationError):
    """Raised when a script could not be tagged."""


def build_upgrade_prompt(script: str, style: Optional[str] = None) -> str:
    if style and style.strip():
        return (
            f'The TTS style instruction that will be used is:\n"{style.strip()}"\n\n'
            f'Tag this script to work best with that style:\n\n{script}'
        )
    return f'Tag this script:\n\n{script}'


class ScriptClient(TextModelClient):
    """Asks a text model to tag a script for more natural delivery."""

    error_class = ScriptUpgradeError

    async def upgrade_script(self, script: str, style: Optional[str] = None) -> str:
        """
        Return the script with inline performance tags added.

        Raises:
            ScriptUpgradeError: on a blank script, API errors or an empty answer
        """
        if not script or not script.strip():
            raise ScriptUpgradeError('script is required')

        tagged = await self._generate_text(
            UPGRADE_PROMPT,
            [{'role': 'user', 'parts': [{'text': build_upgrade_prompt(script, style)}]}],
            temperature=0.7,
        )
        if not tagged:
            raise ScriptUpgradeError('No tagged script returned')
        return tagged
