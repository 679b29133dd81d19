"""
Application configuration and paths.
"""
import os
from pathlib import Path

# Application identity
APP_NAME = 'Chorus'
APP_VERSION = '0.1.0'

# Server configuration
SERVER_HOST = '127.0.0.1'
SERVER_PORT = 5111

# Application Support directory (macOS standard)
APP_SUPPORT_DIR = Path.home() / 'Library' / 'Application Support' / APP_NAME

# Database configuration
DATABASE_PATH = APP_SUPPORT_DIR / 'history.db'
DATABASE_URL = f'sqlite+aiosqlite:///{DATABASE_PATH}'

# Hosted synthesis API
API_KEY_ENV_VAR = 'GOOGLE_API_KEY'
SYNTHESIS_BASE_URL = 'https://generativelanguage.googleapis.com/v1beta'
STYLE_MODEL = 'gemini-3-flash-preview'
REFINE_STYLE_MODEL = 'gemini-2.5-flash'
REQUEST_TIMEOUT_SECONDS = 120.0

# Batch limits
MAX_TEXT_BYTES = 4000
MAX_CONCURRENT_JOBS = 5

# Rate limiting
DEFAULT_RETRY_DELAY_SECONDS = 10
RATE_LIMIT_MESSAGE = 'rate limit exceeded, try again shortly'

# Raw audio returned by the synthesis API: 24kHz, 16-bit, mono
PCM_SAMPLE_RATE = 24000
PCM_CHANNELS = 1
PCM_SAMPLE_WIDTH = 2


class ConfigurationError(RuntimeError):
    """Raised when required process configuration is missing."""


def get_api_key() -> str:
    """
    Return the synthesis API key from the environment.

    Raises:
        ConfigurationError: if the key is unset or blank
    """
    api_key = os.environ.get(API_KEY_ENV_VAR, '').strip()
    if not api_key:
        raise ConfigurationError('API key not configured')
    return api_key


def ensure_directories():
    """Create required directories if they don't exist."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
