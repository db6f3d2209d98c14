"""Configuration settings for LyricSensei."""

import os
from pathlib import Path
from typing import Optional, Tuple

from .exceptions import ConfigError

# Directories
DEFAULT_CACHE_DIR = Path.home() / ".cache" / "lyricsensei"

# Azure Translator (can be overridden via environment variables)
AZURE_TRANSLATOR_ENDPOINT = os.getenv(
    "AZURE_TRANSLATOR_ENDPOINT", "https://api.cognitive.microsofttranslator.com"
)
AZURE_API_VERSION = "3.0"

# Generative fallback for romanized text
OPENAI_MODEL = os.getenv("LYRICSENSEI_OPENAI_MODEL", "gpt-4o-mini")
OPENAI_TEMPERATURE = 0.3
OPENAI_MAX_TOKENS = 200

# Batching and rate limiting
MAX_TEXTS_PER_REQUEST = 100  # Translator service limit per call
BATCH_SIZE = int(os.getenv("LYRICSENSEI_BATCH_SIZE", "100"))
BATCH_DELAY = float(os.getenv("LYRICSENSEI_BATCH_DELAY", "0.2"))  # seconds between batches
LINE_DELAY = float(os.getenv("LYRICSENSEI_LINE_DELAY", "0.1"))  # seconds between sequential lines
HTTP_TIMEOUT = float(os.getenv("LYRICSENSEI_HTTP_TIMEOUT", "15"))

# Language detection
DETECT_SAMPLE_CHARS = 1000
PRE_DETECT_SAMPLE_CHARS = 500
PRE_DETECTION_THRESHOLD = 3


def validate_config() -> None:
    """Validate configuration values."""
    if not (1 <= BATCH_SIZE <= MAX_TEXTS_PER_REQUEST):
        raise ConfigError(
            f"Invalid batch size {BATCH_SIZE} (must be 1-{MAX_TEXTS_PER_REQUEST})"
        )

    if BATCH_DELAY < 0 or LINE_DELAY < 0:
        raise ConfigError("Invalid delay value")

    if HTTP_TIMEOUT <= 0:
        raise ConfigError("Invalid HTTP timeout")


def get_cache_dir() -> Path:
    """Get cache directory from environment or default."""
    cache_dir = os.getenv("LYRICSENSEI_CACHE_DIR")
    if cache_dir:
        return Path(cache_dir)
    return DEFAULT_CACHE_DIR


def get_azure_credentials() -> Optional[Tuple[str, str]]:
    """Return (key, region) for Azure Translator, or None when not configured."""
    key = os.getenv("AZURE_TRANSLATOR_KEY")
    region = os.getenv("AZURE_TRANSLATOR_REGION")
    if not key or not region:
        return None
    return key, region


def get_openai_api_key() -> Optional[str]:
    """Get the OpenAI API key used by the generative fallback."""
    return os.getenv("OPENAI_API_KEY") or None


# Validate config on import
validate_config()
