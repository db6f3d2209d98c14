"""Custom exceptions for LyricSensei."""

from typing import Optional


class LyricSenseiError(Exception):
    """Base exception for LyricSensei."""
    pass


class ConfigError(LyricSenseiError):
    """Invalid configuration value."""
    pass


class TranslationServiceError(LyricSenseiError):
    """Error calling an external translation/transliteration service."""

    def __init__(self, message: str, status_code: Optional[int] = None, transient: bool = False):
        super().__init__(message)
        self.status_code = status_code
        self.transient = transient

    @property
    def is_transient(self) -> bool:
        """True for network errors, rate limiting and server-side failures."""
        if self.transient or self.status_code == 429:
            return True
        return self.status_code is not None and self.status_code >= 500


class ServiceNotConfiguredError(TranslationServiceError):
    """Service credentials are missing."""
    pass


class CacheError(LyricSenseiError):
    """Error with cache operations."""
    pass
