"""Core pipeline modules: classification, routing, phonetic guides and caching."""

from .models import (
    UNKNOWN_LANGUAGE,
    PhoneticResult,
    ScriptClass,
    ScriptPair,
    TranslationItem,
)

__all__ = [
    "UNKNOWN_LANGUAGE",
    "PhoneticResult",
    "ScriptClass",
    "ScriptPair",
    "TranslationItem",
]
