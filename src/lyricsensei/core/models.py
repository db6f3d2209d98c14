"""Data models for the translation and pronunciation pipeline."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

UNKNOWN_LANGUAGE = "unknown"


class ScriptClass(str, Enum):
    """Routing category that decides how a language gets its phonetic guide."""

    NON_LATIN_TRANSLITERABLE = "nonLatinTransliterable"
    INDIC_ROMANIZABLE = "indicRomanizable"
    LATIN_RULED = "latinRuled"
    PASSTHROUGH = "passthrough"


@dataclass(frozen=True)
class ScriptPair:
    """Transliteration triple understood by the transliteration service."""

    service_language: str
    from_script: str
    to_script: str


@dataclass
class TranslationItem:
    """One element of a translation service response."""

    translated_text: str
    detected_language: Optional[str] = None
    alternate_script_text: Optional[str] = None


@dataclass
class PhoneticResult:
    """Translation and pronunciation guide for one lyric line."""

    original_text: str
    translated_text: str
    phonetic_guide: str
    source_language: Optional[str] = UNKNOWN_LANGUAGE

    @classmethod
    def passthrough(cls, text: str) -> "PhoneticResult":
        """Degraded result for a line that could not be processed."""
        return cls(
            original_text=text,
            translated_text=text,
            phonetic_guide=text,
            source_language=UNKNOWN_LANGUAGE,
        )

    @property
    def is_legacy(self) -> bool:
        """Entries written before source languages were recorded."""
        return not self.source_language

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "originalText": self.original_text,
            "translatedText": self.translated_text,
            "phoneticGuide": self.phonetic_guide,
        }
        if self.source_language:
            data["sourceLanguage"] = self.source_language
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PhoneticResult":
        original = data.get("originalText", "")
        return cls(
            original_text=original,
            translated_text=data.get("translatedText", original),
            phonetic_guide=data.get("phoneticGuide", ""),
            source_language=data.get("sourceLanguage"),
        )
