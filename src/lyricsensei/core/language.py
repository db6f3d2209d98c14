"""Language classification for lyric text.

The translation service's detector reliably mistakes romanized Punjabi for
Albanian. Regex signatures of common romanized vocabulary are used both
before calling the service and to correct its answer afterwards.
"""

import re
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from ..config import DETECT_SAMPLE_CHARS, PRE_DETECT_SAMPLE_CHARS, PRE_DETECTION_THRESHOLD
from ..utils.logging import get_logger, preview
from .models import UNKNOWN_LANGUAGE

logger = get_logger(__name__)

# Signatures of romanized languages the detector gets wrong
LANGUAGE_SIGNATURES: Mapping[str, Tuple[re.Pattern, ...]] = MappingProxyType(
    {
        "pa": (
            # function words
            re.compile(r"\b(tere|tera|meri|mera|naa|ton|da|di|de|te|hai|hain|nahi|koi|kya)\b"),
            # pronouns
            re.compile(r"\b(main|tu|tum|aap|hum|woh|yeh)\b"),
            # common lyric vocabulary
            re.compile(r"\b(pyaar|dil|nazar|hasdi|rehna|kare|karan|jaan)\b"),
            # aspirated consonants
            re.compile(r"(kh|gh|dh|th|bh|ph)\w"),
            # plural endings
            re.compile(r"\w+(aan|iyan|diyan|giyan)\b"),
        ),
    }
)

# Detections known to be confused with a romanized language
CONFUSABLE_DETECTIONS = frozenset({"sq"})


def base_language(code: Optional[str]) -> str:
    """Reduce a language tag to its lowercase base subtag ("pa-Latn" -> "pa")."""
    if not code:
        return UNKNOWN_LANGUAGE
    base = code.strip().split("-")[0].split("_")[0].lower()
    return base or UNKNOWN_LANGUAGE


def _score(sample: str, patterns: Tuple[re.Pattern, ...]) -> int:
    return sum(len(pattern.findall(sample)) for pattern in patterns)


def pre_detect(text: Optional[str]) -> Optional[str]:
    """Return a language code when the signatures match confidently, else None."""
    if not text:
        return None
    sample = text[:PRE_DETECT_SAMPLE_CHARS].lower()

    best_language, best_score = None, 0
    for language, patterns in LANGUAGE_SIGNATURES.items():
        score = _score(sample, patterns)
        if score > best_score:
            best_language, best_score = language, score

    if best_language and best_score >= PRE_DETECTION_THRESHOLD:
        logger.debug(f"Pre-detected {best_language} (score {best_score}) for '{preview(text)}'")
        return best_language
    return None


def correct_detection(text: Optional[str], detected: Optional[str]) -> str:
    """Override a detection that is known to be confused with romanized text.

    Only detections in the confusable set are re-checked, so a confident
    external answer is never replaced and correcting twice changes nothing.
    """
    normalized = base_language(detected)
    if normalized not in CONFUSABLE_DETECTIONS:
        return normalized

    corrected = pre_detect(text)
    if corrected:
        logger.info(f"Corrected detection {normalized} -> {corrected} for '{preview(text)}'")
        return corrected
    return normalized


async def detect_language(text: Optional[str], service) -> str:
    """Best-effort language of a whole text; "unknown" when nothing works."""
    if not text or not text.strip():
        return UNKNOWN_LANGUAGE

    pre_detected = pre_detect(text)
    if pre_detected:
        return pre_detected

    try:
        detected = await service.detect(text[:DETECT_SAMPLE_CHARS])
    except Exception as e:
        logger.warning(f"Language detection failed: {e}")
        return UNKNOWN_LANGUAGE

    return correct_detection(text, detected)
