"""Phonetic guides and translation recovery for Punjabi, Hindi and Urdu.

Lyrics in these languages are very often typed in Latin letters. The
translation service handles romanized input poorly, so both the guide and
the translation first try to recover the native script.
"""

import re
from typing import Optional

from ..exceptions import TranslationServiceError
from ..utils.logging import get_logger, preview
from .language import base_language
from .phonetic_rules import punjabi_to_phonetic
from .router import LATIN, NATIVE_SCRIPTS, SCRIPT_PAIRS
from .syllables import add_indic_syllables

logger = get_logger(__name__)

# Devanagari, Gurmukhi, Arabic
NATIVE_SCRIPT_CHARS = re.compile("[\u0900-\u097f\u0a00-\u0a7f\u0600-\u06ff]")

LANGUAGE_NAMES = {
    "pa": "Punjabi",
    "hi": "Hindi",
    "ur": "Urdu",
    "en": "English",
}


def has_native_script(text: str) -> bool:
    return bool(NATIVE_SCRIPT_CHARS.search(text))


async def reverse_transliterate(text: str, language: Optional[str], service) -> str:
    """Latin -> native script; the input is returned unchanged on failure."""
    base = base_language(language)
    native_script = NATIVE_SCRIPTS.get(base)
    if native_script is None or not text.strip():
        return text

    try:
        native = await service.transliterate(text, base, LATIN, native_script)
    except Exception as e:
        logger.warning(f"Reverse transliteration failed for {base} '{preview(text)}': {e}")
        return text

    if native and native != text:
        logger.debug(f"Reverse transliterated {base}: '{preview(text)}' -> '{preview(native)}'")
    return native or text


async def indic_phonetic_guide(text: str, language: Optional[str], service) -> str:
    """Diacritic romanization with syllable breaks, e.g. "te-re toṁ me-rī"."""
    base = base_language(language)
    try:
        native = await reverse_transliterate(text, base, service)
        if native != text:
            logger.debug(f"Romanized {base} line recovered as native script")

        pair = SCRIPT_PAIRS[base]
        romanized = await service.transliterate(
            native, pair.service_language, pair.from_script, pair.to_script
        )
        if not romanized:
            raise TranslationServiceError(f"Empty transliteration for {base}")
        return add_indic_syllables(romanized)

    except Exception as e:
        logger.warning(f"Indic phonetic guide failed for '{preview(text)}': {e}")
        if not has_native_script(text):
            return punjabi_to_phonetic(text)
        return text


async def recover_indic_translation(
    text: str, language: Optional[str], target: str, service, freeform=None
) -> str:
    """Second chance for a romanized line the service echoed back untranslated.

    Tries native script + an explicit source hint first, then the generative
    translator when one is configured. Returns ``text`` when nothing helps.
    """
    base = base_language(language)

    try:
        native = await reverse_transliterate(text, base, service)
        if native != text:
            items = await service.translate([native], target, source_language=base)
            translated = items[0].translated_text if items else ""
            if translated and translated.strip() not in (native.strip(), text.strip()):
                logger.info(f"Recovered {base} translation via native script: '{preview(text)}'")
                return translated
    except Exception as e:
        logger.warning(f"Native-script retranslation failed for '{preview(text)}': {e}")

    if freeform is not None:
        try:
            translated = await freeform.translate_freeform(
                text,
                LANGUAGE_NAMES.get(base, base),
                LANGUAGE_NAMES.get(base_language(target), target),
            )
        except Exception as e:
            logger.warning(f"Generative fallback failed for '{preview(text)}': {e}")
        else:
            if translated and translated.strip() != text.strip():
                logger.info(f"Recovered {base} translation via generative fallback: '{preview(text)}'")
                return translated.strip()

    return text
