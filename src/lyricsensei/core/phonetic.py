"""Dispatch of a lyric line to the phonetic strategy for its language."""

from typing import Optional

from ..utils.logging import get_logger, preview
from .indic import indic_phonetic_guide
from .language import base_language
from .models import ScriptClass
from .phonetic_rules import to_phonetic
from .router import route
from .transliteration import clean_romanization, transliterate_text

logger = get_logger(__name__)


async def generate_phonetic_guide(text: str, source_language: Optional[str], service) -> str:
    """Pronunciation guide for ``text``; the text itself when nothing applies.

    ``source_language`` may be a full tag ("zh-Hant"); the script table is
    consulted with it before falling back to the base subtag.
    """
    base = base_language(source_language)
    strategy = route(base)
    logger.debug(f"Phonetic guide for {source_language} ({strategy.value}): '{preview(text)}'")

    try:
        if strategy is ScriptClass.INDIC_ROMANIZABLE:
            return await indic_phonetic_guide(text, base, service)
        if strategy is ScriptClass.NON_LATIN_TRANSLITERABLE:
            romanized = await transliterate_text(text, source_language, service)
            return clean_romanization(romanized, text, base)
        if strategy is ScriptClass.LATIN_RULED:
            return to_phonetic(text, base)
    except Exception as e:
        logger.error(f"Phonetic guide failed for '{preview(text)}': {e}")
    return text
