"""Romanization of non-Latin scripts through the translation service."""

import re
from typing import Optional

from ..utils.logging import get_logger, preview
from .language import base_language
from .router import LATIN, script_pair_for
from .syllables import split_japanese_syllables, split_korean_syllables

logger = get_logger(__name__)

# English words that leak into romanizations of mixed-language lines
ENGLISH_STOP_WORDS = frozenset(
    """
    the a an and or but in on at to for of with by from up about into through
    during before after above below between under again further then once
    my your his her its our their me you him she it we they
    is am are was were be been being have has had do does did
    will would shall should may might must can could
    this that these those what which who when where why how
    all each every both few more most other some such
    no not only own same so than too very
    heart love time day night way life world hand part
    uneasy easy hard good bad new old first last long great little
    """.split()
)

DOUBLED_VOWELS = re.compile(r"(aa|ii|uu|ee|oo)")

# Consonant clusters typical of each language's romanization
ROMANIZATION_SIGNATURES = {
    "ja": re.compile(r"(shi|chi|tsu|dzu|kyo|ryo|sha|cha)"),
    "ko": re.compile(r"(eo|eu|ae|kk|tt|pp|ss|jj|ng)"),
    "zh": re.compile(r"(zh|x[iu]|q[iu]|ang|ong|eng)"),
    "ru": re.compile(r"(zh|kh|ts|ch|sh|y[aeu])"),
}

_LATIN_LETTER = re.compile(r"[a-zA-Z]")
_BRACKETED = re.compile(r"\([^)]*\)|\[[^\]]*\]")
_TOKEN_PUNCTUATION = re.compile(r"[.,!?;:'\"]")


async def transliterate_text(text: str, language: Optional[str], service) -> str:
    """Romanize ``text``; the original text is returned on any failure."""
    pair = script_pair_for(language)
    if pair is None or not text.strip():
        return text

    base = base_language(language)
    try:
        if base == "ko":
            # Korean is only romanized by the translate call with a target script
            items = await service.translate([text], "ko", source_language="ko", to_script=LATIN)
            romanized = items[0].alternate_script_text if items else None
        else:
            romanized = await service.transliterate(
                text, pair.service_language, pair.from_script, pair.to_script
            )
    except Exception as e:
        logger.warning(f"Transliteration failed for {base} '{preview(text)}': {e}")
        return text

    if not romanized:
        logger.warning(f"Empty transliteration for {base} '{preview(text)}'")
        return text

    if base == "ja":
        romanized = split_japanese_syllables(romanized)
    elif base == "ko":
        romanized = split_korean_syllables(romanized)

    logger.debug(f"Transliterated {base}: '{preview(text)}' -> '{preview(romanized)}'")
    return romanized


def _keep_token(token: str, language: Optional[str]) -> bool:
    word = _TOKEN_PUNCTUATION.sub("", token).lower()
    if "-" in token or len(word) <= 2:
        return True
    if word not in ENGLISH_STOP_WORDS:
        return True
    if DOUBLED_VOWELS.search(word):
        return True
    signature = ROMANIZATION_SIGNATURES.get(base_language(language))
    return bool(signature and signature.search(word))


def clean_romanization(romanized: str, original: str, language: Optional[str] = None) -> str:
    """Drop English words a mixed-language line carried into its romanization.

    Lines written entirely in a non-Latin script are returned untouched. If
    filtering would leave nothing, the unfiltered romanization is returned.
    """
    if not _LATIN_LETTER.search(original):
        return romanized

    cleaned = _BRACKETED.sub("", romanized)
    kept = [token for token in cleaned.split() if _keep_token(token, language)]
    return " ".join(kept) or romanized
