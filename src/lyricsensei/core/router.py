"""Routing of source languages to phonetic guide strategies."""

from types import MappingProxyType
from typing import Mapping, Optional

from .models import ScriptClass, ScriptPair

LATIN = "Latn"

# Languages written in a non-Latin script, with the transliteration triple
# that brings them to Latin letters
SCRIPT_PAIRS: Mapping[str, ScriptPair] = MappingProxyType(
    {
        "ja": ScriptPair("ja", "Jpan", LATIN),
        "ko": ScriptPair("ko", "Hang", LATIN),
        "zh": ScriptPair("zh-Hans", "Hans", LATIN),
        "zh-Hans": ScriptPair("zh-Hans", "Hans", LATIN),
        "zh-Hant": ScriptPair("zh-Hant", "Hant", LATIN),
        "ar": ScriptPair("ar", "Arab", LATIN),
        "ru": ScriptPair("ru", "Cyrl", LATIN),
        "hi": ScriptPair("hi", "Deva", LATIN),
        "pa": ScriptPair("pa", "Guru", LATIN),
        "ur": ScriptPair("ur", "Arab", LATIN),
        "th": ScriptPair("th", "Thai", LATIN),
        "el": ScriptPair("el", "Grek", LATIN),
        "he": ScriptPair("he", "Hebr", LATIN),
    }
)

# Native script used when reversing a romanized Indic line
NATIVE_SCRIPTS: Mapping[str, str] = MappingProxyType(
    {"pa": "Guru", "hi": "Deva", "ur": "Arab"}
)

INDIC_LANGUAGES = frozenset({"pa", "hi", "ur"})
LATIN_RULED_LANGUAGES = frozenset({"es", "fr", "pt", "de", "sv", "zu", "xh"})

# Languages whose cached lines must carry a real phonetic guide
PHONETIC_LANGUAGES = frozenset({"es", "fr", "pt", "de", "sv", "zu", "xh", "pa", "hi"})


def route(base_lang: Optional[str]) -> ScriptClass:
    """Pick the phonetic strategy for a normalized language code.

    Indic languages are checked before the script-pair table even though
    they also appear in it: their guide goes through reverse transliteration.
    """
    if not base_lang:
        return ScriptClass.PASSTHROUGH
    if base_lang in INDIC_LANGUAGES:
        return ScriptClass.INDIC_ROMANIZABLE
    if base_lang in SCRIPT_PAIRS:
        return ScriptClass.NON_LATIN_TRANSLITERABLE
    if base_lang in LATIN_RULED_LANGUAGES:
        return ScriptClass.LATIN_RULED
    return ScriptClass.PASSTHROUGH


def script_pair_for(language: Optional[str]) -> Optional[ScriptPair]:
    """Look up the transliteration triple, full tag first and then base subtag."""
    if not language:
        return None
    pair = SCRIPT_PAIRS.get(language)
    if pair is None:
        pair = SCRIPT_PAIRS.get(language.split("-")[0].lower())
    return pair
