"""Rule-based English-friendly pronunciation for Latin-script languages.

Each language is a ``RuleTable``: an ordered list of regex rewrites run by a
single interpreter. A *sealing* rule swaps its match for a Private Use Area
placeholder so that later rules cannot rewrite the phonetic spelling it
produced; placeholders are turned back into text once all rules have run.
A non-sealing rule is a plain rewrite whose output later rules still see.

Example: "Hola" (es) -> "oh-lah", "Bonjour" (fr) -> "bon-zhoor"
"""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple

from ..utils.logging import get_logger, preview
from .syllables import VOWEL_SOUNDS, syllabify

logger = get_logger(__name__)

PLACEHOLDER_BASE = 0xE000
_RESERVED = re.compile("[\ue000-\uf8ff]")


@dataclass(frozen=True)
class Rule:
    pattern: str
    replacement: str
    seal: bool = True


class RuleTable:
    """Compiled rule set for one language."""

    def __init__(
        self,
        name: str,
        rules: Iterable[Rule],
        cleanup: Iterable[Rule] = (),
        lowercase: bool = True,
        syllabify: bool = True,
        flags: int = 0,
    ):
        self.name = name
        self.lowercase = lowercase
        self.syllabify = syllabify

        placeholders: Dict[str, str] = {}
        self._steps = []
        for rule in rules:
            replacement = rule.replacement
            if rule.seal:
                if replacement not in placeholders:
                    placeholders[replacement] = chr(PLACEHOLDER_BASE + len(placeholders))
                replacement = placeholders[replacement]
            self._steps.append((re.compile(rule.pattern, flags), replacement))

        self._restore = {ord(char): text for text, char in placeholders.items()}
        self._cleanup = [(re.compile(r.pattern, flags), r.replacement) for r in cleanup]

    def apply(self, text: str) -> str:
        phonetic = text.lower() if self.lowercase else text
        phonetic = _RESERVED.sub("", phonetic)

        for pattern, replacement in self._steps:
            phonetic = pattern.sub(replacement, phonetic)

        phonetic = phonetic.translate(self._restore)

        for pattern, replacement in self._cleanup:
            phonetic = pattern.sub(replacement, phonetic)

        phonetic = " ".join(phonetic.split())
        if self.syllabify:
            phonetic = syllabify(phonetic)
        return phonetic

    def __repr__(self) -> str:
        return f"RuleTable({self.name!r}, {len(self._steps)} rules)"


def _rules(*pairs: Tuple[str, str]) -> Tuple[Rule, ...]:
    return tuple(Rule(pattern, replacement) for pattern, replacement in pairs)


# ----------------------
# Spanish
# ----------------------
SPANISH = RuleTable(
    "es",
    _rules(("ch", "ch"), ("ll", "y"), ("rr", "rr"), ("ñ", "ny"))
    + (Rule("h", "", seal=False),)
    + _rules(
        # silent u after q/g, pronounced ü
        ("que", "keh"), ("qui", "kee"),
        ("gue", "geh"), ("gui", "gee"),
        ("güe", "gweh"), ("güi", "gwee"),
        # soft c and g
        ("ce", "seh"), ("ci", "see"),
        ("ge", "heh"), ("gi", "hee"),
        ("ve", "veh"), ("vi", "vee"), ("v", "b"),
        ("z", "s"),
        ("j", "h"),
        # "y" meaning "and"
        (r"(?<!\S)y(?!\S)", "ee"),
        ("x", "ks"),
        # diphthongs
        ("ai", "ay"), ("ay", "ay"), ("ei", "ay"), ("ey", "ay"),
        ("oi", "oy"), ("oy", "oy"), ("au", "ow"), ("eu", "ehoo"),
        ("ue", "weh"), ("ua", "wah"), ("uo", "woh"),
        ("ie", "yeh"), ("ia", "yah"), ("io", "yoh"),
        # vowels; accents only mark stress
        ("á", "ah"), ("a", "ah"),
        ("é", "eh"), ("e", "eh"),
        ("í", "ee"), ("i", "ee"),
        ("ó", "oh"), ("o", "oh"),
        ("ú", "oo"), ("ü", "oo"), ("u", "oo"),
    ),
)

# ----------------------
# French
# ----------------------
FRENCH = RuleTable(
    "fr",
    (Rule("['’]", "", seal=False),)
    + _rules(
        # nasal vowels
        ("ain", "ahn"), ("ein", "ahn"), ("ien", "yan"),
        ("an", "ahn"), ("en", "ahn"),
        ("in", "an"), ("un", "an"),
        ("on", "on"),
        # vowel combinations
        ("eau", "oh"), ("au", "oh"),
        ("oi", "wah"), ("ou", "oo"),
        ("eu", "uh"), ("œu", "uh"),
        ("ai", "eh"), ("ei", "eh"),
        # consonants
        ("ch", "sh"), ("gn", "ny"), ("qu", "k"), ("ç", "s"),
        ("j", "zh"), ("ge", "zheh"), ("gi", "zhee"),
        ("ce", "seh"), ("ci", "see"),
        # accented vowels
        ("é", "ay"), ("è", "eh"), ("ê", "eh"), ("ë", "eh"),
        ("à", "ah"), ("â", "ah"), ("ô", "oh"),
        ("î", "ee"), ("ï", "ee"),
        ("ù", "oo"), ("û", "oo"), ("ü", "oo"),
        ("a", "ah"), ("e", "uh"), ("i", "ee"), ("o", "oh"), ("u", "oo"), ("y", "ee"),
    ),
    cleanup=(
        # mostly silent final e
        Rule(r"muh(?=\s|$)", "m", seal=False),
        Rule(r"ehm(?=\s|$)", "em", seal=False),
        Rule(r"([st])uh(?=\s|$)", r"\1", seal=False),
        Rule(r"ht\b", "t", seal=False),
        Rule(r"nkt\b", "nk", seal=False),
        Rule(r"st(?=\s|$)", "s", seal=False),
    ),
)

# ----------------------
# Portuguese (Brazilian)
# ----------------------
_PT_VOWELS = "aeiouáéíóúâêôãõ"
_PT_NOT_VOWEL = rf"[^{_PT_VOWELS}\ue000-\uf8ff]"

PORTUGUESE = RuleTable(
    "pt",
    _rules(("nh", "ny"), ("lh", "ly"), ("ch", "sh"))
    + (Rule("h", "", seal=False),)
    + _rules(
        # nasal vowels
        ("ãe", "ayn"), ("ão", "own"), ("õe", "oyn"), ("ã", "an"), ("õ", "on"),
        (r"em(?=\s|$|[^aeiouáéíóú])", "ayn"),
        (r"en(?=[dts])", "ayn"),
        (r"en(?=\s|$)", "ayn"),
        (r"im(?=\s|$)", "een"), (r"in(?=\s|$)", "een"),
        (r"om(?=\s|$)", "own"), (r"on(?=\s|$)", "own"),
        (r"um(?=\s|$)", "oon"), (r"un(?=\s|$)", "oon"),
        ("ç", "s"),
        # x: sh at word start and after consonants, ks elsewhere
        (r"(?<!\S)x", "sh"),
        (rf"(?<={_PT_NOT_VOWEL})x", "sh"),
        (r"ex(?=[aeiou])", "ehsh"),
        ("x", "ks"),
        # strong r at word start, h before consonants and at word end
        ("rr", "rr"),
        (r"(?<!\S)r", "rr"),
        (r"r(?=\s|$)", "h"),
        (rf"r(?={_PT_NOT_VOWEL})", "h"),
        ("j", "zh"),
        ("cê", "say"), ("cé", "seh"), ("ce", "seh"), ("cí", "see"), ("ci", "see"),
        ("ge", "zheh"), ("gi", "zhee"),
        ("que", "keh"), ("qui", "kee"), ("qua", "kwah"), ("quo", "kwoh"),
        ("gue", "geh"), ("gui", "gee"), ("gua", "gwah"), ("guo", "gwoh"),
        # diphthongs
        ("ai", "ay"), ("ei", "ay"), ("oi", "oy"), ("ou", "oh"),
        ("au", "ow"), ("eu", "ehoo"), ("iu", "yoo"), ("ui", "wee"),
        ("á", "ah"), ("â", "an"), ("à", "ah"),
        ("é", "eh"), ("ê", "ay"), ("í", "ee"),
        ("ó", "aw"), ("ô", "oh"), ("ú", "oo"),
        # reduced final vowels
        (r"e(?=\s|$)", "ee"), (r"o(?=\s|$)", "oo"),
        ("a", "ah"), ("e", "eh"), ("i", "ee"), ("o", "oh"), ("u", "oo"),
    ),
)

# ----------------------
# German
# ----------------------
GERMAN = RuleTable(
    "de",
    _rules(
        (r"\bund\b", "unt"), (r"\bauf\b", "off"),
        (r"\bich\b", "ish"), (r"\bmich\b", "mish"), (r"\bdich\b", "dish"),
        (r"\bnicht\b", "nisht"), (r"\bist\b", "ist"),
        (r"\bwie\b", "vee"), (r"\bfür\b", "foor"),
        ("äu", "oy"),
        ("ä", "eh"), ("ö", "uh"), ("ü", "oo"),
    )
    + (Rule("ß", "ss", seal=False),)
    + _rules(
        ("ei", "eye"), ("ie", "ee"), ("eu", "oy"), ("au", "ow"),
        ("sch", "sh"),
        (r"\bst", "st"), (r"\bsp", "sp"),
        ("ch", "h"),
    )
    + (
        Rule(r"\bv", "f", seal=False),
        Rule("w", "v", seal=False),
        Rule("z", "ts", seal=False),
        Rule("j", "y", seal=False),
    )
    + _rules(("a", "ah"), ("e", "eh"), ("i", "ee"), ("o", "oh"), ("u", "oo")),
    cleanup=(
        Rule(r"ht\b", "t", seal=False),
        Rule(r"dt\b", "t", seal=False),
    ),
)

# ----------------------
# Swedish
# ----------------------
SWEDISH = RuleTable(
    "sv",
    _rules(
        (r"\boch\b", "oh"), (r"\bär\b", "ehr"), (r"\bjag\b", "yahg"),
        (r"\bsom\b", "sohm"), (r"\bmed\b", "meh"), (r"\bför\b", "fur"),
        (r"\bett\b", "et"), (r"\bden\b", "den"), (r"\bdet\b", "det"),
        # soft k, before the front vowels are rewritten
        (r"k(?=[eiyäö])", "sh"),
        ("å", "oh"), ("ä", "eh"), ("ö", "uh"),
        ("skj", "sh"), ("stj", "sh"), ("sch", "sh"), ("sj", "sh"),
        ("tj", "ch"), ("kj", "ch"), ("dj", "y"),
        (r"tion\b", "shun"), (r"sion\b", "shun"),
        (r"lig\b", "lee"), (r"dig\b", "dee"), (r"ig\b", "ee"),
        ("j", "y"),
        ("a", "ah"), ("e", "eh"), ("i", "ee"), ("o", "oh"), ("u", "oo"), ("y", "ee"),
    ),
)

# ----------------------
# Zulu / Xhosa
# ----------------------
ZULU = RuleTable(
    "zu",
    # apostrophes mark a dropped vowel: S'hamba, ng'
    (Rule(r"([sn])'", r"\1", seal=False),)
    + _rules(
        ("hl", "hl"), ("dl", "dl"), ("sh", "sh"), ("th", "th"), (r"\bng", "ng"),
        ("a", "ah"), ("e", "eh"), ("i", "ee"), ("o", "oh"), ("u", "oo"),
    ),
)

# ----------------------
# Romanized Punjabi/Hindi cleanup (no syllables, case kept)
# ----------------------
PUNJABI = RuleTable(
    "pa",
    (
        Rule("['`]", "", seal=False),
        Rule("aa", "ah", seal=False),
        Rule("au", "aw", seal=False),
        Rule(r"\bph", "f", seal=False),
        Rule(r"\bnaa\b", "nah", seal=False),
        Rule(r"\bhain\b", "hayn", seal=False),
        Rule(r",(\S)", r", \1", seal=False),
        Rule(r"\bde\b", "day", seal=False),
        Rule(r"\bte\b", "tay", seal=False),
        Rule(r"\bda\b", "dah", seal=False),
    ),
    lowercase=False,
    syllabify=False,
    flags=re.IGNORECASE,
)

RULE_TABLES: Mapping[str, RuleTable] = MappingProxyType(
    {
        "es": SPANISH,
        "fr": FRENCH,
        "pt": PORTUGUESE,
        "de": GERMAN,
        "sv": SWEDISH,
        "zu": ZULU,
        "xh": ZULU,
    }
)

# ----------------------
# Idempotence
# ----------------------
_CONSONANT = "[bcdfghjklmnpqrstvwxyz]"
_VOWEL_UNIT = "|".join(VOWEL_SOUNDS)
# Chunk between hyphens: consonants around vowel sounds; the last nucleus may
# be a bare vowel closed by consonants ("tem", "dish")
_GUIDE_CHUNK = re.compile(
    rf"^(?:{_CONSONANT}*(?:{_VOWEL_UNIT}))*{_CONSONANT}*(?:(?:{_VOWEL_UNIT})|[aeiou]{_CONSONANT}+){_CONSONANT}*$"
)
# Vowel sounds that plain orthography also spells ("hoy", "son", "cuando")
# do not mark a single-syllable line as a guide
_SHARED_SOUNDS = frozenset({"an", "on", "ay", "oy", "aw", "uan", "yan"})
_DISTINCTIVE_SOUND = re.compile(
    "|".join(s for s in VOWEL_SOUNDS if s not in _SHARED_SOUNDS)
)
_PUNCTUATION = re.compile(r"^\W+|\W+$")


def looks_like_guide(text: str) -> bool:
    """True for text already written in the phonetic spelling the engines produce.

    Every word must be lowercase syllables built around vowel sounds, and the
    line must be hyphen-syllabified or contain a sound plain orthography does
    not spell ("zhuh tem", "nown", "naht").
    """
    words = [_PUNCTUATION.sub("", w) for w in text.split()]
    words = [w for w in words if w]
    if not words:
        return False
    for word in words:
        chunks = word.split("-")
        if not all(chunk and _GUIDE_CHUNK.match(chunk) for chunk in chunks):
            return False
    return any("-" in w for w in words) or any(_DISTINCTIVE_SOUND.search(w) for w in words)


def to_phonetic(text: str, language: Optional[str]) -> str:
    """Pronunciation guide for a Latin-script language; unknown languages pass through.

    A text that already is a guide comes back unchanged, so converting twice
    is the same as converting once.
    """
    base = (language or "").split("-")[0].lower()
    table = RULE_TABLES.get(base)
    if table is None or not text:
        return text

    if looks_like_guide(text):
        logger.debug(f"Already a {base} guide, keeping: '{preview(text)}'")
        return text

    phonetic = table.apply(text)
    logger.debug(f"{base} phonetics: '{preview(text)}' -> '{preview(phonetic)}'")
    return phonetic


def punjabi_to_phonetic(text: str) -> str:
    """Light cleanup of romanized Punjabi/Hindi for English readers."""
    return PUNJABI.apply(text)
