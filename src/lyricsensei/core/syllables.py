"""Syllable splitting for phonetic guides and romanized lyrics.

Every splitter here only inserts hyphens: joining the syllables of a word
without the separators gives back the word exactly. Words shorter than
three characters and words that already contain a hyphen are left alone,
so running a splitter twice does not split anything further.
"""

import re
import unicodedata
from typing import Callable, List

SEPARATOR = "-"
MIN_SPLIT_LENGTH = 3

# ----------------------
# Generic phonetic syllabifier
# ----------------------

# Vowel sounds produced by the rule engines, longest first
VOWEL_SOUNDS = tuple(
    sorted(
        (
            "ahn", "ohn", "yan", "wah", "woh", "weh", "yeh", "yah", "yoh", "ehn",
            "uan", "eye",
            "ah", "eh", "ee", "oh", "oo", "ay", "oy", "ow", "uh", "an", "on", "aw",
        ),
        key=len,
        reverse=True,
    )
)

# Consonant pairs that behave as one sound and are never split
DIGRAPHS = ("ch", "sh", "zh", "rr", "ny", "ph", "th", "gh", "nk", "ks")

ONSET_LETTERS = frozenset("bcdfghjklmnpqrstvwxyz")
CODA_LETTERS = frozenset("bcdfghjklmnpqrstvwxz")
VOWEL_LETTERS = frozenset("aeiouy")

_WORD_PARTS = re.compile(r"^(\W*)(.*?)(\W*)$", re.DOTALL)


def _vowel_sound_at(word: str, i: int) -> int:
    """Length of the vowel sound starting at ``i`` (0 when none matches)."""
    for sound in VOWEL_SOUNDS:
        if word.startswith(sound, i):
            end = i + len(sound)
            # A nasal sound followed by a vowel is really a vowel + onset "n"
            if sound.endswith("n") and end < len(word) and word[end] in VOWEL_LETTERS:
                continue
            return len(sound)
    return 0


def _consonant_unit_at(word: str, i: int) -> int:
    for digraph in DIGRAPHS:
        if word.startswith(digraph, i):
            return len(digraph)
    if word[i] in CODA_LETTERS:
        return 1
    return 0


def _join(word: str, starts: List[int]) -> str:
    if len(starts) <= 1:
        return word
    ends = starts[1:] + [len(word)]
    return SEPARATOR.join(word[a:b] for a, b in zip(starts, ends))


def _split_phonetic_word(word: str) -> str:
    lower = word.lower()
    n = len(lower)
    starts: List[int] = []
    i = 0

    while i < n:
        start = i

        # Onset: consonants until a vowel sound begins
        while i < n and not _vowel_sound_at(lower, i) and lower[i] in ONSET_LETTERS:
            i += 1
        if i >= n:
            # Trailing consonants with no vowel close the previous syllable
            if not starts:
                starts.append(start)
            break

        # Nucleus; an unknown character is taken verbatim so the scan always advances
        nucleus = _vowel_sound_at(lower, i) or 1
        starts.append(start)
        i += nucleus

        units: List[int] = []
        j = i
        while j < n:
            unit = _consonant_unit_at(lower, j)
            if not unit:
                break
            units.append(unit)
            j += unit

        if not units:
            continue
        if j >= n:
            i = j  # end of word: the whole cluster is the coda
        elif len(units) > 1:
            i += units[0]  # first consonant closes this syllable
        # a single consonant before more text starts the next syllable

    return _join(word, starts)


def _map_words(text: str, split_word: Callable[[str], str], skip: str = SEPARATOR) -> str:
    words = text.split(" ")
    out = []
    for word in words:
        if len(word) < MIN_SPLIT_LENGTH or any(c in word for c in skip):
            out.append(word)
            continue
        out.append(split_word(word))
    return " ".join(out)


def _split_with_punctuation(word: str) -> str:
    lead, core, trail = _WORD_PARTS.match(word).groups()
    if len(core) < MIN_SPLIT_LENGTH:
        return word
    return lead + _split_phonetic_word(core) + trail


def syllabify(text: str) -> str:
    """Split an English-style phonetic spelling into hyphenated syllables.

    Example: "ohlah" -> "oh-lah", "bonzhoor" -> "bon-zhoor"
    """
    return _map_words(text, _split_with_punctuation)


# ----------------------
# Japanese (Hepburn romaji, mora based)
# ----------------------
JAPANESE_VOWELS = frozenset("aeiouāīūēō")
JAPANESE_DIGRAPHS = ("ch", "sh", "ts", "ky", "gy", "ny", "hy", "by", "py", "my", "ry")
LONG_VOWEL_MARK = "ー"


def _split_japanese_word(word: str) -> str:
    lower = word.lower()
    n = len(lower)
    starts: List[int] = []
    i = 0

    while i < n:
        start = i

        if any(lower.startswith(d, i) for d in JAPANESE_DIGRAPHS):
            i += 2
        elif lower[i] not in JAPANESE_VOWELS:
            i += 1

        if i < n and lower[i] in JAPANESE_VOWELS:
            i += 1
            if i < n and (lower[i] in JAPANESE_VOWELS or word[i] == LONG_VOWEL_MARK):
                i += 1

        if i < n and lower[i] == "n":
            nxt = lower[i + 1] if i + 1 < n else ""
            if nxt not in JAPANESE_VOWELS:
                i += 1  # syllabic n
        elif (
            i + 1 < n
            and lower[i].isalpha()
            and lower[i] not in JAPANESE_VOWELS
            and lower[i] == lower[i + 1]
        ):
            i += 1  # geminate consonant closes the mora: "kit-to"

        starts.append(start)

    return _join(word, starts)


def split_japanese_syllables(romanized: str) -> str:
    """Split romaji into morae: "kokoro" -> "ko-ko-ro"."""
    return " ".join(
        _map_words(w, _split_japanese_word, skip="-'’`") for w in romanized.split()
    )


# ----------------------
# Korean (Revised Romanization)
# ----------------------
KOREAN_NUCLEI = (
    "wae", "yeo", "oe", "ae", "eo", "eu", "wa", "wo", "we", "ya", "ye", "yo", "yu", "ui",
    "a", "e", "i", "o", "u",
)
KOREAN_CODAS = frozenset("klmnpt")  # plus "ng", checked first
KOREAN_VOWEL_CHARS = frozenset("aeiouy")


def _korean_nucleus_at(word: str, i: int) -> int:
    for nucleus in KOREAN_NUCLEI:
        if word.startswith(nucleus, i):
            return len(nucleus)
    return 0


def _split_korean_word(word: str) -> str:
    lower = word.lower()
    n = len(lower)
    starts: List[int] = []
    i = 0

    while i < n:
        start = i
        while i < n and lower[i] not in KOREAN_VOWEL_CHARS:
            i += 1
        if i >= n:
            if not starts:
                starts.append(start)
            break

        starts.append(start)
        i += _korean_nucleus_at(lower, i) or 1

        if i < n and lower[i] not in KOREAN_VOWEL_CHARS:
            j = i
            while j < n and lower[j] not in KOREAN_VOWEL_CHARS:
                j += 1
            consonants = lower[i:j]
            if j >= n:
                i = j
            elif consonants.startswith("ng"):
                i += 2
            elif consonants[0] in KOREAN_CODAS and len(consonants) > 1:
                i += 1

    return _join(word, starts)


def split_korean_syllables(romanized: str) -> str:
    """Split Korean romanization: "annyeonghaseyo" -> "an-nyeong-ha-se-yo"."""
    return " ".join(
        _map_words(w, _split_korean_word, skip="-'’`") for w in romanized.split()
    )


# ----------------------
# Indic (IAST-like romanization with diacritics)
# ----------------------
INDIC_VOWELS = "ā|ī|ū|ē|ō|ai|au|a|e|i|o|u"
INDIC_CONSONANTS = "bcdfghjklmnpqrstvwxyzṭḍṇṛṣśṅñṁḥ"
INDIC_DIGRAPHS = ("kh", "gh", "th", "dh", "ph", "bh", "ch", "jh", "ṭh", "ḍh", "nh", "sh")

_INDIC_SYLLABLE = re.compile(
    rf"({INDIC_VOWELS})([{INDIC_CONSONANTS}]+)(?={INDIC_VOWELS})", re.IGNORECASE
)


def _indic_boundary(match: re.Match) -> str:
    vowel, cluster = match.group(1), match.group(2)
    if len(cluster) > 1:
        lower = cluster.lower()
        if any(lower.startswith(d) or lower.endswith(d) for d in INDIC_DIGRAPHS):
            return f"{vowel}-{cluster}"
        return f"{vowel}{cluster[:-1]}-{cluster[-1]}"
    return f"{vowel}-{cluster}"


def add_indic_syllables(text: str) -> str:
    """Hyphenate Indic romanization: "tere toṁ merī" -> "te-re toṁ me-rī"."""
    text = unicodedata.normalize("NFC", text)
    return _map_words(text, lambda word: _INDIC_SYLLABLE.sub(_indic_boundary, word))
