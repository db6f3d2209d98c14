"""Tests for syllable splitting."""

import pytest

from lyricsensei.core.syllables import (
    add_indic_syllables,
    split_japanese_syllables,
    split_korean_syllables,
    syllabify,
)


class TestSyllabify:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("ohlah", "oh-lah"),
            ("bonzhoor", "bon-zhoor"),
            ("ohbreegahdoo", "ohb-ree-gah-doo"),
            ("ngeeshoothehnee", "ngee-shoo-theh-nee"),
        ],
    )
    def test_splits_phonetic_words(self, text, expected):
        assert syllabify(text) == expected

    def test_short_words_untouched(self):
        assert syllabify("zhuh tem") == "zhuh tem"

    def test_punctuation_stays_outside(self):
        assert syllabify("ohlah!") == "oh-lah!"

    def test_preserves_case(self):
        assert syllabify("OHLAH") == "OH-LAH"

    def test_already_hyphenated_word_untouched(self):
        assert syllabify("oh-lah") == "oh-lah"

    def test_idempotent(self):
        once = syllabify("ohbreegahdoo ngeeshoothehnee")
        assert syllabify(once) == once

    @pytest.mark.parametrize(
        "text", ["ohlah", "strrrk", "xyz", "aeiou", "bonzhoor mahnyahnah", "ñandú"]
    )
    def test_removing_separators_restores_input(self, text):
        assert syllabify(text).replace("-", "") == text

    def test_empty(self):
        assert syllabify("") == ""


class TestJapanese:
    @pytest.mark.parametrize(
        "romaji,expected",
        [
            ("kokoro", "ko-ko-ro"),
            ("nijimu namida", "ni-ji-mu na-mi-da"),
            ("kitto", "kit-to"),
            ("konnichiwa", "kon-ni-chi-wa"),
            ("shinjitsu", "shin-ji-tsu"),
        ],
    )
    def test_morae(self, romaji, expected):
        assert split_japanese_syllables(romaji) == expected

    def test_apostrophe_words_untouched(self):
        assert split_japanese_syllables("kin'you") == "kin'you"

    def test_round_trip(self):
        text = "sayonara konnichiwa kitto"
        assert split_japanese_syllables(text).replace("-", "") == text


class TestKorean:
    @pytest.mark.parametrize(
        "romanized,expected",
        [
            ("annyeonghaseyo", "an-nyeong-ha-se-yo"),
            ("Neowa hamkke", "Neo-wa ham-kke"),
            ("saranghae", "sa-rang-hae"),
        ],
    )
    def test_syllables(self, romanized, expected):
        assert split_korean_syllables(romanized) == expected

    def test_round_trip(self):
        text = "Neowa hamkke saranghae"
        assert split_korean_syllables(text).replace("-", "") == text


class TestIndic:
    @pytest.mark.parametrize(
        "romanized,expected",
        [
            ("tere toṁ merī", "te-re toṁ me-rī"),
            ("sajjan", "saj-jan"),
            ("akhiyan", "a-khi-yan"),
            ("binā", "bi-nā"),
        ],
    )
    def test_syllables(self, romanized, expected):
        assert add_indic_syllables(romanized) == expected

    def test_decomposed_input_is_normalized(self):
        decomposed = "bina\u0304"
        assert add_indic_syllables(decomposed) == "bi-nā"
