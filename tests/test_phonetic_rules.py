"""Tests for the rule-based phonetic engines."""

import pytest

from lyricsensei.core.phonetic_rules import (
    RULE_TABLES,
    Rule,
    RuleTable,
    looks_like_guide,
    punjabi_to_phonetic,
    to_phonetic,
)


@pytest.mark.parametrize(
    "language,text,expected",
    [
        ("es", "Hola", "oh-lah"),
        ("es", "Anda y ve", "ahn-dah ee veh"),
        ("es", "Corazón", "coh-rah-sohn"),
        ("es", "Mañana", "mah-nyah-nah"),
        ("es", "chico", "chee-coh"),
        ("fr", "Bonjour", "bon-zhoor"),
        ("fr", "Je t'aime", "zhuh tem"),
        ("fr", "Merci", "muhr-see"),
        ("fr", "l'amour", "lah-moor"),
        ("pt", "Obrigado", "ohb-ree-gah-doo"),
        ("pt", "não", "nown"),
        ("pt", "Coração", "coh-rah-sown"),
        ("de", "Nacht", "naht"),
        ("de", "Ich liebe dich", "ish lee-beh dish"),
        ("de", "Wasser", "vahs-sehr"),
        ("de", "Vater", "fah-tehr"),
        ("sv", "Jag älskar dig", "yahg ehl-skahr dee"),
        ("sv", "kärlek", "shehr-lehk"),
        ("zu", "Sawubona", "sah-woo-boh-nah"),
        ("zu", "Ngiyabonga", "ngee-yah-bohn-gah"),
    ],
)
def test_language_rules(language, text, expected):
    assert to_phonetic(text, language) == expected


def test_xhosa_shares_zulu_rules():
    assert RULE_TABLES["xh"] is RULE_TABLES["zu"]
    assert to_phonetic("Sawubona", "xh") == "sah-woo-boh-nah"


def test_region_subtag_is_ignored():
    assert to_phonetic("Hola", "es-MX") == "oh-lah"


def test_unknown_language_passes_through():
    assert to_phonetic("Ciao bella", "it") == "Ciao bella"
    assert to_phonetic("Hola", None) == "Hola"


def test_empty_text():
    assert to_phonetic("", "es") == ""


class TestIdempotence:
    @pytest.mark.parametrize(
        "language,text",
        [("es", "Mañana"), ("fr", "Bonjour"), ("de", "Ich liebe dich"), ("pt", "Obrigado")],
    )
    def test_guide_is_not_converted_twice(self, language, text):
        once = to_phonetic(text, language)
        assert to_phonetic(once, language) == once

    @pytest.mark.parametrize(
        "language,guide",
        [
            ("fr", "zhuh tem"),
            ("pt", "nown"),
            ("de", "naht"),
            ("de", "ish lee-beh dish"),
            ("sv", "yahg ehl-skahr dee"),
            ("es", "oh-lah"),
            ("pt", "coh-rah-sown"),
        ],
    )
    def test_stored_guide_passes_through(self, language, guide):
        assert to_phonetic(guide, language) == guide

    @pytest.mark.parametrize(
        "language,text",
        [
            ("fr", "Je t'aime"),
            ("pt", "não"),
            ("de", "Nacht"),
            ("sv", "Jag älskar dig"),
            ("de", "Wasser"),
            ("zu", "Ngiyabonga"),
        ],
    )
    def test_converting_twice_equals_once(self, language, text):
        once = to_phonetic(text, language)
        assert once != text
        assert to_phonetic(once, language) == once

    def test_looks_like_guide(self):
        assert looks_like_guide("oh-lah")
        assert looks_like_guide("ahn-dah ee veh!")
        assert looks_like_guide("zhuh tem")
        assert looks_like_guide("nown")
        assert looks_like_guide("naht")
        assert not looks_like_guide("son")
        assert not looks_like_guide("hola")
        assert not looks_like_guide("hoy")
        assert not looks_like_guide("Hola amigo")
        assert not looks_like_guide("bien-estar")
        assert not looks_like_guide("")


class TestPunjabi:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Tere naal, pyaar", "Tere nahl, pyahr"),
            ("Main,tu", "Main, tu"),
            ("de te da", "day tay dah"),
            ("phir", "fir"),
        ],
    )
    def test_cleanup(self, text, expected):
        assert punjabi_to_phonetic(text) == expected

    def test_not_registered_as_latin_table(self):
        assert "pa" not in RULE_TABLES


class TestRuleTable:
    def test_sealed_output_is_not_rewritten(self):
        table = RuleTable(
            "test",
            [Rule("a", "ah"), Rule("h", "x")],
            syllabify=False,
        )
        assert table.apply("ha") == "xah"

    def test_unsealed_output_is_visible_to_later_rules(self):
        table = RuleTable(
            "test",
            [Rule("a", "ah", seal=False), Rule("h", "x")],
            syllabify=False,
        )
        assert table.apply("ha") == "xax"

    def test_private_use_characters_in_input_are_dropped(self):
        table = RuleTable("test", [Rule("a", "ah")], syllabify=False)
        assert table.apply("ab") == "ahb"

    def test_whitespace_is_collapsed(self):
        table = RuleTable("test", [], syllabify=False)
        assert table.apply("  Uno   dos ") == "uno dos"
