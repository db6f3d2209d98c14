"""Tests for the romanized Punjabi/Hindi/Urdu paths."""

import asyncio

from conftest import FakeFreeformTranslator, FakeTranslationService
from lyricsensei.core.indic import (
    has_native_script,
    indic_phonetic_guide,
    recover_indic_translation,
    reverse_transliterate,
)

ROMANIZED = "tere naal"
GURMUKHI = "ਤੇਰੇ ਨਾਲ"


def punjabi_service(**kwargs):
    transliterations = {
        (ROMANIZED, "Guru"): GURMUKHI,
        (GURMUKHI, "Latn"): "tere nāl",
    }
    return FakeTranslationService(transliterations=transliterations, **kwargs)


def test_has_native_script():
    assert has_native_script(GURMUKHI)
    assert has_native_script("तेरे")
    assert not has_native_script(ROMANIZED)


class TestReverseTransliterate:
    def test_recovers_native_script(self):
        service = punjabi_service()
        assert asyncio.run(reverse_transliterate(ROMANIZED, "pa", service)) == GURMUKHI
        assert service.transliterate_calls == [(ROMANIZED, "pa", "Latn", "Guru")]

    def test_hindi_uses_devanagari(self):
        service = FakeTranslationService()
        asyncio.run(reverse_transliterate("tere", "hi", service))
        assert service.transliterate_calls == [("tere", "hi", "Latn", "Deva")]

    def test_failure_returns_input(self):
        service = FakeTranslationService(fail_transliterate=True)
        assert asyncio.run(reverse_transliterate(ROMANIZED, "pa", service)) == ROMANIZED

    def test_non_indic_language(self):
        service = FakeTranslationService()
        assert asyncio.run(reverse_transliterate("hola", "es", service)) == "hola"
        assert service.transliterate_calls == []


class TestIndicPhoneticGuide:
    def test_romanized_line(self):
        service = punjabi_service()
        assert asyncio.run(indic_phonetic_guide(ROMANIZED, "pa", service)) == "te-re nāl"
        assert service.transliterate_calls[-1] == (GURMUKHI, "pa", "Guru", "Latn")

    def test_native_script_line(self):
        service = FakeTranslationService(
            transliterations={("तेरे बिना", "Latn"): "tere binā"}
        )
        assert asyncio.run(indic_phonetic_guide("तेरे बिना", "hi", service)) == "te-re bi-nā"

    def test_failure_on_romanized_line_falls_back_to_cleanup(self):
        service = FakeTranslationService(fail_transliterate=True)
        guide = asyncio.run(indic_phonetic_guide("Tere naal, pyaar", "pa", service))
        assert guide == "Tere nahl, pyahr"

    def test_failure_on_native_line_returns_original(self):
        service = FakeTranslationService(fail_transliterate=True)
        assert asyncio.run(indic_phonetic_guide(GURMUKHI, "pa", service)) == GURMUKHI

    def test_empty_transliteration_falls_back(self):
        service = FakeTranslationService(transliterations={(GURMUKHI, "Latn"): ""})
        assert asyncio.run(indic_phonetic_guide(GURMUKHI, "pa", service)) == GURMUKHI


class TestRecoverTranslation:
    def test_native_script_retranslation(self):
        service = punjabi_service(translations={GURMUKHI: "with you"})
        translated = asyncio.run(recover_indic_translation(ROMANIZED, "pa", "en", service))
        assert translated == "with you"
        assert service.translate_calls[-1]["texts"] == [GURMUKHI]
        assert service.translate_calls[-1]["source"] == "pa"

    def test_echoed_native_translation_uses_freeform(self):
        service = punjabi_service(translations={GURMUKHI: GURMUKHI})
        freeform = FakeFreeformTranslator({ROMANIZED: "with you"})
        translated = asyncio.run(
            recover_indic_translation(ROMANIZED, "pa", "en", service, freeform)
        )
        assert translated == "with you"
        assert freeform.calls == [(ROMANIZED, "Punjabi", "English")]

    def test_freeform_when_native_script_unavailable(self):
        service = FakeTranslationService()
        freeform = FakeFreeformTranslator({ROMANIZED: " with you "})
        translated = asyncio.run(
            recover_indic_translation(ROMANIZED, "pa", "en", service, freeform)
        )
        assert translated == "with you"
        assert service.translate_calls == []

    def test_nothing_helps(self):
        service = FakeTranslationService(fail_transliterate=True)
        freeform = FakeFreeformTranslator(fail=True)
        translated = asyncio.run(
            recover_indic_translation(ROMANIZED, "pa", "en", service, freeform)
        )
        assert translated == ROMANIZED

    def test_without_freeform(self):
        service = FakeTranslationService()
        assert asyncio.run(recover_indic_translation(ROMANIZED, "pa", "en", service)) == ROMANIZED
