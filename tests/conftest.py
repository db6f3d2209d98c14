"""Test configuration and fixtures.

Provides reusable fixtures for:
- Temporary directories
- Resetting the package logger between tests

and the fakes shared by the test modules (scripted translation service,
generative translator, recording sleep).
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest

from lyricsensei.core.models import TranslationItem
from lyricsensei.exceptions import TranslationServiceError


def pytest_addoption(parser):
    parser.addoption(
        "--run-network",
        action="store_true",
        default=False,
        help="Run tests that require network access",
    )


def pytest_collection_modifyitems(config, items):
    run_network = config.getoption("--run-network") or os.getenv(
        "RUN_INTEGRATION_TESTS"
    ) == "1"
    if run_network:
        return

    skip_network = pytest.mark.skip(
        reason="requires network access (use --run-network or RUN_INTEGRATION_TESTS=1)"
    )
    for item in items:
        if "network" in item.keywords or "integration" in item.keywords:
            item.add_marker(skip_network)


# =============================================================================
# Fakes
# =============================================================================


class FakeTranslationService:
    """Translation service driven by lookup tables; records every call.

    - ``translations``: text -> translated text (default "[<target>] text")
    - ``detections``: text -> detected language (default ``detected_language``)
    - ``transliterations``: (text, to_script) -> result (default: text unchanged)
    - ``romanizations``: text -> romanization returned with ``to_script``
    """

    def __init__(
        self,
        translations: Optional[Dict[str, str]] = None,
        detected_language: Optional[str] = "es",
        detections: Optional[Dict[str, str]] = None,
        transliterations: Optional[Dict[Tuple[str, str], str]] = None,
        romanizations: Optional[Dict[str, str]] = None,
        fail_texts=(),
        fail_batches: bool = False,
        fail_transliterate: bool = False,
        fail_detect: bool = False,
    ):
        self.translations = translations or {}
        self.detected_language = detected_language
        self.detections = detections or {}
        self.transliterations = transliterations or {}
        self.romanizations = romanizations or {}
        self.fail_texts = set(fail_texts)
        self.fail_batches = fail_batches
        self.fail_transliterate = fail_transliterate
        self.fail_detect = fail_detect

        self.translate_calls: List[dict] = []
        self.transliterate_calls: List[tuple] = []
        self.detect_calls: List[str] = []

    async def translate(self, texts, target_language, source_language=None, to_script=None):
        texts = list(texts)
        self.translate_calls.append(
            {
                "texts": texts,
                "target": target_language,
                "source": source_language,
                "to_script": to_script,
            }
        )
        if self.fail_batches and len(texts) > 1:
            raise TranslationServiceError("batch failed", status_code=500)
        for text in texts:
            if text in self.fail_texts:
                raise TranslationServiceError(f"cannot translate {text}", status_code=500)

        items = []
        for text in texts:
            if to_script:
                items.append(
                    TranslationItem(
                        translated_text=text,
                        alternate_script_text=self.romanizations.get(text),
                    )
                )
            else:
                items.append(
                    TranslationItem(
                        translated_text=self.translations.get(text, f"[{target_language}] {text}"),
                        detected_language=self.detections.get(text, self.detected_language),
                    )
                )
        return items

    async def transliterate(self, text, language, from_script, to_script):
        self.transliterate_calls.append((text, language, from_script, to_script))
        if self.fail_transliterate:
            raise TranslationServiceError("transliteration failed")
        return self.transliterations.get((text, to_script), text)

    async def detect(self, text):
        self.detect_calls.append(text)
        if self.fail_detect:
            raise TranslationServiceError("detection failed")
        return self.detected_language


class FakeFreeformTranslator:
    def __init__(self, translations: Optional[Dict[str, str]] = None, fail: bool = False):
        self.translations = translations or {}
        self.fail = fail
        self.calls: List[tuple] = []

    async def translate_freeform(self, text, source_name, target_name):
        self.calls.append((text, source_name, target_name))
        if self.fail:
            raise RuntimeError("model unavailable")
        return self.translations.get(text, text)


class SleepRecorder:
    """Stand-in for asyncio.sleep that records requested delays."""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, delay):
        self.delays.append(delay)


# =============================================================================
# Basic Fixtures
# =============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers the CLI attached to streams that CliRunner has closed."""
    yield
    logging.getLogger("lyricsensei").handlers.clear()

