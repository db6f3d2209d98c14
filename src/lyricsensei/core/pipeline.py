"""Batch translation of song lyrics with phonetic guides and caching."""

import asyncio
import time
import weakref
from typing import Any, Awaitable, Callable, List, Optional, Sequence, Tuple

from ..config import BATCH_DELAY, BATCH_SIZE, LINE_DELAY, MAX_TEXTS_PER_REQUEST
from ..exceptions import CacheError
from ..services.base import FreeformTranslator, TranslationService
from ..utils.logging import get_logger, preview
from .cache import CacheStore, cache_problems
from .indic import recover_indic_translation
from .language import base_language, correct_detection
from .models import UNKNOWN_LANGUAGE, PhoneticResult, TranslationItem
from .phonetic import generate_phonetic_guide
from .router import INDIC_LANGUAGES

logger = get_logger(__name__)


class TranslationPipeline:
    """Translates lyric lines and attaches a pronunciation guide to each.

    The result always has one ``PhoneticResult`` per input line, in input
    order. Lines that cannot be processed come back as passthrough results
    instead of failing the whole song.
    """

    def __init__(
        self,
        service: TranslationService,
        cache: Optional[CacheStore] = None,
        freeform: Optional[FreeformTranslator] = None,
        batch_size: int = BATCH_SIZE,
        batch_delay: float = BATCH_DELAY,
        line_delay: float = LINE_DELAY,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        if not 1 <= batch_size <= MAX_TEXTS_PER_REQUEST:
            raise ValueError(f"batch_size must be 1-{MAX_TEXTS_PER_REQUEST}, got {batch_size}")
        self.service = service
        self.cache = cache
        self.freeform = freeform
        self.batch_size = batch_size
        self.batch_delay = batch_delay
        self.line_delay = line_delay
        self._sleep = sleep
        # One lock per (song_id, target_language); dropped once nobody holds it
        self._locks: "weakref.WeakValueDictionary[Tuple[str, str], asyncio.Lock]" = (
            weakref.WeakValueDictionary()
        )

    def _lock_for(self, key: Tuple[str, str]) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    async def translate_song(
        self,
        song_id: str,
        lyric_lines: Sequence[str],
        target_language: str,
        source_language: Optional[str] = None,
    ) -> List[PhoneticResult]:
        """Cached translation of a whole song.

        Concurrent calls for the same song and target language are serialized:
        the second caller waits and then reads what the first one stored.
        """
        lines = list(lyric_lines)
        if not lines:
            return []
        if self.cache is None:
            return await self.translate_lines(lines, target_language, source_language)

        lock = self._lock_for((song_id, target_language))
        async with lock:
            cached = await self.cache.get(song_id, target_language)
            if cached:
                problems = cache_problems(cached, lines)
                if not problems:
                    logger.info(f"Cache hit for {song_id} ({target_language}): {len(cached)} lines")
                    return cached
                logger.info(
                    f"Purging cache for {song_id} ({target_language}): {'; '.join(problems)}"
                )
                await self.cache.delete(song_id, target_language)

            results = await self.translate_lines(lines, target_language, source_language)

            try:
                await self.cache.set(song_id, target_language, results)
            except CacheError as e:
                logger.warning(f"Could not cache {song_id} ({target_language}): {e}")
            return results

    async def translate_lines(
        self,
        lines: Sequence[str],
        target_language: str,
        source_language: Optional[str] = None,
    ) -> List[PhoneticResult]:
        """Translate in batches; falls back to line-by-line if a batch call fails."""
        lines = list(lines)
        if not lines:
            return []

        hint = _usable_hint(source_language)
        logger.info(
            f"Translating {len(lines)} lines to {target_language}"
            + (f" from {hint}" if hint else "")
        )
        start_time = time.time()
        results: List[PhoneticResult] = []

        try:
            for start in range(0, len(lines), self.batch_size):
                batch = lines[start:start + self.batch_size]
                items = await self.service.translate(batch, target_language, source_language=hint)
                for index, line in enumerate(batch):
                    item = items[index] if index < len(items) else None
                    results.append(await self._process_line(line, item, target_language, hint))

                if start + self.batch_size < len(lines):
                    await self._sleep(self.batch_delay)
        except Exception as e:
            logger.error(f"Batch translation failed, falling back to sequential: {e}")
            return await self.translate_sequential(lines, target_language, hint)

        logger.info(f"Translated {len(results)} lines in {time.time() - start_time:.1f}s")
        return results

    async def translate_sequential(
        self,
        lines: Sequence[str],
        target_language: str,
        source_language: Optional[str] = None,
    ) -> List[PhoneticResult]:
        """One translation call per line; a failing line degrades on its own."""
        lines = list(lines)
        hint = _usable_hint(source_language)
        results: List[PhoneticResult] = []
        failed = 0

        for i, line in enumerate(lines):
            try:
                items = await self.service.translate([line], target_language, source_language=hint)
            except Exception as e:
                logger.warning(f"Translation failed for '{preview(line)}': {e}")
                results.append(PhoneticResult.passthrough(line))
                failed += 1
                continue

            results.append(
                await self._process_line(line, items[0] if items else None, target_language, hint)
            )
            if i < len(lines) - 1:
                await self._sleep(self.line_delay)

        logger.info(f"Sequential translation done: {len(lines) - failed} ok, {failed} failed")
        return results

    async def _process_line(
        self,
        line: str,
        item: Optional[TranslationItem],
        target_language: str,
        hint: Optional[str],
    ) -> PhoneticResult:
        try:
            translated = item.translated_text if item and item.translated_text else line
            detected = item.detected_language if item else None

            if hint:
                language_tag = hint
            else:
                language_tag = detected or UNKNOWN_LANGUAGE
                corrected = correct_detection(line, detected)
                if corrected != base_language(detected):
                    language_tag = corrected
            base = base_language(language_tag)

            if (
                translated.strip() == line.strip()
                and base in INDIC_LANGUAGES
                and base_language(target_language) == "en"
            ):
                logger.debug(f"Service echoed romanized {base} line: '{preview(line)}'")
                translated = await recover_indic_translation(
                    line, base, target_language, self.service, self.freeform
                )

            guide = await generate_phonetic_guide(line, language_tag, self.service)
            return PhoneticResult(
                original_text=line,
                translated_text=translated,
                phonetic_guide=guide,
                source_language=base,
            )
        except Exception as e:
            logger.warning(f"Failed to process line '{preview(line)}': {e}")
            return PhoneticResult.passthrough(line)

    @staticmethod
    def song_language(results: Sequence[PhoneticResult]) -> Optional[str]:
        """First known source language, to remember as the song's language."""
        for result in results:
            if result.source_language and result.source_language != UNKNOWN_LANGUAGE:
                return result.source_language
        return None


def _usable_hint(source_language: Optional[str]) -> Optional[str]:
    if not source_language or base_language(source_language) == UNKNOWN_LANGUAGE:
        return None
    return source_language
