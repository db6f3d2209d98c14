"""Translation cache: entry validation and stores."""

import asyncio
import json
import re
import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

from ..config import get_cache_dir
from ..exceptions import CacheError
from ..utils.logging import get_logger
from .language import base_language
from .models import PhoneticResult
from .router import PHONETIC_LANGUAGES

logger = get_logger(__name__)


def _has_letters(text: str) -> bool:
    return any(c.isalpha() for c in text)


def cache_problems(entry: Sequence[PhoneticResult], lyric_lines: Sequence[str]) -> List[str]:
    """Reasons a cached entry can no longer be served (empty when it is valid)."""
    if not entry:
        return ["empty entry"]

    problems = []
    if len(entry) != len(lyric_lines):
        problems.append(f"{len(entry)} cached lines for {len(lyric_lines)} lyric lines")
    else:
        mismatched = [i for i, (r, line) in enumerate(zip(entry, lyric_lines)) if r.original_text != line]
        if mismatched:
            problems.append(f"lyrics changed at line {mismatched[0]}")

    if any(r.is_legacy for r in entry):
        problems.append("legacy entry without source language")

    for i, result in enumerate(entry):
        if base_language(result.source_language) not in PHONETIC_LANGUAGES:
            continue
        if not _has_letters(result.original_text):
            continue
        guide = result.phonetic_guide or ""
        if not guide.strip() or guide in (result.original_text, result.translated_text):
            problems.append(f"missing phonetic guide at line {i}")
            break

    return problems


def is_cache_valid(entry: Sequence[PhoneticResult], lyric_lines: Sequence[str]) -> bool:
    return not cache_problems(entry, lyric_lines)


class CacheStore(Protocol):
    """Storage of translated songs keyed by (song_id, target language)."""

    async def get(self, song_id: str, language: str) -> List[PhoneticResult]:
        ...

    async def set(self, song_id: str, language: str, results: Sequence[PhoneticResult]) -> None:
        ...

    async def delete(self, song_id: str, language: str) -> None:
        ...


class MemoryCacheStore:
    """In-process cache store."""

    def __init__(self):
        self._entries: Dict[Tuple[str, str], List[PhoneticResult]] = {}

    async def get(self, song_id: str, language: str) -> List[PhoneticResult]:
        return list(self._entries.get((song_id, language), []))

    async def set(self, song_id: str, language: str, results: Sequence[PhoneticResult]) -> None:
        self._entries[(song_id, language)] = list(results)

    async def delete(self, song_id: str, language: str) -> None:
        self._entries.pop((song_id, language), None)

    def __len__(self) -> int:
        return len(self._entries)


class JsonFileCacheStore:
    """Cache store with one JSON file per song and target language.

    ``load``/``save``/``remove`` do the blocking file work; the async
    ``get``/``set``/``delete`` run them in a worker thread.
    """

    def __init__(self, cache_dir: Optional[Path] = None):
        self.cache_dir = Path(cache_dir) if cache_dir else get_cache_dir()
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    def get_song_cache_dir(self, song_id: str) -> Path:
        """Directory holding every cached language of a song."""
        safe_id = re.sub(r'[<>:"/\\|?*]', "_", song_id).strip(". ") or "_"
        return self.cache_dir / safe_id

    def get_file_path(self, song_id: str, language: str) -> Path:
        return self.get_song_cache_dir(song_id) / f"translations_{language}.json"

    def load(self, song_id: str, language: str) -> List[PhoneticResult]:
        path = self.get_file_path(song_id, language)
        if not path.exists():
            return []

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            results = [PhoneticResult.from_dict(item) for item in data]
            logger.debug(f"Loaded {len(results)} cached lines for {song_id} ({language})")
            return results
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Failed to load cache for {song_id} ({language}): {e}")
            return []

    def save(self, song_id: str, language: str, results: Sequence[PhoneticResult]) -> None:
        path = self.get_file_path(song_id, language)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump([r.to_dict() for r in results], f, indent=2, ensure_ascii=False)
            logger.debug(f"Saved {len(results)} lines for {song_id} ({language})")
        except OSError as e:
            raise CacheError(f"Failed to save translations: {e}")

    def remove(self, song_id: str, language: str) -> None:
        path = self.get_file_path(song_id, language)
        if path.exists():
            path.unlink()
            logger.info(f"Purged cache for {song_id} ({language})")

    async def get(self, song_id: str, language: str) -> List[PhoneticResult]:
        return await asyncio.to_thread(self.load, song_id, language)

    async def set(self, song_id: str, language: str, results: Sequence[PhoneticResult]) -> None:
        await asyncio.to_thread(self.save, song_id, language, list(results))

    async def delete(self, song_id: str, language: str) -> None:
        await asyncio.to_thread(self.remove, song_id, language)

    def clear(self, song_id: Optional[str] = None) -> None:
        """Clear one song's cache, or the whole cache directory."""
        if song_id is None:
            for child in self.cache_dir.iterdir():
                if child.is_dir():
                    shutil.rmtree(child)
                else:
                    child.unlink()
            logger.info("Cleared translation cache")
            return

        song_dir = self.get_song_cache_dir(song_id)
        if song_dir.exists():
            shutil.rmtree(song_dir)
            logger.info(f"Cleared cache for song {song_id}")

    def stats(self) -> Dict[str, Any]:
        """Cache statistics."""
        total_size = 0
        entry_count = 0
        song_count = 0

        for song_dir in self.cache_dir.iterdir():
            if not song_dir.is_dir():
                continue
            song_count += 1
            for path in song_dir.glob("translations_*.json"):
                entry_count += 1
                total_size += path.stat().st_size

        return {
            "song_count": song_count,
            "entry_count": entry_count,
            "total_size_kb": total_size / 1024,
            "cache_dir": str(self.cache_dir),
        }
