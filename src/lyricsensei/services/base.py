"""Interfaces of the external services the pipeline depends on."""

from typing import List, Optional, Protocol, Sequence

from ..core.models import TranslationItem


class TranslationService(Protocol):
    """Batch translation, transliteration and language detection."""

    async def translate(
        self,
        texts: Sequence[str],
        target_language: str,
        source_language: Optional[str] = None,
        to_script: Optional[str] = None,
    ) -> List[TranslationItem]:
        """Translate up to 100 texts; one item per input, in order."""
        ...

    async def transliterate(
        self, text: str, language: str, from_script: str, to_script: str
    ) -> str:
        """Convert ``text`` between scripts of ``language``."""
        ...

    async def detect(self, text: str) -> Optional[str]:
        """Best guess of the language of ``text``."""
        ...


class FreeformTranslator(Protocol):
    """Generative translator for text the translation service echoes back."""

    async def translate_freeform(
        self, text: str, source_name: str, target_name: str
    ) -> str:
        ...
