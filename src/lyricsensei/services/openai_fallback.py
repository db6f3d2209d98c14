"""Generative translation of romanized text the translation service cannot handle."""

from typing import Optional

from openai import AsyncOpenAI

from ..config import OPENAI_MAX_TOKENS, OPENAI_MODEL, OPENAI_TEMPERATURE, get_openai_api_key
from ..utils.logging import get_logger, preview

logger = get_logger(__name__)

SYSTEM_PROMPT = (
    "You are a professional translator. Translate romanized {source} text to {target}. "
    "Provide only the translation, no explanations or notes."
)


class OpenAIFreeformTranslator:
    """Chat-completion translator; returns the input text whenever it cannot help."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = OPENAI_MODEL,
        temperature: float = OPENAI_TEMPERATURE,
        max_tokens: int = OPENAI_MAX_TOKENS,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.api_key = api_key or get_openai_api_key()
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._client = client

    @property
    def configured(self) -> bool:
        return self._client is not None or bool(self.api_key)

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self.api_key)
        return self._client

    async def translate_freeform(self, text: str, source_name: str, target_name: str) -> str:
        if not self.configured:
            logger.debug("OpenAI API key not configured, skipping generative fallback")
            return text

        logger.info(f"Generative translation {source_name} -> {target_name}: '{preview(text)}'")
        try:
            response = await self._get_client().chat.completions.create(
                model=self.model,
                messages=[
                    {
                        "role": "system",
                        "content": SYSTEM_PROMPT.format(source=source_name, target=target_name),
                    },
                    {"role": "user", "content": text},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
            content = response.choices[0].message.content if response.choices else None
        except Exception as e:
            logger.warning(f"Generative translation failed: {e}")
            return text

        translated = (content or "").strip()
        return translated or text
