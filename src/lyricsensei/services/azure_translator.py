"""Azure Translator v3 REST client."""

import asyncio
import uuid
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

import httpx

from ..config import (
    AZURE_API_VERSION,
    AZURE_TRANSLATOR_ENDPOINT,
    HTTP_TIMEOUT,
    MAX_TEXTS_PER_REQUEST,
    get_azure_credentials,
)
from ..core.models import TranslationItem
from ..exceptions import ServiceNotConfiguredError, TranslationServiceError
from ..utils.logging import get_logger
from ..utils.retry import retry_async

logger = get_logger(__name__)

# App language codes that differ from the service's codes
LANGUAGE_CODES = {
    "zh": "zh-Hans",
}


def service_language_code(code: str) -> str:
    return LANGUAGE_CODES.get(code, code)


class AzureTranslator:
    """Translation, transliteration and detection through Azure Translator.

    Credentials default to ``AZURE_TRANSLATOR_KEY``/``AZURE_TRANSLATOR_REGION``.
    Without them every call raises ``ServiceNotConfiguredError``.
    """

    def __init__(
        self,
        key: Optional[str] = None,
        region: Optional[str] = None,
        endpoint: str = AZURE_TRANSLATOR_ENDPOINT,
        timeout: float = HTTP_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
        max_retries: int = 2,
        retry_delay: float = 0.5,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        if key is None and region is None:
            key, region = get_azure_credentials() or (None, None)
        self.key = key
        self.region = region
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._sleep = sleep
        self._client = client
        self._owns_client = client is None

    @property
    def configured(self) -> bool:
        return bool(self.key and self.region)

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self.endpoint, timeout=self.timeout)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "AzureTranslator":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def _headers(self) -> Dict[str, str]:
        if not self.configured:
            raise ServiceNotConfiguredError(
                "Azure Translator credentials not configured. "
                "Set AZURE_TRANSLATOR_KEY and AZURE_TRANSLATOR_REGION."
            )
        return {
            "Ocp-Apim-Subscription-Key": self.key,
            "Ocp-Apim-Subscription-Region": self.region,
            "Content-Type": "application/json",
        }

    async def _post_once(self, path: str, params: Dict[str, str], body: List[Dict[str, str]]) -> Any:
        headers = self._headers()
        headers["X-ClientTraceId"] = str(uuid.uuid4())
        url = f"{self.endpoint}{path}"

        try:
            response = await self._get_client().post(
                url, params={"api-version": AZURE_API_VERSION, **params}, json=body, headers=headers
            )
        except httpx.TransportError as e:
            raise TranslationServiceError(f"Request to {path} failed: {e}", transient=True) from e

        if response.status_code != 200:
            raise TranslationServiceError(
                f"{path} failed ({response.status_code}): {response.text[:200]}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise TranslationServiceError(f"Invalid JSON from {path}: {e}") from e

    async def _post(self, path: str, params: Dict[str, str], body: List[Dict[str, str]]) -> Any:
        return await retry_async(
            self._post_once,
            path,
            params,
            body,
            max_retries=self.max_retries,
            base_delay=self.retry_delay,
            exceptions=(TranslationServiceError,),
            should_retry=lambda e: getattr(e, "is_transient", False),
            sleep=self._sleep,
        )

    async def translate(
        self,
        texts: Sequence[str],
        target_language: str,
        source_language: Optional[str] = None,
        to_script: Optional[str] = None,
    ) -> List[TranslationItem]:
        """Translate up to 100 texts in one request."""
        if len(texts) > MAX_TEXTS_PER_REQUEST:
            raise ValueError(
                f"At most {MAX_TEXTS_PER_REQUEST} texts per request, got {len(texts)}"
            )
        if not texts:
            return []

        params = {"to": service_language_code(target_language)}
        if source_language:
            params["from"] = service_language_code(source_language)
        if to_script:
            params["toScript"] = to_script

        data = await self._post("/translate", params, [{"text": t} for t in texts])
        if not isinstance(data, list) or len(data) != len(texts):
            raise TranslationServiceError(f"Unexpected /translate response for {len(texts)} texts")

        items = []
        try:
            for entry in data:
                first = (entry.get("translations") or [{}])[0]
                detected = (entry.get("detectedLanguage") or {}).get("language")
                alternate = (first.get("transliteration") or {}).get("text")
                items.append(
                    TranslationItem(
                        translated_text=first.get("text", ""),
                        detected_language=detected,
                        alternate_script_text=alternate,
                    )
                )
        except (AttributeError, IndexError, TypeError) as e:
            raise TranslationServiceError(f"Invalid /translate response: {e}") from e
        logger.debug(f"Translated {len(items)} texts to {target_language}")
        return items

    async def transliterate(self, text: str, language: str, from_script: str, to_script: str) -> str:
        params = {"language": language, "fromScript": from_script, "toScript": to_script}
        data = await self._post("/transliterate", params, [{"text": text}])
        try:
            result = data[0]["text"]
        except (IndexError, KeyError, TypeError) as e:
            raise TranslationServiceError(f"Invalid /transliterate response: {e}") from e
        if not result:
            raise TranslationServiceError("Empty transliteration")
        return result

    async def detect(self, text: str) -> Optional[str]:
        data = await self._post("/detect", {}, [{"text": text}])
        try:
            return data[0].get("language") or None
        except (IndexError, AttributeError, TypeError) as e:
            raise TranslationServiceError(f"Invalid /detect response: {e}") from e
