"""External translation services."""

from .azure_translator import AzureTranslator
from .base import FreeformTranslator, TranslationService
from .openai_fallback import OpenAIFreeformTranslator

__all__ = [
    "AzureTranslator",
    "FreeformTranslator",
    "OpenAIFreeformTranslator",
    "TranslationService",
]
