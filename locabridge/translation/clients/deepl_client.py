"""DeepL API client for translation."""

import logging
from typing import List, Optional
import deepl

from ...config import config
from ...errors import TranslationError

logger = logging.getLogger(__name__)


class DeepLClient:
    """Client for DeepL translation API."""

    TARGET_LANGUAGE_MAP = {
        "en": "EN-US",
        "en-CA": "EN-US",
        "en-IN": "EN-GB",
        "en-GB": "EN-GB",
        "pt": "PT-PT",
        "pt-BR": "PT-BR",
        "zh-Hans": "ZH-HANS",
        "zh-Hant": "ZH-HANT",
    }

    def __init__(self, api_key: Optional[str] = None, translator: Optional[deepl.Translator] = None):
        """
        Initialize the DeepL client.

        Args:
            api_key: DeepL API key. If not provided, uses DEEPL_API_KEY from environment.
            translator: Pre-built translator (mainly for tests)
        """
        self.api_key = api_key or config.deepl_api_key
        if not self.api_key and translator is None:
            raise ValueError("DeepL API key is required")
        self.translator = translator or deepl.Translator(self.api_key)

    @property
    def name(self) -> str:
        return "deepl"

    def target_code(self, language: str) -> str:
        return self.TARGET_LANGUAGE_MAP.get(language, language.upper())

    def source_code(self, language: str) -> str:
        # DeepL source languages carry no region or script
        return language.split("-")[0].upper()

    def translate_batch(
        self,
        texts: List[str],
        target_lang: str,
        source_lang: Optional[str] = None,
    ) -> List[str]:
        """
        Translate multiple texts in a batch.

        Args:
            texts: List of texts to translate
            target_lang: Target language code
            source_lang: Source language code (auto-detect if not provided)

        Returns:
            Translated texts in the same order
        """
        if not texts:
            return []

        kwargs = {
            "text": texts,
            "target_lang": self.target_code(target_lang),
            "preserve_formatting": True,
        }
        if source_lang:
            kwargs["source_lang"] = self.source_code(source_lang)

        try:
            results = self.translator.translate_text(**kwargs)
        except deepl.DeepLException as e:
            raise TranslationError(f"DeepL request failed: {e}") from e

        # Handle single result case
        if not isinstance(results, list):
            results = [results]

        if len(results) != len(texts):
            raise TranslationError(f"DeepL returned {len(results)} results for {len(texts)} texts")

        logger.debug("deepl translated %d texts to %s", len(texts), target_lang)
        return [r.text for r in results]
