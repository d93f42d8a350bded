"""Drives a translation provider over the texts of a catalog."""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Protocol, Sequence

from ..errors import TranslationError
from ..extraction.chinese_keys import ChineseKeyExtractor
from ..models.catalog import TranslationCatalog
from .merger import NewTranslations

logger = logging.getLogger(__name__)

PLACEHOLDER_ONLY_RE = re.compile(
    r"(?:%(?:\d+\$)?(?:\.\d+)?(?:ll|l|h)?[@dfsuxXc]|%%|\{\{?\w*\}?\}|[\s\-/.:])+"
)


class TranslationProvider(Protocol):
    """The batch translation capability the pipeline consumes."""

    name: str

    def translate_batch(
        self, texts: List[str], target_lang: str, source_lang: Optional[str] = None
    ) -> List[str]:
        ...


@dataclass
class TranslationStats:
    """Statistics for one target language."""

    language: str
    total: int = 0
    translated: int = 0
    skipped: int = 0
    requests: int = 0


class CatalogTranslator:
    """
    Produces ``{key: {language: text}}`` for a catalog.

    Strategy:
    1. Collect each entry's source text (or the Han-script keys themselves)
    2. De-duplicate texts so each is sent once per language
    3. Copy through texts that need no translation (numbers, URLs, placeholders)
    4. Send the rest in batches and fan the results back out to keys
    """

    def __init__(
        self,
        provider: TranslationProvider,
        batch_size: int = 20,
        extractor: Optional[ChineseKeyExtractor] = None,
    ):
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.provider = provider
        self.batch_size = batch_size
        self.extractor = extractor or ChineseKeyExtractor()

    def collect_sources(
        self, catalog: TranslationCatalog, source_language: str, keys_as_source: bool = False
    ) -> Dict[str, str]:
        """Key -> text to translate."""
        if keys_as_source:
            return {
                key: key for key in sorted(self.extractor.extract_catalog(catalog))
                if catalog.entries[key].should_translate
            }
        sources = {}
        for key, text in catalog.get_translatable_strings().items():
            value = catalog.entries[key].translations.get(source_language) or text
            if value.strip():
                sources[key] = value
        return sources

    def translate_catalog(
        self,
        catalog: TranslationCatalog,
        languages: Sequence[str],
        source_language: Optional[str] = None,
        keys_as_source: bool = False,
        only_missing: bool = False,
        progress_callback: Optional[Callable[[int, int, str], None]] = None,
    ) -> tuple[NewTranslations, List[TranslationStats]]:
        """
        Translate the catalog into every target language.

        Args:
            catalog: Decoded catalog to read source texts from
            languages: Target language codes; the source language is ignored
            source_language: Overrides the catalog's source language
            keys_as_source: Translate Han-script keys instead of source values
            only_missing: Skip keys that already have a value in a language
            progress_callback: Optional callback(current, total, language)

        Returns:
            Tuple of (new translations, per-language statistics)

        Raises:
            TranslationError: if the provider fails; nothing partial is returned
        """
        source = source_language or catalog.source_language
        sources = self.collect_sources(catalog, source, keys_as_source)
        targets = [lang for lang in dict.fromkeys(languages) if lang and lang != source]

        new_translations: NewTranslations = {}
        all_stats = []
        for index, lang in enumerate(targets):
            pending = {
                key: text for key, text in sources.items()
                if not (only_missing and catalog.entries[key].has_translation(lang))
            }
            translated, stats = self._translate_language(pending, lang, source)
            for key, text in translated.items():
                new_translations.setdefault(key, {})[lang] = text
            all_stats.append(stats)
            logger.info(
                "Translated %d texts to %s (%d copied unchanged)",
                stats.translated, lang, stats.skipped,
            )
            if progress_callback:
                progress_callback(index + 1, len(targets), lang)

        return new_translations, all_stats

    def _translate_language(
        self, strings: Dict[str, str], target_lang: str, source_lang: str
    ) -> tuple[Dict[str, str], TranslationStats]:
        stats = TranslationStats(language=target_lang, total=len(strings))
        keys_by_text: Dict[str, List[str]] = {}
        for key, text in strings.items():
            keys_by_text.setdefault(text, []).append(key)

        result: Dict[str, str] = {}
        to_send = []
        for text, keys in keys_by_text.items():
            if self._is_non_translatable(text):
                for key in keys:
                    result[key] = text
                stats.skipped += len(keys)
            else:
                to_send.append(text)

        for i in range(0, len(to_send), self.batch_size):
            batch = to_send[i:i + self.batch_size]
            translations = self.provider.translate_batch(batch, target_lang, source_lang)
            stats.requests += 1
            if len(translations) != len(batch):
                raise TranslationError(
                    f"{self.provider.name} returned {len(translations)} results "
                    f"for {len(batch)} texts ({target_lang})"
                )
            for text, translation in zip(batch, translations):
                for key in keys_by_text[text]:
                    result[key] = translation
                    stats.translated += 1

        return result, stats

    def _is_non_translatable(self, text: str) -> bool:
        """Check if text should be copied as-is (symbols, numbers only, etc.)."""
        stripped = text.strip()

        if not stripped:
            return True

        # Single characters that are symbols
        if len(stripped) == 1 and not stripped.isalpha():
            return True

        # Pure numbers or percentages
        if stripped.replace(".", "").replace(",", "").replace("%", "").isdigit():
            return True

        # URLs
        if stripped.startswith(("http://", "https://", "www.")):
            return True

        # Placeholders only (e.g., "%@", "%lld", "{count}")
        if PLACEHOLDER_ONLY_RE.fullmatch(stripped):
            return True

        return False
