"""Upsert machine translations into a catalog."""

import logging
from typing import Dict, Optional

from ..models.catalog import CatalogEntry, TranslationCatalog

logger = logging.getLogger(__name__)

NewTranslations = Dict[str, Dict[str, str]]


class TranslationMerger:
    """Writes target-language values into a catalog in place.

    Existing values for a language are overwritten (last write wins). The
    source-language value, comments, extraction state and per-language states
    are never touched; new values get no state.
    """

    def merge(
        self,
        catalog: TranslationCatalog,
        new_translations: NewTranslations,
        source_language: Optional[str] = None,
    ) -> TranslationCatalog:
        """
        Merge translations into the catalog.

        Args:
            catalog: Catalog to update in place
            new_translations: {key: {language: text}}
            source_language: Language never written by this merge
                (defaults to the catalog's source language)

        Returns:
            The same catalog, for chaining
        """
        source = source_language or catalog.source_language
        added = updated = 0

        for key, by_language in new_translations.items():
            targets = {lang: text for lang, text in by_language.items() if lang != source}
            if not key or not targets:
                continue
            entry = catalog.entries.get(key)
            if entry is None:
                entry = CatalogEntry(key=key)
                catalog.add_entry(entry)

            for language, text in targets.items():
                if language in entry.translations:
                    updated += 1
                else:
                    added += 1
                entry.translations[language] = text

        logger.info("Merged translations: %d added, %d updated", added, updated)
        return catalog
