"""Codec for flat key -> string JSON catalogs (electron/web)."""

import logging
from typing import Optional

from ..errors import DecodeError
from ..models.catalog import CatalogEntry, LocalizationFormat, TranslationCatalog
from .base import SingleLanguageCodec

logger = logging.getLogger(__name__)


class JsonCatalogCodec(SingleLanguageCodec):
    """Flat JSON object, one language per file, no metadata."""

    format = LocalizationFormat.JSON_CATALOG

    def decode(self, data: bytes, source_name: str = "<memory>") -> TranslationCatalog:
        root = self._load_json_object(data, source_name)
        catalog = TranslationCatalog(source_language=self.default_language)

        for key, value in root.items():
            if not isinstance(value, str):
                raise DecodeError(
                    f"Value for '{key}' must be a string, got {type(value).__name__}",
                    path=source_name,
                    format_name=self.format.value,
                )
            if not key:
                logger.warning("Skipping entry with empty key in %s", source_name)
                continue
            catalog.add_entry(CatalogEntry(key=key, translations={self.default_language: value}))

        logger.debug("Decoded %d entries from %s", len(catalog.entries), source_name)
        return catalog

    def encode(self, catalog: TranslationCatalog, language: Optional[str] = None) -> bytes:
        return self._dump_json(self._values_for(catalog, language))
