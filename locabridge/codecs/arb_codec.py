"""Codec for Flutter's Application Resource Bundle (.arb) files."""

import logging
from typing import Any, Dict, Optional

from ..errors import DecodeError
from ..models.catalog import CatalogEntry, LocalizationFormat, TranslationCatalog
from .base import SingleLanguageCodec

logger = logging.getLogger(__name__)

LOCALE_ATTRIBUTE = "@@locale"


class ArbCodec(SingleLanguageCodec):
    """Flat key -> string JSON where ``@key`` annotates ``key``.

    ``@@``-prefixed file attributes and annotations whose data key is missing
    are kept in ``catalog.attributes`` so they survive a decode/encode cycle.
    """

    format = LocalizationFormat.ARB

    def decode(self, data: bytes, source_name: str = "<memory>") -> TranslationCatalog:
        root = self._load_json_object(data, source_name)

        locale = root.get(LOCALE_ATTRIBUTE)
        language = locale if isinstance(locale, str) and locale else self.default_language
        catalog = TranslationCatalog(source_language=language)
        annotations: Dict[str, Any] = {}

        for key, value in root.items():
            if key.startswith("@@"):
                catalog.attributes[key] = value
            elif key.startswith("@"):
                annotations[key] = value
            elif not isinstance(value, str):
                raise DecodeError(
                    f"Value for '{key}' must be a string, got {type(value).__name__}",
                    path=source_name,
                    format_name=self.format.value,
                )
            elif key:
                catalog.add_entry(CatalogEntry(key=key, translations={language: value}))

        for annotation_key, meta in annotations.items():
            entry = catalog.entries.get(annotation_key[1:])
            if entry is not None:
                entry.metadata = meta
                if isinstance(meta, dict) and isinstance(meta.get("description"), str):
                    entry.comment = meta["description"]
            else:
                catalog.attributes[annotation_key] = meta

        logger.debug("Decoded %d entries from %s", len(catalog.entries), source_name)
        return catalog

    def encode(self, catalog: TranslationCatalog, language: Optional[str] = None) -> bytes:
        lang = language or catalog.source_language
        output: Dict[str, Any] = {}

        for key, value in catalog.attributes.items():
            if key.startswith("@@"):
                output[key] = lang if key == LOCALE_ATTRIBUTE else value

        for key, value in self._values_for(catalog, lang).items():
            output[key] = value
            metadata = catalog.entries[key].metadata
            if metadata is not None:
                output[f"@{key}"] = metadata

        for key, value in catalog.attributes.items():
            if not key.startswith("@@"):
                output[key] = value

        return self._dump_json(output)
