"""Codec for Apple's .xcstrings JSON format (Xcode 15+)."""

import logging
from typing import Any, Dict, Optional

from ..errors import DecodeError
from ..models.catalog import CatalogEntry, LocalizationFormat, TranslationCatalog
from .base import FormatCodec

logger = logging.getLogger(__name__)

# Entry fields mapped onto CatalogEntry attributes; the rest is carried in CatalogEntry.extra
ENTRY_FIELDS = ("comment", "extractionState", "localizations", "source")


class XCStringsCodec(FormatCodec):
    """Codec for .xcstrings string catalogs.

    Two entry shapes are accepted on read: the source value stored as a
    regular ``localizations[sourceLanguage]`` record, and an older shape with
    the source value under ``source.stringUnit.value``. Output always uses the
    first shape.
    """

    format = LocalizationFormat.XCSTRINGS

    def decode(self, data: bytes, source_name: str = "<memory>") -> TranslationCatalog:
        """
        Parse .xcstrings content.

        Args:
            data: Raw file bytes
            source_name: File name used in error messages

        Returns:
            TranslationCatalog holding every entry of the file
        """
        root = self._load_json_object(data, source_name)

        source_language = root.get("sourceLanguage")
        if not isinstance(source_language, str) or not source_language:
            raise self._error("Missing required field 'sourceLanguage'", source_name)

        strings = root.get("strings")
        if not isinstance(strings, dict):
            raise self._error("Missing required field 'strings'", source_name)

        catalog = TranslationCatalog(
            source_language=source_language,
            version=str(root.get("version", "1.0")),
            keys_are_source=True,
        )

        for key, entry_data in strings.items():
            if not key:
                logger.warning("Skipping entry with empty key in %s", source_name)
                continue
            if not isinstance(entry_data, dict):
                raise self._error(f"Entry '{key}' is not an object", source_name)
            catalog.add_entry(self._parse_entry(key, entry_data, source_language, source_name))

        logger.debug("Decoded %d entries from %s", len(catalog.entries), source_name)
        return catalog

    def _parse_entry(
        self,
        key: str,
        entry_data: Dict[str, Any],
        source_language: str,
        source_name: str,
    ) -> CatalogEntry:
        """Parse a single string entry."""
        entry = CatalogEntry(
            key=key,
            comment=entry_data.get("comment"),
            extraction_state=entry_data.get("extractionState"),
            extra={k: v for k, v in entry_data.items() if k not in ENTRY_FIELDS},
        )

        localizations = entry_data.get("localizations", {})
        if not isinstance(localizations, dict):
            raise self._error(f"Entry '{key}' has invalid 'localizations'", source_name)

        for lang, loc_data in localizations.items():
            if not isinstance(loc_data, dict):
                raise self._error(f"Entry '{key}' has invalid localization '{lang}'", source_name)
            self._parse_localization(entry, lang, loc_data)

        # Older catalogs keep the source text outside the localizations map
        source = entry_data.get("source")
        if source_language not in entry.translations and isinstance(source, dict):
            self._parse_localization(entry, source_language, source)

        return entry

    def _parse_localization(self, entry: CatalogEntry, lang: str, loc_data: Dict[str, Any]) -> None:
        string_unit = loc_data.get("stringUnit")
        if isinstance(string_unit, dict):
            entry.translations[lang] = str(string_unit.get("value", ""))
            state = string_unit.get("state", loc_data.get("state"))
            if state is not None:
                entry.states[lang] = state

        if "variations" in loc_data:
            entry.variations[lang] = loc_data["variations"]

    def _error(self, message: str, source_name: str) -> DecodeError:
        return DecodeError(message, path=source_name, format_name=self.format.value)

    def encode(self, catalog: TranslationCatalog, language: Optional[str] = None) -> bytes:
        """Serialize the whole catalog; ``language`` is ignored, every language is written."""
        strings_dict = {}
        for key in catalog.sorted_keys():
            strings_dict[key] = self._entry_to_dict(catalog.entries[key])

        return self._dump_json({
            "sourceLanguage": catalog.source_language,
            "strings": strings_dict,
            "version": catalog.version,
        })

    def _entry_to_dict(self, entry: CatalogEntry) -> Dict[str, Any]:
        entry_dict: Dict[str, Any] = dict(entry.extra)

        if entry.comment:
            entry_dict["comment"] = entry.comment

        if entry.extraction_state:
            entry_dict["extractionState"] = entry.extraction_state

        localizations_dict = {}
        for lang in sorted(set(entry.translations) | set(entry.variations)):
            loc_dict: Dict[str, Any] = {}
            if lang in entry.translations:
                unit = {}
                if lang in entry.states:
                    unit["state"] = entry.states[lang]
                unit["value"] = entry.translations[lang]
                loc_dict["stringUnit"] = unit
            if lang in entry.variations:
                loc_dict["variations"] = entry.variations[lang]
            localizations_dict[lang] = loc_dict

        if localizations_dict:
            entry_dict["localizations"] = localizations_dict

        return dict(sorted(entry_dict.items()))
