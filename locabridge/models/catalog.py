"""Normalized in-memory catalog shared by every format codec."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class LocalizationFormat(str, Enum):
    """On-disk catalog formats."""

    STRINGS = "strings"
    XCSTRINGS = "xcstrings"
    ARB = "arb"
    JSON_CATALOG = "json"

    @property
    def extension(self) -> str:
        return f".{self.value}"

    @property
    def is_multi_language(self) -> bool:
        """Whether one file holds every language (only .xcstrings does)."""
        return self is LocalizationFormat.XCSTRINGS


class PlatformType(str, Enum):
    """Target platforms and the formats each accepts as input."""

    IOS = "ios"
    FLUTTER = "flutter"
    ELECTRON = "electron"

    @property
    def accepted_formats(self) -> List[LocalizationFormat]:
        return _PLATFORM_FORMATS[self]


_PLATFORM_FORMATS = {
    PlatformType.IOS: [LocalizationFormat.STRINGS, LocalizationFormat.XCSTRINGS],
    PlatformType.FLUTTER: [LocalizationFormat.ARB],
    PlatformType.ELECTRON: [LocalizationFormat.JSON_CATALOG],
}


@dataclass
class CatalogEntry:
    """A single translatable unit and its values across languages."""

    key: str
    translations: Dict[str, str] = field(default_factory=dict)
    comment: Optional[str] = None
    extraction_state: Optional[str] = None  # xcstrings: manual, extracted_with_value, stale
    states: Dict[str, str] = field(default_factory=dict)  # language -> stringUnit.state
    variations: Dict[str, Any] = field(default_factory=dict)  # language -> plural/device variations
    metadata: Optional[Dict[str, Any]] = None  # ARB "@key" annotation
    extra: Dict[str, Any] = field(default_factory=dict)  # xcstrings entry fields kept as-is

    @property
    def should_translate(self) -> bool:
        return self.extra.get("shouldTranslate", True) is not False

    def get_source_value(self, source_language: str, fallback_to_key: bool = True) -> str:
        """Get the source language value, falling back to the key itself if allowed."""
        value = self.translations.get(source_language)
        if value or not fallback_to_key:
            return value or ""
        return self.key

    def has_translation(self, language: str) -> bool:
        """Check if this entry has a non-empty value for the given language."""
        return bool(self.translations.get(language))

    def set_translation(self, language: str, value: str, state: Optional[str] = None) -> None:
        """Set a value for the given language, optionally marking its state."""
        self.translations[language] = value
        if state is not None:
            self.states[language] = state


@dataclass
class TranslationCatalog:
    """A set of entries addressed by key, with one authoritative language."""

    source_language: str
    entries: Dict[str, CatalogEntry] = field(default_factory=dict)
    version: str = "1.0"
    attributes: Dict[str, Any] = field(default_factory=dict)  # file-level extras such as ARB "@@locale"
    keys_are_source: bool = False  # xcstrings: a key with no source value is its own source text

    def add_entry(self, entry: CatalogEntry) -> None:
        if not entry.key:
            raise ValueError("Catalog keys must be non-empty")
        self.entries[entry.key] = entry

    def sorted_keys(self) -> List[str]:
        return sorted(self.entries.keys())

    def languages(self) -> List[str]:
        """All languages present, source language first, the rest sorted."""
        found = set()
        for entry in self.entries.values():
            found.update(entry.translations.keys())
        found.discard(self.source_language)
        return [self.source_language] + sorted(found)

    def get_untranslated_keys(self, target_language: str) -> List[str]:
        """Get list of keys that don't have a value for the target language."""
        return [
            key for key in self.sorted_keys()
            if not self.entries[key].has_translation(target_language)
        ]

    def get_translatable_strings(self) -> Dict[str, str]:
        """Get all strings that need translation (key -> source value)."""
        result = {}
        for key in self.sorted_keys():
            entry = self.entries[key]
            if not entry.should_translate:
                continue
            source_value = entry.get_source_value(self.source_language, self.keys_are_source)
            if source_value and source_value.strip():
                result[key] = source_value
        return result

    def is_empty(self) -> bool:
        return not self.entries
