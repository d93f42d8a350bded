"""Shared plumbing for format codecs."""

import json
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from ..errors import DecodeError, EncodeError
from ..models.catalog import LocalizationFormat, TranslationCatalog


class FormatCodec(ABC):
    """Decodes file bytes into a catalog and encodes a catalog back to bytes."""

    format: LocalizationFormat

    @abstractmethod
    def decode(self, data: bytes, source_name: str = "<memory>") -> TranslationCatalog:
        """Parse raw bytes. Raises DecodeError naming ``source_name``."""

    @abstractmethod
    def encode(self, catalog: TranslationCatalog, language: Optional[str] = None) -> bytes:
        """Serialize a catalog; single-language formats write only ``language``."""

    def _decode_text(self, data: bytes, source_name: str) -> str:
        if data.startswith((b"\xff\xfe", b"\xfe\xff")):
            encoding = "utf-16"
        else:
            encoding = "utf-8-sig"
        try:
            return data.decode(encoding)
        except UnicodeDecodeError as e:
            raise DecodeError(
                f"Invalid text encoding: {e.reason}",
                path=source_name,
                format_name=self.format.value,
            ) from e

    def _load_json_object(self, data: bytes, source_name: str) -> Dict[str, Any]:
        text = self._decode_text(data, source_name)
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError as e:
            raise DecodeError(
                f"Invalid JSON at line {e.lineno} column {e.colno}: {e.msg}",
                path=source_name,
                format_name=self.format.value,
            ) from e
        if not isinstance(parsed, dict):
            raise DecodeError(
                f"Expected a JSON object at the top level, got {type(parsed).__name__}",
                path=source_name,
                format_name=self.format.value,
            )
        return parsed

    def _dump_json(self, data: Dict[str, Any]) -> bytes:
        try:
            text = json.dumps(data, indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise EncodeError(f"Cannot serialize catalog: {e}", format_name=self.format.value) from e
        return (text + "\n").encode("utf-8")


class SingleLanguageCodec(FormatCodec):
    """Base for formats that hold exactly one language per file."""

    def __init__(self, default_language: str = "en"):
        self.default_language = default_language

    def _values_for(self, catalog: TranslationCatalog, language: Optional[str]) -> Dict[str, str]:
        """Key -> value for one language, in catalog order, skipping absent values."""
        lang = language or catalog.source_language
        values = {}
        for key, entry in catalog.entries.items():
            if lang in entry.translations:
                values[key] = entry.translations[lang]
        return values
