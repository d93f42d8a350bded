"""Codec for Apple's line-oriented .strings format."""

import logging
import re
from typing import Optional

from ..models.catalog import CatalogEntry, LocalizationFormat, TranslationCatalog
from .base import SingleLanguageCodec

logger = logging.getLogger(__name__)

ENTRY_RE = re.compile(r'^"((?:[^"\\]|\\.)*)"\s*=\s*"((?:[^"\\]|\\.)*)"\s*;')
ESCAPE_RE = re.compile(r"\\(.)")

_UNESCAPES = {"n": "\n", "r": "\r", "t": "\t", '"': '"', "\\": "\\"}
_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t"}


def unescape(text: str) -> str:
    return ESCAPE_RE.sub(lambda m: _UNESCAPES.get(m.group(1), m.group(1)), text)


def escape(text: str) -> str:
    return "".join(_ESCAPES.get(ch, ch) for ch in text)


def _is_comment(line: str) -> bool:
    return line.startswith(("//", "/*", "*")) or line.endswith("*/")


class StringsCodec(SingleLanguageCodec):
    """Reads and writes ``"key" = "value";`` files.

    Every parsed key belongs to the file's single language. Lines that do not
    match the assignment pattern are skipped with a warning rather than
    failing the whole file.
    """

    format = LocalizationFormat.STRINGS

    def decode(self, data: bytes, source_name: str = "<memory>") -> TranslationCatalog:
        text = self._decode_text(data, source_name)
        catalog = TranslationCatalog(source_language=self.default_language)

        for lineno, line in enumerate(text.splitlines(), start=1):
            trimmed = line.strip()
            if not trimmed:
                continue

            # Assignments may end with a trailing comment
            match = ENTRY_RE.match(trimmed)
            if not match and _is_comment(trimmed):
                continue
            if not match or not match.group(1):
                logger.warning("Skipping malformed line %d in %s: %r", lineno, source_name, trimmed[:80])
                continue

            key = unescape(match.group(1))
            catalog.add_entry(
                CatalogEntry(key=key, translations={self.default_language: unescape(match.group(2))})
            )

        logger.debug("Decoded %d entries from %s", len(catalog.entries), source_name)
        return catalog

    def encode(self, catalog: TranslationCatalog, language: Optional[str] = None) -> bytes:
        lines = []
        values = self._values_for(catalog, language)
        for key, value in values.items():
            comment = catalog.entries[key].comment
            if comment:
                lines.append(f"// {' '.join(comment.splitlines())}")
            lines.append(f'"{escape(key)}" = "{escape(value)}";')
        return ("\n".join(lines) + "\n").encode("utf-8") if lines else b""
