"""Format codecs: one per on-disk localization format."""

from ..models.catalog import LocalizationFormat
from .arb_codec import ArbCodec
from .base import FormatCodec
from .json_codec import JsonCatalogCodec
from .strings_codec import StringsCodec
from .xcstrings_codec import XCStringsCodec


def get_codec(fmt: LocalizationFormat, default_language: str = "en") -> FormatCodec:
    """Return the codec for a format; ``default_language`` applies to single-language files."""
    if fmt is LocalizationFormat.XCSTRINGS:
        return XCStringsCodec()
    if fmt is LocalizationFormat.STRINGS:
        return StringsCodec(default_language)
    if fmt is LocalizationFormat.ARB:
        return ArbCodec(default_language)
    return JsonCatalogCodec(default_language)


__all__ = [
    "FormatCodec",
    "StringsCodec",
    "XCStringsCodec",
    "ArbCodec",
    "JsonCatalogCodec",
    "get_codec",
]
