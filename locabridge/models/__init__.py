"""Data models for the localization pipeline."""

from .catalog import CatalogEntry, LocalizationFormat, PlatformType, TranslationCatalog
from .conversion_result import ConversionResult, WriteFailure
from .json_value import JsonKind, JsonValue

__all__ = [
    "CatalogEntry",
    "LocalizationFormat",
    "PlatformType",
    "TranslationCatalog",
    "ConversionResult",
    "WriteFailure",
    "JsonKind",
    "JsonValue",
]
