"""Machine translation of catalogs and merging of the results."""

from .merger import TranslationMerger
from .translator import CatalogTranslator, TranslationProvider, TranslationStats

__all__ = ["TranslationMerger", "CatalogTranslator", "TranslationProvider", "TranslationStats"]
