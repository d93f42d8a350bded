"""Extraction of translatable text from arbitrary JSON."""

from .chinese_keys import ChineseKeyExtractor, contains_han

__all__ = ["ChineseKeyExtractor", "contains_han"]
