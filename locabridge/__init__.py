"""Localization catalog conversion and machine-translation enrichment."""

__version__ = "0.1.0"
