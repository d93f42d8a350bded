"""Tabular export of catalogs."""

from .csv_export import ExportProjection

__all__ = ["ExportProjection"]
