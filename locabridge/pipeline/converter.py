"""Orchestrates decode, translate, merge, encode and export for one request."""

import logging
from typing import Callable, List, Optional

from ..errors import LocalizationError
from ..export.csv_export import ExportProjection
from ..models.catalog import TranslationCatalog
from ..models.conversion_result import ConversionResult
from ..translation.merger import TranslationMerger
from ..translation.translator import CatalogTranslator, TranslationStats
from .catalog_io import CatalogIO
from .path_router import ConversionRequest, PathRouter, RoutePlan

logger = logging.getLogger(__name__)


class Converter:
    """
    Runs one conversion request end to end.

    Stages run strictly in order: validate, decode, translate, merge, write,
    export. Any LocalizationError ends the run with a failed result naming
    the stage; no exception escapes ``convert``.
    """

    def __init__(
        self,
        translator: Optional[CatalogTranslator] = None,
        router: Optional[PathRouter] = None,
        catalog_io: Optional[CatalogIO] = None,
        merger: Optional[TranslationMerger] = None,
        exporter: Optional[ExportProjection] = None,
        default_language: str = "en",
    ):
        self.translator = translator
        self.router = router or PathRouter()
        self.io = catalog_io or CatalogIO(default_language)
        self.merger = merger or TranslationMerger()
        self.exporter = exporter or ExportProjection()

    def convert(
        self,
        request: ConversionRequest,
        progress_callback: Optional[Callable[[int, int, str], None]] = None,
    ) -> ConversionResult:
        try:
            plan = self.router.plan(request)
            catalog = self.io.read(plan.input_path, plan.input_format, request.source_language)
        except LocalizationError as e:
            return ConversionResult.failed(e.stage, str(e))

        if catalog.is_empty():
            return ConversionResult.failed("decode", f"No translatable content found in {plan.input_path}")

        source_language = catalog.source_language
        items = len(catalog.entries)
        stats: List[TranslationStats] = []

        if self.translator is not None:
            if request.keys_as_source and not self.translator.extractor.extract_catalog(catalog):
                return ConversionResult.failed("decode", f"No Chinese keys found in {plan.input_path}")
            try:
                new_translations, stats = self.translator.translate_catalog(
                    catalog,
                    request.languages,
                    source_language=source_language,
                    keys_as_source=request.keys_as_source,
                    only_missing=request.only_missing,
                    progress_callback=progress_callback,
                )
            except LocalizationError as e:
                return ConversionResult.failed(e.stage, str(e))
            self.merger.merge(catalog, new_translations, source_language)

        if request.dry_run:
            return ConversionResult(
                message=f"Dry run: {items} items would be written to {len(plan.targets)} file(s)",
                items=items,
                stats=stats,
            )

        written, failures = self.io.write_all(catalog, plan.targets, plan.input_format)
        result = ConversionResult(
            message="", items=items, written=written, failures=failures, stats=stats
        )
        if failures:
            result.stage = "write"

        if plan.export_path is not None:
            try:
                self.exporter.write(catalog, str(plan.export_path))
                result.export_path = str(plan.export_path)
            except LocalizationError as e:
                result.stage = result.stage or "export"
                result.error = str(e)

        result.message = self._summary(result, plan)
        return result

    def export(self, request: ConversionRequest) -> ConversionResult:
        """Decode the input and write only the CSV projection to ``output_path``."""
        try:
            fmt = self.router.input_format(request.platform, request.input_path)
            catalog = self.io.read(request.input_path, fmt, request.source_language)
            self.exporter.write(catalog, request.output_path)
        except LocalizationError as e:
            return ConversionResult.failed(e.stage, str(e))
        return ConversionResult(
            message=f"Exported {len(catalog.entries)} items to {request.output_path}",
            items=len(catalog.entries),
            export_path=request.output_path,
        )

    def load(self, request: ConversionRequest) -> TranslationCatalog:
        """Validate and decode only. Raises LocalizationError."""
        fmt = self.router.input_format(request.platform, request.input_path)
        return self.io.read(request.input_path, fmt, request.source_language)

    def _summary(self, result: ConversionResult, plan: RoutePlan) -> str:
        if result.failures:
            failed = ", ".join(f"{f.language} ({f.reason})" for f in result.failures)
            message = (
                f"Conversion failed during write: {len(result.failures)} of "
                f"{len(plan.targets)} file(s) not written: {failed}"
            )
            if result.error:
                message += f"; export also failed: {result.error}"
            return message
        if result.error:
            return f"Conversion failed during {result.stage}: {result.error}"
        return f"Successfully converted {result.items} items into {len(result.written)} file(s)"
