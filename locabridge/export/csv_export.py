"""Flatten a catalog into a spreadsheet-friendly CSV."""

import csv
import io
import logging
from pathlib import Path
from typing import List

from ..errors import EncodeError
from ..models.catalog import TranslationCatalog

logger = logging.getLogger(__name__)

BOM = "\ufeff"


class ExportProjection:
    """One row per key, one column per language that has any content."""

    def languages(self, catalog: TranslationCatalog) -> List[str]:
        """Languages with at least one non-empty value, source language first."""
        non_empty = set()
        for entry in catalog.entries.values():
            non_empty.update(lang for lang, value in entry.translations.items() if value)
        return [lang for lang in catalog.languages() if lang in non_empty]

    def project(self, catalog: TranslationCatalog) -> List[List[str]]:
        """Header row followed by data rows, values unescaped."""
        languages = self.languages(catalog)
        rows = [["Key"] + languages]
        for key in catalog.sorted_keys():
            translations = catalog.entries[key].translations
            rows.append([key] + [translations.get(lang, "") for lang in languages])
        return rows

    def to_csv(self, catalog: TranslationCatalog) -> str:
        """CSV text prefixed with a byte-order mark; every data cell is quoted."""
        rows = self.project(catalog)
        buffer = io.StringIO()
        csv.writer(buffer, lineterminator="\n").writerow(rows[0])
        data_writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        data_writer.writerows(rows[1:])
        return BOM + buffer.getvalue()

    def write(self, catalog: TranslationCatalog, output_path: str) -> int:
        """Write the CSV and return the number of data rows."""
        path = Path(output_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(self.to_csv(catalog), encoding="utf-8", newline="")
        except OSError as e:
            raise EncodeError(f"Cannot write export: {e.strerror or e}", path=output_path, format_name="csv") from e
        logger.info("Exported %d rows to %s", len(catalog.entries), output_path)
        return len(catalog.entries)
