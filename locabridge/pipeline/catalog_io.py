"""Read catalogs from disk and write encoded outputs."""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from ..codecs import get_codec
from ..errors import DecodeError, EncodeError
from ..models.catalog import LocalizationFormat, TranslationCatalog
from ..models.conversion_result import WriteFailure
from .path_router import OutputTarget

logger = logging.getLogger(__name__)


class CatalogIO:
    """File access around the codecs."""

    def __init__(self, default_language: str = "en"):
        self.default_language = default_language

    def read(self, path: Path, fmt: LocalizationFormat, language: Optional[str] = None) -> TranslationCatalog:
        """Decode a file. ``language`` names the language of single-language files."""
        try:
            data = Path(path).read_bytes()
        except OSError as e:
            raise DecodeError(
                f"Cannot read file: {e.strerror or e}", path=str(path), format_name=fmt.value
            ) from e
        catalog = get_codec(fmt, language or self.default_language).decode(data, source_name=str(path))
        logger.info("Read %d entries from %s", len(catalog.entries), path)
        return catalog

    def write(self, catalog: TranslationCatalog, target: OutputTarget, fmt: LocalizationFormat) -> Path:
        """Encode and write one target. Raises EncodeError."""
        data = get_codec(fmt, self.default_language).encode(catalog, target.language)
        try:
            target.path.parent.mkdir(parents=True, exist_ok=True)
            target.path.write_bytes(data)
        except OSError as e:
            raise EncodeError(
                f"Cannot write file: {e.strerror or e}", path=str(target.path), format_name=fmt.value
            ) from e
        logger.debug("Wrote %s", target.path)
        return target.path

    def write_all(
        self,
        catalog: TranslationCatalog,
        targets: List[OutputTarget],
        fmt: LocalizationFormat,
    ) -> Tuple[List[str], List[WriteFailure]]:
        """Attempt every target; collect failures instead of stopping at the first."""
        written: List[str] = []
        failures: List[WriteFailure] = []
        for target in targets:
            try:
                written.append(str(self.write(catalog, target, fmt)))
            except EncodeError as e:
                logger.warning("Failed to write %s: %s", target.path, e.message)
                failures.append(WriteFailure(
                    language=target.language or catalog.source_language,
                    path=str(target.path),
                    reason=e.message,
                ))
        return written, failures
