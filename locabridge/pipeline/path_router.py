"""Resolve codecs and output locations for a conversion request."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from ..errors import ValidationError
from ..models.catalog import LocalizationFormat, PlatformType

EXPORT_FORMATS = ("csv",)


class OutputLayout(str, Enum):
    SINGLE_FILE = "single_file"
    PER_LANGUAGE = "per_language"


@dataclass
class ConversionRequest:
    """Everything one conversion run needs; nothing is read from global state."""

    platform: PlatformType
    input_path: str
    output_path: str
    languages: List[str] = field(default_factory=list)
    source_language: Optional[str] = None
    keys_as_source: bool = False
    only_missing: bool = False
    sync_to_source: bool = False
    export: Optional[str] = None
    dry_run: bool = False


@dataclass
class OutputTarget:
    """One file to write. ``language`` is None for multi-language files."""

    path: Path
    language: Optional[str] = None
    sync: bool = False


@dataclass
class RoutePlan:
    platform: PlatformType
    input_path: Path
    input_format: LocalizationFormat
    layout: OutputLayout
    targets: List[OutputTarget]
    export_path: Optional[Path] = None


class PathRouter:
    """Validates inputs against a platform and lays out its outputs."""

    def input_format(self, platform: PlatformType, input_path: str) -> LocalizationFormat:
        """Format implied by the input extension. Raises ValidationError on mismatch."""
        suffix = Path(input_path).suffix.lower().lstrip(".")
        for fmt in platform.accepted_formats:
            if fmt.value == suffix:
                return fmt
        accepted = ", ".join(f".{fmt.value}" for fmt in platform.accepted_formats)
        found = f".{suffix}" if suffix else "no extension"
        raise ValidationError(
            f"Platform {platform.value} accepts {accepted} input, got {found}",
            path=input_path,
        )

    def plan(self, request: ConversionRequest) -> RoutePlan:
        """Resolve the codec and every output path before any file is read."""
        fmt = self.input_format(request.platform, request.input_path)
        input_path = Path(request.input_path)
        output_path = Path(request.output_path)
        languages = [lang.strip() for lang in request.languages if lang and lang.strip()]
        languages = list(dict.fromkeys(languages))

        if not languages:
            raise ValidationError("At least one target language is required")
        if request.export and request.export.lower() not in EXPORT_FORMATS:
            raise ValidationError(f"Unsupported export format '{request.export}'")

        if fmt.is_multi_language:
            layout = OutputLayout.SINGLE_FILE
            targets = [OutputTarget(path=self._single_file_path(input_path, output_path, fmt))]
            if request.sync_to_source:
                targets.append(OutputTarget(path=input_path, sync=True))
            export_path = targets[0].path.with_suffix(".csv")
        else:
            layout = OutputLayout.PER_LANGUAGE
            if output_path.is_file():
                raise ValidationError(
                    "Output must be a directory for per-language files", path=str(output_path)
                )
            targets = [
                OutputTarget(path=output_path / f"{lang}{fmt.extension}", language=lang)
                for lang in languages
            ]
            if request.sync_to_source:
                targets.extend(
                    OutputTarget(path=input_path.parent / f"{lang}{fmt.extension}", language=lang, sync=True)
                    for lang in languages
                )
            export_path = output_path / f"{input_path.stem}.csv"

        targets = self._dedupe(targets)
        return RoutePlan(
            platform=request.platform,
            input_path=input_path,
            input_format=fmt,
            layout=layout,
            targets=targets,
            export_path=export_path if request.export else None,
        )

    def _single_file_path(self, input_path: Path, output_path: Path, fmt: LocalizationFormat) -> Path:
        if output_path.is_dir():
            return output_path / input_path.name
        if output_path.suffix.lower() != fmt.extension:
            raise ValidationError(
                f"Output file must end with {fmt.extension}", path=str(output_path)
            )
        return output_path

    def _dedupe(self, targets: List[OutputTarget]) -> List[OutputTarget]:
        seen = set()
        unique = []
        for target in targets:
            resolved = target.path.resolve()
            if resolved in seen:
                continue
            seen.add(resolved)
            unique.append(target)
        return unique
