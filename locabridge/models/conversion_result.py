"""Outcome objects returned by pipeline operations."""

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class WriteFailure:
    """A single output file that could not be written."""

    language: str
    path: str
    reason: str


@dataclass
class ConversionResult:
    """Represents the outcome of one conversion run."""

    message: str
    items: int = 0
    stage: Optional[str] = None  # stage that failed; None on success
    error: Optional[str] = None
    written: List[str] = field(default_factory=list)
    failures: List[WriteFailure] = field(default_factory=list)
    export_path: Optional[str] = None
    stats: List[Any] = field(default_factory=list)  # per-language TranslationStats

    @property
    def success(self) -> bool:
        """Check if the conversion completed without any failure."""
        return self.error is None and not self.failures

    @classmethod
    def failed(cls, stage: str, error: str) -> "ConversionResult":
        return cls(
            message=f"Conversion failed during {stage}: {error}",
            stage=stage,
            error=error,
        )
