"""Error taxonomy for the conversion pipeline."""

from typing import Optional


class LocalizationError(Exception):
    """Base class for every failure the pipeline reports."""

    stage = "convert"

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        format_name: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.path = path
        self.format_name = format_name

    def __str__(self) -> str:
        details = []
        if self.format_name:
            details.append(self.format_name)
        if self.path:
            details.append(str(self.path))
        if details:
            return f"{self.message} ({', '.join(details)})"
        return self.message


class DecodeError(LocalizationError):
    """Input bytes could not be read, decoded or understood."""

    stage = "decode"


class EncodeError(LocalizationError):
    """A catalog could not be serialized or written."""

    stage = "encode"


class ValidationError(LocalizationError):
    """The request does not fit the selected platform."""

    stage = "validate"


class TranslationError(LocalizationError):
    """The translation provider failed or returned an unusable response."""

    stage = "translate"
