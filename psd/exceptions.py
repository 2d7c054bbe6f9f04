"""Exceptions raised by psd."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:
    from psd.io import PafRecord


class PsdError(Exception):
    """Base exception for all psd errors."""

    pass


class ArgumentError(PsdError):
    """Raised when command line arguments are missing or invalid."""

    pass


class FileAccessError(PsdError):
    """Raised when the input PAF cannot be opened or read."""

    def __init__(self, message: str = "", path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.path = path


class MalformedRecordError(PsdError):
    """Raised when a PAF line cannot be parsed into a record.

    Args:
        message: What was wrong with the line
        line_number: 1-based line number in the input, 0 if unknown
        path: File the line came from, if any
    """

    def __init__(
        self,
        message: str = "",
        line_number: int = 0,
        path: Optional[Union[str, Path]] = None,
    ):
        if line_number:
            location = f"{path}:{line_number}" if path else f"line {line_number}"
            message = f"{location}: {message}"
        super().__init__(message)
        self.line_number = line_number
        self.path = path


class MissingDivergenceField(PsdError):
    """Raised when a record has no ``de`` (gap-compressed divergence) tag."""

    def __init__(self, record: Optional["PafRecord"] = None):
        message = "Could not get DE (the gap-compressed per sequence divergence) from record"
        if record is not None:
            message += (
                f" {record.query_name}:{record.query_start}-{record.query_end}"
            )
        super().__init__(message)
        self.record = record
