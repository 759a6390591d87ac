"""
Error types raised by the hashing pipeline.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class HashingError(Exception):
    """Base class for all shall errors."""


class InputUnavailable(HashingError):
    """Raised when an input source cannot be opened or read to completion."""

    def __init__(self, path: Optional[Path | str], reason: str) -> None:
        self.path = path
        self.reason = reason
        target = str(path) if path is not None else "input"
        super().__init__(f"{target}: {reason}")


class EmptyAlgorithmList(HashingError, ValueError):
    """Raised when a pipeline run is requested without any algorithms."""

    def __init__(self) -> None:
        super().__init__("At least one hash algorithm is required")


class DuplicateAlgorithm(HashingError, ValueError):
    """Raised when the same algorithm label is requested twice."""

    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f"Duplicate hash algorithm: {label}")


class InvalidArgument(HashingError):
    """Raised when the command line does not name exactly one input."""
