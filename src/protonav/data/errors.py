"""Custom exceptions for prototype data loading and validation."""
from __future__ import annotations

from typing import Sequence


class DataError(Exception):
    """Base exception for the data layer."""


class DataLoadError(DataError):
    """Raised when prototype files are missing or invalid."""


class DataValidationError(DataError):
    """Raised when story content fails shape validation."""


class StructuralError(DataValidationError):
    """Raised when a story violates a load-time graph invariant.

    The engine refuses to start a session over a story that raises this.
    ``issues`` holds every ERROR-level finding, not only the first one.
    """

    def __init__(self, message: str, issues: Sequence[object] = ()) -> None:
        super().__init__(message)
        self.issues = list(issues)
