"""Data layer utilities for loading prototype exports."""

from .errors import DataError, DataLoadError, DataValidationError, StructuralError
from .paths import get_prototypes_path, get_repo_root

__all__ = [
    "DataError",
    "DataLoadError",
    "DataValidationError",
    "StructuralError",
    "get_prototypes_path",
    "get_repo_root",
]
