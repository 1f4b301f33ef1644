"""Data layer for the bundled SRD reference files."""

from .errors import DataError, DataLoadError, DataValidationError
from .paths import get_reference_path, get_repo_root

__all__ = [
    "DataError",
    "DataLoadError",
    "DataValidationError",
    "get_reference_path",
    "get_repo_root",
]
