"""Base repository implementation for SRD reference data."""
from __future__ import annotations

from pathlib import Path
from typing import Generic, List, Set, TypeVar

from charsheet.data.errors import DataValidationError
from charsheet.data.json_loader import load_json_array
from charsheet.data import paths

T = TypeVar("T")


class RepositoryBase(Generic[T]):
    """Common caching and loading behavior for reference repositories.

    Reference files are JSON arrays of flat records. Definitions keep the
    file order and names must be unique.
    """

    def __init__(self, filename: str, base_path: Path | str | None = None) -> None:
        self._filename = filename
        self._base_path = Path(base_path) if base_path is not None else None
        self._definitions: List[T] | None = None

    @property
    def filename(self) -> str:
        return self._filename

    def _get_file_path(self) -> Path:
        reference_dir = paths.get_reference_path(self._base_path)
        return reference_dir / self._filename

    def _load_raw(self) -> list[object]:
        return load_json_array(self._get_file_path())

    def _build_one(self, raw: dict[str, object], context: str) -> T:
        """Convert one raw record into a typed definition."""
        raise NotImplementedError

    def _ensure_loaded(self) -> None:
        if self._definitions is not None:
            return
        definitions: List[T] = []
        seen: Set[str] = set()
        try:
            for index, entry in enumerate(self._load_raw()):
                context = f"{self._filename}[{index}]"
                record = self._require_mapping(entry, context)
                definition = self._build_one(record, context)
                name = getattr(definition, "name")
                if name in seen:
                    raise DataValidationError(f"{context} duplicates name '{name}'.")
                seen.add(name)
                definitions.append(definition)
        except DataValidationError as exc:
            if exc.path is None:
                exc.path = self._get_file_path()
            raise
        self._definitions = definitions

    def all(self) -> list[T]:
        """Return all definitions in file order."""
        self._ensure_loaded()
        assert self._definitions is not None
        return list(self._definitions)

    @staticmethod
    def _require_mapping(value: object, context: str) -> dict[str, object]:
        if not isinstance(value, dict):
            raise DataValidationError(f"{context} must be an object/dict.")
        return value

    @staticmethod
    def _require_str(value: object, context: str) -> str:
        if not isinstance(value, str):
            raise DataValidationError(f"{context} must be a string.")
        return value

    @staticmethod
    def _require_int(value: object, context: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise DataValidationError(f"{context} must be an integer.")
        return value

    @staticmethod
    def _require_bool(value: object, context: str) -> bool:
        if not isinstance(value, bool):
            raise DataValidationError(f"{context} must be a boolean.")
        return value

    @staticmethod
    def _assert_exact_fields(
        payload: dict[str, object],
        expected_keys: set[str],
        context: str,
        *,
        optional_fields: set[str] | None = None,
    ) -> None:
        actual_keys = set(payload.keys())
        optional = optional_fields or set()
        missing = expected_keys - actual_keys
        unknown = actual_keys - expected_keys - optional
        if missing or unknown:
            msg_parts = []
            if missing:
                msg_parts.append(f"missing fields: {sorted(missing)}")
            if unknown:
                msg_parts.append(f"unknown fields: {sorted(unknown)}")
            raise DataValidationError(f"{context} has schema issues ({'; '.join(msg_parts)}).")
