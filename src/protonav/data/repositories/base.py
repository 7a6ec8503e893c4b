"""Base repository implementation for exported prototype data."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Generic, TypeVar

from protonav.data.errors import DataLoadError, DataValidationError
from protonav.data.json_loader import load_json, load_story_js
from protonav.data import paths

T = TypeVar("T")

_EXPORT_FILENAMES = ("story.js", "story.json")


class RepositoryBase(Generic[T]):
    """Common caching and loading behavior for prototype repositories.

    Each prototype lives in its own directory under the prototypes path and
    holds either a ``story.js`` export or a plain ``story.json`` document.
    """

    def __init__(self, base_path: Path | str | None = None) -> None:
        self._base_path = Path(base_path) if base_path is not None else None
        self._definitions: Dict[str, T] = {}

    def _get_root(self) -> Path:
        return paths.get_prototypes_path(self._base_path)

    def _get_file_path(self, def_id: str) -> Path:
        prototype_dir = self._get_root() / def_id
        for filename in _EXPORT_FILENAMES:
            candidate = prototype_dir / filename
            if candidate.exists():
                return candidate
        raise DataLoadError(f"No story export found for prototype '{def_id}' in {prototype_dir}")

    def _load_raw(self, def_id: str) -> dict[str, object]:
        file_path = self._get_file_path(def_id)
        if file_path.suffix == ".js":
            raw = load_story_js(file_path)
        else:
            raw = load_json(file_path)
        if not isinstance(raw, dict):
            raise DataValidationError(f"Expected top-level object in {file_path}")
        return raw

    def _build(self, def_id: str, raw: dict[str, object]) -> T:
        """Convert a raw dict into a typed definition."""
        raise NotImplementedError

    def ids(self) -> list[str]:
        """Return the ids of every prototype directory with an export, sorted."""
        root = self._get_root()
        if not root.is_dir():
            return []
        return sorted(
            entry.name
            for entry in root.iterdir()
            if entry.is_dir() and any((entry / name).exists() for name in _EXPORT_FILENAMES)
        )

    def get(self, def_id: str) -> T:
        """Return a definition by id, loading it on first access."""
        if def_id not in self._definitions:
            if def_id not in self.ids():
                raise KeyError(def_id)
            self._definitions[def_id] = self._build(def_id, self._load_raw(def_id))
        return self._definitions[def_id]

    def all(self) -> list[T]:
        """Return all definitions sorted deterministically by id."""
        return [self.get(def_id) for def_id in self.ids()]

    @staticmethod
    def _require_mapping(value: object, context: str) -> dict[str, object]:
        if not isinstance(value, dict):
            raise DataValidationError(f"{context} must be an object/dict.")
        return value

    @staticmethod
    def _require_type(value: object, expected_type: type, context: str) -> object:
        if not isinstance(value, expected_type):
            raise DataValidationError(f"{context} must be of type {expected_type.__name__}.")
        return value
