"""Key-value backends holding named sets of strings.

A backend plays the role of a preference store: each key maps to a set of
strings, read and written as a whole.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from notes_app.errors import StorageError

logger = logging.getLogger("notes.backends")


class KeyValueBackend(ABC):
    """Durable mapping from a string key to a set of strings."""

    @abstractmethod
    def get_string_set(self, key: str) -> set[str]:
        """Return the set stored under ``key``, or an empty set."""

    @abstractmethod
    def put_string_set(self, key: str, values: Iterable[str]) -> None:
        """Replace the set stored under ``key``."""


class MemoryBackend(KeyValueBackend):
    """Process-local backend, mainly for tests."""

    def __init__(self, initial: dict[str, Iterable[str]] | None = None) -> None:
        self._sets: dict[str, set[str]] = {
            key: set(values) for key, values in (initial or {}).items()
        }

    def get_string_set(self, key: str) -> set[str]:
        return set(self._sets.get(key, set()))

    def put_string_set(self, key: str, values: Iterable[str]) -> None:
        self._sets[key] = set(values)


class PreferencesDocument(BaseModel):
    """On-disk layout of a JSON preferences file."""

    string_sets: dict[str, list[str]] = Field(default_factory=dict)


class JsonFileBackend(KeyValueBackend):
    """Stores every key in one JSON file, rewritten on each put."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> PreferencesDocument:
        if not self._path.exists():
            return PreferencesDocument()
        try:
            return PreferencesDocument.model_validate_json(
                self._path.read_text(encoding="utf-8")
            )
        except (OSError, ValidationError) as exc:
            logger.error("Failed to read preferences from %s: %s", self._path, exc)
            raise StorageError(f"Cannot read {self._path}: {exc}") from exc

    def get_string_set(self, key: str) -> set[str]:
        return set(self._read().string_sets.get(key, []))

    def put_string_set(self, key: str, values: Iterable[str]) -> None:
        document = self._read()
        document.string_sets[key] = sorted(set(values))
        # Replaced whole via a sibling file; a crash mid-write keeps the old copy.
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(document.model_dump_json(indent=2), encoding="utf-8")
            tmp_path.replace(self._path)
        except OSError as exc:
            logger.error("Failed to write preferences to %s: %s", self._path, exc)
            raise StorageError(f"Cannot write {self._path}: {exc}") from exc
        logger.debug(
            "Wrote %d values under '%s' to %s",
            len(document.string_sets[key]),
            key,
            self._path,
        )
