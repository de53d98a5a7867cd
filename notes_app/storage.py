"""Note persistence over a key-value backend.

All notes live as strings in one set under the ``notes`` key. Every
mutation reads the whole set, changes it, and writes it back; nothing is
cached between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from notes_app.backends import JsonFileBackend, KeyValueBackend
from notes_app.config import Settings
from notes_app.models import Note, RecordFormat, format_timestamp, new_note_id

logger = logging.getLogger("notes.storage")

NOTES_KEY = "notes"


def _same_fields(a: Note, b: Note) -> bool:
    return (a.title, a.description, a.timestamp) == (b.title, b.description, b.timestamp)


class NoteStore:
    """List, add, delete and update notes held in a backend string set."""

    def __init__(
        self,
        backend: KeyValueBackend,
        record_format: RecordFormat = "json",
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._backend = backend
        self._record_format = record_format
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> NoteStore:
        """Build the store described by ``settings`` (JSON file backend)."""
        return cls(
            JsonFileBackend(settings.storage_path),
            record_format=settings.record_format,
        )

    @property
    def record_format(self) -> RecordFormat:
        return self._record_format

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _read(self) -> set[str]:
        return self._backend.get_string_set(NOTES_KEY)

    def _write(self, records: set[str]) -> None:
        self._backend.put_string_set(NOTES_KEY, records)

    def _build(self, title: str, description: str, note_id: str | None = None) -> Note:
        timestamp = format_timestamp(self._clock())
        if self._record_format == "pipe":
            return Note(title=title, description=description, timestamp=timestamp)
        return Note(
            title=title,
            description=description,
            timestamp=timestamp,
            id=note_id or new_note_id(),
        )

    @staticmethod
    def _matches(raw: str, note: Note) -> bool:
        """Identify the stored string for ``note``.

        Notes with an id match on it. Notes without one (as rebuilt from
        their title, description and timestamp) match the exact pipe-joined
        form, or any structured record carrying the same three fields.
        """
        if note.id is None and raw == note.to_pipe_record():
            return True
        stored = Note.from_record(raw)
        if stored is None:
            return False
        if note.id is not None:
            return stored.id == note.id
        return stored.id is not None and _same_fields(stored, note)

    def _stored_id(self, records: set[str], note: Note) -> str | None:
        """Id of the structured record ``note`` refers to, if any."""
        if note.id is not None:
            return note.id
        for raw in records:
            if self._matches(raw, note):
                stored = Note.from_record(raw)
                if stored is not None and stored.id is not None:
                    return stored.id
        return None

    def _without(self, records: set[str], note: Note) -> set[str]:
        remaining = {raw for raw in records if not self._matches(raw, note)}
        if len(remaining) == len(records):
            logger.info("No stored record for '%s', nothing removed", note.title)
        return remaining

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def list_notes(self) -> list[Note]:
        """Return every parseable note, in backend order.

        Unparseable records are skipped so one bad entry does not hide the rest.
        """
        notes = []
        for raw in self._read():
            note = Note.from_record(raw)
            if note is None:
                logger.debug("Dropping unparseable record %r", raw)
                continue
            notes.append(note)
        return notes

    def add_note(self, title: str, description: str) -> Note:
        """Create, persist and return a note stamped with the current time."""
        note = self._build(title, description)
        records = self._read()
        records.add(note.to_record(self._record_format))
        self._write(records)
        logger.info("Added note '%s' (%s)", note.title, note.timestamp)
        return note

    def delete_note(self, note: Note) -> None:
        """Remove ``note`` if present. Deleting a missing note is a no-op."""
        records = self._read()
        remaining = self._without(records, note)
        self._write(remaining)
        if len(remaining) < len(records):
            logger.info("Deleted note '%s'", note.title)

    def update_note(self, original: Note, new_title: str, new_description: str) -> Note:
        """Replace ``original`` with a freshly stamped note.

        If ``original`` is not stored, the new note is inserted anyway.
        """
        records = self._read()
        note_id = self._stored_id(records, original)
        updated = self._build(new_title, new_description, note_id=note_id)
        records = self._without(records, original)
        records.add(updated.to_record(self._record_format))
        self._write(records)
        logger.info("Updated note '%s' -> '%s'", original.title, updated.title)
        return updated

    @property
    def count(self) -> int:
        """Number of parseable stored notes."""
        return len(self.list_notes())
