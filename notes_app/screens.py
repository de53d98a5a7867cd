"""Presentation glue shared by the CLI and the MCP server.

Mirrors the three screens of the app: the list, the add form and the edit
form. Input is trimmed and rejected here when empty; NoteStore itself
accepts any strings.
"""

import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from notes_app.errors import InvalidNoteInput
from notes_app.models import Note
from notes_app.storage import NoteStore

logger = logging.getLogger("notes.screens")

EMPTY_FIELDS_MESSAGE = "Please fill all fields"
NOTE_DELETED_MESSAGE = "Note deleted"


class NoteForm(BaseModel):
    """Title and description as submitted by the user."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, description="Note title")
    description: str = Field(..., min_length=1, description="Note body")


def validate_form(title: str, description: str) -> NoteForm:
    try:
        return NoteForm(title=title, description=description)
    except ValidationError as exc:
        logger.info("Rejected note form: %d invalid field(s)", exc.error_count())
        raise InvalidNoteInput(EMPTY_FIELDS_MESSAGE) from exc


def _display_key(note: Note) -> tuple[str, str, str, str]:
    return (note.timestamp, note.title, note.description, note.id or "")


def list_screen(store: NoteStore) -> list[Note]:
    """Notes for display, newest first.

    The store has no order of its own; this one only keeps listings stable
    between calls so a row number picks the same note twice.
    """
    return sorted(store.list_notes(), key=_display_key, reverse=True)


def add_screen(store: NoteStore, title: str, description: str) -> Note:
    form = validate_form(title, description)
    return store.add_note(form.title, form.description)


def edit_screen(store: NoteStore, original: Note, title: str, description: str) -> Note:
    form = validate_form(title, description)
    return store.update_note(original, form.title, form.description)


def delete_action(store: NoteStore, note: Note) -> str:
    store.delete_note(note)
    return NOTE_DELETED_MESSAGE
