"""Exception hierarchy for the notes application."""


class NotesError(Exception):
    """Base class for every error raised by the notes application."""


class StorageError(NotesError):
    """The key-value backend could not be read or written."""


class InvalidNoteInput(NotesError):
    """A submitted note form was rejected (empty title or description)."""
