"""Pydantic models and record codecs for notes.

Two record formats share the ``notes`` string set:

* legacy records, ``title|description|timestamp`` joined on a literal pipe;
* structured records, a compact JSON object carrying a stable ``id``.

Legacy records cannot hold a pipe inside a field. They are still read, and
can still be written when the store is configured for them.
"""

from datetime import datetime
from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, Field, ValidationError

RECORD_DELIMITER = "|"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"

RecordFormat = Literal["json", "pipe"]


def format_timestamp(moment: datetime) -> str:
    """Render a local datetime as ``YYYY-MM-DD HH:mm``."""
    return moment.strftime(TIMESTAMP_FORMAT)


def new_note_id() -> str:
    return uuid4().hex


class Note(BaseModel):
    """A single note as stored in the ``notes`` set."""

    title: str = Field(..., description="Note title")
    description: str = Field(..., description="Note body")
    timestamp: str = Field(..., description="Save time, YYYY-MM-DD HH:mm")
    id: str | None = Field(
        default=None,
        description="Stable identifier; None for legacy pipe records",
    )

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_pipe_record(self) -> str:
        """Join the fields on the pipe delimiter. The id is not kept."""
        return RECORD_DELIMITER.join([self.title, self.description, self.timestamp])

    def to_json_record(self) -> str:
        return self.model_dump_json()

    def to_record(self, record_format: RecordFormat) -> str:
        if record_format == "pipe":
            return self.to_pipe_record()
        return self.to_json_record()

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    @classmethod
    def from_pipe_record(cls, raw: str) -> "Note | None":
        """Parse a legacy record. Anything but exactly three parts is rejected."""
        parts = raw.split(RECORD_DELIMITER)
        if len(parts) != 3:
            return None
        title, description, timestamp = parts
        return cls(title=title, description=description, timestamp=timestamp)

    @classmethod
    def from_json_record(cls, raw: str) -> "Note | None":
        """Parse a structured record. Records without an id are rejected."""
        try:
            note = cls.model_validate_json(raw)
        except ValidationError:
            return None
        if note.id is None:
            return None
        return note

    @classmethod
    def from_record(cls, raw: str) -> "Note | None":
        """Parse either record format, returning None when neither fits."""
        if raw.startswith("{"):
            note = cls.from_json_record(raw)
            if note is not None:
                return note
        return cls.from_pipe_record(raw)

    @property
    def is_legacy(self) -> bool:
        return self.id is None
