"""
Notes MCP Server

Exposes the note list, add, edit and delete flows as Model Context Protocol
tools.  Runs on port 8001 with SSE transport when started as a module.
"""

import logging
from datetime import UTC, datetime

from mcp.server.fastmcp import FastMCP

from notes_app import screens
from notes_app.config import Settings, configure_logging
from notes_app.errors import InvalidNoteInput
from notes_app.models import Note
from notes_app.storage import NoteStore

logger = logging.getLogger("notes.server")


def _rejected(exc: InvalidNoteInput) -> dict:
    return {"success": False, "message": str(exc)}


def create_server(store: NoteStore, settings: Settings) -> FastMCP:
    """Build a FastMCP server whose tools operate on ``store``."""
    mcp = FastMCP("notes", host=settings.mcp_host, port=settings.mcp_port)

    # -----------------------------------------------------------------------
    # Tools
    # -----------------------------------------------------------------------

    @mcp.tool()
    def list_notes() -> dict:
        """List every stored note, newest first.

        Use this tool when the user wants to browse their notes.

        Returns:
            Dictionary with the notes and their count.
        """
        notes = screens.list_screen(store)
        logger.info("Tool list_notes invoked, found=%d", len(notes))
        return {
            "count": len(notes),
            "notes": [n.model_dump() for n in notes],
        }

    @mcp.tool()
    def add_note(title: str, description: str) -> dict:
        """Save a new note with a title and a description.

        Args:
            title: Short title for the note. Must not be blank.
            description: The note text. Must not be blank.

        Returns:
            Dictionary with a success flag, a message and the saved note.
        """
        try:
            note = screens.add_screen(store, title, description)
        except InvalidNoteInput as exc:
            return _rejected(exc)
        logger.info("Tool add_note invoked, title='%s'", note.title)
        return {
            "success": True,
            "message": f"Note '{note.title}' saved.",
            "note": note.model_dump(),
        }

    @mcp.tool()
    def update_note(
        title: str,
        description: str,
        timestamp: str,
        new_title: str,
        new_description: str,
        id: str | None = None,
    ) -> dict:
        """Replace an existing note with new text and a fresh timestamp.

        The original note is identified by the fields returned from
        ``list_notes``. If it no longer exists the new note is saved anyway.

        Args:
            title: Current title of the note.
            description: Current description of the note.
            timestamp: Current timestamp of the note.
            new_title: Replacement title. Must not be blank.
            new_description: Replacement description. Must not be blank.
            id: The note's id as returned by ``list_notes``, when it has one.

        Returns:
            Dictionary with a success flag, a message and the updated note.
        """
        original = Note(
            title=title, description=description, timestamp=timestamp, id=id
        )
        try:
            note = screens.edit_screen(store, original, new_title, new_description)
        except InvalidNoteInput as exc:
            return _rejected(exc)
        logger.info("Tool update_note invoked, title='%s'", note.title)
        return {
            "success": True,
            "message": f"Note '{note.title}' updated.",
            "note": note.model_dump(),
        }

    @mcp.tool()
    def delete_note(
        title: str,
        description: str,
        timestamp: str,
        id: str | None = None,
    ) -> dict:
        """Delete a note. Deleting a note that is already gone is not an error.

        Args:
            title: Title of the note.
            description: Description of the note.
            timestamp: Timestamp of the note.
            id: The note's id as returned by ``list_notes``, when it has one.
        """
        note = Note(title=title, description=description, timestamp=timestamp, id=id)
        message = screens.delete_action(store, note)
        logger.info("Tool delete_note invoked, title='%s'", title)
        return {"success": True, "message": message}

    @mcp.tool()
    def health_check() -> dict:
        """Check whether the notes server is healthy.

        Returns:
            Dictionary with server status, note count, and timestamp.
        """
        logger.info("Tool health_check invoked")
        return {
            "status": "healthy",
            "server": "notes",
            "total_notes": store.count,
            "record_format": store.record_format,
            "timestamp": datetime.now(UTC).isoformat(),
        }

    return mcp


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    settings = Settings()
    configure_logging(settings.log_level)
    logger.info("Starting notes MCP server on port %d ...", settings.mcp_port)
    create_server(NoteStore.from_settings(settings), settings).run(transport="sse")
