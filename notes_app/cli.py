"""
Command-line interface for notes.

Usage:
    notes list
    notes show 2
    notes add --title "Groceries" --description "Eggs, milk"
    notes edit 2 --description "Eggs, milk, bread"
    notes delete 2
    notes serve --transport stdio

Entry numbers refer to the order printed by ``notes list``.
"""

import argparse
import logging
import sys

from notes_app import screens
from notes_app.config import Settings, configure_logging
from notes_app.errors import InvalidNoteInput, NotesError
from notes_app.models import Note
from notes_app.storage import NoteStore

logger = logging.getLogger("notes.cli")


def _pick(store: NoteStore, number: int) -> Note | None:
    """Return entry ``number`` (1-based) of the listing, or None."""
    notes = screens.list_screen(store)
    if 1 <= number <= len(notes):
        return notes[number - 1]
    print(f"No note #{number} ({len(notes)} stored)", file=sys.stderr)
    return None


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_list(store: NoteStore, args: argparse.Namespace, settings: Settings) -> int:
    notes = screens.list_screen(store)
    if not notes:
        print("No notes yet.")
        return 0
    for i, note in enumerate(notes, 1):
        print(f"{i:>3}. {note.title}  [{note.timestamp}]")
    return 0


def cmd_show(store: NoteStore, args: argparse.Namespace, settings: Settings) -> int:
    note = _pick(store, args.number)
    if note is None:
        return 1
    print(note.title)
    print(note.timestamp)
    print()
    print(note.description)
    return 0


def cmd_add(store: NoteStore, args: argparse.Namespace, settings: Settings) -> int:
    note = screens.add_screen(store, args.title, args.description)
    print(f"Saved: {note.title} [{note.timestamp}]")
    return 0


def cmd_edit(store: NoteStore, args: argparse.Namespace, settings: Settings) -> int:
    original = _pick(store, args.number)
    if original is None:
        return 1
    # Omitted fields keep their current text, as in a prefilled form.
    title = original.title if args.title is None else args.title
    description = original.description if args.description is None else args.description
    note = screens.edit_screen(store, original, title, description)
    print(f"Updated: {note.title} [{note.timestamp}]")
    return 0


def cmd_delete(store: NoteStore, args: argparse.Namespace, settings: Settings) -> int:
    note = _pick(store, args.number)
    if note is None:
        return 1
    print(screens.delete_action(store, note))
    return 0


def cmd_serve(store: NoteStore, args: argparse.Namespace, settings: Settings) -> int:
    from notes_app.server import create_server

    logger.info("Starting notes MCP server (%s transport)", args.transport)
    create_server(store, settings).run(transport=args.transport)
    return 0


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="notes", description="Short local notes")
    subparsers = parser.add_subparsers(dest="command", required=True)

    p = subparsers.add_parser("list", help="List notes, newest first")
    p.set_defaults(handler=cmd_list)

    p = subparsers.add_parser("show", help="Show one note in full")
    p.add_argument("number", type=int, help="Entry number from 'notes list'")
    p.set_defaults(handler=cmd_show)

    p = subparsers.add_parser("add", help="Add a note")
    p.add_argument("--title", "-t", required=True)
    p.add_argument("--description", "-d", required=True)
    p.set_defaults(handler=cmd_add)

    p = subparsers.add_parser("edit", help="Edit a note (omitted fields are kept)")
    p.add_argument("number", type=int, help="Entry number from 'notes list'")
    p.add_argument("--title", "-t")
    p.add_argument("--description", "-d")
    p.set_defaults(handler=cmd_edit)

    p = subparsers.add_parser("delete", help="Delete a note")
    p.add_argument("number", type=int, help="Entry number from 'notes list'")
    p.set_defaults(handler=cmd_delete)

    p = subparsers.add_parser("serve", help="Run the MCP server")
    p.add_argument("--transport", choices=["stdio", "sse"], default="stdio")
    p.set_defaults(handler=cmd_serve)

    return parser


def main(argv: list[str] | None = None, store: NoteStore | None = None) -> int:
    """Entry point. ``store`` overrides the one built from settings."""
    args = build_parser().parse_args(argv)

    try:
        settings = Settings()
        # Mutations log at INFO; keep them off the terminal unless serving.
        configure_logging(
            settings.log_level if args.command == "serve" else settings.cli_log_level
        )
    except ValueError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 1

    try:
        if store is None:
            store = NoteStore.from_settings(settings)
        return args.handler(store, args, settings)
    except InvalidNoteInput as e:
        print(str(e), file=sys.stderr)
        return 1
    except NotesError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
