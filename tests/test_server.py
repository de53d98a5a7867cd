"""Tests for the notes MCP server.

Tools are looked up on the server's tool manager and called directly; tool
discovery goes through the async FastMCP API.
"""

from typing import Any

import anyio
import pytest
from mcp.server.fastmcp import FastMCP

from notes_app.backends import MemoryBackend
from notes_app.config import Settings
from notes_app.server import create_server
from notes_app.storage import NoteStore

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@pytest.fixture()
def store() -> NoteStore:
    return NoteStore(MemoryBackend())


@pytest.fixture()
def server(store: NoteStore) -> FastMCP:
    return create_server(store, Settings(_env_file=None))


def _call(server: FastMCP, name: str, **arguments: Any) -> dict:
    """Invoke a registered tool function with keyword arguments."""
    return server._tool_manager.get_tool(name).fn(**arguments)


def _fields(note: dict) -> dict:
    return {
        "title": note["title"],
        "description": note["description"],
        "timestamp": note["timestamp"],
        "id": note["id"],
    }


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


class TestDiscovery:
    def test_tools_registered(self, server: FastMCP) -> None:
        tools = anyio.run(server.list_tools)
        assert {t.name for t in tools} == {
            "list_notes",
            "add_note",
            "update_note",
            "delete_note",
            "health_check",
        }

    def test_server_name(self, server: FastMCP) -> None:
        assert server.name == "notes"


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


class TestTools:
    def test_add_and_list(self, server: FastMCP) -> None:
        result = _call(server, "add_note", title="Groceries", description="Eggs, milk")
        assert result["success"] is True
        assert result["note"]["id"]

        listing = _call(server, "list_notes")
        assert listing["count"] == 1
        assert listing["notes"][0]["title"] == "Groceries"

    def test_add_blank_rejected(self, server: FastMCP, store: NoteStore) -> None:
        result = _call(server, "add_note", title="", description="body")
        assert result == {"success": False, "message": "Please fill all fields"}
        assert store.count == 0

    def test_update(self, server: FastMCP) -> None:
        added = _call(server, "add_note", title="A", description="B")["note"]
        result = _call(
            server, "update_note", **_fields(added), new_title="A2", new_description="B2"
        )
        assert result["success"] is True
        titles = [n["title"] for n in _call(server, "list_notes")["notes"]]
        assert titles == ["A2"]

    def test_update_with_listed_fields(self, server: FastMCP) -> None:
        _call(server, "add_note", title="A", description="B")
        [listed] = _call(server, "list_notes")["notes"]
        del listed["id"]
        _call(server, "update_note", **listed, new_title="A2", new_description="B2")
        titles = [n["title"] for n in _call(server, "list_notes")["notes"]]
        assert titles == ["A2"]

    def test_listed_note_round_trips_into_update(self, server: FastMCP) -> None:
        _call(server, "add_note", title="A", description="B")
        [listed] = _call(server, "list_notes")["notes"]
        result = _call(server, "update_note", **listed, new_title="A2", new_description="B2")
        assert result["note"]["id"] == listed["id"]
        assert _call(server, "list_notes")["count"] == 1

    def test_update_blank_rejected(self, server: FastMCP) -> None:
        added = _call(server, "add_note", title="A", description="B")["note"]
        result = _call(
            server, "update_note", **_fields(added), new_title=" ", new_description="B2"
        )
        assert result["success"] is False
        assert _call(server, "list_notes")["notes"][0]["title"] == "A"

    def test_update_absent_inserts(self, server: FastMCP) -> None:
        result = _call(
            server,
            "update_note",
            title="ghost",
            description="gone",
            timestamp="2000-01-01 00:00",
            new_title="A2",
            new_description="B2",
        )
        assert result["success"] is True
        assert _call(server, "list_notes")["count"] == 1

    def test_delete_twice(self, server: FastMCP) -> None:
        added = _call(server, "add_note", title="A", description="B")["note"]
        assert _call(server, "delete_note", **_fields(added))["message"] == "Note deleted"
        assert _call(server, "delete_note", **_fields(added))["success"] is True
        assert _call(server, "list_notes")["count"] == 0

    def test_delete_with_listed_fields(self, server: FastMCP) -> None:
        _call(server, "add_note", title="A", description="B")
        [listed] = _call(server, "list_notes")["notes"]
        del listed["id"]
        _call(server, "delete_note", **listed)
        assert _call(server, "list_notes")["count"] == 0

    def test_health_check(self, server: FastMCP) -> None:
        _call(server, "add_note", title="A", description="B")
        data = _call(server, "health_check")
        assert data["status"] == "healthy"
        assert data["server"] == "notes"
        assert data["total_notes"] == 1
        assert data["record_format"] == "json"
        assert "timestamp" in data
