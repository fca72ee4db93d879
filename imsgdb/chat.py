"""Rows of the ``chat`` table."""

from __future__ import annotations

import sqlite3
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

CHAT = "chat"

_MISSING = object()


def _lookup(row: Any, column: str, default: Any = _MISSING) -> Any:
    """Read a column by name, ignoring case, from a mapping or ``sqlite3.Row``."""
    keys = row.keys()
    for key in keys:
        if key.lower() == column.lower():
            return row[key]
    if default is _MISSING:
        raise KeyError(column)
    return default


@dataclass
class Chat:
    """A single conversation thread."""

    rowid: int
    chat_identifier: str
    service_name: str | None = None
    display_name: str | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any] | sqlite3.Row) -> Chat:
        """Build a chat from a row; ``display_name`` may be absent."""
        return cls(
            rowid=_lookup(row, "rowid"),
            chat_identifier=_lookup(row, "chat_identifier"),
            service_name=_lookup(row, "service_name"),
            display_name=_lookup(row, "display_name", None),
        )

    @classmethod
    def cache(cls, db: sqlite3.Connection) -> dict[int, Chat]:
        """Map each chat's row id to its data."""
        cursor = db.execute(f"SELECT * from {CHAT}")
        columns = [description[0] for description in cursor.description]
        chats = (cls.from_row(dict(zip(columns, values))) for values in cursor)
        return {chat.rowid: chat for chat in chats}

    def display(self) -> str | None:
        """The custom display name for the chat, if one is set and not empty."""
        return self.display_name or None

    def name(self) -> str:
        """The display name, falling back to the chat identifier."""
        return self.display() or self.chat_identifier