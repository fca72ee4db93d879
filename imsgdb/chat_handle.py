"""The join table linking chats to the handles that take part in them."""

from __future__ import annotations

import sqlite3
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

CHAT_HANDLE_JOIN = "chat_handle_join"
CHAT_MESSAGE_JOIN = "chat_message_join"


def _lookup(row: Any, column: str) -> Any:
    """Read a column by name, ignoring case, from a mapping or ``sqlite3.Row``."""
    wanted = column.lower()
    for key in row.keys():
        if key.lower() == wanted:
            return row[key]
    raise KeyError(column)


@dataclass(frozen=True)
class ChatToHandle:
    """A single row of the chat to handle join table."""

    chat_id: int
    handle_id: int

    @classmethod
    def _from_row(cls, row: Mapping[str, Any] | sqlite3.Row) -> ChatToHandle:
        return cls(chat_id=_lookup(row, "chat_id"), handle_id=_lookup(row, "handle_id"))

    @classmethod
    def cache(cls, db: sqlite3.Connection) -> dict[int, frozenset[int]]:
        """Map each chat's id to the set of participant handle ids."""
        cursor = db.execute(f"SELECT * FROM {CHAT_HANDLE_JOIN}")
        columns = [description[0] for description in cursor.description]
        participants: dict[int, set[int]] = {}
        for values in cursor:
            joiner = cls._from_row(dict(zip(columns, values)))
            participants.setdefault(joiner.chat_id, set()).add(joiner.handle_id)
        return {chat_id: frozenset(handles) for chat_id, handles in participants.items()}

    @staticmethod
    def dedupe(duplicated_data: Mapping[int, frozenset[int]]) -> dict[int, int]:
        """Map each chat id to a unique id shared by all chats with the same participants.

        Chats are visited in ascending id order, so the result is deterministic.
        """
        deduplicated: dict[int, int] = {}
        unique_ids: dict[frozenset[int], int] = {}
        for chat_id in sorted(duplicated_data):
            participants = frozenset(duplicated_data[chat_id])
            deduplicated[chat_id] = unique_ids.setdefault(participants, len(unique_ids))
        return deduplicated

    @classmethod
    def run_diagnostic(cls, db: sqlite3.Connection) -> int:
        """Report and return how many chats with messages have no handles."""
        from_messages = {
            chat_id
            for (chat_id,) in db.execute(f"SELECT DISTINCT chat_id from {CHAT_MESSAGE_JOIN}")
        }
        from_handles = {
            chat_id
            for (chat_id,) in db.execute(f"SELECT DISTINCT chat_id from {CHAT_HANDLE_JOIN}")
        }
        chats_with_no_handles = len(from_messages - from_handles)
        if chats_with_no_handles > 0:
            print("Thread diagnostic data:")
            print(f"    Chats with no handles: {chats_with_no_handles}")
        return chats_with_no_handles