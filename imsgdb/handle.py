"""Rows of the ``handle`` table."""

from __future__ import annotations

import sqlite3
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

HANDLE = "handle"
ME = "Me"

_MISSING = object()

_PERSON_ID_QUERY = (
    "SELECT DISTINCT A.person_centric_id, A.rowid, A.id "
    "FROM handle A "
    "INNER JOIN handle B ON B.id = A.id "
    "WHERE A.person_centric_id NOT NULL "
    "ORDER BY A.person_centric_id"
)

_DIAGNOSTIC_QUERY = (
    "SELECT COUNT(DISTINCT person_centric_id) "
    "FROM handle "
    "WHERE person_centric_id NOT NULL"
)


def _lookup(row: Any, column: str, default: Any = _MISSING) -> Any:
    """Read a column by name, ignoring case, from a mapping or ``sqlite3.Row``."""
    wanted = column.lower()
    for key in row.keys():
        if key.lower() == wanted:
            return row[key]
    if default is _MISSING:
        raise KeyError(column)
    return default


def _person_id_map(db: sqlite3.Connection) -> dict[int, str]:
    """Map each handle row sharing a ``person_centric_id`` to all of that person's ids.

    The ids are sorted and joined with spaces. Databases without the
    ``person_centric_id`` column yield an empty map.
    """
    try:
        rows = db.execute(_PERSON_ID_QUERY).fetchall()
    except sqlite3.OperationalError:
        return {}

    ids_by_person: dict[str, set[str]] = {}
    for person_centric_id, _, handle_id in rows:
        ids_by_person.setdefault(person_centric_id, set()).add(handle_id)

    return {
        rowid: " ".join(sorted(ids_by_person[person_centric_id]))
        for person_centric_id, rowid, _ in rows
    }


@dataclass
class Handle:
    """A contact identifier, such as a phone number or e-mail address."""

    rowid: int
    id: str
    person_centric_id: str | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any] | sqlite3.Row) -> Handle:
        """Build a handle from a row; ``person_centric_id`` may be absent."""
        return cls(
            rowid=_lookup(row, "rowid"),
            id=_lookup(row, "id"),
            person_centric_id=_lookup(row, "person_centric_id", None),
        )

    @classmethod
    def cache(cls, db: sqlite3.Connection) -> dict[int, str]:
        """Map handle row ids to contact strings.

        Row id 0 stands for the database owner. Handles that share a
        ``person_centric_id`` map to the same combined string.
        """
        cursor = db.execute(f"SELECT * from {HANDLE}")
        columns = [description[0] for description in cursor.description]
        contacts: dict[int, str] = {0: ME}
        for values in cursor:
            handle = cls.from_row(dict(zip(columns, values)))
            contacts[handle.rowid] = handle.id
        contacts.update(_person_id_map(db))
        return contacts

    @staticmethod
    def dedupe(duplicated_data: Mapping[int, str]) -> dict[int, int]:
        """Map each handle id to a unique id shared by all handles with the same contact.

        Handles are visited in ascending id order, so the result is deterministic.
        """
        deduplicated: dict[int, int] = {}
        unique_ids: dict[str, int] = {}
        for handle_id in sorted(duplicated_data):
            contact = duplicated_data[handle_id]
            deduplicated[handle_id] = unique_ids.setdefault(contact, len(unique_ids))
        return deduplicated

    @classmethod
    def run_diagnostic(cls, db: sqlite3.Connection) -> int | None:
        """Report and return the number of contacts with more than one id.

        Returns ``None`` when the database has no ``person_centric_id`` data.
        """
        try:
            cursor = db.execute(_DIAGNOSTIC_QUERY)
        except sqlite3.OperationalError:
            return None
        (dupes,) = cursor.fetchone()
        if dupes is not None and dupes > 0:
            print("Handle diagnostic data:")
            print(f"    Contacts with more than one ID: {dupes}")
        return dupes