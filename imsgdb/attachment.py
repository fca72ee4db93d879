"""Rows of the ``attachment`` table."""

from __future__ import annotations

import os
import sqlite3
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from imsgdb.paths import Platform, resolve_attachment_path
from imsgdb.sticker import StickerEffect, get_sticker_effect

ATTACHMENT = "attachment"
_COLS = (
    "a.rowid, a.filename, a.uti, a.mime_type, a.transfer_name, a.total_bytes, "
    "a.is_sticker, a.hide_attachment, a.emoji_image_short_description"
)
_AUDIO_MESSAGE_UTI = "com.apple.coreaudio-format"

_MISSING = object()


def _lookup(row: Any, column: str, default: Any = _MISSING) -> Any:
    """Read a column by name, ignoring case, from a mapping or ``sqlite3.Row``."""
    wanted = column.lower()
    for key in row.keys():
        if key.lower() == wanted:
            return row[key]
    if default is _MISSING:
        raise KeyError(column)
    return default


class MediaKind(Enum):
    """The top-level category of a MIME type."""

    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    TEXT = "text"
    APPLICATION = "application"
    OTHER = "other"
    UNKNOWN = "unknown"


_CATEGORIES = {
    kind.value: kind
    for kind in (
        MediaKind.IMAGE,
        MediaKind.VIDEO,
        MediaKind.AUDIO,
        MediaKind.TEXT,
        MediaKind.APPLICATION,
    )
}


@dataclass(frozen=True)
class MediaType:
    """The MIME type of an attachment.

    For known categories ``subtype`` holds the part after the slash; for
    :attr:`MediaKind.OTHER` it holds the whole MIME string.
    """

    kind: MediaKind
    subtype: str = ""

    def as_mime_type(self) -> str:
        """The MIME type string, empty when unknown."""
        if self.kind is MediaKind.UNKNOWN:
            return ""
        if self.kind is MediaKind.OTHER:
            return self.subtype
        return f"{self.kind.value}/{self.subtype}"


@dataclass
class Attachment:
    """A single attachment row."""

    rowid: int
    filename: str | None = None
    uti: str | None = None
    mime_type: str | None = None
    transfer_name: str | None = None
    total_bytes: int = 0
    is_sticker: bool = False
    hide_attachment: int = 0
    emoji_description: str | None = None
    copied_path: Path | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any] | sqlite3.Row) -> Attachment:
        """Build an attachment from a row; every column but ``rowid`` may be absent."""
        total_bytes = _lookup(row, "total_bytes", None)
        is_sticker = _lookup(row, "is_sticker", None)
        hide = _lookup(row, "hide_attachment", None)
        return cls(
            rowid=_lookup(row, "rowid"),
            filename=_lookup(row, "filename", None),
            uti=_lookup(row, "uti", None),
            mime_type=_lookup(row, "mime_type", None),
            transfer_name=_lookup(row, "transfer_name", None),
            total_bytes=int(total_bytes) if total_bytes is not None else 0,
            is_sticker=bool(is_sticker) if is_sticker is not None else False,
            hide_attachment=int(hide) if hide is not None else 0,
            emoji_description=_lookup(row, "emoji_image_short_description", None),
        )

    @classmethod
    def for_message(cls, db: sqlite3.Connection, message_id: int) -> list[Attachment]:
        """All attachments joined to the message with the given row id.

        Falls back to selecting every column when the database lacks some of
        the usual ones.
        """
        template = (
            "SELECT {cols} FROM message_attachment_join j "
            f"LEFT JOIN {ATTACHMENT} a ON j.attachment_id = a.ROWID "
            "WHERE j.message_id = ?"
        )
        try:
            cursor = db.execute(template.format(cols=_COLS), (message_id,))
        except sqlite3.OperationalError:
            cursor = db.execute(template.format(cols="*"), (message_id,))
        columns = [description[0] for description in cursor.description]
        return [cls.from_row(dict(zip(columns, values))) for values in cursor]

    def media_type(self) -> MediaType:
        """The media type, inferred from the MIME type or, failing that, the UTI."""
        if self.mime_type is not None:
            parts = self.mime_type.split("/")
            if len(parts) >= 2:
                kind = _CATEGORIES.get(parts[0])
                if kind is not None:
                    return MediaType(kind, parts[1])
            return MediaType(MediaKind.OTHER, self.mime_type)
        if self.uti == _AUDIO_MESSAGE_UTI:
            # Audio messages are sent in CAF format
            return MediaType(MediaKind.AUDIO, "x-caf; codecs=opus")
        return MediaType(MediaKind.UNKNOWN)

    def as_bytes(
        self,
        platform: Platform,
        db_path: str | os.PathLike[str],
        custom_attachment_root: str | None = None,
    ) -> bytes | None:
        """Read the attachment's file, or ``None`` when it has no resolvable path.

        Raises :class:`OSError` when the file cannot be read.
        """
        file_path = self.resolved_attachment_path(platform, db_path, custom_attachment_root)
        if file_path is None:
            return None
        return Path(file_path).read_bytes()

    def get_sticker_effect(
        self,
        platform: Platform,
        db_path: str | os.PathLike[str],
        custom_attachment_root: str | None = None,
    ) -> StickerEffect | None:
        """The sticker's effect, or ``None`` if the attachment is not a sticker."""
        if not self.is_sticker:
            return None
        data = self.as_bytes(platform, db_path, custom_attachment_root)
        if data is not None:
            return get_sticker_effect(data)
        return StickerEffect.default()

    def path(self) -> Path | None:
        """The stored path of the file, if any."""
        return Path(self.filename) if self.filename is not None else None

    def extension(self) -> str | None:
        """The file name extension, if any."""
        path = self.path()
        if path is None or not path.suffix:
            return None
        return path.suffix[1:]

    def best_filename(self) -> str | None:
        """The transfer name, falling back to the stored file name."""
        return self.transfer_name if self.transfer_name is not None else self.filename

    @classmethod
    def get_total_attachment_bytes(
        cls, db: sqlite3.Connection, limit: int | None = None
    ) -> int:
        """Total bytes referenced in the table; negative sums count as zero."""
        query = f"SELECT IFNULL(SUM(total_bytes), 0) FROM {ATTACHMENT} a"
        if limit is not None:
            query += f" LIMIT {int(limit)}"
        (total,) = db.execute(query).fetchone()
        return max(int(total), 0)

    def resolved_attachment_path(
        self,
        platform: Platform,
        db_path: str | os.PathLike[str],
        custom_attachment_root: str | None = None,
    ) -> str | None:
        """Where the attachment's file lives on disk for the given platform."""
        return resolve_attachment_path(
            self.filename, platform, db_path, custom_attachment_root
        )