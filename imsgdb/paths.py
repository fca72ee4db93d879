"""Resolution of attachment paths on disk for macOS and iOS databases."""

from __future__ import annotations

import hashlib
import os
from enum import Enum
from pathlib import Path

DEFAULT_ATTACHMENT_ROOT = "~/Library/Messages/Attachments"
"""The default root directory for attachment data."""


class Platform(Enum):
    """The kind of system the database came from."""

    MACOS = "macOS"
    IOS = "iOS"


def _home() -> str:
    return os.path.expanduser("~")


def macos_attachment_path(path: str) -> str:
    """Expand a leading ``~`` in a macOS attachment path to the home directory."""
    if path.startswith("~"):
        return path.replace("~", _home(), 1)
    return path


def ios_attachment_path(file_path: str, db_path: str | os.PathLike[str]) -> str | None:
    """Locate an attachment inside an iOS backup.

    Backup file names are the SHA-1 of ``MediaDomain-`` followed by the
    attachment path without its first two bytes (the ``~/`` prefix), stored
    in a directory named after the hash's first two hex digits.
    Returns ``None`` when the path is too short to hold that prefix.
    """
    raw = file_path.encode("utf-8")
    if len(raw) < 2:
        return None
    try:
        relative = raw[2:].decode("utf-8")
    except UnicodeDecodeError:
        # Offset 2 falls inside a multi-byte character
        return None
    digest = hashlib.sha1(f"MediaDomain-{relative}".encode("utf-8")).hexdigest()
    return f"{Path(db_path)}/{digest[:2]}/{digest}"


def resolve_attachment_path(
    filename: str | None,
    platform: Platform,
    db_path: str | os.PathLike[str],
    custom_attachment_root: str | None = None,
) -> str | None:
    """Resolve where an attachment's file lives on disk.

    ``db_path`` is only used for iOS backups, where it is the backup root.
    A ``custom_attachment_root`` replaces :data:`DEFAULT_ATTACHMENT_ROOT`
    wherever it appears in ``filename``.
    """
    if filename is None:
        return None
    path = filename
    if custom_attachment_root is not None:
        path = path.replace(DEFAULT_ATTACHMENT_ROOT, custom_attachment_root)
    if platform is Platform.MACOS:
        return macos_attachment_path(path)
    return ios_attachment_path(path, db_path)