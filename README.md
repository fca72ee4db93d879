# imsgdb

`imsgdb` reads the `chat`, `handle`, `chat_handle_join` and `attachment` tables of an
iMessage `chat.db` SQLite database and turns their rows into Python objects. It also finds
attachment files on disk for macOS databases and iOS backups, and reads the effect applied
to a sticker from its HEIC data.

It uses only the Python standard library and runs on Python 3.10 or later.

## Installation

```
pip install imsgdb
```

## Modules

- `imsgdb.chat`: `Chat`, a row of the `chat` table. `Chat.cache(db)` maps each row id to
  its chat. `name()` gives the display name, or the chat identifier when no display name
  is set. `display()` gives the display name alone, or `None`.
- `imsgdb.handle`: `Handle`, a row of the `handle` table.
  - `Handle.cache(db)` maps handle row ids to contact strings. Row id `0` maps to `"Me"`.
    Handles that share a `person_centric_id` map to one string: all of that person's ids,
    sorted and joined with spaces.
  - `Handle.dedupe(data)` gives each distinct contact string one new id. It visits handles
    in ascending row id order, so the result does not change from run to run.
  - `Handle.run_diagnostic(db)` prints and returns how many contacts have more than one id.
    It returns `None` when the database has no `person_centric_id` column.
- `imsgdb.chat_handle`: `ChatToHandle`, the chat to participant join table.
  - `ChatToHandle.cache(db)` maps each chat id to a `frozenset` of handle ids.
  - `ChatToHandle.dedupe(data)` gives the same new id to chats that have the same
    participants. The result is deterministic.
  - `ChatToHandle.run_diagnostic(db)` prints and returns the number of chats that have
    messages but no handles.
- `imsgdb.attachment`: `Attachment`, a row of the `attachment` table.
  - `Attachment.for_message(db, message_id)` lists a message's attachments.
  - `media_type()` returns a `MediaType`, with a `MediaKind` and a subtype.
    `MediaType.as_mime_type()` gives the MIME string.
  - `path()`, `extension()` and `best_filename()` describe the file. `best_filename()`
    gives the transfer name, or the stored file name when there is none.
  - `resolved_attachment_path(...)` gives the file's location on disk. `as_bytes(...)`
    reads the file and raises `OSError` when it cannot be read.
  - `get_sticker_effect(...)` gives the effect of a sticker. It returns `None` when the
    attachment is not a sticker.
  - `Attachment.get_total_attachment_bytes(db, limit=None)` sums `total_bytes`.
- `imsgdb.paths`: the `Platform` enum (`MACOS`, `IOS`), `resolve_attachment_path`,
  `macos_attachment_path` and `ios_attachment_path`.
  - On macOS a leading `~` is expanded to the home directory.
  - In an iOS backup the file name is the SHA-1 of `MediaDomain-` followed by the relative
    path, and the file sits in a directory named after the first two hex digits.
  - A custom attachment root replaces `~/Library/Messages/Attachments` in the stored path.
- `imsgdb.sticker`: `StickerEffect`, with the members `NORMAL`, `OUTLINE`, `COMIC`,
  `PUFFY` and `SHINY`, and `get_sticker_effect(heic_bytes)`.
- `imsgdb.text_effects`: the `Unit` and `Style` enums, `Animation`, and `TextEffect`.
  `Animation.from_id(5).name` is `"Big"`; ids the module does not recognise are kept and
  named `"Unknown"`.

## Examples

Build the lookup tables from a database:

```python
import sqlite3

from imsgdb.chat import Chat
from imsgdb.chat_handle import ChatToHandle
from imsgdb.handle import Handle

db = sqlite3.connect("chat.db")

for rowid, chat in Chat.cache(db).items():
    print(rowid, chat.name())

handles = Handle.cache(db)
unique_handles = Handle.dedupe(handles)

participants = ChatToHandle.cache(db)
unique_chats = ChatToHandle.dedupe(participants)
```

Find where a message's attachments are stored:

```python
from pathlib import Path

from imsgdb.attachment import Attachment
from imsgdb.paths import Platform

for attachment in Attachment.for_message(db, message_id=42):
    print(attachment.best_filename(), attachment.media_type().as_mime_type())
    print(attachment.resolved_attachment_path(Platform.IOS, Path("backup")))
```

Read a sticker's effect from its file:

```python
from pathlib import Path

from imsgdb.sticker import get_sticker_effect

print(get_sticker_effect(Path("sticker.heic").read_bytes()))  # e.g. "Puffy"
```

## What it does not do

- It does not read the `message` table and does not decode message bodies.
- It does not decode the plist payloads stored with messages, such as link previews.
- It has no command-line program. It is a library only.

## Running the tests

```
pip install -e .[test]
pytest
```