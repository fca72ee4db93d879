import sqlite3
from pathlib import Path

import pytest

from imsgdb.attachment import Attachment, MediaKind, MediaType
from imsgdb.paths import DEFAULT_ATTACHMENT_ROOT, Platform
from imsgdb.sticker import StickerEffect


def sample_attachment():
    return Attachment(
        rowid=1,
        filename="a/b/c.png",
        uti="public.png",
        mime_type="image/png",
        transfer_name="c.png",
        total_bytes=100,
        is_sticker=False,
        hide_attachment=0,
        emoji_description=None,
        copied_path=None,
    )


def _make_db(with_emoji_column=True):
    db = sqlite3.connect(":memory:")
    extra = ", emoji_image_short_description TEXT" if with_emoji_column else ""
    db.execute(
        "CREATE TABLE attachment (ROWID INTEGER PRIMARY KEY AUTOINCREMENT, "
        "filename TEXT, uti TEXT, mime_type TEXT, transfer_name TEXT, "
        f"total_bytes INTEGER, is_sticker INTEGER, hide_attachment INTEGER{extra})"
    )
    db.execute("CREATE TABLE message_attachment_join (message_id INTEGER, attachment_id INTEGER)")
    rows = [
        (1, "~/a.png", "public.png", "image/png", "a.png", 100, 0, 0),
        (2, "~/b.heic", "public.heic", "image/heic", "b.heic", 250, 1, 0),
        (3, "~/c.caf", "com.apple.coreaudio-format", None, "c.caf", 50, 0, 1),
    ]
    db.executemany(
        "INSERT INTO attachment (ROWID, filename, uti, mime_type, transfer_name, "
        "total_bytes, is_sticker, hide_attachment) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
        rows,
    )
    db.executemany(
        "INSERT INTO message_attachment_join VALUES (?, ?)", [(10, 1), (10, 2), (11, 3)]
    )
    return db


def test_can_get_path():
    assert sample_attachment().path() == Path("a/b/c.png")


def test_cant_get_path_missing():
    attachment = sample_attachment()
    attachment.filename = None
    assert attachment.path() is None


def test_can_get_extension():
    assert sample_attachment().extension() == "png"


def test_cant_get_extension_missing():
    attachment = sample_attachment()
    attachment.filename = None
    assert attachment.extension() is None


def test_can_get_mime_type_png():
    assert sample_attachment().media_type() == MediaType(MediaKind.IMAGE, "png")


def test_can_get_mime_type_heic():
    attachment = sample_attachment()
    attachment.mime_type = "image/heic"
    assert attachment.media_type() == MediaType(MediaKind.IMAGE, "heic")


def test_can_get_mime_type_fake():
    attachment = sample_attachment()
    attachment.mime_type = "fake/bloop"
    assert attachment.media_type() == MediaType(MediaKind.OTHER, "fake/bloop")


def test_can_get_mime_type_missing():
    attachment = sample_attachment()
    attachment.mime_type = None
    assert attachment.media_type() == MediaType(MediaKind.UNKNOWN)


def test_mime_type_falls_back_to_audio_uti():
    attachment = sample_attachment()
    attachment.mime_type = None
    attachment.uti = "com.apple.coreaudio-format"
    assert attachment.media_type() == MediaType(MediaKind.AUDIO, "x-caf; codecs=opus")


def test_mime_type_without_slash_is_other():
    attachment = sample_attachment()
    attachment.mime_type = "image"
    assert attachment.media_type() == MediaType(MediaKind.OTHER, "image")


@pytest.mark.parametrize(
    "media, expected",
    [
        (MediaType(MediaKind.IMAGE, "png"), "image/png"),
        (MediaType(MediaKind.AUDIO, "x-m4a"), "audio/x-m4a"),
        (MediaType(MediaKind.APPLICATION, "pdf"), "application/pdf"),
        (MediaType(MediaKind.OTHER, "fake/bloop"), "fake/bloop"),
        (MediaType(MediaKind.UNKNOWN), ""),
    ],
)
def test_as_mime_type(media, expected):
    assert media.as_mime_type() == expected


def test_can_get_filename():
    assert sample_attachment().best_filename() == "c.png"


def test_can_get_filename_no_transfer_name():
    attachment = sample_attachment()
    attachment.transfer_name = None
    assert attachment.best_filename() == "a/b/c.png"


def test_can_get_filename_no_filename():
    attachment = sample_attachment()
    attachment.filename = None
    assert attachment.best_filename() == "c.png"


def test_can_get_filename_no_meta():
    attachment = sample_attachment()
    attachment.transfer_name = None
    attachment.filename = None
    assert attachment.best_filename() is None


def test_can_get_resolved_path_macos():
    assert (
        sample_attachment().resolved_attachment_path(Platform.MACOS, "fake_root", None)
        == "a/b/c.png"
    )


def test_can_get_resolved_path_macos_custom():
    attachment = sample_attachment()
    attachment.filename = f"{DEFAULT_ATTACHMENT_ROOT}/a/b/c.png"
    assert (
        attachment.resolved_attachment_path(Platform.MACOS, "fake_root", "custom/root")
        == "custom/root/a/b/c.png"
    )


def test_can_get_resolved_path_macos_raw():
    attachment = sample_attachment()
    attachment.filename = "~/a/b/c.png"
    resolved = attachment.resolved_attachment_path(Platform.MACOS, "fake_root", None)
    assert len(resolved) > len(attachment.filename)


def test_can_get_resolved_path_macos_raw_tilde():
    attachment = sample_attachment()
    attachment.filename = "~/a/b/c~d.png"
    resolved = attachment.resolved_attachment_path(Platform.MACOS, "fake_root", None)
    assert resolved.endswith("c~d.png")


def test_can_get_resolved_path_ios():
    assert (
        sample_attachment().resolved_attachment_path(Platform.IOS, Path("fake_root"), None)
        == "fake_root/41/41746ffc65924078eae42725c979305626f57cca"
    )


def test_can_get_resolved_path_ios_custom():
    assert (
        sample_attachment().resolved_attachment_path(
            Platform.IOS, Path("fake_root"), "custom/root"
        )
        == "fake_root/41/41746ffc65924078eae42725c979305626f57cca"
    )


@pytest.mark.parametrize("platform", [Platform.MACOS, Platform.IOS])
def test_cant_get_missing_resolved_path(platform):
    attachment = sample_attachment()
    attachment.filename = None
    assert attachment.resolved_attachment_path(platform, "fake_root", None) is None


def test_can_get_attachment_bytes_no_filter():
    db = _make_db()
    assert Attachment.get_total_attachment_bytes(db) == 400


def test_can_get_attachment_bytes_limit_filter():
    db = _make_db()
    assert Attachment.get_total_attachment_bytes(db, 10) == 400


def test_attachment_bytes_empty_table_is_zero():
    db = _make_db()
    db.execute("DELETE FROM attachment")
    assert Attachment.get_total_attachment_bytes(db) == 0


def test_negative_attachment_bytes_clamped():
    db = _make_db()
    db.execute("UPDATE attachment SET total_bytes = -1000")
    assert Attachment.get_total_attachment_bytes(db) == 0


def test_from_row_defaults():
    attachment = Attachment.from_row({"ROWID": 7})
    assert attachment == Attachment(rowid=7)


def test_from_row_requires_rowid():
    with pytest.raises(KeyError):
        Attachment.from_row({"filename": "x.png"})


def test_for_message():
    db = _make_db()
    attachments = Attachment.for_message(db, 10)
    assert sorted(a.rowid for a in attachments) == [1, 2]
    by_id = {a.rowid: a for a in attachments}
    assert by_id[2].is_sticker is True
    assert by_id[2].transfer_name == "b.heic"
    assert by_id[1].total_bytes == 100


def test_for_message_without_attachments():
    db = _make_db()
    assert Attachment.for_message(db, 99) == []


def test_for_message_falls_back_without_columns():
    db = _make_db(with_emoji_column=False)
    attachments = Attachment.for_message(db, 11)
    assert [a.rowid for a in attachments] == [3]
    assert attachments[0].emoji_description is None
    assert attachments[0].hide_attachment == 1


def test_as_bytes_reads_file(tmp_path):
    target = tmp_path / "file.bin"
    target.write_bytes(b"\x00\x01data")
    attachment = sample_attachment()
    attachment.filename = str(target)
    assert attachment.as_bytes(Platform.MACOS, tmp_path) == b"\x00\x01data"


def test_as_bytes_no_filename():
    attachment = sample_attachment()
    attachment.filename = None
    assert attachment.as_bytes(Platform.MACOS, "fake_root") is None


def test_as_bytes_missing_file(tmp_path):
    attachment = sample_attachment()
    attachment.filename = str(tmp_path / "missing.png")
    with pytest.raises(OSError):
        attachment.as_bytes(Platform.MACOS, tmp_path)


def test_sticker_effect_not_sticker(tmp_path):
    assert sample_attachment().get_sticker_effect(Platform.MACOS, tmp_path) is None


def test_sticker_effect_from_file(tmp_path):
    target = tmp_path / "sticker.heic"
    target.write_bytes(b'header stickerEffect:type="stroke"/> trailer')
    attachment = sample_attachment()
    attachment.is_sticker = True
    attachment.filename = str(target)
    assert attachment.get_sticker_effect(Platform.MACOS, tmp_path) == StickerEffect.OUTLINE


def test_sticker_effect_without_file_is_normal():
    attachment = sample_attachment()
    attachment.is_sticker = True
    attachment.filename = None
    assert attachment.get_sticker_effect(Platform.MACOS, "fake_root") == StickerEffect.NORMAL