"""Sticker messages and the effects applied to them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

STICKER_EFFECT_PREFIX = b'stickerEffect:type="'
STICKER_EFFECT_SUFFIX = b'"/>'

_EXIF_EFFECTS = {
    "stroke": "Outline",
    "comic": "Comic",
    "puffy": "Puffy",
    "iridescent": "Shiny",
}


@dataclass(frozen=True)
class StickerEffect:
    """An effect applied to a sticker balloon."""

    label: str
    other: bool = False

    NORMAL: ClassVar[StickerEffect]
    OUTLINE: ClassVar[StickerEffect]
    COMIC: ClassVar[StickerEffect]
    PUFFY: ClassVar[StickerEffect]
    SHINY: ClassVar[StickerEffect]

    @classmethod
    def default(cls) -> StickerEffect:
        return cls.NORMAL

    @classmethod
    def other_effect(cls, name: str) -> StickerEffect:
        return cls(name, other=True)

    @classmethod
    def from_exif(cls, sticker_effect_type: str) -> StickerEffect:
        """Map the effect type found in HEIC EXIF data to an effect."""
        label = _EXIF_EFFECTS.get(sticker_effect_type)
        if label is None:
            return cls.other_effect(sticker_effect_type)
        return cls(label)

    def __str__(self) -> str:
        return self.label


StickerEffect.NORMAL = StickerEffect("Normal")
StickerEffect.OUTLINE = StickerEffect("Outline")
StickerEffect.COMIC = StickerEffect("Comic")
StickerEffect.PUFFY = StickerEffect("Puffy")
StickerEffect.SHINY = StickerEffect("Shiny")


def get_sticker_effect(heic_data: bytes) -> StickerEffect:
    """Parse the sticker effect type from the EXIF data of a HEIC blob."""
    data = bytes(heic_data)
    if data:
        # The prefix must end before the final byte of the blob
        start = data.find(STICKER_EFFECT_PREFIX, 0, len(data) - 1)
        if start == -1:
            return StickerEffect.NORMAL
        rest = data[start + len(STICKER_EFFECT_PREFIX):]
    else:
        rest = data

    if len(rest) > 1:
        end = rest.find(STICKER_EFFECT_SUFFIX, 1)
        if end == -1:
            return StickerEffect.other_effect("Unknown")
        rest = rest[:end]

    return StickerEffect.from_exif(rest.decode("utf-8", errors="replace"))