"""Effects that can alter the appearance of message text."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

_ANIMATION_NAMES: dict[int, str] = {
    # In order of appearance in the text effects menu
    5: "Big",
    11: "Small",
    9: "Shake",
    8: "Nod",
    12: "Explode",
    4: "Ripple",
    6: "Bloom",
    10: "Jitter",
}


class Unit(Enum):
    """Units that a unit-conversion text range can represent."""

    CURRENCY = "Currency"
    DISTANCE = "Distance"
    TEMPERATURE = "Temperature"
    TIMEZONE = "Timezone"
    VOLUME = "Volume"
    WEIGHT = "Weight"


class Style(Enum):
    """Traditional formatting styles."""

    BOLD = "Bold"
    ITALIC = "Italic"
    STRIKETHROUGH = "Strikethrough"
    UNDERLINE = "Underline"


@dataclass(frozen=True)
class Animation:
    """An animated text effect, identified by the integer stored in the message."""

    id: int

    BIG: ClassVar[Animation]
    SMALL: ClassVar[Animation]
    SHAKE: ClassVar[Animation]
    NOD: ClassVar[Animation]
    EXPLODE: ClassVar[Animation]
    RIPPLE: ClassVar[Animation]
    BLOOM: ClassVar[Animation]
    JITTER: ClassVar[Animation]

    @classmethod
    def from_id(cls, value: int) -> Animation:
        """Build the animation for an identifier; unknown identifiers are kept as-is."""
        return cls(int(value))

    @property
    def is_known(self) -> bool:
        return self.id in _ANIMATION_NAMES

    @property
    def name(self) -> str:
        return _ANIMATION_NAMES.get(self.id, "Unknown")

    def __str__(self) -> str:
        return self.name


Animation.BIG = Animation(5)
Animation.SMALL = Animation(11)
Animation.SHAKE = Animation(9)
Animation.NOD = Animation(8)
Animation.EXPLODE = Animation(12)
Animation.RIPPLE = Animation(4)
Animation.BLOOM = Animation(6)
Animation.JITTER = Animation(10)


@dataclass(frozen=True)
class TextEffect:
    """An effect applied to a range of message text.

    ``data`` holds the mentioned contact, the link URL, a tuple of styles,
    an :class:`Animation` or a :class:`Unit`, depending on ``kind``.
    """

    class Kind(Enum):
        DEFAULT = "Default"
        MENTION = "Mention"
        LINK = "Link"
        OTP = "OTP"
        STYLES = "Styles"
        ANIMATED = "Animated"
        CONVERSION = "Conversion"

    kind: TextEffect.Kind
    data: object = None

    @classmethod
    def default(cls) -> TextEffect:
        return cls(cls.Kind.DEFAULT)

    @classmethod
    def mention(cls, contact: str) -> TextEffect:
        return cls(cls.Kind.MENTION, contact)

    @classmethod
    def link(cls, url: str) -> TextEffect:
        return cls(cls.Kind.LINK, url)

    @classmethod
    def otp(cls) -> TextEffect:
        return cls(cls.Kind.OTP)

    @classmethod
    def styles(cls, *styles: Style) -> TextEffect:
        return cls(cls.Kind.STYLES, tuple(styles))

    @classmethod
    def animated(cls, animation: Animation) -> TextEffect:
        return cls(cls.Kind.ANIMATED, animation)

    @classmethod
    def conversion(cls, unit: Unit) -> TextEffect:
        return cls(cls.Kind.CONVERSION, unit)