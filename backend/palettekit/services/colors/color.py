"""
Color value type and channel accessors.

A Color is four 8-bit channels (r, g, b, a). ColorChannel enumerates the
channels in the fixed order R, G, B, A; downstream tie-breaking relies on
that order.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple


class ColorChannel(Enum):
    """One 8-bit component of a Color."""

    R = "r"
    G = "g"
    B = "b"
    A = "a"

    @classmethod
    def all(cls) -> Tuple["ColorChannel", ...]:
        """All channels, always in R, G, B, A order."""
        return (cls.R, cls.G, cls.B, cls.A)

    def value_of(self, color: "Color") -> int:
        """Project this channel's value out of a color."""
        return getattr(color, self.value)


@dataclass(frozen=True)
class Color:
    """Immutable RGBA color with 8-bit channels."""

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self):
        for channel in ColorChannel.all():
            value = channel.value_of(self)
            if not 0 <= value <= 255:
                raise ValueError(
                    f"Channel {channel.name} out of range [0, 255]: {value}"
                )

    @classmethod
    def from_fn(cls, fn: Callable[[ColorChannel], Optional[int]]) -> Optional["Color"]:
        """
        Build a color by computing each channel with ``fn``.

        Channels are computed in R, G, B, A order. Returns None as soon as
        any channel yields None.
        """
        values = []
        for channel in ColorChannel.all():
            value = fn(channel)
            if value is None:
                return None
            values.append(value)
        return cls(*values)

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)

    def to_hex(self) -> str:
        """Display string ``#RRGGBB``; alpha is dropped."""
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"
