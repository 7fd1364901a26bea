"""
Per-channel statistics over collections of colors.

All functions raise EmptyInputError on an empty collection. Math is integer
only; Python ints cannot overflow, so sums need no widening.
"""

from typing import List, Sequence

from palettekit.errors import EmptyInputError
from .color import Color, ColorChannel


def _require_colors(colors: Sequence[Color], operation: str) -> None:
    if len(colors) == 0:
        raise EmptyInputError(f"Cannot compute {operation} of an empty color collection")


def channel_range(colors: Sequence[Color], channel: ColorChannel) -> int:
    """Max minus min of ``channel`` across ``colors``."""
    _require_colors(colors, f"{channel.name} range")
    values = [channel.value_of(color) for color in colors]
    return max(values) - min(values)


def channel_mean(colors: Sequence[Color], channel: ColorChannel) -> int:
    """Truncated integer mean of ``channel`` across ``colors``."""
    _require_colors(colors, f"{channel.name} mean")
    total = sum(channel.value_of(color) for color in colors)
    return total // len(colors)


def channel_median(colors: List[Color], channel: ColorChannel) -> int:
    """
    Median of ``channel`` across ``colors``.

    Sorts ``colors`` in place by the channel; callers needing the original
    order must pass a copy. For an even count the result is the truncated
    mean of the two middle values.
    """
    _require_colors(colors, f"{channel.name} median")
    colors.sort(key=channel.value_of)

    mid = len(colors) // 2
    if len(colors) % 2 == 0:
        return channel_mean([colors[mid - 1], colors[mid]], channel)
    return channel.value_of(colors[mid])


def color_ranges(colors: Sequence[Color]) -> Color:
    """Per-channel ranges packed into a Color."""
    return Color.from_fn(lambda channel: channel_range(colors, channel))


def color_mean(colors: Sequence[Color]) -> Color:
    """Per-channel truncated mean packed into a Color."""
    return Color.from_fn(lambda channel: channel_mean(colors, channel))


def highest_range_channel(colors: Sequence[Color]) -> ColorChannel:
    """
    Channel with the largest range across ``colors``.

    Alpha takes part like any other channel. Ties go to the first channel in
    R, G, B, A order.
    """
    ranges = color_ranges(colors)
    # max() keeps the first maximal element
    return max(ColorChannel.all(), key=lambda channel: channel.value_of(ranges))
