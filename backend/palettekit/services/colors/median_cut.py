"""
Median cut palette construction.

See https://en.wikipedia.org/wiki/Median_cut. Each level splits every bucket
on its highest-range channel at that channel's median; the leaves' mean
colors form the palette.
"""

from typing import List, Sequence, Tuple

from .color import Color
from .statistics import channel_median, color_mean, highest_range_channel


def median_cut(bucket: List[Color]) -> Tuple[List[Color], List[Color]]:
    """
    Split one bucket into (above, below) the median of its widest channel.

    ``bucket`` is reordered in place. Colors strictly greater than the
    median go above, everything else below. Either half may come back empty.

    Raises:
        EmptyInputError: If ``bucket`` is empty
    """
    channel = highest_range_channel(bucket)
    median = channel_median(bucket, channel)

    above_median: List[Color] = []
    below_median: List[Color] = []
    for color in bucket:
        if channel.value_of(color) > median:
            above_median.append(color)
        else:
            below_median.append(color)

    return above_median, below_median


def make_palette(bucket: List[Color], iterations: int) -> List[Color]:
    """
    Recursive median cut over a bucket this call is free to reorder.

    Returns 2**iterations colors, above-median branch first at every level.

    Raises:
        EmptyInputError: If any bucket in the recursion is empty
    """
    if iterations < 1:
        return [color_mean(bucket)]

    above, below = median_cut(bucket)
    palette = make_palette(above, iterations - 1)
    palette.extend(make_palette(below, iterations - 1))
    return palette


def build_palette(pixels: Sequence[Color], iterations: int) -> List[Color]:
    """
    Build a 2**iterations color palette from ``pixels``.

    ``pixels`` is copied before splitting, so the caller's order survives.

    Args:
        pixels: Source colors, any order
        iterations: Number of median cut levels (>= 0)

    Returns:
        Palette colors in split order

    Raises:
        ValueError: If iterations is negative or not an integer
        EmptyInputError: If pixels is empty or a split starves a bucket
    """
    if isinstance(iterations, bool) or not isinstance(iterations, int):
        raise ValueError(f"iterations must be an integer, got {iterations!r}")
    if iterations < 0:
        raise ValueError(f"iterations must be non-negative, got {iterations}")

    return make_palette(list(pixels), iterations)
