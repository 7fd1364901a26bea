"""
Nearest palette color reassignment.

Distance is the squared Euclidean distance over R, G, B and A. The square
root is skipped since it does not change the ordering.
"""

from typing import List, Sequence

from palettekit.errors import EmptyInputError
from .color import Color, ColorChannel


def color_distance_sq(a: Color, b: Color) -> int:
    """Sum of squared per-channel differences between two colors."""
    return sum(
        abs(channel.value_of(a) - channel.value_of(b)) ** 2
        for channel in ColorChannel.all()
    )


def nearest_color(color: Color, palette: Sequence[Color]) -> Color:
    """Closest palette entry to ``color``; the earliest entry wins ties."""
    if len(palette) == 0:
        raise EmptyInputError("Cannot find nearest color in an empty palette")
    return min(palette, key=lambda entry: color_distance_sq(color, entry))


def assign_colors(pixels: Sequence[Color], palette: Sequence[Color]) -> List[Color]:
    """
    Replace every pixel with its nearest palette color.

    Args:
        pixels: Source colors in row-major order
        palette: Candidate colors, must not be empty

    Returns:
        New list with the same length and order as ``pixels``

    Raises:
        EmptyInputError: If palette is empty
    """
    if len(palette) == 0:
        raise EmptyInputError("Cannot reassign colors against an empty palette")

    palette = list(palette)
    # Images repeat colors heavily; look each distinct one up once
    lookup = {}
    result = []
    for pixel in pixels:
        match = lookup.get(pixel)
        if match is None:
            match = nearest_color(pixel, palette)
            lookup[pixel] = match
        result.append(match)
    return result
