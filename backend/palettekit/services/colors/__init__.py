"""
palettekit Colors Module

Median cut palette construction, nearest color reassignment and swatch
rendering for decoded images.
"""

from .color import Color, ColorChannel
from .median_cut import build_palette, median_cut
from .reassign import assign_colors, color_distance_sq

__version__ = "1.0.0"

__all__ = [
    "Color",
    "ColorChannel",
    "build_palette",
    "median_cut",
    "assign_colors",
    "color_distance_sq",
]
