"""
Swatch Rendering Module

Renders a palette as a horizontal strip of solid squares, one per color,
left to right in palette order.
"""

from pathlib import Path
from typing import Sequence, Union

import numpy as np
from PIL import Image
from loguru import logger

from palettekit.services.imaging import encode_png_bytes
from .color import Color


def render_swatch(colors: Sequence[Color], square_size: int = 50) -> np.ndarray:
    """
    Render a horizontal strip of color squares.

    Args:
        colors: Palette colors, rendered left to right
        square_size: Edge length of each square in pixels

    Returns:
        RGBA uint8 array of shape (square_size, square_size * len(colors), 4)

    Raises:
        ValueError: If colors is empty or square_size is not positive
    """
    if not colors:
        raise ValueError("Empty palette provided")
    if square_size <= 0:
        raise ValueError("square_size must be positive")

    k = len(colors)
    logger.debug(f"Rendering swatch strip with {k} colors, square_size={square_size}")

    img = np.zeros((square_size, square_size * k, 4), dtype=np.uint8)
    for i, color in enumerate(colors):
        x_start = i * square_size
        x_end = (i + 1) * square_size
        img[:, x_start:x_end, :] = color.as_tuple()

    return img


def swatch_image(colors: Sequence[Color], square_size: int = 50) -> Image.Image:
    """Swatch strip as a PIL RGBA image."""
    return Image.fromarray(render_swatch(colors, square_size))


def save_swatch(colors: Sequence[Color], path: Union[str, Path], square_size: int = 50) -> None:
    """Render a swatch strip and write it to ``path``."""
    swatch_image(colors, square_size).save(path)
    logger.debug(f"Saved swatch strip with {len(colors)} colors to {path}")


def swatch_png_bytes(colors: Sequence[Color], square_size: int = 50) -> bytes:
    """Render a swatch strip and encode it as PNG bytes."""
    return encode_png_bytes(swatch_image(colors, square_size))
