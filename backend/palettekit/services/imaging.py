"""
palettekit Imaging Utilities
Decodes images into RGBA pixel lists and writes pixel lists back to files.
"""
import io
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from palettekit.config import config
from palettekit.errors import DecodeError, PayloadTooLargeError
from palettekit.services.colors.color import Color

ImageSource = Union[str, Path, bytes]


def validate_payload_size(data: bytes) -> None:
    """
    Check encoded image bytes against the configured size limit.

    Raises:
        DecodeError: If the payload is empty
        PayloadTooLargeError: If the payload exceeds MAX_FILE_MB
    """
    if not data:
        raise DecodeError("Empty image payload")

    if len(data) > config.MAX_FILE_MB * 1024 * 1024:
        raise PayloadTooLargeError(
            f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )


def resize_long_edge(rgba: np.ndarray, max_edge: Optional[int]) -> np.ndarray:
    """
    Resize image so the longest edge is at most max_edge pixels.

    A max_edge of None or 0 leaves the image untouched.
    """
    if not max_edge:
        return rgba

    height, width = rgba.shape[:2]
    current_max = max(height, width)

    if current_max <= max_edge:
        return rgba

    scale = max_edge / current_max
    new_width = max(1, int(width * scale))
    new_height = max(1, int(height * scale))

    # INTER_AREA for downscaling (better quality)
    return cv2.resize(rgba, (new_width, new_height), interpolation=cv2.INTER_AREA)


def _array_to_colors(rgba: np.ndarray) -> List[Color]:
    return [Color(*pixel) for pixel in rgba.reshape(-1, 4).tolist()]


def read_pixels(image: Image.Image) -> List[Color]:
    """Convert a PIL image to RGBA colors in row-major order."""
    return _array_to_colors(np.asarray(image.convert("RGBA"), dtype=np.uint8))


def _check_pixel_count(width: int, height: int) -> None:
    if width * height > config.MAX_IMAGE_PIXELS:
        raise PayloadTooLargeError(
            f"Image too large: {width}x{height} exceeds {config.MAX_IMAGE_PIXELS} pixels"
        )


def _open_image(source: ImageSource) -> Image.Image:
    try:
        if isinstance(source, (bytes, bytearray)):
            image = Image.open(io.BytesIO(source))
        else:
            image = Image.open(source)
    except FileNotFoundError as e:
        raise DecodeError(f"Image file not found: {source}") from e
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
        raise DecodeError(f"Failed to decode image: {str(e)}") from e

    # Header dimensions are known before the pixel data is decoded
    _check_pixel_count(*image.size)

    try:
        image.load()
    except (Image.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
        raise DecodeError(f"Failed to decode image: {str(e)}") from e
    return image


def decode_image(source: ImageSource, max_edge: Optional[int] = None) -> Tuple[List[Color], int, int]:
    """
    Decode an image from a path or encoded bytes.

    Args:
        source: File path or encoded image bytes
        max_edge: Optional long edge limit applied before reading pixels

    Returns:
        Tuple of (pixels, width, height), pixels as RGBA colors in row-major order

    Raises:
        DecodeError: If the source cannot be read as an image
        PayloadTooLargeError: If the decoded size exceeds MAX_IMAGE_PIXELS
    """
    image = _open_image(source)
    rgba = np.asarray(image.convert("RGBA"), dtype=np.uint8)
    rgba = resize_long_edge(rgba, max_edge)

    height, width = rgba.shape[:2]
    return _array_to_colors(rgba), width, height


def gather_pixels(pixels: Sequence[Color], width: int, height: int) -> Image.Image:
    """
    Assemble row-major RGBA colors into a PIL image.

    Raises:
        ValueError: If the pixel count does not match width * height
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid image dimensions: {width}x{height}")
    if len(pixels) != width * height:
        raise ValueError(
            f"Pixel count mismatch: got {len(pixels)}, expected {width}x{height}={width * height}"
        )

    rgba = np.array([pixel.as_tuple() for pixel in pixels], dtype=np.uint8)
    return Image.fromarray(rgba.reshape(height, width, 4))


def save_pixels(pixels: Sequence[Color], width: int, height: int, path: Union[str, Path]) -> None:
    """Write row-major RGBA colors to an image file; format follows the extension."""
    gather_pixels(pixels, width, height).save(path)


def encode_png_bytes(image: Image.Image) -> bytes:
    """Encode a PIL image as PNG bytes."""
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()
