"""
Palette extraction service.

Ties image decoding, remote fetching and the median cut engine together,
with per-stage timing, logging and metrics. The engine itself stays silent;
failures are logged here and re-raised unchanged.
"""

import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Union

from PIL import Image

from palettekit.config import config
from palettekit.services.fetch import fetch_image_bytes
from palettekit.services.imaging import ImageSource, decode_image, gather_pixels
from palettekit.utils.ids import generate_request_id
from palettekit.utils.logging import get_logger
from palettekit.utils.metrics import get_metrics
from .color import Color
from .median_cut import build_palette
from .reassign import assign_colors


@contextmanager
def _timed_stage(stage: str, request_id: str) -> Iterator[None]:
    """Record a stage's duration; log and count it if it fails."""
    logger = get_logger()
    metrics = get_metrics()
    start_time = time.time()
    try:
        yield
    except Exception as e:
        metrics.increment_failure_count(type(e).__name__)
        logger.error(f"Stage {stage} failed: {e}", extra={"request_id": request_id})
        raise
    duration_ms = (time.time() - start_time) * 1000
    metrics.record_timing(stage, duration_ms)
    logger.debug(f"Stage {stage} took {duration_ms:.1f}ms", extra={"request_id": request_id})


def palette_to_hex(colors: Sequence[Color]) -> List[str]:
    """Display strings (#RRGGBB) for palette colors, in palette order."""
    hex_colors = [color.to_hex() for color in colors]
    for hex_color in hex_colors:
        get_logger().debug(hex_color)
    return hex_colors


def _palette_from_source(source: ImageSource, iterations: int, request_id: str) -> List[Color]:
    with _timed_stage("decode", request_id):
        pixels, width, height = decode_image(source, max_edge=config.MAX_EDGE)

    get_logger().info(
        f"Building palette from {width}x{height} image",
        extra={"request_id": request_id, "iterations": iterations}
    )

    with _timed_stage("palette", request_id):
        palette = build_palette(pixels, iterations)

    get_metrics().record_palette_size(len(palette))
    get_logger().info(f"{len(palette)} colors!", extra={"request_id": request_id})
    return palette


def palette_from_path(path: Union[str, Path], iterations: int) -> List[Color]:
    """
    Build a palette from an image file on disk.

    Raises:
        DecodeError: If the file cannot be read as an image
        EmptyInputError: If median cut starves a bucket
    """
    request_id = generate_request_id("file")
    return _palette_from_source(path, iterations, request_id)


def palette_from_bytes(data: bytes, iterations: int) -> List[Color]:
    """Build a palette from encoded image bytes."""
    request_id = generate_request_id("upload")
    return _palette_from_source(data, iterations, request_id)


def palette_from_url(url: str, iterations: int) -> List[Color]:
    """
    Fetch an image over HTTP(S) and build its palette.

    Raises:
        TransportError: If the fetch fails or returns a non-2xx status
        DecodeError: If the body is not a decodable image
        EmptyInputError: If median cut starves a bucket
    """
    request_id = generate_request_id("url")
    get_logger().info(f"Fetching image from {url}", extra={"request_id": request_id})

    with _timed_stage("fetch", request_id):
        content = fetch_image_bytes(url)

    return _palette_from_source(content, iterations, request_id)


def quantize_image(source: ImageSource, iterations: int, request_id: Optional[str] = None) -> Image.Image:
    """
    Re-render an image using only its own median cut palette.

    Returns:
        RGBA image with the decoded dimensions, after any MAX_EDGE downscale
    """
    request_id = request_id or generate_request_id("quant")

    with _timed_stage("decode", request_id):
        pixels, width, height = decode_image(source, max_edge=config.MAX_EDGE)

    with _timed_stage("palette", request_id):
        palette = build_palette(pixels, iterations)

    get_metrics().record_palette_size(len(palette))

    with _timed_stage("reassign", request_id):
        quantized = assign_colors(pixels, palette)

    get_logger().info(
        f"Quantized {width}x{height} image to {len(palette)} colors",
        extra={"request_id": request_id}
    )
    return gather_pixels(quantized, width, height)


def quantize_file(input_file: Union[str, Path], output_file: Union[str, Path], iterations: int) -> None:
    """Quantize an image file and write the result; format follows the extension."""
    image = quantize_image(input_file, iterations)
    if Path(output_file).suffix.lower() in (".jpg", ".jpeg"):
        image = image.convert("RGB")
    image.save(output_file)
