"""
palettekit Output Cleanup
Naming and delayed removal of rendered output files.
"""
import asyncio
import os
import re
import uuid
from pathlib import Path

from palettekit.config import config
from palettekit.utils.logging import get_logger

OUTPUT_ID_RE = re.compile(r"[A-Za-z0-9_-]{1,64}")


def swatch_output_path(swatch_id: str) -> Path:
    """
    Fresh PNG path for ``swatch_id`` inside OUTPUT_DIR.

    A random suffix keeps concurrent requests sharing an id apart.

    Raises:
        ValueError: If the id contains anything beyond letters, digits, '-' and '_'
    """
    if not OUTPUT_ID_RE.fullmatch(swatch_id):
        raise ValueError(f"Invalid output id: {swatch_id!r}")

    output_dir = Path(config.OUTPUT_DIR)
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir / f"{swatch_id}-{uuid.uuid4().hex[:8]}.png"


async def remove_file_later(path: Path, delay_seconds: float) -> None:
    """Wait ``delay_seconds`` then delete ``path``; a missing file is fine."""
    if delay_seconds > 0:
        await asyncio.sleep(delay_seconds)

    try:
        os.remove(path)
        get_logger().debug(f"Removed output file {path}")
    except FileNotFoundError:
        pass
