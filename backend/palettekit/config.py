"""
palettekit Configuration
Manages environment variables and defaults for the palette service.
"""
import os
from typing import List

from dotenv import load_dotenv

# Load .env before reading any settings
load_dotenv()


class Config:
    """Configuration class for palettekit services."""

    # Upload and fetch limits
    MAX_FILE_MB: int = int(os.environ.get("PALETTEKIT_MAX_FILE_MB", "10"))
    FETCH_TIMEOUT_SECONDS: float = float(os.environ.get("PALETTEKIT_FETCH_TIMEOUT_SECONDS", "10"))

    # Downscale long edge before building a palette (0 disables)
    MAX_EDGE: int = int(os.environ.get("PALETTEKIT_MAX_EDGE", "768"))

    # Decoded pixel limit checked before an image is loaded
    MAX_IMAGE_PIXELS: int = int(os.environ.get("PALETTEKIT_MAX_IMAGE_PIXELS", "40000000"))

    # Median cut depth; palette size is 2**iterations
    DEFAULT_ITERATIONS: int = int(os.environ.get("PALETTEKIT_DEFAULT_ITERATIONS", "4"))
    MAX_ITERATIONS: int = int(os.environ.get("PALETTEKIT_MAX_ITERATIONS", "8"))

    # Swatch rendering and output files
    SWATCH_SQUARE_SIZE: int = int(os.environ.get("PALETTEKIT_SWATCH_SQUARE_SIZE", "50"))
    OUTPUT_DIR: str = os.environ.get("PALETTEKIT_OUTPUT_DIR", "./output")
    OUTPUT_TTL_SECONDS: float = float(os.environ.get("PALETTEKIT_OUTPUT_TTL_SECONDS", "45"))

    # Logging
    LOG_LEVEL: str = os.environ.get("PALETTEKIT_LOG_LEVEL", "INFO")

    # CORS settings
    ALLOWED_ORIGINS: str = os.environ.get("PALETTEKIT_ALLOWED_ORIGINS", "http://localhost:3000")

    # Supported upload formats
    SUPPORTED_MIME_TYPES = ["image/jpeg", "image/png", "image/gif", "image/webp", "image/bmp"]

    @classmethod
    def allowed_origins(cls) -> List[str]:
        """Comma separated ALLOWED_ORIGINS as a list."""
        return [origin.strip() for origin in cls.ALLOWED_ORIGINS.split(",") if origin.strip()]


# Global config instance
config = Config()
