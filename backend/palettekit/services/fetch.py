"""
palettekit Remote Image Fetching
Downloads encoded image bytes over HTTP(S).
"""
from typing import Optional
from urllib.parse import urlparse

import requests

from palettekit.config import config
from palettekit.errors import TransportError
from palettekit.services.imaging import validate_payload_size


def fetch_image_bytes(url: str, timeout: Optional[float] = None) -> bytes:
    """
    Fetch raw image bytes from a URL.

    Args:
        url: http or https URL of the image
        timeout: Request timeout in seconds (default from config)

    Returns:
        Response body bytes

    Raises:
        TransportError: For unsupported schemes, transport failures or non-2xx status
        PayloadTooLargeError: If the body exceeds MAX_FILE_MB
    """
    if timeout is None:
        timeout = config.FETCH_TIMEOUT_SECONDS

    scheme = urlparse(url).scheme.lower()
    if scheme not in ("http", "https"):
        raise TransportError(f"Unsupported URL scheme: {scheme or 'none'}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise TransportError(f"Failed to fetch image from {url}: {str(e)}") from e

    content = response.content
    validate_payload_size(content)
    return content
