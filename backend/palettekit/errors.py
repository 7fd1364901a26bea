"""
palettekit Error Types
Failure kinds raised by the palette engine and its service layer.

Each error carries the HTTP status the API layer should answer with.
"""


class PaletteError(Exception):
    """Base class for palette construction and I/O failures."""

    status_code: int = 500


class EmptyInputError(PaletteError):
    """Statistics, means or reassignment requested over an empty collection."""

    status_code = 422


class DecodeError(PaletteError):
    """Input bytes or path could not be decoded as an image."""

    status_code = 400


class TransportError(PaletteError):
    """Remote image fetch failed or returned a non-success status."""

    status_code = 502


class PayloadTooLargeError(PaletteError):
    """Uploaded or fetched image exceeds the configured size limit."""

    status_code = 413
