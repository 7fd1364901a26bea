"""
palettekit API Schemas
Pydantic models for palette request/response validation.
"""
from typing import List

from pydantic import BaseModel, Field

from palettekit.config import config


class PaletteUrlRequest(BaseModel):
    """Request to build a palette from a remote image."""
    link: str = Field(
        ...,
        min_length=1,
        max_length=2048,
        description="http(s) URL of the source image"
    )
    iterations: int = Field(
        config.DEFAULT_ITERATIONS,
        ge=0,
        le=config.MAX_ITERATIONS,
        description="Median cut depth; the palette holds 2**iterations colors"
    )


class PaletteResponse(BaseModel):
    """Palette colors in median cut order."""
    colors: List[str] = Field(
        ...,
        description="Hex color codes in format #RRGGBB"
    )


class HealthResponse(BaseModel):
    """Health check response."""
    ok: bool = Field(True, description="Service health status")
    version: str = Field(..., description="Service version")
    service: str = Field("palettekit", description="Service name")


class ErrorResponse(BaseModel):
    """Error response."""
    detail: str = Field(..., description="Error message")
