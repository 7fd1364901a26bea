from fastapi import FastAPI, HTTPException, UploadFile, File, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, Response
from starlette.background import BackgroundTask
from starlette.concurrency import run_in_threadpool
from typing import Optional

from palettekit.config import config
from palettekit.errors import PaletteError
from palettekit.schemas import PaletteUrlRequest, PaletteResponse, HealthResponse, ErrorResponse
from palettekit.services.cleanup import swatch_output_path, remove_file_later
from palettekit.services.colors.extraction import (
    palette_from_bytes, palette_from_url, palette_to_hex, quantize_image
)
from palettekit.services.colors.swatches import save_swatch
from palettekit.services.imaging import encode_png_bytes, validate_payload_size
from palettekit.utils.logging import get_logger
from palettekit.utils.metrics import get_metrics

SERVICE_VERSION = "1.0.0"

app = FastAPI(
    title="palettekit",
    description="Median cut color palettes from images",
    version=SERVICE_VERSION
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.allowed_origins(),
    allow_credentials=True,
    allow_methods=["POST", "PATCH", "GET", "DELETE"],
    allow_headers=["*"]
)

logger = get_logger()

# Error bodies documented on the palette routes
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Undecodable image or invalid argument"},
    413: {"model": ErrorResponse, "description": "Payload or decoded image too large"},
    502: {"model": ErrorResponse, "description": "Remote image could not be fetched"},
}


def _to_http_error(error: Exception) -> HTTPException:
    """Map service failures onto HTTP errors, forwarding the message."""
    logger.warning(f"Request failed: {error}")
    if isinstance(error, PaletteError):
        return HTTPException(status_code=error.status_code, detail=str(error))
    return HTTPException(status_code=400, detail=str(error))


async def _read_upload(file: UploadFile) -> bytes:
    """Read an uploaded image, checking its declared type and size."""
    if file.content_type and file.content_type not in config.SUPPORTED_MIME_TYPES + ["application/octet-stream"]:
        raise HTTPException(
            status_code=415,
            detail=f"Unsupported media type. Supported: {', '.join(config.SUPPORTED_MIME_TYPES)}"
        )

    try:
        content = await file.read()
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Failed to read file: {str(e)}")

    try:
        validate_payload_size(content)
    except PaletteError as e:
        raise _to_http_error(e)
    return content


@app.get("/healthz", response_model=HealthResponse)
def health_check():
    """Health check endpoint"""
    return HealthResponse(ok=True, version=SERVICE_VERSION, service="palettekit")


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": "palettekit API",
        "version": SERVICE_VERSION,
        "docs": "/docs"
    }


@app.get("/metrics")
def metrics_summary():
    """In-process request, failure and timing metrics."""
    return get_metrics().get_summary()


@app.post("/make_palette", response_model=PaletteResponse, responses=ERROR_RESPONSES)
async def make_palette(body: PaletteUrlRequest):
    """
    Build a palette from an image URL.

    - **link**: http(s) URL of the image
    - **iterations**: median cut depth, palette holds 2**iterations colors
    """
    get_metrics().increment_request_count("make_palette")
    try:
        palette = await run_in_threadpool(palette_from_url, body.link, body.iterations)
    except (PaletteError, ValueError) as e:
        raise _to_http_error(e)

    logger.info("HEX code for colors from URL computed", extra={"colors": len(palette)})
    return PaletteResponse(colors=palette_to_hex(palette))


@app.post("/palette_from_image", response_model=PaletteResponse, responses=ERROR_RESPONSES)
async def palette_from_image(
    file: UploadFile = File(...),
    iterations: int = Query(config.DEFAULT_ITERATIONS, ge=0, le=config.MAX_ITERATIONS,
                            description="Median cut depth")
):
    """Build a palette from an uploaded image file."""
    get_metrics().increment_request_count("palette_from_image")
    content = await _read_upload(file)
    try:
        palette = await run_in_threadpool(palette_from_bytes, content, iterations)
    except (PaletteError, ValueError) as e:
        raise _to_http_error(e)

    logger.info("HEX code for colors from local image computed", extra={"colors": len(palette)})
    return PaletteResponse(colors=palette_to_hex(palette))


@app.post("/make_palette_image", responses=ERROR_RESPONSES)
async def make_palette_image(
    body: PaletteUrlRequest,
    id: Optional[str] = Query(None, description="Output file id (letters, digits, '-', '_')")
):
    """
    Build a palette from an image URL and answer with a PNG swatch strip.

    The rendered file is removed OUTPUT_TTL_SECONDS after the response.
    """
    get_metrics().increment_request_count("make_palette_image")
    try:
        output_file = swatch_output_path(id or "swatch")
        palette = await run_in_threadpool(palette_from_url, body.link, body.iterations)
        await run_in_threadpool(save_swatch, palette, output_file, config.SWATCH_SQUARE_SIZE)
    except (PaletteError, ValueError) as e:
        raise _to_http_error(e)

    return FileResponse(
        output_file,
        media_type="image/png",
        background=BackgroundTask(remove_file_later, output_file, config.OUTPUT_TTL_SECONDS)
    )


@app.post("/quantize_image", responses=ERROR_RESPONSES)
async def quantize_uploaded_image(
    file: UploadFile = File(...),
    iterations: int = Query(config.DEFAULT_ITERATIONS, ge=0, le=config.MAX_ITERATIONS,
                            description="Median cut depth")
):
    """Re-render an uploaded image using only its own palette colors (PNG)."""
    get_metrics().increment_request_count("quantize_image")
    content = await _read_upload(file)
    try:
        image = await run_in_threadpool(quantize_image, content, iterations)
    except (PaletteError, ValueError) as e:
        raise _to_http_error(e)

    return Response(content=encode_png_bytes(image), media_type="image/png")
