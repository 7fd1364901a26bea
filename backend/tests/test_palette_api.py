"""
API integration tests for palette endpoints.

Tests the HTTP surface:
- palette from URL and from upload
- swatch image rendering and cleanup
- quantized image rendering
- error mapping and parameter validation
"""
import io
from unittest.mock import patch

import numpy as np
import pytest
from PIL import Image

from palettekit.config import config
from palettekit.errors import TransportError

FETCH = "palettekit.services.colors.extraction.fetch_image_bytes"


class TestMakePalette:
    """Test the /make_palette endpoint"""

    def test_palette_from_url(self, test_client, black_white_image, png_bytes):
        with patch(FETCH, return_value=png_bytes(black_white_image)):
            response = test_client.post(
                "/make_palette",
                json={"link": "https://example.com/bw.png", "iterations": 1}
            )

        assert response.status_code == 200
        assert response.json() == {"colors": ["#FFFFFF", "#000000"]}

    def test_default_iterations(self, test_client, png_bytes):
        img = np.arange(16 * 16 * 4, dtype=np.uint32).reshape(16, 16, 4) % 256
        img[:, :, 3] = 255
        with patch(FETCH, return_value=png_bytes(img)):
            response = test_client.post("/make_palette", json={"link": "https://example.com/a.png"})

        assert response.status_code == 200
        assert len(response.json()["colors"]) == 2 ** config.DEFAULT_ITERATIONS

    def test_transport_error_maps_to_502(self, test_client):
        with patch(FETCH, side_effect=TransportError("404 Client Error: Not Found")):
            response = test_client.post(
                "/make_palette",
                json={"link": "https://example.com/missing.png", "iterations": 2}
            )

        assert response.status_code == 502
        assert "404" in response.json()["detail"]

    def test_undecodable_body_maps_to_400(self, test_client):
        with patch(FETCH, return_value=b"<html>not an image</html>"):
            response = test_client.post(
                "/make_palette",
                json={"link": "https://example.com/page.html", "iterations": 2}
            )

        assert response.status_code == 400

    def test_starved_bucket_maps_to_422(self, test_client, uniform_image, png_bytes):
        with patch(FETCH, return_value=png_bytes(uniform_image)):
            response = test_client.post(
                "/make_palette",
                json={"link": "https://example.com/flat.png", "iterations": 2}
            )

        assert response.status_code == 422
        assert "empty" in response.json()["detail"].lower()

    @pytest.mark.parametrize("iterations", [-1, config.MAX_ITERATIONS + 1])
    def test_iterations_out_of_bounds(self, test_client, iterations):
        response = test_client.post(
            "/make_palette",
            json={"link": "https://example.com/a.png", "iterations": iterations}
        )
        assert response.status_code == 422


class TestPaletteFromImage:
    """Test the /palette_from_image upload endpoint"""

    def test_upload(self, test_client, gray_ramp_image, png_bytes):
        response = test_client.post(
            "/palette_from_image?iterations=2",
            files={"file": ("ramp.png", png_bytes(gray_ramp_image), "image/png")}
        )

        assert response.status_code == 200
        assert response.json()["colors"] == ["#F0F0F0", "#A0A0A0", "#505050", "#000000"]

    def test_unsupported_media_type(self, test_client):
        response = test_client.post(
            "/palette_from_image",
            files={"file": ("notes.txt", b"hello", "text/plain")}
        )
        assert response.status_code == 415

    def test_corrupt_image(self, test_client):
        response = test_client.post(
            "/palette_from_image",
            files={"file": ("broken.png", b"\x89PNG\r\n\x1a\ngarbage", "image/png")}
        )
        assert response.status_code == 400

    def test_payload_too_large(self, test_client, monkeypatch, gray_ramp_image, png_bytes):
        monkeypatch.setattr(config, "MAX_FILE_MB", 0)
        response = test_client.post(
            "/palette_from_image",
            files={"file": ("ramp.png", png_bytes(gray_ramp_image), "image/png")}
        )
        assert response.status_code == 413

    def test_decoded_pixel_limit(self, test_client, monkeypatch, png_bytes):
        monkeypatch.setattr(config, "MAX_IMAGE_PIXELS", 100)
        flat = np.zeros((40, 40, 4), dtype=np.uint8)

        response = test_client.post(
            "/quantize_image",
            files={"file": ("flat.png", png_bytes(flat), "image/png")}
        )

        assert response.status_code == 413
        assert "40x40" in response.json()["detail"]


class TestMakePaletteImage:
    """Test the /make_palette_image swatch endpoint"""

    def test_swatch_rendered_and_removed(self, test_client, output_dir, monkeypatch,
                                         gray_ramp_image, png_bytes):
        monkeypatch.setattr(config, "OUTPUT_TTL_SECONDS", 0)
        with patch(FETCH, return_value=png_bytes(gray_ramp_image)):
            response = test_client.post(
                "/make_palette_image?id=abc123",
                json={"link": "https://example.com/ramp.png", "iterations": 2}
            )

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"

        with Image.open(io.BytesIO(response.content)) as swatch:
            assert swatch.size == (config.SWATCH_SQUARE_SIZE * 4, config.SWATCH_SQUARE_SIZE)
            rgba = swatch.convert("RGBA")
            assert rgba.getpixel((0, 0)) == (240, 240, 240, 255)
            assert rgba.getpixel((swatch.size[0] - 1, 0)) == (0, 0, 0, 255)

        assert not list(output_dir.glob("abc123*.png"))

    def test_invalid_id_rejected(self, test_client, output_dir):
        response = test_client.post(
            "/make_palette_image?id=../escape",
            json={"link": "https://example.com/ramp.png", "iterations": 1}
        )
        assert response.status_code == 400

    def test_transport_error(self, test_client, output_dir):
        with patch(FETCH, side_effect=TransportError("connection refused")):
            response = test_client.post(
                "/make_palette_image",
                json={"link": "https://example.com/ramp.png", "iterations": 1}
            )
        assert response.status_code == 502


class TestQuantizeImage:

    def test_quantized_png(self, test_client, gray_ramp_image, png_bytes):
        response = test_client.post(
            "/quantize_image?iterations=1",
            files={"file": ("ramp.png", png_bytes(gray_ramp_image), "image/png")}
        )

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        with Image.open(io.BytesIO(response.content)) as quantized:
            assert quantized.size == (2, 2)
            values = sorted(set(np.asarray(quantized.convert("RGBA"))[:, :, 0].ravel().tolist()))
            assert values == [40, 200]


class TestServiceEndpoints:

    def test_health(self, test_client):
        response = test_client.get("/healthz")

        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["service"] == "palettekit"

    def test_metrics_count_requests(self, test_client, black_white_image, png_bytes):
        with patch(FETCH, return_value=png_bytes(black_white_image)):
            test_client.post("/make_palette", json={"link": "https://example.com/bw.png", "iterations": 1})

        counters = test_client.get("/metrics").json()["counters"]
        assert counters["palette_requests_total"] == 1
        assert counters["palette_requests_total_make_palette"] == 1

    def test_cors_headers(self, test_client):
        response = test_client.get("/healthz", headers={"Origin": "http://localhost:3000"})

        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
        assert response.headers["access-control-allow-credentials"] == "true"

    def test_error_body_documented(self, test_client):
        schema = test_client.get("/openapi.json").json()

        assert "ErrorResponse" in schema["components"]["schemas"]
        responses = schema["paths"]["/make_palette"]["post"]["responses"]
        assert responses["502"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
