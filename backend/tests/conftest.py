"""
Test configuration and fixtures for palettekit tests.
"""
import io

import numpy as np
import pytest
from fastapi.testclient import TestClient
from PIL import Image

# Import the main app
from main import app
from palettekit.config import config


@pytest.fixture
def test_client():
    """Create test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics before each test."""
    from palettekit.utils.metrics import reset_metrics
    reset_metrics()


@pytest.fixture
def output_dir(tmp_path, monkeypatch):
    """Point rendered output files at a temporary directory."""
    out = tmp_path / "output"
    monkeypatch.setattr(config, "OUTPUT_DIR", str(out))
    return out


@pytest.fixture
def png_bytes():
    """Factory encoding an (H, W, 3|4) uint8 array as PNG bytes."""
    def _encode(array: np.ndarray) -> bytes:
        buffer = io.BytesIO()
        Image.fromarray(np.asarray(array, dtype=np.uint8)).save(buffer, format="PNG")
        return buffer.getvalue()
    return _encode


@pytest.fixture
def black_white_image():
    """1x2 RGBA image: one black and one white opaque pixel."""
    return np.array([[[0, 0, 0, 255], [255, 255, 255, 255]]], dtype=np.uint8)


@pytest.fixture
def gray_ramp_image():
    """2x2 RGBA image with four evenly spread opaque grays."""
    return np.array([
        [[0, 0, 0, 255], [80, 80, 80, 255]],
        [[160, 160, 160, 255], [240, 240, 240, 255]],
    ], dtype=np.uint8)


@pytest.fixture
def uniform_image():
    """4x4 RGBA image of a single color."""
    img = np.zeros((4, 4, 4), dtype=np.uint8)
    img[:, :] = (10, 20, 30, 255)
    return img
