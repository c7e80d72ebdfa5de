import numpy as np
import pytest
from PIL import Image


@pytest.fixture
def make_pixels():
    """Seeded random RGBA buffers, so every channel has both LSB values."""
    def _make(width, height, seed=1234):
        rng = np.random.default_rng(seed)
        return rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)
    return _make


@pytest.fixture
def cover_image(make_pixels):
    return Image.fromarray(make_pixels(120, 90))


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    for name in (
        "IMG_FU_CAPACITY_RESERVE",
        "IMG_FU_MAX_UTILIZATION",
        "IMG_FU_LEGACY_CAPACITY",
        "IMG_FU_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("IMG_FU_OUTPUT_DIR", str(tmp_path / "stego"))
    monkeypatch.setenv("IMG_FU_RECOVERED_DIR", str(tmp_path / "stego_recovered"))
