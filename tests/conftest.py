import pytest
from PIL import Image


@pytest.fixture
def make_image(tmp_path):
    """Write a solid (or given) image to tmp_path and return its path."""
    def _make(size=(2, 2), color=(0, 0, 0), mode="RGB", name="input.png", img=None):
        if img is None:
            img = Image.new(mode, size, color)
        path = tmp_path / name
        img.save(path)
        return str(path)
    return _make
