import pytest
from PIL import Image


@pytest.fixture
def write_image(tmp_path):
    """Save a solid-colour image under tmp_path and return its path."""

    def _write(name, size=(8, 16), colour=(255, 0, 0), mode="RGB"):
        path = tmp_path / name
        Image.new(mode, size, colour).save(path)
        return path

    return _write
