import numpy as np
import pytest
from PIL import Image

from blockpic.buffer import InvalidInput, PixelBuffer
from blockpic.colours import ColourMode
from blockpic.render import render


def test_from_bytes_rgb():
    data = bytes(range(4 * 8 * 3))
    buffer = PixelBuffer.from_bytes(4, 8, data)
    assert (buffer.width, buffer.height) == (4, 8)
    assert buffer.pixels.shape == (8, 4, 3)
    assert tuple(buffer.pixels[0, 1]) == (3, 4, 5)


def test_from_bytes_rgba():
    buffer = PixelBuffer.from_bytes(2, 2, bytes(16), channels=4)
    assert buffer.pixels.shape == (2, 2, 4)


def test_from_bytes_ignores_trailing_data():
    buffer = PixelBuffer.from_bytes(1, 1, b"\x01\x02\x03\x04\x05")
    assert tuple(buffer.pixels[0, 0]) == (1, 2, 3)


def test_short_buffer_is_rejected():
    with pytest.raises(InvalidInput, match="needs 96"):
        PixelBuffer.from_bytes(4, 8, bytes(95))


@pytest.mark.parametrize("width, height", [(0, 8), (4, 0), (-4, 8)])
def test_non_positive_size_is_rejected(width, height):
    with pytest.raises(InvalidInput, match="must be positive"):
        PixelBuffer.from_bytes(width, height, bytes(1000))


def test_bad_channel_count_is_rejected():
    with pytest.raises(InvalidInput):
        PixelBuffer.from_bytes(4, 8, bytes(64), channels=2)
    with pytest.raises(InvalidInput):
        PixelBuffer.from_array(np.zeros((8, 4, 2), dtype=np.uint8))


def test_two_dimensional_array_is_rejected():
    with pytest.raises(InvalidInput):
        PixelBuffer.from_array(np.zeros((8, 4), dtype=np.uint8))


def test_mismatched_size_is_rejected():
    with pytest.raises(InvalidInput, match="does not match"):
        PixelBuffer(width=5, height=8, pixels=np.zeros((8, 4, 3), dtype=np.uint8))


def test_invalid_input_is_a_value_error():
    assert issubclass(InvalidInput, ValueError)


def test_from_image_converts_to_rgb():
    buffer = PixelBuffer.from_image(Image.new("L", (6, 10), 77))
    assert buffer.pixels.shape == (10, 6, 3)
    assert buffer.pixels.dtype == np.uint8
    assert (buffer.pixels == 77).all()


def test_out_of_range_samples_are_clamped():
    buffer = PixelBuffer.from_array(np.full((8, 4, 3), (300, -1, 128)))
    assert buffer.pixels.dtype == np.uint8
    assert tuple(buffer.pixels[0, 0]) == (255, 0, 128)
    out = render(buffer, ColourMode.TRUECOLOUR)
    assert out.startswith("\033[38;2;255;0;128m\033[48;2;255;0;128m")


def test_float_samples_are_clamped():
    buffer = PixelBuffer.from_array(np.full((8, 4, 3), (-0.5, 12.7, 999.0)))
    assert tuple(buffer.pixels[0, 0]) == (0, 12, 255)


def test_list_pixels_are_converted():
    buffer = PixelBuffer(width=1, height=1, pixels=[[[1, 2, 3]]])
    assert isinstance(buffer.pixels, np.ndarray)
    assert tuple(buffer.pixels[0, 0]) == (1, 2, 3)


def test_malformed_pixels_are_rejected():
    with pytest.raises(InvalidInput):
        PixelBuffer(width=4, height=8, pixels=[[0] * 4] * 8)
    with pytest.raises(InvalidInput):
        PixelBuffer(width=2, height=1, pixels=[[[1, 2, 3]], [[1, 2]]])
    with pytest.raises(InvalidInput):
        PixelBuffer(width=1, height=1, pixels=[[["a", "b", "c"]]])
