from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from PIL import Image


class InvalidInput(ValueError):
    """Raised for pixel buffers or options the renderer cannot work with."""


def _to_uint8(pixels) -> np.ndarray:
    """8-bit samples; out-of-range values are clamped, not wrapped."""
    try:
        arr = np.asarray(pixels)
    except ValueError as e:
        raise InvalidInput(f"Pixel data is not a regular array: {e}") from e
    if arr.dtype.kind not in "iuf":
        raise InvalidInput(f"Expected numeric samples, got {arr.dtype}")
    if arr.dtype == np.uint8:
        return arr
    return np.clip(arr, 0, 255).astype(np.uint8)


@dataclass(frozen=True)
class PixelBuffer:
    width: int
    height: int
    pixels: np.ndarray  # (height, width, 3 or 4) uint8, alpha ignored

    def __post_init__(self):
        object.__setattr__(self, "pixels", _to_uint8(self.pixels))
        if self.width <= 0 or self.height <= 0:
            raise InvalidInput(f"Image size must be positive, got {self.width}x{self.height}")
        if self.pixels.ndim != 3 or self.pixels.shape[2] not in (3, 4):
            raise InvalidInput(f"Expected RGB or RGBA samples, got array of shape {self.pixels.shape}")
        if self.pixels.shape[:2] != (self.height, self.width):
            raise InvalidInput(
                f"Pixel array of shape {self.pixels.shape} does not match size {self.width}x{self.height}"
            )

    @classmethod
    def from_array(cls, pixels) -> PixelBuffer:
        arr = np.asarray(pixels)
        if arr.ndim != 3:
            raise InvalidInput(f"Expected an (height, width, channels) array, got shape {arr.shape}")
        return cls(width=arr.shape[1], height=arr.shape[0], pixels=arr)

    @classmethod
    def from_bytes(cls, width: int, height: int, data: bytes, channels: int = 3) -> PixelBuffer:
        """Wrap raw row-major RGB or RGBA samples, 8 bits per channel."""
        if width <= 0 or height <= 0:
            raise InvalidInput(f"Image size must be positive, got {width}x{height}")
        if channels not in (3, 4):
            raise InvalidInput(f"Expected 3 or 4 channels, got {channels}")
        needed = width * height * channels
        if len(data) < needed:
            raise InvalidInput(f"Buffer holds {len(data)} bytes, {width}x{height}x{channels} needs {needed}")
        arr = np.frombuffer(data, dtype=np.uint8, count=needed).reshape(height, width, channels)
        return cls(width=width, height=height, pixels=arr)

    @classmethod
    def from_image(cls, image: Image.Image) -> PixelBuffer:
        return cls.from_array(np.asarray(image.convert("RGB")))

