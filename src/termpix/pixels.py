from dataclasses import dataclass
from typing import NamedTuple

import numpy as np
from PIL import Image


class RGB(NamedTuple):
    r: int
    g: int
    b: int


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """Decoded image as a read-only (height, width, 3) uint8 array."""

    pixels: np.ndarray

    def __post_init__(self):
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"Expected uint8 pixels, got {self.pixels.dtype}")
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 3:
            raise ValueError(f"Expected (height, width, 3) pixels, got shape {self.pixels.shape}")
        if self.pixels.shape[0] == 0 or self.pixels.shape[1] == 0:
            raise ValueError("Image dimensions must be positive")
        # Private read-only copy, the caller keeps a writable array
        pixels = self.pixels.copy()
        pixels.setflags(write=False)
        object.__setattr__(self, "pixels", pixels)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    def pixel(self, x: int, y: int) -> RGB:
        r, g, b = self.pixels[y, x]
        return RGB(int(r), int(g), int(b))

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelBuffer":
        # Alpha, palette and grayscale images all collapse to 3 channels
        arr = np.array(image.convert("RGB"), dtype=np.uint8)
        return cls(arr)

    @classmethod
    def from_bytes(cls, data: bytes, width: int, height: int) -> "PixelBuffer":
        """Wrap flat row-major interleaved RGB bytes."""
        if width <= 0 or height <= 0:
            raise ValueError("Image dimensions must be positive")
        expected = width * height * 3
        if len(data) != expected:
            raise ValueError(f"Expected {expected} bytes for {width}x{height} RGB, got {len(data)}")
        arr = np.frombuffer(data, dtype=np.uint8).reshape(height, width, 3)
        return cls(arr)
