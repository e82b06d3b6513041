import numpy as np

from termpix.layout import Layout
from termpix.pixels import RGB, PixelBuffer


class Sampler:
    """Nearest-neighbour lookup from layout subpixels to source pixels.

    Source coordinates are clamped to the image, so every subpixel of the
    layout maps to a real pixel.
    """

    def __init__(self, buffer: PixelBuffer, layout: Layout):
        self.buffer = buffer
        self.layout = layout

    def source_x(self, px: int) -> int:
        return min(int(px * self.layout.scale_x), self.buffer.width - 1)

    def source_y(self, py: int) -> int:
        return min(int(py * self.layout.scale_y), self.buffer.height - 1)

    def sample(self, px: int, py: int) -> RGB:
        return self.buffer.pixel(self.source_x(px), self.source_y(py))

    def sample_grid(self) -> np.ndarray:
        """Sample every subpixel at once. Returns array of shape (pixel_height, pixel_width, 3)."""
        xs = np.floor(np.arange(self.layout.pixel_width) * self.layout.scale_x).astype(np.intp)
        ys = np.floor(np.arange(self.layout.pixel_height) * self.layout.scale_y).astype(np.intp)
        np.clip(xs, 0, self.buffer.width - 1, out=xs)
        np.clip(ys, 0, self.buffer.height - 1, out=ys)
        return self.buffer.pixels[ys[:, None], xs[None, :]]
