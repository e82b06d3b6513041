import logging
from collections.abc import Iterator, Sequence

import numpy as np

from termpix.ansi import RESET, fg
from termpix.charsets import BRAILLE_DOTS
from termpix.dither import floyd_steinberg
from termpix.engine import BrailleCell, RenderError
from termpix.layout import BRAILLE_GEOMETRY, Layout
from termpix.metrics import grayscale_grid
from termpix.pixels import RGB, PixelBuffer
from termpix.sampling import Sampler

logger = logging.getLogger(__name__)

_DOT_BITS = np.array(BRAILLE_DOTS, dtype=np.int64)  # (4, 2)


def mean_threshold(gray: np.ndarray) -> int:
    """Global binarization threshold: mean luminance, rounded down."""
    return int(gray.sum(dtype=np.int64) // gray.size)


class BrailleEngine:
    """Eight dots per cell on a 2x4 grid, lit where luminance beats the threshold.

    Suited to line art and monochrome images: four times the vertical and
    twice the horizontal resolution of plain characters, one colour per cell.
    """

    geometry = BRAILLE_GEOMETRY

    def __init__(self, threshold: int | None = None, dither: bool = False):
        self.threshold = threshold
        self.dither = dither

    def downsample(self, buffer: PixelBuffer, layout: Layout) -> tuple[np.ndarray, np.ndarray]:
        """Sample the working grids.

        Returns:
            gray: int32 array of shape (pixel_height, pixel_width)
            colour: uint8 array of shape (pixel_height, pixel_width, 3)
        """
        try:
            colour = Sampler(buffer, layout).sample_grid()
            gray = grayscale_grid(colour)
        except MemoryError as exc:
            logger.error(
                "could not allocate %dx%d braille working grid", layout.pixel_width, layout.pixel_height
            )
            raise RenderError("Memory allocation failed for braille working grid") from exc
        return gray, colour

    def binarize(self, gray: np.ndarray) -> np.ndarray:
        threshold = self.threshold if self.threshold is not None else mean_threshold(gray)
        logger.debug("braille threshold %d%s", threshold, " (dithered)" if self.dither else "")
        if self.dither:
            return floyd_steinberg(gray, threshold)
        return gray > threshold

    def cells(self, buffer: PixelBuffer, layout: Layout) -> Iterator[list[BrailleCell]]:
        gray, colour = self.downsample(buffer, layout)
        on = self.binarize(gray)

        rows, cols = layout.out_rows, layout.out_cols
        # (rows, cols, 4, 2) and (rows, cols, 4, 2, 3): one 2x4 block per cell
        on_cells = on.reshape(rows, 4, cols, 2).transpose(0, 2, 1, 3)
        colour_cells = colour.reshape(rows, 4, cols, 2, 3).transpose(0, 2, 1, 3, 4).astype(np.int64)

        masks = (on_cells * _DOT_BITS).sum(axis=(2, 3))
        counts = on_cells.sum(axis=(2, 3))
        sums = (colour_cells * on_cells[..., np.newaxis]).sum(axis=(2, 3))
        means = sums // np.maximum(counts, 1)[..., np.newaxis]

        for y in range(rows):
            yield [
                BrailleCell(
                    mask=int(masks[y, x]),
                    colour=RGB(*map(int, means[y, x])) if counts[y, x] else None,
                )
                for x in range(cols)
            ]

    def format_row(self, row: Sequence[BrailleCell]) -> str:
        parts = []
        for cell in row:
            if cell.colour is not None:
                parts.append(fg(cell.colour))
            parts.append(cell.char)
        parts.append(RESET)
        return "".join(parts)
