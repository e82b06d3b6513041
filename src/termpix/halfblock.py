import logging
from collections.abc import Iterator, Sequence

from termpix.ansi import RESET, bg, fg
from termpix.engine import HalfBlockCell
from termpix.layout import HALF_BLOCK_GEOMETRY, Layout
from termpix.pixels import RGB, PixelBuffer
from termpix.sampling import Sampler

logger = logging.getLogger(__name__)


class HalfBlockEngine:
    """Two vertically stacked pixels per cell: foreground on top, background below.

    Suited to colour photos, every subpixel keeps its own truecolor value.
    """

    geometry = HALF_BLOCK_GEOMETRY

    def __init__(self, dither: bool = False):
        if dither:
            # Truecolor output has no quantization step to diffuse error from
            logger.debug("dithering has no effect in half-block mode")
        self.dither = dither

    def cells(self, buffer: PixelBuffer, layout: Layout) -> Iterator[list[HalfBlockCell]]:
        grid = Sampler(buffer, layout).sample_grid()
        for y in range(layout.out_rows):
            top_row = grid[2 * y]
            bottom_row = grid[2 * y + 1]
            yield [
                HalfBlockCell(top=RGB(*map(int, top)), bottom=RGB(*map(int, bottom)))
                for top, bottom in zip(top_row, bottom_row)
            ]

    def format_row(self, row: Sequence[HalfBlockCell]) -> str:
        parts = [f"{fg(cell.top)}{bg(cell.bottom)}{cell.char}" for cell in row]
        parts.append(RESET)
        return "".join(parts)
