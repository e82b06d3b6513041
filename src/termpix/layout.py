import logging
from dataclasses import dataclass

from termpix.terminal import get_terminal_size

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CellGeometry:
    """How many source subpixels one character cell covers."""

    name: str
    px_per_col: int
    px_per_row: int
    # Row height in the terminal aspect, relative to the column bound
    vertical_unit: float


HALF_BLOCK_GEOMETRY = CellGeometry("half-block", px_per_col=1, px_per_row=2, vertical_unit=0.5)
BRAILLE_GEOMETRY = CellGeometry("braille", px_per_col=2, px_per_row=4, vertical_unit=1.0)


@dataclass(frozen=True)
class Layout:
    out_cols: int
    out_rows: int
    geometry: CellGeometry
    scale_x: float
    scale_y: float

    @property
    def pixel_width(self) -> int:
        return self.out_cols * self.geometry.px_per_col

    @property
    def pixel_height(self) -> int:
        return self.out_rows * self.geometry.px_per_row


def fit_layout(
    width: int,
    height: int,
    max_width: int | None,
    max_height: int | None,
    geometry: CellGeometry,
    terminal_size: tuple[int, int] | None = None,
) -> Layout:
    """Largest cell grid within the bounds that keeps the image aspect ratio.

    Bounds are in character columns/rows and are clamped to the terminal.
    A braille cell packs two pixels per column, so its column limit is half
    the width bound.
    """
    term_rows, term_cols = terminal_size if terminal_size is not None else get_terminal_size()
    max_cols = term_cols if max_width is None else min(max_width, term_cols)
    max_rows = term_rows if max_height is None else min(max_height, term_rows)
    max_cols = max(1, max_cols)
    max_rows = max(1, max_rows)

    cw, ch = geometry.px_per_col, geometry.px_per_row
    col_limit = max(1, max_cols // cw)
    img_aspect = width / height
    terminal_aspect = (max_cols / cw) / (max_rows * geometry.vertical_unit)

    if img_aspect > terminal_aspect:
        out_cols = col_limit
        out_rows = min(int(out_cols * cw / img_aspect / ch), max_rows)
    else:
        out_rows = max_rows
        out_cols = min(int(out_rows * ch * img_aspect / cw), col_limit)

    out_cols = max(1, out_cols)
    out_rows = max(1, out_rows)

    layout = Layout(
        out_cols=out_cols,
        out_rows=out_rows,
        geometry=geometry,
        scale_x=width / (out_cols * cw),
        scale_y=height / (out_rows * ch),
    )
    logger.debug(
        "%s: %dx%d chars (%dx%d pixels) from %dx%d",
        geometry.name,
        out_cols,
        out_rows,
        layout.pixel_width,
        layout.pixel_height,
        width,
        height,
    )
    return layout
