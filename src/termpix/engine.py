from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Protocol

from termpix.charsets import UPPER_HALF_BLOCK, braille_char
from termpix.layout import CellGeometry, Layout
from termpix.pixels import RGB, PixelBuffer


@dataclass(frozen=True)
class HalfBlockCell:
    top: RGB
    bottom: RGB

    @property
    def char(self) -> str:
        return UPPER_HALF_BLOCK


@dataclass(frozen=True)
class BrailleCell:
    mask: int  # one bit per dot, see charsets.BRAILLE_DOTS
    colour: RGB | None  # mean colour of the raised dots, None when mask is empty

    @property
    def char(self) -> str:
        return braille_char(self.mask)


class Engine(Protocol):
    geometry: CellGeometry

    def cells(self, buffer: PixelBuffer, layout: Layout) -> Iterator[list]:
        """Yield one list of cells per output row, top to bottom."""
        ...

    def format_row(self, row: Sequence) -> str:
        """Render a row of cells as ANSI text, ending with a reset."""
        ...


class RenderError(RuntimeError):
    """A render could not complete; the caller may carry on with other images."""
