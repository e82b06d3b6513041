import enum
import io
import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass
from typing import TextIO

from termpix.ansi import RESET
from termpix.braille import BrailleEngine
from termpix.engine import Engine, RenderError
from termpix.halfblock import HalfBlockEngine
from termpix.layout import fit_layout
from termpix.metrics import colour_variance
from termpix.pixels import PixelBuffer

__all__ = ["RenderConfig", "RenderError", "RenderMode", "render_image", "render_to_string", "select_mode"]

logger = logging.getLogger(__name__)

# Empirical: above this channel spread an image counts as colourful
DEFAULT_VARIANCE_THRESHOLD = 15.0


class RenderMode(enum.Enum):
    AUTO = "auto"
    HALF_BLOCK = "half-block"
    BRAILLE = "braille"

    @classmethod
    def parse(cls, name: str) -> "RenderMode":
        """Accept enum values plus the user-facing aliases colour/color and detail."""
        key = name.strip().lower()
        if key in _ALIASES:
            return _ALIASES[key]
        raise ValueError(f"Unknown render mode {name!r}, expected one of: {', '.join(sorted(_ALIASES))}")


_ALIASES = {
    "auto": RenderMode.AUTO,
    "half-block": RenderMode.HALF_BLOCK,
    "halfblock": RenderMode.HALF_BLOCK,
    "color": RenderMode.HALF_BLOCK,
    "colour": RenderMode.HALF_BLOCK,
    "braille": RenderMode.BRAILLE,
    "detail": RenderMode.BRAILLE,
}


@dataclass(frozen=True)
class RenderConfig:
    mode: RenderMode = RenderMode.AUTO
    dither: bool = False
    max_width: int | None = None  # columns, None for terminal width
    max_height: int | None = None  # rows, None for terminal height
    variance_threshold: float = DEFAULT_VARIANCE_THRESHOLD
    braille_threshold: int | None = None  # None for the image's mean luminance

    def __post_init__(self):
        for name in ("max_width", "max_height"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")


_ENGINES: dict[RenderMode, Callable[[RenderConfig], Engine]] = {
    RenderMode.HALF_BLOCK: lambda config: HalfBlockEngine(dither=config.dither),
    RenderMode.BRAILLE: lambda config: BrailleEngine(threshold=config.braille_threshold, dither=config.dither),
}


def select_mode(buffer: PixelBuffer, config: RenderConfig) -> RenderMode:
    if config.mode is not RenderMode.AUTO:
        return config.mode
    variance = colour_variance(buffer)
    if variance > config.variance_threshold:
        logger.info("colour variance %.1f (colourful - using half-blocks)", variance)
        return RenderMode.HALF_BLOCK
    logger.info("colour variance %.1f (monochrome - using braille)", variance)
    return RenderMode.BRAILLE


def render_image(
    buffer: PixelBuffer,
    config: RenderConfig | None = None,
    stream: TextIO | None = None,
    terminal_size: tuple[int, int] | None = None,
) -> RenderMode:
    """Write an image to a terminal stream as truecolor character cells.

    Rows are flushed as soon as they are written. Returns the mode actually used.
    Raises RenderError if the working buffers cannot be allocated; in that
    case nothing has been written.
    """
    if config is None:
        config = RenderConfig()
    if stream is None:
        stream = sys.stdout

    mode = select_mode(buffer, config)
    engine = _ENGINES[mode](config)
    layout = fit_layout(
        buffer.width, buffer.height, config.max_width, config.max_height, engine.geometry, terminal_size
    )
    for row in engine.cells(buffer, layout):
        stream.write(engine.format_row(row))
        stream.write("\n")
        stream.flush()
    stream.write(RESET)
    stream.flush()
    return mode


def render_to_string(
    buffer: PixelBuffer,
    config: RenderConfig | None = None,
    terminal_size: tuple[int, int] | None = None,
) -> str:
    out = io.StringIO()
    render_image(buffer, config, out, terminal_size)
    return out.getvalue()
