import numpy as np
import pytest
from PIL import Image

from termpix.ansi import RESET
from termpix.braille import BrailleEngine, mean_threshold
from termpix.engine import BrailleCell, RenderError
from termpix.layout import BRAILLE_GEOMETRY, fit_layout
from termpix.pixels import RGB, PixelBuffer
from termpix.sampling import Sampler

LEFT_DOTS = 0x01 | 0x02 | 0x04 | 0x40
RIGHT_DOTS = 0x08 | 0x10 | 0x20 | 0x80


def single_cell(img, **engine_kwargs):
    """Render a 2x4 image into exactly one braille cell."""
    buffer = PixelBuffer.from_image(img)
    layout = fit_layout(buffer.width, buffer.height, 2, 1, BRAILLE_GEOMETRY, (500, 500))
    assert (layout.out_cols, layout.out_rows) == (1, 1)
    rows = list(BrailleEngine(**engine_kwargs).cells(buffer, layout))
    return rows[0][0]


def dot_image(*lit, colour=(255, 255, 255)):
    img = Image.new("RGB", (2, 4), (0, 0, 0))
    for pos in lit:
        img.putpixel(pos, colour)
    return img


def test_split_image_threshold_is_mean(split_buffer):
    layout = fit_layout(4, 8, 4, 2, BRAILLE_GEOMETRY, (500, 500))
    gray, _ = BrailleEngine().downsample(split_buffer, layout)
    assert mean_threshold(gray) == 127  # 255 * 16 / 32, rounded down


def test_split_image_cells(split_buffer):
    layout = fit_layout(4, 8, 4, 2, BRAILLE_GEOMETRY, (500, 500))
    rows = list(BrailleEngine().cells(split_buffer, layout))
    assert len(rows) == 2
    for row in rows:
        assert row[0] == BrailleCell(mask=0, colour=None)
        assert row[1] == BrailleCell(mask=0xFF, colour=RGB(255, 255, 255))
        assert row[1].char == "⣿"


def test_threshold_depends_only_on_grid(split_buffer):
    layout = fit_layout(4, 8, 4, 2, BRAILLE_GEOMETRY, (500, 500))
    engine = BrailleEngine()
    gray, _ = engine.downsample(split_buffer, layout)
    before = gray.copy()
    first = mean_threshold(gray)
    np.testing.assert_array_equal(gray, before)

    again, _ = engine.downsample(split_buffer, layout)
    assert again is not gray
    np.testing.assert_array_equal(again, gray)
    assert mean_threshold(again) == first
    assert mean_threshold(gray) == first


@pytest.mark.parametrize(
    "pos, bit",
    [
        ((0, 0), 0x01),
        ((0, 1), 0x02),
        ((0, 2), 0x04),
        ((1, 0), 0x08),
        ((1, 1), 0x10),
        ((1, 2), 0x20),
        ((0, 3), 0x40),
        ((1, 3), 0x80),
    ],
)
def test_standard_dot_numbering(pos, bit):
    assert single_cell(dot_image(pos)).mask == bit


def test_column_masks():
    left = single_cell(dot_image((0, 0), (0, 1), (0, 2), (0, 3)))
    right = single_cell(dot_image((1, 0), (1, 1), (1, 2), (1, 3)))
    assert left.mask == LEFT_DOTS
    assert right.mask == RIGHT_DOTS


def test_colour_is_mean_of_raised_dots():
    img = Image.new("RGB", (2, 4), (0, 0, 0))
    img.putpixel((0, 0), (255, 0, 0))  # luma 76
    img.putpixel((1, 0), (0, 255, 0))  # luma 150
    cell = single_cell(img)
    assert cell.mask == 0x01 | 0x08
    assert cell.colour == RGB(127, 127, 0)


def test_uniform_image_is_blank_with_mean_threshold():
    cell = single_cell(Image.new("RGB", (2, 4), (255, 255, 255)))
    assert cell == BrailleCell(mask=0, colour=None)


def test_fixed_threshold_lights_every_dot():
    cell = single_cell(Image.new("RGB", (2, 4), (255, 255, 255)), threshold=0)
    assert cell.mask == 0xFF
    assert cell.char == chr(0x28FF)


def test_dither_lights_part_of_uniform_gray():
    buffer = PixelBuffer.from_image(Image.new("RGB", (8, 16), (128, 128, 128)))
    layout = fit_layout(8, 16, 8, 4, BRAILLE_GEOMETRY, (500, 500))
    plain = list(BrailleEngine().cells(buffer, layout))
    dithered = list(BrailleEngine(dither=True).cells(buffer, layout))
    assert all(cell.mask == 0 for row in plain for cell in row)
    lit = sum(bin(cell.mask).count("1") for row in dithered for cell in row)
    assert 0 < lit < 8 * 4 * 4


def test_format_row_skips_colour_for_empty_cells():
    engine = BrailleEngine()
    row = [BrailleCell(mask=0, colour=None), BrailleCell(mask=0x47, colour=RGB(9, 8, 7))]
    assert engine.format_row(row) == "\u2800\033[38;2;9;8;7m\u2847" + RESET


def test_glyph_encodes_to_three_utf8_bytes():
    for mask in (0x00, 0x47, 0xFF):
        encoded = BrailleCell(mask=mask, colour=None).char.encode("utf-8")
        assert len(encoded) == 3
        assert encoded[0] == 0xE2
    assert BrailleCell(mask=0xFF, colour=None).char.encode("utf-8") == b"\xe2\xa3\xbf"


def test_allocation_failure_raises_render_error(monkeypatch, split_buffer):
    def exhausted(self):
        raise MemoryError

    monkeypatch.setattr(Sampler, "sample_grid", exhausted)
    layout = fit_layout(4, 8, 4, 2, BRAILLE_GEOMETRY, (500, 500))
    with pytest.raises(RenderError, match="Memory allocation failed"):
        list(BrailleEngine().cells(split_buffer, layout))
