import pytest
from PIL import Image

from termpix.pixels import PixelBuffer

# Large enough that terminal clamping never kicks in unless a test asks for it
BIG_TERMINAL = (500, 500)


@pytest.fixture
def big_terminal():
    return BIG_TERMINAL


@pytest.fixture
def split_buffer():
    """4x8 image: black on the left half, white on the right half."""
    img = Image.new("RGB", (4, 8), (0, 0, 0))
    pixels = img.load()
    for y in range(8):
        for x in range(2, 4):
            pixels[x, y] = (255, 255, 255)
    return PixelBuffer.from_image(img)
