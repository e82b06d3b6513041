import math

import numpy as np

from termpix.pixels import PixelBuffer

# ITU-R BT.601 luma weights
LUMA_WEIGHTS = (0.299, 0.587, 0.114)


def grayscale(r: int, g: int, b: int) -> int:
    """Luminance of one pixel, rounded half up."""
    wr, wg, wb = LUMA_WEIGHTS
    return math.floor(wr * r + wg * g + wb * b + 0.5)


def grayscale_grid(rgb: np.ndarray) -> np.ndarray:
    """Luminance of an (..., 3) array with the same rounding as grayscale()."""
    luma = rgb.astype(np.float64) @ np.array(LUMA_WEIGHTS)
    return np.floor(luma + 0.5).astype(np.int32)


def colour_variance(buffer: PixelBuffer) -> float:
    """Mean pairwise distance between the per-channel averages.

    Near zero for grayscale or line-art images, large when one channel dominates.
    """
    r_avg, g_avg, b_avg = buffer.pixels.reshape(-1, 3).mean(axis=0, dtype=np.float64)
    return float((abs(r_avg - g_avg) + abs(r_avg - b_avg) + abs(g_avg - b_avg)) / 3.0)
