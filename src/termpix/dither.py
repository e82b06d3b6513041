import numpy as np

# Floyd-Steinberg error weights for (dy, dx) neighbours
_WEIGHTS = (
    (0, 1, 7 / 16),
    (1, -1, 3 / 16),
    (1, 0, 5 / 16),
    (1, 1, 1 / 16),
)


def floyd_steinberg(gray: np.ndarray, threshold: float) -> np.ndarray:
    """Binarize a grayscale grid with error diffusion.

    Each pixel is on when its value plus the error carried from earlier
    pixels exceeds the threshold. On pixels are quantized to 255 and off
    pixels to 0; the difference spreads to unvisited neighbours.

    Returns a boolean array with the shape of gray.
    """
    work = gray.astype(np.float64)
    h, w = work.shape
    on = np.zeros((h, w), dtype=bool)
    for y in range(h):
        for x in range(w):
            value = work[y, x]
            lit = value > threshold
            on[y, x] = lit
            error = value - (255.0 if lit else 0.0)
            for dy, dx, weight in _WEIGHTS:
                ny, nx = y + dy, x + dx
                if 0 <= nx < w and ny < h:
                    work[ny, nx] += error * weight
    return on
