# Upper half block: foreground paints the top subpixel, background the bottom one
UPPER_HALF_BLOCK = "▀"

# Braille patterns: U+2800 to U+28FF, one bit per dot of a 2x4 grid
BRAILLE_BASE = 0x2800

# Dot bit for each subpixel of a braille cell, indexed [row][col]:
#   1 4
#   2 5
#   3 6
#   7 8
BRAILLE_DOTS = (
    (0x01, 0x08),
    (0x02, 0x10),
    (0x04, 0x20),
    (0x40, 0x80),
)


def braille_char(mask: int) -> str:
    return chr(BRAILLE_BASE | (mask & 0xFF))
