from termpix.pixels import RGB

RESET = "\033[0m"


def fg(colour: RGB) -> str:
    r, g, b = colour
    return f"\033[38;2;{r};{g};{b}m"


def bg(colour: RGB) -> str:
    r, g, b = colour
    return f"\033[48;2;{r};{g};{b}m"
