"""CSS color parsing used to derive RGB custom properties."""
import re
from typing import List

WHITE = [255, 255, 255]
BLACK = [0, 0, 0]

_RGB_PATTERN = re.compile(r"rgba?\((\d+),\s*(\d+),\s*(\d+)")


def color_to_rgb(color: str) -> List[int]:
    """Convert a computed CSS color to an [r, g, b] list.

    Understands hex (``#rrggbb``), ``rgb()``/``rgba()`` and the names
    ``white`` and ``black``. Anything else falls back to white.
    """
    if not color:
        return list(WHITE)

    if color.startswith("#"):
        try:
            value = int(color[1:], 16)
        except ValueError:
            return list(WHITE)
        return [(value >> 16) & 255, (value >> 8) & 255, value & 255]

    if color.startswith("rgb"):
        match = _RGB_PATTERN.match(color)
        if not match:
            return list(WHITE)
        return [int(match.group(1)), int(match.group(2)), int(match.group(3))]

    if color == "white":
        return list(WHITE)
    if color == "black":
        return list(BLACK)
    return list(WHITE)


def rgb_triple(color: str) -> str:
    """Format color_to_rgb output as a ``"r, g, b"`` custom property value."""
    return ", ".join(str(component) for component in color_to_rgb(color))
