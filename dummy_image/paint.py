"""
Paint values handed to a Surface: solid colors, gradients and shadows.
"""

import re
from typing import Sequence, Tuple
from dataclasses import dataclass, replace


HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


@dataclass(frozen=True)
class Color:
    """sRGB color with a 0..1 alpha."""
    r: int
    g: int
    b: int
    a: float = 1.0

    def with_alpha(self, alpha: float) -> "Color":
        return replace(self, a=alpha)

    @property
    def rgba(self) -> Tuple[int, int, int, int]:
        return (self.r, self.g, self.b, int(round(self.a * 255)))


@dataclass(frozen=True)
class LinearGradient:
    """Gradient along the line (x0, y0) -> (x1, y1)."""
    x0: float
    y0: float
    x1: float
    y1: float
    stops: Tuple[Tuple[float, Color], ...]


@dataclass(frozen=True)
class RadialGradient:
    """Gradient from the center (offset 0) out to ``radius`` (offset 1)."""
    cx: float
    cy: float
    radius: float
    stops: Tuple[Tuple[float, Color], ...]


@dataclass(frozen=True)
class Shadow:
    """Drop shadow drawn under text."""
    color: Color
    blur: float
    offset_x: float
    offset_y: float


WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)


def normalize_hex(color: str) -> str:
    """
    Normalize a hex color to lowercase "#rrggbb".

    Raises:
        ValueError: If the value is not a 3 or 6 digit hex color
    """
    match = HEX_COLOR.match(color.strip())
    if not match:
        raise ValueError(f"Invalid hex color: {color!r}")
    digits = match.group(1).lower()
    if len(digits) == 3:
        digits = ''.join(c * 2 for c in digits)
    return f"#{digits}"


def parse_color(color: str, alpha: float = 1.0) -> Color:
    """Parse hex color to a Color."""
    digits = normalize_hex(color).lstrip('#')
    r, g, b = (int(digits[i:i+2], 16) for i in (0, 2, 4))
    return Color(r, g, b, alpha)


def even_stops(colors: Sequence[Color]) -> Tuple[Tuple[float, Color], ...]:
    """Spread colors evenly over 0..1 (two colors: 0, 1; three: 0, 0.5, 1)."""
    if len(colors) == 1:
        return ((0.0, colors[0]), (1.0, colors[0]))
    last = len(colors) - 1
    return tuple((i / last, color) for i, color in enumerate(colors))
