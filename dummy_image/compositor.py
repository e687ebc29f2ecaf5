"""
Compositor - paints a RenderSpec onto a Surface.

Pipeline:
1. Background (one of six procedural styles)
2. Ambient vignette
3. Dimension label
4. Multi-line text overlay

Every linear metric below is given in unscaled pixels and multiplied by the
render scale, so a preview and a full-size export are self-similar.
"""

import re
import math
import random
import logging
from typing import Iterator, List, Optional, Tuple

from .paint import (
    BLACK,
    WHITE,
    Color,
    LinearGradient,
    RadialGradient,
    Shadow,
    even_stops,
    parse_color,
)
from .spec import BackgroundType, RenderSpec, TextPosition
from .surface import Surface

logger = logging.getLogger(__name__)

# Geometric
GEOMETRIC_SHAPE_COUNT = 15
GEOMETRIC_ALPHA = 0.1
GEOMETRIC_MIN_SIZE = 20
GEOMETRIC_SIZE_RANGE = 100

# Dots
DOT_SPACING = 30
DOT_RADIUS = 3
DOT_ALPHA = 0.3

# Waves
WAVE_COUNT = 5
WAVE_STEP = 10
WAVE_AMPLITUDE = 30
WAVE_FREQUENCY = 0.01  # radians per unscaled pixel
WAVE_LINE_WIDTH = 2
WAVE_ALPHA = 0.1

# Grid
GRID_SPACING = 60
GRID_LINE_WIDTH = 1
GRID_ALPHA = 0.15

# Vignette
VIGNETTE_INNER = WHITE.with_alpha(0.05)
VIGNETTE_OUTER = BLACK.with_alpha(0.1)
VIGNETTE_RADIUS_DIVISOR = 1.5

# Dimension label
LABEL_FONT_SIZE = 16
LABEL_MIN_FONT_SIZE = 12
LABEL_BASELINE = 30
LABEL_BASELINE_FACTOR = 1.25  # min baseline as a multiple of font size
LABEL_ALPHA = 0.6
LABEL_SHADOW = (0.3, 4, 1)  # alpha, blur, offset

# Text overlay
TEXT_PADDING = 60
LABEL_OFFSET = 40
LINE_HEIGHT_FACTOR = 1.2
TEXT_SHADOW = (0.5, 10, 2)

LINE_BREAK = re.compile(r"\r\n|\r|\n|\\n")


def split_lines(text: str) -> List[str]:
    """
    Split overlay text on line-break markers.

    Both real newlines and a literal backslash-n (as typed into a single-line
    input) break a line.
    """
    return LINE_BREAK.split(text)


def layout_lines(count: int, anchor_y: float, line_height: float) -> List[float]:
    """
    Baselines for ``count`` lines centered on ``anchor_y``.

    The block is ``count * line_height`` tall; the first baseline sits half a
    line below the top of the block.
    """
    total_height = count * line_height
    first = anchor_y - total_height / 2 + line_height / 2
    return [first + i * line_height for i in range(count)]


def anchor_for(
    position: TextPosition,
    width: float,
    height: float,
    scale: float = 1.0,
    label_shown: bool = False
) -> Tuple[float, float, str]:
    """
    Anchor point and alignment for a text position.

    Args:
        position: One of the nine text positions
        width: Surface width in pixels
        height: Surface height in pixels
        scale: Render scale
        label_shown: Whether the dimension label occupies the top band

    Returns:
        Tuple of (x, y, align)
    """
    padding = TEXT_PADDING * scale

    if position.column == "left":
        x, align = padding, "left"
    elif position.column == "right":
        x, align = width - padding, "right"
    else:
        x, align = width / 2, "center"

    if position.row == "top":
        y = padding + (LABEL_OFFSET * scale if label_shown else 0)
    elif position.row == "bottom":
        y = height - padding
    else:
        y = height / 2

    return x, y, align


def _steps(start: float, stop: float, step: float, inclusive: bool = True) -> Iterator[float]:
    """start, start + step, ... up to stop, without accumulating float error."""
    k = 0
    while True:
        value = start + k * step
        if value > stop or (not inclusive and value >= stop):
            return
        yield value
        k += 1


class Compositor:
    """
    Paints RenderSpecs onto surfaces.

    The compositor holds no state besides its random source, which only the
    geometric style consumes. Pass a seeded ``random.Random`` to pin that
    style's output.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self._backgrounds = {
            BackgroundType.SOLID: self._paint_solid,
            BackgroundType.GRADIENT: self._paint_gradient,
            BackgroundType.GEOMETRIC: self._paint_geometric,
            BackgroundType.DOTS: self._paint_dots,
            BackgroundType.WAVES: self._paint_waves,
            BackgroundType.GRID: self._paint_grid,
        }

    def render(self, spec: RenderSpec, surface: Optional[Surface], scale: float = 1.0) -> bool:
        """
        Render spec onto surface at the given scale.

        The surface is resized to ``width*scale`` x ``height*scale`` first.

        Returns:
            True if a frame was painted, False if no surface was available
        """
        if surface is None:
            logger.warning("No surface available, frame skipped")
            return False

        width = max(1, int(round(spec.width * scale)))
        height = max(1, int(round(spec.height * scale)))
        if not surface.resize(width, height):
            logger.warning(f"Surface could not be sized to {width}x{height}, frame skipped")
            return False

        paint_background = self._backgrounds.get(spec.style, self._paint_solid)
        paint_background(spec, surface, scale)
        self._paint_vignette(surface)

        if spec.show_dimension_label:
            self._paint_dimension_label(spec, surface, scale)

        if spec.overlay_text.strip():
            self._paint_overlay_text(spec, surface, scale)

        logger.info(f"Rendered {spec.style.value} {width}x{height} (scale {scale:.3f})")
        return True

    # ---- Backgrounds ----

    def _paint_solid(self, spec: RenderSpec, surface: Surface, scale: float) -> None:
        surface.fill_rect(0, 0, surface.width, surface.height, parse_color(spec.primary_color))

    def _paint_gradient(self, spec: RenderSpec, surface: Surface, scale: float) -> None:
        """Diagonal gradient, top-left to bottom-right."""
        colors = [parse_color(c) for c in spec.gradient_preset]
        gradient = LinearGradient(0, 0, surface.width, surface.height, even_stops(colors))
        surface.fill_rect(0, 0, surface.width, surface.height, gradient)

    def _paint_geometric(self, spec: RenderSpec, surface: Surface, scale: float) -> None:
        self._paint_solid(spec, surface, scale)
        color = parse_color(spec.secondary_color, GEOMETRIC_ALPHA)

        for i in range(GEOMETRIC_SHAPE_COUNT):
            x = self.rng.random() * surface.width
            y = self.rng.random() * surface.height
            size = (self.rng.random() * GEOMETRIC_SIZE_RANGE + GEOMETRIC_MIN_SIZE) * scale

            if i % 2 == 0:
                surface.fill_circle(x, y, size, color)
            else:
                surface.fill_rect(x, y, size, size, color)

    def _paint_dots(self, spec: RenderSpec, surface: Surface, scale: float) -> None:
        self._paint_solid(spec, surface, scale)
        color = parse_color(spec.secondary_color, DOT_ALPHA)
        spacing = DOT_SPACING * scale
        radius = DOT_RADIUS * scale

        for x in _steps(spacing, surface.width, spacing, inclusive=False):
            for y in _steps(spacing, surface.height, spacing, inclusive=False):
                surface.fill_circle(x, y, radius, color)

    def _paint_waves(self, spec: RenderSpec, surface: Surface, scale: float) -> None:
        """Vertical gradient with evenly spaced sine strokes."""
        gradient = LinearGradient(0, 0, 0, surface.height, even_stops([
            parse_color(spec.primary_color),
            parse_color(spec.secondary_color),
        ]))
        surface.fill_rect(0, 0, surface.width, surface.height, gradient)

        color = WHITE.with_alpha(WAVE_ALPHA)
        step = WAVE_STEP * scale
        amplitude = WAVE_AMPLITUDE * scale
        xs = list(_steps(0, surface.width, step))

        for i in range(WAVE_COUNT):
            base_y = surface.height * (i + 1) / (WAVE_COUNT + 1)
            points = [
                (x, base_y + math.sin(x / scale * WAVE_FREQUENCY + i) * amplitude)
                for x in xs
            ]
            surface.stroke_line(points, color, WAVE_LINE_WIDTH * scale)

    def _paint_grid(self, spec: RenderSpec, surface: Surface, scale: float) -> None:
        self._paint_solid(spec, surface, scale)
        color = parse_color(spec.secondary_color, GRID_ALPHA)
        spacing = GRID_SPACING * scale
        line_width = GRID_LINE_WIDTH * scale

        for x in _steps(0, surface.width, spacing):
            surface.stroke_line([(x, 0), (x, surface.height)], color, line_width)
        for y in _steps(0, surface.height, spacing):
            surface.stroke_line([(0, y), (surface.width, y)], color, line_width)

    # ---- Overlays ----

    def _paint_vignette(self, surface: Surface) -> None:
        radius = max(surface.width, surface.height) / VIGNETTE_RADIUS_DIVISOR
        vignette = RadialGradient(
            surface.width / 2,
            surface.height / 2,
            radius,
            ((0.0, VIGNETTE_INNER), (1.0, VIGNETTE_OUTER)),
        )
        surface.fill_rect(0, 0, surface.width, surface.height, vignette)

    def _paint_dimension_label(self, spec: RenderSpec, surface: Surface, scale: float) -> None:
        alpha, blur, offset = LABEL_SHADOW
        # Baseline follows the floored font size
        font_size = max(LABEL_FONT_SIZE * scale, LABEL_MIN_FONT_SIZE)
        surface.draw_text(
            f"{spec.width} × {spec.height}px",
            surface.width / 2,
            max(LABEL_BASELINE * scale, font_size * LABEL_BASELINE_FACTOR),
            font_family=spec.font_family,
            font_size=font_size,
            color=parse_color(spec.text_color, LABEL_ALPHA),
            align="center",
            shadow=Shadow(BLACK.with_alpha(alpha), blur * scale, offset * scale, offset * scale),
        )

    def _paint_overlay_text(self, spec: RenderSpec, surface: Surface, scale: float) -> None:
        font_size = spec.font_size_pt * scale
        line_height = font_size * LINE_HEIGHT_FACTOR
        x, anchor_y, align = anchor_for(
            spec.text_position,
            surface.width,
            surface.height,
            scale,
            spec.show_dimension_label,
        )

        alpha, blur, offset = TEXT_SHADOW
        shadow = Shadow(BLACK.with_alpha(alpha), blur * scale, offset * scale, offset * scale)
        color = parse_color(spec.text_color)

        lines = split_lines(spec.overlay_text)
        for line, baseline in zip(lines, layout_lines(len(lines), anchor_y, line_height)):
            if not line:
                continue
            surface.draw_text(
                line,
                x,
                baseline,
                font_family=spec.font_family,
                font_size=font_size,
                color=color,
                align=align,
                bold=True,
                shadow=shadow,
            )


_default_compositor = Compositor()


def render(
    spec: RenderSpec,
    surface: Optional[Surface],
    scale: float = 1.0,
    rng: Optional[random.Random] = None
) -> bool:
    """Render with a shared compositor, or a fresh one when ``rng`` is given."""
    compositor = Compositor(rng) if rng is not None else _default_compositor
    return compositor.render(spec, surface, scale)
