"""
Drawing surfaces.

Surface is the minimal paint capability the compositor needs: resize,
filled rectangles and circles (solid or gradient), stroked polylines, and
aligned text with an optional drop shadow. PillowSurface implements it on an
in-memory Pillow image.
"""

import math
import logging
from abc import ABC, abstractmethod
from typing import Optional, Sequence, Tuple, Union

import numpy as np
from PIL import Image, ImageDraw, ImageFilter

from .fonts import FontLibrary
from .paint import Color, LinearGradient, RadialGradient, Shadow

logger = logging.getLogger(__name__)

Paint = Union[Color, LinearGradient, RadialGradient]
Point = Tuple[float, float]

# Rows per numpy band when rasterizing gradients
GRADIENT_BAND_ROWS = 256

# Pillow anchors: horizontal alignment + alphabetic baseline
TEXT_ANCHORS = {"left": "ls", "center": "ms", "right": "rs"}


class Surface(ABC):
    """
    Abstract 2D raster target.

    All coordinates are in surface pixels. Text ``y`` is the alphabetic
    baseline; ``align`` selects which end of the text sits at ``x``.
    """

    @property
    @abstractmethod
    def width(self) -> int:
        pass

    @property
    @abstractmethod
    def height(self) -> int:
        pass

    @abstractmethod
    def resize(self, width: int, height: int) -> bool:
        """Resize and clear the surface. Returns False if it cannot be sized."""
        pass

    @abstractmethod
    def fill_rect(self, x: float, y: float, width: float, height: float, paint: Paint) -> None:
        pass

    @abstractmethod
    def fill_circle(self, cx: float, cy: float, radius: float, color: Color) -> None:
        pass

    @abstractmethod
    def stroke_line(self, points: Sequence[Point], color: Color, line_width: float) -> None:
        """Stroke an open polyline through ``points``."""
        pass

    @abstractmethod
    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        *,
        font_family: str,
        font_size: float,
        color: Color,
        align: str = "left",
        bold: bool = False,
        shadow: Optional[Shadow] = None,
    ) -> None:
        pass


class PillowSurface(Surface):
    """
    Surface backed by an RGB Pillow image.

    Drawing uses ImageDraw in RGBA blend mode so translucent paint is
    composited over the existing pixels.
    """

    def __init__(
        self,
        width: int = 1,
        height: int = 1,
        font_dir: Optional[str] = None,
        max_dimension: int = 16000,
    ):
        """
        Initialize surface.

        Args:
            width: Initial width in pixels
            height: Initial height in pixels
            font_dir: Optional directory searched first for font files
            max_dimension: Largest edge resize() accepts
        """
        self.fonts = FontLibrary(font_dir)
        self.max_dimension = max_dimension
        self.image = Image.new('RGB', (max(1, width), max(1, height)))
        self._draw = ImageDraw.Draw(self.image, 'RGBA')

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    def resize(self, width: int, height: int) -> bool:
        if width < 1 or height < 1 or max(width, height) > self.max_dimension:
            logger.warning(f"Cannot size surface to {width}x{height}")
            return False
        self.image = Image.new('RGB', (width, height))
        self._draw = ImageDraw.Draw(self.image, 'RGBA')
        return True

    def to_image(self) -> Image.Image:
        """Copy of the current pixels."""
        return self.image.copy()

    def fill_rect(self, x: float, y: float, width: float, height: float, paint: Paint) -> None:
        if width <= 0 or height <= 0:
            return
        if isinstance(paint, Color):
            self._draw.rectangle(
                [(x, y), (max(x, x + width - 1), max(y, y + height - 1))],
                fill=paint.rgba
            )
            return

        # Gradients are rasterized into the clipped box only
        x0 = max(0, int(math.floor(x)))
        y0 = max(0, int(math.floor(y)))
        x1 = min(self.width, int(math.ceil(x + width)))
        y1 = min(self.height, int(math.ceil(y + height)))
        if x1 <= x0 or y1 <= y0:
            return

        for top in range(y0, y1, GRADIENT_BAND_ROWS):
            bottom = min(y1, top + GRADIENT_BAND_ROWS)
            band = self._gradient_band(paint, x0, top, x1, bottom)
            self.image.paste(band, (x0, top), band)

    def _gradient_band(
        self,
        paint: Union[LinearGradient, RadialGradient],
        x0: int,
        y0: int,
        x1: int,
        y1: int
    ) -> Image.Image:
        """Rasterize one horizontal band of a gradient as an RGBA image."""
        xs = np.arange(x0, x1, dtype=np.float32) + 0.5
        ys = (np.arange(y0, y1, dtype=np.float32) + 0.5)[:, None]

        if isinstance(paint, LinearGradient):
            dx = paint.x1 - paint.x0
            dy = paint.y1 - paint.y0
            length_sq = dx * dx + dy * dy or 1.0
            t = ((xs - paint.x0) * dx + (ys - paint.y0) * dy) / length_sq
        else:
            t = np.hypot(xs - paint.cx, ys - paint.cy) / max(paint.radius, 1e-6)
        t = np.clip(t, 0.0, 1.0)

        offsets = [offset for offset, _ in paint.stops]
        channels = [
            np.interp(t, offsets, [color.rgba[i] for _, color in paint.stops])
            for i in range(4)
        ]
        rgba = np.clip(np.rint(np.stack(channels, axis=-1)), 0, 255).astype(np.uint8)
        return Image.fromarray(rgba)

    def fill_circle(self, cx: float, cy: float, radius: float, color: Color) -> None:
        if radius <= 0:
            return
        self._draw.ellipse(
            [(cx - radius, cy - radius), (cx + radius, cy + radius)],
            fill=color.rgba
        )

    def stroke_line(self, points: Sequence[Point], color: Color, line_width: float) -> None:
        if len(points) < 2:
            return
        width = max(1, int(round(line_width)))
        self._draw.line(
            list(points),
            fill=color.rgba,
            width=width,
            joint="curve" if len(points) > 2 else None
        )

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        *,
        font_family: str,
        font_size: float,
        color: Color,
        align: str = "left",
        bold: bool = False,
        shadow: Optional[Shadow] = None,
    ) -> None:
        if not text:
            return
        font = self.fonts.get(font_family, font_size, bold)
        anchor = TEXT_ANCHORS.get(align, "ls")

        if shadow:
            self._draw_shadow(text, x, y, font, anchor, shadow)

        self._draw.text((x, y), text, font=font, fill=color.rgba, anchor=anchor)

    def _draw_shadow(self, text, x, y, font, anchor, shadow: Shadow) -> None:
        """Blur the text into a small layer and paste it under the text."""
        sx = x + shadow.offset_x
        sy = y + shadow.offset_y
        left, top, right, bottom = self._draw.textbbox((sx, sy), text, font=font, anchor=anchor)

        margin = int(math.ceil(shadow.blur)) * 2 + 2
        origin = (int(math.floor(left)) - margin, int(math.floor(top)) - margin)
        size = (
            int(math.ceil(right - left)) + margin * 2 + 1,
            int(math.ceil(bottom - top)) + margin * 2 + 1,
        )

        layer = Image.new('RGBA', size, (0, 0, 0, 0))
        ImageDraw.Draw(layer).text(
            (sx - origin[0], sy - origin[1]),
            text,
            font=font,
            fill=shadow.color.rgba,
            anchor=anchor
        )
        if shadow.blur > 0:
            # Canvas shadow blur corresponds to a sigma of half the blur
            layer = layer.filter(ImageFilter.GaussianBlur(shadow.blur / 2))

        self.image.paste(layer, origin, layer)
