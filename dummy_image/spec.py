"""
Render specification value types.

A RenderSpec is the complete description of one image. It is never mutated:
every edit produces a new value (see resolver.py).
"""

from enum import Enum
from typing import Tuple
from dataclasses import dataclass, field

from .presets import CUSTOM, GRADIENT_PRESETS, classify_aspect_ratio


class BackgroundType(Enum):
    """Available background styles."""
    SOLID = "solid"
    GRADIENT = "gradient"
    GEOMETRIC = "geometric"  # Random translucent circles and squares
    DOTS = "dots"            # Regular dot lattice
    WAVES = "waves"          # Vertical gradient with sine strokes
    GRID = "grid"            # Thin grid lines


class TextPosition(Enum):
    """Nine text anchors: row x column."""
    TOP_LEFT = "top-left"
    TOP_CENTER = "top-center"
    TOP_RIGHT = "top-right"
    CENTER_LEFT = "center-left"
    CENTER = "center"
    CENTER_RIGHT = "center-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_CENTER = "bottom-center"
    BOTTOM_RIGHT = "bottom-right"

    @property
    def row(self) -> str:
        return self.value.split("-")[0]

    @property
    def column(self) -> str:
        parts = self.value.split("-")
        return parts[1] if len(parts) > 1 else "center"

    @property
    def label(self) -> str:
        if self is TextPosition.CENTER:
            return "Center"
        return " ".join(part.title() for part in self.value.split("-"))


@dataclass(frozen=True)
class RenderSpec:
    """Fully-resolved description of one image."""
    width: int = 800
    height: int = 600
    style: BackgroundType = BackgroundType.GRADIENT
    primary_color: str = "#667eea"
    secondary_color: str = "#764ba2"
    gradient_preset: Tuple[str, ...] = GRADIENT_PRESETS[0].colors
    overlay_text: str = "Sample Text"
    text_position: TextPosition = TextPosition.CENTER
    text_color: str = "#ffffff"
    font_family: str = "Inter"
    font_size_pt: int = 48
    show_dimension_label: bool = True

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    @property
    def aspect_ratio_label(self) -> str:
        return classify_aspect_ratio(self.width, self.height)


@dataclass(frozen=True)
class EditorState:
    """
    A RenderSpec plus the preset selections shown next to it.

    The selection labels only describe how the dimensions were chosen;
    the compositor never sees them.
    """
    spec: RenderSpec = field(default_factory=RenderSpec)
    selected_resolution: str = CUSTOM
    selected_aspect_ratio: str = CUSTOM

    @property
    def aspect_ratio_label(self) -> str:
        return self.spec.aspect_ratio_label

    @property
    def aspect_ratio_display(self) -> str:
        """Label and decimal ratio, e.g. "4:3 (1.33)"."""
        return f"{self.aspect_ratio_label} ({self.spec.width / self.spec.height:.2f})"
