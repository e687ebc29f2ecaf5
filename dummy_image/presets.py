"""
Option tables for dummy image generation.

Supports:
- Preset resolutions (HD, Full HD, 4K, social formats)
- Named aspect ratios
- Text anchor positions
- Gradient presets and font families
"""

from typing import List, Optional, Tuple
from dataclasses import dataclass


CUSTOM = "Custom"

# Maximum deviation between width/height and a canonical ratio
ASPECT_RATIO_TOLERANCE = 0.01


@dataclass(frozen=True)
class ResolutionPreset:
    """A named output resolution."""
    label: str
    width: int
    height: int

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)


@dataclass(frozen=True)
class AspectRatio:
    """A named aspect ratio. ``ratio`` is None for the Custom entry."""
    label: str
    ratio: Optional[float]


@dataclass(frozen=True)
class GradientPreset:
    """Named color list for the gradient background."""
    name: str
    colors: Tuple[str, ...]


PRESET_RESOLUTIONS = [
    ResolutionPreset("HD (1280×720)", 1280, 720),
    ResolutionPreset("Full HD (1920×1080)", 1920, 1080),
    ResolutionPreset("4K (3840×2160)", 3840, 2160),
    ResolutionPreset("Square (1080×1080)", 1080, 1080),
    ResolutionPreset("Portrait (1080×1350)", 1080, 1350),
    ResolutionPreset("Story (1080×1920)", 1080, 1920),
    ResolutionPreset(CUSTOM, 800, 600),
]

ASPECT_RATIOS = [
    AspectRatio("16:9", 16 / 9),
    AspectRatio("4:3", 4 / 3),
    AspectRatio("1:1", 1.0),
    AspectRatio("3:4", 3 / 4),
    AspectRatio("9:16", 9 / 16),
    AspectRatio(CUSTOM, None),
]

GRADIENT_PRESETS = [
    GradientPreset("Purple Dream", ("#667eea", "#764ba2")),
    GradientPreset("Sunset", ("#ff7e5f", "#feb47b")),
    GradientPreset("Ocean", ("#2e3192", "#1bffff")),
    GradientPreset("Forest", ("#134e5e", "#71b280")),
    GradientPreset("Fire", ("#f12711", "#f5af19")),
    GradientPreset("Aurora", ("#00c6ff", "#0072ff", "#7f00ff")),
    GradientPreset("Candy", ("#ff9a9e", "#fad0c4", "#fbc2eb")),
]

FONT_FAMILIES = [
    "Inter",
    "Arial",
    "Helvetica",
    "Georgia",
    "Times New Roman",
    "Courier New",
    "Verdana",
]

FONT_SIZE_RANGE = (16, 120)
MAX_DIMENSION = 8000


def gcd(a: int, b: int) -> int:
    """Greatest common divisor by repeated remainder. ``gcd(a, 0) == a``."""
    return a if b == 0 else gcd(b, a % b)


def classify_aspect_ratio(width: int, height: int) -> str:
    """
    Describe width:height as an aspect ratio label.

    Returns one of the canonical labels (16:9, 4:3, 1:1, 3:4, 9:16) when the
    ratio is within ASPECT_RATIO_TOLERANCE of it, else the reduced "W:H".

    Examples:
        >>> classify_aspect_ratio(1920, 1080)
        '16:9'
        >>> classify_aspect_ratio(500, 300)
        '5:3'
    """
    divisor = gcd(width, height) or 1
    current = width / height if height else 0.0

    for entry in ASPECT_RATIOS:
        if entry.ratio is not None and abs(entry.ratio - current) < ASPECT_RATIO_TOLERANCE:
            return entry.label

    return f"{width // divisor}:{height // divisor}"


def find_resolution(label: str) -> Optional[ResolutionPreset]:
    """Look up a resolution preset by its label."""
    for preset in PRESET_RESOLUTIONS:
        if preset.label == label:
            return preset
    return None


def find_aspect_ratio(label: str) -> Optional[AspectRatio]:
    """Look up a named aspect ratio by its label."""
    for entry in ASPECT_RATIOS:
        if entry.label == label:
            return entry
    return None


def find_gradient(name: str) -> Optional[GradientPreset]:
    """Case-insensitive gradient preset lookup."""
    wanted = name.strip().lower()
    for preset in GRADIENT_PRESETS:
        if preset.name.lower() == wanted:
            return preset
    return None


def get_resolution_options() -> List[dict]:
    """Get list of resolution presets for user selection."""
    return [
        {
            "label": preset.label,
            "dimensions": f"{preset.width}x{preset.height}",
            "aspect_ratio": classify_aspect_ratio(preset.width, preset.height),
        }
        for preset in PRESET_RESOLUTIONS
    ]


def get_aspect_ratio_options() -> List[dict]:
    return [
        {"label": entry.label, "ratio": entry.ratio}
        for entry in ASPECT_RATIOS
    ]


def get_gradient_options() -> List[dict]:
    return [
        {"name": preset.name, "colors": list(preset.colors)}
        for preset in GRADIENT_PRESETS
    ]
