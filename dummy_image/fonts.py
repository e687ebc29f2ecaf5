"""
Font lookup for text rendering.

Font families are mapped to candidate font files. Pillow searches the
platform font directories for bare file names, so the candidates are mostly
file names; an extra directory can be configured for bundled fonts.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from PIL import ImageFont

logger = logging.getLogger(__name__)

FontType = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]

# family -> (regular candidates, bold candidates)
FAMILY_FILES: Dict[str, Tuple[List[str], List[str]]] = {
    "inter": (
        ["Inter-Regular.ttf", "Inter.ttf", "Inter.ttc"],
        ["Inter-Bold.ttf", "Inter.ttc"],
    ),
    "arial": (
        ["Arial.ttf", "arial.ttf", "LiberationSans-Regular.ttf"],
        ["Arial Bold.ttf", "arialbd.ttf", "LiberationSans-Bold.ttf"],
    ),
    "helvetica": (
        ["Helvetica.ttc", "LiberationSans-Regular.ttf"],
        ["Helvetica.ttc", "LiberationSans-Bold.ttf"],
    ),
    "georgia": (
        ["Georgia.ttf", "georgia.ttf", "DejaVuSerif.ttf"],
        ["Georgia Bold.ttf", "georgiab.ttf", "DejaVuSerif-Bold.ttf"],
    ),
    "times new roman": (
        ["Times New Roman.ttf", "times.ttf", "LiberationSerif-Regular.ttf"],
        ["Times New Roman Bold.ttf", "timesbd.ttf", "LiberationSerif-Bold.ttf"],
    ),
    "courier new": (
        ["Courier New.ttf", "cour.ttf", "LiberationMono-Regular.ttf"],
        ["Courier New Bold.ttf", "courbd.ttf", "LiberationMono-Bold.ttf"],
    ),
    "verdana": (
        ["Verdana.ttf", "verdana.ttf", "DejaVuSans.ttf"],
        ["Verdana Bold.ttf", "verdanab.ttf", "DejaVuSans-Bold.ttf"],
    ),
}

# Tried after the family candidates
FALLBACK_FILES = (
    ["DejaVuSans.ttf", "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
     "/System/Library/Fonts/Helvetica.ttc", "C:\\Windows\\Fonts\\arial.ttf"],
    ["DejaVuSans-Bold.ttf", "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
     "/System/Library/Fonts/Helvetica.ttc", "C:\\Windows\\Fonts\\arialbd.ttf"],
)


class FontLibrary:
    """Resolves (family, size, bold) to a Pillow font, caching the result."""

    def __init__(self, font_dir: Optional[str] = None):
        self.font_dir = Path(font_dir) if font_dir else None
        self._cache: Dict[Tuple[str, int, bool], FontType] = {}

    def candidates(self, family: str, bold: bool = False) -> List[str]:
        regular, heavy = FAMILY_FILES.get(family.strip().lower(), ([], []))
        names = list(heavy if bold else regular) + FALLBACK_FILES[1 if bold else 0]

        if self.font_dir:
            # Bundled fonts first, then the same names via Pillow's own search
            local = [str(self.font_dir / name) for name in names if not Path(name).is_absolute()]
            names = local + names
        return names

    def get(self, family: str, size: float, bold: bool = False) -> FontType:
        """Get font for text rendering."""
        px = max(1, int(round(size)))
        key = (family, px, bold)
        if key in self._cache:
            return self._cache[key]

        font = None
        for candidate in self.candidates(family, bold):
            try:
                font = ImageFont.truetype(candidate, px)
                break
            except OSError:
                continue

        if font is None:
            logger.warning(f"No font file found for {family!r}, using Pillow default")
            font = ImageFont.load_default(px)

        self._cache[key] = font
        return font
