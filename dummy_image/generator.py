"""
ImageGenerator - Main orchestrator for dummy image generation.

Combines:
- SpecResolver: form edits -> EditorState
- Compositor: RenderSpec -> pixels
- PillowSurface: preview and export rasters

Every accepted edit is a "spec changed" event: the preview is repainted once
from the new spec, so the latest spec always wins. Export renders the current
spec at full size on a fresh surface.
"""

import io
import random
import logging
from pathlib import Path
from typing import Callable, List, Optional, Union
from dataclasses import dataclass

from PIL import Image

from .compositor import Compositor
from .resolver import Edit, SpecResolver
from .spec import EditorState, RenderSpec
from .surface import PillowSurface

logger = logging.getLogger(__name__)

DEFAULT_PREVIEW_MAX_SIZE = 400

EXPORT_FORMATS = {
    "PNG": ("png", "image/png"),
    "JPEG": ("jpg", "image/jpeg"),
    "WEBP": ("webp", "image/webp"),
}

PreviewListener = Callable[[EditorState, Image.Image], None]


@dataclass
class ExportResult:
    """Encoded full-size image."""
    filename: str
    media_type: str
    width: int
    height: int
    data: Optional[bytes] = None
    path: Optional[str] = None


def preview_scale(spec: RenderSpec, max_size: int = DEFAULT_PREVIEW_MAX_SIZE) -> float:
    """Scale that fits the spec inside a max_size square, never enlarging."""
    return min(max_size / spec.width, max_size / spec.height, 1.0)


def export_filename(spec: RenderSpec, extension: str = "png") -> str:
    """Download name, e.g. image_800_600.png."""
    return f"image_{spec.width}_{spec.height}.{extension}"


def normalize_format(format: str) -> str:
    name = format.upper()
    if name == "JPG":
        name = "JPEG"
    if name not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format: {format}")
    return name


def encode_image(
    image: Image.Image,
    output_path: Optional[str] = None,
    format: str = "PNG",
    quality: int = 95
) -> Union[bytes, str]:
    """
    Encode image to file or bytes.

    Args:
        image: Rendered image
        output_path: Optional file path. If None, returns bytes.
        format: Image format (PNG, JPEG, WEBP)
        quality: JPEG/WEBP quality (1-100)

    Returns:
        File path if output_path given, else bytes
    """
    # JPEG has no alpha channel
    if format == 'JPEG' and image.mode == 'RGBA':
        rgb_image = Image.new('RGB', image.size, (255, 255, 255))
        rgb_image.paste(image, mask=image.split()[3])
        image = rgb_image

    if output_path:
        image.save(output_path, format=format, quality=quality)
        return output_path

    buffer = io.BytesIO()
    image.save(buffer, format=format, quality=quality)
    return buffer.getvalue()


class ImageGenerator:
    """
    One editing session: current state, live preview, on-demand export.

    Workflow:
    1. apply(edit) resolves the edit into a new EditorState
    2. If the spec changed, the preview surface is repainted
    3. export() renders the spec at scale 1 and encodes it
    """

    def __init__(
        self,
        state: Optional[EditorState] = None,
        preview_max_size: int = DEFAULT_PREVIEW_MAX_SIZE,
        export_format: str = "PNG",
        font_dir: Optional[str] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize generator with all components.

        Args:
            state: Starting state (defaults to an 800x600 sample)
            preview_max_size: Longest preview edge in pixels
            export_format: Default export format
            font_dir: Optional directory with bundled fonts
            rng: Random source for the geometric style
        """
        self.resolver = SpecResolver()
        self.compositor = Compositor(rng)
        self.preview_max_size = preview_max_size
        self.export_format = normalize_format(export_format)
        self.font_dir = font_dir
        self.preview_surface = PillowSurface(font_dir=font_dir)
        self.state = state or EditorState()
        self._listeners: List[PreviewListener] = []
        self.has_preview = False

    @property
    def spec(self) -> RenderSpec:
        return self.state.spec

    @property
    def preview_scale(self) -> float:
        return preview_scale(self.spec, self.preview_max_size)

    def subscribe(self, listener: PreviewListener) -> None:
        """Call listener(state, preview_image) after every repaint."""
        self._listeners.append(listener)

    def apply(self, edit: Edit) -> EditorState:
        """
        Apply a form edit and repaint the preview if the spec changed.

        Returns:
            The new current state
        """
        previous = self.state
        self.state = self.resolver.resolve(previous, edit)

        if self.state.spec != previous.spec or not self.has_preview:
            self.refresh_preview()
        return self.state

    def refresh_preview(self) -> bool:
        """Repaint the preview from the current spec."""
        self.has_preview = self.compositor.render(
            self.spec,
            self.preview_surface,
            self.preview_scale
        )
        if self.has_preview:
            image = self.preview_surface.to_image()
            for listener in self._listeners:
                listener(self.state, image)
        return self.has_preview

    def preview_image(self) -> Image.Image:
        if not self.has_preview:
            self.refresh_preview()
        return self.preview_surface.to_image()

    def render_full(self) -> Optional[Image.Image]:
        """Render the spec at full size on a fresh surface."""
        surface = PillowSurface(font_dir=self.font_dir)
        if not self.compositor.render(self.spec, surface, 1.0):
            return None
        return surface.to_image()

    def export(
        self,
        format: Optional[str] = None,
        output_dir: Optional[Union[str, Path]] = None
    ) -> Optional[ExportResult]:
        """
        Export the current spec at full resolution.

        Args:
            format: PNG, JPEG or WEBP (defaults to the configured format)
            output_dir: Optional directory; if given the file is written there

        Returns:
            ExportResult, or None if no frame could be produced
        """
        format = normalize_format(format or self.export_format)
        extension, media_type = EXPORT_FORMATS[format]

        image = self.render_full()
        if image is None:
            logger.warning("Export produced no frame")
            return None

        filename = export_filename(self.spec, extension)
        result = ExportResult(
            filename=filename,
            media_type=media_type,
            width=image.width,
            height=image.height
        )

        if output_dir:
            result.path = encode_image(image, str(Path(output_dir) / filename), format)
        else:
            result.data = encode_image(image, format=format)

        logger.info(f"Exported {filename} ({image.width}x{image.height})")
        return result
