# Dummy Image Module
# Resolver normalizes form edits, Compositor paints the result

from .spec import RenderSpec, EditorState, BackgroundType, TextPosition
from .presets import classify_aspect_ratio, gcd
from .resolver import Edit, SpecResolver, resolve, build_state
from .surface import Surface, PillowSurface
from .compositor import Compositor, render, anchor_for, layout_lines, split_lines
from .generator import ImageGenerator, ExportResult, export_filename, preview_scale

__all__ = [
    "RenderSpec",
    "EditorState",
    "BackgroundType",
    "TextPosition",
    "classify_aspect_ratio",
    "gcd",
    "Edit",
    "SpecResolver",
    "resolve",
    "build_state",
    "Surface",
    "PillowSurface",
    "Compositor",
    "render",
    "anchor_for",
    "layout_lines",
    "split_lines",
    "ImageGenerator",
    "ExportResult",
    "export_filename",
    "preview_scale",
]
