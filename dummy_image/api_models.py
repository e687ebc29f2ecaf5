"""
API models for FastAPI endpoints.
"""

from pydantic import BaseModel, Field
from typing import Any, List, Optional, Union

from .generator import export_filename, preview_scale
from .presets import CUSTOM
from .spec import EditorState


class SpecPayload(BaseModel):
    """Raw form values. Anything missing keeps its default."""
    width: Optional[Union[int, str]] = None
    height: Optional[Union[int, str]] = None
    style: Optional[str] = None  # solid, gradient, geometric, dots, waves, grid
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    gradient_preset: Optional[Union[str, List[str]]] = None  # Preset name or 2-3 colors
    overlay_text: Optional[str] = None
    text_position: Optional[str] = None  # top-left ... bottom-right
    text_color: Optional[str] = None
    font_family: Optional[str] = None
    font_size_pt: Optional[Union[int, str]] = None
    show_dimension_label: Optional[bool] = None
    selected_resolution: str = CUSTOM
    selected_aspect_ratio: str = CUSTOM

    def values(self) -> dict:
        return self.model_dump(
            exclude_none=True,
            exclude={"selected_resolution", "selected_aspect_ratio"}
        )


class EditPayload(BaseModel):
    """One form edit."""
    field: str
    value: Any = None


class ResolveRequest(BaseModel):
    """Current form values plus the edit to apply."""
    current: SpecPayload = Field(default_factory=SpecPayload)
    edit: EditPayload


class StateResponse(BaseModel):
    """Resolved editor state."""
    width: int
    height: int
    style: str
    primary_color: str
    secondary_color: str
    gradient_preset: List[str]
    overlay_text: str
    text_position: str
    text_color: str
    font_family: str
    font_size_pt: int
    show_dimension_label: bool
    selected_resolution: str
    selected_aspect_ratio: str
    aspect_ratio_label: str
    aspect_ratio_display: str
    preview_scale: float
    filename: str

    @classmethod
    def from_state(cls, state: EditorState, preview_max_size: int) -> "StateResponse":
        spec = state.spec
        return cls(
            width=spec.width,
            height=spec.height,
            style=spec.style.value,
            primary_color=spec.primary_color,
            secondary_color=spec.secondary_color,
            gradient_preset=list(spec.gradient_preset),
            overlay_text=spec.overlay_text,
            text_position=spec.text_position.value,
            text_color=spec.text_color,
            font_family=spec.font_family,
            font_size_pt=spec.font_size_pt,
            show_dimension_label=spec.show_dimension_label,
            selected_resolution=state.selected_resolution,
            selected_aspect_ratio=state.selected_aspect_ratio,
            aspect_ratio_label=state.aspect_ratio_label,
            aspect_ratio_display=state.aspect_ratio_display,
            preview_scale=preview_scale(spec, preview_max_size),
            filename=export_filename(spec),
        )


class OptionsResponse(BaseModel):
    """Response with available form options."""
    resolutions: List[dict]
    aspect_ratios: List[dict]
    positions: List[dict]
    styles: List[dict]
    gradients: List[dict]
    fonts: List[str]
    font_size_range: List[int]
