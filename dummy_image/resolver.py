"""
SpecResolver - turns form edits into a consistent EditorState.

Handles:
1. Free-form width/height entry (coerced to 1..8000)
2. Preset resolution selection
3. Aspect ratio selection (height follows width)
4. Independent style, color, text and font fields

resolve() never raises for an edit it understands; malformed values fall back
to safe defaults, and edits that cannot be applied leave the state unchanged.
"""

import re
import math
import logging
from typing import Any, Callable, Dict, Mapping, Optional
from dataclasses import dataclass, replace

from .paint import normalize_hex
from .presets import (
    CUSTOM,
    FONT_SIZE_RANGE,
    GRADIENT_PRESETS,
    MAX_DIMENSION,
    GradientPreset,
    classify_aspect_ratio,
    find_aspect_ratio,
    find_gradient,
    find_resolution,
)
from .spec import BackgroundType, EditorState, TextPosition

logger = logging.getLogger(__name__)

LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

TRUE_STRINGS = {"1", "true", "yes", "on"}

# Field order used when building a state from a flat mapping of values
FIELD_ORDER = [
    "width",
    "height",
    "style",
    "primary_color",
    "secondary_color",
    "gradient_preset",
    "overlay_text",
    "text_position",
    "text_color",
    "font_family",
    "font_size_pt",
    "show_dimension_label",
]


@dataclass(frozen=True)
class Edit:
    """A single form edit: the field that changed and its raw value."""
    field: str
    value: Any


def parse_int(value: Any) -> Optional[int]:
    """
    Parse the leading integer of a value, like a number input does.

    Examples:
        >>> parse_int("640px")
        640
        >>> parse_int("abc") is None
        True
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = LEADING_INT.match(value)
        return int(match.group(1)) if match else None
    return None


def coerce_dimension(value: Any) -> int:
    """Positive pixel dimension; unparseable or non-positive input becomes 1."""
    parsed = parse_int(value)
    if parsed is None or parsed <= 0:
        return 1
    return min(parsed, MAX_DIMENSION)


def coerce_font_size(value: Any) -> int:
    low, high = FONT_SIZE_RANGE
    parsed = parse_int(value)
    if parsed is None:
        return low
    return max(low, min(parsed, high))


def coerce_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in TRUE_STRINGS
    return bool(value)


def parse_style(value: Any) -> BackgroundType:
    """Style by value or name, falling back to the first style."""
    if isinstance(value, BackgroundType):
        return value
    wanted = str(value).strip().lower()
    for style in BackgroundType:
        if wanted in (style.value, style.name.lower()):
            return style
    fallback = list(BackgroundType)[0]
    logger.warning(f"Unknown style {value!r}, using {fallback.value}")
    return fallback


def parse_position(value: Any) -> TextPosition:
    """Position by tag ("top-left") or label ("Top Left"), falling back to the first."""
    if isinstance(value, TextPosition):
        return value
    wanted = str(value).strip().lower().replace(" ", "-").replace("_", "-")
    if wanted == "center-center":
        wanted = "center"
    for position in TextPosition:
        if wanted == position.value:
            return position
    fallback = list(TextPosition)[0]
    logger.warning(f"Unknown text position {value!r}, using {fallback.value}")
    return fallback


def parse_gradient(value: Any) -> tuple:
    """
    Gradient colors from a preset name or an explicit list of 2-3 colors.

    Unknown names and malformed lists fall back to the first preset.
    """
    if isinstance(value, GradientPreset):
        return value.colors
    if isinstance(value, str):
        preset = find_gradient(value)
        if preset:
            return preset.colors
    elif isinstance(value, (list, tuple)) and 2 <= len(value) <= 3:
        try:
            return tuple(normalize_hex(str(c)) for c in value)
        except ValueError as e:
            logger.warning(f"Invalid gradient colors: {e}")

    fallback = GRADIENT_PRESETS[0]
    logger.warning(f"Unknown gradient preset {value!r}, using {fallback.name}")
    return fallback.colors


class SpecResolver:
    """
    Applies edits to an EditorState.

    Dimension entry, preset selection and aspect ratio selection interact:
    each one invalidates the other selection labels as described on the
    individual handlers. Every other field is independent.
    """

    def __init__(self):
        self._handlers: Dict[str, Callable[[EditorState, Any], EditorState]] = {
            "width": self._set_width,
            "height": self._set_height,
            "resolution": self._select_resolution,
            "aspect_ratio": self._select_aspect_ratio,
            "style": lambda s, v: self._set_field(s, style=parse_style(v)),
            "primary_color": lambda s, v: self._set_color(s, "primary_color", v),
            "secondary_color": lambda s, v: self._set_color(s, "secondary_color", v),
            "text_color": lambda s, v: self._set_color(s, "text_color", v),
            "gradient_preset": lambda s, v: self._set_field(s, gradient_preset=parse_gradient(v)),
            "overlay_text": lambda s, v: self._set_field(s, overlay_text="" if v is None else str(v)),
            "text_position": lambda s, v: self._set_field(s, text_position=parse_position(v)),
            "font_family": self._set_font_family,
            "font_size_pt": lambda s, v: self._set_field(s, font_size_pt=coerce_font_size(v)),
            "show_dimension_label": lambda s, v: self._set_field(s, show_dimension_label=coerce_bool(v)),
        }

    def resolve(self, current: EditorState, edit: Edit) -> EditorState:
        """
        Apply one edit.

        Args:
            current: State before the edit
            edit: Field name and raw value

        Returns:
            New state; ``current`` itself if the edit was rejected
        """
        handler = self._handlers.get(edit.field)
        if handler is None:
            logger.warning(f"Ignoring edit to unknown field {edit.field!r}")
            return current
        return handler(current, edit.value)

    def build(
        self,
        values: Mapping[str, Any],
        selected_resolution: str = CUSTOM,
        selected_aspect_ratio: str = CUSTOM,
        base: Optional[EditorState] = None,
    ) -> EditorState:
        """
        Build a state from a flat mapping of field values.

        Selection labels are descriptive only: they are kept when they still
        agree with the resolved dimensions and reset to Custom otherwise.
        """
        state = base or EditorState()
        for name in FIELD_ORDER:
            if name in values and values[name] is not None:
                state = self.resolve(state, Edit(name, values[name]))

        spec = state.spec
        preset = find_resolution(selected_resolution)
        if not preset or preset.label == CUSTOM or preset.size != spec.size:
            selected_resolution = CUSTOM
        ratio = find_aspect_ratio(selected_aspect_ratio)
        if not ratio or ratio.label != spec.aspect_ratio_label:
            selected_aspect_ratio = CUSTOM

        return replace(
            state,
            selected_resolution=selected_resolution,
            selected_aspect_ratio=selected_aspect_ratio
        )

    # ---- Dimensions ----

    def _set_width(self, state: EditorState, value: Any) -> EditorState:
        return self._manual_dimensions(state, coerce_dimension(value), state.spec.height)

    def _set_height(self, state: EditorState, value: Any) -> EditorState:
        return self._manual_dimensions(state, state.spec.width, coerce_dimension(value))

    def _manual_dimensions(self, state: EditorState, width: int, height: int) -> EditorState:
        """Typed dimensions are authoritative and detach both selections."""
        return EditorState(
            spec=replace(state.spec, width=width, height=height),
            selected_resolution=CUSTOM,
            selected_aspect_ratio=CUSTOM,
        )

    def _select_resolution(self, state: EditorState, label: Any) -> EditorState:
        """
        Select a preset resolution.

        The preset's dimensions replace width/height and the aspect ratio
        selection follows the new dimensions. Unknown labels only change the
        selection label.
        """
        label = str(label)
        preset = find_resolution(label)
        if preset is None:
            logger.warning(f"Unknown resolution preset {label!r}")
            return replace(state, selected_resolution=label)

        ratio_label = classify_aspect_ratio(preset.width, preset.height)
        matching = find_aspect_ratio(ratio_label)
        return EditorState(
            spec=replace(state.spec, width=preset.width, height=preset.height),
            selected_resolution=preset.label,
            selected_aspect_ratio=matching.label if matching else CUSTOM,
        )

    def _select_aspect_ratio(self, state: EditorState, label: Any) -> EditorState:
        """
        Select a named aspect ratio, keeping width and recomputing height.

        The resolution selection is always reset to Custom. Selecting Custom
        (or an unknown label) leaves the dimensions alone.
        """
        label = str(label)
        entry = find_aspect_ratio(label)
        if entry is None or entry.ratio is None:
            return replace(state, selected_aspect_ratio=CUSTOM, selected_resolution=CUSTOM)

        height = coerce_dimension(round(state.spec.width / entry.ratio))
        return EditorState(
            spec=replace(state.spec, height=height),
            selected_resolution=CUSTOM,
            selected_aspect_ratio=entry.label,
        )

    # ---- Independent fields ----

    def _set_field(self, state: EditorState, **changes: Any) -> EditorState:
        return replace(state, spec=replace(state.spec, **changes))

    def _set_color(self, state: EditorState, name: str, value: Any) -> EditorState:
        try:
            color = normalize_hex(str(value))
        except ValueError as e:
            logger.warning(f"Rejected {name} edit: {e}")
            return state
        return self._set_field(state, **{name: color})

    def _set_font_family(self, state: EditorState, value: Any) -> EditorState:
        family = str(value or "").strip()
        if not family:
            return state
        return self._set_field(state, font_family=family)


_default_resolver = SpecResolver()


def resolve(current: EditorState, edit: Edit) -> EditorState:
    """Apply one edit with the shared resolver."""
    return _default_resolver.resolve(current, edit)


def build_state(values: Mapping[str, Any], **kwargs: Any) -> EditorState:
    return _default_resolver.build(values, **kwargs)

