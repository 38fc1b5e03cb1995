"""Rendering of shadow layers as CSS ``box-shadow`` values and DTCG token values."""
from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Sequence

from .colors import hex_to_dtcg_color
from .numeric import round_half_up
from .synthesis import ShadowLayer

LAYER_SEPARATOR = ",\n    "
SHADOW_COLOR = "var(--shadow-color)"
ACCENT_COLOR = "var(--shadow-accent, var(--shadow-color))"
SPREAD_EPSILON = 0.05

ZERO_MARKER_TERM = f"0px 0px 0px hsl({ACCENT_COLOR} / 0)"
ZERO_LAYER_TERM = f"0px 0px 0px 0px hsl({SHADOW_COLOR} / 0)"

_TRAILING_ZEROS = re.compile(r"\.?0+$")


def _trim(fixed: str) -> str:
    return _TRAILING_ZEROS.sub("", fixed)


def format_px(n: float) -> str:
    """Two decimals below 2px, one decimal above; trailing zeros dropped."""

    if abs(n) < 2:
        return f"{_trim(f'{round_half_up(n, 2):.2f}')}px"
    return f"{_trim(f'{round_half_up(n, 1):.1f}')}px"


def format_alpha(n: float) -> str:
    return _trim(f"{round_half_up(n, 3):.3f}")


def layer_to_css(layer: ShadowLayer) -> str:
    color_var = ACCENT_COLOR if layer.is_accent else SHADOW_COLOR
    color = f"hsl({color_var} / {format_alpha(layer.alpha)})"
    parts = [format_px(layer.offset_x), format_px(layer.offset_y), format_px(layer.blur)]
    if abs(layer.spread) >= SPREAD_EPSILON:
        parts.append(format_px(layer.spread))
    parts.append(color)
    return " ".join(parts)


def layers_to_css(layers: Sequence[ShadowLayer]) -> str:
    """Serialise a stack to a ``box-shadow`` value; an empty stack is ``none``."""

    if not layers:
        return "none"
    return LAYER_SEPARATOR.join(layer_to_css(layer) for layer in layers)


def zero_stack_to_css(layer_count: int) -> str:
    """Transparent stack with a leading marker term and ``layer_count`` zero terms."""

    return LAYER_SEPARATOR.join([ZERO_MARKER_TERM] + [ZERO_LAYER_TERM] * layer_count)


def _dimension(value: float) -> Dict[str, Any]:
    return {"value": value, "unit": "px"}


def layers_to_dtcg(
    layers: Sequence[ShadowLayer],
    shadow_hex: str,
    accent_hex: Optional[str] = None,
    color_format: str = "oklch",
) -> List[Dict[str, Any]]:
    """Build a DTCG ``shadow`` token value, one entry per layer.

    Accent layers take ``accent_hex`` when one is set and fall back to
    ``shadow_hex`` otherwise, mirroring the CSS variable fallback.
    """

    value = []
    for layer in layers:
        color_hex = (accent_hex or shadow_hex) if layer.is_accent else shadow_hex
        value.append(
            {
                "color": hex_to_dtcg_color(color_hex, layer.alpha, color_format),
                "offsetX": _dimension(layer.offset_x),
                "offsetY": _dimension(layer.offset_y),
                "blur": _dimension(layer.blur),
                "spread": _dimension(layer.spread),
            }
        )
    return value


__all__ = [
    "ACCENT_COLOR",
    "LAYER_SEPARATOR",
    "SHADOW_COLOR",
    "ZERO_LAYER_TERM",
    "ZERO_MARKER_TERM",
    "format_alpha",
    "format_px",
    "layer_to_css",
    "layers_to_css",
    "layers_to_dtcg",
    "zero_stack_to_css",
]
