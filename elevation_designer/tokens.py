"""Token documents: CSS custom properties and DTCG JSON built from shadow stacks."""
from __future__ import annotations

import logging
import math
import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .colors import ColorFormat, hex_to_hsl, is_hex_color
from .engine import ShadowEngine, get_default_engine
from .params import ShadowCurves, ShadowParams
from .presets import resolve_preset
from .serialize import layers_to_dtcg

logger = logging.getLogger(__name__)

INTERACTION_STATES = ("default", "hover", "active")
DEFAULT_TOKEN_INTENSITY = 0.25
DEFAULT_TOKEN_HARDNESS = 0.25
DEFAULT_TOKEN_LAYERS = 5


# Style-dictionary token tree -> CSS variables

def _get_by_path(tree: Any, path: str) -> Any:
    node = tree
    for key in path.split("."):
        if not isinstance(node, dict) or node.get(key) is None:
            return None
        node = node[key]
    return node


def _unwrap(token: Any) -> Any:
    if isinstance(token, dict):
        if "$value" in token:
            return token["$value"]
        if "value" in token:
            return token["value"]
    return token


def _to_number(value: Any) -> float:
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            return math.nan
    if isinstance(value, str):
        try:
            return float(value.strip() or 0)
        except ValueError:
            return math.nan
    return math.nan


def _token_number(token: Any, default: Optional[float] = None) -> float:
    value = _unwrap(token)
    if value is None:
        return default if default is not None else math.nan
    return _to_number(value)


def build_shadow_css_vars(tokens: Dict[str, Any], engine: Optional[ShadowEngine] = None) -> List[str]:
    """Turn the ``elevation_new`` token tree into CSS custom-property lines.

    Returns an empty list when the light, colour or elevation block is
    missing. Elevations whose depth is not a number are skipped; each token's
    ``resolution`` is read as its layer count.
    """

    engine = engine or get_default_engine()
    light = _get_by_path(tokens, "elevation_new.shadow.light")
    color = _get_by_path(tokens, "elevation_new.shadow.color.hsl")
    elevations = _get_by_path(tokens, "elevation_new.elevation")
    if light is None or color is None or elevations is None:
        return []

    light = light if isinstance(light, dict) else {}
    light_x = _token_number(light.get("x"))
    light_y = _token_number(light.get("y"))

    def stack(cfg: Dict[str, Any], depth: float, layer_count: float) -> str:
        return engine.build_shadow_stack(
            ShadowParams(
                depth=depth,
                light_x=light_x,
                light_y=light_y,
                intensity=_token_number(cfg.get("intensity"), DEFAULT_TOKEN_INTENSITY),
                hardness=_token_number(cfg.get("hardness"), DEFAULT_TOKEN_HARDNESS),
                resolution=0,
                layer_count=layer_count,
            )
        )

    lines = [f"  --shadow-color: {_unwrap(color)};"]

    if isinstance(elevations, dict):
        for name, cfg in elevations.items():
            depth = _token_number(cfg.get("depth")) if isinstance(cfg, dict) else math.nan
            if not math.isfinite(depth):
                logger.debug("Skipping elevation %s without a numeric depth", name)
                continue
            layer_count = _token_number(cfg.get("resolution"), DEFAULT_TOKEN_LAYERS)
            lines.append(f"  --shadow-elevation-{name}:")
            lines.append(f"    {stack(cfg, depth, layer_count)};")

    interaction = _get_by_path(tokens, "elevation_new.interaction")
    if isinstance(interaction, dict):
        layer_count = _token_number(interaction.get("resolution"), DEFAULT_TOKEN_LAYERS)
        for state in INTERACTION_STATES:
            cfg = interaction.get(state)
            if not isinstance(cfg, dict):
                continue
            depth = _token_number(cfg.get("depth"))
            if not math.isfinite(depth):
                continue
            lines.append(f"  --shadow-interaction-{state}:")
            lines.append(f"    {stack(cfg, depth, layer_count)};")
        lines.append("  --shadow-interaction-none:")
        lines.append(f"    {engine.build_zero_shadow_stack(layer_count)};")

    return lines


# Palette documents

def _check_hex(value: Optional[str]) -> Optional[str]:
    if value is not None and not is_hex_color(value):
        raise ValueError(f"'{value}' is not a #rrggbb colour")
    return value


class _Model(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


class EngineSettings(_Model):
    """Global engine controls shared by every elevation level."""

    light_x: float = 0.24
    light_y: float = 0.64
    intensity: float = 0.64
    hardness: float = 0.80
    resolution: float = 0.96
    layer_count: Optional[int] = None


class InteractionState(_Model):
    depth: float
    intensity: float
    hardness: float
    shadow_color_hex: str
    accent_color_hex: Optional[str] = None

    @field_validator("shadow_color_hex", "accent_color_hex")
    @classmethod
    def _valid_hex(cls, value: Optional[str]) -> Optional[str]:
        return _check_hex(value)


class ElevationLevel(_Model):
    """A named elevation; interactive levels carry per-state shadows."""

    name: str
    depth: float
    z_index: int
    layer_count: Optional[int] = None
    interaction_states: Optional[Dict[str, InteractionState]] = None
    enabled_states: Dict[str, bool] = Field(default_factory=dict)

    @property
    def is_interactive(self) -> bool:
        return self.interaction_states is not None

    def active_states(self) -> List[str]:
        states = self.interaction_states or {}
        return [s for s in INTERACTION_STATES if s in states and self.enabled_states.get(s, True)]


class Palette(_Model):
    engine: EngineSettings = Field(default_factory=EngineSettings)
    shadow_color_hex: str = "#482901"
    accent_color_hex: Optional[str] = "#c850c0"
    elevations: List[ElevationLevel] = Field(default_factory=list)
    curves: ShadowCurves = Field(default_factory=ShadowCurves)
    color_format: ColorFormat = "oklch"

    @field_validator("shadow_color_hex", "accent_color_hex")
    @classmethod
    def _valid_hex(cls, value: Optional[str]) -> Optional[str]:
        return _check_hex(value)

    def shadow_params(self, level: ElevationLevel, state: Optional[InteractionState] = None) -> ShadowParams:
        source = state or self.engine
        layer_count = level.layer_count if level.layer_count is not None else self.engine.layer_count
        return ShadowParams(
            depth=state.depth if state is not None else level.depth,
            light_x=self.engine.light_x,
            light_y=self.engine.light_y,
            intensity=source.intensity,
            hardness=source.hardness,
            resolution=0,
            layer_count=layer_count,
            curves=self.curves,
        )


def default_palette() -> Palette:
    """The starter palette: eight levels from ``surface`` to ``drag``."""

    levels = [
        ("surface", 0.15, 1),
        ("raised", 0.25, 2),
        ("elevated", 0.35, 3),
        ("sticky", 0.45, 100),
        ("overlay", 0.55, 200),
        ("modal", 0.65, 300),
        ("floating", 0.75, 400),
        ("drag", 0.85, 500),
    ]
    return Palette(
        elevations=[ElevationLevel(name=name, depth=depth, z_index=z) for name, depth, z in levels],
        curves=ShadowCurves(
            layer_distribution=resolve_preset("Early Burst"),
            offset_growth=resolve_preset("Late Bloom"),
            alpha_distribution=resolve_preset("Ease In"),
        ),
    )


def sanitise_css_name(raw: str) -> str:
    """Reduce a user-entered name to a custom-property fragment."""

    name = raw.strip().lower()
    name = re.sub(r"\s+", "-", name)
    name = re.sub(r"[^a-z0-9-]", "", name)
    name = re.sub(r"-{2,}", "-", name)
    return name.strip("-") or "unnamed"


def format_css_output(palette: Palette, engine: Optional[ShadowEngine] = None) -> str:
    """Render the palette as a ``:root`` block of custom properties."""

    engine = engine or get_default_engine()
    indent = "  "
    value_indent = indent + "    "
    shadow_hsl = hex_to_hsl(palette.shadow_color_hex)
    accent_hsl = hex_to_hsl(palette.accent_color_hex) if palette.accent_color_hex else None

    def reindent(stack: str) -> str:
        return re.sub(r"\n\s*", "\n" + value_indent, stack)

    lines = [f"{indent}--shadow-color: {shadow_hsl};"]
    if accent_hsl:
        lines.append(f"{indent}--shadow-accent: {accent_hsl};")

    for level in palette.elevations:
        safe_name = sanitise_css_name(level.name)
        lines.append(f"{indent}--z-index-{safe_name}: {level.z_index};")
        if not level.is_interactive:
            stack = engine.build_shadow_stack(palette.shadow_params(level))
            lines.append(f"{indent}--shadow-elevation-{safe_name}:")
            lines.append(f"{value_indent}{reindent(stack)};")
            continue

        for state_name in level.active_states():
            state = level.interaction_states[state_name]
            state_shadow = hex_to_hsl(state.shadow_color_hex)
            if state_shadow != shadow_hsl:
                lines.append(f"{indent}--shadow-color-{safe_name}-{state_name}: {state_shadow};")
            if state.accent_color_hex:
                state_accent = hex_to_hsl(state.accent_color_hex)
                if state_accent != accent_hsl:
                    lines.append(f"{indent}--shadow-accent-{safe_name}-{state_name}: {state_accent};")
            stack = engine.build_shadow_stack(palette.shadow_params(level, state))
            lines.append(f"{indent}--shadow-elevation-{safe_name}-{state_name}:")
            lines.append(f"{value_indent}{reindent(stack)};")

    return ":root {\n" + "\n".join(lines) + "\n}"


def format_token_json(
    palette: Palette,
    engine: Optional[ShadowEngine] = None,
    color_format: Optional[str] = None,
) -> Dict[str, Any]:
    """Build the DTCG document for every elevation in the palette."""

    engine = engine or get_default_engine()
    color_format = color_format or palette.color_format
    tokens: Dict[str, Any] = {}

    for level in palette.elevations:
        z_index = {"$type": "number", "$value": level.z_index}
        if not level.is_interactive:
            layers = engine.build_shadow_layers(palette.shadow_params(level))
            tokens[level.name] = {
                "$type": "shadow",
                "$value": layers_to_dtcg(layers, palette.shadow_color_hex, palette.accent_color_hex, color_format),
                "zIndex": z_index,
            }
            continue

        entry: Dict[str, Any] = {"zIndex": z_index}
        for state_name in level.active_states():
            state = level.interaction_states[state_name]
            layers = engine.build_shadow_layers(palette.shadow_params(level, state))
            entry[state_name] = {
                "$type": "shadow",
                "$value": layers_to_dtcg(layers, state.shadow_color_hex, state.accent_color_hex, color_format),
            }
        tokens[level.name] = entry

    return {"elevation": tokens}


__all__ = [
    "ElevationLevel",
    "EngineSettings",
    "INTERACTION_STATES",
    "InteractionState",
    "Palette",
    "build_shadow_css_vars",
    "default_palette",
    "format_css_output",
    "format_token_json",
    "sanitise_css_name",
]
