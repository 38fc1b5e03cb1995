"""Engine inputs and their normalisation into working quantities."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from .curves import Curve, parse_curve
from .numeric import clamp, clamp01, finite_or, is_finite_number, lerp, round_half_up, sign

MIN_LAYERS = 2
MAX_LAYERS = 10

_NUMERIC_DEFAULTS: Dict[str, float] = {
    "depth": 0.0,
    "light_x": 0.0,
    "light_y": 1.0,
    "intensity": 0.0,
    "hardness": 0.0,
    "resolution": 0.0,
}


class ShadowCurves(BaseModel):
    """Optional overrides for the three shaping functions."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    layer_distribution: Optional[Curve] = None
    offset_growth: Optional[Curve] = None
    alpha_distribution: Optional[Curve] = None

    @field_validator("layer_distribution", "offset_growth", "alpha_distribution", mode="before")
    @classmethod
    def _coerce_curve(cls, value: Any) -> Optional[Curve]:
        return parse_curve(value)


class ShadowParams(BaseModel):
    """Raw shadow parameters as supplied by the editor.

    Construction never fails on bad numbers: missing, non-finite or
    non-numeric values are replaced with their defaults (``light_y`` defaults
    to 1, light from directly above; everything else to 0). Range clamping
    happens in :func:`normalize`.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    depth: float = 0.0
    light_x: float = 0.0
    light_y: float = 1.0
    intensity: float = 0.0
    hardness: float = 0.0
    resolution: float = 0.0
    layer_count: Optional[float] = None
    curves: Optional[ShadowCurves] = None

    @field_validator("depth", "light_x", "light_y", "intensity", "hardness", "resolution", mode="before")
    @classmethod
    def _finite_or_default(cls, value: Any, info: ValidationInfo) -> float:
        return finite_or(value, _NUMERIC_DEFAULTS[info.field_name])

    @field_validator("layer_count", mode="before")
    @classmethod
    def _finite_or_absent(cls, value: Any) -> Optional[float]:
        return float(value) if is_finite_number(value) else None

    @field_validator("curves", mode="before")
    @classmethod
    def _curves_mapping(cls, value: Any) -> Any:
        return value if isinstance(value, (dict, ShadowCurves)) else None


def coerce_params(params: Union[ShadowParams, Mapping[str, Any]]) -> ShadowParams:
    """Accept either a model or a plain mapping (camelCase or snake_case keys)."""

    if isinstance(params, ShadowParams):
        return params
    if not isinstance(params, Mapping):
        return ShadowParams()
    return ShadowParams.model_validate(dict(params))


@dataclass(frozen=True)
class NormalizedParams:
    """Clamped and remapped working set consumed by the synthesizer."""

    depth: float
    intensity: float
    hardness: float
    resolution: float
    light_x: float
    light_y: float
    eased_x: float
    eased_y: float
    layer_count: int


def ease_light(v: float) -> float:
    """Ease one light axis; diagonal light is deliberately not renormalised."""

    return sign(v) * abs(v) ** 1.5


def resolve_layer_count(layer_count: Optional[float], depth: float, resolution: float) -> int:
    if layer_count is not None and layer_count >= MIN_LAYERS:
        return int(clamp(MIN_LAYERS, MAX_LAYERS, round_half_up(layer_count)))
    layer_t = clamp01(depth * resolution)
    return int(clamp(MIN_LAYERS, MAX_LAYERS, round_half_up(lerp(3, 10, layer_t))))


def normalize(params: ShadowParams) -> NormalizedParams:
    """Clamp the raw parameters and derive the eased light and layer count."""

    depth = clamp01(finite_or(params.depth, 0.0))
    intensity = clamp01(finite_or(params.intensity, 0.0))
    hardness = clamp01(finite_or(params.hardness, 0.0))
    resolution = clamp01(finite_or(params.resolution, 0.0))
    light_x = clamp(-1.0, 1.0, finite_or(params.light_x, 0.0))
    light_y = clamp(-1.0, 1.0, finite_or(params.light_y, 1.0))

    # Depth is used directly; no low-elevation remap.
    remapped_depth = depth

    return NormalizedParams(
        depth=remapped_depth,
        intensity=intensity,
        hardness=hardness,
        resolution=resolution,
        light_x=light_x,
        light_y=light_y,
        eased_x=ease_light(light_x),
        eased_y=ease_light(light_y),
        layer_count=resolve_layer_count(params.layer_count, remapped_depth, resolution),
    )


__all__ = [
    "MAX_LAYERS",
    "MIN_LAYERS",
    "NormalizedParams",
    "ShadowCurves",
    "ShadowParams",
    "coerce_params",
    "ease_light",
    "normalize",
    "resolve_layer_count",
]
