"""Layer synthesis: normalised parameters in, ordered shadow layers out."""
from __future__ import annotations

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .curves import Curve, evaluate_curve
from .numeric import clamp01, lerp, round_half_up
from .params import NormalizedParams, ShadowCurves

OFFSET_MIN = 1.0


class ShadowLayer(BaseModel):
    """One ``box-shadow`` term. Index 0 of a stack sits closest to the surface."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    offset_x: float
    offset_y: float
    blur: float
    spread: float
    alpha: float
    is_accent: bool


def _shaped(curve: Optional[Curve], x: float, fallback_power: float) -> float:
    if curve is not None:
        return evaluate_curve(curve, x)
    return x ** fallback_power


def offset_ceiling(normalized: NormalizedParams, curves: Optional[ShadowCurves] = None) -> float:
    """Largest layer offset, blended between the low and high intensity ceilings."""

    growth = curves.offset_growth if curves is not None else None
    depth = normalized.depth
    at_low = lerp(3, 50, _shaped(growth, depth, 2.2))
    at_high = lerp(5, 150, _shaped(growth, depth, 3.1))
    return lerp(at_low, at_high, normalized.intensity)


def synthesize(normalized: NormalizedParams, curves: Optional[ShadowCurves] = None) -> Tuple[ShadowLayer, ...]:
    """Compute the shadow stack for one parameter set.

    Offsets and blur grow with the layer's distance ``u`` from the surface,
    spread contracts linearly with the layer index, and alpha blends a rising
    (soft) and a falling (hard) ramp by hardness. Values are quantised to
    0.1 px and 0.001 alpha so every consumer sees identical numbers.
    """

    n = normalized.layer_count
    intensity = normalized.intensity
    hardness = normalized.hardness

    layer_distribution = curves.layer_distribution if curves is not None else None
    alpha_distribution = curves.alpha_distribution if curves is not None else None

    offset_max = offset_ceiling(normalized, curves)
    blur_ratio = lerp(2.1, 1.05, hardness)
    spread_max = lerp(0, 5, hardness)
    dist_power = lerp(1.7, 3.0, hardness)
    peak = lerp(0.22, 0.72, intensity)

    layers = []
    for i in range(n):
        t = 1.0 if n == 1 else i / (n - 1)
        u = clamp01(_shaped(layer_distribution, t, dist_power))

        offset = lerp(OFFSET_MIN, offset_max, u)
        x = offset * normalized.eased_x
        y = offset * normalized.eased_y
        blur = offset * blur_ratio
        spread = -spread_max * t

        soft_alpha = peak * t
        hard_alpha = peak * (n - i) / max(n - 1, 1)
        shape = evaluate_curve(alpha_distribution, t) if alpha_distribution is not None else 1.0
        alpha = clamp01(lerp(soft_alpha, hard_alpha, hardness) * shape)

        layers.append(
            ShadowLayer(
                offset_x=round_half_up(x, 1),
                offset_y=round_half_up(y, 1),
                blur=round_half_up(blur, 1),
                spread=round_half_up(spread, 1),
                alpha=round_half_up(alpha, 3),
                is_accent=t > 0.5,
            )
        )
    return tuple(layers)


__all__ = ["OFFSET_MIN", "ShadowLayer", "offset_ceiling", "synthesize"]
