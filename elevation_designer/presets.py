"""Named spline presets offered by the curve editor."""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence, TypedDict, Union

from .curves import CurvePoint


class CurvePreset(TypedDict):
    label: str
    points: List[Dict[str, float]]


CURVE_PRESETS: List[CurvePreset] = [
    {"label": "Linear", "points": []},
    {
        "label": "Ease In",
        "points": [{"x": 0.4, "y": 0.1}, {"x": 0.7, "y": 0.3}],
    },
    {
        "label": "Ease Out",
        "points": [{"x": 0.3, "y": 0.7}, {"x": 0.6, "y": 0.9}],
    },
    {
        "label": "Ease In-Out",
        "points": [{"x": 0.3, "y": 0.1}, {"x": 0.7, "y": 0.9}],
    },
    {
        "label": "Steps",
        "points": [
            {"x": 0.24, "y": 0.0},
            {"x": 0.25, "y": 0.33},
            {"x": 0.49, "y": 0.33},
            {"x": 0.5, "y": 0.66},
            {"x": 0.74, "y": 0.66},
            {"x": 0.75, "y": 1.0},
        ],
    },
    {
        "label": "Late Bloom",
        "points": [{"x": 0.6, "y": 0.1}, {"x": 0.8, "y": 0.5}],
    },
    {
        "label": "Early Burst",
        "points": [{"x": 0.2, "y": 0.5}, {"x": 0.4, "y": 0.9}],
    },
    {
        "label": "S-Curve",
        "points": [
            {"x": 0.25, "y": 0.05},
            {"x": 0.4, "y": 0.3},
            {"x": 0.6, "y": 0.7},
            {"x": 0.75, "y": 0.95},
        ],
    },
]

_PRESETS_BY_LABEL: Dict[str, CurvePreset] = {preset["label"]: preset for preset in CURVE_PRESETS}


def get_preset(label: str) -> Optional[CurvePreset]:
    return _PRESETS_BY_LABEL.get(label)


def resolve_preset(value: Union[str, Sequence[CurvePoint]]) -> List[CurvePoint]:
    """Resolve a preset label to its points, or pass explicit points through.

    Unknown labels resolve to no points, i.e. the linear curve.
    """

    if isinstance(value, str):
        preset = _PRESETS_BY_LABEL.get(value)
        if preset is None:
            return []
        return [CurvePoint(**point) for point in preset["points"]]
    return list(value)


__all__ = ["CURVE_PRESETS", "CurvePreset", "get_preset", "resolve_preset"]
