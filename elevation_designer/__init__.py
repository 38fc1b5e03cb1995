"""Elevation designer: synthesis and export of layered shadow design tokens."""
from __future__ import annotations

from .curves import BezierCurve, CurvePoint, SplineCurve, evaluate_curve, parse_curve
from .engine import ShadowEngine, build_shadow_layers, build_shadow_stack, build_zero_layers, build_zero_shadow_stack
from .params import ShadowCurves, ShadowParams, normalize
from .serialize import layers_to_css, layers_to_dtcg
from .synthesis import ShadowLayer, synthesize
from .tokens import build_shadow_css_vars

__version__ = "0.1.0"

__all__ = [
    "BezierCurve",
    "CurvePoint",
    "ShadowCurves",
    "ShadowEngine",
    "ShadowLayer",
    "ShadowParams",
    "SplineCurve",
    "build_shadow_css_vars",
    "build_shadow_layers",
    "build_shadow_stack",
    "build_zero_layers",
    "build_zero_shadow_stack",
    "evaluate_curve",
    "layers_to_css",
    "layers_to_dtcg",
    "normalize",
    "parse_curve",
    "synthesize",
]
