"""Shaping curves on [0, 1]: CSS-style cubic Bézier and monotone Hermite splines."""
from __future__ import annotations

import math
from typing import Any, List, Literal, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

from .numeric import clamp01, is_finite_number, lerp, remap01


class CurvePoint(BaseModel):
    """Interior control point of a spline curve."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class BezierCurve(BaseModel):
    """Cubic Bézier timing function from (0, 0) to (1, 1)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["bezier"] = "bezier"
    x1: float
    y1: float
    x2: float
    y2: float


class SplineCurve(BaseModel):
    """Monotone spline through interior points; the endpoints are implicit."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["spline"] = "spline"
    points: List[CurvePoint] = Field(default_factory=list)


Curve = Union[BezierCurve, SplineCurve]


def _parse_points(raw: Sequence[Any]) -> Optional[List[CurvePoint]]:
    points: List[CurvePoint] = []
    for item in raw:
        if isinstance(item, CurvePoint):
            points.append(item)
            continue
        if not isinstance(item, dict):
            return None
        x, y = item.get("x"), item.get("y")
        if not (is_finite_number(x) and is_finite_number(y)):
            return None
        points.append(CurvePoint(x=x, y=y))
    return points


def parse_curve(raw: Any) -> Optional[Curve]:
    """Coerce one of the persisted curve shapes into a curve model.

    Accepted shapes are a Bézier mapping ``{x1, y1, x2, y2}``, a bare list of
    ``{x, y}`` points and a wrapped ``{"points": [...]}`` mapping. Anything
    else yields ``None``, which evaluates as the identity curve.
    """

    if raw is None or isinstance(raw, (BezierCurve, SplineCurve)):
        return raw
    if isinstance(raw, (list, tuple)):
        points = _parse_points(raw)
        return SplineCurve(points=points) if points is not None else None
    if not isinstance(raw, dict):
        return None
    if isinstance(raw.get("points"), (list, tuple)):
        points = _parse_points(raw["points"])
        return SplineCurve(points=points) if points is not None else None
    controls = [raw.get(key) for key in ("x1", "y1", "x2", "y2")]
    if all(is_finite_number(value) for value in controls):
        x1, y1, x2, y2 = controls
        return BezierCurve(x1=x1, y1=y1, x2=x2, y2=y2)
    return None


# Bézier

def _bezier_coord(t: float, c1: float, c2: float) -> float:
    u = 1 - t
    return 3 * u * u * t * c1 + 3 * u * t * t * c2 + t * t * t


def _bezier_coord_deriv(t: float, c1: float, c2: float) -> float:
    u = 1 - t
    return 3 * u * u * c1 + 6 * u * t * (c2 - c1) + 3 * t * t * (1 - c2)


def cubic_bezier_at_x(x: float, x1: float, y1: float, x2: float, y2: float) -> float:
    """Return the y value of the Bézier at horizontal position ``x``."""

    target = clamp01(x)
    cx1, cx2 = clamp01(x1), clamp01(x2)
    cy1, cy2 = clamp01(y1), clamp01(y2)

    if cx1 == cy1 and cx2 == cy2 and cx1 == 0 and cx2 == 1:
        return target

    t = target
    for _ in range(6):
        dx = _bezier_coord(t, cx1, cx2) - target
        if abs(dx) < 1e-5:
            break
        d = _bezier_coord_deriv(t, cx1, cx2)
        if abs(d) < 1e-6:
            break
        t = clamp01(t - dx / d)

    x_est = _bezier_coord(t, cx1, cx2)
    if abs(x_est - target) > 1e-3:
        lo, hi = 0.0, 1.0
        t = target
        for _ in range(20):
            x_est = _bezier_coord(t, cx1, cx2)
            if abs(x_est - target) < 1e-5:
                break
            if x_est < target:
                lo = t
            else:
                hi = t
            t = (lo + hi) / 2

    return _bezier_coord(t, cy1, cy2)


# Monotone cubic Hermite spline (Fritsch-Carlson)

def spline_knots(points: Sequence[CurvePoint]) -> List[CurvePoint]:
    """Return the sorted knot list with the implicit endpoints added."""

    interior = sorted(points, key=lambda p: p.x)
    knots: List[CurvePoint] = []
    if interior[0].x > 0.001:
        knots.append(CurvePoint(x=0, y=0))
    knots.extend(interior)
    if knots[-1].x < 0.999:
        knots.append(CurvePoint(x=1, y=1))
    return knots


def _tangents(xs: List[float], ys: List[float]) -> List[float]:
    n = len(xs)
    delta: List[float] = []
    for i in range(n - 1):
        h = xs[i + 1] - xs[i]
        delta.append((ys[i + 1] - ys[i]) / h if h > 0 else 0.0)

    m = [0.0] * n
    m[0] = delta[0]
    m[n - 1] = delta[n - 2]
    for i in range(1, n - 1):
        if delta[i - 1] * delta[i] <= 0:
            m[i] = 0.0
        else:
            m[i] = (delta[i - 1] + delta[i]) / 2

    for i in range(n - 1):
        if abs(delta[i]) < 1e-12:
            m[i] = 0.0
            m[i + 1] = 0.0
            continue
        alpha = m[i] / delta[i]
        beta = m[i + 1] / delta[i]
        tau = alpha * alpha + beta * beta
        if tau > 9:
            s = 3 / math.sqrt(tau)
            m[i] = s * alpha * delta[i]
            m[i + 1] = s * beta * delta[i]
    return m


def evaluate_spline(x: float, points: Sequence[CurvePoint]) -> float:
    """Evaluate the monotone spline through ``points`` at ``x``."""

    if not points:
        return x

    knots = spline_knots(points)
    n = len(knots)
    if n == 1:
        return knots[0].y
    if n == 2:
        return lerp(knots[0].y, knots[1].y, remap01(x, knots[0].x, knots[1].x))

    target = clamp01(x)
    if target <= knots[0].x:
        return knots[0].y
    if target >= knots[-1].x:
        return knots[-1].y

    xs = [p.x for p in knots]
    ys = [p.y for p in knots]
    m = _tangents(xs, ys)

    seg = 0
    for i in range(n - 1):
        if xs[i] <= target <= xs[i + 1]:
            seg = i
            break

    dx = xs[seg + 1] - xs[seg]
    t = (target - xs[seg]) / dx if dx > 0 else 0.0
    t2 = t * t
    t3 = t2 * t

    h00 = 2 * t3 - 3 * t2 + 1
    h10 = t3 - 2 * t2 + t
    h01 = -2 * t3 + 3 * t2
    h11 = t3 - t2

    return h00 * ys[seg] + h10 * dx * m[seg] + h01 * ys[seg + 1] + h11 * dx * m[seg + 1]


def evaluate_curve(curve: Optional[Curve], x: float) -> float:
    """Evaluate ``curve`` at ``x``; a missing curve is the identity."""

    if curve is None:
        return x
    if isinstance(curve, SplineCurve):
        return evaluate_spline(x, curve.points)
    return cubic_bezier_at_x(x, curve.x1, curve.y1, curve.x2, curve.y2)


__all__ = [
    "BezierCurve",
    "Curve",
    "CurvePoint",
    "SplineCurve",
    "cubic_bezier_at_x",
    "evaluate_curve",
    "evaluate_spline",
    "parse_curve",
    "spline_knots",
]
