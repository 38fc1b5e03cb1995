"""Colour helpers needed by the token exporters."""
from __future__ import annotations

import colorsys
import math
import re
from typing import Any, Dict, List, Literal, Tuple

from .numeric import round_half_up

ColorFormat = Literal["hex", "rgb", "lch", "oklch"]
COLOR_FORMATS = ("hex", "rgb", "lch", "oklch")

_HEX_RE = re.compile(r"^#[0-9a-fA-F]{6}$")


def is_hex_color(value: str) -> bool:
    return bool(_HEX_RE.match(value))


def parse_hex(value: str) -> Tuple[int, int, int]:
    """Split ``#rrggbb`` into its channel values."""

    if not is_hex_color(value):
        raise ValueError(f"Invalid hex colour '{value}'")
    n = int(value[1:], 16)
    return (n >> 16) & 255, (n >> 8) & 255, n & 255


def _linearize(c: float) -> float:
    return c / 12.92 if c <= 0.04045 else ((c + 0.055) / 1.055) ** 2.4


def _linear_rgb(value: str) -> Tuple[float, float, float]:
    r, g, b = parse_hex(value)
    return _linearize(r / 255), _linearize(g / 255), _linearize(b / 255)


def _polar(a: float, b: float) -> Tuple[float, float]:
    chroma = math.sqrt(a * a + b * b)
    hue = math.degrees(math.atan2(b, a))
    if hue < 0:
        hue += 360
    return chroma, hue


def hex_to_oklch(value: str) -> Tuple[float, float, float]:
    r, g, b = _linear_rgb(value)
    l_ = 0.4122214708 * r + 0.5363325363 * g + 0.0514459929 * b
    m_ = 0.2119034982 * r + 0.6806995451 * g + 0.1073969566 * b
    s_ = 0.0883024619 * r + 0.2817188376 * g + 0.6299787005 * b
    l3, m3, s3 = (math.copysign(abs(v) ** (1 / 3), v) for v in (l_, m_, s_))
    lightness = 0.2104542553 * l3 + 0.7936177850 * m3 - 0.0040720468 * s3
    a = 1.9779984951 * l3 - 2.4285922050 * m3 + 0.4505937099 * s3
    bk = 0.0259040371 * l3 + 0.7827717662 * m3 - 0.8086757660 * s3
    chroma, hue = _polar(a, bk)
    return lightness, chroma, hue


def hex_to_lch(value: str) -> Tuple[float, float, float]:
    """CIE LCh (D65) of an sRGB hex colour."""

    r, g, b = _linear_rgb(value)
    x = 0.4124564 * r + 0.3575761 * g + 0.1804375 * b
    y = 0.2126729 * r + 0.7151522 * g + 0.0721750 * b
    z = 0.0193339 * r + 0.1191920 * g + 0.9503041 * b

    def f(t: float) -> float:
        return t ** (1 / 3) if t > 0.008856 else 7.787 * t + 16 / 116

    fx, fy, fz = f(x / 0.95047), f(y / 1.0), f(z / 1.08883)
    lightness = 116 * fy - 16
    chroma, hue = _polar(500 * (fx - fy), 200 * (fy - fz))
    return lightness, chroma, hue


def hex_to_hsl(value: str) -> str:
    """Return the unitless HSL triple used by ``--shadow-color``, e.g. ``260deg 60% 12%``."""

    r, g, b = parse_hex(value)
    h, l, s = colorsys.rgb_to_hls(r / 255, g / 255, b / 255)
    hue = int(round_half_up(h * 360))
    sat = int(round_half_up(s * 100))
    light = int(round_half_up(l * 100))
    return f"{hue}deg {sat}% {light}%"


def format_color(value: str, color_format: str) -> str:
    """Render a hex colour as CSS in the requested format."""

    if color_format == "hex":
        parse_hex(value)
        return value
    if color_format == "rgb":
        r, g, b = parse_hex(value)
        return f"rgb({r}, {g}, {b})"
    if color_format == "lch":
        lightness, chroma, hue = hex_to_lch(value)
        return f"lch({lightness:.1f}% {chroma:.1f} {hue:.1f})"
    if color_format == "oklch":
        lightness, chroma, hue = hex_to_oklch(value)
        return f"oklch({lightness * 100:.1f}% {chroma:.3f} {hue:.1f})"
    raise ValueError(f"Unsupported colour format '{color_format}'")


def hex_to_dtcg_color(value: str, alpha: float, color_format: str) -> Dict[str, Any]:
    """Build a DTCG colour value with the layer alpha folded in."""

    components: List[float]
    if color_format == "oklch":
        color_space = "oklch"
        components = [round(c, 4) for c in hex_to_oklch(value)]
    elif color_format == "lch":
        color_space = "lch"
        components = [round(c, 2) for c in hex_to_lch(value)]
    elif color_format in ("hex", "rgb"):
        color_space = "srgb"
        components = [round(c / 255, 4) for c in parse_hex(value)]
    else:
        raise ValueError(f"Unsupported colour format '{color_format}'")
    return {
        "colorSpace": color_space,
        "components": components,
        "alpha": alpha,
        "hex": value.lower(),
    }


__all__ = [
    "COLOR_FORMATS",
    "ColorFormat",
    "format_color",
    "hex_to_dtcg_color",
    "hex_to_hsl",
    "hex_to_lch",
    "hex_to_oklch",
    "is_hex_color",
    "parse_hex",
]
