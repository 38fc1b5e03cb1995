import re

import pytest

from elevation_designer.serialize import (
    ZERO_LAYER_TERM,
    ZERO_MARKER_TERM,
    format_alpha,
    format_px,
    layer_to_css,
    layers_to_css,
    layers_to_dtcg,
    zero_stack_to_css,
)
from elevation_designer.synthesis import ShadowLayer


def make_layer(**overrides):
    values = dict(offset_x=0.0, offset_y=0.0, blur=0.0, spread=0.0, alpha=0.0, is_accent=False)
    values.update(overrides)
    return ShadowLayer(**values)


@pytest.mark.parametrize(
    "value, expected",
    [
        (0.0, "0px"),
        (-0.0, "0px"),
        (1.005, "1px"),
        (0.125, "0.13px"),
        (1.5, "1.5px"),
        (-0.5, "-0.5px"),
        (1.999, "2px"),
        (2.1, "2.1px"),
        (12.0, "12px"),
        (100.04, "100px"),
        (-3.25, "-3.2px"),
        (47.35, "47.4px"),
    ],
)
def test_format_px(value, expected):
    assert format_px(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [(0.0, "0"), (1.0, "1"), (0.22, "0.22"), (0.5, "0.5"), (0.1234, "0.123"), (0.0005, "0.001")],
)
def test_format_alpha(value, expected):
    assert format_alpha(value) == expected


def test_single_layer_without_spread():
    layer = make_layer(offset_x=1.005, offset_y=0.0, blur=2.1, spread=0.0, alpha=0.22)
    css = layers_to_css([layer])
    assert re.fullmatch(r"[-\d.]+px [-\d.]+px [\d.]+px hsl\(var\(--shadow-color\) / [\d.]+\)", css)
    assert css == "1px 0px 2.1px hsl(var(--shadow-color) / 0.22)"


def test_spread_term_threshold():
    assert "0.04" not in layer_to_css(make_layer(spread=-0.04, blur=3.0, alpha=0.1))
    assert layer_to_css(make_layer(spread=-0.5, blur=3.0, alpha=0.1)) == (
        "0px 0px 3px -0.5px hsl(var(--shadow-color) / 0.1)"
    )


def test_accent_layers_fall_back_to_base_color():
    css = layer_to_css(make_layer(offset_y=4.0, blur=8.4, alpha=0.3, is_accent=True))
    assert css == "0px 4px 8.4px hsl(var(--shadow-accent, var(--shadow-color)) / 0.3)"


def test_layers_joined_with_indented_newlines():
    css = layers_to_css([make_layer(alpha=0.1), make_layer(offset_y=2.5, alpha=0.2)])
    assert css.split(",\n    ") == [
        "0px 0px 0px hsl(var(--shadow-color) / 0.1)",
        "0px 2.5px 0px hsl(var(--shadow-color) / 0.2)",
    ]


def test_empty_stack_is_none():
    assert layers_to_css([]) == "none"


def test_zero_stack_terms():
    css = zero_stack_to_css(3)
    terms = css.split(",\n    ")
    assert terms == [ZERO_MARKER_TERM, ZERO_LAYER_TERM, ZERO_LAYER_TERM, ZERO_LAYER_TERM]
    assert terms[0] == "0px 0px 0px hsl(var(--shadow-accent, var(--shadow-color)) / 0)"
    assert terms[1] == "0px 0px 0px 0px hsl(var(--shadow-color) / 0)"


def test_dtcg_value_structure():
    layers = [
        make_layer(offset_x=0.5, offset_y=1.0, blur=2.1, alpha=0.4),
        make_layer(offset_x=3.0, offset_y=9.0, blur=12.5, spread=-2.0, alpha=0.2, is_accent=True),
    ]
    value = layers_to_dtcg(layers, "#482901", "#C850C0", "hex")
    assert len(value) == 2
    assert value[0]["offsetX"] == {"value": 0.5, "unit": "px"}
    assert value[1]["spread"] == {"value": -2.0, "unit": "px"}
    assert value[1]["blur"] == {"value": 12.5, "unit": "px"}
    assert value[0]["color"]["hex"] == "#482901"
    assert value[1]["color"]["hex"] == "#c850c0"
    assert value[0]["color"]["alpha"] == 0.4
    assert value[0]["color"]["colorSpace"] == "srgb"


def test_dtcg_accent_without_override_uses_base():
    value = layers_to_dtcg([make_layer(alpha=0.2, is_accent=True)], "#482901", None, "oklch")
    assert value[0]["color"]["hex"] == "#482901"
    assert value[0]["color"]["colorSpace"] == "oklch"
    assert len(value[0]["color"]["components"]) == 3


def test_dtcg_rejects_unknown_format():
    with pytest.raises(ValueError):
        layers_to_dtcg([make_layer()], "#482901", None, "cmyk")
