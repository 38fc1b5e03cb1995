import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

from elevation_designer.config import get_settings
from elevation_designer.main import create_app


@pytest.fixture(autouse=True)
def configure_settings(monkeypatch):
    monkeypatch.setenv("CACHE_CAPACITY", "16")
    monkeypatch.setenv("DEFAULT_COLOR_FORMAT", "rgb")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def client():
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


SCENARIO = {
    "depth": 0.15,
    "lightX": 0.24,
    "lightY": 0.64,
    "intensity": 0.64,
    "hardness": 0.8,
    "layerCount": 7,
}


def test_health_endpoint(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_settings_reach_the_engine(client):
    assert client.app.state.engine.cache_capacity == 16


def test_unknown_default_color_format_fails_at_startup(monkeypatch):
    monkeypatch.setenv("DEFAULT_COLOR_FORMAT", "cmyk")
    get_settings.cache_clear()
    with pytest.raises(ValidationError):
        create_app()


def test_curve_presets(client):
    response = client.get("/api/curves/presets")
    assert response.status_code == 200
    presets = response.json()
    assert presets[0] == {"label": "Linear", "points": []}
    assert {"Ease In", "S-Curve", "Steps"} <= {preset["label"] for preset in presets}


def test_single_preset_lookup(client):
    response = client.get("/api/curves/presets/Late Bloom")
    assert response.status_code == 200
    assert response.json()["points"] == [{"x": 0.6, "y": 0.1}, {"x": 0.8, "y": 0.5}]

    missing = client.get("/api/curves/presets/Wobble")
    assert missing.status_code == 404


def test_curve_evaluation_matches_knots(client):
    response = client.post(
        "/api/curves/evaluate",
        json={"curve": {"points": [{"x": 0.4, "y": 0.1}, {"x": 0.7, "y": 0.3}]}, "xs": [0, 0.4, 1]},
    )
    assert response.status_code == 200
    assert response.json() == {"values": [0.0, 0.1, 1.0]}


def test_curve_evaluation_without_curve_is_identity(client):
    response = client.post("/api/curves/evaluate", json={"xs": [0.25, 0.5]})
    assert response.json() == {"values": [0.25, 0.5]}


def test_shadow_layers(client):
    response = client.post("/api/shadow/layers", json=SCENARIO)
    assert response.status_code == 200
    layers = response.json()
    assert len(layers) == 7
    assert set(layers[0]) == {"offsetX", "offsetY", "blur", "spread", "alpha", "isAccent"}
    assert layers[0]["isAccent"] is False
    assert layers[-1]["isAccent"] is True


def test_shadow_stack_is_stable(client):
    first = client.post("/api/shadow/stack", json=SCENARIO).json()["css"]
    reordered = dict(reversed(list(SCENARIO.items())))
    second = client.post("/api/shadow/stack", json=reordered).json()["css"]
    assert first == second
    assert len(first.split(",\n    ")) == 7


def test_shadow_stack_tolerates_bad_input(client):
    response = client.post("/api/shadow/stack", json={"depth": "high", "lightY": None, "layerCount": -4})
    assert response.status_code == 200
    assert response.json()["css"].count("hsl(") == 3


def test_shadow_stack_accepts_oversized_integers(client):
    response = client.post("/api/shadow/stack", json={"depth": 10**400, "layerCount": 4})
    assert response.status_code == 200
    assert response.json()["css"].count("hsl(") == 4


def test_zero_stack(client):
    response = client.get("/api/shadow/zero", params={"layer_count": 4})
    assert response.status_code == 200
    assert len(response.json()["css"].split(",\n    ")) == 5
    default = client.get("/api/shadow/zero").json()["css"]
    assert len(default.split(",\n    ")) == 6


def test_css_vars_endpoint(client):
    tokens = {
        "elevation_new": {
            "shadow": {"light": {"x": {"$value": 0}, "y": {"$value": 1}}, "color": {"hsl": {"$value": "0deg 0% 0%"}}},
            "elevation": {"sm": {"depth": {"$value": 0.1}}},
        }
    }
    response = client.post("/api/tokens/css-vars", json=tokens)
    assert response.status_code == 200
    lines = response.json()["lines"]
    assert lines[:2] == ["  --shadow-color: 0deg 0% 0%;", "  --shadow-elevation-sm:"]


def test_default_palette_round_trips_into_css(client):
    palette = client.get("/api/palette/default").json()
    assert len(palette["elevations"]) == 8
    assert palette["elevations"][0] == {
        "name": "surface",
        "depth": 0.15,
        "zIndex": 1,
        "layerCount": None,
        "interactionStates": None,
        "enabledStates": {},
    }
    response = client.post("/api/palette/css", json=palette)
    assert response.status_code == 200
    css = response.json()["css"]
    assert css.startswith(":root {")
    assert "--shadow-elevation-modal:" in css


def test_palette_tokens_color_format(client):
    palette = client.get("/api/palette/default").json()

    explicit = client.post("/api/palette/tokens", json=palette).json()
    assert explicit["elevation"]["raised"]["$value"][0]["color"]["colorSpace"] == "oklch"

    palette.pop("colorFormat")
    fallback = client.post("/api/palette/tokens", json=palette).json()
    assert fallback["elevation"]["raised"]["$value"][0]["color"]["colorSpace"] == "srgb"

    bad = client.post("/api/palette/tokens", params={"color_format": "cmyk"}, json=palette)
    assert bad.status_code == 400


def test_palette_rejects_invalid_colour(client):
    palette = client.get("/api/palette/default").json()
    palette["shadowColorHex"] = "not-a-colour"
    response = client.post("/api/palette/css", json=palette)
    assert response.status_code == 422
