"""FastAPI application exposing the shadow engine to the designer front end."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import Body, Depends, FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .colors import COLOR_FORMATS
from .config import Settings, configure_logging, get_settings
from .curves import evaluate_curve, parse_curve
from .engine import ShadowEngine
from .params import ShadowParams
from .presets import CURVE_PRESETS, get_preset
from .tokens import Palette, build_shadow_css_vars, default_palette, format_css_output, format_token_json

logger = logging.getLogger(__name__)


class EvaluateRequest(BaseModel):
    """Curve (in any persisted shape) and the x positions to sample it at."""

    curve: Any = None
    xs: List[float] = Field(default_factory=list, max_length=1024)


def _create_lifespan(settings: Settings):
    """Create an application lifespan manager bound to the provided settings."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.engine = ShadowEngine(cache_capacity=settings.cache_capacity)
        logger.info("Shadow engine ready (cache capacity %d)", settings.cache_capacity)
        yield
        app.state.engine.clear_cache()

    return lifespan


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Instantiate the FastAPI application with the given settings."""

    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Elevation Designer",
        version="0.1.0",
        lifespan=_create_lifespan(settings),
    )
    app.state.settings = settings
    app.dependency_overrides[get_settings] = lambda: settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    def engine() -> ShadowEngine:
        return app.state.engine

    @app.get("/api/health")
    async def health() -> Dict[str, Any]:
        return {"status": "ok"}

    @app.get("/api/curves/presets")
    async def presets() -> Response:
        return JSONResponse(content=CURVE_PRESETS)

    @app.get("/api/curves/presets/{label}")
    async def preset(label: str) -> Response:
        found = get_preset(label)
        if found is None:
            raise HTTPException(status_code=404, detail=f"Unknown curve preset '{label}'")
        return JSONResponse(content=found)

    @app.post("/api/curves/evaluate")
    def evaluate(request: EvaluateRequest) -> Dict[str, Any]:
        curve = parse_curve(request.curve)
        return {"values": [evaluate_curve(curve, x) for x in request.xs]}

    @app.post("/api/shadow/layers")
    def shadow_layers(params: ShadowParams) -> Response:
        layers = engine().build_shadow_layers(params)
        return JSONResponse(content=[layer.model_dump(by_alias=True) for layer in layers])

    @app.post("/api/shadow/stack")
    def shadow_stack(params: ShadowParams) -> Dict[str, Any]:
        return {"css": engine().build_shadow_stack(params)}

    @app.get("/api/shadow/zero")
    def shadow_zero(layer_count: Optional[float] = None) -> Dict[str, Any]:
        return {"css": engine().build_zero_shadow_stack(layer_count)}

    @app.post("/api/tokens/css-vars")
    def css_vars(tokens: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
        return {"lines": build_shadow_css_vars(tokens, engine())}

    @app.get("/api/palette/default")
    async def palette_default() -> Response:
        return JSONResponse(content=default_palette().model_dump(mode="json", by_alias=True))

    @app.post("/api/palette/css")
    def palette_css(palette: Palette) -> Dict[str, Any]:
        return {"css": format_css_output(palette, engine())}

    @app.post("/api/palette/tokens")
    def palette_tokens(
        palette: Palette,
        color_format: Optional[str] = None,
        current_settings: Settings = Depends(get_settings),
    ) -> Response:
        if color_format is None:
            explicit = "color_format" in palette.model_fields_set
            color_format = palette.color_format if explicit else current_settings.default_color_format
        if color_format not in COLOR_FORMATS:
            raise HTTPException(status_code=400, detail=f"Unsupported colour format '{color_format}'")
        return JSONResponse(content=format_token_json(palette, engine(), color_format))

    return app


app = create_app()
