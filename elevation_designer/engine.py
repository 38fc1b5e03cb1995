"""Shadow engine instances and the public ``build_*`` entry points."""
from __future__ import annotations

import logging
import threading
from dataclasses import asdict
from typing import Any, Callable, Mapping, Optional, Tuple, Union

from .cache import DEFAULT_CAPACITY, BoundedCache, stable_key
from .numeric import clamp, is_finite_number, is_real_number, round_half_up
from .params import MAX_LAYERS, MIN_LAYERS, NormalizedParams, ShadowCurves, ShadowParams, coerce_params, normalize
from .serialize import layers_to_css, zero_stack_to_css
from .synthesis import ShadowLayer, synthesize

logger = logging.getLogger(__name__)

DEFAULT_ZERO_LAYERS = 5

Layers = Tuple[ShadowLayer, ...]
Synthesizer = Callable[[NormalizedParams, Optional[ShadowCurves]], Layers]
ParamsLike = Union[ShadowParams, Mapping[str, Any]]


def zero_layer_count(layer_count: Optional[float] = None) -> int:
    if is_finite_number(layer_count):
        return int(clamp(MIN_LAYERS, MAX_LAYERS, round_half_up(layer_count)))
    # infinities and overflowing ints clamp; NaN and non-numbers take the default
    if is_real_number(layer_count) and (layer_count > 0 or layer_count < 0):
        return MAX_LAYERS if layer_count > 0 else MIN_LAYERS
    return DEFAULT_ZERO_LAYERS


def build_zero_layers(layer_count: Optional[float] = None) -> Layers:
    """All-transparent stack used as the "no shadow" end of a transition.

    A leading accent marker is followed by ``layer_count`` zero layers so the
    term count matches a real stack plus its marker.
    """

    marker = ShadowLayer(offset_x=0, offset_y=0, blur=0, spread=0, alpha=0, is_accent=True)
    zero = ShadowLayer(offset_x=0, offset_y=0, blur=0, spread=0, alpha=0, is_accent=False)
    return (marker,) + (zero,) * zero_layer_count(layer_count)


def cache_key(normalized: NormalizedParams, curves: Optional[ShadowCurves]) -> str:
    return stable_key(
        {
            "params": asdict(normalized),
            "curves": curves.model_dump() if curves is not None else None,
        }
    )


class ShadowEngine:
    """Owns a synthesizer and the caches that sit in front of it.

    Caches are per instance.
    """

    def __init__(self, cache_capacity: int = DEFAULT_CAPACITY, synthesizer: Synthesizer = synthesize) -> None:
        self._synthesize = synthesizer
        self._layers_cache: BoundedCache[Layers] = BoundedCache(cache_capacity)
        self._stack_cache: BoundedCache[str] = BoundedCache(cache_capacity)

    @property
    def cache_capacity(self) -> int:
        return self._layers_cache.capacity

    def _prepare(self, params: ParamsLike) -> Tuple[str, NormalizedParams, Optional[ShadowCurves]]:
        model = coerce_params(params)
        normalized = normalize(model)
        return cache_key(normalized, model.curves), normalized, model.curves

    def _layers(self, key: str, normalized: NormalizedParams, curves: Optional[ShadowCurves]) -> Layers:
        cached = self._layers_cache.get(key)
        if cached is not None:
            return cached
        layers = self._synthesize(normalized, curves)
        self._layers_cache.put(key, layers)
        return layers

    def build_shadow_layers(self, params: ParamsLike) -> Layers:
        """Return the structured layer stack for ``params``."""

        return self._layers(*self._prepare(params))

    def build_shadow_stack(self, params: ParamsLike) -> str:
        """Return the CSS ``box-shadow`` value for ``params``."""

        key, normalized, curves = self._prepare(params)
        cached = self._stack_cache.get(key)
        if cached is not None:
            return cached
        css = layers_to_css(self._layers(key, normalized, curves))
        self._stack_cache.put(key, css)
        return css

    def build_zero_shadow_stack(self, layer_count: Optional[float] = None) -> str:
        return zero_stack_to_css(zero_layer_count(layer_count))

    def clear_cache(self) -> None:
        self._layers_cache.clear()
        self._stack_cache.clear()


_default_engine: Optional[ShadowEngine] = None
_default_lock = threading.Lock()


def get_default_engine() -> ShadowEngine:
    """Return the lazily created process-wide engine behind the module helpers."""

    global _default_engine
    with _default_lock:
        if _default_engine is None:
            _default_engine = ShadowEngine()
            logger.debug("Created default shadow engine")
        return _default_engine


def build_shadow_layers(params: ParamsLike) -> Layers:
    return get_default_engine().build_shadow_layers(params)


def build_shadow_stack(params: ParamsLike) -> str:
    return get_default_engine().build_shadow_stack(params)


def build_zero_shadow_stack(layer_count: Optional[float] = None) -> str:
    return get_default_engine().build_zero_shadow_stack(layer_count)


__all__ = [
    "ShadowEngine",
    "build_shadow_layers",
    "build_shadow_stack",
    "build_zero_layers",
    "build_zero_shadow_stack",
    "cache_key",
    "get_default_engine",
    "zero_layer_count",
]
