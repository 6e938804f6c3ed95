"""
Streamlit-cached access to the vinyl collection.

The collection is fetched once per cache window and shared across reruns; every
toggle change re-derives the view from the cached records without refetching.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import streamlit as st

from vinyl.core.records import AlbumRecord
from vinyl.io import ChartSettings, load_albums

__all__ = [
    "CacheConfig",
    "load_collection",
    "clear_collection_cache",
]

# ---------- Cache configuration (factory of cached callables) ----------


@dataclass(frozen=True)
class CacheConfig:
    """Hashable cache configuration for Streamlit @st.cache_data.

    Note: Streamlit's decorator parameters (ttl, persist) are fixed at decoration
    time. We build and memoize decorated callables per (name, ttl, persist) so the
    app can switch these at runtime while still benefiting from caching.
    """

    ttl: int | None = None
    persist: bool = False


# Registry of decorated functions by (loader_name, CacheConfig)
_CACHE_REGISTRY: dict[tuple[str, CacheConfig], Callable[..., Any]] = {}


def _get_cached(loader_name: str, cfg: CacheConfig, fn: Callable[..., Any]) -> Callable[..., Any]:
    key = (loader_name, cfg)
    if key in _CACHE_REGISTRY:
        return _CACHE_REGISTRY[key]
    if cfg.persist:
        wrapped = st.cache_data(persist="disk", ttl=cfg.ttl)(fn)
    else:
        wrapped = st.cache_data(ttl=cfg.ttl)(fn)
    _CACHE_REGISTRY[key] = wrapped
    return wrapped


# ---------- Loaders ----------


def _load_collection_impl(
    source: str, delimiter: str, timeout: float | None
) -> list[AlbumRecord] | None:
    settings = ChartSettings(source_url=source, delimiter=delimiter, request_timeout=timeout)
    return load_albums(source, settings=settings)


def load_collection(
    settings: ChartSettings, *, cfg: CacheConfig = CacheConfig()
) -> list[AlbumRecord] | None:
    """Return the collection for settings.source_url, or None when it is unavailable."""
    fn = _get_cached("load_collection", cfg, _load_collection_impl)
    out = fn(settings.source_url, settings.delimiter, settings.request_timeout)
    return out  # type: ignore[no-any-return]


def clear_collection_cache() -> None:
    """Drop cached collections so the next render refetches the source."""
    for fn in _CACHE_REGISTRY.values():
        fn.clear()  # type: ignore[attr-defined]
