"""Dependency wiring for the API service."""
from __future__ import annotations

from functools import lru_cache

from fastapi import Request

from teleport_router.core.config import RouterConfig, load_config
from teleport_router.data.dataset import DatasetProvider, FeatureProvider
from teleport_router.routing.service import RouteService


@lru_cache(maxsize=1)
def get_default_config() -> RouterConfig:
    """Load configs/router_defaults.yaml once, on first use."""
    return load_config()


@lru_cache(maxsize=1)
def get_default_provider() -> FeatureProvider:
    return DatasetProvider(get_default_config().dataset)


def get_config(request: Request) -> RouterConfig:
    config = request.app.state.config
    return config if config is not None else get_default_config()


def get_provider(request: Request) -> FeatureProvider:
    provider = request.app.state.provider
    if provider is not None:
        return provider
    if request.app.state.config is not None:
        return DatasetProvider(request.app.state.config.dataset)
    return get_default_provider()


def get_route_service(request: Request) -> RouteService:
    return RouteService(config=get_config(request), provider=get_provider(request))
