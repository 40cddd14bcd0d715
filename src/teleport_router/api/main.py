"""FastAPI application entrypoint."""
from __future__ import annotations

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from teleport_router.api.endpoints import router as route_router
from teleport_router.core.config import RouterConfig
from teleport_router.data.dataset import FeatureProvider


def create_app(
    config: Optional[RouterConfig] = None,
    provider: Optional[FeatureProvider] = None,
) -> FastAPI:
    """Build the app; a missing config or provider is resolved lazily per request."""
    app = FastAPI(title="Teleport Router")
    app.state.config = config
    app.state.provider = provider

    # Enable CORS for all origins (adjust in production)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(route_router)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
