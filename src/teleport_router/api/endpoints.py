"""API routers."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from teleport_router.api.dependencies import get_config, get_route_service
from teleport_router.api.schemas import ConfigResponse, RouteRequest, RouteResponse
from teleport_router.core.config import RouterConfig
from teleport_router.core.geometry import Point3
from teleport_router.core.transform import HudFrame
from teleport_router.routing.service import RouteOutcome, RouteService


router = APIRouter()


@router.post("/route", response_model=RouteResponse)
def route(request: RouteRequest, service: RouteService = Depends(get_route_service)) -> RouteResponse:
    x, y, z = request.agent
    goal_x, goal_z = request.goal
    if request.frame == "world":
        outcome = service.find_route_world(x, y, z, goal_x, goal_z)
    else:
        outcome = service.find_route(Point3(x, y, z), goal_x, goal_z)
    frame = service.frame if request.frame == "world" else None
    return _to_response(outcome, frame)


@router.get("/config", response_model=ConfigResponse)
def config(cfg: RouterConfig = Depends(get_config)) -> ConfigResponse:
    return ConfigResponse(
        walk_radius=cfg.walk.radius,
        direct_threshold=cfg.walk.direct_threshold,
        teleport_weight=cfg.teleport.weight,
        remote_url=cfg.dataset.remote_url,
        ttl_hours=cfg.dataset.ttl_hours,
    )


def _to_response(outcome: RouteOutcome, frame: Optional[HudFrame]) -> RouteResponse:
    route = outcome.route
    if route is None:
        return RouteResponse(
            found=False,
            reason_code=outcome.reason_code,
            message=outcome.message,
            warnings=outcome.warnings,
        )
    points = route.to_world(frame) if frame is not None else route.waypoints
    return RouteResponse(
        found=outcome.found,
        reason_code=outcome.reason_code,
        message=outcome.message,
        waypoints=[(p.x, p.y, p.z) for p in points],
        teleport_flags=route.teleport_flags,
        total_seconds=route.total_seconds,
        walk_seconds=route.walk_seconds,
        teleport_hops=route.teleport_hops,
        direct=route.direct,
        warnings=route.warnings,
    )
