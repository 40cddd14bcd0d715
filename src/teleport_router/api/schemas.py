"""API request and response models."""
from __future__ import annotations

from typing import List, Literal, Optional, Tuple
from pydantic import BaseModel, Field


class RouteRequest(BaseModel):
    agent: Tuple[float, float, float] = Field(..., description="(x, y, z) agent position; y is elevation")
    goal: Tuple[float, float] = Field(..., description="(x, z) destination on the HUD plane")
    frame: Literal["hud", "world"] = Field("hud", description="Coordinate frame of the agent position and of returned waypoints")


class RouteResponse(BaseModel):
    found: bool
    reason_code: Optional[str] = None
    message: str = ""
    waypoints: List[Tuple[float, float, float]] = []
    teleport_flags: List[bool] = []
    total_seconds: float = 0.0
    walk_seconds: float = 0.0
    teleport_hops: int = 0
    direct: bool = False
    warnings: List[str] = []


class ConfigResponse(BaseModel):
    walk_radius: float
    direct_threshold: float
    teleport_weight: float
    remote_url: str
    ttl_hours: int
