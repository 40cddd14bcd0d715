"""Coordinate conversion between GeoJSON map space, the HUD plane and world space."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from teleport_router.core.config import FrameConfig, TransformConfig
from teleport_router.core.geometry import Point3


@dataclass(frozen=True)
class MapTransform:
    """Map (mx, my) to HUD plane (x, z).

    Steps run in a fixed order: invert map Y, optional axis swap, optional
    flips, then per-axis scale and offset.
    """

    scale_x: float = 1.0
    scale_y: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0
    swap_axes: bool = False
    flip_x: bool = False
    flip_y: bool = False

    @classmethod
    def from_config(cls, config: TransformConfig) -> "MapTransform":
        return cls(
            scale_x=float(config.scale_x),
            scale_y=float(config.scale_y),
            offset_x=float(config.offset_x),
            offset_y=float(config.offset_y),
            swap_axes=bool(config.swap_axes),
            flip_x=bool(config.flip_x),
            flip_y=bool(config.flip_y),
        )

    def apply(self, mx: float, my: float) -> Tuple[float, float]:
        x, y = mx, -my
        if self.swap_axes:
            x, y = y, x
        if self.flip_x:
            x = -x
        if self.flip_y:
            y = -y
        x = x * self.scale_x + self.offset_x
        y = y * self.scale_y + self.offset_y
        return x, y

    def to_point(self, mx: float, my: float, elevation: float) -> Point3:
        x, z = self.apply(mx, my)
        return Point3(x, float(elevation), z)


@dataclass(frozen=True)
class HudFrame:
    """HUD coordinates are world coordinates relative to the spawn point."""

    spawn_x: float = 0.0
    spawn_z: float = 0.0

    @classmethod
    def from_config(cls, config: FrameConfig) -> "HudFrame":
        return cls(spawn_x=float(config.spawn_x), spawn_z=float(config.spawn_z))

    def world_to_hud(self, x: float, y: float, z: float) -> Point3:
        return Point3(x - self.spawn_x, y, z - self.spawn_z)

    def hud_to_world(self, point: Point3) -> Point3:
        return Point3(point.x + self.spawn_x, point.y, point.z + self.spawn_z)
