"""Configuration loader and dataclasses for teleport router settings."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Optional
import yaml


MIN_WALK_RADIUS = 1.0
MAX_WALK_RADIUS = 50000.0


@dataclass
class TransformConfig:
    """GeoJSON map coordinates to HUD plane."""
    scale_x: float = 1.0
    scale_y: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0
    swap_axes: bool = False
    flip_x: bool = False
    flip_y: bool = False


@dataclass
class WalkCosts:
    """Walking time constants."""
    seconds_per_unit: float = 0.12
    vertical_unit: float = 30.0
    ascend_seconds: float = 15.0
    descend_seconds: float = 8.0


@dataclass
class WalkConfig:
    """Walking mesh configuration."""
    radius: float = 3000.0
    direct_threshold: float = 150.0
    costs: WalkCosts = field(default_factory=WalkCosts)

    def __post_init__(self) -> None:
        self.radius = clamp_walk_radius(self.radius)


@dataclass
class TeleportConfig:
    """Teleport link configuration."""
    weight: float = 3.0
    # consecutive waypoints this close are treated as a teleport hop when the
    # flags have to be rebuilt from geometry
    fallback_hop_distance: float = 1.5


@dataclass
class DatasetConfig:
    """Remote dataset and local cache configuration."""
    remote_url: str = "https://map.tops.vintagestory.at/data/geojson/translocators.geojson"
    ttl_hours: int = 24
    data_dir: str = "data"
    filename: str = "translocators.geojson"
    timeout_s: float = 30.0

    @property
    def cache_path(self) -> Path:
        return Path(self.data_dir) / self.filename


@dataclass
class FrameConfig:
    """World spawn point; HUD coordinates are relative to it."""
    spawn_x: float = 0.0
    spawn_z: float = 0.0


@dataclass
class RouterConfig:
    """Complete router configuration."""
    transform: TransformConfig = field(default_factory=TransformConfig)
    walk: WalkConfig = field(default_factory=WalkConfig)
    teleport: TeleportConfig = field(default_factory=TeleportConfig)
    dataset: DatasetConfig = field(default_factory=DatasetConfig)
    frame: FrameConfig = field(default_factory=FrameConfig)

    @classmethod
    def from_dict(cls, data: dict) -> "RouterConfig":
        walk = dict(data.get("walk", {}) or {})
        costs = WalkCosts(**(walk.pop("costs", {}) or {}))
        return cls(
            transform=TransformConfig(**(data.get("transform", {}) or {})),
            walk=WalkConfig(costs=costs, **walk),
            teleport=TeleportConfig(**(data.get("teleport", {}) or {})),
            dataset=DatasetConfig(**(data.get("dataset", {}) or {})),
            frame=FrameConfig(**(data.get("frame", {}) or {})),
        )

    @classmethod
    def from_yaml(cls, path: Path) -> "RouterConfig":
        """Load configuration from a YAML file."""
        with open(path, 'r', encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: Path) -> None:
        """Write configuration to a YAML file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding="utf-8") as f:
            yaml.safe_dump(self.to_dict(), f, sort_keys=False)


def clamp_walk_radius(radius: float) -> float:
    return min(max(float(radius), MIN_WALK_RADIUS), MAX_WALK_RADIUS)


def default_config_path() -> Path:
    """configs/router_defaults.yaml relative to the project root."""
    return Path(__file__).resolve().parents[3] / "configs" / "router_defaults.yaml"


def load_config(config_path: Optional[Path] = None) -> RouterConfig:
    """Load a configuration, falling back to defaults when no file exists.

    Args:
        config_path: Path to the config file. If None, uses the default location.

    Returns:
        A fresh RouterConfig instance.
    """
    if config_path is None:
        config_path = default_config_path()
    if config_path.exists():
        return RouterConfig.from_yaml(config_path)
    return RouterConfig()
