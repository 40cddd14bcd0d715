"""Teleporter link features parsed from a GeoJSON FeatureCollection."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from numbers import Real
from typing import Any, Optional, Sequence, Tuple

from shapely.errors import GEOSException, GeometryTypeError
from shapely.geometry import LineString, shape

from teleport_router.core.errors import MalformedFeatureError, SchemaInvalidError

logger = logging.getLogger(__name__)

COLLECTION_TYPE = "FeatureCollection"
START_ELEVATION_KEY = "depth1"
END_ELEVATION_KEY = "depth2"


@dataclass(frozen=True)
class LineFeature:
    """One teleporter pair: raw map endpoints plus their world elevations."""

    start_raw: Tuple[float, float]
    end_raw: Tuple[float, float]
    start_elevation: float = 0.0
    end_elevation: float = 0.0


def validate_collection(data: Any) -> Sequence[Any]:
    """Check the top-level structure and return the raw feature list."""
    if not isinstance(data, dict):
        raise SchemaInvalidError("Invalid GeoJSON: top level is not an object")
    if data.get("type") != COLLECTION_TYPE:
        raise SchemaInvalidError(
            f"Invalid GeoJSON: expected type {COLLECTION_TYPE!r}, got {data.get('type')!r}",
            details={"type": data.get("type")},
        )
    features = data.get("features")
    if not isinstance(features, list):
        raise SchemaInvalidError("Invalid GeoJSON: 'features' must be a list")
    return features


def parse_features(data: Any) -> list[LineFeature]:
    """Parse every usable LineString feature, skipping malformed ones."""
    raw_features = validate_collection(data)
    parsed: list[LineFeature] = []
    skipped = 0
    for idx, feat in enumerate(raw_features):
        try:
            parsed.append(parse_feature(feat))
        except MalformedFeatureError as exc:
            skipped += 1
            logger.debug("[DATA] skipping feature %d: %s", idx, exc)
    if skipped:
        logger.info("[DATA] parsed %d line features, skipped %d", len(parsed), skipped)
    return parsed


def parse_feature(feature: Any) -> LineFeature:
    if not isinstance(feature, dict):
        raise MalformedFeatureError("feature is not an object")
    geom_data = feature.get("geometry")
    if not isinstance(geom_data, dict) or geom_data.get("type") != "LineString":
        raise MalformedFeatureError("geometry is not a LineString")
    try:
        geom = shape(geom_data)
    except (GEOSException, GeometryTypeError, ValueError, TypeError, KeyError, IndexError, OverflowError) as exc:
        raise MalformedFeatureError(f"unreadable geometry: {exc}") from exc
    if not isinstance(geom, LineString) or geom.is_empty:
        raise MalformedFeatureError("empty LineString")
    coords = list(geom.coords)
    if len(coords) < 2:
        raise MalformedFeatureError("LineString has fewer than two coordinates")
    try:
        sx, sy = float(coords[0][0]), float(coords[0][1])
        ex, ey = float(coords[-1][0]), float(coords[-1][1])
    except (OverflowError, TypeError, ValueError) as exc:
        raise MalformedFeatureError(f"unreadable endpoint coordinates: {exc}") from exc
    if not all(math.isfinite(v) for v in (sx, sy, ex, ey)):
        raise MalformedFeatureError("non-finite endpoint coordinates")

    props = feature.get("properties")
    if not isinstance(props, dict):
        props = {}
    return LineFeature(
        start_raw=(sx, sy),
        end_raw=(ex, ey),
        start_elevation=_get_elevation(props, START_ELEVATION_KEY),
        end_elevation=_get_elevation(props, END_ELEVATION_KEY),
    )


def _get_elevation(props: dict, key: str) -> float:
    value: Optional[Any] = props.get(key)
    if isinstance(value, bool) or not isinstance(value, Real):
        return 0.0
    try:
        value = float(value)
    except OverflowError:
        return 0.0
    return value if math.isfinite(value) else 0.0
