"""Error kinds raised by the data and routing layers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class RouteError(Exception):
    reason_code: str
    message: str
    details: dict[str, Any] | None = None

    def __str__(self) -> str:
        return self.message


class DataUnavailableError(RouteError):
    """The dataset could not be fetched and no fresh local copy exists."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__("data_unavailable", message, details)


class SchemaInvalidError(RouteError):
    """Top-level dataset structure is not a GeoJSON FeatureCollection."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__("schema_invalid", message, details)


class MalformedFeatureError(RouteError):
    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__("malformed_feature", message, details)
