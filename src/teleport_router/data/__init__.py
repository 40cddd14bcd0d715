"""Dataset access and GeoJSON feature parsing."""

from teleport_router.data.dataset import (  # noqa: F401
    DatasetProvider,
    FeatureProvider,
    StaticFeatureProvider,
)
from teleport_router.data.features import LineFeature, parse_features  # noqa: F401
