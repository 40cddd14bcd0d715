from __future__ import annotations

import pytest

from teleport_router.core.errors import SchemaInvalidError
from teleport_router.data.features import LineFeature, parse_features


def _link_feature(coords, depth1=None, depth2=None):
    props = {}
    if depth1 is not None:
        props["depth1"] = depth1
    if depth2 is not None:
        props["depth2"] = depth2
    return {
        "type": "Feature",
        "properties": props,
        "geometry": {"type": "LineString", "coordinates": coords},
    }


def _collection(features):
    return {"type": "FeatureCollection", "features": features}


def test_parse_uses_first_and_last_coordinates() -> None:
    features = parse_features(
        _collection([_link_feature([(0, 0), (5, 5), (10, -3)], depth1=110, depth2=95.5)])
    )
    assert features == [
        LineFeature(start_raw=(0.0, 0.0), end_raw=(10.0, -3.0), start_elevation=110.0, end_elevation=95.5)
    ]


def test_missing_or_non_numeric_elevation_defaults_to_zero() -> None:
    features = parse_features(
        _collection(
            [
                _link_feature([(0, 0), (1, 1)]),
                _link_feature([(0, 0), (1, 1)], depth1="120", depth2=True),
            ]
        )
    )
    assert [(f.start_elevation, f.end_elevation) for f in features] == [(0.0, 0.0), (0.0, 0.0)]


def test_malformed_features_are_skipped() -> None:
    good = _link_feature([(0, 0), (100, 0)])
    bad = [
        {"type": "Feature", "properties": {}},
        {"type": "Feature", "geometry": {"type": "Point", "coordinates": [0, 0]}},
        _link_feature([(0, 0)]),
        _link_feature([("a", 0), (1, 1)]),
        {"type": "Feature", "geometry": {"type": "LineString"}},
        "not a feature",
    ]
    features = parse_features(_collection(bad + [good]))
    assert len(features) == 1
    assert features[0].end_raw == (100.0, 0.0)


def test_oversized_integers_do_not_abort_parsing() -> None:
    good = _link_feature([(0, 0), (100, 0)], depth1=110)
    huge = 10**400
    features = parse_features(
        _collection(
            [
                _link_feature([(huge, 0), (1, 1)]),
                _link_feature([(0, 0), (1, huge)]),
                _link_feature([(5, 5), (6, 6)], depth1=huge, depth2=-huge),
                good,
            ]
        )
    )
    assert [f.end_raw for f in features] == [(6.0, 6.0), (100.0, 0.0)]
    assert (features[0].start_elevation, features[0].end_elevation) == (0.0, 0.0)
    assert features[1].start_elevation == 110.0


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"features": []},
        {"type": "Feature", "features": []},
        {"type": "FeatureCollection"},
        {"type": "FeatureCollection", "features": {}},
    ],
)
def test_wrong_schema_aborts(payload) -> None:
    with pytest.raises(SchemaInvalidError) as exc_info:
        parse_features(payload)
    assert exc_info.value.reason_code == "schema_invalid"
