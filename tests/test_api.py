from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from teleport_router.api.main import create_app
from teleport_router.core.config import FrameConfig, RouterConfig, WalkConfig
from teleport_router.core.errors import DataUnavailableError
from teleport_router.data.dataset import StaticFeatureProvider


COLLECTION = {
    "type": "FeatureCollection",
    "features": [
        {
            "type": "Feature",
            "properties": {},
            "geometry": {"type": "LineString", "coordinates": [[0, 0], [1000, 0]]},
        }
    ],
}


class OfflineProvider:
    def get_features(self):
        raise DataUnavailableError("HTTP 404")


@pytest.fixture()
def client() -> TestClient:
    config = RouterConfig(walk=WalkConfig(radius=500.0))
    return TestClient(create_app(config, StaticFeatureProvider(COLLECTION)))


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_route_with_teleport(client: TestClient) -> None:
    response = client.post("/route", json={"agent": [-100, 0, 0], "goal": [1100, 0]})
    assert response.status_code == 200
    body = response.json()
    assert body["found"] is True
    assert body["teleport_flags"] == [False, True, False]
    assert len(body["waypoints"]) == 4
    assert body["teleport_hops"] == 1
    assert body["total_seconds"] == pytest.approx(27.0)
    assert body["direct"] is False


def test_route_direct(client: TestClient) -> None:
    body = client.post("/route", json={"agent": [0, 70, 0], "goal": [10, 10]}).json()
    assert body["found"] is True
    assert body["direct"] is True
    assert body["waypoints"] == [[10.0, 70.0, 10.0]]
    assert body["teleport_flags"] == []


def test_route_world_frame() -> None:
    config = RouterConfig(walk=WalkConfig(radius=500.0), frame=FrameConfig(spawn_x=1000.0, spawn_z=0.0))
    client = TestClient(create_app(config, StaticFeatureProvider(COLLECTION)))
    body = client.post("/route", json={"agent": [900, 0, 0], "goal": [1100, 0], "frame": "world"}).json()
    assert body["waypoints"][0] == [900.0, 0.0, 0.0]
    assert body["waypoints"][-1] == [2100.0, 0.0, 0.0]


def test_route_without_data() -> None:
    client = TestClient(create_app(RouterConfig(), OfflineProvider()))
    body = client.post("/route", json={"agent": [0, 0, 0], "goal": [5000, 0]}).json()
    assert body["found"] is False
    assert body["reason_code"] == "data_unavailable"
    assert body["waypoints"] == []


def test_route_rejects_bad_payload(client: TestClient) -> None:
    response = client.post("/route", json={"agent": [0, 0], "goal": [1, 2]})
    assert response.status_code == 422


def test_config_endpoint(client: TestClient) -> None:
    body = client.get("/config").json()
    assert body["walk_radius"] == 500.0
    assert body["teleport_weight"] == 3.0


def test_default_app_loads_config_on_first_request() -> None:
    from teleport_router.api import main

    assert main.app.state.config is None
    assert main.app.state.provider is None
    body = TestClient(create_app()).get("/config").json()
    assert body["walk_radius"] == 3000.0
    assert body["direct_threshold"] == 150.0
