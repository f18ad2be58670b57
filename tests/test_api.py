"""
Tests for the HTTP API using FastAPI's TestClient.

Collaborator clients on app.state are replaced with mocks so no network
calls are made.
"""

from unittest.mock import Mock

import pytest

from airtrace.models.route_models import GeoPoint, PlannedRoute
from airtrace.models.sensor_models import SensorReading
from airtrace.services import aqi_estimator


STATIONS = [
    {"id": "dirty", "location": {"latitude": 0.0, "longitude": 0.01}, "value": 80.0, "name": "Dirty St"},
    {"id": "clean", "location": {"latitude": 0.5, "longitude": 0.01}, "value": 45.0, "name": "Clean Ave"},
]


def planned(route_id, lat, duration=600.0):
    return PlannedRoute(
        route_id=route_id,
        name=f"Route {route_id + 1}",
        coordinates=[GeoPoint(latitude=lat, longitude=0.0), GeoPoint(latitude=lat, longitude=0.02)],
        distance_m=2224.0,
        duration_s=duration,
    )


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}


class TestScoreEndpoint:
    """Test suite for POST /routes/score."""

    def test_scores_and_recommends(self, client):
        body = {
            "routes": [
                {"name": "Via Dirty St", "coordinates": [{"lat": 0.0, "lng": 0.0}, {"lat": 0.0, "lng": 0.02}]},
                {"route_id": "b", "coordinates": [[0.5, 0.0], [0.5, 0.02]], "duration_s": 300},
            ],
            "stations": STATIONS,
        }
        resp = client.post("/routes/score", json=body)
        assert resp.status_code == 200
        data = resp.json()
        routes = data["routes"]

        assert data["station_count"] == 2
        assert [r["route_id"] for r in routes] == [0, "b"]
        assert [r["is_recommended"] for r in routes] == [False, True]
        assert [r["pollution_level"] for r in routes] == [80, 45]
        assert routes[0]["name"] == "Via Dirty St"
        assert routes[1]["name"] == "Route 2"
        assert routes[1]["category"] == "Good"
        assert routes[0]["summary"]["sample_count"] == 4
        assert routes[0]["samples"][-1]["longitude"] == 0.02
        assert routes[0]["bbox_wgs84"]["max_lon"] == 0.02
        assert routes[0]["traffic_level"] is None

    def test_custom_spacing(self, client):
        body = {
            "routes": [{"coordinates": [[0.0, 0.0], [0.0, 0.02]]}],
            "stations": STATIONS,
            "config": {"sample_spacing_m": 500},
        }
        data = client.post("/routes/score", json=body).json()
        assert data["routes"][0]["summary"]["sample_count"] == 6

    def test_no_stations(self, client):
        body = {"routes": [{"coordinates": [[0.0, 0.0], [0.0, 0.02]]}]}
        route = client.post("/routes/score", json=body).json()["routes"][0]
        assert route["summary"]["mean_aqi"] is None
        assert route["pollution_level"] is None
        assert route["is_recommended"] is False

    def test_bad_geometry_is_400(self, client):
        body = {"routes": [{"coordinates": "1,2;3,4"}], "stations": STATIONS}
        resp = client.post("/routes/score", json=body)
        assert resp.status_code == 400
        assert "route 0" in resp.json()["detail"]

    @pytest.mark.parametrize(
        "config",
        [{"sample_spacing_m": 0}, {"power": -2}, {"max_distance_m": 0}, {"min_stations": 5}],
    )
    def test_invalid_config_is_422(self, client, config):
        body = {"routes": [{"coordinates": [[0.0, 0.0], [0.0, 0.02]]}], "stations": STATIONS, "config": config}
        assert client.post("/routes/score", json=body).status_code == 422


class TestPlanEndpoint:
    """Test suite for POST /routes/plan with mocked collaborators."""

    @pytest.fixture
    def collaborators(self, client):
        routing = Mock()
        sensors = Mock()
        routing.plan_routes.return_value = [planned(0, 0.0), planned(1, 0.5)]
        sensors.fetch_readings.return_value = [SensorReading(**s) for s in STATIONS]
        client.app.state.routing_client = routing
        client.app.state.sensor_client = sensors
        return routing, sensors

    def test_plan_scores_and_labels_traffic(self, client, collaborators):
        routing, sensors = collaborators
        body = {"start": {"latitude": 0.0, "longitude": 0.0}, "end": {"latitude": 0.0, "longitude": 0.02}}
        data = client.post("/routes/plan", json=body).json()

        routes = data["routes"]
        assert [r["is_recommended"] for r in routes] == [False, True]
        assert [r["traffic_level"] for r in routes] == ["High", "Medium"]
        assert routes[0]["adjusted_duration_s"] == 900.0
        assert routes[0]["summary"]["mean_aqi"] == pytest.approx(80.0)
        routing.plan_routes.assert_called_once()
        sensors.fetch_readings.assert_called_once_with(None)

    def test_no_routes(self, client, collaborators):
        routing, sensors = collaborators
        routing.plan_routes.return_value = []
        body = {"start": {"latitude": 0.0, "longitude": 0.0}, "end": {"latitude": 1.0, "longitude": 1.0}}
        assert client.post("/routes/plan", json=body).json() == {"routes": [], "station_count": 0}
        sensors.fetch_readings.assert_not_called()

    def test_forecast_days_still_score(self, client, collaborators):
        body = {
            "start": {"latitude": 0.0, "longitude": 0.0},
            "end": {"latitude": 0.0, "longitude": 0.02},
            "days_ahead": 2,
        }
        data = client.post("/routes/plan", json=body).json()
        assert data["station_count"] == 2
        assert all(r["summary"]["mean_aqi"] is not None for r in data["routes"])

    def test_bad_start_is_422(self, client, collaborators):
        body = {"start": {"latitude": 91.0, "longitude": 0.0}, "end": {"latitude": 0.0, "longitude": 0.0}}
        assert client.post("/routes/plan", json=body).status_code == 422


class TestEstimateEndpoint:
    """Test suite for POST /aqi/estimate."""

    def test_exact_station(self, client):
        body = {"point": {"latitude": 0.0, "longitude": 0.01}, "stations": STATIONS}
        data = client.post("/aqi/estimate", json=body).json()
        assert data["estimated_aqi"] == 80.0
        assert data["display_aqi"] == 80
        assert data["category"] == "Moderate"
        assert [s["id"] for s in data["stations_used"]] == ["dirty"]
        assert data["stations_used"][0]["distance_m"] == 0.0
        assert data["alert"] is None

    def test_out_of_range(self, client):
        body = {"point": {"latitude": 10.0, "longitude": 10.0}, "stations": STATIONS}
        data = client.post("/aqi/estimate", json=body).json()
        assert data["estimated_aqi"] is None
        assert data["stations_used"] == []
        assert data["category"] is None

    def test_sensitive_alert(self, client):
        stations = [{"id": 1, "location": {"latitude": 1.0, "longitude": 1.0}, "value": 120.0}]
        body = {"point": {"latitude": 1.0, "longitude": 1.0}, "stations": stations, "sensitive_group": True}
        data = client.post("/aqi/estimate", json=body).json()
        assert data["alert"]["kind"] == "info"
        assert data["alert"]["title"] == "Air Quality Notice - Sensitive Group"

    def test_neighbour_search_runs_once(self, client, monkeypatch):
        spy = Mock(wraps=aqi_estimator.find_nearby_stations)
        monkeypatch.setattr("airtrace.api.routes.aqi.find_nearby_stations", spy)
        stations = STATIONS + [
            {"id": "mid", "location": {"latitude": 0.05, "longitude": 0.01}, "value": 60.0},
        ]
        body = {"point": {"latitude": 0.02, "longitude": 0.01}, "stations": stations}
        data = client.post("/aqi/estimate", json=body).json()
        assert spy.call_count == 1
        assert [s["id"] for s in data["stations_used"]] == ["dirty", "mid"]
        assert data["estimated_aqi"] is not None
