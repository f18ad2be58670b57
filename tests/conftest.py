"""
Pytest configuration for airtrace-api tests.

Registers custom markers and provides shared fixtures.
"""

import pytest
from fastapi.testclient import TestClient

from airtrace.models.route_models import GeoPoint
from airtrace.models.sensor_models import SensorReading


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


def point(lat, lon):
    return GeoPoint(latitude=lat, longitude=lon)


def station(sid, lat, lon, value, name=None):
    return SensorReading(id=sid, location=point(lat, lon), value=value, name=name)


@pytest.fixture
def make_point():
    """Fixture returning the GeoPoint factory."""
    return point


@pytest.fixture
def make_station():
    """Fixture returning the SensorReading factory."""
    return station


@pytest.fixture
def client():
    """Fixture providing a TestClient with the app lifespan running."""
    from airtrace.main import app

    with TestClient(app) as c:
        yield c
