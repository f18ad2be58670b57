# path: airtrace-api/airtrace/services/aqicn_client.py

from __future__ import annotations

from typing import List, Optional
import logging

import requests

from airtrace.config import Settings, get_settings
from airtrace.models.sensor_models import SensorReading
from airtrace.services.sensor_adapter import readings_from_waqi


logger = logging.getLogger(__name__)


class AQICNClient:
    """Sensor-data collaborator backed by the WAQI (aqicn.org) map/bounds API."""

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.settings = settings or get_settings()
        self.session = session or requests.Session()

    def fetch_readings(self, bounds: Optional[str] = None) -> List[SensorReading]:
        """
        Latest station readings inside ``bounds`` ("lat1,lng1,lat2,lng2").

        Stale or missing data is the provider's problem: on any failure this
        logs and returns an empty list, which downstream turns into null
        estimates.
        """
        if not self.settings.aqicn_token:
            logger.warning("AQICN_TOKEN not set, no sensor readings available")
            return []
        try:
            resp = self.session.get(
                f"{self.settings.aqicn_base_url}/map/bounds/",
                params={"latlng": bounds or self.settings.aqicn_bounds, "token": self.settings.aqicn_token},
                timeout=self.settings.http_timeout_s,
            )
            resp.raise_for_status()
            payload = resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.error("Error fetching AQICN data: %s", e)
            return []
        if not isinstance(payload, dict):
            logger.error("Unexpected AQICN payload type: %s", type(payload).__name__)
            return []
        return readings_from_waqi(payload)
