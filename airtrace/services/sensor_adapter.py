# path: airtrace-api/airtrace/services/sensor_adapter.py

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional
import logging

from pydantic import ValidationError

from airtrace.models.route_models import GeoPoint
from airtrace.models.sensor_models import SensorReading


logger = logging.getLogger(__name__)

MISSING_AQI = (None, "", "-")


def _parse_time(value: Any) -> Optional[datetime]:
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def reading_from_waqi_item(item: Dict[str, Any]) -> Optional[SensorReading]:
    """One WAQI map/bounds entry -> SensorReading, or None if it is unusable."""
    aqi = item.get("aqi")
    lat, lon = item.get("lat"), item.get("lon")
    station = item.get("station") or {}
    name = station.get("name")
    if aqi in MISSING_AQI or lat is None or lon is None or not name:
        return None
    try:
        return SensorReading(
            id=item.get("uid", name),
            location=GeoPoint(latitude=float(lat), longitude=float(lon)),
            value=float(aqi),
            observed_at=_parse_time(station.get("time")),
            name=name,
        )
    except (TypeError, ValueError, ValidationError):
        logger.debug("Skipping malformed WAQI station %r", item.get("uid"))
        return None


def readings_from_waqi(payload: Dict[str, Any]) -> List[SensorReading]:
    if payload.get("status") != "ok":
        logger.error("WAQI API error: %s", payload.get("data"))
        return []
    items = payload.get("data") or []
    readings = [r for r in (reading_from_waqi_item(i) for i in items) if r is not None]
    logger.info("WAQI: %d of %d stations usable", len(readings), len(items))
    return readings
