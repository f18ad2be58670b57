# path: airtrace-api/airtrace/services/aqi_estimator.py

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple
import logging

from airtrace.models.route_models import GeoPoint, RouteId, SampledPoint
from airtrace.models.scoring_models import EstimatorConfig, RouteAQISummary
from airtrace.models.sensor_models import SensorReading
from airtrace.utils.geo import haversine_m


logger = logging.getLogger(__name__)


def find_nearby_stations(
    point: GeoPoint,
    stations: Sequence[SensorReading],
    config: Optional[EstimatorConfig] = None,
) -> List[Tuple[SensorReading, float]]:
    """
    Stations within ``config.max_distance_m`` of ``point``, nearest first,
    capped at ``config.max_stations``. Equal distances keep input order.
    """
    config = config or EstimatorConfig()
    in_range = []
    for s in stations:
        d = haversine_m(point.latitude, point.longitude, s.location.latitude, s.location.longitude)
        if d <= config.max_distance_m:
            in_range.append((s, d))
    # sorted() is stable, so ties stay in station order
    in_range = sorted(in_range, key=lambda pair: pair[1])
    return in_range[: config.max_stations]


def idw(pairs: Sequence[Tuple[float, float]], power: float) -> float:
    """Inverse-distance weighted mean of ``(value, distance_m)`` pairs; distances must be > 0."""
    # Weights relative to the nearest station stay in (0, 1], so large powers
    # neither overflow nor underflow the nearest weight to zero.
    d_min = min(d for _, d in pairs)
    num = 0.0
    den = 0.0
    for value, d in pairs:
        w = (d_min / d) ** power
        num += w * value
        den += w
    return num / den


def estimate_from_nearby(
    nearby: Sequence[Tuple[SensorReading, float]],
    config: Optional[EstimatorConfig] = None,
) -> Optional[float]:
    """Estimate from the output of :func:`find_nearby_stations`."""
    config = config or EstimatorConfig()
    if len(nearby) < config.min_stations:
        return None

    for s, d in nearby:
        if d == 0:
            return float(s.value)

    return idw([(s.value, d) for s, d in nearby], config.power)


def estimate_aqi(
    point: GeoPoint,
    stations: Sequence[SensorReading],
    config: Optional[EstimatorConfig] = None,
) -> Optional[float]:
    """
    IDW estimate of the pollutant value at ``point``.

    Returns None when fewer than ``config.min_stations`` stations are in
    range. A station sitting exactly on the point wins outright.
    """
    config = config or EstimatorConfig()
    return estimate_from_nearby(find_nearby_stations(point, stations, config), config)


def aggregate_route(
    route_id: RouteId,
    samples: Sequence[SampledPoint],
    stations: Sequence[SensorReading],
    config: Optional[EstimatorConfig] = None,
) -> RouteAQISummary:
    config = config or EstimatorConfig()
    values = []
    for sp in samples:
        v = estimate_aqi(sp.as_point(), stations, config)
        if v is not None:
            values.append(v)

    if not values:
        logger.info("Route %s: no station data for any of %d samples", route_id, len(samples))
        return RouteAQISummary(route_id=route_id, sample_count=0)

    return RouteAQISummary(
        route_id=route_id,
        mean_aqi=sum(values) / len(values),
        min_aqi=min(values),
        max_aqi=max(values),
        sample_count=len(values),
    )
