# path: airtrace-api/airtrace/utils/geo.py

from __future__ import annotations

from typing import Dict, Iterable, Sequence, Tuple
import math


EARTH_RADIUS_M = 6371000.0


def haversine_m(a_lat: float, a_lon: float, b_lat: float, b_lon: float) -> float:
    # Spherical earth, meters. Sampler and estimator both use this.
    phi1 = math.radians(a_lat)
    phi2 = math.radians(b_lat)
    dphi = math.radians(b_lat - a_lat)
    dlmb = math.radians(b_lon - a_lon)

    s = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    # Rounding can push s a hair above 1 for antipodal points.
    return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(min(1.0, s)))


def interpolate_latlon(
    a_lat: float, a_lon: float, b_lat: float, b_lon: float, frac: float
) -> Tuple[float, float]:
    # Linear in degrees; segments from a router are short enough for this.
    return a_lat + frac * (b_lat - a_lat), a_lon + frac * (b_lon - a_lon)


def polyline_length_m(points_latlon: Sequence[Tuple[float, float]]) -> float:
    total = 0.0
    for i in range(1, len(points_latlon)):
        a_lat, a_lon = points_latlon[i - 1]
        b_lat, b_lon = points_latlon[i]
        total += haversine_m(a_lat, a_lon, b_lat, b_lon)
    return total


def bbox_wgs84(points_latlon: Iterable[Tuple[float, float]]) -> Dict[str, float]:
    pts = list(points_latlon)
    lats = [p[0] for p in pts]
    lons = [p[1] for p in pts]
    return {
        "min_lat": min(lats),
        "min_lon": min(lons),
        "max_lat": max(lats),
        "max_lon": max(lons),
    }
