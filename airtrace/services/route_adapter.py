# path: airtrace-api/airtrace/services/route_adapter.py

from __future__ import annotations

from typing import Any, List, Mapping, Tuple
import logging

from pydantic import ValidationError

from airtrace.errors import RouteFormatError
from airtrace.models.route_models import GeoPoint


logger = logging.getLogger(__name__)

# (lat key, lon key) pairs accepted for mapping-shaped vertices
LATLON_KEYS: Tuple[Tuple[str, str], ...] = (
    ("lat", "lng"),
    ("lat", "lon"),
    ("latitude", "longitude"),
)


def _point(lat: Any, lon: Any) -> GeoPoint:
    try:
        return GeoPoint(latitude=float(lat), longitude=float(lon))
    except (TypeError, ValueError, ValidationError) as e:
        # pydantic's ValidationError is a ValueError; keep the message short.
        raise RouteFormatError(f"invalid coordinate ({lat!r}, {lon!r})") from e


def _from_mappings(coords: List[Mapping[str, Any]]) -> List[GeoPoint]:
    first = coords[0]
    for lat_key, lon_key in LATLON_KEYS:
        if lat_key in first and lon_key in first:
            break
    else:
        raise RouteFormatError(f"unrecognised vertex keys: {sorted(first)}")

    pts = []
    for c in coords:
        if not isinstance(c, Mapping) or lat_key not in c or lon_key not in c:
            raise RouteFormatError("vertices must all share the same shape")
        pts.append(_point(c[lat_key], c[lon_key]))
    return pts


def _from_pairs(coords: List[Any], lonlat: bool) -> List[GeoPoint]:
    pts = []
    for c in coords:
        if not isinstance(c, (list, tuple)) or len(c) < 2:
            raise RouteFormatError("vertices must all be coordinate pairs")
        pts.append(_point(c[1], c[0]) if lonlat else _point(c[0], c[1]))
    return pts


def to_polyline(raw: Any) -> List[GeoPoint]:
    """
    Normalize route geometry from the routing collaborator into canonical
    (latitude, longitude) points.

    Accepted shapes:
      - [{"lat", "lng"} | {"lat", "lon"} | {"latitude", "longitude"}, ...]
      - [[lat, lng], ...]
      - GeoJSON LineString ([lon, lat] coordinates) or a Feature wrapping one
      - a list of GeoPoint instances (returned as a new list)

    Anything else raises RouteFormatError. No lat/lon swap is guessed.
    """
    if isinstance(raw, Mapping):
        if raw.get("type") == "Feature":
            return to_polyline(raw.get("geometry"))
        if raw.get("type") == "LineString":
            coords = raw.get("coordinates")
            if not isinstance(coords, list):
                raise RouteFormatError("LineString coordinates must be a list")
            return _from_pairs(coords, lonlat=True)
        raise RouteFormatError(f"unsupported geometry type: {raw.get('type')!r}")

    if not isinstance(raw, (list, tuple)):
        raise RouteFormatError(f"unsupported route geometry: {type(raw).__name__}")
    if not raw:
        return []

    first = raw[0]
    if isinstance(first, GeoPoint):
        if not all(isinstance(p, GeoPoint) for p in raw):
            raise RouteFormatError("vertices must all share the same shape")
        return list(raw)
    if isinstance(first, Mapping):
        return _from_mappings(list(raw))
    if isinstance(first, (list, tuple)):
        return _from_pairs(list(raw), lonlat=False)
    raise RouteFormatError(f"unsupported vertex type: {type(first).__name__}")
