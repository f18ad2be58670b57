# path: airtrace-api/airtrace/services/route_sampler.py

from __future__ import annotations

from typing import List, Sequence, Tuple
import logging

from airtrace.errors import InvalidConfigError
from airtrace.models.route_models import GeoPoint, SampledPoint
from airtrace.utils.geo import haversine_m, interpolate_latlon


logger = logging.getLogger(__name__)

# Last spacing multiple closer than this to the route end is treated as the end itself.
END_TOLERANCE_M = 1e-6


def _segments(route: Sequence[GeoPoint]) -> List[Tuple[GeoPoint, GeoPoint, float]]:
    segs = []
    for i in range(1, len(route)):
        a, b = route[i - 1], route[i]
        segs.append((a, b, haversine_m(a.latitude, a.longitude, b.latitude, b.longitude)))
    return segs


def _targets(total_m: float, spacing_m: float) -> List[float]:
    targets = [0.0]
    k = 1
    while k * spacing_m < total_m - END_TOLERANCE_M:
        targets.append(k * spacing_m)
        k += 1
    if total_m > 0:
        targets.append(total_m)
    return targets


def sample_route(route: Sequence[GeoPoint], spacing_m: float) -> List[SampledPoint]:
    """
    Evenly spaced samples along ``route``, one every ``spacing_m`` meters of
    great-circle distance, starting at the first point and always ending on
    the final point exactly.

    Routes with fewer than 2 points produce no samples.
    """
    if spacing_m is None or not spacing_m > 0:
        raise InvalidConfigError(f"spacing_m must be > 0, got {spacing_m!r}")
    if len(route) < 2:
        logger.debug("Degenerate route with %d point(s), nothing to sample", len(route))
        return []

    segs = _segments(route)
    total = sum(s[-1] for s in segs)
    targets = _targets(total, spacing_m)
    last = route[-1]

    out: List[SampledPoint] = []
    seg_idx = 0
    seg_start_cum = 0.0
    for n, t in enumerate(targets):
        if n == len(targets) - 1 and n > 0:
            lat, lon = last.latitude, last.longitude
        else:
            # Zero-length segments fall through here without being selected.
            while seg_idx < len(segs) - 1 and seg_start_cum + segs[seg_idx][-1] < t:
                seg_start_cum += segs[seg_idx][-1]
                seg_idx += 1
            a, b, seg_len = segs[seg_idx]
            if seg_len == 0:
                lat, lon = a.latitude, a.longitude
            else:
                frac = min(1.0, max(0.0, (t - seg_start_cum) / seg_len))
                lat, lon = interpolate_latlon(a.latitude, a.longitude, b.latitude, b.longitude, frac)
        out.append(SampledPoint(latitude=lat, longitude=lon, cumulative_distance_m=t))

    logger.debug(
        "Sampled route: %d vertices, %.1f m -> %d samples (every %.0f m)",
        len(route), total, len(out), spacing_m,
    )
    return out
