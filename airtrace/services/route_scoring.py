# path: airtrace-api/airtrace/services/route_scoring.py

from __future__ import annotations

from concurrent.futures import Executor
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
import logging

from airtrace.models.route_models import GeoPoint, RouteId, SampledPoint
from airtrace.models.scoring_models import RankedRoute, RouteAQISummary, ScoringConfig
from airtrace.models.sensor_models import SensorReading
from airtrace.services.aqi_estimator import aggregate_route
from airtrace.services.route_ranking import rank_routes
from airtrace.services.route_sampler import sample_route


logger = logging.getLogger(__name__)

# Explicit (route_id, polyline) pairs; ids are never inferred from position.
RouteArg = Tuple[RouteId, Sequence[GeoPoint]]


@dataclass(frozen=True)
class RouteEvaluation:
    samples: List[SampledPoint]
    summary: RouteAQISummary


def _evaluate_one(
    task: Tuple[RouteId, Sequence[GeoPoint], Sequence[SensorReading], ScoringConfig]
) -> RouteEvaluation:
    # Module level so process pools can pickle it.
    route_id, polyline, stations, config = task
    samples = sample_route(polyline, config.sample_spacing_m)
    summary = aggregate_route(route_id, samples, stations, config.estimator())
    return RouteEvaluation(samples=samples, summary=summary)


def _normalize_routes(routes: Sequence[RouteArg]) -> List[Tuple[RouteId, List[GeoPoint]]]:
    out = []
    for i, r in enumerate(routes):
        if not isinstance(r, (tuple, list)) or len(r) != 2:
            raise ValueError(f"routes[{i}] must be a (route_id, polyline) pair")
        route_id, polyline = r
        if isinstance(route_id, bool) or not isinstance(route_id, (int, str)):
            raise ValueError(f"routes[{i}] route_id must be int or str, got {type(route_id).__name__}")
        points = list(polyline)
        if not all(isinstance(p, GeoPoint) for p in points):
            raise ValueError(f"routes[{i}] polyline must contain only GeoPoints")
        out.append((route_id, points))
    return out


def evaluate_routes(
    routes: Sequence[RouteArg],
    stations: Sequence[SensorReading],
    config: Optional[ScoringConfig] = None,
    executor: Optional[Executor] = None,
) -> List[RouteEvaluation]:
    """
    Sample and aggregate every route; result order matches ``routes``.

    Each entry of ``routes`` must be a ``(route_id, polyline)`` pair with an
    int or str id and a sequence of GeoPoints; anything else is a ValueError.

    With an ``executor`` the routes are scored concurrently via
    ``executor.map``, which still yields results in submission order.
    """
    config = config or ScoringConfig()
    stations = list(stations)
    tasks = [(rid, poly, stations, config) for rid, poly in _normalize_routes(routes)]
    if not tasks:
        return []

    if executor is not None and len(tasks) > 1:
        results = list(executor.map(_evaluate_one, tasks))
    else:
        results = [_evaluate_one(t) for t in tasks]

    logger.info(
        "Scored %d route(s) against %d station(s), %d total samples",
        len(results), len(stations), sum(len(r.samples) for r in results),
    )
    return results


def score_routes(
    routes: Sequence[RouteArg],
    stations: Sequence[SensorReading],
    config: Optional[ScoringConfig] = None,
    executor: Optional[Executor] = None,
) -> List[RankedRoute]:
    """Sampler -> IDW estimates -> per-route summary -> recommendation."""
    evaluations = evaluate_routes(routes, stations, config, executor)
    return rank_routes([e.summary for e in evaluations])
