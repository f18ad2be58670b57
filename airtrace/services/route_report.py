# path: airtrace-api/airtrace/services/route_report.py

from __future__ import annotations

from concurrent.futures import Executor
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from airtrace.models.route_models import BBoxWGS84, GeoPoint, RouteId, RouteInstruction
from airtrace.models.scoring_models import ScoredRoute, ScoringConfig
from airtrace.models.sensor_models import SensorReading
from airtrace.services.aqi_categories import aqi_category, display_aqi
from airtrace.services.route_ranking import rank_routes
from airtrace.services.route_scoring import evaluate_routes
from airtrace.utils.geo import bbox_wgs84


@dataclass
class RouteCandidate:
    route_id: RouteId
    polyline: List[GeoPoint]
    name: Optional[str] = None
    distance_m: Optional[float] = None
    duration_s: Optional[float] = None
    instructions: List[RouteInstruction] = field(default_factory=list)


def build_scored_routes(
    candidates: Sequence[RouteCandidate],
    stations: Sequence[SensorReading],
    config: ScoringConfig,
    executor: Optional[Executor] = None,
) -> List[ScoredRoute]:
    """Score candidates and attach display fields (rounded level, colour, bbox)."""
    evaluations = evaluate_routes(
        [(c.route_id, c.polyline) for c in candidates], stations, config, executor
    )
    ranked = rank_routes([e.summary for e in evaluations])

    out = []
    for i, (c, e, r) in enumerate(zip(candidates, evaluations, ranked)):
        level = display_aqi(r.summary.mean_aqi)
        category = aqi_category(r.summary.mean_aqi) if r.summary.mean_aqi is not None else None
        bbox = None
        if c.polyline:
            bbox = BBoxWGS84(**bbox_wgs84([(p.latitude, p.longitude) for p in c.polyline]))
        out.append(
            ScoredRoute(
                route_id=r.route_id,
                summary=r.summary,
                is_recommended=r.is_recommended,
                name=c.name or f"Route {i + 1}",
                distance_m=c.distance_m,
                duration_s=c.duration_s,
                pollution_level=level,
                category=category.level if category else None,
                color=category.color if category else None,
                bbox_wgs84=bbox,
                coordinates=c.polyline,
                samples=e.samples,
                instructions=c.instructions,
            )
        )
    return out
