# path: airtrace-api/airtrace/api/routes/routes.py

from __future__ import annotations

from typing import List, Optional
import logging

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from airtrace.errors import RouteFormatError
from airtrace.models.route_models import GeoPoint, RouteInput
from airtrace.models.scoring_models import ScoredRoute, ScoringConfig
from airtrace.models.sensor_models import SensorReading
from airtrace.services.forecast import forecast_readings
from airtrace.services.route_adapter import to_polyline
from airtrace.services.route_report import RouteCandidate, build_scored_routes
from airtrace.services.traffic import apply_traffic_heuristic

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/routes", tags=["routes"])

MAX_ROUTES = 20


class ScoreRoutesRequest(BaseModel):
    routes: List[RouteInput] = Field(max_length=MAX_ROUTES)
    stations: List[SensorReading] = Field(default_factory=list)
    config: Optional[ScoringConfig] = None


class PlanRoutesRequest(BaseModel):
    start: GeoPoint
    end: GeoPoint
    config: Optional[ScoringConfig] = None
    days_ahead: int = Field(default=0, ge=0, le=7)
    bounds: Optional[str] = None


class ScoredRoutesResponse(BaseModel):
    routes: List[ScoredRoute]
    station_count: int


def _config(request: Request, config: Optional[ScoringConfig]) -> ScoringConfig:
    if config is not None:
        return config
    return ScoringConfig(sample_spacing_m=request.app.state.settings.sample_spacing_m)


@router.post("/score", response_model=ScoredRoutesResponse)
def score_routes_endpoint(body: ScoreRoutesRequest, request: Request) -> ScoredRoutesResponse:
    candidates = []
    for i, r in enumerate(body.routes):
        try:
            polyline = to_polyline(r.coordinates)
        except RouteFormatError as e:
            raise HTTPException(status_code=400, detail=f"route {i}: {e}")
        candidates.append(
            RouteCandidate(
                route_id=r.route_id if r.route_id is not None else i,
                polyline=polyline,
                name=r.name,
                distance_m=r.distance_m,
                duration_s=r.duration_s,
                instructions=r.instructions,
            )
        )

    scored = build_scored_routes(
        candidates, body.stations, _config(request, body.config), request.app.state.scoring_executor
    )
    return ScoredRoutesResponse(routes=scored, station_count=len(body.stations))


@router.post("/plan", response_model=ScoredRoutesResponse)
def plan_routes_endpoint(body: PlanRoutesRequest, request: Request) -> ScoredRoutesResponse:
    state = request.app.state
    planned = state.routing_client.plan_routes(body.start, body.end)
    if not planned:
        logger.info("No routes between %s and %s", body.start, body.end)
        return ScoredRoutesResponse(routes=[], station_count=0)

    stations = state.sensor_client.fetch_readings(body.bounds)
    if body.days_ahead:
        stations = forecast_readings(stations, body.days_ahead)

    candidates = [
        RouteCandidate(
            route_id=p.route_id,
            polyline=p.coordinates,
            name=p.name,
            distance_m=p.distance_m,
            duration_s=p.duration_s,
            instructions=p.instructions,
        )
        for p in planned
    ]
    scored = build_scored_routes(candidates, stations, _config(request, body.config), state.scoring_executor)
    return ScoredRoutesResponse(routes=apply_traffic_heuristic(scored), station_count=len(stations))
