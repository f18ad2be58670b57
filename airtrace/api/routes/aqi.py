# path: airtrace-api/airtrace/api/routes/aqi.py

from __future__ import annotations

from typing import List, Optional, Union

from fastapi import APIRouter
from pydantic import BaseModel, Field

from airtrace.models.route_models import GeoPoint
from airtrace.models.scoring_models import EstimatorConfig
from airtrace.models.sensor_models import SensorReading
from airtrace.services.aqi_categories import aqi_alert, aqi_category, display_aqi
from airtrace.services.aqi_estimator import estimate_from_nearby, find_nearby_stations

router = APIRouter(prefix="/aqi", tags=["aqi"])


class EstimateRequest(BaseModel):
    point: GeoPoint
    stations: List[SensorReading] = Field(default_factory=list)
    config: Optional[EstimatorConfig] = None
    sensitive_group: bool = False


class StationUsed(BaseModel):
    id: Union[int, str]
    name: Optional[str] = None
    value: float
    distance_m: float


class AlertOut(BaseModel):
    kind: str
    title: str
    message: str


class EstimateResponse(BaseModel):
    estimated_aqi: Optional[float] = None
    display_aqi: Optional[int] = None
    category: Optional[str] = None
    color: Optional[str] = None
    stations_used: List[StationUsed]
    alert: Optional[AlertOut] = None


@router.post("/estimate", response_model=EstimateResponse)
def estimate_endpoint(body: EstimateRequest) -> EstimateResponse:
    config = body.config or EstimatorConfig()
    nearby = find_nearby_stations(body.point, body.stations, config)
    estimated = estimate_from_nearby(nearby, config)
    if estimated is None:
        return EstimateResponse(stations_used=[])

    used = [StationUsed(id=s.id, name=s.name, value=s.value, distance_m=d) for s, d in nearby]
    category = aqi_category(estimated)
    alert = aqi_alert(estimated, body.sensitive_group)
    return EstimateResponse(
        estimated_aqi=estimated,
        display_aqi=display_aqi(estimated),
        category=category.level,
        color=category.color,
        stations_used=used,
        alert=AlertOut(kind=alert.kind, title=alert.title, message=alert.message) if alert else None,
    )
