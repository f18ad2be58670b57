# path: airtrace-api/airtrace/models/scoring_models.py

from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from airtrace.models.route_models import (
    BBoxWGS84,
    GeoPoint,
    RouteId,
    RouteInstruction,
    SampledPoint,
)


DEFAULT_SAMPLE_SPACING_M = 1000.0
DEFAULT_IDW_POWER = 2.0
DEFAULT_MAX_STATIONS = 3
DEFAULT_MAX_DISTANCE_M = 50_000.0
DEFAULT_MIN_STATIONS = 1


class EstimatorConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    power: float = Field(default=DEFAULT_IDW_POWER, gt=0)
    max_stations: int = Field(default=DEFAULT_MAX_STATIONS, ge=1)
    max_distance_m: float = Field(default=DEFAULT_MAX_DISTANCE_M, gt=0)
    min_stations: int = Field(default=DEFAULT_MIN_STATIONS, ge=1)

    @model_validator(mode="after")
    def validate_station_bounds(self):
        if self.min_stations > self.max_stations:
            raise ValueError("min_stations must not exceed max_stations")
        return self


class ScoringConfig(EstimatorConfig):
    sample_spacing_m: float = Field(default=DEFAULT_SAMPLE_SPACING_M, gt=0)

    def estimator(self) -> EstimatorConfig:
        return EstimatorConfig(
            power=self.power,
            max_stations=self.max_stations,
            max_distance_m=self.max_distance_m,
            min_stations=self.min_stations,
        )


class RouteAQISummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    route_id: RouteId
    mean_aqi: Optional[float] = None
    min_aqi: Optional[float] = None
    max_aqi: Optional[float] = None
    sample_count: int = Field(default=0, ge=0)


class RankedRoute(BaseModel):
    route_id: RouteId
    summary: RouteAQISummary
    is_recommended: bool = False


class ScoredRoute(RankedRoute):
    """Ranked route plus what the UI shell needs to draw and describe it."""

    name: str
    distance_m: Optional[float] = None
    duration_s: Optional[float] = None
    pollution_level: Optional[int] = None
    category: Optional[str] = None
    color: Optional[str] = None
    bbox_wgs84: Optional[BBoxWGS84] = None
    coordinates: List[GeoPoint] = Field(default_factory=list)
    samples: List[SampledPoint] = Field(default_factory=list)
    instructions: List[RouteInstruction] = Field(default_factory=list)
    # Filled only by the traffic post-processing step.
    traffic_level: Optional[str] = None
    adjusted_duration_s: Optional[float] = None
