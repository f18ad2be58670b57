# path: airtrace-api/airtrace/models/route_models.py

from __future__ import annotations

from typing import Any, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator


RouteId = Union[int, str]


class GeoPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)


class SampledPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    cumulative_distance_m: float = Field(ge=0)

    def as_point(self) -> GeoPoint:
        return GeoPoint(latitude=self.latitude, longitude=self.longitude)


class BBoxWGS84(BaseModel):
    min_lat: float
    min_lon: float
    max_lat: float
    max_lon: float


class RouteInstruction(BaseModel):
    text: str = ""
    type: Optional[str] = None
    distance_m: float = Field(default=0.0, ge=0)
    duration_s: float = Field(default=0.0, ge=0)


class RouteInput(BaseModel):
    """A candidate route as the UI shell or routing collaborator hands it over.

    ``coordinates`` may be any geometry shape accepted by
    :func:`airtrace.services.route_adapter.to_polyline`.
    """

    route_id: Optional[RouteId] = None
    name: Optional[str] = Field(default=None, max_length=120)
    coordinates: Any
    distance_m: Optional[float] = Field(default=None, ge=0)
    duration_s: Optional[float] = Field(default=None, ge=0)
    instructions: List[RouteInstruction] = Field(default_factory=list)


class PlannedRoute(BaseModel):
    # Output of the routing collaborator, already in canonical (lat, lon) order.
    route_id: RouteId
    name: str
    coordinates: List[GeoPoint]
    distance_m: float = Field(ge=0)
    duration_s: float = Field(ge=0)
    instructions: List[RouteInstruction] = Field(default_factory=list)

    @field_validator("coordinates")
    @classmethod
    def validate_coords(cls, coords: List[GeoPoint]):
        if len(coords) < 2:
            raise ValueError("Planned route must contain at least 2 coordinates")
        return coords
