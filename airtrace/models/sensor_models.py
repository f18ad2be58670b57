# path: airtrace-api/airtrace/models/sensor_models.py

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, Field

from airtrace.models.route_models import GeoPoint


class SensorReading(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Union[int, str]
    location: GeoPoint
    value: float
    observed_at: Optional[datetime] = None
    name: Optional[str] = Field(default=None, max_length=200)
    is_prediction: bool = False
