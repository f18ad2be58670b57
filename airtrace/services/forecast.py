# path: airtrace-api/airtrace/services/forecast.py

from __future__ import annotations

from typing import List, Optional, Sequence
import random

from airtrace.models.sensor_models import SensorReading
from airtrace.services.aqi_categories import display_aqi


MIN_FORECAST_AQI = 10
HIGH_AQI = 150
# Heavily polluted stations are assumed to clear up.
HIGH_AQI_FLUCTUATION = -20.0
FLUCTUATION_RANGE = (-10.0, 20.0)


def forecast_readings(
    readings: Sequence[SensorReading],
    days_ahead: int,
    rng: Optional[random.Random] = None,
) -> List[SensorReading]:
    """
    Naive N-day-ahead projection of station readings for the timeline view.

    Pass a seeded ``rng`` for repeatable output.
    """
    if days_ahead < 0:
        raise ValueError(f"days_ahead must be >= 0, got {days_ahead}")
    if days_ahead == 0:
        return list(readings)

    rng = rng or random.Random()
    out = []
    for r in readings:
        fluctuation = rng.uniform(*FLUCTUATION_RANGE)
        if r.value > HIGH_AQI:
            fluctuation = HIGH_AQI_FLUCTUATION
        predicted = max(MIN_FORECAST_AQI, display_aqi(r.value + fluctuation * days_ahead))
        out.append(r.model_copy(update={"value": float(predicted), "is_prediction": True}))
    return out
