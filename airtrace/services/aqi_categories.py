# path: airtrace-api/airtrace/services/aqi_categories.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import math


# US EPA bands: (upper bound inclusive, level, color)
AQI_BANDS = (
    (50, "Good", "#00e400"),
    (100, "Moderate", "#ffff00"),
    (150, "Unhealthy for Sensitive Groups", "#ff7e00"),
    (200, "Unhealthy", "#ff0000"),
    (300, "Very Unhealthy", "#99004c"),
)
HAZARDOUS = ("Hazardous", "#7e0023")

ALERT_MODERATE = 100
ALERT_SENSITIVE = 150
ALERT_UNHEALTHY = 200


@dataclass(frozen=True)
class AQICategory:
    level: str
    color: str


@dataclass(frozen=True)
class AQIAlert:
    kind: str  # "warning" | "info"
    title: str
    message: str


def display_aqi(value: Optional[float]) -> Optional[int]:
    # Half-up like the map UI does, not banker's rounding.
    if value is None:
        return None
    return int(math.floor(value + 0.5))


def aqi_category(aqi: float) -> AQICategory:
    for upper, level, color in AQI_BANDS:
        if aqi <= upper:
            return AQICategory(level, color)
    return AQICategory(*HAZARDOUS)


def aqi_alert(aqi: Optional[float], sensitive_group: bool = False) -> Optional[AQIAlert]:
    """
    Notification for an estimated AQI at the user's location, if any.

    Sensitive groups (asthma, COPD, heart disease, elderly, pregnant) are
    alerted from 100 upward; everyone else from 150.
    """
    if aqi is None:
        return None
    level = aqi_category(aqi).level
    reading = f"Air Quality Index at your location is {aqi:.1f} ({level})."

    if sensitive_group:
        if aqi >= ALERT_UNHEALTHY:
            return AQIAlert(
                "warning",
                "High Air Quality Alert - Sensitive Group",
                f"{reading} As someone in a sensitive group, you should avoid outdoor activities "
                "and consider wearing a mask.",
            )
        if aqi >= ALERT_SENSITIVE:
            return AQIAlert(
                "warning",
                "Air Quality Alert - Sensitive Group",
                f"{reading} As someone in a sensitive group, you should limit outdoor activities "
                "and take precautions.",
            )
        if aqi >= ALERT_MODERATE:
            return AQIAlert(
                "info",
                "Air Quality Notice - Sensitive Group",
                f"{reading} As someone in a sensitive group, you may want to reduce prolonged "
                "outdoor activities.",
            )
        return None

    if aqi >= ALERT_UNHEALTHY:
        return AQIAlert("warning", "High Air Quality Alert", f"{reading} Consider limiting outdoor activities.")
    if aqi >= ALERT_SENSITIVE:
        return AQIAlert("info", "Air Quality Notice", f"{reading} Sensitive groups should take precautions.")
    return None
