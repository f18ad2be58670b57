# path: airtrace-api/airtrace/services/traffic.py

from __future__ import annotations

from typing import List, Sequence

from airtrace.models.scoring_models import ScoredRoute


# Presentation-only congestion guess; runs after scoring and never touches AQI fields.
HEAVY_TRAFFIC_FACTOR = 1.5


def traffic_level(display_index: int) -> str:
    if display_index == 0:
        return "High"
    if display_index < 2:
        return "Medium"
    return "Low"


def apply_traffic_heuristic(routes: Sequence[ScoredRoute]) -> List[ScoredRoute]:
    """Return copies labelled with a traffic level and a congestion-adjusted duration."""
    out = []
    for i, r in enumerate(routes):
        adjusted = None
        if r.duration_s is not None:
            adjusted = r.duration_s * HEAVY_TRAFFIC_FACTOR if i == 0 else r.duration_s
        out.append(r.model_copy(update={"traffic_level": traffic_level(i), "adjusted_duration_s": adjusted}))
    return out
