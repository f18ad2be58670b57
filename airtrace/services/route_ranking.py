# path: airtrace-api/airtrace/services/route_ranking.py

from __future__ import annotations

from typing import List, Optional, Sequence

from airtrace.models.scoring_models import RankedRoute, RouteAQISummary


def pick_recommended(summaries: Sequence[RouteAQISummary]) -> Optional[int]:
    # Strict '<' keeps the earliest route on ties.
    best_idx = None
    best_mean = None
    for i, s in enumerate(summaries):
        if s.mean_aqi is None:
            continue
        if best_mean is None or s.mean_aqi < best_mean:
            best_idx, best_mean = i, s.mean_aqi
    return best_idx


def rank_routes(summaries: Sequence[RouteAQISummary]) -> List[RankedRoute]:
    """
    Flag the cleanest route without reordering anything.

    Output order is input order (the routing engine's order, used for
    display and colours); at most one entry is recommended.
    """
    best = pick_recommended(summaries)
    return [
        RankedRoute(route_id=s.route_id, summary=s, is_recommended=(i == best))
        for i, s in enumerate(summaries)
    ]
