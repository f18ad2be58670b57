# path: airtrace-api/airtrace/services/routing_client.py

from __future__ import annotations

from typing import Any, Dict, List, Optional
import logging

import requests
from pydantic import ValidationError

from airtrace.config import Settings, get_settings
from airtrace.models.route_models import GeoPoint, PlannedRoute, RouteInstruction
from airtrace.services.route_adapter import to_polyline


logger = logging.getLogger(__name__)

MAX_ALTERNATIVES = 5


def _instruction_text(step: Dict[str, Any]) -> str:
    maneuver = step.get("maneuver") or {}
    words = [maneuver.get("type", ""), maneuver.get("modifier", "")]
    text = " ".join(w for w in words if w).strip().capitalize()
    if step.get("name"):
        text = f"{text} onto {step['name']}" if text else step["name"]
    return text


def _instructions(route: Dict[str, Any]) -> List[RouteInstruction]:
    out = []
    for leg in route.get("legs") or []:
        for step in leg.get("steps") or []:
            out.append(
                RouteInstruction(
                    text=_instruction_text(step),
                    type=(step.get("maneuver") or {}).get("type"),
                    distance_m=float(step.get("distance") or 0.0),
                    duration_s=float(step.get("duration") or 0.0),
                )
            )
    return out


def planned_routes_from_osrm(payload: Dict[str, Any]) -> List[PlannedRoute]:
    """
    OSRM /route response -> PlannedRoutes, shortest first, at most
    MAX_ALTERNATIVES. Route ids are display indexes after sorting.
    """
    if payload.get("code") != "Ok":
        logger.error("OSRM error: %s %s", payload.get("code"), payload.get("message"))
        return []

    raw_routes = sorted(payload.get("routes") or [], key=lambda r: float(r.get("distance") or 0.0))
    out = []
    for n, r in enumerate(raw_routes[:MAX_ALTERNATIVES]):
        idx = len(out)
        legs = r.get("legs") or []
        summary = ", ".join(leg.get("summary") for leg in legs if leg.get("summary"))
        try:
            route = PlannedRoute(
                route_id=idx,
                name=summary or f"Route {idx + 1}",
                coordinates=to_polyline(r.get("geometry")),
                distance_m=float(r.get("distance") or 0.0),
                duration_s=float(r.get("duration") or 0.0),
                instructions=_instructions(r),
            )
        except (ValueError, ValidationError) as e:
            # RouteFormatError is a ValueError; one bad alternative must not drop the rest
            logger.warning("Skipping OSRM alternative %d: %s", n, e)
            continue
        out.append(route)
    return out


class OSRMRoutingClient:
    """Routing collaborator talking to an OSRM-compatible HTTP server."""

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.settings = settings or get_settings()
        self.session = session or requests.Session()

    def plan_routes(self, start: GeoPoint, end: GeoPoint) -> List[PlannedRoute]:
        coords = f"{start.longitude},{start.latitude};{end.longitude},{end.latitude}"
        try:
            resp = self.session.get(
                f"{self.settings.osrm_base_url}/route/v1/driving/{coords}",
                params={
                    "alternatives": "true",
                    "overview": "full",
                    "geometries": "geojson",
                    "steps": "true",
                },
                timeout=self.settings.http_timeout_s,
            )
            resp.raise_for_status()
            return planned_routes_from_osrm(resp.json())
        except (requests.RequestException, ValueError, KeyError, ValidationError) as e:
            # RouteFormatError is a ValueError too
            logger.error("Routing request failed: %s", e)
            return []
