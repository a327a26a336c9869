"""Routing endpoints — optimized daily route for a crew."""

from __future__ import annotations

import asyncio
import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from landscaper.application.errors import ProviderUnavailableError
from landscaper.application.use_cases.optimize_route import PlanDailyRouteUseCase
from landscaper.config import settings
from landscaper.domain.entities.location import Location
from landscaper.domain.entities.route import OptimizedRoute
from landscaper.infrastructure.api.dependencies import get_plan_route_uc

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/routes", tags=["routing"])


class OptimizeRouteRequest(BaseModel):
    day: date
    employee_id: str | None = None
    start_address: str | None = None


@router.post("/optimize")
async def optimize_route(
    body: OptimizeRouteRequest,
    uc: PlanDailyRouteUseCase = Depends(get_plan_route_uc),
):
    """Order the day's job sites into a drivable sequence.

    ``route`` is null when there is nothing to optimize.
    """
    try:
        plan = await asyncio.wait_for(
            uc.execute(body.day, employee_id=body.employee_id, start_address=body.start_address),
            timeout=settings.route_timeout_seconds,
        )
    except ProviderUnavailableError as e:
        logger.error("Route optimization aborted: %s", e)
        raise HTTPException(status_code=502, detail=f"Route optimization unavailable: {e.reason}")
    except asyncio.TimeoutError:
        logger.error("Route optimization for %s timed out", body.day)
        raise HTTPException(status_code=504, detail="Route optimization timed out")

    return {
        "day": body.day.isoformat(),
        "route": _serialize_route(plan.route) if plan.route else None,
        "unresolved_job_ids": plan.unresolved_job_ids,
    }


def _serialize_location(loc: Location) -> dict:
    return {
        "id": loc.id,
        "name": loc.name,
        "address": loc.address,
        "lat": loc.lat,
        "lng": loc.lng,
    }


def _serialize_route(route: OptimizedRoute) -> dict:
    return {
        "stops": [_serialize_location(s) for s in route.stops],
        "legs": [
            {
                "origin_id": leg.origin.id,
                "destination_id": leg.destination.id,
                "distance": leg.distance,
                "duration": leg.duration,
                "distance_meters": leg.distance_meters,
                "duration_seconds": leg.duration_seconds,
            }
            for leg in route.legs
        ],
        "skipped": [_serialize_location(s) for s in route.skipped],
        "total_distance": route.total_distance,
        "total_duration": route.total_duration,
        "total_distance_meters": route.total_distance_meters,
        "total_duration_seconds": route.total_duration_seconds,
    }
