"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

import logging

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from landscaper.adapters.geocoder.google_maps_adapter import GoogleMapsAdapter
from landscaper.adapters.geocoder.nominatim_adapter import NominatimAdapter
from landscaper.adapters.persistence.database import get_session
from landscaper.adapters.persistence.repositories import SqlJobRepository
from landscaper.adapters.routing.google_maps_routing_adapter import GoogleMapsRoutingAdapter
from landscaper.adapters.routing.straight_line_adapter import StraightLineRoutingAdapter
from landscaper.application.ports.geocoder_port import GeocoderPort
from landscaper.application.ports.routing_port import RoutingPort
from landscaper.application.use_cases.detect_conflicts import ScheduleConflictsUseCase
from landscaper.application.use_cases.optimize_route import PlanDailyRouteUseCase
from landscaper.config import settings

logger = logging.getLogger(__name__)

# Singleton adapters (stateless or with internal caching)
if settings.google_maps_api_key:
    _geocoder_adapter: GeocoderPort = GoogleMapsAdapter()
    logger.info("Using Google Maps for geocoding")
else:
    _geocoder_adapter = NominatimAdapter()

if settings.routing_provider == "google" and settings.google_maps_api_key:
    _routing_adapter: RoutingPort = GoogleMapsRoutingAdapter()
    logger.info("Using Google Maps for routing")
else:
    _routing_adapter = StraightLineRoutingAdapter()
    logger.info("Using straight-line estimates for routing")


def get_geocoder() -> GeocoderPort:
    return _geocoder_adapter


def get_routing() -> RoutingPort:
    return _routing_adapter


def get_job_repo(session: AsyncSession = Depends(get_session)) -> SqlJobRepository:
    return SqlJobRepository(session)


def get_conflicts_uc(
    job_repo: SqlJobRepository = Depends(get_job_repo),
) -> ScheduleConflictsUseCase:
    return ScheduleConflictsUseCase(job_repo=job_repo)


def get_plan_route_uc(
    job_repo: SqlJobRepository = Depends(get_job_repo),
    geocoder: GeocoderPort = Depends(get_geocoder),
    routing: RoutingPort = Depends(get_routing),
) -> PlanDailyRouteUseCase:
    return PlanDailyRouteUseCase(
        job_repo=job_repo,
        geocoder=geocoder,
        routing=routing,
        geocode_concurrency=settings.geocode_concurrency,
    )
