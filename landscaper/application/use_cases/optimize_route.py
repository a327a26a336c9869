"""Route optimization — greedy nearest-neighbor ordering of job sites."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

from landscaper.application.errors import TransientProviderError
from landscaper.application.ports.geocoder_port import GeocoderPort
from landscaper.application.ports.job_repo import JobRepository
from landscaper.application.ports.routing_port import RoutingPort
from landscaper.application.use_cases.resolve_locations import JobsToLocationsUseCase
from landscaper.domain.entities.location import Location
from landscaper.domain.entities.route import OptimizedRoute, RouteLeg
from landscaper.domain.policies.schedule_filters import day_bounds, jobs_for_employee

logger = logging.getLogger(__name__)

START_LOCATION_ID = "start"


class RouteOptimizer:
    """Orders locations into a single-vehicle route.

    Each step drives to the unvisited location with the shortest travel time
    from the current stop. Legs are computed strictly in sequence since every
    choice depends on the previous stop.

    Per-location failures skip that location and continue. A
    ProviderUnavailableError from the routing port aborts the run, as does
    cancellation; neither returns a partial route.
    """

    def __init__(self, routing: RoutingPort):
        self._routing = routing

    async def optimize(
        self,
        locations: Sequence[Location],
        start: Location | None = None,
    ) -> OptimizedRoute | None:
        """Build the route, or return None when there is nothing to optimize."""
        if not locations:
            return None

        current = start or locations[0]
        remaining = [loc for loc in locations if loc.id != current.id]
        route = OptimizedRoute(stops=[current])

        while remaining:
            nearest = await self._nearest_of(current, remaining)
            remaining = [loc for loc in remaining if loc.id != nearest.id]

            try:
                estimate = await self._routing.route_between(current.point, nearest.point)
            except TransientProviderError:
                logger.warning("Routing %s → %s failed after retries", current.id, nearest.id)
                estimate = None

            if estimate is None:
                logger.warning("No route to %s (%s), skipping location", nearest.id, nearest.address)
                route.skipped.append(nearest)
                continue

            route.legs.append(RouteLeg(origin=current, destination=nearest, estimate=estimate))
            route.stops.append(nearest)
            current = nearest

        logger.info(
            "Optimized route: %d stops, %s, %s (%d skipped)",
            len(route.stops), route.total_distance, route.total_duration, len(route.skipped),
        )
        return route

    async def _nearest_of(self, origin: Location, candidates: list[Location]) -> Location:
        """Candidate with the shortest travel time; the first one if unknown."""
        if len(candidates) == 1:
            return candidates[0]

        try:
            estimates = await self._routing.distance_matrix(
                origin.point, [c.point for c in candidates]
            )
        except TransientProviderError:
            logger.warning("Distance matrix from %s failed, using first candidate", origin.id)
            return candidates[0]

        best_index = None
        best_duration = None
        for index, estimate in enumerate(estimates):
            if estimate is None:
                continue
            if best_duration is None or estimate.duration_seconds < best_duration:
                best_index = index
                best_duration = estimate.duration_seconds

        if best_index is None:
            logger.warning("Distance matrix from %s had no usable entries, using first candidate", origin.id)
            return candidates[0]
        return candidates[best_index]


@dataclass
class RoutePlan:
    """Result of planning one day's route."""

    route: OptimizedRoute | None
    unresolved_job_ids: list[str] = field(default_factory=list)


class PlanDailyRouteUseCase:
    """Load a day's jobs, geocode their sites and order them into a route."""

    def __init__(
        self,
        job_repo: JobRepository,
        geocoder: GeocoderPort,
        routing: RoutingPort,
        geocode_concurrency: int = 5,
    ):
        self._jobs = job_repo
        self._geocoder = geocoder
        self._resolve = JobsToLocationsUseCase(geocoder, concurrency=geocode_concurrency)
        self._optimizer = RouteOptimizer(routing)

    async def execute(
        self,
        day: date,
        employee_id: str | None = None,
        start_address: str | None = None,
    ) -> RoutePlan:
        """Plan the route.

        Pipeline:
        1. Load jobs starting on *day* (optionally one employee's)
        2. Geocode job sites (custom address, else client address)
        3. Geocode the optional start address (e.g. the yard)
        4. Nearest-neighbor ordering
        """
        start, end = day_bounds(day)
        jobs = await self._jobs.get_scheduled_between(start, end, employee_id=employee_id)
        jobs = jobs_for_employee(jobs, employee_id)
        logger.info("Planning route for %s: %d jobs (employee=%s)", day, len(jobs), employee_id)

        resolved = await self._resolve.execute(jobs)

        start_location = None
        if start_address and resolved.locations:
            point = await self._geocoder.geocode(start_address)
            if point:
                start_location = Location(
                    id=START_LOCATION_ID,
                    name="Start",
                    address=start_address,
                    lat=point.latitude,
                    lng=point.longitude,
                )
            else:
                logger.warning("Could not geocode start address '%s', starting at first job", start_address)

        route = await self._optimizer.optimize(resolved.locations, start=start_location)
        return RoutePlan(route=route, unresolved_job_ids=resolved.unresolved)
