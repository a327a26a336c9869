"""Straight-line routing adapter — haversine distance at a fixed average speed.

Used when no routing provider is configured (local development, demos).
Never fails for valid coordinates.
"""

from __future__ import annotations

from landscaper.application.ports.routing_port import RoutingPort
from landscaper.config import settings
from landscaper.domain.policies.route_formatting import format_distance, format_duration
from landscaper.domain.value_objects.geo_point import GeoPoint
from landscaper.domain.value_objects.travel import TravelEstimate


class StraightLineRoutingAdapter(RoutingPort):
    def __init__(self, speed_kmh: float | None = None):
        self._speed_kmh = speed_kmh or settings.straight_line_speed_kmh
        if self._speed_kmh <= 0:
            raise ValueError("Average speed must be positive")

    def estimate(self, origin: GeoPoint, destination: GeoPoint) -> TravelEstimate:
        meters = origin.haversine_km(destination) * 1000
        seconds = meters / (self._speed_kmh * 1000 / 3600)
        return TravelEstimate(
            distance_meters=meters,
            duration_seconds=seconds,
            distance_text=format_distance(meters),
            duration_text=format_duration(seconds),
        )

    async def route_between(
        self, origin: GeoPoint, destination: GeoPoint
    ) -> TravelEstimate | None:
        return self.estimate(origin, destination)

    async def distance_matrix(
        self, origin: GeoPoint, destinations: list[GeoPoint]
    ) -> list[TravelEstimate | None]:
        return [self.estimate(origin, d) for d in destinations]
