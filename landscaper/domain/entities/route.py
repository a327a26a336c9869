"""Route entities — legs between consecutive stops and the optimized route."""

from dataclasses import dataclass, field

from landscaper.domain.entities.location import Location
from landscaper.domain.policies.route_formatting import format_distance, format_duration
from landscaper.domain.value_objects.travel import TravelEstimate


@dataclass(frozen=True)
class RouteLeg:
    origin: Location
    destination: Location
    estimate: TravelEstimate

    @property
    def distance(self) -> str:
        return self.estimate.distance_text

    @property
    def duration(self) -> str:
        return self.estimate.duration_text

    @property
    def distance_meters(self) -> float:
        return self.estimate.distance_meters

    @property
    def duration_seconds(self) -> float:
        return self.estimate.duration_seconds


@dataclass
class OptimizedRoute:
    """Ordered stops of a single-vehicle route.

    legs[i] connects stops[i] to stops[i + 1]. Locations that could not be
    reached during optimization are listed in ``skipped``.
    """

    stops: list[Location]
    legs: list[RouteLeg] = field(default_factory=list)
    skipped: list[Location] = field(default_factory=list)

    @property
    def total_distance_meters(self) -> float:
        return sum(leg.distance_meters for leg in self.legs)

    @property
    def total_duration_seconds(self) -> float:
        return sum(leg.duration_seconds for leg in self.legs)

    @property
    def total_distance(self) -> str:
        return format_distance(self.total_distance_meters)

    @property
    def total_duration(self) -> str:
        return format_duration(self.total_duration_seconds)
