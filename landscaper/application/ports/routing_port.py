"""Port interface for driving distance / duration queries."""

from abc import ABC, abstractmethod

from landscaper.domain.value_objects.geo_point import GeoPoint
from landscaper.domain.value_objects.travel import TravelEstimate


class RoutingPort(ABC):
    @abstractmethod
    async def route_between(
        self, origin: GeoPoint, destination: GeoPoint
    ) -> TravelEstimate | None:
        """Driving estimate from origin to destination.

        Returns None if no route exists or the provider could not answer.
        """
        ...

    @abstractmethod
    async def distance_matrix(
        self, origin: GeoPoint, destinations: list[GeoPoint]
    ) -> list[TravelEstimate | None]:
        """Driving estimates from one origin to many destinations.

        The result is index-aligned with *destinations*; unreachable
        destinations are None.
        """
        ...
