"""Location entity — a geocoded job site, linked back to its job by id."""

from dataclasses import dataclass

from landscaper.domain.value_objects.geo_point import GeoPoint


@dataclass(frozen=True)
class Location:
    id: str
    name: str
    address: str
    lat: float
    lng: float

    @property
    def point(self) -> GeoPoint:
        return GeoPoint(latitude=self.lat, longitude=self.lng)
