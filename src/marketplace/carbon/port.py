"""Geo-routing port (abstract interface).

Carbon estimates need two things from the outside world: where a city is,
and how far a vehicle drives between two points. Adapters answer ``None``
when they cannot tell; they never raise.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinates:
    """A point on the map, in decimal degrees."""

    latitude: float
    longitude: float


class GeoRoutingService(ABC):
    """Abstract geocoding and routing interface."""

    @abstractmethod
    def geocode(self, city: str) -> Coordinates | None:
        """Resolve a free-text city name to coordinates."""
        ...

    @abstractmethod
    def route_distance_meters(self, origin: Coordinates, destination: Coordinates) -> float | None:
        """Driving distance between two points, in meters."""
        ...
