"""Deterministic in-memory geo-routing for development and testing.

Knows a small table of cities and measures great-circle distance between
them. It can be configured to fail, or to answer a fixed distance, so carbon
estimates are predictable without network access.
"""

import math

from marketplace.carbon.port import Coordinates, GeoRoutingService

EARTH_RADIUS_METERS = 6_371_000

KNOWN_CITIES = {
    "new york": Coordinates(40.7128, -74.0060),
    "san francisco": Coordinates(37.7749, -122.4194),
    "los angeles": Coordinates(34.0522, -118.2437),
    "chicago": Coordinates(41.8781, -87.6298),
    "boston": Coordinates(42.3601, -71.0589),
    "seattle": Coordinates(47.6062, -122.3321),
    "mumbai": Coordinates(19.0760, 72.8777),
    "delhi": Coordinates(28.7041, 77.1025),
    "bengaluru": Coordinates(12.9716, 77.5946),
    "london": Coordinates(51.5074, -0.1278),
}


def haversine_meters(origin: Coordinates, destination: Coordinates) -> float:
    lat1, lat2 = math.radians(origin.latitude), math.radians(destination.latitude)
    dlat = lat2 - lat1
    dlon = math.radians(destination.longitude - origin.longitude)
    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_METERS * math.asin(math.sqrt(a))


class FakeGeoRouting(GeoRoutingService):
    """Configurable fake geo-routing service."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.fixed_distance_meters: float | None = None
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool = True, fixed_distance_meters: float | None = None) -> None:
        """Configure behavior at runtime."""
        self.should_succeed = should_succeed
        self.fixed_distance_meters = fixed_distance_meters

    def geocode(self, city: str) -> Coordinates | None:
        self.calls.append({"method": "geocode", "city": city})
        if not self.should_succeed or not city:
            return None

        name = city.strip().lower()
        if name in KNOWN_CITIES:
            return KNOWN_CITIES[name]
        # "New York, USA" resolves through its first segment
        return KNOWN_CITIES.get(name.split(",")[0].strip())

    def route_distance_meters(self, origin: Coordinates, destination: Coordinates) -> float | None:
        self.calls.append({"method": "route_distance_meters", "origin": origin, "destination": destination})
        if not self.should_succeed:
            return None
        if self.fixed_distance_meters is not None:
            return self.fixed_distance_meters
        return haversine_meters(origin, destination)
