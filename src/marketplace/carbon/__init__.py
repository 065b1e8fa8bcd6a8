"""Geo-routing factory.

Provides get_geo_routing() / set_geo_routing() to swap implementations:
- FakeGeoRouting for development and testing (default)
- OpenRouteServiceAdapter when GEO_ROUTING_ADAPTER=openrouteservice
"""

import os

from marketplace.carbon.port import GeoRoutingService

_current_service: GeoRoutingService | None = None


def get_geo_routing() -> GeoRoutingService:
    """Return the configured geo-routing service (singleton)."""
    global _current_service
    if _current_service is None:
        adapter = os.environ.get("GEO_ROUTING_ADAPTER", "fake")
        if adapter == "fake":
            from marketplace.carbon.fake_adapter import FakeGeoRouting

            _current_service = FakeGeoRouting()
        elif adapter == "openrouteservice":
            from marketplace.carbon.openroute_adapter import OpenRouteServiceAdapter

            _current_service = OpenRouteServiceAdapter(
                api_key=os.environ.get("OPENROUTESERVICE_API_KEY", ""),
                timeout=float(os.environ.get("GEO_ROUTING_TIMEOUT", "5")),
            )
        else:
            raise ValueError(f"Unknown geo-routing adapter: {adapter}")
    return _current_service


def set_geo_routing(service: GeoRoutingService) -> None:
    """Override the active geo-routing service (useful for tests)."""
    global _current_service
    _current_service = service


def reset_geo_routing() -> None:
    """Reset to the configured default."""
    global _current_service
    _current_service = None
