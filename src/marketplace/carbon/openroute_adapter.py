"""OpenRouteService adapter — geocoding and driving distance over HTTPS.

Every call is bounded by a timeout. Network errors, non-2xx answers and
bodies without the expected shape are logged and reported as ``None``.
"""

import requests
import structlog

from marketplace.carbon.port import Coordinates, GeoRoutingService

logger = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://api.openrouteservice.org"


class OpenRouteServiceAdapter(GeoRoutingService):
    def __init__(self, api_key: str, timeout: float = 5.0, base_url: str = DEFAULT_BASE_URL, session=None) -> None:
        self.api_key = api_key
        self.timeout = timeout
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()

    def _get_json(self, path: str, params: dict) -> dict | None:
        try:
            response = self.session.get(
                f"{self.base_url}{path}",
                params={"api_key": self.api_key, **params},
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.warning("OpenRouteService request failed", path=path, error=str(exc))
            return None

    def geocode(self, city: str) -> Coordinates | None:
        if not city:
            return None

        body = self._get_json("/geocode/search", {"text": city, "size": 1})
        try:
            longitude, latitude = body["features"][0]["geometry"]["coordinates"][:2]
            return Coordinates(latitude=float(latitude), longitude=float(longitude))
        except (KeyError, IndexError, TypeError, ValueError):
            logger.warning("City could not be geocoded", city=city)
            return None

    def route_distance_meters(self, origin: Coordinates, destination: Coordinates) -> float | None:
        body = self._get_json(
            "/v2/directions/driving-car",
            {
                "start": f"{origin.longitude},{origin.latitude}",
                "end": f"{destination.longitude},{destination.latitude}",
            },
        )
        try:
            return float(body["features"][0]["properties"]["summary"]["distance"])
        except (KeyError, IndexError, TypeError, ValueError):
            logger.warning("Route distance unavailable", origin=origin, destination=destination)
            return None
