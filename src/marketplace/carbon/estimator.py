"""Carbon savings estimator — advisory, best-effort.

    savings = weight × distance_km × waste_factor × mode_factor

Distance comes from the geo-routing service. Any missing input or lookup
failure yields ``None``; the estimate never raises and never blocks a write.
"""

from dataclasses import dataclass

import structlog

from marketplace.carbon import get_geo_routing
from marketplace.carbon.port import GeoRoutingService

logger = structlog.get_logger(__name__)

WASTE_FACTORS = {
    "organic": 1.2,
    "synthetic": 1.1,
    "mixed": 1.3,
    "recyclable": 0.9,
}
DEFAULT_WASTE_FACTOR = 1.0

MODE_FACTORS = {
    "truck": 0.05,
    "ship": 0.03,
    "air": 0.18,
}
DEFAULT_MODE_FACTOR = 0.05

DEFAULT_WASTE_TYPE = "organic"
DEFAULT_MODE = "truck"


@dataclass(frozen=True)
class CarbonEstimate:
    """Estimated kg of CO2 saved, with the inputs that produced it."""

    savings: float
    from_city: str
    to_city: str
    distance_km: float
    weight: float
    mode: str
    waste_type: str
    formula: str

    def details(self) -> dict:
        return {
            "fromCity": self.from_city,
            "toCity": self.to_city,
            "distanceKm": self.distance_km,
            "weight": self.weight,
            "mode": self.mode,
            "wasteType": self.waste_type,
            "formula": self.formula,
        }


def waste_factor(waste_type: str | None) -> float:
    return WASTE_FACTORS.get((waste_type or "").lower(), DEFAULT_WASTE_FACTOR)


def mode_factor(mode: str | None) -> float:
    return MODE_FACTORS.get((mode or "").lower(), DEFAULT_MODE_FACTOR)


def estimate(
    weight,
    from_city,
    to_city,
    waste_type=DEFAULT_WASTE_TYPE,
    mode=DEFAULT_MODE,
    service: GeoRoutingService | None = None,
) -> CarbonEstimate | None:
    if not weight or weight <= 0 or not from_city or not to_city:
        return None

    waste_type = waste_type or DEFAULT_WASTE_TYPE
    mode = mode or DEFAULT_MODE
    service = service or get_geo_routing()

    try:
        origin = service.geocode(from_city)
        destination = service.geocode(to_city)
        if origin is None or destination is None:
            return None
        distance_meters = service.route_distance_meters(origin, destination)
    except Exception as exc:
        # Estimates never fail a read
        logger.warning("Carbon estimate unavailable", from_city=from_city, to_city=to_city, error=str(exc))
        return None

    if distance_meters is None:
        return None

    distance_km = distance_meters / 1000
    w_factor = waste_factor(waste_type)
    m_factor = mode_factor(mode)
    savings = weight * distance_km * w_factor * m_factor

    return CarbonEstimate(
        savings=round(savings, 2),
        from_city=from_city,
        to_city=to_city,
        distance_km=round(distance_km, 1),
        weight=weight,
        mode=mode,
        waste_type=waste_type,
        formula=(
            f"{weight} kg × {distance_km:.1f} km × {w_factor} ({waste_type}) × {m_factor} ({mode})"
            f" = {savings:.2f} kg CO₂"
        ),
    )
