"""Tests for the carbon savings estimator."""

import pytest
from marketplace.carbon import estimator, get_geo_routing, reset_geo_routing, set_geo_routing
from marketplace.carbon.fake_adapter import FakeGeoRouting, haversine_meters
from marketplace.carbon.port import Coordinates, GeoRoutingService


class _RaisingService(GeoRoutingService):
    def geocode(self, city):
        raise RuntimeError("adapter bug")

    def route_distance_meters(self, origin, destination):
        raise RuntimeError("adapter bug")


def _fixed(distance_meters):
    service = FakeGeoRouting()
    service.configure(fixed_distance_meters=distance_meters)
    return service


class TestFactors:
    @pytest.mark.parametrize(
        "waste_type, factor",
        [("organic", 1.2), ("synthetic", 1.1), ("mixed", 1.3), ("recyclable", 0.9), ("leather", 1.0), (None, 1.0)],
    )
    def test_waste_factors(self, waste_type, factor):
        assert estimator.waste_factor(waste_type) == factor

    @pytest.mark.parametrize(
        "mode, factor",
        [("truck", 0.05), ("ship", 0.03), ("air", 0.18), ("rail", 0.05), ("AIR", 0.18)],
    )
    def test_mode_factors(self, mode, factor):
        assert estimator.mode_factor(mode) == factor


class TestEstimate:
    def test_formula(self):
        result = estimator.estimate(50.0, "Chicago", "Boston", "mixed", "truck", service=_fixed(200_000))

        # 50 kg x 200 km x 1.3 x 0.05
        assert result.savings == pytest.approx(650.0)
        assert result.distance_km == 200.0
        assert result.weight == 50.0
        assert "200.0 km" in result.formula

    def test_defaults_are_organic_by_truck(self):
        result = estimator.estimate(10.0, "Chicago", "Boston", service=_fixed(100_000))

        assert result.waste_type == "organic"
        assert result.mode == "truck"
        assert result.savings == pytest.approx(60.0)

    def test_details_use_client_field_names(self):
        result = estimator.estimate(10.0, "Chicago", "Boston", service=_fixed(100_000))

        assert set(result.details()) == {"fromCity", "toCity", "distanceKm", "weight", "mode", "wasteType", "formula"}

    def test_unknown_city_gives_none(self):
        assert estimator.estimate(10.0, "Atlantis", "Boston", service=FakeGeoRouting()) is None

    @pytest.mark.parametrize(
        "weight, from_city, to_city",
        [(None, "Chicago", "Boston"), (0, "Chicago", "Boston"), (10.0, None, "Boston"), (10.0, "Chicago", "")],
    )
    def test_missing_inputs_give_none_without_lookups(self, weight, from_city, to_city):
        service = FakeGeoRouting()
        assert estimator.estimate(weight, from_city, to_city, service=service) is None
        assert service.calls == []

    def test_failing_service_gives_none(self):
        service = FakeGeoRouting()
        service.configure(should_succeed=False)
        assert estimator.estimate(10.0, "Chicago", "Boston", service=service) is None

    def test_raising_service_gives_none(self):
        assert estimator.estimate(10.0, "Chicago", "Boston", service=_RaisingService()) is None

    def test_uses_configured_service_by_default(self):
        set_geo_routing(_fixed(10_000))
        result = estimator.estimate(1.0, "Chicago", "Boston")
        assert result.distance_km == 10.0


class TestFakeGeoRouting:
    def test_city_with_country_suffix_resolves(self):
        service = FakeGeoRouting()
        assert service.geocode("New York, USA") == service.geocode("new york")

    def test_haversine_distance(self):
        new_york = Coordinates(40.7128, -74.0060)
        boston = Coordinates(42.3601, -71.0589)
        assert haversine_meters(new_york, boston) == pytest.approx(306_000, rel=0.01)

    def test_calls_are_recorded(self):
        service = FakeGeoRouting()
        service.geocode("Chicago")
        assert service.calls == [{"method": "geocode", "city": "Chicago"}]


class TestGeoRoutingFactory:
    def test_default_is_fake(self, monkeypatch):
        monkeypatch.delenv("GEO_ROUTING_ADAPTER", raising=False)
        reset_geo_routing()
        assert isinstance(get_geo_routing(), FakeGeoRouting)

    def test_openrouteservice_is_selected_by_env(self, monkeypatch):
        from marketplace.carbon.openroute_adapter import OpenRouteServiceAdapter

        monkeypatch.setenv("GEO_ROUTING_ADAPTER", "openrouteservice")
        monkeypatch.setenv("OPENROUTESERVICE_API_KEY", "key-123")
        monkeypatch.setenv("GEO_ROUTING_TIMEOUT", "2.5")
        reset_geo_routing()

        service = get_geo_routing()

        assert isinstance(service, OpenRouteServiceAdapter)
        assert service.api_key == "key-123"
        assert service.timeout == 2.5

    def test_unknown_adapter(self, monkeypatch):
        monkeypatch.setenv("GEO_ROUTING_ADAPTER", "carrier-pigeon")
        reset_geo_routing()
        with pytest.raises(ValueError):
            get_geo_routing()

    def test_set_overrides(self):
        service = FakeGeoRouting()
        set_geo_routing(service)
        assert get_geo_routing() is service
