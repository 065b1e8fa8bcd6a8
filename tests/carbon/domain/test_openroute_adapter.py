"""Tests for the OpenRouteService adapter with a mocked HTTP session."""

from unittest.mock import MagicMock

import pytest
import requests
from marketplace.carbon.openroute_adapter import OpenRouteServiceAdapter
from marketplace.carbon.port import Coordinates

CHICAGO = Coordinates(latitude=41.8781, longitude=-87.6298)
BOSTON = Coordinates(latitude=42.3601, longitude=-71.0589)


def _response(payload=None, status_error=None, json_error=None):
    response = MagicMock()
    if status_error:
        response.raise_for_status.side_effect = status_error
    if json_error:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


def _adapter(*responses):
    session = MagicMock()
    session.get.side_effect = list(responses)
    return OpenRouteServiceAdapter(api_key="key-123", timeout=3.0, session=session), session


class TestGeocode:
    def test_returns_first_feature_coordinates(self):
        adapter, session = _adapter(_response({"features": [{"geometry": {"coordinates": [-87.6298, 41.8781]}}]}))

        result = adapter.geocode("Chicago")

        assert result == CHICAGO
        args, kwargs = session.get.call_args
        assert args[0] == "https://api.openrouteservice.org/geocode/search"
        assert kwargs["params"] == {"api_key": "key-123", "text": "Chicago", "size": 1}
        assert kwargs["timeout"] == 3.0

    def test_empty_features_gives_none(self):
        adapter, _ = _adapter(_response({"features": []}))
        assert adapter.geocode("Nowhere") is None

    def test_timeout_gives_none(self):
        adapter, _ = _adapter(requests.Timeout("slow"))
        assert adapter.geocode("Chicago") is None

    def test_http_error_gives_none(self):
        adapter, _ = _adapter(_response(status_error=requests.HTTPError("403 Forbidden")))
        assert adapter.geocode("Chicago") is None

    def test_malformed_body_gives_none(self):
        adapter, _ = _adapter(_response(json_error=ValueError("not json")))
        assert adapter.geocode("Chicago") is None

    def test_blank_city_skips_request(self):
        adapter, session = _adapter()
        assert adapter.geocode("") is None
        session.get.assert_not_called()


class TestRouteDistance:
    def test_returns_summary_distance(self):
        payload = {"features": [{"properties": {"summary": {"distance": 1587000.4}}}]}
        adapter, session = _adapter(_response(payload))

        result = adapter.route_distance_meters(CHICAGO, BOSTON)

        assert result == pytest.approx(1587000.4)
        args, kwargs = session.get.call_args
        assert args[0] == "https://api.openrouteservice.org/v2/directions/driving-car"
        assert kwargs["params"]["start"] == "-87.6298,41.8781"
        assert kwargs["params"]["end"] == "-71.0589,42.3601"

    def test_connection_error_gives_none(self):
        adapter, _ = _adapter(requests.ConnectionError("down"))
        assert adapter.route_distance_meters(CHICAGO, BOSTON) is None

    def test_missing_summary_gives_none(self):
        adapter, _ = _adapter(_response({"features": [{"properties": {}}]}))
        assert adapter.route_distance_meters(CHICAGO, BOSTON) is None
