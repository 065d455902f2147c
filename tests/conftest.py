"""Test configuration and fixtures."""

import json

import httpx
import pytest

from weather_cli.core.logging import configure_logging
from weather_cli.services.weather import WeatherService


@pytest.fixture(autouse=True)
def quiet_logging():
    """Reset structlog to the default level before every test."""
    configure_logging()


@pytest.fixture
def mock_json_payload():
    """Mock wttr.in format=j1 response."""
    return {
        "current_condition": [
            {
                "temp_C": "15",
                "temp_F": "59",
                "weatherDesc": [{"value": "Clear"}],
                "windspeedKmph": "10",
                "winddir16Point": "N",
                "humidity": "50",
                "visibility": "10",
                "FeelsLikeC": "14",
            }
        ],
        "nearest_area": [
            {
                "areaName": [{"value": "London"}],
                "country": [{"value": "UK"}],
            }
        ],
    }


@pytest.fixture
def mock_full_page():
    """Mock wttr.in HTML page with an ASCII-art block."""
    return (
        "<html><head><title>Weather report: London</title></head>"
        "<body><pre>Weather: 20°C, feels like 18°C, max 20°C</pre>"
        "<pre>Follow @igor_chubin</pre></body></html>"
    )


@pytest.fixture
def make_service():
    """Factory building a WeatherService backed by an httpx mock transport.

    The handler may be a callable taking the request, or a (status, text) pair.
    Every request sent is appended to ``service.requests``.
    """
    services = []

    def factory(handler) -> WeatherService:
        requests = []

        def dispatch(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if callable(handler):
                return handler(request)
            status, text = handler
            return httpx.Response(status, text=text)

        client = httpx.Client(transport=httpx.MockTransport(dispatch))
        service = WeatherService(client=client)
        service.requests = requests
        services.append(service)
        return service

    yield factory

    for service in services:
        service.close()


@pytest.fixture
def json_body(mock_json_payload):
    """Serialized j1 payload."""
    return json.dumps(mock_json_payload)
