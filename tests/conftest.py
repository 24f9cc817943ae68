"""Shared fixtures: a fake BoM upstream served through httpx.MockTransport."""

import httpx
import pytest
from fastapi.testclient import TestClient

from bom_radar_viewer.cache import WeatherCache
from bom_radar_viewer.config import Settings
from bom_radar_viewer.server import create_app

LOOP_HTML = """
<html><head><script type="text/javascript">
var theImageNames = new Array();
nImages = 3;
theImageNames[0] = "/radar/IDR663.T.202512040100.png";
theImageNames[1] = '/radar/IDR663.T.202512040106.png';
theImageNames[2] = "/radar/IDR663.T.202512040112.png";
</script></head><body></body></html>
"""

BRISBANE_LOCATION = {
    "data": [
        {"geohash": "r7hgdp8", "id": "Brisbane-r7hgdp8", "name": "Brisbane", "state": "QLD"},
        {"geohash": "r7hg6xs", "id": "Spring Hill-r7hg6xs", "name": "Spring Hill", "state": "QLD"},
    ]
}

BRISBANE_OBSERVATIONS = {
    "data": {
        "temp": 24.3,
        "temp_feels_like": 25.1,
        "wind": {"speed_kilometre": 13, "direction": "SE"},
        "humidity": 68,
        "rain_since_9am": 0.2,
    }
}

BRISBANE_FORECAST = {
    "data": [
        {
            "date": "2025-12-04T14:00:00Z",
            "temp_max": 29,
            "temp_min": 21,
            "short_text": "Partly cloudy.",
            "uv": {"category": "extreme", "max_index": 13},
            "fire_danger": "High",
            "astronomical": {"sunrise_time": "2025-12-03T18:45:00Z", "sunset_time": "2025-12-04T09:30:00Z"},
        }
    ]
}


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeBoM:
    """Canned responses keyed by URL path; records every request it sees."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, path, status=200, json=None, text=None, error=None):
        self.routes[path] = (status, json, text, error)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if request.url.path not in self.routes:
            return httpx.Response(404)
        status, json, text, error = self.routes[request.url.path]
        if error is not None:
            raise error("upstream unreachable", request=request)
        if json is not None:
            return httpx.Response(status, json=json)
        return httpx.Response(status, text=text or "")

    def paths(self):
        return [call.url.path for call in self.calls]


@pytest.fixture
def bom():
    return FakeBoM()


@pytest.fixture
def brisbane(bom):
    """Upstream with one location, observations and a one-day forecast."""
    bom.add("/v1/locations", json=BRISBANE_LOCATION)
    bom.add("/v1/locations/r7hgdp8/observations", json=BRISBANE_OBSERVATIONS)
    bom.add("/v1/locations/r7hgdp8/forecasts/daily", json=BRISBANE_FORECAST)
    return bom


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def http_client(bom):
    return httpx.AsyncClient(transport=httpx.MockTransport(bom.handler))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return WeatherCache(clock=clock)


@pytest.fixture
def api(settings, http_client, cache):
    app = create_app(settings=settings, http_client=http_client, cache=cache)
    with TestClient(app) as client:
        yield client
