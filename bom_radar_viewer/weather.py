"""
Current conditions and daily forecast from the BoM weather API.

Coordinates are resolved to a BoM location (and its geohash) first; the
observation and forecast calls then run together. Either of those two may
fail without taking the other, or the whole response, down with it.
"""

import asyncio
from typing import Any, Awaitable, Optional

import httpx

from .errors import LocationNotFoundError, PartialDataError, UpstreamFetchError
from .logging import get_logger
from .models import WeatherLocation

logger = get_logger(__name__)


async def _get_json(client: httpx.AsyncClient, url: str, params: Optional[dict] = None) -> Any:
    """GET and decode JSON, turning every failure into UpstreamFetchError."""
    try:
        response = await client.get(url, params=params)
    except httpx.TimeoutException as e:
        raise UpstreamFetchError(f"Request timed out: {url}", url=url) from e
    except httpx.HTTPError as e:
        raise UpstreamFetchError(f"Network error: {e}", url=url) from e

    if not response.is_success:
        raise UpstreamFetchError(
            f"BoM API error: {response.reason_phrase}",
            status=response.status_code,
            reason=response.reason_phrase,
            url=url,
        )

    try:
        return response.json()
    except ValueError as e:
        raise UpstreamFetchError(f"Invalid JSON from {url}: {e}", status=response.status_code, url=url) from e


async def fetch_location(client: httpx.AsyncClient, lat: float, lng: float, api_base: str) -> dict:
    """Closest BoM location to a coordinate pair.

    The search endpoint returns candidates nearest first; only the first
    one is used.
    """
    data = await _get_json(client, f"{api_base}/locations", params={"search": f"{lat},{lng}"})

    candidates = data.get("data") if isinstance(data, dict) else None
    if not isinstance(candidates, list) or not candidates:
        raise LocationNotFoundError(f"No BoM location for {lat},{lng}")

    first = candidates[0]
    if not isinstance(first, dict) or not first.get("geohash"):
        raise LocationNotFoundError(f"No BoM location for {lat},{lng}")
    return {"geohash": first["geohash"], "name": first.get("name"), "state": first.get("state")}


async def fetch_observations(client: httpx.AsyncClient, geohash: str, api_base: str) -> Optional[dict]:
    try:
        result = await _get_json(client, f"{api_base}/locations/{geohash}/observations")
    except UpstreamFetchError as e:
        raise PartialDataError(f"observations: {e}") from e
    if not isinstance(result, dict):
        raise PartialDataError(f"observations: expected a JSON object, got {type(result).__name__}")
    return result.get("data") or None


async def fetch_daily_forecast(client: httpx.AsyncClient, geohash: str, api_base: str) -> Optional[dict]:
    """Daily forecast as ``{"today": first day, "daily": all days}``, or None."""
    try:
        result = await _get_json(client, f"{api_base}/locations/{geohash}/forecasts/daily")
    except UpstreamFetchError as e:
        raise PartialDataError(f"forecast: {e}") from e
    if not isinstance(result, dict):
        raise PartialDataError(f"forecast: expected a JSON object, got {type(result).__name__}")

    days = result.get("data") or []
    if not isinstance(days, list):
        raise PartialDataError(f"forecast: expected a list of days, got {type(days).__name__}")
    if not days:
        return None
    return {"today": days[0], "daily": days}


async def _or_none(fetch: Awaitable[Optional[dict]], geohash: str) -> Optional[dict]:
    try:
        return await fetch
    except PartialDataError as e:
        logger.warning(f"Partial weather data for {geohash}: {e}", extra={"geohash": geohash})
        return None


async def aggregate_weather(client: httpx.AsyncClient, lat: float, lng: float, api_base: str) -> dict:
    """Location, observations and forecast for a coordinate pair.

    Raises:
        UpstreamFetchError: the location search failed
        LocationNotFoundError: the location search found nothing
    """
    location = await fetch_location(client, lat, lng, api_base)
    geohash = location["geohash"]

    observations, forecast = await asyncio.gather(
        _or_none(fetch_observations(client, geohash, api_base), geohash),
        _or_none(fetch_daily_forecast(client, geohash, api_base), geohash),
    )

    logger.info(
        f"Weather for {location['name']} ({geohash}): "
        f"observations={'yes' if observations else 'no'} forecast={'yes' if forecast else 'no'}",
        extra={"geohash": geohash},
    )

    return {
        "location": WeatherLocation(**location, lat=lat, lng=lng).model_dump(),
        "observations": observations,
        "forecast": forecast,
    }
