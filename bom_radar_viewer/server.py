"""FastAPI server that proxies BoM radar loops and weather data for the browser client."""

import math
from contextlib import asynccontextmanager
from typing import Literal, Optional, Tuple

import httpx
from fastapi import APIRouter, FastAPI, HTTPException, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from .cache import WeatherCache, make_key
from .config import Settings
from .errors import LocationNotFoundError, NoDataError, UpstreamFetchError
from .geo import rank_stations
from .logging import get_logger
from .models import StationProduct
from .postcodes import is_valid_postcode, lookup_postcode
from .products import build_product_id, overlay_urls
from .scraper import fetch_radar_images, loop_url
from .stations import get_station, station_list
from .weather import aggregate_weather

logger = get_logger(__name__)

APP_NAME = "BoM Radar Viewer API"
# BoM publishes a new frame roughly every 5-6 minutes
REFRESH_SECONDS = 300
NEAREST_DEFAULT = 3

router = APIRouter()


# Middleware to stop browsers and proxies holding on to old frame lists
class NoCacheMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        if request.url.path.startswith("/api/radar") or request.url.path.startswith("/api/weather"):
            response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
        return response


def _error(status_code: int, error: str, message: Optional[str] = None) -> JSONResponse:
    content = {"error": error}
    if message is not None:
        content["message"] = message
    return JSONResponse(status_code=status_code, content=content)


def _parse_coordinates(lat: Optional[str], lng: Optional[str]) -> Tuple[float, float]:
    if not lat or not lng:
        raise HTTPException(status_code=400, detail="Missing required parameters: lat and lng")
    try:
        latitude, longitude = float(lat), float(lng)
    except ValueError:
        latitude = longitude = math.nan
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise HTTPException(status_code=400, detail="Invalid coordinates: lat and lng must be numbers")
    return latitude, longitude


# Routes
@router.get("/")
async def root():
    """List the available endpoints."""
    return {
        "message": APP_NAME,
        "endpoints": {
            "/api/radar/:productId": "Get radar images for a product ID (e.g., IDR663)",
            "/api/weather?lat={lat}&lng={lng}": "Get weather data for coordinates",
            "/api/stations": "List radar stations",
            "/api/stations/nearest?lat={lat}&lng={lng}&limit={n}": "Radar stations nearest a point",
            "/api/stations/:id/product?mode={rain|doppler}&range={64|128|256|512}": "Product ID and overlays for a station",
            "/api/postcodes/:postcode": "Approximate coordinates and nearest radars for a postcode",
            "/health": "Health check",
        },
    }


@router.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok", "message": f"{APP_NAME} is running"}


@router.get("/api/radar/{product_id}")
async def get_radar(product_id: str, request: Request):
    """Frame URLs and timestamps for a radar product, oldest first."""
    state = request.app.state
    try:
        images = await fetch_radar_images(state.http_client, product_id, state.settings.radar_host)
    except NoDataError:
        return _error(404, "No radar images found")
    except UpstreamFetchError as e:
        if e.status is None:
            logger.error(f"Radar fetch failed for {product_id}: {e}", extra={"product_id": product_id})
            return _error(500, "Internal server error", str(e))
        logger.warning(f"Upstream {e.status} for {product_id}", extra={"product_id": product_id, "status": e.status})
        return _error(e.status, f"Failed to fetch radar data: {e.reason}")
    except Exception as e:
        logger.exception(f"Error fetching radar images for {product_id}", extra={"product_id": product_id})
        return _error(500, "Internal server error", str(e))

    return {"images": [image.model_dump() for image in images]}


@router.get("/api/weather")
async def get_weather(
    request: Request,
    lat: Optional[str] = None,
    lng: Optional[str] = None,
):
    """Observations and daily forecast for the BoM location nearest a point."""
    latitude, longitude = _parse_coordinates(lat, lng)
    state = request.app.state

    key = make_key(latitude, longitude)
    cached = state.weather_cache.get(key)
    if cached is not None:
        logger.debug(f"Weather cache hit for {key}", extra={"cache": "hit"})
        return cached

    try:
        payload = await aggregate_weather(state.http_client, latitude, longitude, state.settings.weather_api)
    except LocationNotFoundError:
        return _error(404, "Could not find location data for these coordinates")
    except Exception as e:
        logger.exception(f"Error fetching weather for {key}")
        return _error(500, "Failed to fetch weather data", str(e))

    state.weather_cache.put(key, payload)
    return payload


@router.get("/api/stations")
async def get_stations():
    """Return the list of radar stations."""
    return {"stations": station_list()}


@router.get("/api/stations/nearest")
async def get_nearest_stations(
    lat: Optional[str] = None,
    lng: Optional[str] = None,
    limit: int = Query(NEAREST_DEFAULT, ge=1),
):
    """Radar stations ranked by distance from a point."""
    latitude, longitude = _parse_coordinates(lat, lng)
    return {"stations": rank_stations(latitude, longitude, station_list(), limit)}


@router.get("/api/stations/{base_id}/product", response_model=StationProduct)
async def get_station_product(
    base_id: str,
    request: Request,
    mode: Literal["rain", "doppler"] = "rain",
    range_km: Literal["64", "128", "256", "512"] = Query("128", alias="range"),
):
    """Product id, loop page and overlay images for a station in a mode and range."""
    station = get_station(base_id)
    if station is None:
        raise HTTPException(status_code=404, detail=f"Unknown station: {base_id}")

    host = request.app.state.settings.radar_host
    product_id = build_product_id(base_id, mode, range_km, station["doppler_id"])
    # Doppler falls back to rain when the station has no doppler product
    effective_mode = "doppler" if mode == "doppler" and station["has_doppler"] else "rain"

    return StationProduct(
        station=base_id,
        mode=effective_mode,
        range=range_km,
        product_id=product_id,
        loop_url=loop_url(product_id, host),
        overlays=overlay_urls(product_id, host),
        refresh_seconds=REFRESH_SECONDS,
    )


@router.get("/api/postcodes/{postcode}")
async def get_postcode(postcode: str):
    """Approximate coordinates for a postcode plus its nearest radars."""
    if not is_valid_postcode(postcode):
        raise HTTPException(status_code=400, detail="Invalid postcode: expected 4 digits")

    coords = lookup_postcode(postcode)
    if coords is None:
        raise HTTPException(status_code=404, detail=f"Unknown postcode: {postcode.strip()}")

    return {
        "postcode": postcode.strip(),
        **coords,
        "nearest": rank_stations(coords["lat"], coords["lng"], station_list(), NEAREST_DEFAULT),
    }


async def _http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


async def _validation_error(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request parameters", "details": jsonable_encoder(exc.errors())},
    )


def create_app(
    settings: Optional[Settings] = None,
    http_client: Optional[httpx.AsyncClient] = None,
    cache: Optional[WeatherCache] = None,
) -> FastAPI:
    """Build the API.

    ``http_client`` and ``cache`` are created from ``settings`` unless
    passed in; a client passed in is left open on shutdown.
    """
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = http_client if http_client is not None else httpx.AsyncClient(
            timeout=settings.upstream_timeout,
            headers={"User-Agent": settings.user_agent},
            follow_redirects=True,
        )
        app.state.http_client = client
        logger.info(f"{APP_NAME} started, upstream {settings.radar_host} / {settings.weather_api}")
        try:
            yield
        finally:
            if http_client is None:
                await client.aclose()

    app = FastAPI(title=APP_NAME, lifespan=lifespan)
    app.state.settings = settings
    if cache is None:
        cache = WeatherCache(ttl_seconds=settings.cache_ttl_seconds, max_entries=settings.cache_max_entries)
    app.state.weather_cache = cache

    app.add_middleware(NoCacheMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.include_router(router)
    return app


app = create_app()
