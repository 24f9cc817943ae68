"""Fixed response shapes. Upstream observation/forecast payloads stay as dicts."""

from typing import Dict, Literal, Optional

from pydantic import BaseModel


class RadarImage(BaseModel):
    url: str
    # YYYYMMDDHHmm UTC, or "" when the filename has no timestamp
    timestamp: str


class WeatherLocation(BaseModel):
    name: Optional[str] = None
    state: Optional[str] = None
    geohash: str
    lat: float
    lng: float


class StationProduct(BaseModel):
    station: str
    mode: Literal["rain", "doppler"]
    range: Literal["64", "128", "256", "512"]
    product_id: str
    loop_url: str
    overlays: Dict[str, str]
    refresh_seconds: int
