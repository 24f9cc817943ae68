"""Radar product identifiers and the static overlay images that go with them."""

from typing import Dict, Optional, Union

from .logging import get_logger

logger = get_logger(__name__)

# Range in km -> last digit of the IDR product id
RANGE_SUFFIXES = {"64": "4", "128": "3", "256": "2", "512": "1"}
DEFAULT_RANGE = "128"
# Anything that isn't a known range gets the widest loop
FALLBACK_SUFFIX = "1"

MODES = ("rain", "doppler")
OVERLAY_LAYERS = ("background", "topography", "catchments", "range", "locations")


def rain_product_id(base_id: str, range_km: Union[str, int]) -> str:
    """``IDR`` + base id + range digit, e.g. ("66", 128) -> "IDR663"."""
    return f"IDR{base_id}{RANGE_SUFFIXES.get(str(range_km), FALLBACK_SUFFIX)}"


def build_product_id(
    base_id: str,
    mode: str,
    range_km: Union[str, int],
    doppler_id: Optional[str] = None,
) -> str:
    """Upstream product id for a station, mode and range.

    Doppler products have their own fixed id and no range. A doppler
    request for a station without one is logged and served as rain.
    """
    if mode == "doppler":
        if doppler_id:
            return doppler_id
        logger.warning(
            f"No doppler product for station {base_id}, falling back to rain",
            extra={"product_id": f"IDR{base_id}"},
        )
    return rain_product_id(base_id, range_km)


def overlay_urls(product_id: str, host: str) -> Dict[str, str]:
    """Transparency layers the client stacks under and over the loop frames."""
    return {
        layer: f"{host}/products/radar_transparencies/{product_id}.{layer}.png"
        for layer in OVERLAY_LAYERS
    }


def format_timestamp(timestamp: str) -> str:
    """YYYYMMDDHHmm -> DD/MM/YYYY HH:mm; anything else comes back as-is."""
    if len(timestamp) != 12:
        return timestamp
    year, month, day = timestamp[0:4], timestamp[4:6], timestamp[6:8]
    hour, minute = timestamp[8:10], timestamp[10:12]
    return f"{day}/{month}/{year} {hour}:{minute}"
