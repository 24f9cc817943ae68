"""Radar loop frames scraped from the BoM ``.loop.shtml`` pages.

The loop page embeds its frame list as script assignments::

    theImageNames[0] = "/radar/IDR663.T.202510290319.png";

There is no JSON feed for this, so the page is matched with a regex and
taken as-is: document order, duplicates kept, paths not validated.
"""

import re
from typing import List

import httpx

from .errors import NoDataError, UpstreamFetchError
from .logging import get_logger
from .models import RadarImage
from .products import format_timestamp

logger = get_logger(__name__)

IMAGE_NAME_RE = re.compile(r"""theImageNames\[\d+\]\s*=\s*["']([^"']+)["']""")
TIMESTAMP_RE = re.compile(r"\.T\.(\d{12})\.png")


def parse_image_names(html: str) -> List[str]:
    """Quoted paths from every ``theImageNames[i] = "..."`` in the page."""
    return IMAGE_NAME_RE.findall(html)


def extract_timestamp(path: str) -> str:
    """``/radar/IDR663.T.202510290319.png`` -> ``202510290319``, else ``""``."""
    match = TIMESTAMP_RE.search(path)
    return match.group(1) if match else ""


def loop_url(product_id: str, host: str) -> str:
    return f"{host}/products/{product_id}.loop.shtml"


async def fetch_radar_images(
    client: httpx.AsyncClient, product_id: str, host: str
) -> List[RadarImage]:
    """Fetch a product's loop page and return its frames, oldest first.

    Raises:
        UpstreamFetchError: the page could not be fetched
        NoDataError: the page had no frame assignments
    """
    url = loop_url(product_id, host)

    try:
        response = await client.get(url)
    except httpx.HTTPError as e:
        raise UpstreamFetchError(f"Radar loop request failed: {e}", url=url) from e

    if not response.is_success:
        raise UpstreamFetchError(
            f"Failed to fetch radar data: {response.reason_phrase}",
            status=response.status_code,
            reason=response.reason_phrase,
            url=url,
        )

    paths = parse_image_names(response.text)
    if not paths:
        raise NoDataError(f"No radar images found for {product_id}")

    images = [RadarImage(url=f"{host}{path}", timestamp=extract_timestamp(path)) for path in paths]
    logger.info(
        f"{product_id}: {len(images)} frames, latest {format_timestamp(images[-1].timestamp) or 'unknown'}",
        extra={"product_id": product_id},
    )
    return images
