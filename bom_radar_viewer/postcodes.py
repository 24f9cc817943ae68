"""Approximate coordinates for common Australian postcodes.

Covers capital cities and large regional centres only. Unknown postcodes
fall back to any listed postcode in the same three-digit block.
"""

import re
from typing import Optional

POSTCODE_RE = re.compile(r"^\d{4}$")

POSTCODE_MAP = {
    # NSW / ACT
    "2000": {"lat": -33.8688, "lng": 151.2093},  # Sydney CBD
    "2010": {"lat": -33.8812, "lng": 151.2020},  # Surry Hills
    "2060": {"lat": -33.8200, "lng": 151.1800},  # North Sydney
    "2100": {"lat": -33.7500, "lng": 151.2500},  # Northern Beaches
    "2150": {"lat": -33.8000, "lng": 151.0000},  # Parramatta
    "2300": {"lat": -32.9267, "lng": 151.7789},  # Newcastle
    "2500": {"lat": -34.4278, "lng": 150.8931},  # Wollongong
    "2600": {"lat": -35.2809, "lng": 149.1300},  # Canberra
    # VIC
    "3000": {"lat": -37.8136, "lng": 144.9631},  # Melbourne CBD
    "3004": {"lat": -37.8300, "lng": 144.9800},
    "3121": {"lat": -37.8200, "lng": 145.0000},  # Richmond
    "3150": {"lat": -37.9000, "lng": 145.1300},  # Glen Waverley
    "3175": {"lat": -38.0000, "lng": 145.1800},  # Dandenong
    "3550": {"lat": -36.7667, "lng": 144.2833},  # Bendigo
    "3850": {"lat": -37.2833, "lng": 146.4167},  # Sale
    # QLD
    "4000": {"lat": -27.4698, "lng": 153.0251},  # Brisbane CBD
    "4101": {"lat": -27.4833, "lng": 153.0167},  # South Brisbane
    "4217": {"lat": -28.0167, "lng": 153.4000},  # Gold Coast
    "4350": {"lat": -27.5598, "lng": 151.9507},  # Toowoomba
    "4810": {"lat": -19.2590, "lng": 146.8169},  # Townsville
    "4870": {"lat": -16.9186, "lng": 145.7781},  # Cairns
    # SA
    "5000": {"lat": -34.9285, "lng": 138.6007},  # Adelaide CBD
    "5062": {"lat": -34.9667, "lng": 138.6333},
    "5095": {"lat": -34.8333, "lng": 138.6667},  # Mawson Lakes
    "5290": {"lat": -37.8278, "lng": 140.7825},  # Mount Gambier
    # WA
    "6000": {"lat": -31.9505, "lng": 115.8605},  # Perth CBD
    "6008": {"lat": -31.9167, "lng": 115.8000},  # Subiaco
    "6160": {"lat": -32.0333, "lng": 115.8333},  # Fremantle
    "6430": {"lat": -30.7497, "lng": 121.4655},  # Kalgoorlie
    "6725": {"lat": -17.9614, "lng": 122.2359},  # Broome
    # TAS
    "7000": {"lat": -42.8821, "lng": 147.3272},  # Hobart
    "7250": {"lat": -41.4332, "lng": 147.1441},  # Launceston
    # NT
    "0800": {"lat": -12.4634, "lng": 130.8456},  # Darwin
    "0870": {"lat": -23.6980, "lng": 133.8807},  # Alice Springs
}


def is_valid_postcode(postcode: str) -> bool:
    return bool(POSTCODE_RE.match(postcode.strip()))


def lookup_postcode(postcode: str) -> Optional[dict]:
    cleaned = postcode.strip()
    if cleaned in POSTCODE_MAP:
        return POSTCODE_MAP[cleaned]

    prefix = cleaned[:3]
    for key, coords in POSTCODE_MAP.items():
        if key.startswith(prefix):
            return coords
    return None
