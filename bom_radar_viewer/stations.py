"""Bureau of Meteorology radar stations."""

from typing import List, Optional

from .products import DEFAULT_RANGE, build_product_id

# Keyed by station base id; the leading zero is part of the id
RADAR_STATIONS = {
    # Queensland
    "66": {"name": "Brisbane", "location": "Mt Stapylton", "state": "QLD", "lat": -27.7178, "lon": 153.2400, "doppler_id": "IDR66I"},
    "50": {"name": "Brisbane", "location": "Marburg", "state": "QLD", "lat": -27.6080, "lon": 152.5390, "doppler_id": None},
    "08": {"name": "Gympie", "location": "Mt Kanigan", "state": "QLD", "lat": -25.9574, "lon": 152.5768, "doppler_id": None},
    "19": {"name": "Cairns", "location": "Saddle Mountain", "state": "QLD", "lat": -16.8180, "lon": 145.6830, "doppler_id": "IDR19I"},
    "73": {"name": "Townsville", "location": "Hervey Range", "state": "QLD", "lat": -19.4198, "lon": 146.5509, "doppler_id": "IDR73I"},
    "22": {"name": "Mackay", "location": "Mackay", "state": "QLD", "lat": -21.1170, "lon": 149.2170, "doppler_id": None},
    # New South Wales / ACT
    "71": {"name": "Sydney", "location": "Terrey Hills", "state": "NSW", "lat": -33.7008, "lon": 151.2100, "doppler_id": "IDR71I"},
    "04": {"name": "Newcastle", "location": "Lemon Tree Passage", "state": "NSW", "lat": -32.7300, "lon": 152.0270, "doppler_id": None},
    "03": {"name": "Wollongong", "location": "Appin", "state": "NSW", "lat": -34.2625, "lon": 150.8752, "doppler_id": "IDR03I"},
    "28": {"name": "Grafton", "location": "Grafton", "state": "NSW", "lat": -29.6220, "lon": 152.9510, "doppler_id": None},
    "40": {"name": "Canberra", "location": "Captains Flat", "state": "ACT", "lat": -35.6614, "lon": 149.5122, "doppler_id": "IDR40I"},
    # Victoria
    "02": {"name": "Melbourne", "location": "Laverton", "state": "VIC", "lat": -37.8553, "lon": 144.7554, "doppler_id": "IDR02I"},
    "49": {"name": "Yarrawonga", "location": "Yarrawonga", "state": "VIC", "lat": -36.0297, "lon": 146.0228, "doppler_id": None},
    "68": {"name": "Bairnsdale", "location": "Bairnsdale", "state": "VIC", "lat": -37.8876, "lon": 147.5755, "doppler_id": None},
    # South Australia
    "64": {"name": "Adelaide", "location": "Buckland Park", "state": "SA", "lat": -34.6170, "lon": 138.4689, "doppler_id": "IDR64I"},
    "14": {"name": "Mt Gambier", "location": "Mt Gambier", "state": "SA", "lat": -37.7477, "lon": 140.7746, "doppler_id": None},
    # Western Australia
    "70": {"name": "Perth", "location": "Serpentine", "state": "WA", "lat": -32.3917, "lon": 115.8670, "doppler_id": "IDR70I"},
    "17": {"name": "Broome", "location": "Broome", "state": "WA", "lat": -17.9483, "lon": 122.2353, "doppler_id": None},
    "48": {"name": "Kalgoorlie", "location": "Kalgoorlie-Boulder", "state": "WA", "lat": -30.7845, "lon": 121.4550, "doppler_id": None},
    # Tasmania
    "76": {"name": "Hobart", "location": "Mt Koonya", "state": "TAS", "lat": -43.1122, "lon": 147.8061, "doppler_id": "IDR76I"},
    "52": {"name": "NW Tasmania", "location": "West Takone", "state": "TAS", "lat": -41.1810, "lon": 145.5790, "doppler_id": None},
    # Northern Territory
    "63": {"name": "Darwin", "location": "Berrimah", "state": "NT", "lat": -12.4570, "lon": 130.9250, "doppler_id": "IDR63I"},
    "25": {"name": "Alice Springs", "location": "Alice Springs", "state": "NT", "lat": -23.7951, "lon": 133.8890, "doppler_id": None},
}


def get_station(base_id: str) -> Optional[dict]:
    station = RADAR_STATIONS.get(base_id)
    if station is None:
        return None
    return _describe(base_id, station)


def station_list() -> List[dict]:
    """All stations with their id, default product id and doppler flag."""
    return [_describe(base_id, station) for base_id, station in RADAR_STATIONS.items()]


def _describe(base_id: str, station: dict) -> dict:
    return {
        "id": base_id,
        **station,
        "product_id": build_product_id(base_id, "rain", DEFAULT_RANGE),
        "has_doppler": station["doppler_id"] is not None,
    }
