"""Great-circle distances and nearest-radar ranking."""

from typing import List, Optional, Sequence

import numpy as np

EARTH_RADIUS_KM = 6371.0


def _haversine_km(lat1, lng1, lat2, lng2):
    """Haversine distance in km; accepts scalars or numpy arrays."""
    lat1, lng1, lat2, lng2 = (np.radians(np.asarray(v, dtype=float)) for v in (lat1, lng1, lat2, lng2))
    a = (
        np.sin((lat2 - lat1) / 2) ** 2
        + np.cos(lat1) * np.cos(lat2) * np.sin((lng2 - lng1) / 2) ** 2
    )
    # Rounding can push a just past 1 for near-antipodal points
    a = np.clip(a, 0.0, 1.0)
    return EARTH_RADIUS_KM * 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))


def _round_km(km):
    # np.round is half-to-even; distances want half away from zero
    return np.sign(km) * np.floor(np.abs(km) + 0.5)


def distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> int:
    """Distance between two points, rounded to whole kilometres."""
    return int(_round_km(_haversine_km(lat1, lng1, lat2, lng2)))


def rank_stations(
    lat: float,
    lng: float,
    stations: Sequence[dict],
    limit: Optional[int] = None,
) -> List[dict]:
    """Stations nearest first, each copied with a ``distance`` in km.

    Stations at the same distance keep their input order. ``limit`` caps the
    result; without it the whole ranked list comes back.
    """
    if not stations:
        return []

    lats = np.array([s["lat"] for s in stations], dtype=float)
    lons = np.array([s["lon"] for s in stations], dtype=float)
    distances = _round_km(_haversine_km(lat, lng, lats, lons))

    order = np.argsort(distances, kind="stable")
    if limit:
        order = order[:limit]

    return [{**stations[i], "distance": int(distances[i])} for i in order]
