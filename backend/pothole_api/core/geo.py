"""Geo: great-circle distance and grid-cell helpers.

Invariants:
    - Inputs in decimal degrees; output in the unit of the radius given
    - Pure, deterministic, no IO
"""

import math

EARTH_RADIUS_METERS = 6_371_000.0
EARTH_RADIUS_MILES = 3959.0
METERS_PER_DEGREE_LAT = 111_320.0


def haversine(
    lat1: float, lng1: float, lat2: float, lng2: float,
    radius: float = EARTH_RADIUS_METERS,
) -> float:
    """Great-circle distance between two points."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)
    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    return 2 * radius * math.asin(min(1.0, math.sqrt(a)))


def bounding_box(lat: float, lng: float, radius_meters: float) -> tuple[float, float, float, float]:
    """(min_lat, max_lat, min_lng, max_lng) enclosing a circle; used to prefilter rows."""
    d_lat = radius_meters / METERS_PER_DEGREE_LAT
    cos_lat = max(math.cos(math.radians(lat)), 1e-6)
    d_lng = radius_meters / (METERS_PER_DEGREE_LAT * cos_lat)
    return lat - d_lat, lat + d_lat, lng - d_lng, lng + d_lng


LOCK_CELL_DEGREES = 0.001


def covering_cells(lat: float, lng: float, radius_meters: float) -> list[tuple[int, int]]:
    """Sorted 0.001° grid cells touched by the circle's bounding box.

    Any two points closer than the radius share at least one cell, so
    locking every cell serializes writers near the same spot.
    """
    min_lat, max_lat, min_lng, max_lng = bounding_box(lat, lng, radius_meters)
    scale = 1 / LOCK_CELL_DEGREES
    return [
        (lat_cell, lng_cell)
        for lat_cell in range(math.floor(min_lat * scale), math.floor(max_lat * scale) + 1)
        for lng_cell in range(math.floor(min_lng * scale), math.floor(max_lng * scale) + 1)
    ]
