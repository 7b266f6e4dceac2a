"""Spatial math: great-circle distance and degree-window checks."""

import math

from pingspot.domain.entities import BoundingBox

EARTH_RADIUS_KM = 6371.0
_BOX_PADDING = 1.01


def distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Haversine distance between two WGS84 coordinates, in kilometres."""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.sin(d_lng / 2) ** 2 * math.cos(phi1) * math.cos(phi2)
    )
    # Rounding can push ``a`` a hair above 1 for antipodal points
    c = 2 * math.asin(math.sqrt(min(1.0, a)))
    return EARTH_RADIUS_KM * c


def within_tolerance(
    lat: float, lng: float, center_lat: float, center_lng: float, tolerance_degrees: float
) -> bool:
    """True when (lat, lng) lies in the inclusive ±tolerance window around the center.

    This is a square window in degrees, not a circle. The bounds are computed
    the same way as the SQL ``BETWEEN center - tol AND center + tol`` filter.
    """
    return (
        center_lat - tolerance_degrees <= lat <= center_lat + tolerance_degrees
        and center_lng - tolerance_degrees <= lng <= center_lng + tolerance_degrees
    )


def bounding_box(lat: float, lng: float, radius_km: float) -> BoundingBox | None:
    """Rectangle enclosing the search circle, or None if it wraps a pole or the antimeridian.

    Callers must still apply the exact distance check; the box only narrows
    the candidate fetch, so it is padded slightly rather than trimmed.
    """
    if radius_km <= 0:
        return None

    angular = radius_km / EARTH_RADIUS_KM
    lat_delta = math.degrees(angular) * _BOX_PADDING
    min_lat = lat - lat_delta
    max_lat = lat + lat_delta
    if min_lat <= -90.0 or max_lat >= 90.0:
        return None

    ratio = math.sin(angular) / math.cos(math.radians(lat))
    if ratio >= 1.0:
        return None
    lng_delta = math.degrees(math.asin(ratio)) * _BOX_PADDING
    min_lng = lng - lng_delta
    max_lng = lng + lng_delta
    if min_lng < -180.0 or max_lng > 180.0:
        return None

    return BoundingBox(
        min_latitude=min_lat,
        max_latitude=max_lat,
        min_longitude=min_lng,
        max_longitude=max_lng,
    )
