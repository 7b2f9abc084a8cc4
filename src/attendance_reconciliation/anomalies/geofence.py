from __future__ import annotations

from math import atan2, cos, radians, sin, sqrt

from ..events.model import GeoPoint
from ..shifts.model import Site

EARTH_RADIUS_METERS = 6_371_000.0


def haversine_meters(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two points, in metres."""
    phi1, phi2 = radians(a.latitude), radians(b.latitude)
    d_phi = radians(b.latitude - a.latitude)
    d_lambda = radians(b.longitude - a.longitude)
    h = sin(d_phi / 2) ** 2 + cos(phi1) * cos(phi2) * sin(d_lambda / 2) ** 2
    return EARTH_RADIUS_METERS * 2 * atan2(sqrt(h), sqrt(1 - h))


def distance_to_site(point: GeoPoint, site: Site) -> float:
    return haversine_meters(point, GeoPoint(site.latitude, site.longitude))
