"""Spherical-Earth geodesy helpers."""

from __future__ import annotations

from math import asin, atan2, cos, degrees, radians, sin

from peakview.contracts import Coordinate

EARTH_RADIUS_KM = 6371.0


def normalize_angle(angle: float) -> float:
    """Wrap any angle into [0, 360) using true modulo."""
    wrapped = angle % 360
    # Tiny negative floats wrap to exactly 360.0.
    if wrapped >= 360:
        return wrapped - 360
    return wrapped


def normalize_relative(angle: float) -> float:
    """Wrap any angle into [-180, 180]; in-range values are returned unchanged."""
    if -180 <= angle <= 180:
        return angle
    wrapped = normalize_angle(angle)
    if wrapped > 180:
        return wrapped - 360
    return wrapped


def destination_point(origin: Coordinate, distance_km: float, bearing_deg: float) -> Coordinate:
    """Return the great-circle destination from origin along bearing for distance_km."""
    angular = distance_km / EARTH_RADIUS_KM
    theta = radians(bearing_deg)
    lat1 = radians(origin.latitude)
    lon1 = radians(origin.longitude)

    lat2 = asin(sin(lat1) * cos(angular) + cos(lat1) * sin(angular) * cos(theta))
    lon2 = lon1 + atan2(
        sin(theta) * sin(angular) * cos(lat1),
        cos(angular) - sin(lat1) * sin(lat2),
    )
    return Coordinate(latitude=degrees(lat2), longitude=degrees(lon2))


def bearing(from_point: Coordinate, to_point: Coordinate) -> float:
    """Return initial great-circle bearing in [0, 360) from one point to another."""
    dlon = radians(to_point.longitude - from_point.longitude)
    lat1 = radians(from_point.latitude)
    lat2 = radians(to_point.latitude)

    east = sin(dlon) * cos(lat2)
    north = cos(lat1) * sin(lat2) - sin(lat1) * cos(lat2) * cos(dlon)
    return float(normalize_angle(degrees(atan2(east, north))))
