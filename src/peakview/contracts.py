"""Core data contracts for the peak viewpoint/horizon dataset."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Coordinate:
    """WGS84-like point in degrees on a spherical Earth."""

    latitude: float
    longitude: float

    def to_dict(self) -> dict[str, float]:
        """Serialize the coordinate to a JSON-compatible dictionary."""
        return {"latitude": self.latitude, "longitude": self.longitude}


@dataclass(frozen=True, slots=True)
class RawHorizonSample:
    """Horizon sample in one absolute compass direction, as returned by elevation data."""

    direction_deg: int
    elevation_angle_deg: float
    distance_km: float


@dataclass(frozen=True, slots=True)
class HorizonSample:
    """Horizon sample addressed relative to the bearing back toward the peak."""

    relative_direction_deg: int
    elevation_angle_deg: float
    distance_km: float

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the chart client's field names."""
        return {
            "relativeDirection": self.relative_direction_deg,
            "elevationAngleDegrees": self.elevation_angle_deg,
            "distanceKm": self.distance_km,
        }


@dataclass(frozen=True, slots=True)
class Viewpoint:
    """One ring viewpoint and the horizon it sees around the peak."""

    angle: int
    location: Coordinate
    bearing_to_peak: float
    horizon: tuple[HorizonSample, ...]

    def to_dict(self) -> dict[str, Any]:
        """Serialize the viewpoint to a JSON-compatible dictionary."""
        return {
            "angle": self.angle,
            "viewpoint": self.location.to_dict(),
            "bearingToPeak": self.bearing_to_peak,
            "horizon": [sample.to_dict() for sample in self.horizon],
        }


@dataclass(frozen=True, slots=True)
class DirectionRange:
    """Inclusive compass window; `start > end` means it wraps through north."""

    start: int
    end: int

    @property
    def wraps(self) -> bool:
        """Return True when the window crosses 0°/360°."""
        return self.start > self.end

    def spans(self) -> list[tuple[int, int]]:
        """Return the non-wrapping inclusive sub-ranges covering this window."""
        if self.wraps:
            return [(self.start, 359), (0, self.end)]
        return [(self.start, self.end)]


@dataclass(frozen=True, slots=True)
class RingSpec:
    """Peak and fixed viewpoint distance defining one ring of viewpoints."""

    peak: Coordinate
    distance_km: float


TIMPANOGOS_RING = RingSpec(peak=Coordinate(latitude=40.3908, longitude=-111.6458), distance_km=8.919)


@dataclass(frozen=True, slots=True)
class DatasetArtifact:
    """Serialized, gzip-compressed dataset retained by the serving cache."""

    body_gzip: bytes
    json_bytes: int
    viewpoint_count: int
