"""Field-of-view planning around the bearing back toward the peak."""

from __future__ import annotations

from math import floor

from peakview.contracts import DirectionRange
from peakview.geo.geodesy import normalize_angle

HALF_FOV_DEGREES = 45


def plan_range(bearing_to_peak: float) -> DirectionRange:
    """Return the ±45° compass window centred on bearing_to_peak."""
    return DirectionRange(
        start=floor(normalize_angle(bearing_to_peak - HALF_FOV_DEGREES)),
        end=floor(normalize_angle(bearing_to_peak + HALF_FOV_DEGREES)),
    )
