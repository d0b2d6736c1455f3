"""Conversion of absolute-direction horizon samples to peak-relative samples."""

from __future__ import annotations

from collections.abc import Iterable
from math import floor

from peakview.contracts import HorizonSample, RawHorizonSample
from peakview.geo.geodesy import normalize_relative


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going toward +inf."""
    return floor(value + 0.5)


def to_relative(
    raw_samples: Iterable[RawHorizonSample], bearing_to_peak: float
) -> tuple[HorizonSample, ...]:
    """Re-address raw samples relative to the peak and sort them left to right.

    The bearing is rounded to whole degrees so that relative direction 0 lands on
    the integer-degree sample closest to the peak. The unrounded bearing is kept
    everywhere else.
    """
    center = round_half_up(bearing_to_peak)
    samples = [
        HorizonSample(
            relative_direction_deg=int(normalize_relative(raw.direction_deg - center)),
            elevation_angle_deg=raw.elevation_angle_deg,
            distance_km=raw.distance_km,
        )
        for raw in raw_samples
    ]
    samples.sort(key=lambda sample: sample.relative_direction_deg)
    return tuple(samples)
