"""Viewpoint ring generation for one peak."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor

from peakview.contracts import TIMPANOGOS_RING, RawHorizonSample, RingSpec, Viewpoint
from peakview.geo.geodesy import bearing, destination_point
from peakview.ingest.interfaces import ElevationData
from peakview.view.fov import plan_range
from peakview.view.horizon import to_relative

logger = logging.getLogger(__name__)

ANGLE_COUNT = 360
_PROGRESS_EVERY = 60


def generate_viewpoint(
    elevation: ElevationData, angle: int, ring: RingSpec = TIMPANOGOS_RING
) -> Viewpoint:
    """Place one viewpoint on the ring at `angle` and collect its horizon toward the peak."""
    location = destination_point(ring.peak, ring.distance_km, angle)
    bearing_to_peak = bearing(location, ring.peak)
    direction_range = plan_range(bearing_to_peak)

    raw: list[RawHorizonSample] = []
    for start, end in direction_range.spans():
        raw.extend(elevation.horizon_query(location.latitude, location.longitude, start, end))

    return Viewpoint(
        angle=angle,
        location=location,
        bearing_to_peak=bearing_to_peak,
        horizon=to_relative(raw, bearing_to_peak),
    )


def build_dataset(
    elevation: ElevationData, ring: RingSpec = TIMPANOGOS_RING, workers: int = 1
) -> tuple[Viewpoint, ...]:
    """Generate viewpoints for angles 0..359, ordered by angle."""
    if workers <= 0:
        raise ValueError("workers must be positive")

    def generate(angle: int) -> Viewpoint:
        return generate_viewpoint(elevation, angle, ring)

    viewpoints: list[Viewpoint] = []
    if workers == 1:
        _collect(map(generate, range(ANGLE_COUNT)), viewpoints)
    else:
        # Executor.map yields in submission order, so angle order is preserved.
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="viewpoint") as pool:
            _collect(pool.map(generate, range(ANGLE_COUNT)), viewpoints)
    return tuple(viewpoints)


def resolve_workers(workers: int | None = None) -> int:
    """Resolve build thread count from argument or environment."""
    raw = workers if workers is not None else os.getenv("PEAKVIEW_BUILD_WORKERS", "1")
    try:
        resolved = int(raw)
    except ValueError as exc:
        raise ValueError("PEAKVIEW_BUILD_WORKERS must be an integer") from exc
    if resolved <= 0:
        raise ValueError("PEAKVIEW_BUILD_WORKERS must be positive")
    return resolved


def _collect(results: Iterable[Viewpoint], out: list[Viewpoint]) -> None:
    for viewpoint in results:
        out.append(viewpoint)
        if viewpoint.angle % _PROGRESS_EVERY == 0:
            logger.info("Generated %d/%d", viewpoint.angle, ANGLE_COUNT)
