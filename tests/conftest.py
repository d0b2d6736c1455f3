"""Shared fakes for the elevation collaborator."""

from __future__ import annotations

from threading import Lock

import pytest

from peakview.contracts import RawHorizonSample
from peakview.errors import QueryError


class FakeElevationData:
    """Deterministic horizon source that records every query it receives."""

    def __init__(self) -> None:
        self.calls: list[tuple[float, float, int, int]] = []
        self._lock = Lock()

    def horizon_query(
        self,
        latitude: float,
        longitude: float,
        start_direction: int,
        end_direction: int,
    ) -> list[RawHorizonSample]:
        if not 0 <= start_direction <= end_direction <= 359:
            raise QueryError(f"bad range [{start_direction}, {end_direction}]")
        with self._lock:
            self.calls.append((latitude, longitude, start_direction, end_direction))
        return [
            RawHorizonSample(
                direction_deg=direction,
                elevation_angle_deg=direction / 10.0,
                distance_km=1.0 + direction / 100.0,
            )
            for direction in range(start_direction, end_direction + 1)
        ]

    def spans(self) -> list[tuple[int, int]]:
        return [(start, end) for _, _, start, end in self.calls]


@pytest.fixture
def fake_elevation() -> FakeElevationData:
    """Return a fresh recording elevation fake."""
    return FakeElevationData()
