"""Elevation collaborator interfaces."""

from __future__ import annotations

from typing import Protocol

from peakview.contracts import RawHorizonSample


class ElevationData(Protocol):
    """Interface for loaded terrain able to answer horizon queries."""

    def horizon_query(
        self,
        latitude: float,
        longitude: float,
        start_direction: int,
        end_direction: int,
    ) -> list[RawHorizonSample]:
        """Return one horizon sample per integer direction in [start, end]."""


class ElevationLoader(Protocol):
    """Interface for the slow, fallible elevation load step."""

    def __call__(self) -> ElevationData:
        """Load elevation data or raise DataLoadError."""
