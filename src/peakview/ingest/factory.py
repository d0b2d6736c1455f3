"""Elevation data factory with environment-driven mode selection."""

from __future__ import annotations

import os
from pathlib import Path

from peakview.ingest.interfaces import ElevationData

DEFAULT_ELEVATION_PATH = "data/n41w112_30m.npz"


def resolve_mode(mode: str | None = None) -> str:
    """Resolve elevation mode from argument or environment."""
    raw = mode or os.getenv("PEAKVIEW_ELEVATION_MODE", "mock")
    resolved = raw.strip().lower()
    if resolved not in {"mock", "grid"}:
        raise ValueError("PEAKVIEW_ELEVATION_MODE must be one of: mock, grid")
    return resolved


def resolve_path(path: str | Path | None = None) -> Path:
    """Resolve DEM archive path from argument or environment."""
    return Path(path or os.getenv("PEAKVIEW_ELEVATION_PATH", DEFAULT_ELEVATION_PATH))


def load_elevation_data(path: str | Path | None = None, mode: str | None = None) -> ElevationData:
    """Load elevation data for the selected mode; raises DataLoadError on failure."""
    resolved = resolve_mode(mode)
    if resolved == "mock":
        from peakview.ingest.mock_providers import MockElevationData

        return MockElevationData()

    from peakview.ingest.terrain_horizon import load_grid_elevation

    return load_grid_elevation(resolve_path(path))
