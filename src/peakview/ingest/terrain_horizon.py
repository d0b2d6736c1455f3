"""DEM-based terrain horizon ray casting."""

from __future__ import annotations

import logging
import zipfile
import zlib
from abc import ABC, abstractmethod
from math import ceil, cos, radians, sin
from pathlib import Path

import numpy as np

from peakview.contracts import RawHorizonSample
from peakview.errors import DataLoadError, QueryError

logger = logging.getLogger(__name__)

_EARTH_RADIUS_M = 6_371_000.0
_METERS_PER_DEG_LAT = 111_320.0


def _validate_range(start_direction: int, end_direction: int) -> None:
    if not 0 <= start_direction <= end_direction <= 359:
        raise QueryError(
            "direction range must satisfy 0 <= start <= end <= 359, "
            f"got [{start_direction}, {end_direction}]"
        )


class RayCastElevationData(ABC):
    """Answer horizon queries by marching rays over a terrain height function.

    Each integer compass direction gets one ray sampled every `step_m` meters out to
    `max_distance_km`. The reported sample is the steepest terrain elevation angle
    seen along the ray (after Earth-curvature drop) and its distance. Rays that never
    touch covered terrain report -90° at 0 km.
    """

    def __init__(
        self,
        max_distance_km: float = 40.0,
        step_m: float = 30.0,
        observer_height_m: float = 1.7,
    ) -> None:
        if max_distance_km <= 0.0:
            raise ValueError("max_distance_km must be positive")
        if step_m <= 0.0:
            raise ValueError("step_m must be positive")

        self.max_distance_km = max_distance_km
        self.step_m = step_m
        self.observer_height_m = observer_height_m

        steps = int(ceil(max_distance_km * 1000.0 / step_m))
        self._distances_m = np.arange(1, steps + 1, dtype=float) * step_m
        self._curvature_drop_m = (self._distances_m * self._distances_m) / (2.0 * _EARTH_RADIUS_M)

    @abstractmethod
    def elevation_at(self, latitudes: np.ndarray, longitudes: np.ndarray) -> np.ndarray:
        """Return terrain heights in meters, NaN where terrain is not covered."""

    def horizon_query(
        self,
        latitude: float,
        longitude: float,
        start_direction: int,
        end_direction: int,
    ) -> list[RawHorizonSample]:
        """Return one horizon sample per integer direction in [start, end]."""
        _validate_range(start_direction, end_direction)

        ground = float(self.elevation_at(np.array([latitude]), np.array([longitude]))[0])
        if np.isnan(ground):
            raise QueryError(
                f"viewpoint lat={latitude:.5f}, lon={longitude:.5f} is outside elevation coverage"
            )
        observer_elev_m = ground + self.observer_height_m

        return [
            self._cast_ray(latitude, longitude, observer_elev_m, direction)
            for direction in range(start_direction, end_direction + 1)
        ]

    def _cast_ray(
        self, latitude: float, longitude: float, observer_elev_m: float, direction: int
    ) -> RawHorizonSample:
        az = radians(direction)
        dlat = (self._distances_m * cos(az)) / _METERS_PER_DEG_LAT
        dlon = (self._distances_m * sin(az)) / (_METERS_PER_DEG_LAT * max(0.1, cos(radians(latitude))))

        heights = self.elevation_at(latitude + dlat, longitude + dlon)
        angles = np.degrees(
            np.arctan2(heights - observer_elev_m - self._curvature_drop_m, self._distances_m)
        )
        if np.all(np.isnan(angles)):
            return RawHorizonSample(direction_deg=direction, elevation_angle_deg=-90.0, distance_km=0.0)

        idx = int(np.nanargmax(angles))
        return RawHorizonSample(
            direction_deg=direction,
            elevation_angle_deg=float(angles[idx]),
            distance_km=float(self._distances_m[idx] / 1000.0),
        )


class GridElevationData(RayCastElevationData):
    """North-up DEM grid with geographic bounds and nearest-cell lookup."""

    def __init__(
        self,
        elevation_m: np.ndarray,
        north: float,
        south: float,
        east: float,
        west: float,
        nodata: float | None = None,
        **raycast_options: float,
    ) -> None:
        super().__init__(**raycast_options)
        grid = np.asarray(elevation_m, dtype=float)
        if grid.ndim != 2 or grid.size == 0:
            raise ValueError("elevation_m must be a non-empty 2D grid")
        if not (north > south and east > west):
            raise ValueError("grid bounds must satisfy north > south and east > west")
        if nodata is not None:
            grid = np.where(grid == nodata, np.nan, grid)

        self._grid = grid
        self.north = north
        self.south = south
        self.east = east
        self.west = west
        self._cell_lat = (north - south) / grid.shape[0]
        self._cell_lon = (east - west) / grid.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        """Return grid shape as (rows, cols)."""
        return (int(self._grid.shape[0]), int(self._grid.shape[1]))

    def elevation_at(self, latitudes: np.ndarray, longitudes: np.ndarray) -> np.ndarray:
        """Return nearest-cell heights, NaN outside the grid or on nodata cells."""
        lats = np.asarray(latitudes, dtype=float)
        lons = np.asarray(longitudes, dtype=float)
        rows = np.floor((self.north - lats) / self._cell_lat).astype(int)
        cols = np.floor((lons - self.west) / self._cell_lon).astype(int)
        n_rows, n_cols = self._grid.shape
        inside = (rows >= 0) & (rows < n_rows) & (cols >= 0) & (cols < n_cols)

        out = np.full(lats.shape, np.nan)
        out[inside] = self._grid[rows[inside], cols[inside]]
        return out


def load_grid_elevation(path: str | Path, **raycast_options: float) -> GridElevationData:
    """Load a `.npz` DEM archive into GridElevationData.

    The archive must hold `elevation_m` (2D, row 0 = northern edge) and the scalar
    bounds `north`, `south`, `east`, `west`; `nodata` is optional.
    """
    logger.debug("Reading elevation grid from %s", path)
    try:
        archive = np.load(Path(path), allow_pickle=False)
        if not hasattr(archive, "files"):
            raise ValueError("expected an .npz archive")
        with archive:
            nodata = float(archive["nodata"]) if "nodata" in archive.files else None
            return GridElevationData(
                elevation_m=archive["elevation_m"],
                north=float(archive["north"]),
                south=float(archive["south"]),
                east=float(archive["east"]),
                west=float(archive["west"]),
                nodata=nodata,
                **raycast_options,
            )
    except (OSError, EOFError, KeyError, TypeError, ValueError, zipfile.BadZipFile, zlib.error) as exc:
        raise DataLoadError(f"failed to load elevation grid from {path}: {exc}") from exc
