"""Deterministic synthetic terrain for local/offline runs."""

from __future__ import annotations

from math import cos, radians

import numpy as np

from peakview.contracts import TIMPANOGOS_RING, Coordinate
from peakview.ingest.terrain_horizon import RayCastElevationData

_KM_PER_DEG_LAT = 111.32


class MockElevationData(RayCastElevationData):
    """Analytic massif centred on a peak, with a north-south ridge and a valley floor.

    Heights are smooth and defined everywhere, so every horizon query succeeds.
    """

    def __init__(
        self,
        peak: Coordinate = TIMPANOGOS_RING.peak,
        base_m: float = 1450.0,
        summit_m: float = 3582.0,
        spread_km: float = 2.5,
        ridge_m: float = 900.0,
        **raycast_options: float,
    ) -> None:
        super().__init__(**raycast_options)
        if spread_km <= 0.0:
            raise ValueError("spread_km must be positive")
        self.peak = peak
        self.base_m = base_m
        self.summit_m = summit_m
        self.spread_km = spread_km
        self.ridge_m = ridge_m
        self._km_per_deg_lon = _KM_PER_DEG_LAT * cos(radians(peak.latitude))

    def elevation_at(self, latitudes: np.ndarray, longitudes: np.ndarray) -> np.ndarray:
        """Return synthetic heights in meters for the given points."""
        north_km = (np.asarray(latitudes, dtype=float) - self.peak.latitude) * _KM_PER_DEG_LAT
        east_km = (np.asarray(longitudes, dtype=float) - self.peak.longitude) * self._km_per_deg_lon

        radial = (north_km * north_km + east_km * east_km) / (2.0 * self.spread_km**2)
        summit = (self.summit_m - self.base_m - self.ridge_m) * np.exp(-radial)
        # Wasatch-style ridge running north-south through the peak.
        ridge = self.ridge_m * np.exp(-(east_km * east_km) / 2.0) * np.exp(-(north_km * north_km) / 400.0)
        return self.base_m + summit + ridge
