"""Serving-side dataset resolver backed by a single-flight cache."""

from __future__ import annotations

import logging

from peakview.contracts import TIMPANOGOS_RING, DatasetArtifact, RingSpec
from peakview.ingest.interfaces import ElevationLoader
from peakview.orchestrate.artifact import compress_dataset
from peakview.orchestrate.batch import ANGLE_COUNT, build_dataset
from peakview.state.single_flight import CacheState, SingleFlightCache

logger = logging.getLogger(__name__)


class DatasetResolver:
    """Resolve the gzipped viewpoint dataset, loading and building it at most once."""

    def __init__(
        self,
        loader: ElevationLoader,
        ring: RingSpec = TIMPANOGOS_RING,
        workers: int = 1,
    ) -> None:
        if workers <= 0:
            raise ValueError("workers must be positive")
        self._loader = loader
        self._ring = ring
        self._workers = workers
        self._cache: SingleFlightCache[DatasetArtifact] = SingleFlightCache(self._build)

    @property
    def state(self) -> CacheState:
        """Return the underlying cache state."""
        return self._cache.state

    @property
    def build_count(self) -> int:
        """Return how many successful builds have completed."""
        return self._cache.build_count

    @property
    def waiting(self) -> int:
        """Return how many requests are waiting on the in-flight build."""
        return self._cache.waiting

    def get_artifact(self, timeout: float | None = None) -> DatasetArtifact:
        """Return the dataset artifact, joining an in-flight build if one is running."""
        return self._cache.get(timeout=timeout)

    def _build(self) -> DatasetArtifact:
        logger.info("Loading elevation data...")
        elevation = self._loader()
        logger.info("Generating %d viewpoints...", ANGLE_COUNT)
        viewpoints = build_dataset(elevation, ring=self._ring, workers=self._workers)
        return compress_dataset(viewpoints)
