"""Error taxonomy for the viewpoint/horizon pipeline."""

from __future__ import annotations


class PeakviewError(RuntimeError):
    """Base class for pipeline failures surfaced to callers."""


class DataLoadError(PeakviewError):
    """Elevation source is missing, unreadable, or corrupt."""


class QueryError(PeakviewError):
    """Elevation collaborator rejected a horizon query."""


class SerializationError(PeakviewError):
    """Dataset could not be encoded into the output artifact."""
