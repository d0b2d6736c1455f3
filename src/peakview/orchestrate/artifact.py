"""Dataset encoding for the file and network sinks."""

from __future__ import annotations

import gzip
import json
import logging
from collections.abc import Sequence
from pathlib import Path

from peakview.contracts import DatasetArtifact, Viewpoint
from peakview.errors import SerializationError

logger = logging.getLogger(__name__)


def encode_dataset(viewpoints: Sequence[Viewpoint]) -> str:
    """Encode viewpoints as compact strict JSON (no NaN/Infinity)."""
    try:
        return json.dumps(
            [viewpoint.to_dict() for viewpoint in viewpoints],
            ensure_ascii=False,
            separators=(",", ":"),
            allow_nan=False,
        )
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"dataset could not be encoded as JSON: {exc}") from exc


def compress_dataset(viewpoints: Sequence[Viewpoint]) -> DatasetArtifact:
    """Encode and gzip viewpoints into the artifact retained by the serving cache."""
    body = encode_dataset(viewpoints).encode("utf-8")
    gzipped = gzip.compress(body)
    logger.info(
        "Generated. JSON: %.0fKB -> Gzip: %.0fKB", len(body) / 1024, len(gzipped) / 1024
    )
    return DatasetArtifact(body_gzip=gzipped, json_bytes=len(body), viewpoint_count=len(viewpoints))


def write_dataset_json(viewpoints: Sequence[Viewpoint], path: str | Path) -> int:
    """Write uncompressed JSON to path and return its size in bytes."""
    body = encode_dataset(viewpoints).encode("utf-8")
    logger.info("JSON size: %.0fKB", len(body) / 1024)

    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(body)
    logger.info("Saved to %s", output)
    return len(body)
