"""Tests for dataset JSON encoding and sinks."""

from __future__ import annotations

import gzip
import json
from pathlib import Path

import pytest

from peakview.contracts import Coordinate, HorizonSample, Viewpoint
from peakview.errors import SerializationError
from peakview.orchestrate.artifact import compress_dataset, encode_dataset, write_dataset_json


def _viewpoint(elevation_angle_deg: float = 1.25) -> Viewpoint:
    return Viewpoint(
        angle=7,
        location=Coordinate(latitude=40.47, longitude=-111.63),
        bearing_to_peak=187.0123,
        horizon=(
            HorizonSample(relative_direction_deg=-1, elevation_angle_deg=0.5, distance_km=3.2),
            HorizonSample(relative_direction_deg=0, elevation_angle_deg=elevation_angle_deg, distance_km=8.9),
        ),
    )


def test_encode_dataset_uses_client_field_names() -> None:
    """Encoded JSON should use the chart client's camelCase shape."""
    payload = json.loads(encode_dataset([_viewpoint()]))

    assert payload == [
        {
            "angle": 7,
            "viewpoint": {"latitude": 40.47, "longitude": -111.63},
            "bearingToPeak": 187.0123,
            "horizon": [
                {"relativeDirection": -1, "elevationAngleDegrees": 0.5, "distanceKm": 3.2},
                {"relativeDirection": 0, "elevationAngleDegrees": 1.25, "distanceKm": 8.9},
            ],
        }
    ]


def test_encode_dataset_is_compact() -> None:
    """Encoded JSON should not contain separator whitespace."""
    assert ", " not in encode_dataset([_viewpoint()])
    assert ": " not in encode_dataset([_viewpoint()])


def test_encode_dataset_rejects_non_finite_values() -> None:
    """NaN values cannot be represented in strict JSON."""
    with pytest.raises(SerializationError, match="could not be encoded"):
        encode_dataset([_viewpoint(elevation_angle_deg=float("nan"))])


def test_compress_dataset_gzips_encoded_json() -> None:
    """Artifact body should gunzip to exactly the encoded JSON."""
    viewpoints = [_viewpoint()]
    artifact = compress_dataset(viewpoints)

    assert gzip.decompress(artifact.body_gzip).decode("utf-8") == encode_dataset(viewpoints)
    assert artifact.viewpoint_count == 1


def test_write_dataset_json_creates_parent_dirs(tmp_path: Path) -> None:
    """File sink should write uncompressed JSON and report its size."""
    output = tmp_path / "static" / "timpanogos.json"

    size = write_dataset_json([_viewpoint()], output)

    assert output.exists()
    assert size == output.stat().st_size
    assert json.loads(output.read_text(encoding="utf-8"))[0]["angle"] == 7
