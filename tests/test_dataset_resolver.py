"""Tests for the serving-side dataset resolver."""

from __future__ import annotations

import gzip
import json
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from threading import Event

import pytest

from peakview.errors import DataLoadError
from peakview.state.dataset_resolver import DatasetResolver
from peakview.state.single_flight import CacheState


def _wait_until(predicate: Callable[[], bool], timeout_s: float = 5.0) -> None:
    deadline = time.monotonic() + timeout_s
    while not predicate():
        if time.monotonic() > deadline:
            raise AssertionError("condition not reached before timeout")
        time.sleep(0.005)


def test_resolver_loads_and_builds_once(fake_elevation) -> None:
    """Repeated calls should load elevation data once and reuse the artifact."""
    loads: list[int] = []

    def loader():
        loads.append(1)
        return fake_elevation

    resolver = DatasetResolver(loader)
    first = resolver.get_artifact()
    second = resolver.get_artifact()

    assert first is second
    assert len(loads) == 1
    assert resolver.build_count == 1
    assert resolver.state is CacheState.READY

    payload = json.loads(gzip.decompress(first.body_gzip).decode("utf-8"))
    assert first.viewpoint_count == 360
    assert first.json_bytes == len(gzip.decompress(first.body_gzip))
    assert [item["angle"] for item in payload] == list(range(360))
    assert set(payload[0]) == {"angle", "viewpoint", "bearingToPeak", "horizon"}


def test_resolver_concurrent_requests_share_one_load(fake_elevation) -> None:
    """Concurrent requests during a slow load should share a single build."""
    started = Event()
    release = Event()
    loads: list[int] = []

    def loader():
        loads.append(1)
        started.set()
        release.wait(5.0)
        return fake_elevation

    resolver = DatasetResolver(loader)
    with ThreadPoolExecutor(max_workers=6) as pool:
        futures = [pool.submit(resolver.get_artifact) for _ in range(6)]
        assert started.wait(5.0)
        assert resolver.state is CacheState.PENDING
        _wait_until(lambda: resolver.waiting == 5)
        release.set()
        artifacts = [future.result(timeout=30.0) for future in futures]

    assert len(loads) == 1
    assert all(artifact is artifacts[0] for artifact in artifacts)
    assert resolver.waiting == 0
    assert resolver.build_count == 1


def test_resolver_retries_after_failed_load(fake_elevation) -> None:
    """A failed load should leave the resolver empty and retryable."""
    loads: list[int] = []

    def loader():
        loads.append(1)
        if len(loads) == 1:
            raise DataLoadError("n41w112 grid unreadable")
        return fake_elevation

    resolver = DatasetResolver(loader)
    with pytest.raises(DataLoadError, match="unreadable"):
        resolver.get_artifact()
    assert resolver.state is CacheState.EMPTY
    assert resolver.build_count == 0

    artifact = resolver.get_artifact()
    assert artifact.viewpoint_count == 360
    assert len(loads) == 2
    assert resolver.build_count == 1


def test_resolver_rejects_non_positive_workers(fake_elevation) -> None:
    """workers must be positive."""
    with pytest.raises(ValueError, match="workers must be positive"):
        DatasetResolver(lambda: fake_elevation, workers=0)
