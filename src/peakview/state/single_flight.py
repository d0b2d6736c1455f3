"""Compute-once cache that collapses concurrent callers onto one execution."""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Future
from enum import StrEnum
from threading import Lock
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CacheState(StrEnum):
    """Lifecycle of a single-flight cache."""

    EMPTY = "empty"
    PENDING = "pending"
    READY = "ready"


class SingleFlightCache(Generic[T]):
    """Thread-safe lazy value built at most once per successful attempt.

    The first caller in EMPTY state becomes the leader and runs `factory` on its own
    thread. Callers arriving while PENDING attach to the leader's future and receive
    its result or its exception. Success moves to READY and the value is kept for the
    life of the cache. Failure moves back to EMPTY so the next call starts a fresh
    attempt; the failure itself is never cached.
    """

    def __init__(self, factory: Callable[[], T]) -> None:
        self._factory = factory
        self._lock = Lock()
        self._state = CacheState.EMPTY
        self._value: T | None = None
        self._flight: Future[T] | None = None
        self._waiting = 0
        self.build_count = 0
        self.attempt_count = 0

    @property
    def state(self) -> CacheState:
        """Return the current lifecycle state."""
        with self._lock:
            return self._state

    @property
    def waiting(self) -> int:
        """Return how many callers are attached to the in-flight attempt."""
        with self._lock:
            return self._waiting

    def get(self, timeout: float | None = None) -> T:
        """Return the cached value, joining or starting the build as needed.

        `timeout` bounds how long a joining caller waits; it raises TimeoutError for
        that caller only and never aborts the shared attempt. The leader always runs
        the factory to completion.
        """
        with self._lock:
            if self._state is CacheState.READY:
                return self._value  # type: ignore[return-value]
            if self._state is CacheState.PENDING:
                assert self._flight is not None
                flight = self._flight
                self._waiting += 1
                leader = False
            else:
                flight = Future()
                self._flight = flight
                self._state = CacheState.PENDING
                self.attempt_count += 1
                attempt = self.attempt_count
                leader = True

        if leader:
            return self._lead(flight, attempt)

        try:
            return flight.result(timeout=timeout)
        finally:
            with self._lock:
                self._waiting -= 1

    def _lead(self, flight: Future[T], attempt: int) -> T:
        try:
            value = self._factory()
        except BaseException as exc:
            with self._lock:
                self._state = CacheState.EMPTY
                self._flight = None
            logger.warning("Single-flight attempt %d failed: %s", attempt, exc)
            flight.set_exception(exc)
            raise

        with self._lock:
            self._value = value
            self._state = CacheState.READY
            self._flight = None
            self.build_count += 1
        flight.set_result(value)
        return value
