"""Metrics recorder - stateless functions to record metrics."""

import time
from contextlib import contextmanager
from typing import Generator

from monitoring.definitions import (
    CACHE_LOOKUPS,
    LAST_RENDER_FAILURES,
    PLACEHOLDERS,
    RENDER_DURATION,
    SECRET_FETCHES,
    SECRET_FETCH_LATENCY,
)


@contextmanager
def track_time() -> Generator[dict, None, None]:
    """
    Context manager to track execution time.

    Usage:
        with track_time() as t:
            do_work()
        print(t["duration"])  # seconds
    """
    result = {"duration": 0.0}
    start = time.perf_counter()
    try:
        yield result
    finally:
        result["duration"] = time.perf_counter() - start


class Metrics:
    """
    Stateless metrics recorder.

    Usage:
        from monitoring import Metrics, track_time

        with track_time() as t:
            payload = provider.fetch_secret_value(service, identifier)
        Metrics.secret_fetch(success=True, latency=t["duration"])
    """

    @staticmethod
    def cache_lookup(table: str, hit: bool) -> None:
        """Record a resolution cache lookup."""
        CACHE_LOOKUPS.labels(table=table, result="hit" if hit else "miss").inc()

    @staticmethod
    def secret_fetch(success: bool = True, latency: float = None) -> None:
        """Record a provider fetch."""
        status = "success" if success else "error"
        SECRET_FETCHES.labels(status=status).inc()
        if latency:
            SECRET_FETCH_LATENCY.observe(latency)

    @staticmethod
    def placeholder(kind: str, resolved: bool) -> None:
        """Record one env or secret placeholder outcome."""
        status = "resolved" if resolved else "unresolved"
        PLACEHOLDERS.labels(kind=kind, status=status).inc()

    @staticmethod
    def render_finished(duration: float, failures: int) -> None:
        """Record the outcome of a whole template render."""
        RENDER_DURATION.set(duration)
        LAST_RENDER_FAILURES.set(failures)
