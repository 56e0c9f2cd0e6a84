"""
Prometheus metrics for eligibility evaluations.

Each EligibilityMetrics owns its own registry, so an application (or a
test) creates one instance at startup and hands it to the evaluation
service; the /metrics endpoint reads from the same instance.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

REQUEST_DURATION_BUCKETS = (0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 10.0)


class EligibilityMetrics:
    """Request, error, latency and in-flight metrics for one process."""

    content_type = CONTENT_TYPE_LATEST

    def __init__(self, registry: CollectorRegistry | None = None):
        self.registry = registry or CollectorRegistry()

        self.requests_total = Counter(
            "eligibility_requests",
            "Total number of unpaid leave eligibility evaluation requests",
            registry=self.registry,
        )
        self.errors_total = Counter(
            "eligibility_errors",
            "Total number of errors in unpaid leave eligibility evaluations",
            registry=self.registry,
        )
        self.request_duration = Histogram(
            "eligibility_request_duration_seconds",
            "Duration of unpaid leave eligibility evaluation requests in seconds",
            buckets=REQUEST_DURATION_BUCKETS,
            registry=self.registry,
        )
        self.active_requests = Gauge(
            "eligibility_active_requests",
            "Number of active unpaid leave eligibility evaluation requests",
            registry=self.registry,
        )

    def increment_requests(self) -> None:
        self.requests_total.inc()

    def increment_errors(self) -> None:
        self.errors_total.inc()

    @contextmanager
    def track_request(self) -> Iterator[None]:
        """Bracket one evaluation: in-flight gauge plus duration histogram."""
        self.active_requests.inc()
        try:
            with self.request_duration.time():
                yield
        finally:
            self.active_requests.dec()

    def gather(self) -> bytes:
        """Render the registry in the Prometheus text exposition format."""
        return generate_latest(self.registry)

    def sample(self, name: str) -> float:
        """Current value of a single sample, 0.0 if it was never recorded."""
        value = self.registry.get_sample_value(name)
        return value if value is not None else 0.0
