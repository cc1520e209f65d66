"""
Metrics Collection for Gateway Requests

Collects and exposes metrics for:
- Request lifecycle (started, succeeded, failed, retried)
- Per-resource breakdown (asset, work order, meter, ...)
- HTTP status code counts
- Request durations (average, p95)

Metrics are held in-memory for the lifetime of the process.
"""

import statistics
from collections import defaultdict
from dataclasses import dataclass, field
from threading import Lock
from typing import Dict, List, Optional, Any


# =============================================================================
# Metric Data Classes
# =============================================================================

def _resource_counters() -> Dict[str, int]:
    return {"started": 0, "succeeded": 0, "failed": 0, "retries": 0}


@dataclass
class RequestMetrics:
    """Metrics for gateway requests."""
    started: int = 0
    succeeded: int = 0
    failed: int = 0
    retries: int = 0
    in_flight: int = 0

    # By resource name
    by_resource: Dict[str, Dict[str, int]] = field(default_factory=lambda: defaultdict(_resource_counters))

    # By HTTP status ("0" for transport failures)
    by_status: Dict[str, int] = field(default_factory=lambda: defaultdict(int))


@dataclass
class TimingMetrics:
    """Request duration metrics."""
    # Raw timing samples (keep last N for percentile calculations)
    samples: List[float] = field(default_factory=list)
    max_samples: int = 1000

    by_resource: Dict[str, List[float]] = field(default_factory=lambda: defaultdict(list))

    def add_sample(self, duration_ms: float, resource: str = None):
        """Add a timing sample."""
        self.samples.append(duration_ms)
        if len(self.samples) > self.max_samples:
            self.samples = self.samples[-self.max_samples:]

        if resource:
            self.by_resource[resource].append(duration_ms)
            if len(self.by_resource[resource]) > self.max_samples:
                self.by_resource[resource] = self.by_resource[resource][-self.max_samples:]

    def get_average(self, resource: str = None) -> float:
        """Get average request duration."""
        samples = self.by_resource.get(resource, []) if resource else self.samples
        return statistics.mean(samples) if samples else 0.0

    def get_p95(self, resource: str = None) -> float:
        """Get 95th percentile request duration."""
        samples = self.by_resource.get(resource, []) if resource else self.samples
        if not samples:
            return 0.0
        sorted_samples = sorted(samples)
        idx = int(len(sorted_samples) * 0.95)
        return sorted_samples[min(idx, len(sorted_samples) - 1)]


# =============================================================================
# Metrics Collector (Singleton)
# =============================================================================

class MetricsCollector:
    """
    Thread-safe metrics collector for gateway calls.

    Usage:
        metrics = MetricsCollector.instance()
        metrics.record_request_started("asset")
        metrics.record_request_succeeded("asset", status_code=200, duration_ms=85)
    """

    _instance: Optional["MetricsCollector"] = None
    _lock = Lock()

    def __init__(self):
        self.requests = RequestMetrics()
        self.timings = TimingMetrics()
        self._lock = Lock()

    @classmethod
    def instance(cls) -> "MetricsCollector":
        """Get singleton instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    # =========================================================================
    # Request Metrics
    # =========================================================================

    def record_request_started(self, resource: str):
        """Record a request start."""
        with self._lock:
            self.requests.started += 1
            self.requests.in_flight += 1
            self.requests.by_resource[resource]["started"] += 1

    def record_request_succeeded(self, resource: str, status_code: int, duration_ms: float = None):
        """Record a 2xx response."""
        with self._lock:
            self.requests.succeeded += 1
            self.requests.in_flight = max(0, self.requests.in_flight - 1)
            self.requests.by_resource[resource]["succeeded"] += 1
            self.requests.by_status[str(status_code)] += 1

            if duration_ms is not None:
                self.timings.add_sample(duration_ms, resource)

    def record_request_failed(self, resource: str, status_code: Optional[int] = None, duration_ms: float = None):
        """Record a non-2xx response or transport failure."""
        with self._lock:
            self.requests.failed += 1
            self.requests.in_flight = max(0, self.requests.in_flight - 1)
            self.requests.by_resource[resource]["failed"] += 1
            self.requests.by_status[str(status_code or 0)] += 1

            if duration_ms is not None:
                self.timings.add_sample(duration_ms, resource)

    def record_request_retry(self, resource: str, attempt: int):
        """Record a retry of a request."""
        with self._lock:
            self.requests.retries += 1
            self.requests.by_resource[resource]["retries"] += 1

    # =========================================================================
    # Timing Metrics
    # =========================================================================

    def get_timing_stats(self, resource: str = None) -> Dict[str, float]:
        """Get timing statistics for a resource (or overall)."""
        with self._lock:
            return {
                "average_ms": self.timings.get_average(resource),
                "p95_ms": self.timings.get_p95(resource),
                "sample_count": len(self.timings.by_resource.get(resource, []) if resource else self.timings.samples),
            }

    # =========================================================================
    # Summary
    # =========================================================================

    def get_summary(self) -> Dict[str, Any]:
        """Get a summary of all metrics."""
        with self._lock:
            return {
                "requests": {
                    "started": self.requests.started,
                    "succeeded": self.requests.succeeded,
                    "failed": self.requests.failed,
                    "retries": self.requests.retries,
                    "in_flight": self.requests.in_flight,
                    "by_resource": {k: dict(v) for k, v in self.requests.by_resource.items()},
                    "by_status": dict(self.requests.by_status),
                },
                "timings": {
                    "overall": {
                        "average_ms": self.timings.get_average(),
                        "p95_ms": self.timings.get_p95(),
                    },
                    "by_resource": {
                        resource: {
                            "average_ms": self.timings.get_average(resource),
                            "p95_ms": self.timings.get_p95(resource),
                        }
                        for resource in self.timings.by_resource.keys()
                    },
                },
            }

    def reset(self):
        """Clear all collected metrics."""
        with self._lock:
            self.requests = RequestMetrics()
            self.timings = TimingMetrics()


# =============================================================================
# Module-level convenience functions
# =============================================================================

def get_metrics() -> MetricsCollector:
    """Get the global metrics collector."""
    return MetricsCollector.instance()


def record_request_started(resource: str):
    get_metrics().record_request_started(resource)


def record_request_succeeded(resource: str, status_code: int, duration_ms: float = None):
    get_metrics().record_request_succeeded(resource, status_code, duration_ms)


def record_request_failed(resource: str, status_code: Optional[int] = None, duration_ms: float = None):
    get_metrics().record_request_failed(resource, status_code, duration_ms)


def record_request_retry(resource: str, attempt: int):
    get_metrics().record_request_retry(resource, attempt)
