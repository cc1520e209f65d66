"""
Observability Module for the CMMS Gateway Client

Provides:
- Structured logging with correlation IDs
- Metrics collection (requests, retries, status codes, durations)
"""

from core.observability.metrics import (
    MetricsCollector,
    get_metrics,
    record_request_started,
    record_request_succeeded,
    record_request_failed,
    record_request_retry,
)

from core.observability.logging import (
    get_logger,
    configure_logging,
    CorrelationContext,
    get_correlation_context,
    with_correlation,
    new_correlation_id,
)

__all__ = [
    # Metrics
    "MetricsCollector",
    "get_metrics",
    "record_request_started",
    "record_request_succeeded",
    "record_request_failed",
    "record_request_retry",
    # Logging
    "get_logger",
    "configure_logging",
    "CorrelationContext",
    "get_correlation_context",
    "with_correlation",
    "new_correlation_id",
]
