"""
Observability Validation Test

This test validates the observability stack:
1. Metrics collection works (request lifecycle/status/timing metrics)
2. Structured logging with correlation IDs works
3. Correlation context is scoped per call and per async task
4. Gateway calls are logged with their correlation context

Pass criteria: from one x-correlation-id seen by the gateway, you can find the
client log lines for that call.
"""

import asyncio
import json
import logging
import re
from datetime import datetime

import pytest


# Test imports - these should all import successfully
def test_observability_imports():
    """Verify all observability modules import correctly."""
    from core.observability import (
        MetricsCollector, get_metrics,
        record_request_started, record_request_succeeded, record_request_failed,
        record_request_retry,
        get_logger, configure_logging, CorrelationContext,
        get_correlation_context, with_correlation, new_correlation_id,
    )
    assert MetricsCollector is not None
    assert get_metrics is not None
    assert CorrelationContext is not None


class TestMetricsCollector:
    """Test the metrics collection system."""

    def test_singleton_instance(self):
        """MetricsCollector returns same instance."""
        from core.observability.metrics import MetricsCollector
        m1 = MetricsCollector.instance()
        m2 = MetricsCollector.instance()
        assert m1 is m2

    def test_request_lifecycle_tracking(self):
        """Track request started/succeeded/failed counts."""
        from core.observability.metrics import MetricsCollector
        mc = MetricsCollector.instance()

        mc.record_request_started("asset")
        mc.record_request_started("asset")
        mc.record_request_started("meter")
        mc.record_request_succeeded("asset", 200, duration_ms=40)
        mc.record_request_failed("asset", 404, duration_ms=20)
        mc.record_request_failed("meter", None)

        summary = mc.get_summary()["requests"]
        assert summary["started"] == 3
        assert summary["succeeded"] == 1
        assert summary["failed"] == 2
        assert summary["in_flight"] == 0
        assert summary["by_resource"]["asset"] == {"started": 2, "succeeded": 1, "failed": 1, "retries": 0}
        # Transport failures are counted under status "0"
        assert summary["by_status"] == {"200": 1, "404": 1, "0": 1}

    def test_retry_tracking(self):
        """Track request retries."""
        from core.observability.metrics import record_request_retry, get_metrics

        record_request_retry("work order", attempt=1)
        record_request_retry("work order", attempt=2)

        summary = get_metrics().get_summary()["requests"]
        assert summary["retries"] == 2
        assert summary["by_resource"]["work order"]["retries"] == 2

    def test_timing_percentile_calculation(self):
        """Calculate p95 timing correctly."""
        from core.observability.metrics import MetricsCollector
        mc = MetricsCollector.instance()

        # Add 100 samples: 1-100ms to a unique resource
        resource = f"test_resource_{datetime.now().timestamp()}"
        for i in range(1, 101):
            mc.record_request_succeeded(resource, 200, duration_ms=i)

        stats = mc.get_timing_stats(resource)

        # Average should be ~50.5
        assert 49 <= stats["average_ms"] <= 52
        # P95 should be ~95
        assert 93 <= stats["p95_ms"] <= 97
        assert stats["sample_count"] == 100

    def test_empty_timing_stats(self):
        """No samples gives zeros, not errors."""
        from core.observability.metrics import get_metrics

        stats = get_metrics().get_timing_stats("never-called")
        assert stats == {"average_ms": 0.0, "p95_ms": 0.0, "sample_count": 0}

    def test_reset(self):
        """reset() clears all counters."""
        from core.observability.metrics import get_metrics

        mc = get_metrics()
        mc.record_request_started("asset")
        mc.reset()

        assert mc.get_summary()["requests"]["started"] == 0


class TestCorrelatedLogging:
    """Test structured logging with correlation IDs."""

    def test_correlation_context_creation(self):
        """Create correlation context with all fields."""
        from core.observability.logging import CorrelationContext

        ctx = CorrelationContext(
            correlation_id="1700000000000-abc123xyz",
            organization_id="org-1",
            resource="asset",
            method="GET",
            path="/api/assets",
        )

        assert ctx.correlation_id == "1700000000000-abc123xyz"
        assert ctx.to_dict() == {
            "correlation_id": "1700000000000-abc123xyz",
            "organization_id": "org-1",
            "resource": "asset",
            "method": "GET",
            "path": "/api/assets",
        }

    def test_context_merge_keeps_existing(self):
        """merge() overrides only the given non-None values."""
        from core.observability.logging import CorrelationContext

        ctx = CorrelationContext(correlation_id="c1", organization_id="org-1")
        merged = ctx.merge(resource="meter", organization_id=None)

        assert merged.correlation_id == "c1"
        assert merged.organization_id == "org-1"
        assert merged.resource == "meter"

    def test_context_var_isolation(self):
        """Context vars are restored after the context manager exits."""
        from core.observability.logging import get_correlation_context, with_correlation

        ctx = get_correlation_context()
        assert ctx.correlation_id is None

        with with_correlation(correlation_id="c-outer"):
            with with_correlation(resource="asset"):
                inner_ctx = get_correlation_context()
                assert inner_ctx.correlation_id == "c-outer"
                assert inner_ctx.resource == "asset"
            assert get_correlation_context().resource is None

        assert get_correlation_context().correlation_id is None

    @pytest.mark.asyncio
    async def test_context_per_task(self):
        """Concurrent tasks do not see each other's correlation IDs."""
        from core.observability.logging import get_correlation_context, with_correlation

        async def worker(cid):
            with with_correlation(correlation_id=cid):
                await asyncio.sleep(0)
                return get_correlation_context().correlation_id

        results = await asyncio.gather(worker("c-1"), worker("c-2"), worker("c-3"))
        assert results == ["c-1", "c-2", "c-3"]

    def test_new_correlation_id_format(self):
        """IDs are <epoch-ms>-<9 base36 chars> and unique."""
        from core.observability.logging import new_correlation_id

        ids = {new_correlation_id() for _ in range(50)}
        assert len(ids) == 50
        for cid in ids:
            assert re.fullmatch(r"\d{13}-[a-z0-9]{9}", cid)

    def test_structured_formatter_json_output(self):
        """StructuredFormatter outputs valid JSON."""
        from core.observability.logging import StructuredFormatter, with_correlation

        formatter = StructuredFormatter()

        with with_correlation(correlation_id="c-json", resource="asset"):
            record = logging.LogRecord(
                name="gateway.client",
                level=logging.INFO,
                pathname="client.py",
                lineno=10,
                msg="GET /api/assets -> 200",
                args=(),
                exc_info=None,
            )
            record.extra_fields = {"status": 200}

            output = formatter.format(record)
            data = json.loads(output)

            assert data["message"] == "GET /api/assets -> 200"
            assert data["correlation_id"] == "c-json"
            assert data["resource"] == "asset"
            assert data["status"] == 200

    def test_structured_timestamp_from_record(self):
        """The timestamp is when the record was created, in UTC."""
        from core.observability.logging import StructuredFormatter

        record = logging.LogRecord("gateway.client", logging.INFO, "client.py", 1, "GET /api/assets -> 200", (), None)
        record.created = 0.25

        data = json.loads(StructuredFormatter().format(record))
        assert data["timestamp"] == "1970-01-01T00:00:00.250Z"

    def test_human_readable_formatter(self):
        """HumanReadableFormatter shows organization, correlation and resource."""
        from core.observability.logging import HumanReadableFormatter, with_correlation

        formatter = HumanReadableFormatter()
        record = logging.LogRecord("gateway.client", logging.WARNING, "client.py", 1, "boom", (), None)

        with with_correlation(organization_id="org-1", correlation_id="c-short", resource="meter"):
            line = formatter.format(record)

        assert "[WARNING]" in line
        assert "org-1/c-short/res:meter" in line
        assert line.endswith("boom")

    def test_correlated_logger_exc_info(self, caplog):
        """exception() attaches the active exception."""
        from core.observability.logging import get_logger

        logger = get_logger("gateway.test")
        with caplog.at_level(logging.ERROR):
            try:
                raise ValueError("bad payload")
            except ValueError:
                logger.exception("Request failed", extra_fields={"resource": "asset"})

        record = caplog.records[-1]
        assert record.exc_info[0] is ValueError
        assert record.extra_fields == {"resource": "asset"}


class TestGatewayLogging:
    """Gateway calls log with the call's correlation context."""

    @pytest.mark.asyncio
    async def test_failure_logged_with_context(self, cmms, fake_gateway):
        from core.observability.logging import StructuredFormatter, with_correlation
        from gateway import RequestFailed

        fake_gateway.respond("GET", "/api/assets/a1", status=404)
        formatter = StructuredFormatter()
        lines = []

        class Capture(logging.Handler):
            def emit(self, record):
                lines.append(json.loads(formatter.format(record)))

        handler = Capture(level=logging.WARNING)
        logging.getLogger("gateway").addHandler(handler)
        try:
            with with_correlation(correlation_id="c-trace"):
                with pytest.raises(RequestFailed):
                    await cmms.assets.get("a1")
        finally:
            logging.getLogger("gateway").removeHandler(handler)

        assert fake_gateway.last.headers["x-correlation-id"] == "c-trace"
        failure = [line for line in lines if line["logger"] == "gateway.client"][-1]
        assert failure["correlation_id"] == "c-trace"
        assert failure["resource"] == "asset"
        assert failure["method"] == "GET"
        assert failure["path"] == "/api/assets/a1"
        assert failure["status"] == 404


if __name__ == "__main__":
    pytest.main([__file__, "-v", "-s"])
