"""
Structured Logging with Correlation IDs

Provides logging utilities that automatically include:
- correlation_id: Links logs to one logical operation (sent to the gateway as x-correlation-id)
- organization_id: Active organization of the current session
- resource: Domain resource being called (e.g. "asset")
- method / path: HTTP call in flight

Usage:
    from core.observability.logging import get_logger, with_correlation

    logger = get_logger(__name__)

    with with_correlation(correlation_id=new_correlation_id(), organization_id="org-1"):
        logger.info("Loading assets")  # Automatically includes correlation IDs
"""

import json
import logging
import random
import string
import sys
import time
from contextvars import ContextVar
from dataclasses import asdict, dataclass, replace
from datetime import datetime, timezone
from typing import Optional, Dict, Any
from contextlib import contextmanager


# =============================================================================
# Correlation Context
# =============================================================================

@dataclass
class CorrelationContext:
    """Fields attached to every log line emitted while a gateway call is in flight."""
    correlation_id: Optional[str] = None
    organization_id: Optional[str] = None
    resource: Optional[str] = None
    method: Optional[str] = None
    path: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Set fields only."""
        return {k: v for k, v in asdict(self).items() if v is not None}

    def merge(self, **kwargs) -> "CorrelationContext":
        """Copy with the given non-None fields replaced."""
        return replace(self, **{k: v for k, v in kwargs.items() if v is not None})


_correlation_context: ContextVar[CorrelationContext] = ContextVar(
    "correlation_context",
    default=CorrelationContext()
)


def get_correlation_context() -> CorrelationContext:
    return _correlation_context.get()


@contextmanager
def with_correlation(**kwargs):
    """
    Scope correlation fields to a block; nested blocks inherit and override.

    Usage:
        with with_correlation(correlation_id="1700000000000-abc123xyz"):
            await gateway.assets.list()  # Request carries x-correlation-id
    """
    new_ctx = get_correlation_context().merge(**kwargs)
    token = _correlation_context.set(new_ctx)
    try:
        yield new_ctx
    finally:
        _correlation_context.reset(token)


def new_correlation_id() -> str:
    """Generate a correlation ID of the form ``<epoch-ms>-<9 base36 chars>``."""
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=9))
    return f"{int(time.time() * 1000)}-{suffix}"


# =============================================================================
# Formatters
# =============================================================================

class StructuredFormatter(logging.Formatter):
    """
    One JSON object per line: record fields, correlation context, then extra_fields.

    {"timestamp": "2024-01-09T12:00:00.000Z", "level": "WARNING", "logger": "gateway.client",
     "message": "GET /api/assets/a1 -> 404: Failed to fetch asset",
     "correlation_id": "1704801600000-k3j2h1g0f", "resource": "asset", "method": "GET",
     "path": "/api/assets/a1", "status": 404, "duration_ms": 38.2}
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        log_data = {
            "timestamp": created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_data.update(get_correlation_context().to_dict())
        log_data.update(getattr(record, "extra_fields", None) or {})

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class HumanReadableFormatter(logging.Formatter):
    """
    2024-01-09 12:00:00 [INFO ] gateway.client [org-1/1704801600000-k3/res:asset]: GET /api/assets -> 200
    """

    def format(self, record: logging.LogRecord) -> str:
        ctx = get_correlation_context()

        parts = []
        if ctx.organization_id:
            parts.append(ctx.organization_id)
        if ctx.correlation_id:
            parts.append(ctx.correlation_id[:16])
        if ctx.resource:
            parts.append(f"res:{ctx.resource}")
        correlation = "/".join(parts) or "-"

        timestamp = self.formatTime(record, "%Y-%m-%d %H:%M:%S")
        msg = f"{timestamp} [{record.levelname:5}] {record.name} [{correlation}]: {record.getMessage()}"

        if record.exc_info:
            msg += "\n" + self.formatException(record.exc_info)

        return msg


# =============================================================================
# Logger with Correlation Support
# =============================================================================

class CorrelatedLogger:
    """
    Thin wrapper over a stdlib logger; every call accepts ``extra_fields``.

    The correlation context is read by the formatters at emit time, so it is
    not copied onto the record here.
    """

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    def _log(self, level: int, msg: str, *args, extra_fields: Optional[Dict[str, Any]] = None, exc_info=None):
        if not self._logger.isEnabledFor(level):
            return
        if exc_info is True:
            exc_info = sys.exc_info()

        record = self._logger.makeRecord(self._logger.name, level, "(unknown file)", 0, msg, args, exc_info)
        record.extra_fields = extra_fields or {}
        self._logger.handle(record)

    def debug(self, msg: str, *args, **kwargs):
        self._log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        self._log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        self._log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        self._log(logging.ERROR, msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs):
        kwargs["exc_info"] = True
        self._log(logging.ERROR, msg, *args, **kwargs)


# =============================================================================
# Logger Factory
# =============================================================================

_loggers: Dict[str, CorrelatedLogger] = {}
_configured = False
_handler: Optional[logging.Handler] = None


def configure_logging(
    level: int = logging.INFO,
    json_format: bool = False,
    force: bool = False,
):
    """
    Configure logging for the application.

    Args:
        level: Logging level (int or name such as "DEBUG")
        json_format: If True, use JSON format; otherwise human-readable
        force: Replace a handler installed by an earlier call
    """
    global _configured, _handler

    if _configured and not force:
        return

    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    if json_format:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(HumanReadableFormatter())

    root.setLevel(level)
    root.addHandler(handler)
    _handler = handler

    for logger_name in ["gateway", "core"]:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)

    # Reduce noise from third-party libraries
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    _configured = True


def get_logger(name: str) -> CorrelatedLogger:
    """
    Get a correlated logger for the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        CorrelatedLogger instance
    """
    if name not in _loggers:
        if not _configured:
            configure_logging()

        base_logger = logging.getLogger(name)
        _loggers[name] = CorrelatedLogger(base_logger)

    return _loggers[name]
