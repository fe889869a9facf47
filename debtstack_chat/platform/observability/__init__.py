"""Observability infrastructure module.

This module provides monitoring and error tracking:
- Structured logging with correlation IDs
- Prometheus metrics
- Bugsnag error reporting
"""

from debtstack_chat.platform.observability.logging import (
    configure_logging,
    correlation_id_ctx,
    get_logger,
    outgoing_headers,
)
from debtstack_chat.platform.observability.metrics import (
    BUCKETS,
    prometheus_middleware,
    timing_metrics,
)

__all__ = [
    "BUCKETS",
    "configure_logging",
    "correlation_id_ctx",
    "get_logger",
    "outgoing_headers",
    "prometheus_middleware",
    "timing_metrics",
]
