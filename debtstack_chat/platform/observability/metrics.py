"""Prometheus metrics collection and HTTP middleware.

This module provides Prometheus metrics integration including HTTP request
duration histograms and timing metrics for outbound operations such as SEC
research runs and market data lookups.
"""

from time import monotonic
from typing import NamedTuple

import prometheus_client


class HTTPLabels(NamedTuple):
    method: str
    path: str
    http_status: str


class OperationLabels(NamedTuple):
    method: str
    path: str
    operation: str


_NXX_LUT = ["1XX", "2XX", "3XX", "4XX", "5XX"]


def http_status_nxx(status: int) -> str:
    """A coarser 2XX, 4XX, 5XX"""
    return _NXX_LUT[status // 100 - 1]


BUCKETS = (
    # log spaced with 1 sig-fig rounding, 3 per decade
    0.0002,  # 200 μs
    0.0005,
    0.001,  # 1 ms
    0.002,
    0.005,
    0.01,
    0.02,
    0.05,
    0.1,
    0.2,
    0.5,
    1,
    2,
    5,
    10,
    20,
    50,  # SEC research runs can take up to the 45 second tool budget
    120,
    float("inf"),
)


def get_path(routes, scope) -> str:
    """Extract the matched route path from a request scope.

    Args:
        routes: List of FastAPI/Starlette route objects
        scope: ASGI request scope dictionary

    Returns:
        The matched route path template, or "path-not-found" if no match
    """
    path = "path-not-found"
    for route in routes:
        _, matches = route.matches(scope)
        if len(matches) > 0:
            path = route.path
    return path


async def prometheus_middleware(request, call_next):
    """HTTP middleware that records request duration metrics.

    For streaming responses this measures time to first byte, not the
    lifetime of the stream.

    Args:
        request: The incoming HTTP request
        call_next: The next middleware/handler in the chain

    Returns:
        The HTTP response from the downstream handler
    """
    start_time = monotonic()
    response = await call_next(request)
    elapsed_sec = monotonic() - start_time
    path = get_path(request.app.routes, request.scope)

    labels = HTTPLabels(
        method=request.method,
        path=path,
        http_status=http_status_nxx(response.status_code),
    )
    http_histogram.labels(*labels).observe(elapsed_sec)

    return response


def setup_metrics_factory(registry, name, documentation, labelnames):
    """Create a Prometheus histogram with standard bucket configuration."""
    return prometheus_client.Histogram(
        name=name,
        documentation=documentation,
        labelnames=labelnames,
        registry=registry,
        buckets=BUCKETS,
    )


http_histogram = setup_metrics_factory(
    prometheus_client.REGISTRY,
    name="http_request_duration_seconds",
    documentation="Request duration (seconds)",
    labelnames=HTTPLabels._fields,
)
operation_histogram = setup_metrics_factory(
    prometheus_client.REGISTRY,
    name="internal_operation_duration_seconds",
    documentation="Internal operation duration (seconds)",
    labelnames=OperationLabels._fields,
)


def timing_metrics(request, operation: str):
    """Time a block of work on behalf of a request.

    Usage:
        ```
        with timing_metrics(request, "sec_research"):
            await pipeline.run(ticker)
        ```
    """
    labels = OperationLabels(
        method=request.method,
        path=get_path(request.app.routes, request.scope),
        operation=operation,
    )
    return operation_histogram.labels(*labels).time()


def metrics() -> tuple[bytes, str]:
    """Generate Prometheus metrics output for the /metrics endpoint.

    Returns:
        Tuple of (metrics_body, content_type) for the HTTP response
    """
    return (
        prometheus_client.generate_latest(prometheus_client.REGISTRY),
        prometheus_client.CONTENT_TYPE_LATEST,
    )
