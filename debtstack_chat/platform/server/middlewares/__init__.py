"""HTTP middleware components."""

from debtstack_chat.platform.server.middlewares.correlation import (
    REQUEST_ID_HEADER,
    CorrelationIdMiddleware,
)

__all__ = [
    "CorrelationIdMiddleware",
    "REQUEST_ID_HEADER",
]
