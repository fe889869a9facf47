"""HTTP server infrastructure module.

This module provides the FastAPI application factory and HTTP-related utilities:
- Application factory and startup wiring
- Route handlers
- FastAPI dependencies
- Health checks
"""

from debtstack_chat.platform.server.app import create_app
from debtstack_chat.platform.server.health import HealthCheck

__all__ = [
    "create_app",
    "HealthCheck",
]
