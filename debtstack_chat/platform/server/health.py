"""
Health state and service metadata for the platform endpoints.
"""

import datetime
import os
import platform
import socket
import threading
import time

from debtstack_chat.platform.constants import SERVICE_NAME

__all__ = ["HealthCheck", "MetadataManager", "metadata"]


class HealthCheck:
    """Thread-safe health check state manager.

    ``/health`` reports healthy only between startup and the start of a
    graceful shutdown.
    """

    _health_check_enabled = threading.Event()

    @staticmethod
    def enable() -> None:
        HealthCheck._health_check_enabled.set()

    @staticmethod
    def disable() -> None:
        HealthCheck._health_check_enabled.clear()

    @staticmethod
    def status() -> bool:
        return HealthCheck._health_check_enabled.is_set()


class MetadataManager:
    """Static build and host metadata served from ``/info``."""

    # keys to read from the environment
    ENV_INFO_KEYS = [
        "BUILD_DATE",
        "BUILD_VERSION",
        "GIT_COMMIT",
        "IMAGE_NAME",
        "SERVICE_ID",
        "SERVICE_NAME",
    ]

    def __init__(self):
        self._started_at = datetime.datetime.now(tz=datetime.UTC).isoformat()
        self._started_ts = time.monotonic()

        metadata = {key: os.environ.get(key) for key in self.ENV_INFO_KEYS}
        metadata["SERVICE_NAME"] = metadata["SERVICE_NAME"] or SERVICE_NAME
        metadata["HOSTNAME"] = socket.gethostname()
        metadata["OS_VERSION"] = platform.platform()
        metadata["PYTHON_VERSION"] = platform.python_version()
        self.metadata = {key.lower(): value for key, value in metadata.items()}

    def info(self) -> dict:
        return {
            **self.metadata,
            "started": self._started_at,
            "uptime_seconds": round(time.monotonic() - self._started_ts, 3),
        }


metadata = MetadataManager()
