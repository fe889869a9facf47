"""Platform endpoints: health, service info and Prometheus metrics."""

import logging
from enum import Enum

from fastapi import APIRouter, Request, Response

from debtstack_chat.platform.observability.metrics import metrics as prom_metrics
from debtstack_chat.platform.server.health import HealthCheck, metadata

logger = logging.getLogger(__name__)

base_router = APIRouter()
base_tags: list[Enum | str] = ["base"]


@base_router.get("/health", tags=base_tags)
async def health():
    """Health check for load balancers.

    Returns:
        200 with ``{"status": "OK"}`` while serving, 404 while starting or draining
    """
    if not HealthCheck.status():
        logger.info("health-check: fail. disabled")
        return Response(status_code=404)
    return {"status": "OK"}


@base_router.get("/info", tags=base_tags)
async def info(request: Request):
    state = request.app.state
    return {
        **metadata.info(),
        "chat_configured": getattr(state, "orchestrator", None) is not None,
        "research_configured": getattr(state, "research", None) is not None,
    }


@base_router.get("/metrics", tags=base_tags)
async def metrics():
    body, media_type = prom_metrics()
    return Response(body, media_type=media_type)
