"""Market data HTTP endpoints."""

import logging

import httpx
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from debtstack_chat.market.treasury import TreasuryError, fetch_treasury_yields
from debtstack_chat.platform.server.dependencies.components import get_http_client
from debtstack_chat.platform.server.dependencies.settings import get_settings
from debtstack_chat.platform.settings import Settings

logger = logging.getLogger(__name__)

market_router = APIRouter(prefix="/api", tags=["market"])

TREASURY_CACHE_CONTROL = "public, s-maxage=300, stale-while-revalidate=600"


@market_router.get("/treasury")
async def treasury(
    settings: Settings = Depends(get_settings),
    http_client: httpx.AsyncClient = Depends(get_http_client),
):
    """Current treasury yields for the chat ticker bar."""
    if not settings.twelve_data.api_key:
        return JSONResponse({"error": "Treasury data API key not configured"}, status_code=503)

    try:
        yields = await fetch_treasury_yields(http_client, settings.twelve_data.url, settings.twelve_data.api_key)
    except TreasuryError as e:
        return JSONResponse({"error": str(e)}, status_code=e.status_code)
    except (httpx.HTTPError, ValueError):
        logger.exception("Treasury lookup failed")
        return JSONResponse({"error": "Internal server error"}, status_code=500)

    return JSONResponse(
        {"yields": [y.as_dict() for y in yields]},
        headers={"Cache-Control": TREASURY_CACHE_CONTROL},
    )
