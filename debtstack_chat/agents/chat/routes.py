"""Chat HTTP endpoints.

This module exposes the streaming chat endpoint, on-demand SEC research,
coverage requests, the starter prompt library and the data browser proxy.
"""

import logging
from collections.abc import AsyncIterator
from typing import Literal

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import BaseModel, ConfigDict, Field

from debtstack_chat.agents.chat.orchestrator import ChatOrchestrator
from debtstack_chat.agents.chat.prompt import starter_prompt_library
from debtstack_chat.agents.chat.research import ResearchError, ResearchPipeline
from debtstack_chat.agents.chat.tools.dispatcher import API_KEY_HEADER
from debtstack_chat.platform.agent.messages import ChatTurn, StreamEvent
from debtstack_chat.platform.observability.metrics import timing_metrics
from debtstack_chat.platform.server.dependencies.components import (
    get_http_client,
    get_orchestrator,
    get_research_pipeline,
)
from debtstack_chat.platform.server.dependencies.settings import get_settings
from debtstack_chat.platform.settings import Settings

logger = logging.getLogger(__name__)

chat_router = APIRouter(prefix="/api/chat", tags=["chat"])
search_router = APIRouter(prefix="/api", tags=["search"])

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}

COMPANY_SEARCH_FIELDS = "ticker,name,sector,leverage_ratio"
BOND_SEARCH_FIELDS = "name,cusip,company_ticker,seniority,coupon_rate,maturity_date"
COMPANY_PAGE_SIZE = 100
BOND_PAGE_SIZE = 50


class ChatMessagePayload(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatPayload(BaseModel):
    """Request payload for a chat turn.

    Attributes:
        messages: Full visible conversation, oldest first
        api_key: Caller's DebtStack API key, sent as ``apiKey``
    """

    model_config = ConfigDict(populate_by_name=True)

    messages: list[ChatMessagePayload] = Field(default_factory=list)
    api_key: str | None = Field(None, alias="apiKey")


class ResearchPayload(BaseModel):
    ticker: str | None = None
    company_name: str | None = None


class CoveragePayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ticker: str | None = None
    company_name: str | None = Field(None, alias="companyName")
    cik: str | None = None


class SearchPayload(BaseModel):
    """Request payload for the dashboard data browser.

    Attributes:
        api_key: Caller's DebtStack API key, sent as ``apiKey``
        type: ``companies`` or ``bonds``
        ticker: Company whose bonds to list, required for ``bonds``
        offset: Page offset for ``companies``
    """

    model_config = ConfigDict(populate_by_name=True)

    api_key: str | None = Field(None, alias="apiKey")
    type: str | None = None
    ticker: str | None = None
    offset: int | None = None


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def backend_detail(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return response.reason_phrase or None
    detail = body.get("detail") if isinstance(body, dict) else None
    return str(detail) if detail else None


async def sse_frames(events: AsyncIterator[StreamEvent]) -> AsyncIterator[str]:
    async for event in events:
        yield event.to_sse()


@chat_router.post("")
async def chat(
    payload: ChatPayload,
    settings: Settings = Depends(get_settings),
    orchestrator: ChatOrchestrator | None = Depends(get_orchestrator),
):
    """Stream a chat turn as server-sent events.

    Args:
        payload: Conversation and API key
        settings: Application settings (injected dependency)
        orchestrator: Chat loop (injected dependency)

    Returns:
        ``text/event-stream`` response, or a JSON error before any event is sent
    """
    if not payload.api_key:
        return error_response("API key required", 400)
    if not payload.messages:
        return error_response("Messages required", 400)
    max_messages = settings.chat.max_messages
    if len(payload.messages) > max_messages:
        return error_response(f"Too many messages (max {max_messages}). Please start a new chat.", 400)
    if orchestrator is None:
        return error_response("Chat service not configured", 500)

    conversation = [ChatTurn(role=m.role, content=m.content) for m in payload.messages]
    events = orchestrator.run_stream(conversation, payload.api_key)
    return StreamingResponse(sse_frames(events), media_type="text/event-stream", headers=SSE_HEADERS)


@chat_router.post("/research")
async def research(
    payload: ResearchPayload,
    request: Request,
    pipeline: ResearchPipeline | None = Depends(get_research_pipeline),
):
    """Research a company's debt from its latest SEC annual report.

    Returns:
        ``{data, meta}`` on success, ``{error}`` with 400, 404, 422 or 500 otherwise
    """
    ticker = (payload.ticker or "").strip()
    if not ticker:
        return error_response("Ticker is required", 400)
    if pipeline is None:
        return error_response("Live SEC research is not configured.", 500)

    try:
        with timing_metrics(request, "research"):
            report = await pipeline.run(ticker, payload.company_name)
    except ResearchError as e:
        if e.status_code >= 500:
            logger.exception(f"Research failed for {ticker}")
            return error_response(f"Research failed: {e}", e.status_code)
        return error_response(str(e), e.status_code)
    except Exception as e:
        logger.exception(f"Research failed for {ticker}")
        return error_response(f"Research failed: {e}", 500)

    return report.to_payload()


@chat_router.post("/request-coverage")
async def request_coverage(
    payload: CoveragePayload,
    settings: Settings = Depends(get_settings),
    http_client: httpx.AsyncClient = Depends(get_http_client),
):
    """Ask the DebtStack backend to add a company to its coverage."""
    if not payload.ticker or not payload.company_name:
        return error_response("Ticker and company name are required", 400)

    body = {
        "ticker": payload.ticker.upper(),
        "company_name": payload.company_name,
        "cik": payload.cik or None,
    }
    try:
        response = await http_client.post(
            f"{settings.backend.url.rstrip('/')}/v1/coverage/request",
            json=body,
            timeout=settings.backend.timeout_seconds,
        )
        if not response.is_success:
            return error_response(backend_detail(response) or "Backend request failed", response.status_code)
        return response.json()
    except (httpx.HTTPError, ValueError):
        logger.exception("Coverage request failed")
        return error_response("Failed to submit coverage request", 500)


@chat_router.get("/prompts")
async def prompts():
    return starter_prompt_library()


@search_router.post("/search")
async def search(
    payload: SearchPayload,
    settings: Settings = Depends(get_settings),
    http_client: httpx.AsyncClient = Depends(get_http_client),
):
    """List companies or one company's bonds on behalf of the caller's API key."""
    if not payload.api_key:
        return error_response("API key required", 400)

    if payload.type == "companies":
        path = "/v1/companies"
        params = {
            "fields": COMPANY_SEARCH_FIELDS,
            "limit": str(COMPANY_PAGE_SIZE),
            "offset": str(payload.offset or 0),
        }
    elif payload.type == "bonds":
        if not payload.ticker:
            return error_response("Ticker required for bond search", 400)
        path = "/v1/bonds"
        params = {"ticker": payload.ticker, "fields": BOND_SEARCH_FIELDS, "limit": str(BOND_PAGE_SIZE)}
    else:
        return error_response("Invalid search type", 400)

    try:
        response = await http_client.get(
            f"{settings.backend.url.rstrip('/')}{path}",
            params=params,
            headers={API_KEY_HEADER: payload.api_key, "Content-Type": "application/json"},
            timeout=settings.backend.timeout_seconds,
        )
        if not response.is_success:
            return error_response(backend_detail(response) or "API request failed", response.status_code)
        return {"data": response.json()}
    except (httpx.HTTPError, ValueError):
        logger.exception("Search proxy failed")
        return error_response("Internal server error", 500)
