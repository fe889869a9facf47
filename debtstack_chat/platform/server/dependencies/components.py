"""Shared components built during startup and stored on ``app.state``."""

import httpx
from fastapi import Request

from debtstack_chat.agents.chat.orchestrator import ChatOrchestrator
from debtstack_chat.agents.chat.research import ResearchPipeline


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def get_orchestrator(request: Request) -> ChatOrchestrator | None:
    """Chat orchestrator, or None when no chat model is configured."""
    return getattr(request.app.state, "orchestrator", None)


def get_research_pipeline(request: Request) -> ResearchPipeline | None:
    return getattr(request.app.state, "research", None)
