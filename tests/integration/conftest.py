"""Integration test fixtures.

This module provides shared fixtures for integration tests including:
- A scripted chat model standing in for LiteLLM
- Route/handler tests with stubbed components (shallow app setup)
- httpx clients backed by MockTransport for backend and SEC calls
"""

from collections.abc import Callable, Generator, Iterable
from decimal import Decimal
from typing import Any
from unittest.mock import AsyncMock, Mock

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from langchain_core.messages import AIMessage, BaseMessage

from debtstack_chat.agents.chat.orchestrator import ChatOrchestrator
from debtstack_chat.platform.agent.config import ChatConfig, DispatcherConfig
from debtstack_chat.platform.agent.messages import ToolResult
from debtstack_chat.platform.server.handlers import EXCEPTION_HANDLERS
from debtstack_chat.platform.server.health import HealthCheck
from debtstack_chat.platform.server.routes import root as root_router
from debtstack_chat.platform.settings import Settings

BACKEND_URL = "https://backend.test"

# =============================================================================
# Model Fixtures
# =============================================================================


class ScriptedLlm:
    """Fake chat model that answers with canned responses, in order.

    A response that is an exception instance is raised instead of returned.
    Every call records a snapshot of the messages it was given.
    """

    def __init__(self, responses: Iterable[AIMessage | Exception]):
        self.responses = list(responses)
        self.calls: list[list[BaseMessage]] = []

    async def ainvoke(self, messages, config=None, **kwargs):
        self.calls.append(list(messages))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def tool_message(*calls: tuple[str, dict[str, Any], str], text: str = "") -> AIMessage:
    """Build a model response requesting tool calls as (name, args, provider_id) tuples."""
    return AIMessage(
        content=text,
        tool_calls=[{"name": name, "args": args, "id": call_id} for name, args, call_id in calls],
    )


@pytest.fixture
def scripted_llm() -> Callable[..., ScriptedLlm]:
    return lambda *responses: ScriptedLlm(responses)


# =============================================================================
# Dispatcher Fixtures
# =============================================================================


@pytest.fixture
def stub_dispatcher() -> Mock:
    """Dispatcher stub charging the catalog price of search tools."""
    dispatcher = Mock()

    async def dispatch(name: str, args: dict[str, Any], api_key: str) -> ToolResult:
        if name == "get_guarantors":
            return ToolResult(data={"data": []}, cost=Decimal("0.15"))
        if name == "get_changes":
            return ToolResult.failure("Rate limit exceeded. Please wait a moment and try again.")
        return ToolResult(data={"data": [{"ticker": args.get("ticker")}]}, cost=Decimal("0.05"))

    dispatcher.dispatch = AsyncMock(side_effect=dispatch)
    return dispatcher


@pytest.fixture
def dispatcher_config() -> DispatcherConfig:
    return DispatcherConfig(base_url=BACKEND_URL, timeout_seconds=15.0, research_timeout_seconds=45.0)


def mock_http_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


# =============================================================================
# FastAPI App Fixtures (Shallow - no middleware, minimal lifespan)
# =============================================================================


@pytest.fixture
def settings() -> Settings:
    return Settings(
        bugsnag={"api_key": "test-key", "release_stage": "local"},
        backend={"url": BACKEND_URL},
        twelve_data={"api_key": "td-key", "url": "https://twelvedata.test"},
    )


@pytest.fixture
def backend_requests() -> list[httpx.Request]:
    return []


@pytest.fixture
def backend_handler(backend_requests) -> Callable[[httpx.Request], httpx.Response]:
    """Default handler for outbound calls made by route handlers."""

    def handler(request: httpx.Request) -> httpx.Response:
        backend_requests.append(request)
        return httpx.Response(200, json={})

    return handler


@pytest.fixture
def test_app(settings: Settings, scripted_llm, stub_dispatcher: Mock, backend_handler) -> FastAPI:
    """Create a minimal test FastAPI app for integration tests.

    This is intentionally SHALLOW - no middleware, no full lifespan.
    Components are placed on app.state directly.
    """
    app = FastAPI(exception_handlers=EXCEPTION_HANDLERS)
    app.state.settings = settings
    app.state.http_client = mock_http_client(backend_handler)
    app.state.orchestrator = ChatOrchestrator(
        llm_with_tools=scripted_llm(AIMessage(content="Hello from DebtStack.")),  # type: ignore[arg-type]
        dispatcher=stub_dispatcher,
        config=ChatConfig(),
        system_prompt="You are a test assistant.",
    )
    app.state.research = None

    app.include_router(root_router)
    return app


@pytest.fixture
def client(test_app: FastAPI) -> TestClient:
    """Create a test client for the test app.

    No context manager needed since we're not using lifespan.
    """
    return TestClient(test_app)


@pytest.fixture
def client_with_health_enabled(test_app: FastAPI) -> Generator[TestClient]:
    """Create a test client with health checks enabled."""
    HealthCheck.enable()
    yield TestClient(test_app)
    HealthCheck.disable()


@pytest.fixture
def client_with_health_disabled(test_app: FastAPI) -> Generator[TestClient]:
    """Create a test client with health checks disabled."""
    HealthCheck.disable()
    yield TestClient(test_app)


@pytest.fixture
def tool_request() -> Callable[..., AIMessage]:
    return tool_message
