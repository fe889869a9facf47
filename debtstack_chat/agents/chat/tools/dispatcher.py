"""Tool dispatch against the DebtStack API and the live research pipeline."""

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from time import monotonic
from typing import Any

import httpx

from debtstack_chat.agents.chat.research import ResearchError, ResearchPipeline
from debtstack_chat.agents.chat.tools import builders
from debtstack_chat.agents.chat.tools.catalog import TOOL_COSTS, ToolName
from debtstack_chat.agents.chat.tools.shaping import shape_response
from debtstack_chat.platform.agent.config import DispatcherConfig
from debtstack_chat.platform.agent.messages import ToolResult
from debtstack_chat.platform.agent.metrics import ToolMetricsLabels, record_tool_call
from debtstack_chat.platform.observability.logging import outgoing_headers

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-API-Key"

INVALID_KEY_MESSAGE = "Invalid API key. Please regenerate your key from the dashboard."
NO_CREDITS_MESSAGE = "No credits remaining. Please purchase more credits or upgrade your plan."
RATE_LIMITED_MESSAGE = "Rate limit exceeded. Please wait a moment and try again."

_STATUS_MESSAGES = {
    401: INVALID_KEY_MESSAGE,
    402: NO_CREDITS_MESSAGE,
    429: RATE_LIMITED_MESSAGE,
}


@dataclass(frozen=True)
class ToolSpec:
    """How one catalog entry is executed.

    Attributes:
        build_request: Pure builder for the backend request; None for tools
            served outside the backend
        cost: Price charged for a successful call
    """

    build_request: builders.RequestBuilder | None
    cost: Decimal


TOOL_SPECS: dict[ToolName, ToolSpec] = {
    ToolName.SEARCH_COMPANIES: ToolSpec(builders.search_companies, TOOL_COSTS[ToolName.SEARCH_COMPANIES]),
    ToolName.SEARCH_BONDS: ToolSpec(builders.search_bonds, TOOL_COSTS[ToolName.SEARCH_BONDS]),
    ToolName.RESOLVE_BOND: ToolSpec(builders.resolve_bond, TOOL_COSTS[ToolName.RESOLVE_BOND]),
    ToolName.GET_GUARANTORS: ToolSpec(builders.get_guarantors, TOOL_COSTS[ToolName.GET_GUARANTORS]),
    ToolName.GET_CORPORATE_STRUCTURE: ToolSpec(
        builders.get_corporate_structure, TOOL_COSTS[ToolName.GET_CORPORATE_STRUCTURE]
    ),
    ToolName.SEARCH_PRICING: ToolSpec(builders.search_pricing, TOOL_COSTS[ToolName.SEARCH_PRICING]),
    ToolName.SEARCH_DOCUMENTS: ToolSpec(builders.search_documents, TOOL_COSTS[ToolName.SEARCH_DOCUMENTS]),
    ToolName.GET_CHANGES: ToolSpec(builders.get_changes, TOOL_COSTS[ToolName.GET_CHANGES]),
    ToolName.RESEARCH_COMPANY: ToolSpec(None, TOOL_COSTS[ToolName.RESEARCH_COMPANY]),
}


def timeout_message(seconds: float) -> str:
    return f"Request timed out ({seconds:g}s). Please try again."


def error_detail(response: httpx.Response) -> str:
    """Backend-provided error detail, falling back to the reason phrase."""
    try:
        body = response.json()
    except ValueError:
        return response.reason_phrase
    if isinstance(body, dict):
        detail = body.get("detail") or body.get("error")
        if detail:
            return str(detail)
    return response.reason_phrase


def status_error(response: httpx.Response) -> str:
    """Map a non-2xx backend response to the message shown to the user."""
    message = _STATUS_MESSAGES.get(response.status_code)
    if message:
        return message
    return f"API error ({response.status_code}): {error_detail(response)}"


class ToolDispatcher:
    """Executes catalog tools on behalf of one API key.

    Failed calls never raise: every failure becomes a ``ToolResult`` with an
    error message and zero cost.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        config: DispatcherConfig,
        research: ResearchPipeline | None = None,
        agent_slug: str = "chat",
        specs: Mapping[ToolName, ToolSpec] = TOOL_SPECS,
    ):
        self.http_client = http_client
        self.config = config
        self.research = research
        self.agent_slug = agent_slug
        self.specs = specs

    async def dispatch(self, name: str, args: Mapping[str, Any], api_key: str) -> ToolResult:
        """Execute a tool call.

        Args:
            name: Tool name requested by the model
            args: Tool arguments requested by the model
            api_key: Caller's DebtStack API key, forwarded to the backend

        Returns:
            ToolResult with the shaped payload and the tool's cost, or an error
        """
        tool = ToolName.parse(name)
        spec = self.specs.get(tool) if tool else None
        if tool is None or spec is None:
            logger.warning(f"Model requested unknown tool {name!r}")
            return ToolResult.failure(f"Unknown tool: {name}")

        start_time = monotonic()
        if spec.build_request is None:
            result = await self._run_research(spec, args)
        else:
            result = await self._call_backend(spec, args, api_key)

        record_tool_call(
            ToolMetricsLabels(self.agent_slug, tool.value),
            duration=monotonic() - start_time,
            error=not result.ok,
            cost=result.cost,
        )
        if not result.ok:
            logger.info(f"Tool {tool.value} failed: {result.error}")
        return result

    async def _call_backend(self, spec: ToolSpec, args: Mapping[str, Any], api_key: str) -> ToolResult:
        request = spec.build_request(args)  # type: ignore[misc]
        headers = {API_KEY_HEADER: api_key, "Content-Type": "application/json", **outgoing_headers()}
        try:
            response = await self.http_client.request(
                request.method,
                f"{self.config.base_url.rstrip('/')}{request.path}",
                params=request.params or None,
                json=request.json,
                headers=headers,
                timeout=self.config.timeout_seconds,
            )
            if not response.is_success:
                return ToolResult.failure(status_error(response))
            data = response.json()
        except httpx.TimeoutException:
            return ToolResult.failure(timeout_message(self.config.timeout_seconds))
        except Exception as e:
            return ToolResult.failure(f"Failed to call DebtStack API: {e}")

        return ToolResult(data=shape_response(data, self.config.max_result_items), cost=spec.cost)

    async def _run_research(self, spec: ToolSpec, args: Mapping[str, Any]) -> ToolResult:
        if self.research is None:
            return ToolResult.failure("Live SEC research is not configured.")

        ticker = builders.normalize_ticker(str(args.get("ticker") or ""))
        if not ticker:
            return ToolResult.failure("Ticker is required")
        company_name = args.get("company_name") or None
        try:
            async with asyncio.timeout(self.config.research_timeout_seconds):
                report = await self.research.run(ticker, company_name)
        except TimeoutError:
            return ToolResult.failure(timeout_message(self.config.research_timeout_seconds))
        except ResearchError as e:
            return ToolResult.failure(str(e))
        except Exception as e:
            logger.exception(f"Research failed for {ticker}")
            return ToolResult.failure(f"Research failed: {e}")

        return ToolResult(data=shape_response(report.to_payload(), self.config.max_result_items), cost=spec.cost)
