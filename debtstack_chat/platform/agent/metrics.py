"""Prometheus metrics for the chat loop.

Records tool call outcomes and durations, LLM token usage per model and the
credits charged to callers through tool calls.
"""

from decimal import Decimal
from typing import NamedTuple

import prometheus_client

from debtstack_chat.platform.observability.metrics import BUCKETS


class AgentMetricsLabels(NamedTuple):
    agent: str


class ToolMetricsLabels(NamedTuple):
    agent: str
    tool_name: str


tool_calls_total = prometheus_client.Counter(
    name="agent_tool_calls_total",
    documentation="Tool calls executed by the chat loop",
    labelnames=[*ToolMetricsLabels._fields, "status"],
)

tool_call_duration = prometheus_client.Histogram(
    name="agent_tool_call_duration_seconds",
    documentation="Tool call duration (seconds)",
    labelnames=ToolMetricsLabels._fields,
    buckets=BUCKETS,
)

tool_cost_total = prometheus_client.Counter(
    name="agent_tool_cost_dollars_total",
    documentation="Credits charged for successful tool calls (dollars)",
    labelnames=ToolMetricsLabels._fields,
)

agent_tokens_total = prometheus_client.Counter(
    name="agent_llm_tokens_total",
    documentation="LLM tokens consumed",
    labelnames=[*AgentMetricsLabels._fields, "model", "direction"],
)


def record_tool_call(
    labels: ToolMetricsLabels,
    duration: float,
    error: bool = False,
    cost: Decimal | None = None,
) -> None:
    """Record one tool execution.

    Args:
        labels: Agent and tool labels
        duration: Wall time of the call in seconds
        error: Whether the call failed
        cost: Credits charged for the call, if any
    """
    status = "error" if error else "success"
    tool_calls_total.labels(*labels, status).inc()
    tool_call_duration.labels(*labels).observe(duration)
    if cost:
        tool_cost_total.labels(*labels).inc(float(cost))


def record_agent_tokens(agent: str, model: str, input_tokens: int, output_tokens: int) -> None:
    """Record LLM token usage for one model invocation."""
    if input_tokens:
        agent_tokens_total.labels(agent, model, "input").inc(input_tokens)
    if output_tokens:
        agent_tokens_total.labels(agent, model, "output").inc(output_tokens)
