"""Unit tests for message and stream event types."""

import json
from decimal import Decimal

import pytest

from debtstack_chat.platform.agent.messages import (
    ChatTurn,
    EventType,
    StreamEvent,
    ToolCall,
    ToolResult,
)


def parse_frame(frame: str) -> tuple[str, dict]:
    event_line, data_line, *_ = frame.split("\n")
    return event_line.removeprefix("event: "), json.loads(data_line.removeprefix("data: "))


class TestChatTurn:
    """Tests for ChatTurn dataclass."""

    def test_is_frozen(self):
        turn = ChatTurn(role="user", content="Hello")
        with pytest.raises(AttributeError):
            turn.content = "Changed"  # type: ignore[misc]


class TestToolResult:
    """Tests for ToolResult."""

    def test_failure_has_zero_cost(self):
        result = ToolResult.failure("Rate limit exceeded")
        assert result.cost == Decimal("0")
        assert result.data is None
        assert not result.ok

    def test_success_is_ok(self):
        assert ToolResult(data={"data": []}, cost=Decimal("0.05")).ok

    def test_model_content_for_error(self):
        assert ToolResult.failure("boom").to_model_content() == "Error: boom"

    def test_model_content_is_json(self):
        result = ToolResult(data={"data": [{"ticker": "AAPL"}]}, cost=Decimal("0.05"))
        assert json.loads(result.to_model_content()) == {"data": [{"ticker": "AAPL"}]}


class TestStreamEvent:
    """Tests for StreamEvent constructors and SSE encoding."""

    def test_text_frame(self):
        frame = StreamEvent.text("Hello").to_sse()

        assert frame.endswith("\n\n")
        assert parse_frame(frame) == ("text", {"text": "Hello"})

    def test_tool_call_frame(self):
        call = ToolCall(id="call_0_0_search_bonds_1", name="search_bonds", args={"ticker": "RIG"})

        event, data = parse_frame(StreamEvent.tool_call(call).to_sse())

        assert event == "tool_call"
        assert data == {"id": call.id, "name": "search_bonds", "args": {"ticker": "RIG"}}

    def test_tool_result_omits_error_on_success(self):
        call = ToolCall(id="c1", name="search_bonds", args={})
        event = StreamEvent.tool_result(call, ToolResult(data={}, cost=Decimal("0.05")))

        assert event.data == {"id": "c1", "name": "search_bonds", "cost": 0.05}

    def test_tool_result_carries_error(self):
        call = ToolCall(id="c1", name="search_bonds", args={})
        event = StreamEvent.tool_result(call, ToolResult.failure("Invalid API key."))

        assert event.data["error"] == "Invalid API key."
        assert event.data["cost"] == 0.0

    def test_done_reports_total_cost(self):
        event = StreamEvent.done(Decimal("0.20"))
        assert event.data == {"totalCost": 0.2}
        assert event.is_terminal

    def test_error_is_terminal(self):
        event = StreamEvent.error("boom")
        assert event.event_type == EventType.ERROR
        assert event.is_terminal

    def test_text_is_not_terminal(self):
        assert not StreamEvent.text("hi").is_terminal
