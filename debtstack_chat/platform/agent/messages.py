"""Framework-agnostic message and event types.

These types are used across the chat loop, the tool dispatcher and the HTTP
layer, and define the common vocabulary for a chat request.
"""

import json
from dataclasses import dataclass, field
from decimal import Decimal
from enum import StrEnum
from typing import Any, Literal


class EventType(StrEnum):
    """Kinds of events relayed to the browser."""

    TEXT = "text"
    TOOL_CALL = "tool_call"
    TOOL_RESULT = "tool_result"
    DONE = "done"
    ERROR = "error"


TERMINAL_EVENTS = frozenset({EventType.DONE, EventType.ERROR})


@dataclass(frozen=True)
class ChatTurn:
    """One visible turn of the conversation.

    Attributes:
        role: "user" or "assistant"
        content: Message text content
    """

    role: Literal["user", "assistant"]
    content: str


@dataclass(frozen=True)
class ToolCall:
    """A tool invocation requested by the model.

    Attributes:
        id: Correlation id, unique within one streaming session
        name: Tool name from the catalog
        args: Tool arguments
        provider_id: Id assigned by the model provider, echoed back in the tool message
    """

    id: str
    name: str
    args: dict[str, Any]
    provider_id: str | None = None


@dataclass(frozen=True)
class ToolResult:
    """Outcome of executing a tool call.

    Attributes:
        data: Shaped payload (None on failure)
        cost: Charge attributed to the caller; always zero when error is set
        error: Human-readable failure description
    """

    data: Any = None
    cost: Decimal = Decimal("0")
    error: str | None = None

    @classmethod
    def failure(cls, error: str) -> "ToolResult":
        return cls(data=None, cost=Decimal("0"), error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_model_content(self) -> str:
        """Render the result as the content of the tool message fed back to the model."""
        if self.error:
            return f"Error: {self.error}"
        return json.dumps(self.data, default=str)


@dataclass(frozen=True)
class StreamEvent:
    """Streaming execution event.

    Attributes:
        event_type: Type of event ("text", "tool_call", "tool_result", "done", "error")
        data: Event-specific data payload
    """

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def is_terminal(self) -> bool:
        return self.event_type in TERMINAL_EVENTS

    def to_sse(self) -> str:
        """Encode as a server-sent event frame."""
        return f"event: {self.event_type}\ndata: {json.dumps(self.data, default=str)}\n\n"

    @classmethod
    def text(cls, text: str) -> "StreamEvent":
        return cls(EventType.TEXT, {"text": text})

    @classmethod
    def tool_call(cls, call: ToolCall) -> "StreamEvent":
        return cls(EventType.TOOL_CALL, {"id": call.id, "name": call.name, "args": call.args})

    @classmethod
    def tool_result(cls, call: ToolCall, result: ToolResult) -> "StreamEvent":
        data: dict[str, Any] = {"id": call.id, "name": call.name, "cost": float(result.cost)}
        if result.error:
            data["error"] = result.error
        return cls(EventType.TOOL_RESULT, data)

    @classmethod
    def done(cls, total_cost: Decimal) -> "StreamEvent":
        return cls(EventType.DONE, {"totalCost": float(total_cost)})

    @classmethod
    def error(cls, message: str) -> "StreamEvent":
        return cls(EventType.ERROR, {"message": message})
