"""Agent infrastructure module.

This module provides the building blocks shared by agents:
- Configuration dataclasses
- Message and stream event types
- LiteLLM client wrapper
- Agent-specific metrics
"""

from debtstack_chat.platform.agent.config import (
    ChatConfig,
    DispatcherConfig,
    LlmConfig,
    ResearchConfig,
)
from debtstack_chat.platform.agent.llm_client import LlmClient
from debtstack_chat.platform.agent.messages import (
    ChatTurn,
    EventType,
    StreamEvent,
    ToolCall,
    ToolResult,
)

__all__ = [
    "ChatConfig",
    "DispatcherConfig",
    "LlmConfig",
    "ResearchConfig",
    "LlmClient",
    "ChatTurn",
    "EventType",
    "StreamEvent",
    "ToolCall",
    "ToolResult",
]
