"""Service infrastructure.

This module provides the shared plumbing behind the chat assistant:
- LLM client, configuration and message types
- FastAPI server configuration
- Observability (logging, metrics, error reporting)
"""

from debtstack_chat.platform.agent.config import (
    ChatConfig,
    DispatcherConfig,
    LlmConfig,
    ResearchConfig,
)
from debtstack_chat.platform.agent.messages import (
    ChatTurn,
    StreamEvent,
    ToolCall,
    ToolResult,
)
from debtstack_chat.platform.settings import Settings

__all__ = [
    # Configuration
    "ChatConfig",
    "DispatcherConfig",
    "LlmConfig",
    "ResearchConfig",
    "Settings",
    # Message types
    "ChatTurn",
    "StreamEvent",
    "ToolCall",
    "ToolResult",
]
