"""Configuration dataclasses for agent components.

This module provides immutable configuration objects for LLM clients,
the chat tool-use loop, tool dispatch and the SEC research pipeline.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class LlmConfig:
    """Configuration for language model clients.

    Attributes:
        model: LiteLLM model identifier (e.g., "anthropic/claude-sonnet-4-5-20250929")
        api_key: API key for the LLM provider or proxy
        base_url: Base URL for the API (e.g., LiteLLM proxy URL)
        temperature: Sampling temperature (0.0 to 1.0)
        max_tokens: Optional completion token budget
    """

    model: str
    api_key: str | None = None
    base_url: str | None = None
    temperature: float = 0.7
    max_tokens: int | None = None


@dataclass(frozen=True)
class ChatConfig:
    """Configuration for the streaming chat loop.

    Attributes:
        max_tool_rounds: Maximum model round-trips in one request
        max_messages: Maximum conversation turns accepted in one request
    """

    max_tool_rounds: int = 5
    max_messages: int = 50


@dataclass(frozen=True)
class DispatcherConfig:
    """Configuration for tool dispatch against the DebtStack API.

    Attributes:
        base_url: DebtStack API base URL
        timeout_seconds: Per-call timeout for backend tools
        research_timeout_seconds: Timeout for the live research tool
        max_result_items: Cap applied to list payloads by the response shaper
    """

    base_url: str = "https://api.debtstack.ai"
    timeout_seconds: float = 15.0
    research_timeout_seconds: float = 45.0
    max_result_items: int = 20


@dataclass(frozen=True)
class ResearchConfig:
    """Configuration for the SEC EDGAR research pipeline.

    Attributes:
        user_agent: User-Agent header sent with every SEC request
        ticker_cache_ttl_seconds: Lifetime of the cached ticker to CIK table
        max_section_chars: Maximum characters of the debt section sent for extraction
        min_content_chars: Filings shorter than this after cleaning are rejected
    """

    user_agent: str = "DebtStack.ai contact@debtstack.ai"
    ticker_cache_ttl_seconds: float = 24 * 60 * 60
    max_section_chars: int = 100_000
    min_content_chars: int = 1000
