"""LLM client implementation using LiteLLM."""

from collections.abc import Sequence
from typing import Any, Self

from langchain_core.messages import AIMessage
from langchain_core.runnables import Runnable, RunnableConfig
from langchain_litellm import ChatLiteLLM

from debtstack_chat.platform.agent.config import LlmConfig
from debtstack_chat.platform.agent.metrics import record_agent_tokens


class LlmClient(Runnable):
    """LLM client that wraps ChatLiteLLM as a Runnable.

    Provides a consistent interface for LLM interactions with:
    - Full LCEL compatibility (pipe operator, chains)
    - Automatic token metrics recording
    - Tool binding support
    """

    def __init__(self, agent_slug: str, config: LlmConfig, llm=None):
        """Initialize the LLM client.

        Args:
            agent_slug: Label used for token metrics
            config: Model, credentials and sampling settings
            llm: Optional pre-configured LLM instance (for bind_tools)
        """
        self._agent_slug = agent_slug
        self._config = config
        self._llm = llm or ChatLiteLLM(
            model=config.model,
            api_key=config.api_key,
            api_base=config.base_url,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
        )

    @property
    def model_name(self) -> str:
        """The model name/identifier."""
        return self._config.model

    def bind_tools(self, tools: Sequence[dict[str, Any]]) -> Self:
        """Return a new client with tools bound.

        Args:
            tools: Tool definitions in OpenAI function format

        Returns:
            New LlmClient instance with tools bound
        """
        return type(self)(
            agent_slug=self._agent_slug,
            config=self._config,
            llm=self._llm.bind_tools(list(tools)),
        )

    @staticmethod
    def extract_tokens(message: AIMessage) -> tuple[int, int]:
        """Extract token counts from an AIMessage's usage metadata.

        Returns:
            Tuple of (input_tokens, output_tokens), defaults to (0, 0) if unavailable
        """
        usage = getattr(message, "usage_metadata", None)
        if not usage:
            return 0, 0
        return usage.get("input_tokens", 0), usage.get("output_tokens", 0)

    def _record(self, response) -> None:
        input_tokens, output_tokens = self.extract_tokens(response)
        record_agent_tokens(self._agent_slug, self.model_name, input_tokens, output_tokens)

    def invoke(self, input, config: RunnableConfig | None = None, **kwargs):
        """Invoke the LLM synchronously."""
        response = self._llm.invoke(input, config=config, **kwargs)
        self._record(response)
        return response

    async def ainvoke(self, input, config: RunnableConfig | None = None, **kwargs):
        """Invoke the LLM asynchronously.

        Args:
            input: Messages to send to the LLM
            config: Optional runnable config
            **kwargs: Additional arguments passed to underlying LLM

        Returns:
            The LLM's response message
        """
        response = await self._llm.ainvoke(input, config=config, **kwargs)
        self._record(response)
        return response
