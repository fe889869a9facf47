"""Unit tests for the LiteLLM client wrapper."""

from unittest.mock import AsyncMock, Mock

from langchain_core.messages import AIMessage, HumanMessage

from debtstack_chat.platform.agent.config import LlmConfig
from debtstack_chat.platform.agent.llm_client import LlmClient


def make_client(llm: Mock) -> LlmClient:
    return LlmClient("chat", LlmConfig(model="anthropic/claude-sonnet-4-5-20250929"), llm=llm)


class TestExtractTokens:
    """Tests for LlmClient.extract_tokens."""

    def test_reads_usage_metadata(self):
        message = AIMessage(
            content="hi",
            usage_metadata={"input_tokens": 10, "output_tokens": 4, "total_tokens": 14},
        )
        assert LlmClient.extract_tokens(message) == (10, 4)

    def test_missing_usage_is_zero(self):
        assert LlmClient.extract_tokens(AIMessage(content="hi")) == (0, 0)


class TestLlmClient:
    """Tests for invocation and tool binding."""

    def test_model_name(self):
        assert make_client(Mock()).model_name == "anthropic/claude-sonnet-4-5-20250929"

    async def test_ainvoke_delegates(self):
        llm = Mock()
        llm.ainvoke = AsyncMock(return_value=AIMessage(content="answer"))
        client = make_client(llm)

        response = await client.ainvoke([HumanMessage(content="q")])

        assert response.content == "answer"
        llm.ainvoke.assert_awaited_once()

    def test_bind_tools_wraps_bound_model(self):
        bound = Mock()
        llm = Mock()
        llm.bind_tools = Mock(return_value=bound)
        tools = [{"type": "function", "function": {"name": "search_bonds", "parameters": {}}}]

        client = make_client(llm).bind_tools(tools)

        llm.bind_tools.assert_called_once_with(tools)
        assert isinstance(client, LlmClient)
        assert client._llm is bound
