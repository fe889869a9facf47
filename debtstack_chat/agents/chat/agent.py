"""Credit chat assistant.

This module wires the chat model, the tool dispatcher and the live SEC
research pipeline into a ready-to-serve ``ChatOrchestrator``.
"""

from collections.abc import Callable
from dataclasses import dataclass

import httpx

from debtstack_chat.agents.chat.orchestrator import ChatOrchestrator
from debtstack_chat.agents.chat.prompt import build_system_prompt
from debtstack_chat.agents.chat.research import DebtExtractor, ResearchPipeline, TickerCache
from debtstack_chat.agents.chat.tools.catalog import TOOL_DEFINITIONS
from debtstack_chat.agents.chat.tools.dispatcher import ToolDispatcher
from debtstack_chat.platform.agent.config import ChatConfig, DispatcherConfig, LlmConfig, ResearchConfig
from debtstack_chat.platform.agent.llm_client import LlmClient
from debtstack_chat.platform.settings import Settings

LlmFactory = Callable[[str, LlmConfig], LlmClient]


@dataclass(frozen=True)
class ChatComponents:
    """Long-lived objects shared by every chat request.

    Attributes:
        orchestrator: Tool-use loop, None when no chat model is configured
        research: SEC research pipeline, None when no research model is configured
    """

    orchestrator: ChatOrchestrator | None
    research: ResearchPipeline | None


class ChatAgentBuilder:
    """Builder for the credit chat assistant and its research pipeline."""

    SLUG = "chat"
    RESEARCH_SLUG = "sec-research"

    def __init__(
        self,
        settings: Settings,
        http_client: httpx.AsyncClient,
        llm_factory: LlmFactory = LlmClient,
    ) -> None:
        """Initialize the builder.

        Args:
            settings: Application settings
            http_client: Shared client used for backend and SEC requests
            llm_factory: Creates LLM clients from a slug and config
        """
        self.settings = settings
        self.http_client = http_client
        self._llm_factory = llm_factory

    def _llm_config(self, model: str, temperature: float, max_tokens: int | None = None) -> LlmConfig:
        return LlmConfig(
            model=model,
            api_key=self.settings.litellm.proxy_api_key,
            base_url=self.settings.litellm.proxy_api_base,
            temperature=temperature,
            max_tokens=max_tokens,
        )

    def build_research(self) -> ResearchPipeline | None:
        sec = self.settings.sec
        if not sec.research_model:
            return None

        config = ResearchConfig(
            user_agent=sec.user_agent,
            ticker_cache_ttl_seconds=sec.ticker_cache_ttl_seconds,
            max_section_chars=sec.max_section_chars,
        )
        llm = self._llm_factory(self.RESEARCH_SLUG, self._llm_config(sec.research_model, temperature=0.0))
        return ResearchPipeline(
            http_client=self.http_client,
            ticker_cache=TickerCache(self.http_client, config.user_agent, ttl_seconds=config.ticker_cache_ttl_seconds),
            extractor=DebtExtractor(llm),
            config=config,
        )

    def build(self) -> ChatComponents:
        """Build the orchestrator and research pipeline from settings."""
        research = self.build_research()

        chat = self.settings.chat
        if not chat.model:
            return ChatComponents(orchestrator=None, research=research)

        backend = self.settings.backend
        dispatcher = ToolDispatcher(
            http_client=self.http_client,
            config=DispatcherConfig(
                base_url=backend.url,
                timeout_seconds=backend.timeout_seconds,
                research_timeout_seconds=backend.research_timeout_seconds,
                max_result_items=chat.max_result_items,
            ),
            research=research,
            agent_slug=self.SLUG,
        )
        llm = self._llm_factory(self.SLUG, self._llm_config(chat.model, chat.temperature, chat.max_tokens))
        orchestrator = ChatOrchestrator(
            llm_with_tools=llm.bind_tools(TOOL_DEFINITIONS),
            dispatcher=dispatcher,
            config=ChatConfig(max_tool_rounds=chat.max_tool_rounds, max_messages=chat.max_messages),
            system_prompt=build_system_prompt(),
        )
        return ChatComponents(orchestrator=orchestrator, research=research)
