"""Streaming tool-use loop for the credit chat assistant.

One request runs a bounded number of model rounds. Each round's text and
tool calls are relayed as ``StreamEvent`` objects as soon as they are known;
tool calls run one at a time and their results are fed back to the model in
the next round.
"""

import logging
import time
from collections.abc import AsyncIterator, Callable, Sequence
from decimal import Decimal
from typing import Any

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage, ToolMessage
from langchain_core.runnables import Runnable

from debtstack_chat.agents.chat.prompt import build_system_prompt
from debtstack_chat.agents.chat.tools.dispatcher import ToolDispatcher
from debtstack_chat.platform.agent.config import ChatConfig
from debtstack_chat.platform.agent.messages import ChatTurn, StreamEvent, ToolCall

logger = logging.getLogger(__name__)

# A response part is either a text fragment or a langchain tool call dict
ResponsePart = str | dict[str, Any]


class ConversationTooLongError(ValueError):
    """Raised when a conversation exceeds the configured turn limit."""

    def __init__(self, length: int, max_messages: int):
        self.length = length
        self.max_messages = max_messages
        super().__init__(f"Too many messages (max {max_messages}). Please start a new chat.")


def response_parts(message: AIMessage) -> list[ResponsePart]:
    """Split a model response into text fragments and tool calls, in model order.

    String content is a single text part. Block content keeps its order, with
    ``tool_use`` blocks resolved against ``message.tool_calls``; tool calls not
    referenced by any block follow the content.
    """
    tool_calls = list(message.tool_calls or [])
    by_id = {tc.get("id"): tc for tc in tool_calls if tc.get("id")}
    parts: list[ResponsePart] = []
    emitted: set[int] = set()

    content = message.content
    if isinstance(content, str):
        if content:
            parts.append(content)
    else:
        for block in content:
            if isinstance(block, str):
                if block:
                    parts.append(block)
            elif block.get("type") == "text" and block.get("text"):
                parts.append(block["text"])
            elif block.get("type") == "tool_use" and block.get("id") in by_id:
                tc = by_id[block["id"]]
                parts.append(tc)
                emitted.add(id(tc))

    parts.extend(tc for tc in tool_calls if id(tc) not in emitted)
    return parts


class ChatOrchestrator:
    """Drives the model/tool rounds for one chat request at a time.

    The orchestrator holds no per-request state; every call to
    ``run_stream`` starts from the conversation snapshot it is given.
    """

    def __init__(
        self,
        llm_with_tools: Runnable,
        dispatcher: ToolDispatcher,
        config: ChatConfig,
        system_prompt: str | None = None,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize the orchestrator.

        Args:
            llm_with_tools: Chat model with the tool catalog bound
            dispatcher: Executes the tool calls the model requests
            config: Round and conversation limits
            system_prompt: Overrides the default assistant prompt
            clock: Wall clock used to build tool call ids
        """
        self.llm = llm_with_tools
        self.dispatcher = dispatcher
        self.config = config
        self.system_prompt = system_prompt or build_system_prompt()
        self._clock = clock

    def check_conversation(self, conversation: Sequence[ChatTurn]) -> None:
        if len(conversation) > self.config.max_messages:
            raise ConversationTooLongError(len(conversation), self.config.max_messages)

    def build_messages(self, conversation: Sequence[ChatTurn]) -> list[BaseMessage]:
        messages: list[BaseMessage] = [SystemMessage(content=self.system_prompt)]
        for turn in conversation:
            if turn.role == "user":
                messages.append(HumanMessage(content=turn.content))
            else:
                messages.append(AIMessage(content=turn.content))
        return messages

    def _tool_call(self, round_index: int, part_index: int, raw: dict[str, Any]) -> ToolCall:
        name = raw.get("name") or "unknown"
        millis = int(self._clock() * 1000)
        return ToolCall(
            id=f"call_{round_index}_{part_index}_{name}_{millis}",
            name=name,
            args=dict(raw.get("args") or {}),
            provider_id=raw.get("id"),
        )

    async def run_stream(self, conversation: Sequence[ChatTurn], api_key: str) -> AsyncIterator[StreamEvent]:
        """Run the tool-use loop and yield events as they happen.

        Args:
            conversation: Visible transcript, oldest turn first
            api_key: Caller's DebtStack API key, used only for tool calls

        Yields:
            text, tool_call and tool_result events, then exactly one terminal
            ``done`` or ``error`` event

        Raises:
            ConversationTooLongError: Before any event, if the conversation is too long
        """
        self.check_conversation(conversation)
        messages = self.build_messages(conversation)
        total_cost = Decimal("0")

        try:
            for round_index in range(self.config.max_tool_rounds):
                response = await self.llm.ainvoke(messages)
                tool_messages: list[ToolMessage] = []

                for part_index, part in enumerate(response_parts(response)):
                    if isinstance(part, str):
                        yield StreamEvent.text(part)
                        continue

                    call = self._tool_call(round_index, part_index, part)
                    yield StreamEvent.tool_call(call)
                    result = await self.dispatcher.dispatch(call.name, call.args, api_key)
                    total_cost += result.cost
                    yield StreamEvent.tool_result(call, result)

                    tool_messages.append(
                        ToolMessage(
                            content=result.to_model_content(),
                            tool_call_id=call.provider_id or call.id,
                            name=call.name,
                            status="success" if result.ok else "error",
                        )
                    )

                if not tool_messages:
                    break

                messages.append(response)
                messages.extend(tool_messages)
            else:
                logger.info(f"Tool round budget of {self.config.max_tool_rounds} exhausted")
        except Exception as e:
            logger.exception("Chat stream failed")
            yield StreamEvent.error(str(e) or "Unknown error")
            return

        yield StreamEvent.done(total_cost)
