"""Conversation orchestration between the chat model and the tools.

One orchestrator run drives a single chat call:

    AWAITING_MODEL -> EXECUTING_TOOLS -> AWAITING_MODEL | TERMINAL

Each round sends the conversation and the tool specifications to the model.
A response without tool calls ends the call with the model's text. Otherwise
every requested tool is executed (concurrently if enabled, results kept in
request order). If every tool executed so far in the call is declared
``return_raw`` the call ends with the raw results and no summarizing request;
otherwise the results are appended to the conversation and the model is asked
again.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum

from mochi_tools.conversation.messages import (
    AssistantMessage,
    Message,
    SystemMessage,
    ToolMessage,
    UserMessage,
)
from mochi_tools.conversation.model import ChatModel, ChatRequest
from mochi_tools.exceptions import MaxRoundsExceededError
from mochi_tools.tools.invoker import ToolInvoker
from mochi_tools.tools.registry import ToolRegistry
from mochi_tools.tools.types import ToolEntry, ToolExecutionRequest, ToolExecutionResult

logger = logging.getLogger(__name__)

DEFAULT_MAX_ROUNDS = 10


class ConversationState(str, Enum):
    """States of one chat call."""

    AWAITING_MODEL = "awaiting_model"
    EXECUTING_TOOLS = "executing_tools"
    TERMINAL = "terminal"


@dataclass(frozen=True)
class AssistantResult:
    """Outcome of a chat call.

    Attributes:
        content: Final model text ("" when the model answered with no text),
                 None only when a raw-return round ended the call
        tool_executions: Every tool execution of the call, in request order
        rounds: Number of model requests issued
    """

    content: str | None
    tool_executions: tuple[ToolExecutionResult, ...] = ()
    rounds: int = 0


class ConversationOrchestrator:
    """Runs the model/tool round trip for chat calls.

    The orchestrator keeps no per-call state between runs, so one instance
    can serve concurrent chat calls.

    Attributes:
        chat_model: The model collaborator
        registry: Registered tools, read-only
        invoker: Executes tool requests
        max_rounds: Maximum number of model requests per chat call
        parallel_tool_execution: Run the tools of one round concurrently
    """

    def __init__(
        self,
        chat_model: ChatModel,
        registry: ToolRegistry,
        invoker: ToolInvoker | None = None,
        max_rounds: int = DEFAULT_MAX_ROUNDS,
        parallel_tool_execution: bool = True,
    ) -> None:
        if max_rounds < 1:
            raise ValueError("max_rounds must be at least 1")
        self.chat_model = chat_model
        self.registry = registry
        self.invoker = invoker or ToolInvoker()
        self.max_rounds = max_rounds
        self.parallel_tool_execution = parallel_tool_execution

    async def run(
        self, user_message: str, system_prompt: str | None = None
    ) -> AssistantResult:
        """Drive one chat call to its terminal state.

        Args:
            user_message: The user's message
            system_prompt: Optional system prompt placed before it

        Returns:
            AssistantResult: Final content and all tool executions

        Raises:
            MaxRoundsExceededError: If the model keeps requesting tools
            ModelTransportError: If the model collaborator fails
        """
        messages: list[Message] = []
        if system_prompt:
            messages.append(SystemMessage(content=system_prompt))
        messages.append(UserMessage(content=user_message))

        specifications = tuple(self.registry.specifications())
        executions: list[ToolExecutionResult] = []
        rounds = 0
        all_raw = True
        state = ConversationState.AWAITING_MODEL

        while state is ConversationState.AWAITING_MODEL:
            if rounds >= self.max_rounds:
                logger.error(f"Chat call exceeded {self.max_rounds} model rounds")
                raise MaxRoundsExceededError(self.max_rounds)

            response = await self.chat_model.chat(
                ChatRequest(
                    messages=tuple(messages),
                    tool_specifications=specifications,
                )
            )
            rounds += 1

            if not response.has_tool_execution_requests:
                logger.debug(f"Round {rounds}: model answered with text")
                return AssistantResult(
                    content=response.text or "",
                    tool_executions=tuple(executions),
                    rounds=rounds,
                )

            requests = response.tool_execution_requests
            state = ConversationState.EXECUTING_TOOLS
            logger.debug(
                f"Round {rounds}: executing {len(requests)} tool requests "
                f"({', '.join(r.name for r in requests)})"
            )
            messages.append(
                AssistantMessage(content=response.text or "", tool_calls=requests)
            )

            outcomes = await self._execute_round(requests)
            results = [result for result, _ in outcomes]
            executions.extend(results)

            all_raw = all_raw and all(
                entry is not None and entry.return_raw for _, entry in outcomes
            )
            if all_raw:
                logger.debug(f"Round {rounds}: all tools return raw, ending call")
                state = ConversationState.TERMINAL
                break

            messages.extend(
                ToolMessage(
                    tool_call_id=result.request.id,
                    tool_name=result.request.name,
                    content=result.result,
                )
                for result in results
            )
            state = ConversationState.AWAITING_MODEL

        return AssistantResult(
            content=None,
            tool_executions=tuple(executions),
            rounds=rounds,
        )

    async def _execute_round(
        self, requests: tuple[ToolExecutionRequest, ...]
    ) -> list[tuple[ToolExecutionResult, ToolEntry | None]]:
        """Execute all requests of a round; outcomes follow request order.

        In a concurrent round every execution runs to completion before a
        propagated tool error is re-raised (the first one in request order).
        """
        if self.parallel_tool_execution and len(requests) > 1:
            outcomes = await asyncio.gather(
                *(self.invoker.execute(self.registry, request) for request in requests),
                return_exceptions=True,
            )
            for outcome in outcomes:
                if isinstance(outcome, BaseException):
                    raise outcome
            return list(outcomes)

        outcomes = []
        for request in requests:
            outcomes.append(await self.invoker.execute(self.registry, request))
        return outcomes
