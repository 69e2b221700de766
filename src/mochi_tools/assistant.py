"""Assistant facade.

An Assistant is built once from a chat model and a list of tool descriptors.
Building it generates every tool specification, so schema and naming errors
surface here rather than during a conversation.
"""

import logging
from typing import Iterable

from mochi_tools.conversation.model import ChatModel
from mochi_tools.conversation.orchestrator import (
    DEFAULT_MAX_ROUNDS,
    AssistantResult,
    ConversationOrchestrator,
)
from mochi_tools.tools.invoker import ToolInvoker
from mochi_tools.tools.registry import ToolRegistry
from mochi_tools.tools.types import ToolDescriptor, ToolSpecification

logger = logging.getLogger(__name__)


class Assistant:
    """Chat entry point exposing registered tools to a model.

    Attributes:
        chat_model: Default model collaborator
        registry: The frozen tool registry
        system_prompt: Optional system prompt for every chat call
    """

    def __init__(
        self,
        chat_model: ChatModel,
        tools: Iterable[ToolDescriptor] = (),
        system_prompt: str | None = None,
        max_rounds: int = DEFAULT_MAX_ROUNDS,
        parallel_tool_execution: bool = True,
    ) -> None:
        """Initialize the assistant and build its tool registry.

        Raises:
            SchemaError: If a tool parameter shape is unsupported
            DuplicateToolNameError: If two tools share a name
        """
        self.chat_model = chat_model
        self.registry = ToolRegistry.from_descriptors(tools)
        self.system_prompt = system_prompt
        self.max_rounds = max_rounds
        self.parallel_tool_execution = parallel_tool_execution
        self._invoker = ToolInvoker()

    @property
    def tool_specifications(self) -> list[ToolSpecification]:
        return self.registry.specifications()

    async def chat(
        self, message: str, chat_model: ChatModel | None = None
    ) -> AssistantResult:
        """Run one chat call.

        Args:
            message: The user's message
            chat_model: Optional model to use instead of the default one

        Returns:
            AssistantResult: Final content and all tool executions
        """
        orchestrator = ConversationOrchestrator(
            chat_model=chat_model or self.chat_model,
            registry=self.registry,
            invoker=self._invoker,
            max_rounds=self.max_rounds,
            parallel_tool_execution=self.parallel_tool_execution,
        )
        result = await orchestrator.run(message, system_prompt=self.system_prompt)
        logger.info(
            f"Chat call finished after {result.rounds} rounds with "
            f"{len(result.tool_executions)} tool executions"
        )
        return result
