"""Boundary types for the chat model collaborator.

The orchestrator only depends on the ``ChatModel`` protocol: given the
conversation so far and the available tool specifications, return either
text or a list of tool execution requests.
"""

from dataclasses import dataclass
from typing import Protocol

from mochi_tools.conversation.messages import Message
from mochi_tools.tools.types import ToolExecutionRequest, ToolSpecification


@dataclass(frozen=True)
class ChatRequest:
    """A request to the chat model.

    Attributes:
        messages: The conversation so far, in order
        tool_specifications: Tools the model may call, in registration order
    """

    messages: tuple[Message, ...]
    tool_specifications: tuple[ToolSpecification, ...] = ()


@dataclass(frozen=True)
class ChatResponse:
    """A response from the chat model.

    Attributes:
        text: Text content, if any
        tool_execution_requests: Requested tool calls, in the model's order
    """

    text: str | None = None
    tool_execution_requests: tuple[ToolExecutionRequest, ...] = ()

    @property
    def has_tool_execution_requests(self) -> bool:
        return len(self.tool_execution_requests) > 0


class ChatModel(Protocol):
    """A language model that can be asked to continue a conversation."""

    async def chat(self, request: ChatRequest) -> ChatResponse:
        """Send the request and return the model's response.

        Raises:
            ModelTransportError: If the model cannot be reached
        """
        ...
