"""Message types exchanged during one chat call.

Messages are immutable; the orchestrator owns the ordered list for the
lifetime of one call and discards it when the call completes.
"""

from dataclasses import dataclass, field
from typing import Union

from mochi_tools.tools.types import ToolExecutionRequest


@dataclass(frozen=True)
class UserMessage:
    """A message from the user."""

    content: str = ""
    role: str = field(default="user", init=False)


@dataclass(frozen=True)
class SystemMessage:
    """A system prompt message."""

    content: str = ""
    role: str = field(default="system", init=False)


@dataclass(frozen=True)
class AssistantMessage:
    """A response from the model, possibly requesting tool executions."""

    content: str = ""
    tool_calls: tuple[ToolExecutionRequest, ...] = ()
    role: str = field(default="assistant", init=False)


@dataclass(frozen=True)
class ToolMessage:
    """A tool execution result sent back to the model."""

    tool_call_id: str = ""
    tool_name: str = ""
    content: str = ""
    role: str = field(default="tool", init=False)


# Union type for all message types
Message = Union[UserMessage, SystemMessage, AssistantMessage, ToolMessage]
