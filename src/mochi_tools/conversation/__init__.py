"""Conversation orchestration layer.

This package contains the message types of a chat call, the chat model
protocol the orchestrator talks to, and the orchestrator itself.
"""

from mochi_tools.conversation.messages import (
    AssistantMessage,
    Message,
    SystemMessage,
    ToolMessage,
    UserMessage,
)
from mochi_tools.conversation.model import ChatModel, ChatRequest, ChatResponse
from mochi_tools.conversation.orchestrator import (
    AssistantResult,
    ConversationOrchestrator,
    ConversationState,
)

__all__ = [
    # Orchestration
    "ConversationOrchestrator",
    "ConversationState",
    "AssistantResult",
    # Model boundary
    "ChatModel",
    "ChatRequest",
    "ChatResponse",
    # Message types
    "Message",
    "UserMessage",
    "SystemMessage",
    "AssistantMessage",
    "ToolMessage",
]
