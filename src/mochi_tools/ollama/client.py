"""Async Ollama client wrapper and chat model adapter.

This module provides an async wrapper around the ollama.AsyncClient and
``OllamaChatModel``, which maps chat requests with tool specifications to
Ollama's chat API and its tool calls back to ToolExecutionRequests.
"""

import json
import logging
import uuid
from typing import Any

import ollama

from mochi_tools.conversation.messages import AssistantMessage, Message, ToolMessage
from mochi_tools.conversation.model import ChatRequest, ChatResponse
from mochi_tools.exceptions import ModelTransportError
from mochi_tools.tools.types import ToolExecutionRequest, ToolSpecification

logger = logging.getLogger(__name__)


class OllamaClient:
    """Async client for interacting with Ollama API.

    The client is created once at startup and reused across requests.

    Attributes:
        host: The Ollama server URL (e.g., "http://localhost:11434")
        _client: The underlying ollama.AsyncClient instance
    """

    def __init__(self, host: str) -> None:
        """Initialize the Ollama client.

        Args:
            host: The Ollama server URL
        """
        self.host = host
        self._client = ollama.AsyncClient(host=host)
        logger.info(f"OllamaClient initialized with host: {host}")

    async def check_connection(self) -> bool:
        """Check if the Ollama server is reachable.

        Returns:
            bool: True if connection is successful, False otherwise
        """
        try:
            # Try to list models as a connectivity check
            await self._client.list()
            logger.debug("Ollama connection check: successful")
            return True
        except Exception as e:
            logger.warning(f"Ollama connection check failed: {e}")
            return False

    async def chat(
        self,
        model: str,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]] | None = None,
        options: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a non-streaming chat request to Ollama.

        Args:
            model: The model name to use for the chat
            messages: Message dicts in Ollama format
            tools: Tool definitions in function-calling format
            options: Optional model parameters (temperature, etc.)

        Returns:
            dict: The response, with the assistant message under "message"

        Raises:
            Exception: If the Ollama API request fails
        """
        logger.debug(
            f"Sending chat request to {model}: {len(messages)} messages, "
            f"{len(tools or [])} tools"
        )
        try:
            response = await self._client.chat(
                model=model,
                messages=messages,
                tools=tools or None,
                stream=False,
                options=options,
            )
        except Exception as e:
            logger.error(f"Chat request failed: {e}")
            raise

        # Convert the response to a dict if it's not already
        if hasattr(response, "model_dump"):
            return response.model_dump()
        if isinstance(response, dict):
            return response
        return vars(response)

    async def close(self) -> None:
        """Close the client and clean up resources.

        ollama.AsyncClient doesn't require explicit cleanup in current versions.
        """
        logger.debug("OllamaClient closed")


def _convert_message(message: Message) -> dict[str, Any]:
    ollama_message: dict[str, Any] = {
        "role": message.role,
        "content": message.content,
    }

    if isinstance(message, AssistantMessage) and message.tool_calls:
        ollama_message["tool_calls"] = [
            {
                "function": {
                    "name": call.name,
                    "arguments": json.loads(call.arguments or "{}"),
                }
            }
            for call in message.tool_calls
        ]

    if isinstance(message, ToolMessage):
        ollama_message["tool_name"] = message.tool_name

    return ollama_message


def _convert_tool(specification: ToolSpecification) -> dict[str, Any]:
    tool = specification.to_dict()
    # Ollama expects a parameters object even for tools without parameters
    tool["function"].setdefault(
        "parameters", {"type": "object", "properties": {}, "required": []}
    )
    return tool


def _convert_tool_calls(tool_calls: list[dict[str, Any]] | None) -> tuple:
    requests = []
    for call in tool_calls or []:
        function = call.get("function", {})
        arguments = function.get("arguments") or {}
        if not isinstance(arguments, str):
            arguments = json.dumps(arguments)
        requests.append(
            ToolExecutionRequest(
                # Ollama does not always assign call ids
                id=call.get("id") or uuid.uuid4().hex[:10],
                name=function.get("name", ""),
                arguments=arguments,
            )
        )
    return tuple(requests)


class OllamaChatModel:
    """ChatModel implementation backed by an Ollama server.

    Attributes:
        client: The shared Ollama client
        model: The model name, e.g. "qwen3:14b"
        options: Optional model parameters passed with every request
    """

    def __init__(
        self,
        client: OllamaClient,
        model: str,
        options: dict[str, Any] | None = None,
    ) -> None:
        self.client = client
        self.model = model
        self.options = options

    async def chat(self, request: ChatRequest) -> ChatResponse:
        """Send the conversation and tools to Ollama.

        Raises:
            ModelTransportError: If the request fails or returns no message
        """
        messages = [_convert_message(message) for message in request.messages]
        tools = [_convert_tool(spec) for spec in request.tool_specifications]

        try:
            response = await self.client.chat(
                model=self.model,
                messages=messages,
                tools=tools,
                options=self.options,
            )
        except Exception as e:
            raise ModelTransportError(
                f"Failed to get response from Ollama: {e}",
                details={"model": self.model},
            ) from e

        message = response.get("message")
        if not message:
            raise ModelTransportError(
                "Ollama response contained no message", details={"model": self.model}
            )

        return ChatResponse(
            text=message.get("content") or None,
            tool_execution_requests=_convert_tool_calls(message.get("tool_calls")),
        )
