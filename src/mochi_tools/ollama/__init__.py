"""Ollama client wrapper and chat model adapter.

This package provides the async client for the Ollama API and the
ChatModel implementation the orchestrator uses to talk to it.
"""

from mochi_tools.ollama.client import OllamaChatModel, OllamaClient

__all__ = ["OllamaClient", "OllamaChatModel"]
