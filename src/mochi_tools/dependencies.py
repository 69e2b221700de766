"""Dependency injection providers for FastAPI endpoints.

This module provides FastAPI dependency functions that are used across
multiple routers to inject common dependencies like settings and services.
"""

from functools import lru_cache

from fastapi import HTTPException, Request

from mochi_tools.assistant import Assistant
from mochi_tools.config import MochiToolsSettings
from mochi_tools.ollama import OllamaClient


@lru_cache
def get_settings() -> MochiToolsSettings:
    """Get the application settings instance.

    This function is cached so that the same settings instance is reused
    across all requests. Settings are loaded from environment variables
    with the MOCHI_ prefix.

    Returns:
        MochiToolsSettings: The application configuration settings.
    """
    return MochiToolsSettings()


def get_ollama_client(request: Request) -> OllamaClient:
    """Get the Ollama client from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        OllamaClient: The Ollama client instance.

    Raises:
        HTTPException: If the Ollama client is not initialized (503 Service Unavailable).
    """
    if not hasattr(request.app.state, "ollama_client"):
        raise HTTPException(
            status_code=503,
            detail="Ollama client not initialized",
        )
    return request.app.state.ollama_client


def get_assistant(request: Request) -> Assistant:
    """Get the Assistant created during application startup.

    Args:
        request: The FastAPI request object.

    Returns:
        Assistant: The shared assistant with its frozen tool registry.

    Raises:
        HTTPException: If the assistant is not initialized (503 Service Unavailable).
    """
    if not hasattr(request.app.state, "assistant"):
        raise HTTPException(
            status_code=503,
            detail="Assistant not initialized",
        )
    return request.app.state.assistant
