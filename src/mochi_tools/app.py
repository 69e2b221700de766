"""FastAPI application factory and lifespan management.

This module contains the create_app() factory function that creates and configures
the FastAPI application instance, including lifespan management for startup/shutdown
and router registration.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Iterable

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mochi_tools.assistant import Assistant
from mochi_tools.config import MochiToolsSettings
from mochi_tools.ollama import OllamaChatModel, OllamaClient
from mochi_tools.routers import chat, health
from mochi_tools.routers import tools as tools_router
from mochi_tools.tools import ToolDescriptor, load_tools

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan context manager for FastAPI application.

    The Ollama client and the Assistant (with its tool registry) are created
    once at startup and stored in app.state for reuse across all requests.

    Args:
        app: The FastAPI application instance.

    Yields:
        None: Control is yielded while the app is running.
    """
    settings: MochiToolsSettings = app.state.settings
    app.state.ollama_client = OllamaClient(host=settings.ollama_host)
    logger.info(f"Initialized Ollama client with host: {settings.ollama_host}")

    # Tools passed to create_app win over the configured module
    descriptors = app.state.tool_descriptors
    if descriptors is None:
        descriptors = load_tools(settings.tools_module) if settings.tools_module else []

    app.state.assistant = Assistant(
        chat_model=OllamaChatModel(app.state.ollama_client, model=settings.model),
        tools=descriptors,
        system_prompt=settings.system_prompt,
        max_rounds=settings.max_tool_rounds,
        parallel_tool_execution=settings.parallel_tool_execution,
    )
    logger.info(f"Assistant ready with tools: {app.state.assistant.registry.names()}")

    # Check initial connectivity
    connected = await app.state.ollama_client.check_connection()
    if connected:
        logger.info("Successfully connected to Ollama")
    else:
        logger.warning("Could not connect to Ollama - check if server is running")

    yield

    # Shutdown: Clean up resources
    if hasattr(app.state, "ollama_client"):
        await app.state.ollama_client.close()
        logger.info("Ollama client closed")


def create_app(
    settings: MochiToolsSettings | None = None,
    tools: Iterable[ToolDescriptor] | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional MochiToolsSettings instance. If not provided,
                  settings will be loaded from environment variables.
        tools: Optional tool descriptors. If not provided, tools are loaded
               from settings.tools_module at startup.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    if settings is None:
        from mochi_tools.dependencies import get_settings

        settings = get_settings()

    app = FastAPI(
        title="mochi-tools",
        description="Headless FastAPI server exposing Python tools to Ollama models",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Store settings and tools in app.state for lifespan access
    app.state.settings = settings
    app.state.tool_descriptors = list(tools) if tools is not None else None

    # Configure CORS
    # Note: FastAPI's type hints for add_middleware are overly strict
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    app.include_router(health.router)
    app.include_router(tools_router.router)
    app.include_router(chat.router)

    return app
