"""Pytest configuration and shared fixtures for mochi-tools tests.

This module provides common fixtures used across all test modules,
including sample tools, test app creation and async client setup.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from mochi_tools import create_app, tool
from mochi_tools.config import MochiToolsSettings
from mochi_tools.schema import INT32


@pytest.fixture
def add_tool():
    """A two-parameter integer adding tool, summarized by the model."""

    @tool(INT32, INT32)
    def add(a: int, b: int) -> int:
        return a + b

    return add


@pytest.fixture
def add_raw_tool():
    """The adding tool declared with return_raw."""

    @tool(INT32, INT32, return_raw=True)
    def add(a: int, b: int) -> int:
        return a + b

    return add


@pytest.fixture
def multiply_raw_tool():
    """A two-parameter integer multiplying tool declared with return_raw."""

    @tool(INT32, INT32, return_raw=True)
    def multiply(a: int, b: int) -> int:
        return a * b

    return multiply


@pytest.fixture
def test_settings():
    """Create test settings.

    Returns:
        MochiToolsSettings: Settings instance configured for testing.
    """
    return MochiToolsSettings(
        host="127.0.0.1",
        port=8000,
        ollama_host="http://localhost:11434",
        model="llama3.2:latest",
        tools_module=None,
        max_tool_rounds=5,
        log_level="DEBUG",
        cors_origins=["*"],
    )


@pytest.fixture
def test_tools(add_tool, multiply_raw_tool):
    """Tools registered in the test application."""
    return [add_tool, multiply_raw_tool]


@pytest.fixture
def test_app(test_settings, test_tools):
    """Create a FastAPI test application instance.

    Args:
        test_settings: Test settings fixture.
        test_tools: Tools to register.

    Returns:
        FastAPI: Configured test application.
    """
    return create_app(settings=test_settings, tools=test_tools)


@pytest_asyncio.fixture
async def async_client(test_app):
    """Create an async HTTP client for testing FastAPI endpoints.

    Args:
        test_app: Test application fixture.

    Yields:
        AsyncClient: Async HTTP client for making test requests.
    """
    # Trigger the lifespan startup manually for tests
    async with test_app.router.lifespan_context(test_app):
        transport = ASGITransport(app=test_app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
