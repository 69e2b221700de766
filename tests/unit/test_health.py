"""Unit tests for the health check endpoint."""

from unittest.mock import AsyncMock

import pytest


@pytest.mark.asyncio
async def test_health_check_returns_ok(async_client):
    """Test that health check returns status ok and the version."""
    response = await async_client.get("/api/v1/health")

    assert response.status_code == 200
    assert "application/json" in response.headers["content-type"]
    data = response.json()
    assert data["status"] == "ok"
    assert data["version"] == "0.1.0"


@pytest.mark.asyncio
async def test_health_check_reports_tool_count(async_client):
    """Test that the registered tools are counted."""
    response = await async_client.get("/api/v1/health")

    assert response.json()["tool_count"] == 2


@pytest.mark.asyncio
async def test_health_check_with_ollama_connected(async_client, test_app):
    """Test health check when Ollama is connected."""
    mock_client = AsyncMock()
    mock_client.host = "http://localhost:11434"
    mock_client.check_connection.return_value = True
    test_app.state.ollama_client = mock_client

    response = await async_client.get("/api/v1/health")

    data = response.json()
    assert data["ollama_connected"] is True
    assert data["ollama_host"] == "http://localhost:11434"


@pytest.mark.asyncio
async def test_health_check_ollama_check_exception(async_client, test_app):
    """Test that a failing connectivity check keeps the server healthy."""
    mock_client = AsyncMock()
    mock_client.host = "http://localhost:11434"
    mock_client.check_connection.side_effect = Exception("Connection error")
    test_app.state.ollama_client = mock_client

    response = await async_client.get("/api/v1/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["ollama_connected"] is False


@pytest.mark.asyncio
async def test_health_check_before_startup(test_app):
    """Test health check when neither client nor assistant is initialized."""
    from httpx import ASGITransport, AsyncClient

    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/health")

    assert response.status_code == 200
    data = response.json()
    assert data["ollama_connected"] is None
    assert data["ollama_host"] is None
    assert data["tool_count"] == 0
