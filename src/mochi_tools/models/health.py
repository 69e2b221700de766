"""Health check response model."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response model for the health check endpoint.

    Attributes:
        status: Health status indicator ("ok" or "error").
        version: The version of mochi-tools.
        ollama_connected: Whether Ollama is reachable, None before startup.
        ollama_host: The Ollama host URL, None before startup.
        tool_count: Number of registered tools.
    """

    status: str = Field(..., description="Health status of the service")
    version: str = Field(..., description="Version of mochi-tools")
    ollama_connected: bool | None = Field(
        default=None,
        description="Whether Ollama is connected",
    )
    ollama_host: str | None = Field(
        default=None,
        description="Ollama host URL",
    )
    tool_count: int = Field(default=0, description="Number of registered tools")
