"""Configuration module for mochi-tools using pydantic-settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MochiToolsSettings(BaseSettings):
    """Main configuration settings for mochi-tools.

    All settings can be overridden via environment variables with the MOCHI_ prefix.
    For example, MOCHI_OLLAMA_HOST will override the ollama_host setting.
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Ollama
    ollama_host: str = "http://localhost:11434"
    model: str = "qwen3:14b"

    # Tools: dotted module path declaring TOOLS (or ToolDescriptor attributes)
    tools_module: str | None = None

    # Conversation
    system_prompt: str | None = None
    max_tool_rounds: int = Field(default=10, ge=1)
    parallel_tool_execution: bool = True

    # CORS
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="MOCHI_")
