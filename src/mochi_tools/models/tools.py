"""Pydantic models for the tool listing endpoint."""

from typing import Any

from pydantic import BaseModel, Field


class ToolListResponse(BaseModel):
    """Response body for GET /api/v1/tools.

    Each tool is rendered in the function-calling format that is sent to
    the model, including its parameter schema and definitions.
    """

    tools: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Tool specifications in function-calling format",
    )
