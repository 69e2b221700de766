"""Pydantic models for chat API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    """Request body for POST /api/v1/chat."""

    message: str = Field(description="The user message to send.")
    model: str | None = Field(
        default=None,
        description="Ollama model to use for this call. Defaults to the configured model.",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "message": "How much is 37 plus 87?",
                    "model": None,
                },
            ]
        }
    )


class ToolExecutionResponse(BaseModel):
    """One executed tool call."""

    id: str = Field(description="Tool call identifier")
    name: str = Field(description="Name of the requested tool")
    arguments: str = Field(description="Arguments as JSON text, as sent by the model")
    result: str = Field(description="Textual result (or fault message) of the call")


class ChatResponse(BaseModel):
    """Response body for POST /api/v1/chat.

    ``content`` is null when the call ended on tools declared with
    return_raw; ``tool_executions`` then carries the raw results.
    """

    content: str | None = Field(
        default=None, description="Final model response, null on raw tool return"
    )
    tool_executions: list[ToolExecutionResponse] = Field(
        default_factory=list,
        description="Tool executions of this call, in request order",
    )
    rounds: int = Field(description="Number of model requests issued")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "content": "37 plus 87 is 124.",
                "tool_executions": [
                    {
                        "id": "a1b2c3d4e5",
                        "name": "add",
                        "arguments": '{"arg0": 37, "arg1": 87}',
                        "result": "124",
                    }
                ],
                "rounds": 2,
            }
        }
    )
