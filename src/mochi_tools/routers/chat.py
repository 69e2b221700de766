"""Chat API endpoint.

This module provides the endpoint that runs one chat call: the user's
message goes to the model together with the registered tools, and tool calls
are executed until the model answers or a raw-return round ends the call.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from mochi_tools.assistant import Assistant
from mochi_tools.dependencies import get_assistant, get_ollama_client
from mochi_tools.exceptions import MaxRoundsExceededError, ModelTransportError
from mochi_tools.models.chat import ChatRequest, ChatResponse, ToolExecutionResponse
from mochi_tools.ollama import OllamaChatModel

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/chat", tags=["chat"])


def _error_detail(code: str, message: str, details: dict | None = None) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "details": details or {},
        }
    }


@router.post("", response_model=ChatResponse)
async def chat(
    request_body: ChatRequest,
    request: Request,
    assistant: Assistant = Depends(get_assistant),
) -> ChatResponse:
    """Send a message and receive the final response of the tool loop.

    Args:
        request_body: Chat request containing the message and optional model
        request: FastAPI request object
        assistant: Injected assistant

    Returns:
        ChatResponse with the final content and the executed tools

    Raises:
        HTTPException: 502 if Ollama fails, 500 if the round limit is exceeded
                       or a tool declared with propagate_errors raises
    """
    chat_model = None
    if request_body.model is not None:
        chat_model = OllamaChatModel(get_ollama_client(request), model=request_body.model)

    logger.info(f"Starting chat call with {len(assistant.registry)} tools available")

    try:
        result = await assistant.chat(request_body.message, chat_model=chat_model)
    except ModelTransportError as e:
        logger.error(f"Model transport error: {e}")
        raise HTTPException(
            status_code=502,
            detail=_error_detail("ollama_error", str(e), e.details),
        )
    except MaxRoundsExceededError as e:
        raise HTTPException(
            status_code=500,
            detail=_error_detail(
                "max_rounds_exceeded", str(e), {"max_rounds": e.max_rounds}
            ),
        )
    except Exception as e:
        logger.error(f"Chat call failed: {e}")
        raise HTTPException(
            status_code=500,
            detail=_error_detail("tool_error", f"Chat call failed: {str(e)}"),
        )

    return ChatResponse(
        content=result.content,
        tool_executions=[
            ToolExecutionResponse(
                id=execution.request.id,
                name=execution.request.name,
                arguments=execution.request.arguments,
                result=execution.result,
            )
            for execution in result.tool_executions
        ],
        rounds=result.rounds,
    )
