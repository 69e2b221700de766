"""Tool listing endpoint."""

import logging

from fastapi import APIRouter, Depends

from mochi_tools.assistant import Assistant
from mochi_tools.dependencies import get_assistant
from mochi_tools.models.tools import ToolListResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/tools", tags=["tools"])


@router.get("", response_model=ToolListResponse)
async def list_tools(
    assistant: Assistant = Depends(get_assistant),
) -> ToolListResponse:
    """List the registered tools as they are sent to the model.

    Args:
        assistant: Injected assistant

    Returns:
        ToolListResponse: Tool specifications in registration order
    """
    specifications = assistant.tool_specifications
    logger.debug(f"Listing {len(specifications)} tools")
    return ToolListResponse(tools=[spec.to_dict() for spec in specifications])
