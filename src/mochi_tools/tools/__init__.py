"""Tool declaration, registration and execution layer.

This package provides the tool descriptors callers declare, the registry
that turns them into model-facing specifications, and the invoker that binds
model-supplied JSON arguments and runs the tools.
"""

from mochi_tools.tools.descriptor import tool
from mochi_tools.tools.invoker import ToolInvoker, bind_arguments, format_result
from mochi_tools.tools.loader import load_tools
from mochi_tools.tools.registry import ToolRegistry
from mochi_tools.tools.types import (
    ToolDescriptor,
    ToolEntry,
    ToolExecutionRequest,
    ToolExecutionResult,
    ToolSpecification,
)

__all__ = [
    "tool",
    "load_tools",
    "ToolRegistry",
    "ToolInvoker",
    "bind_arguments",
    "format_result",
    "ToolDescriptor",
    "ToolEntry",
    "ToolExecutionRequest",
    "ToolExecutionResult",
    "ToolSpecification",
]
