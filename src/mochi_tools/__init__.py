"""mochi-tools: expose Python functions as tools to Ollama models.

This package provides tool declaration and JSON schema generation, a tool
registry and invoker, the conversation orchestrator that runs the model/tool
round trip, and a headless FastAPI server around them.
"""

from mochi_tools.app import create_app
from mochi_tools.assistant import Assistant
from mochi_tools.conversation import AssistantResult
from mochi_tools.tools import ToolDescriptor, tool

__version__ = "0.1.0"

__all__ = [
    "create_app",
    "Assistant",
    "AssistantResult",
    "ToolDescriptor",
    "tool",
    "__version__",
]
