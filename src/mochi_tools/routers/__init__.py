"""FastAPI routers for API endpoints.

This package contains all route handlers organized by resource type.
Each router module defines endpoints for a specific domain (health, tools, chat).
"""

from mochi_tools.routers import chat, health, tools

__all__ = [
    "chat",
    "health",
    "tools",
]
