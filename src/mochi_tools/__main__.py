"""CLI entry point for mochi-tools.

This module provides the command-line interface for starting the mochi-tools
server. It can be invoked as `mochi-tools` (via the script entry point) or
`python -m mochi_tools`.
"""

import argparse
import logging
import sys

import uvicorn

from mochi_tools import __version__, create_app
from mochi_tools.config import MochiToolsSettings


def main() -> None:
    """Main entry point for the mochi-tools CLI.

    Parses command-line arguments and starts the uvicorn server with the
    FastAPI application.
    """
    parser = argparse.ArgumentParser(
        prog="mochi-tools",
        description="Headless FastAPI server exposing Python tools to Ollama models",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"mochi-tools {__version__}",
    )

    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host to bind the server to (default: 127.0.0.1, can be set via MOCHI_HOST)",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind the server to (default: 8000, can be set via MOCHI_PORT)",
    )

    parser.add_argument(
        "--ollama-host",
        type=str,
        default=None,
        help="Ollama server URL (default: http://localhost:11434, can be set via MOCHI_OLLAMA_HOST)",
    )

    parser.add_argument(
        "--model",
        type=str,
        default=None,
        help="Ollama model used for chat calls (can be set via MOCHI_MODEL)",
    )

    parser.add_argument(
        "--tools-module",
        type=str,
        default=None,
        help="Dotted path of the module declaring the tools (can be set via MOCHI_TOOLS_MODULE)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO, can be set via MOCHI_LOG_LEVEL)",
    )

    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development (uvicorn --reload)",
    )

    args = parser.parse_args()

    # Build settings, CLI args override environment variables
    settings_kwargs = {}
    if args.host is not None:
        settings_kwargs["host"] = args.host
    if args.port is not None:
        settings_kwargs["port"] = args.port
    if args.ollama_host is not None:
        settings_kwargs["ollama_host"] = args.ollama_host
    if args.model is not None:
        settings_kwargs["model"] = args.model
    if args.tools_module is not None:
        settings_kwargs["tools_module"] = args.tools_module
    if args.log_level is not None:
        settings_kwargs["log_level"] = args.log_level

    settings = MochiToolsSettings(**settings_kwargs)

    # Application loggers follow the configured level, uvicorn handles its own
    logging.basicConfig(level=settings.log_level.upper())

    # Create the FastAPI app
    app = create_app(settings=settings)

    # Start uvicorn
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=args.reload,
    )


if __name__ == "__main__":
    sys.exit(main())
