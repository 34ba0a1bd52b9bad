"""
MCP server for the Adobe Target Admin API

Serves the registered tools and the offer template resources over the stdio
transport. All diagnostics go to stderr; stdout carries only JSON-RPC.
"""

import asyncio
import logging
import os
import signal
import sys
from pathlib import Path
from typing import Callable

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from pydantic import AnyUrl

from .config import Settings, log_config_summary
from .services.context import ExecutionContext, ScratchFiles
from .services.dispatcher import ToolDispatcher
from .services.error_handler import TemplateError
from .services.templates import TEMPLATE_MIME_TYPE, TemplateStore
from .tools import load_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "adobe-target-admin-api"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Send all logging to stderr so the stdio protocol stream stays clean."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, stream=sys.stderr)


def build_server(dispatcher: ToolDispatcher, templates: TemplateStore, version: str = "0.0.0") -> Server:
    """Create the lowlevel MCP server and register its request handlers."""
    server = Server(SERVER_NAME, version=version)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        return [
            types.Tool(name=d.name, description=d.description, inputSchema=d.inputSchema)
            for d in dispatcher.list_tools()
        ]

    # Arguments are validated by the dispatcher against each tool's model
    @server.call_tool(validate_input=False)
    async def handle_call_tool(name: str, arguments: dict) -> types.CallToolResult:
        return await dispatcher.call_tool(name, arguments)

    @server.list_resources()
    async def handle_list_resources() -> list[types.Resource]:
        return [
            types.Resource(
                uri=AnyUrl(resource["uri"]),
                name=resource["name"],
                description=resource["description"],
                mimeType=resource["mimeType"],
            )
            for resource in templates.list_resources()
        ]

    @server.read_resource()
    async def handle_read_resource(uri: AnyUrl) -> list[ReadResourceContents]:
        try:
            text = templates.read(str(uri))
        except TemplateError as e:
            raise TemplateError(f"Failed to read template: {e.message}", e.error_code, e.details) from e
        return [ReadResourceContents(content=text, mime_type=TEMPLATE_MIME_TYPE)]

    return server


def shutdown_handler(scratch: ScratchFiles) -> Callable[..., None]:
    """Build the SIGINT/SIGTERM handler: remove scratch files and exit 0 at once.

    Exits without unwinding the event loop, abandoning the stdio reader
    thread even while it is blocked on an open stdin.
    """
    def shutdown(*_: object) -> None:
        logger.info("Shutting down...")
        scratch.cleanup()
        os._exit(0)

    return shutdown


def install_shutdown_handlers(scratch: ScratchFiles) -> None:
    handler = shutdown_handler(scratch)
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, handler)
        except (NotImplementedError, RuntimeError):
            # No loop signal support on Windows
            signal.signal(sig, handler)


async def serve(settings: Settings) -> None:
    """Run the server on stdio until the client disconnects or the process is stopped."""
    from . import __version__

    config = settings.to_config()
    logger.info("Adobe Target Admin API MCP Server starting...")
    log_config_summary(config)

    with ScratchFiles() as scratch:
        install_shutdown_handlers(scratch)
        templates = TemplateStore(Path(settings.templates_dir))
        templates.load()
        context = ExecutionContext(
            config=config,
            templates=templates,
            temp_file_path=scratch.page_html,
            temp_css_path=scratch.page_css,
        )
        registry = load_tools()

        server = build_server(ToolDispatcher(registry, context), templates, version=__version__)
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Server ready - connected via stdio transport")
            await server.run(read_stream, write_stream, server.create_initialization_options())
