"""
MCP server - lists the tool catalogue and dispatches calls over stdio.

Each call runs on a worker thread so a long-running agent task never blocks
other calls or the protocol loop.
"""

from __future__ import annotations
import asyncio
import logging
from typing import Any, Dict, List, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from . import __version__
from .application.call_gate import ERROR_PREFIX
from .domain.models.call import ToolOutput
from .plugin_loader import PluginManager, get_manager

SERVER_NAME = "cloud-agent"

logger = logging.getLogger(__name__)

server = Server(SERVER_NAME, version=__version__)


def tool_definitions(manager: Optional[PluginManager] = None) -> List[Tool]:
    manager = manager or get_manager()
    return [
        Tool(name=p.name, description=p.description, inputSchema=p.parameters)
        for p in manager.plugins
    ]


def run_tool(name: str, arguments: Optional[Dict[str, Any]], manager: Optional[PluginManager] = None) -> ToolOutput:
    """Invoke one tool by name; argument problems come back as error text."""
    manager = manager or get_manager()
    func = manager.tool_functions.get(name)
    if func is None:
        return ToolOutput(f"{ERROR_PREFIX}Unknown tool: {name}", is_error=True)
    try:
        return func(**(arguments or {}))
    except ValueError as e:
        logger.info("Tool '%s' rejected arguments: %s", name, e)
        return ToolOutput(f"{ERROR_PREFIX}{e}", is_error=True)


@server.list_tools()
async def list_tools() -> List[Tool]:
    return tool_definitions()


class ToolCallError(Exception):
    """Raised from the call handler so the MCP result carries isError."""


@server.call_tool()
async def call_tool(name: str, arguments: Dict[str, Any]) -> List[TextContent]:
    output = await asyncio.to_thread(run_tool, name, arguments)
    if output.is_error:
        # The low-level server turns handler exceptions into isError results
        raise ToolCallError(output.text)
    return [TextContent(type="text", text=output.text)]


async def serve() -> None:
    """Run the server on stdin/stdout until the client disconnects."""
    logger.info("Starting %s MCP server v%s with %d tools", SERVER_NAME, __version__, len(get_manager().plugins))
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
