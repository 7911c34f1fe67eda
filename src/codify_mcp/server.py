"""Codify MCP Server - Expose codebase codification tools to AI assistants."""
import sys
import asyncio
import logging
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from codify_core.config import get_settings

from . import tools
from .dispatcher import dispatch


settings = get_settings()

# Configure logging to stderr; stdout carries the stdio transport
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    stream=sys.stderr,
    force=True
)
logger = logging.getLogger("codify-mcp")


# MCP Server instance
app = Server(settings.server_name, version=settings.server_version)


@app.list_tools()
async def list_tools() -> list[Tool]:
    """List available MCP tools."""
    logger.info(f"Listing tools: {', '.join(tools.get_tool_names())}")
    return tools.get_tools()


@app.call_tool(validate_input=False)
async def call_tool(name: str, arguments: Any) -> list[TextContent]:
    """Handle MCP tool calls by delegating to the dispatcher.

    Input is not validated against the schema here; handlers report missing
    fields themselves. Unknown tool names raise, which the MCP server reports
    as a protocol-level error.
    """
    logger.info(f"Tool call: {name} with arguments: {sorted(arguments or {})}")
    return dispatch(name, arguments)


async def main():
    """Run the MCP server."""
    logger.info(f"{settings.server_name} {settings.server_version} running on stdio")
    async with stdio_server() as (read_stream, write_stream):
        await app.run(read_stream, write_stream, app.create_initialization_options())


def run():
    """Console entry point; exits non-zero when the transport fails."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except Exception as e:
        logger.error(f"Server error: {type(e).__name__}: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    run()
