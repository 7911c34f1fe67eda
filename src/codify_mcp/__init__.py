"""Codify MCP Server - Model Context Protocol integration.

This package exposes codebase codification tools to AI assistants.

Modules:
- server: stdio MCP server implementation
- tools: MCP tool definitions
- handlers: Tool implementation handlers
- dispatcher: Tool routing and result normalisation
- formatters: Response formatting utilities
- errors: Error taxonomy
"""

__version__ = "1.0.0"

from . import formatters
from . import tools
from . import handlers
from . import dispatcher

__all__ = ["formatters", "tools", "handlers", "dispatcher", "__version__"]
