"""Route tool calls to handlers and normalise their results.

``dispatch`` either returns a non-empty list of text blocks or raises
``UnknownToolError``. Nothing else escapes.
"""
import logging
import traceback
from typing import Any, Optional

from mcp.types import TextContent

from . import formatters
from .errors import UnknownToolError
from .handlers import HANDLER_MAP

logger = logging.getLogger("codify-mcp.dispatcher")


def dispatch(name: str, arguments: Optional[Any] = None) -> list[TextContent]:
    """Execute the named tool with raw, unvalidated arguments.

    Raises:
        UnknownToolError: If ``name`` is not in the catalog
    """
    handler = HANDLER_MAP.get(name)
    if handler is None:
        logger.warning(f"Unknown tool requested: {name}")
        raise UnknownToolError(name)

    label = getattr(handler, "error_label", name.upper())
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, dict):
        return formatters.error_result(label, f"Arguments must be an object, got {type(arguments).__name__}")

    try:
        content = handler(dict(arguments))
    except Exception as e:
        # Handlers already convert their own failures; this covers anything that slips past
        logger.error(f"Unexpected error during {name} call:")
        logger.error(f"  Error type: {type(e).__name__}")
        logger.error(f"  Error message: {str(e)}")
        logger.error(f"  Traceback:\n{traceback.format_exc()}")
        return formatters.error_result(label, str(e) or type(e).__name__)

    if not content:
        logger.error(f"Handler for {name} returned no content")
        return formatters.error_result(label, "Tool produced no output")

    if formatters.is_error_result(content):
        logger.info(f"Tool {name} reported an error")
    else:
        logger.info(f"Tool {name} completed with {len(content)} content block(s)")
    return content
