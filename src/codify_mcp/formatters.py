"""Shared formatting functions for MCP responses.

Success and failure share one envelope shape: a list of text blocks. Failures
are a single block starting with ``ERROR_GLYPH``.
"""
from mcp.types import TextContent

from codify_core.models import AnnotationRecord

ERROR_GLYPH = "❌"
SUCCESS_GLYPH = "✅"


def text_result(text: str) -> list[TextContent]:
    """Wrap text in a single-block tool result."""
    return [TextContent(type="text", text=text)]


def format_error(label: str, message: str) -> str:
    return f"{ERROR_GLYPH} {label} ERROR: {message}"


def error_result(label: str, message: str) -> list[TextContent]:
    """Build the uniform failure envelope for a tool."""
    return text_result(format_error(label, message))


def is_error_result(content: list[TextContent]) -> bool:
    """True when the first block carries the failure glyph."""
    return bool(content) and content[0].text.startswith(ERROR_GLYPH)


def format_code_block(content: str, language: str) -> str:
    """Fence file content, tagged with its extension."""
    return f"```{language}\n{content}\n```"


def format_annotation(record: AnnotationRecord) -> str:
    """Format a marker occurrence as a single summary line."""
    return f"**{record.marker.value}** in `{record.file}:{record.line}` - {record.display_text}"


def format_annotation_summary(records: list[AnnotationRecord]) -> str:
    return "\n".join(format_annotation(record) for record in records)
