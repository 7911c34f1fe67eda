"""MCP tool definitions for the codify server.

This module is the single catalog of tools exposed to callers. The list is
built once at import time; ``get_tools()`` always returns it in the same order.
Schemas are advisory: handlers apply defaults and check required fields
themselves.
"""
from typing import Optional

from mcp.types import Tool

from codify_core.config import get_settings


ROAST_STYLES = ["gentle", "spicy", "savage"]
ANALYSIS_DEPTHS = ["quick", "thorough", "comprehensive"]


def _build_catalog() -> tuple[Tool, ...]:
    file_pattern = get_settings().file_pattern
    return (
        # ============================================================================
        # Codification Tools
        # ============================================================================
        Tool(
            name="codify",
            description="Read a file and return its content for AI analysis and codification of patterns/practices. "
                       "Common pattern: codify(filePath=...) → analyze → write_codified_patterns(...).",
            inputSchema={
                "type": "object",
                "properties": {
                    "filePath": {
                        "type": "string",
                        "description": "Path to the file to analyze"
                    },
                    "analysisPrompt": {
                        "type": "string",
                        "description": "Optional: Specific analysis instructions (defaults to general pattern extraction)"
                    }
                },
                "required": ["filePath"]
            }
        ),
        Tool(
            name="write_codified_patterns",
            description="Write analyzed patterns and practices to .github/copilot-instructions.md "
                       "(GitHub Copilot standard location). Each call appends a dated section.",
            inputSchema={
                "type": "object",
                "properties": {
                    "patterns": {
                        "type": "string",
                        "description": "The analyzed patterns and practices in markdown format"
                    },
                    "fileName": {
                        "type": "string",
                        "description": "Name of the file that was analyzed"
                    },
                    "projectRoot": {
                        "type": "string",
                        "description": "Root directory of the project (optional, defaults to current directory)"
                    }
                },
                "required": ["patterns", "fileName"]
            }
        ),
        # ============================================================================
        # Review Tools
        # ============================================================================
        Tool(
            name="code_roaster",
            description="Provide humorous (but constructive) code review comments",
            inputSchema={
                "type": "object",
                "properties": {
                    "filePath": {
                        "type": "string",
                        "description": "Path to the file to roast"
                    },
                    "roastStyle": {
                        "type": "string",
                        "enum": ROAST_STYLES,
                        "default": "gentle",
                        "description": 'Style of roast: "gentle", "spicy", or "savage" (defaults to "gentle")'
                    }
                },
                "required": ["filePath"]
            }
        ),
        Tool(
            name="find_todos",
            description="Scan codebase for TODO, FIXME, HACK, NOTE, BUG and XXX comments and prioritize them. "
                       "node_modules, .git, dist and build directories are never scanned.",
            inputSchema={
                "type": "object",
                "properties": {
                    "projectRoot": {
                        "type": "string",
                        "description": "Root directory to scan (defaults to current directory)"
                    },
                    "filePattern": {
                        "type": "string",
                        "default": file_pattern,
                        "description": f'Glob pattern for files to scan (defaults to "{file_pattern}")'
                    }
                }
            }
        ),
        # ============================================================================
        # Requirements Document Tools
        # ============================================================================
        Tool(
            name="generate_prd",
            description="Generate a comprehensive Project Requirements Document using industry-standard "
                       "template and output to /docs folder. Follow up with save_prd(...) to persist the result.",
            inputSchema={
                "type": "object",
                "properties": {
                    "projectName": {
                        "type": "string",
                        "description": "Name of the project for the PRD"
                    },
                    "projectDescription": {
                        "type": "string",
                        "description": "Brief description of what the project does"
                    },
                    "projectRoot": {
                        "type": "string",
                        "description": "Root directory of the project (defaults to current directory)"
                    },
                    "customRequirements": {
                        "type": "string",
                        "description": "Optional: Additional specific requirements or context for the project"
                    }
                },
                "required": ["projectName", "projectDescription"]
            }
        ),
        Tool(
            name="save_prd",
            description="Save generated PRD content to /docs folder",
            inputSchema={
                "type": "object",
                "properties": {
                    "prdContent": {
                        "type": "string",
                        "description": "The complete PRD content in Markdown format"
                    },
                    "projectName": {
                        "type": "string",
                        "description": "Name of the project (used for filename)"
                    },
                    "projectRoot": {
                        "type": "string",
                        "description": "Root directory of the project (optional)"
                    }
                },
                "required": ["prdContent", "projectName"]
            }
        ),
        # ============================================================================
        # Analysis Tools
        # ============================================================================
        Tool(
            name="bug_predictor",
            description="Identify code patterns that commonly lead to bugs",
            inputSchema={
                "type": "object",
                "properties": {
                    "filePath": {
                        "type": "string",
                        "description": "Path to the file to analyze for bug-prone patterns"
                    },
                    "analysisDepth": {
                        "type": "string",
                        "enum": ANALYSIS_DEPTHS,
                        "default": "thorough",
                        "description": 'Analysis depth: "quick", "thorough", or "comprehensive" (defaults to "thorough")'
                    }
                },
                "required": ["filePath"]
            }
        ),
        Tool(
            name="complexity_analyzer",
            description="Measure cyclomatic complexity and suggest refactoring opportunities",
            inputSchema={
                "type": "object",
                "properties": {
                    "filePath": {
                        "type": "string",
                        "description": "Path to the file to analyze for complexity metrics"
                    },
                    "complexityThreshold": {
                        "type": "number",
                        "default": 10,
                        "description": "Complexity threshold for flagging functions (defaults to 10)"
                    },
                    "includeRefactoringTips": {
                        "type": "boolean",
                        "default": True,
                        "description": "Include specific refactoring suggestions (defaults to true)"
                    }
                },
                "required": ["filePath"]
            }
        ),
    )


_CATALOG = _build_catalog()
_BY_NAME = {tool.name: tool for tool in _CATALOG}


def get_tools() -> list[Tool]:
    """Get the list of all MCP tools exposed by the codify server."""
    return list(_CATALOG)


def get_tool(name: str) -> Optional[Tool]:
    """Look up a single tool definition by name."""
    return _BY_NAME.get(name)


def get_tool_names() -> list[str]:
    return [tool.name for tool in _CATALOG]


def get_schema_defaults(name: str) -> dict:
    """Documented defaults for a tool's optional fields."""
    tool = get_tool(name)
    if tool is None:
        return {}
    properties = tool.inputSchema.get("properties", {})
    return {field: spec["default"] for field, spec in properties.items() if "default" in spec}


def get_required_fields(name: str) -> list[str]:
    tool = get_tool(name)
    if tool is None:
        return []
    return list(tool.inputSchema.get("required", []))
