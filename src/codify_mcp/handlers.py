"""MCP tool handlers for the codify server.

All handlers follow a consistent pattern:
- Accept: the raw arguments dict from the tool call
- Return: list[TextContent], never raise (see ``tool_handler``)
- Fill absent optional fields from the catalog's documented defaults
- Use templates from codify_core for prompt text and formatters for layout
- Log all operations for debugging

Handlers keep no state between calls.
"""
from datetime import date
from functools import wraps
from pathlib import Path
from typing import Any, Callable
import logging

from mcp.types import TextContent

from codify_core import documents
from codify_core.config import get_settings
from codify_core.scanner import scan
from codify_core.templates import load_template, render_template

from . import formatters
from . import tools
from .errors import (
    MissingRequiredFieldError,
    TargetFileNotFoundError,
    TargetFileReadError,
    ToolError,
)

logger = logging.getLogger("codify-mcp.handlers")

Handler = Callable[[dict], list[TextContent]]

DEFAULT_COMPLEXITY_THRESHOLD = 10


def tool_handler(label: str) -> Callable[[Handler], Handler]:
    """Convert any failure inside a handler into the ``❌ <LABEL> ERROR`` envelope.

    The label is attached to the wrapped function as ``error_label`` so the
    dispatcher can report faults under the same name.
    """
    def decorator(func: Handler) -> Handler:
        @wraps(func)
        def wrapper(arguments: dict) -> list[TextContent]:
            try:
                return func(arguments)
            except ToolError as e:
                logger.warning(f"{func.__name__} failed: {e}")
                return formatters.error_result(label, str(e))
            except Exception as e:
                logger.error(f"Unexpected error in {func.__name__}: {type(e).__name__}: {e}", exc_info=True)
                return formatters.error_result(label, str(e) or type(e).__name__)

        wrapper.error_label = label
        return wrapper
    return decorator


# ============================================================================
# Argument Helpers
# ============================================================================

def require(tool_name: str, arguments: dict) -> None:
    """Raise MissingRequiredFieldError for the first absent field the catalog marks required."""
    for field in tools.get_required_fields(tool_name):
        if arguments.get(field) is None:
            raise MissingRequiredFieldError(field)


def with_defaults(tool_name: str, arguments: dict) -> dict:
    """Copy of ``arguments`` with absent optional fields set to their documented defaults.

    Unknown fields are passed through untouched.
    """
    merged = dict(arguments)
    for field, default in tools.get_schema_defaults(tool_name).items():
        if merged.get(field) is None:
            merged[field] = default
    return merged


def choose_option(value: Any, allowed: list[str], default: str) -> str:
    """Return ``value`` if it is one of ``allowed``, otherwise ``default``."""
    if value in allowed:
        return value
    logger.debug(f"Unrecognized option {value!r}, falling back to {default!r}")
    return default


def project_root(arguments: dict) -> str:
    return arguments.get("projectRoot") or get_settings().resolve_project_root()


def describe_file(file_path: str) -> tuple[str, str]:
    """Return (file name, extension) for a path; a name without a dot is its own extension."""
    file_name = Path(file_path).name
    extension = file_name.rsplit(".", 1)[-1]
    return file_name, extension


def read_target_file(file_path: str) -> str:
    """Read a file named by a tool argument.

    Raises:
        TargetFileNotFoundError: If the path is not an existing file
        TargetFileReadError: If the file exists but cannot be read as text
    """
    path = Path(file_path)
    if not path.is_file():
        raise TargetFileNotFoundError(file_path)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TargetFileReadError(file_path, str(e)) from e


def _file_prompt(prompt: str, file_path: str, content: str, closing: str, include_name: bool = True) -> str:
    """Prompt text, optional file name line, fenced file content, closing instruction."""
    file_name, extension = describe_file(file_path)
    name_line = f"\n\nFile: {file_name}" if include_name else ""
    return f"{prompt}{name_line}\n\n{formatters.format_code_block(content, extension)}\n\n{closing}"


# ============================================================================
# Codification Handlers
# ============================================================================

@tool_handler("CODIFY")
def handle_codify(arguments: dict) -> list[TextContent]:
    """Return a file's content wrapped in pattern-extraction instructions.

    A caller-supplied ``analysisPrompt`` replaces the default instructions.
    """
    require("codify", arguments)
    file_path = arguments["filePath"]
    content = read_target_file(file_path)
    file_name, extension = describe_file(file_path)

    template = load_template("codify")
    prompt = arguments.get("analysisPrompt") or template.render(
        extension=extension.upper(),
        file_name=file_name,
    )
    logger.info(f"Prepared codify prompt for {file_path} ({len(content)} chars)")

    return formatters.text_result(_file_prompt(prompt, file_path, content, template.closing, include_name=False))


@tool_handler("WRITE")
def handle_write_codified_patterns(arguments: dict) -> list[TextContent]:
    """Append analysed patterns to .github/copilot-instructions.md."""
    require("write_codified_patterns", arguments)
    file_name = arguments["fileName"]
    path = documents.append_codified_patterns(project_root(arguments), file_name, arguments["patterns"])
    logger.info(f"Codified patterns from {file_name} into {path}")

    text = (f"{formatters.SUCCESS_GLYPH} CODIFIED: Successfully analyzed {file_name} and updated "
            f".github/copilot-instructions.md with AI-extracted patterns and practices.")
    return formatters.text_result(text)


# ============================================================================
# Review Handlers
# ============================================================================

@tool_handler("ROAST")
def handle_code_roaster(arguments: dict) -> list[TextContent]:
    """Wrap a file in humorous review instructions.

    Styles: gentle (default), spicy, savage. Unknown styles fall back to gentle.
    """
    require("code_roaster", arguments)
    arguments = with_defaults("code_roaster", arguments)
    file_path = arguments["filePath"]
    content = read_target_file(file_path)
    _, extension = describe_file(file_path)

    style = choose_option(arguments["roastStyle"], tools.ROAST_STYLES, "gentle")
    template = load_template(f"roast_{style}")
    prompt = template.render(extension=extension.upper())
    logger.info(f"Prepared {style} roast for {file_path}")

    return formatters.text_result(_file_prompt(prompt, file_path, content, template.closing))


@tool_handler("TODO SCAN")
def handle_find_todos(arguments: dict) -> list[TextContent]:
    """Scan the project for marker comments and ask for a prioritised plan.

    RETURNS:
    • One line per marker: **KIND** in `file:line` - comment
    • Item and file counts inside the analysis prompt
    """
    arguments = with_defaults("find_todos", arguments)
    root = project_root(arguments)
    file_pattern = arguments["filePattern"] or get_settings().file_pattern

    result = scan(root, file_pattern, get_settings().exclude_patterns)
    logger.info(
        f"Found {result.count} markers across {result.files_scanned} files in {root} "
        f"({', '.join(f'{kind.value}={n}' for kind, n in result.by_marker().items()) or 'none'})"
    )

    text = render_template(
        "find_todos",
        item_count=result.count,
        file_count=result.files_scanned,
        summary=formatters.format_annotation_summary(result.annotations),
    )
    return formatters.text_result(text)


# ============================================================================
# Requirements Document Handlers
# ============================================================================

@tool_handler("PRD GENERATION")
def handle_generate_prd(arguments: dict) -> list[TextContent]:
    """Build the PRD authoring prompt. Nothing is written to disk."""
    require("generate_prd", arguments)
    custom = arguments.get("customRequirements")
    today = date.today()

    prompt = render_template(
        "generate_prd",
        project_name=arguments["projectName"],
        project_description=arguments["projectDescription"],
        custom_requirements=f"**Additional Requirements**: {custom}" if custom else "",
        date=documents.iso_date(today),
    )
    draft_path = documents.prd_draft_path(project_root(arguments), today)
    logger.info(f"Prepared PRD prompt for {arguments['projectName']}")

    text = (f"{prompt}\n\n"
            f"After generating this PRD, I'll save it to: `{draft_path}`\n\n"
            f"Please provide the complete PRD content in Markdown format.")
    return formatters.text_result(text)


@tool_handler("PRD SAVE")
def handle_save_prd(arguments: dict) -> list[TextContent]:
    """Persist PRD markdown under docs/."""
    require("save_prd", arguments)
    path = documents.save_prd_document(project_root(arguments), arguments["projectName"], arguments["prdContent"])

    text = f"""{formatters.SUCCESS_GLYPH} PRD SAVED: Successfully generated and saved Project Requirements Document to `{path}`

The PRD includes:
- Executive Summary
- Product Overview
- Target Audience
- User Stories
- Functional Requirements
- Non-Functional Requirements
- Technical Constraints
- Success Metrics
- Timeline and Milestones
- Risk Assessment

Your comprehensive PRD is now ready for stakeholder review!"""
    return formatters.text_result(text)


# ============================================================================
# Analysis Handlers
# ============================================================================

@tool_handler("BUG PREDICTION")
def handle_bug_predictor(arguments: dict) -> list[TextContent]:
    """Wrap a file in bug-pattern analysis instructions at the requested depth."""
    require("bug_predictor", arguments)
    arguments = with_defaults("bug_predictor", arguments)
    file_path = arguments["filePath"]
    content = read_target_file(file_path)
    _, extension = describe_file(file_path)

    depth = choose_option(arguments["analysisDepth"], tools.ANALYSIS_DEPTHS, "thorough")
    template = load_template(f"bug_{depth}")
    prompt = template.render(extension=extension.upper())
    logger.info(f"Prepared {depth} bug prediction for {file_path}")

    return formatters.text_result(_file_prompt(prompt, file_path, content, template.closing))


def _coerce_threshold(value: Any) -> str:
    """Render the complexity threshold; non-numeric values fall back to the default."""
    if isinstance(value, bool):
        value = DEFAULT_COMPLEXITY_THRESHOLD
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.debug(f"Non-numeric complexity threshold {value!r}, using {DEFAULT_COMPLEXITY_THRESHOLD}")
        number = DEFAULT_COMPLEXITY_THRESHOLD
    if number.is_integer():
        return str(int(number))
    return repr(number)


@tool_handler("COMPLEXITY ANALYSIS")
def handle_complexity_analyzer(arguments: dict) -> list[TextContent]:
    """Wrap a file in cyclomatic complexity review instructions.

    Refactoring tips are included unless ``includeRefactoringTips`` is exactly False.
    """
    require("complexity_analyzer", arguments)
    arguments = with_defaults("complexity_analyzer", arguments)
    file_path = arguments["filePath"]
    content = read_target_file(file_path)
    file_name, extension = describe_file(file_path)

    tips = ""
    if arguments["includeRefactoringTips"] is not False:
        tips = "\n" + load_template("complexity_refactoring_tips").body + "\n"

    template = load_template("complexity")
    prompt = template.render(
        extension=extension.upper(),
        threshold=_coerce_threshold(arguments["complexityThreshold"]),
        refactoring_tips=tips,
        file_name=file_name,
    )
    logger.info(f"Prepared complexity analysis for {file_path}")

    return formatters.text_result(_file_prompt(prompt, file_path, content, template.closing, include_name=False))


HANDLER_MAP: dict[str, Handler] = {
    # Codification handlers
    "codify": handle_codify,
    "write_codified_patterns": handle_write_codified_patterns,
    # Review handlers
    "code_roaster": handle_code_roaster,
    "find_todos": handle_find_todos,
    # Requirements document handlers
    "generate_prd": handle_generate_prd,
    "save_prd": handle_save_prd,
    # Analysis handlers
    "bug_predictor": handle_bug_predictor,
    "complexity_analyzer": handle_complexity_analyzer,
}
