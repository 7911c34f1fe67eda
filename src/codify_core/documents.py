"""Markdown documents written on behalf of the calling agent.

Two artifacts are produced:
- ``.github/copilot-instructions.md``: a header block written once, then one
  dated ``## Analysis of <file> (<date>)`` section appended per call
- ``docs/prd-<project>-<date>.md``: a PRD saved verbatim
"""
import logging
import re
from datetime import date
from pathlib import Path
from typing import Optional, Union

from .templates import load_template

logger = logging.getLogger("codify-core.documents")

INSTRUCTIONS_DIR = ".github"
INSTRUCTIONS_FILE = "copilot-instructions.md"
DOCS_DIR = "docs"


def iso_date(today: Optional[date] = None) -> str:
    """Today (or the given day) as YYYY-MM-DD."""
    return (today or date.today()).isoformat()


def instructions_path(project_root: Union[str, Path]) -> Path:
    return Path(project_root) / INSTRUCTIONS_DIR / INSTRUCTIONS_FILE


def format_analysis_section(file_name: str, patterns: str, today: Optional[date] = None) -> str:
    """Render one appended analysis section."""
    return f"\n## Analysis of {file_name} ({iso_date(today)})\n\n{patterns}\n\n---\n\n"


def append_codified_patterns(
    project_root: Union[str, Path],
    file_name: str,
    patterns: str,
    today: Optional[date] = None,
) -> Path:
    """Append analysed patterns to the project's Copilot instructions file.

    The header block is written when the file is missing or blank. Existing
    content is preserved.

    Returns:
        Path of the instructions file

    Raises:
        OSError: If the directory or file cannot be created or written
    """
    path = instructions_path(project_root)
    path.parent.mkdir(parents=True, exist_ok=True)

    existing = path.read_text(encoding="utf-8") if path.exists() else ""
    if not existing.strip():
        existing = load_template("copilot_instructions_header").body + "\n\n"

    path.write_text(existing + format_analysis_section(file_name, patterns, today), encoding="utf-8")
    logger.info(f"Appended analysis of {file_name} to {path}")
    return path


def sanitize_project_name(project_name: str) -> str:
    """Lower-case the name and replace every non ``[a-z0-9]`` character with ``-``."""
    return re.sub(r"[^a-z0-9]", "-", project_name.lower())


def prd_draft_path(project_root: Union[str, Path], today: Optional[date] = None) -> Path:
    """Location announced by ``generate_prd`` before any content exists."""
    return Path(project_root) / DOCS_DIR / f"prd-{iso_date(today)}.md"


def prd_path(project_root: Union[str, Path], project_name: str, today: Optional[date] = None) -> Path:
    return Path(project_root) / DOCS_DIR / f"prd-{sanitize_project_name(project_name)}-{iso_date(today)}.md"


def save_prd_document(
    project_root: Union[str, Path],
    project_name: str,
    content: str,
    today: Optional[date] = None,
) -> Path:
    """Write PRD content to ``docs/``, replacing any file of the same name."""
    path = prd_path(project_root, project_name, today)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    logger.info(f"Saved PRD for {project_name} to {path}")
    return path
