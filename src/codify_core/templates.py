"""Prompt templates for the codify tools.

Template bodies are markdown files in ``templates/`` with YAML frontmatter.
Bodies use ``$name`` placeholders (``string.Template`` syntax).
"""
import re
import string
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

import yaml


TEMPLATES_DIR = Path(__file__).parent / "templates"

FRONTMATTER_PATTERN = re.compile(r'^---\s*\n(.*?)\n---\s*\n(.*)$', re.DOTALL)


class TemplateError(Exception):
    """Raised when a template file is malformed."""
    pass


class TemplateRenderError(TemplateError):
    """Raised when a template references a value that was not supplied."""
    pass


@dataclass(frozen=True)
class PromptTemplate:
    name: str
    body: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def closing(self) -> str:
        """Instruction appended after the file content, if any."""
        return (self.metadata.get("closing") or "").strip()

    def render(self, **values: Any) -> str:
        try:
            return string.Template(self.body).substitute(values)
        except KeyError as e:
            raise TemplateRenderError(
                f"Template '{self.name}' is missing value for {e.args[0]!r}"
            ) from e


def parse_template(name: str, content: str) -> PromptTemplate:
    """Split a template file into frontmatter metadata and body.

    Files without frontmatter are accepted as a plain body.
    """
    match = FRONTMATTER_PATTERN.match(content)
    if not match:
        return PromptTemplate(name=name, body=content.strip("\n"))

    try:
        metadata = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError as e:
        raise TemplateError(f"Invalid frontmatter in template '{name}': {e}") from e
    if not isinstance(metadata, dict):
        raise TemplateError(f"Frontmatter of template '{name}' must be a mapping")

    return PromptTemplate(name=name, body=match.group(2).strip("\n"), metadata=metadata)


@lru_cache(maxsize=None)
def load_template(name: str) -> PromptTemplate:
    """Load a prompt template by name.

    Args:
        name: Template file name without the ``.md`` suffix

    Returns:
        The parsed template

    Raises:
        FileNotFoundError: If the template file doesn't exist
    """
    template_path = TEMPLATES_DIR / f"{name}.md"
    if not template_path.exists():
        raise FileNotFoundError(f"Template not found: {template_path}")

    return parse_template(name, template_path.read_text(encoding="utf-8"))


def render_template(name: str, **values: Any) -> str:
    """Load and render a template in one step."""
    return load_template(name).render(**values)
