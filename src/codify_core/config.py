"""Runtime configuration for the codify server.

Settings are read from ``CODIFY_*`` environment variables once per process.
"""
import os
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, Field


DEFAULT_FILE_PATTERN = "**/*.{js,ts,jsx,tsx,md,py,java,c,cpp,h}"
DEFAULT_EXCLUDE_PATTERNS = ("node_modules/**", ".git/**", "dist/**", "build/**")


def _csv_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None:
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


class Settings(BaseModel):
    """Process-wide settings."""

    server_name: str = "codify-mcp"
    server_version: str = "1.0.0"
    log_level: str = "INFO"
    # None means "current working directory at call time"
    project_root: Optional[str] = None
    file_pattern: str = DEFAULT_FILE_PATTERN
    exclude_patterns: tuple[str, ...] = Field(default=DEFAULT_EXCLUDE_PATTERNS)

    def resolve_project_root(self) -> str:
        """Return the configured project root, falling back to the cwd."""
        return self.project_root or os.getcwd()


@lru_cache
def get_settings() -> Settings:
    """Build settings from the environment (cached)."""
    return Settings(
        server_name=os.getenv("CODIFY_SERVER_NAME", "codify-mcp"),
        log_level=os.getenv("CODIFY_LOG_LEVEL", "INFO").upper(),
        project_root=os.getenv("CODIFY_PROJECT_ROOT") or None,
        file_pattern=os.getenv("CODIFY_FILE_PATTERN", DEFAULT_FILE_PATTERN),
        exclude_patterns=_csv_env("CODIFY_EXCLUDE_PATTERNS", DEFAULT_EXCLUDE_PATTERNS),
    )
