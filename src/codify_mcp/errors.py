"""Error taxonomy for tool dispatch.

``UnknownToolError`` is the only error allowed to leave ``dispatch``; every
``ToolError`` is converted to a text envelope at the handler boundary.
"""


class UnknownToolError(LookupError):
    """Raised when a caller requests a tool the catalog never advertised."""

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class ToolError(Exception):
    """Base class for failures reported back to the caller as text."""
    pass


class MissingRequiredFieldError(ToolError):
    """Raised when a required argument is absent."""

    def __init__(self, field: str):
        super().__init__(f"Missing required argument: {field}")
        self.field = field


class TargetFileNotFoundError(ToolError):
    """Raised when a file path argument does not name an existing file."""

    def __init__(self, path: str):
        super().__init__(f"File not found: {path}")
        self.path = path


class TargetFileReadError(ToolError):
    """Raised when an existing target file cannot be read as text."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Could not read {path}: {reason}")
        self.path = path
        self.reason = reason
