"""Data models produced by the pattern scanner."""
import enum

from pydantic import BaseModel, ConfigDict, Field


class MarkerKind(str, enum.Enum):
    """Marker tokens recognised in source comments."""

    TODO = "TODO"
    FIXME = "FIXME"
    HACK = "HACK"
    NOTE = "NOTE"
    BUG = "BUG"
    XXX = "XXX"


class AnnotationRecord(BaseModel):
    """A single marker occurrence on one line of one file."""

    model_config = ConfigDict(frozen=True)

    file: str = Field(..., description="Path relative to the scan root, POSIX separators")
    line: int = Field(..., ge=1, description="1-based line number")
    marker: MarkerKind
    comment: str = ""
    raw_line: str = ""

    @property
    def display_text(self) -> str:
        """Comment text, or the whole line when the marker has no trailing text."""
        return self.comment or self.raw_line


class ScanResult(BaseModel):
    """Outcome of scanning a directory tree."""

    annotations: list[AnnotationRecord] = Field(default_factory=list)
    files_scanned: int = 0
    # Candidates that could not be read as text (binary, permissions, I/O)
    files_skipped: int = 0

    @property
    def count(self) -> int:
        return len(self.annotations)

    def by_marker(self) -> dict[MarkerKind, int]:
        """Count annotations per marker kind, in first-seen order."""
        counts: dict[MarkerKind, int] = {}
        for record in self.annotations:
            counts[record.marker] = counts.get(record.marker, 0) + 1
        return counts
