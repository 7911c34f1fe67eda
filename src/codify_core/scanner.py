"""Codebase pattern scanner.

Walks a project tree with an include glob (globstar and brace expansion
supported) minus a set of exclude globs, and extracts every marker comment
(TODO, FIXME, HACK, NOTE, BUG, XXX) from the matching files.

Scanning rules:
- Files that cannot be read as UTF-8 text are skipped, never fatal
- A line may carry several markers; each one becomes its own record
- A marker's comment runs until the next marker on the same line
- Results are ordered by file, then line, then position within the line
"""
import logging
import re
from pathlib import Path
from typing import Iterable, Optional, Union

from wcmatch import glob

from .config import DEFAULT_EXCLUDE_PATTERNS, DEFAULT_FILE_PATTERN
from .models import AnnotationRecord, MarkerKind, ScanResult

logger = logging.getLogger("codify-core.scanner")

GLOB_FLAGS = glob.GLOBSTAR | glob.BRACE | glob.NODIR

# Token at a word start, optional plural "s", not followed by another letter,
# then any run of separators before the comment text
MARKER_PATTERN = re.compile(
    r"\b(TODO|FIXME|HACK|NOTE|BUG|XXX)S?(?![A-Za-z])[:|\s]*",
    re.IGNORECASE,
)


def resolve_files(
    root: Union[str, Path],
    include_pattern: str = DEFAULT_FILE_PATTERN,
    exclude_patterns: Optional[Iterable[str]] = DEFAULT_EXCLUDE_PATTERNS,
) -> list[str]:
    """Resolve an include glob against ``root``.

    Args:
        root: Directory the patterns are relative to
        include_pattern: Glob selecting candidate files
        exclude_patterns: Globs removing candidates; these win over the include

    Returns:
        Sorted list of POSIX-style paths relative to ``root``

    Raises:
        FileNotFoundError: If ``root`` is not an existing directory
    """
    root_path = Path(root)
    if not root_path.is_dir():
        raise FileNotFoundError(f"Project root not found: {root}")

    excludes = list(exclude_patterns or [])
    matches = glob.glob(
        include_pattern,
        flags=GLOB_FLAGS,
        root_dir=str(root_path),
        exclude=excludes or None,
    )
    files = sorted({Path(match).as_posix() for match in matches})
    logger.debug(f"Resolved {len(files)} files under {root_path} for pattern {include_pattern!r}")
    return files


def find_markers(line: str) -> list[tuple[MarkerKind, str]]:
    """Return every (marker, comment) pair on a single line, left to right.

    ``re.search`` only yields the first match, so the cursor is moved past
    each match until the line is exhausted.
    """
    matches = []
    cursor = 0
    while True:
        match = MARKER_PATTERN.search(line, cursor)
        if match is None:
            break
        matches.append(match)
        cursor = match.end()

    found = []
    for index, match in enumerate(matches):
        comment_end = matches[index + 1].start() if index + 1 < len(matches) else len(line)
        comment = line[match.end():comment_end].strip()
        found.append((MarkerKind(match.group(1).upper()), comment))
    return found


def extract_annotations(text: str, relative_path: str) -> list[AnnotationRecord]:
    """Extract annotation records from the text of one file."""
    records = []
    for line_number, line in enumerate(text.split("\n"), start=1):
        for marker, comment in find_markers(line):
            records.append(AnnotationRecord(
                file=relative_path,
                line=line_number,
                marker=marker,
                comment=comment,
                raw_line=line.strip(),
            ))
    return records


def scan(
    root: Union[str, Path],
    include_pattern: str = DEFAULT_FILE_PATTERN,
    exclude_patterns: Optional[Iterable[str]] = DEFAULT_EXCLUDE_PATTERNS,
) -> ScanResult:
    """Scan a directory tree for marker comments.

    Files are read sequentially. A file that cannot be decoded or read is
    counted in ``files_skipped`` and otherwise ignored.
    """
    root_path = Path(root)
    files = resolve_files(root_path, include_pattern, exclude_patterns)

    result = ScanResult(files_scanned=len(files))
    for relative_path in files:
        try:
            text = (root_path / relative_path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Skipping unreadable file {relative_path}: {e}")
            result.files_skipped += 1
            continue
        result.annotations.extend(extract_annotations(text, relative_path))

    logger.info(
        f"Scanned {result.files_scanned} files under {root_path}: "
        f"{result.count} annotations, {result.files_skipped} skipped"
    )
    return result
