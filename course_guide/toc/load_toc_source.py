"""
course_guide/toc/load_toc_source.py

Reads the TOC document and the optional assignments document from a
workspace root.

Pure file I/O + JSON parse. No normalization happens here, so the
normalizer can be exercised without touching the filesystem.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

from course_guide.guide_config import (
    ASSIGNMENTS_RELATIVE_PATH,
    TOC_RELATIVE_PATH,
)


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LoadedDocument:
    """A document that was found and parsed successfully."""

    path: Path
    raw: Any


@dataclass(frozen=True)
class NotFound:
    """The document (or the workspace itself) is absent. Not a fault."""

    path: Path


@dataclass(frozen=True)
class ParseFailure:
    """The document exists but is not valid JSON."""

    path: Path
    message: str


SourceResult = Union[LoadedDocument, NotFound, ParseFailure]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def load_toc_document(
    workspace_root: str | Path | None,
    relative_path: str = TOC_RELATIVE_PATH,
) -> SourceResult:
    """Locate and parse a JSON document below workspace_root.

    Args:
        workspace_root: Root of the open workspace, or None when no
                        workspace is open.
        relative_path:  Workspace-relative location of the document.

    Returns:
        LoadedDocument on success, NotFound when the workspace or file is
        missing, ParseFailure carrying the decoder message otherwise.
    """
    if workspace_root is None:
        return NotFound(path=Path(relative_path))

    doc_path = Path(workspace_root) / relative_path
    if not doc_path.is_file():
        return NotFound(path=doc_path)

    try:
        text = doc_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        return ParseFailure(path=doc_path, message=f"not valid UTF-8: {exc}")
    except FileNotFoundError:
        # removed between the existence check and the read
        return NotFound(path=doc_path)
    except OSError as exc:
        return ParseFailure(path=doc_path, message=f"could not be read: {exc}")

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        return ParseFailure(path=doc_path, message=str(exc))
    except RecursionError:
        return ParseFailure(path=doc_path, message="nesting is too deep to parse")

    return LoadedDocument(path=doc_path, raw=raw)


def load_assignments_document(workspace_root: str | Path | None) -> SourceResult:
    """Locate and parse the optional assignments document."""
    return load_toc_document(workspace_root, ASSIGNMENTS_RELATIVE_PATH)
