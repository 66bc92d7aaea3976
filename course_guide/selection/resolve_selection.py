"""
course_guide/selection/resolve_selection.py

Maps a selected Entry to the content actions it should trigger.
Read-only: no file I/O, no dispatch.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from course_guide.outline.outline_tree import Entry


@dataclass(frozen=True)
class OpenNotebook:
    path: str


@dataclass(frozen=True)
class OpenDocument:
    path: str


@dataclass(frozen=True)
class NoOp:
    """Informational entry: nothing to open."""


@dataclass(frozen=True)
class RunDependencyCheck:
    """Run the environment dependency check alongside any content."""


ContentAction = Union[OpenNotebook, OpenDocument, NoOp, RunDependencyCheck]


def resolve_selection(entry: Entry) -> tuple[ContentAction, ...]:
    """Return the actions for a selected entry.

    The first action is always the single content action:
        OpenNotebook   — notebook_path is set (wins over document_path).
        OpenDocument   — only document_path is set.
        NoOp           — neither path is set.

    RunDependencyCheck follows when the entry requires it. It does not
    gate the content action; the two are independent.

    Path existence is not checked here; that happens at dispatch time.
    """
    if entry.notebook_path is not None:
        content: ContentAction = OpenNotebook(entry.notebook_path)
    elif entry.document_path is not None:
        content = OpenDocument(entry.document_path)
    else:
        content = NoOp()

    if entry.requires_dependency_check:
        return (content, RunDependencyCheck())
    return (content,)
