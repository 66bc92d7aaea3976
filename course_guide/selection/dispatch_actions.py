"""
course_guide/selection/dispatch_actions.py

Hands resolved content actions to the host collaborator.

A failed dispatch is reported through the collaborator and returned to
the caller. It never touches the outline and is never retried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Protocol

from course_guide.selection.resolve_selection import (
    ContentAction,
    NoOp,
    OpenDocument,
    OpenNotebook,
    RunDependencyCheck,
)

logger = logging.getLogger(__name__)


class GuideCollaborator(Protocol):
    """Presentation capabilities supplied by the host."""

    def present_document(self, path: Path) -> bool: ...

    def open_notebook(self, path: Path) -> bool: ...

    def run_dependency_check(self) -> None: ...

    def report_error(self, message: str) -> None: ...


@dataclass(frozen=True)
class DispatchFailure:
    """One action that could not be carried out."""

    action: ContentAction
    message: str


class ActionDispatcher:
    """Translate ContentActions into collaborator calls.

    Args:
        workspace_root: Directory that workspace-relative paths resolve against.
        collaborator:   Host implementation of GuideCollaborator.
    """

    def __init__(self, workspace_root: str | Path, collaborator: GuideCollaborator):
        self.workspace_root = Path(workspace_root).resolve()
        self.collaborator = collaborator

    def dispatch(self, actions: Iterable[ContentAction]) -> tuple[DispatchFailure, ...]:
        """Carry out every action independently.

        Returns:
            The failures, in action order; empty when everything succeeded.
        """
        failures: list[DispatchFailure] = []
        for action in actions:
            failure = self._dispatch_one(action)
            if failure is not None:
                self.collaborator.report_error(failure.message)
                failures.append(failure)
        return tuple(failures)

    def resolve_path(self, relative_path: str) -> Path | None:
        """Return the absolute target for relative_path, or None.

        None means the target does not exist, lies outside the workspace,
        or is not a usable path (e.g. contains a NUL byte).
        """
        try:
            target = (self.workspace_root / relative_path).resolve()
            if not target.is_relative_to(self.workspace_root):
                return None
            if not target.is_file():
                return None
        except (OSError, ValueError):
            return None
        return target

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _dispatch_one(self, action: ContentAction) -> DispatchFailure | None:
        if isinstance(action, NoOp):
            return None

        if isinstance(action, RunDependencyCheck):
            try:
                self.collaborator.run_dependency_check()
            except Exception as exc:
                logger.exception("Dependency check could not be started")
                return DispatchFailure(action, f"Dependency check failed to start: {exc}")
            return None

        if isinstance(action, OpenNotebook):
            opener = self.collaborator.open_notebook
            kind = "Notebook"
        elif isinstance(action, OpenDocument):
            opener = self.collaborator.present_document
            kind = "Document"
        else:
            raise TypeError(f"Unknown content action: {action!r}")

        target = self.resolve_path(action.path)
        if target is None:
            return DispatchFailure(action, f"{kind} not found in workspace: {action.path}")

        try:
            opened = opener(target)
        except Exception as exc:
            logger.exception("Collaborator failed to open %s", target)
            return DispatchFailure(action, f"Could not open {action.path}: {exc}")
        if not opened:
            return DispatchFailure(action, f"Could not open {action.path}")
        return None
