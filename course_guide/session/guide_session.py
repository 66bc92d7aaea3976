"""
course_guide/session/guide_session.py

Owns the current OutlineTree for one workspace and runs the
load -> normalize -> select -> resolve -> dispatch flow.

Single-threaded. The tree reference is the only mutable state and is
replaced by one assignment; a tree obtained before a refresh stays valid.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

from course_guide.outline.outline_tree import EMPTY_OUTLINE, Entry, OutlineTree
from course_guide.selection.dispatch_actions import ActionDispatcher, DispatchFailure
from course_guide.selection.resolve_selection import ContentAction, resolve_selection
from course_guide.toc.load_toc_source import (
    LoadedDocument,
    NotFound,
    ParseFailure,
    load_assignments_document,
    load_toc_document,
)
from course_guide.toc.normalize_toc import (
    UnrecognizedSchema,
    merge_assignments,
    normalize_toc,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Outbound events
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class OutlineLoaded:
    tree: OutlineTree


@dataclass(frozen=True)
class OutlineLoadFailed:
    reason: str


@dataclass(frozen=True)
class SelectionResolved:
    entry: Entry
    actions: tuple[ContentAction, ...]


GuideEvent = Union[OutlineLoaded, OutlineLoadFailed, SelectionResolved]
LoadOutcome = Union[OutlineTree, NotFound, ParseFailure, UnrecognizedSchema]


def build_outline(workspace_root: str | Path | None) -> LoadOutcome:
    """Load and normalize the workspace TOC plus its optional assignments.

    Returns:
        OutlineTree on success, or the NotFound / ParseFailure /
        UnrecognizedSchema result describing why no tree was built.
    """
    source = load_toc_document(workspace_root)
    if not isinstance(source, LoadedDocument):
        return source

    result = normalize_toc(source.raw)
    if isinstance(result, UnrecognizedSchema):
        return result

    assignments = load_assignments_document(workspace_root)
    if isinstance(assignments, LoadedDocument):
        result = merge_assignments(result, assignments.raw)
    elif isinstance(assignments, ParseFailure):
        logger.debug(
            "Skipping malformed assignments %s: %s",
            assignments.path,
            assignments.message,
        )
    return result


class GuideSession:
    """Course guide state for one workspace.

    Args:
        workspace_root: Workspace directory, or None when none is open.
        dispatcher:     Dispatcher used for selections; selections only
                        resolve when it is None.
        listener:       Optional callable receiving every GuideEvent.
    """

    def __init__(
        self,
        workspace_root: str | Path | None,
        dispatcher: Optional[ActionDispatcher] = None,
        listener: Optional[Callable[[GuideEvent], None]] = None,
    ):
        self.workspace_root = Path(workspace_root) if workspace_root is not None else None
        self.dispatcher = dispatcher
        self.listener = listener
        self.tree: OutlineTree = EMPTY_OUTLINE
        self.last_outcome: LoadOutcome = EMPTY_OUTLINE

    def refresh(self) -> LoadOutcome:
        """Rebuild the outline from disk and swap it in on success.

        NotFound clears the tree and emits OutlineLoaded for the empty
        outline. ParseFailure and UnrecognizedSchema keep the
        current tree and emit OutlineLoadFailed.
        """
        outcome = build_outline(self.workspace_root)
        self.last_outcome = outcome

        if isinstance(outcome, OutlineTree):
            self.tree = outcome
            logger.info(
                "Loaded %s outline with %d group(s) from %s",
                outcome.shape,
                len(outcome.groups),
                self.workspace_root,
            )
            self._emit(OutlineLoaded(outcome))
        elif isinstance(outcome, NotFound):
            logger.info("No course guide found at %s", outcome.path)
            self.tree = EMPTY_OUTLINE
            self._emit(OutlineLoaded(EMPTY_OUTLINE))
        else:
            reason = describe_outcome(outcome)
            logger.warning("Course guide failed to load: %s", reason)
            self._emit(OutlineLoadFailed(reason))
        return outcome

    def select(
        self, entry: Entry
    ) -> tuple[tuple[ContentAction, ...], tuple[DispatchFailure, ...]]:
        """Resolve entry, emit SelectionResolved, then dispatch.

        Returns:
            (actions, failures). failures is empty when no dispatcher is set.
        """
        actions = resolve_selection(entry)
        self._emit(SelectionResolved(entry, actions))
        if self.dispatcher is None:
            return actions, ()
        return actions, self.dispatcher.dispatch(actions)

    def select_at(self, group_index: int, entry_index: int):
        """Select the entry at a position in the current tree."""
        return self.select(self.tree.entry_at(group_index, entry_index))

    def _emit(self, event: GuideEvent) -> None:
        if self.listener is not None:
            self.listener(event)


def describe_outcome(outcome: LoadOutcome) -> str:
    """Return a short user-facing message for a load outcome."""
    if isinstance(outcome, OutlineTree):
        return f"Loaded {len(outcome.groups)} section(s)."
    if isinstance(outcome, NotFound):
        return f"No {outcome.path.name} found."
    if isinstance(outcome, ParseFailure):
        return f"Could not parse {outcome.path.name}: {outcome.message}"
    return f"Unrecognized TOC layout: {outcome.message}"
