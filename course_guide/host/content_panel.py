"""
course_guide/host/content_panel.py

The single reusable content panel: created on first use, its content
replaced on later selections, disposed on close.

The host owns exactly one ContentPanel per session and passes it to the
collaborator; nothing here is module-level state.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from course_guide.host.run_dependency_check import DependencyCheckReport
from course_guide.outline.outline_tree import Entry
from course_guide.selection.resolve_selection import (
    ContentAction,
    OpenDocument,
    OpenNotebook,
    RunDependencyCheck,
)

DEFAULT_EYEBROW = "MODULE CONTENT"


@dataclass(frozen=True)
class NotebookCell:
    cell_type: str  # "markdown" | "code" | "raw"
    source: str


@dataclass
class PanelContent:
    """What the panel currently shows for one selection."""

    eyebrow: str
    title: str
    description: str = ""
    kind: str = "info"  # "info" | "document" | "notebook"
    source_path: str | None = None
    body: str = ""
    cells: tuple[NotebookCell, ...] = ()
    check_report: DependencyCheckReport | None = None
    errors: list[str] = field(default_factory=list)

    @classmethod
    def for_entry(cls, entry: Entry) -> "PanelContent":
        eyebrow = entry.parent_group_title.upper() if entry.parent_group_title else DEFAULT_EYEBROW
        return cls(eyebrow=eyebrow, title=entry.title, description=entry.description)


@dataclass(frozen=True)
class PanelButton:
    """A panel action button: its label and the action it dispatches."""

    label: str
    action: ContentAction


def panel_buttons(entry: Entry) -> tuple[PanelButton, ...]:
    """Buttons shown under an entry's panel, in display order.

    Selecting an entry with a notebook opens the notebook, so an entry
    that also has a document gets a notes button to reach it.
    """
    buttons = []
    if entry.requires_dependency_check:
        buttons.append(PanelButton("Check Dependencies", RunDependencyCheck()))
    if entry.notebook_path:
        buttons.append(PanelButton("Open Practical Notebook", OpenNotebook(entry.notebook_path)))
        if entry.document_path:
            buttons.append(PanelButton("Show Lesson Notes", OpenDocument(entry.document_path)))
    return tuple(buttons)


class ContentPanel:
    """Single-instance panel handle."""

    def __init__(self) -> None:
        self._content: PanelContent | None = None
        self.times_created = 0

    @property
    def is_open(self) -> bool:
        return self._content is not None

    @property
    def content(self) -> PanelContent | None:
        return self._content

    def show(self, content: PanelContent) -> bool:
        """Display content, creating the panel if it is closed.

        Returns:
            True when the panel was created by this call, False when an
            open panel had its content replaced.
        """
        created = self._content is None
        if created:
            self.times_created += 1
        self._content = content
        return created

    def require_content(self) -> PanelContent:
        """Return the current content, opening a blank panel if needed."""
        if self._content is None:
            self.show(PanelContent(eyebrow=DEFAULT_EYEBROW, title=""))
        return self._content

    def dispose(self) -> None:
        self._content = None
