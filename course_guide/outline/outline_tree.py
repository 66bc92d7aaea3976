"""
course_guide/outline/outline_tree.py

Canonical, immutable outline model: an ordered sequence of groups, each
holding an ordered sequence of entries.

No file I/O. Order is always source order; nothing here re-sorts.
A refreshed outline is a new OutlineTree, never a patched one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class ContentDescriptor:
    """Content references of a single entry."""

    document_path: str | None = None
    notebook_path: str | None = None
    requires_dependency_check: bool = False

    @property
    def has_content(self) -> bool:
        return self.document_path is not None or self.notebook_path is not None


@dataclass(frozen=True)
class Entry:
    """A single navigable unit (step, lesson or assignment).

    parent_group_title is a display back-reference to the owning group,
    not an ownership edge.
    """

    title: str
    description: str = ""
    document_path: str | None = None
    notebook_path: str | None = None
    requires_dependency_check: bool = False
    parent_group_title: str = ""

    @property
    def content(self) -> ContentDescriptor:
        return ContentDescriptor(
            document_path=self.document_path,
            notebook_path=self.notebook_path,
            requires_dependency_check=self.requires_dependency_check,
        )


@dataclass(frozen=True)
class Group:
    """A titled section of the outline (category or module)."""

    title: str
    description: str = ""
    entries: tuple[Entry, ...] = ()


@dataclass(frozen=True)
class OutlineTree:
    """Read-only view over the ordered groups of a course guide.

    shape records which TOC layout produced the tree ("flat", "nested"),
    or None for the empty tree.
    """

    groups: tuple[Group, ...] = ()
    shape: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.groups

    def group_titles(self) -> list[str]:
        """Return group titles in display order (duplicates kept)."""
        return [group.title for group in self.groups]

    def entries_for(self, group_title: str) -> tuple[Entry, ...]:
        """Return the entries of the first group titled group_title.

        Raises:
            KeyError: If no group carries that title.
        """
        for group in self.groups:
            if group.title == group_title:
                return group.entries
        raise KeyError(group_title)

    def entry_at(self, group_index: int, entry_index: int) -> Entry:
        """Return the entry at the given position.

        Raises:
            IndexError: If either index is out of range.
        """
        if not 0 <= group_index < len(self.groups):
            raise IndexError(f"group index {group_index} out of range")
        entries = self.groups[group_index].entries
        if not 0 <= entry_index < len(entries):
            raise IndexError(
                f"entry index {entry_index} out of range for group "
                f"{self.groups[group_index].title!r}"
            )
        return entries[entry_index]

    def content_descriptor(
        self, group_index: int, entry_index: int
    ) -> ContentDescriptor:
        return self.entry_at(group_index, entry_index).content

    def iter_entries(self) -> Iterator[tuple[int, int, Entry]]:
        """Yield (group_index, entry_index, entry) in display order."""
        for g_idx, group in enumerate(self.groups):
            for e_idx, entry in enumerate(group.entries):
                yield g_idx, e_idx, entry

    def contains_entry(self, entry: Entry) -> bool:
        """True when an equal entry appears anywhere in this tree."""
        return any(candidate == entry for _, _, candidate in self.iter_entries())


EMPTY_OUTLINE = OutlineTree()
