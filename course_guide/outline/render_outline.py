"""
course_guide/outline/render_outline.py

Flattens an OutlineTree into display rows for a sidebar or terminal.
Pure function; rows carry plain text only (no markup escaping here).
"""

from __future__ import annotations

from dataclasses import dataclass

from course_guide.outline.outline_tree import OutlineTree

ENTRY_BULLET = "●"


@dataclass(frozen=True)
class OutlineRow:
    """One rendered line of the outline.

    Group header rows have entry_index None and are not selectable.
    """

    kind: str  # "group" | "entry"
    label: str
    description: str
    group_index: int
    entry_index: int | None = None

    @property
    def selectable(self) -> bool:
        return self.kind == "entry"

    @property
    def key(self) -> str:
        if self.entry_index is None:
            return f"g{self.group_index}"
        return f"g{self.group_index}:e{self.entry_index}"


def outline_rows(tree: OutlineTree) -> list[OutlineRow]:
    """Return header and entry rows in display order."""
    rows: list[OutlineRow] = []
    for g_idx, group in enumerate(tree.groups):
        rows.append(
            OutlineRow(
                kind="group",
                label=group.title.upper(),
                description=group.description,
                group_index=g_idx,
            )
        )
        for e_idx, entry in enumerate(group.entries):
            rows.append(
                OutlineRow(
                    kind="entry",
                    label=f"{ENTRY_BULLET} {entry.title}",
                    description=entry.description,
                    group_index=g_idx,
                    entry_index=e_idx,
                )
            )
    return rows


def format_outline(tree: OutlineTree) -> str:
    """Render the outline as indented plain text."""
    if tree.is_empty:
        return "(empty outline)"
    lines = []
    for row in outline_rows(tree):
        indent = "  " if row.selectable else ""
        line = f"{indent}{row.label}"
        if row.description:
            line += f" — {row.description}"
        lines.append(line)
    return "\n".join(lines)


if __name__ == "__main__":
    from course_guide.guide_config import get_workspace_root
    from course_guide.session.guide_session import GuideSession, describe_outcome

    session = GuideSession(get_workspace_root())
    outcome = session.refresh()
    print(describe_outcome(outcome))
    print(format_outline(session.tree))
