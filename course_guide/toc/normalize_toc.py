"""
course_guide/toc/normalize_toc.py

Converts a parsed TOC document into the canonical OutlineTree.

Two layouts are recognised, detected structurally (never by a version
field):

    flat    {"categories": [{"title", "description"?, "steps": [...]}]}
            step: title, description?, file?, notebook?, checkdeps?
    nested  [{"label", "description"?, "markdown"?, "lessons": [...]}]
            lesson: label, description?, markdown?, notebook?, actions?

Anything else is UnrecognizedSchema. No file I/O. TOC text is treated as
data only and is never placed into a command.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Union

from course_guide.guide_config import ASSIGNMENTS_FALLBACK_TITLE
from course_guide.outline.outline_tree import Entry, Group, OutlineTree

logger = logging.getLogger(__name__)

SHAPE_FLAT = "flat"
SHAPE_NESTED = "nested"

# Title of the implicit entry built from a nested module's own markdown.
MODULE_INTRO_TITLE = "Overview"

# Action names in a nested lesson's "actions" list that request a
# dependency check. Matched exactly against a string item or the
# "command"/"type" key of an object item.
_DEPCHECK_ACTIONS: frozenset[str] = frozenset({"checkDependencies", "checkdeps"})


@dataclass(frozen=True)
class UnrecognizedSchema:
    """Valid JSON that matches neither TOC layout."""

    message: str


NormalizeResult = Union[OutlineTree, UnrecognizedSchema]


class TocSchemaError(ValueError):
    """Raised internally when a document breaks its layout's structure."""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def normalize_toc(raw: Any) -> NormalizeResult:
    """Build an OutlineTree from a parsed TOC document.

    Args:
        raw: The JSON value produced by the TOC source.

    Returns:
        OutlineTree on success; UnrecognizedSchema when raw matches neither
        layout or breaks the structure of the layout it matches. A
        partially-built tree is never returned.
    """
    try:
        return _build_tree(raw)
    except TocSchemaError as exc:
        return UnrecognizedSchema(message=str(exc))


def merge_assignments(tree: OutlineTree, raw_assignments: Any) -> OutlineTree:
    """Return tree with the assignments document appended as one group.

    The trailing group is titled from the document's own "title" field
    when it has one, else ASSIGNMENTS_FALLBACK_TITLE, and holds every
    entry of the document in order. A document that does not normalize
    is skipped and tree is returned unchanged.
    """
    result = normalize_toc(raw_assignments)
    if isinstance(result, UnrecognizedSchema):
        logger.debug("Ignoring assignments document: %s", result.message)
        return tree

    title = ASSIGNMENTS_FALLBACK_TITLE
    if isinstance(raw_assignments, dict):
        doc_title = raw_assignments.get("title")
        if isinstance(doc_title, str) and doc_title.strip():
            title = doc_title

    entries = tuple(
        replace(entry, parent_group_title=title)
        for _, _, entry in result.iter_entries()
    )
    group = Group(title=title, entries=entries)
    return OutlineTree(groups=tree.groups + (group,), shape=tree.shape)


def detect_shape(raw: Any) -> str | None:
    """Return SHAPE_FLAT, SHAPE_NESTED, or None for an unknown layout."""
    if isinstance(raw, dict) and "categories" in raw:
        return SHAPE_FLAT
    if isinstance(raw, list):
        return SHAPE_NESTED
    return None


# ---------------------------------------------------------------------------
# Internal helpers (importable for unit tests)
# ---------------------------------------------------------------------------

def _build_tree(raw: Any) -> OutlineTree:
    shape = detect_shape(raw)
    if shape == SHAPE_FLAT:
        groups = _flat_groups(raw["categories"])
    elif shape == SHAPE_NESTED:
        groups = _nested_groups(raw)
    else:
        if isinstance(raw, dict):
            raise TocSchemaError(
                "TOC object has no 'categories' key and is not a list of modules"
            )
        raise TocSchemaError(
            f"TOC top-level must be an object or a list, got {type(raw).__name__}"
        )
    return OutlineTree(groups=tuple(groups), shape=shape)


def _flat_groups(categories: Any) -> list[Group]:
    if not isinstance(categories, list):
        raise TocSchemaError(
            f"'categories' must be a list, got {type(categories).__name__}"
        )

    groups: list[Group] = []
    for c_idx, category in enumerate(categories):
        loc = f"categories[{c_idx}]"
        _require_dict(category, loc)
        title = _require_title(category, "title", loc)

        steps = category.get("steps")
        if steps is None:
            steps = []
        if not isinstance(steps, list):
            raise TocSchemaError(
                f"{loc}: 'steps' must be a list, got {type(steps).__name__}"
            )

        entries = []
        for s_idx, step in enumerate(steps):
            step_loc = f"{loc}.steps[{s_idx}]"
            _require_dict(step, step_loc)
            entries.append(
                Entry(
                    title=_require_title(step, "title", step_loc),
                    description=_optional_text(step, "description", step_loc),
                    document_path=_optional_path(step, "file", step_loc),
                    notebook_path=_optional_path(step, "notebook", step_loc),
                    requires_dependency_check=_optional_flag(
                        step, "checkdeps", step_loc
                    ),
                    parent_group_title=title,
                )
            )

        groups.append(
            Group(
                title=title,
                description=_optional_text(category, "description", loc),
                entries=tuple(entries),
            )
        )
    return groups


def _nested_groups(modules: list) -> list[Group]:
    groups: list[Group] = []
    for m_idx, module in enumerate(modules):
        loc = f"[{m_idx}]"
        _require_dict(module, loc)
        title = _require_title(module, "label", loc)
        description = _optional_text(module, "description", loc)

        entries = []
        intro_path = _optional_path(module, "markdown", loc)
        if intro_path is not None:
            entries.append(
                Entry(
                    title=MODULE_INTRO_TITLE,
                    description=description,
                    document_path=intro_path,
                    parent_group_title=title,
                )
            )

        lessons = module.get("lessons")
        if lessons is None:
            lessons = []
        if not isinstance(lessons, list):
            raise TocSchemaError(
                f"{loc}: 'lessons' must be a list, got {type(lessons).__name__}"
            )

        for l_idx, lesson in enumerate(lessons):
            lesson_loc = f"{loc}.lessons[{l_idx}]"
            _require_dict(lesson, lesson_loc)
            entries.append(
                Entry(
                    title=_require_title(lesson, "label", lesson_loc),
                    description=_optional_text(lesson, "description", lesson_loc),
                    document_path=_optional_path(lesson, "markdown", lesson_loc),
                    notebook_path=_optional_path(lesson, "notebook", lesson_loc),
                    requires_dependency_check=_has_depcheck_action(
                        lesson, lesson_loc
                    ),
                    parent_group_title=title,
                )
            )

        groups.append(
            Group(title=title, description=description, entries=tuple(entries))
        )
    return groups


def _require_dict(value: Any, loc: str) -> None:
    if not isinstance(value, dict):
        raise TocSchemaError(
            f"{loc} must be an object, got {type(value).__name__}"
        )


def _require_title(obj: dict, field: str, loc: str) -> str:
    value = obj.get(field)
    if not isinstance(value, str) or not value.strip():
        raise TocSchemaError(
            f"{loc}: missing or invalid '{field}' (must be a non-empty string)"
        )
    return value


def _optional_text(obj: dict, field: str, loc: str) -> str:
    """Return a text field, or "" when absent or null."""
    value = obj.get(field)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TocSchemaError(
            f"{loc}: '{field}' must be a string, got {type(value).__name__}"
        )
    return value


def _optional_path(obj: dict, field: str, loc: str) -> str | None:
    """Return a workspace-relative path, or None when absent or empty."""
    value = obj.get(field)
    if value is None:
        return None
    if not isinstance(value, str):
        raise TocSchemaError(
            f"{loc}: '{field}' must be a string path, got {type(value).__name__}"
        )
    return value.strip() or None


def _optional_flag(obj: dict, field: str, loc: str) -> bool:
    value = obj.get(field)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise TocSchemaError(
            f"{loc}: '{field}' must be a boolean, got {type(value).__name__}"
        )
    return value


def _has_depcheck_action(lesson: dict, loc: str) -> bool:
    """Validate every action item, even after the check action is found."""
    actions = lesson.get("actions")
    if actions is None:
        return False
    if not isinstance(actions, list):
        raise TocSchemaError(
            f"{loc}: 'actions' must be a list, got {type(actions).__name__}"
        )

    found = False
    for a_idx, action in enumerate(actions):
        if isinstance(action, str):
            name = action
        elif isinstance(action, dict):
            name = action.get("command", action.get("type"))
        else:
            raise TocSchemaError(
                f"{loc}.actions[{a_idx}] must be a string or an object, "
                f"got {type(action).__name__}"
            )
        if isinstance(name, str) and name in _DEPCHECK_ACTIONS:
            found = True
    return found
