"""
tests/test_resolve_selection.py

Unit tests for course_guide/selection/resolve_selection.py.

Covers notebook-over-document precedence, the independent dependency
check, and informational (no-content) entries. Pure functions only.
"""

import sys
import unittest
from pathlib import Path

# ---------------------------------------------------------------------------
# PYTHONPATH bootstrap
# ---------------------------------------------------------------------------
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from course_guide.outline.outline_tree import Entry  # noqa: E402
from course_guide.selection.resolve_selection import (  # noqa: E402
    NoOp,
    OpenDocument,
    OpenNotebook,
    RunDependencyCheck,
    resolve_selection,
)
from course_guide.toc.normalize_toc import normalize_toc  # noqa: E402


class TestResolveSelection(unittest.TestCase):

    def test_notebook_wins_over_document(self):
        """Both paths present -> OpenNotebook only, never OpenDocument."""
        actions = resolve_selection(Entry(title="E", notebook_path="x", document_path="y"))
        self.assertEqual(actions, (OpenNotebook("x"),))
        self.assertNotIn(OpenDocument("y"), actions)

    def test_document_only(self):
        actions = resolve_selection(Entry(title="E", document_path="y"))
        self.assertEqual(actions, (OpenDocument("y"),))

    def test_document_with_dependency_check(self):
        """Dependency check is added alongside the document, not instead of it."""
        entry = Entry(title="E", document_path="y", requires_dependency_check=True)
        self.assertEqual(resolve_selection(entry), (OpenDocument("y"), RunDependencyCheck()))

    def test_notebook_with_dependency_check(self):
        entry = Entry(title="E", notebook_path="n.ipynb", document_path="d.md",
                      requires_dependency_check=True)
        self.assertEqual(
            resolve_selection(entry), (OpenNotebook("n.ipynb"), RunDependencyCheck())
        )

    def test_no_content_is_noop(self):
        """Neither path and no check -> NoOp, without raising."""
        self.assertEqual(resolve_selection(Entry(title="Read me")), (NoOp(),))

    def test_no_content_with_dependency_check(self):
        entry = Entry(title="Check", requires_dependency_check=True)
        self.assertEqual(resolve_selection(entry), (NoOp(), RunDependencyCheck()))

    def test_missing_paths_are_not_checked(self):
        """Resolution never touches the filesystem."""
        entry = Entry(title="E", document_path="does/not/exist.md")
        self.assertEqual(resolve_selection(entry), (OpenDocument("does/not/exist.md"),))

    def test_resolution_is_deterministic(self):
        entry = Entry(title="E", notebook_path="a.ipynb", requires_dependency_check=True)
        self.assertEqual(resolve_selection(entry), resolve_selection(entry))

    # -- end-to-end scenarios from TOC documents ------------------------------

    def test_flat_setup_scenario(self):
        raw = {"categories": [{"title": "Week 1", "steps": [
            {"title": "Setup", "file": "w1/setup.md", "checkdeps": True},
        ]}]}
        entry = normalize_toc(raw).entry_at(0, 0)
        self.assertEqual(
            list(resolve_selection(entry)),
            [OpenDocument("w1/setup.md"), RunDependencyCheck()],
        )

    def test_nested_intro_scenario(self):
        raw = [{"label": "Module A", "lessons": [{"label": "Intro", "notebook": "a/intro.ipynb"}]}]
        entry = normalize_toc(raw).entry_at(0, 0)
        self.assertEqual(list(resolve_selection(entry)), [OpenNotebook("a/intro.ipynb")])


if __name__ == "__main__":
    unittest.main()
