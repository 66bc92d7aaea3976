"""
tests/test_guide_session.py

Unit tests for course_guide/session/guide_session.py.

Four test groups:
  1. Initial load — sample workspace, missing guide, malformed JSON.
  2. Refresh — idempotent reload, failed refresh keeps the previous tree,
     old tree untouched after a swap.
  3. Selection — SelectionResolved event, dispatch through the dispatcher.
  4. describe_outcome — user-facing load messages.
"""

import json
import sys
import tempfile
import unittest
from pathlib import Path

# ---------------------------------------------------------------------------
# PYTHONPATH bootstrap
# ---------------------------------------------------------------------------
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from course_guide.guide_config import SAMPLE_WORKSPACE  # noqa: E402
from course_guide.outline.outline_tree import EMPTY_OUTLINE, OutlineTree  # noqa: E402
from course_guide.selection.dispatch_actions import ActionDispatcher  # noqa: E402
from course_guide.selection.resolve_selection import (  # noqa: E402
    NoOp,
    OpenDocument,
    RunDependencyCheck,
)
from course_guide.session.guide_session import (  # noqa: E402
    GuideSession,
    OutlineLoaded,
    OutlineLoadFailed,
    SelectionResolved,
    build_outline,
    describe_outcome,
)
from course_guide.toc.load_toc_source import NotFound, ParseFailure  # noqa: E402
from course_guide.toc.normalize_toc import UnrecognizedSchema  # noqa: E402

_WEEK1_TOC = {"categories": [{"title": "Week 1", "steps": [
    {"title": "Setup", "file": "w1/setup.md", "checkdeps": True},
    {"title": "Notes"},
]}]}


class _TempWorkspace(unittest.TestCase):

    def setUp(self):
        self._td = tempfile.TemporaryDirectory()
        self.root = Path(self._td.name)
        (self.root / ".guide").mkdir()
        self.events = []

    def tearDown(self):
        self._td.cleanup()

    def write_toc(self, content, name="toc.json"):
        text = content if isinstance(content, str) else json.dumps(content)
        (self.root / ".guide" / name).write_text(text, encoding="utf-8")

    def make_session(self, dispatcher=None):
        return GuideSession(self.root, dispatcher=dispatcher, listener=self.events.append)


# ---------------------------------------------------------------------------
# 1. Initial load
# ---------------------------------------------------------------------------

class TestGuideSessionInitialLoad(_TempWorkspace):

    def test_sample_workspace(self):
        """The bundled guide loads with the assignments group last."""
        session = GuideSession(SAMPLE_WORKSPACE)
        outcome = session.refresh()
        self.assertIsInstance(outcome, OutlineTree)
        self.assertEqual(session.tree.group_titles(), ["Week 1", "Week 2", "Assignments"])
        self.assertEqual(session.tree.entry_at(2, 0).title, "Assignment 1")

    def test_tree_empty_before_refresh(self):
        self.assertIs(self.make_session().tree, EMPTY_OUTLINE)

    def test_missing_toc_is_empty_not_error(self):
        """NotFound leaves an empty tree and emits OutlineLoaded, not a failure."""
        session = self.make_session()
        outcome = session.refresh()
        self.assertIsInstance(outcome, NotFound)
        self.assertTrue(session.tree.is_empty)
        self.assertEqual(self.events, [OutlineLoaded(EMPTY_OUTLINE)])

    def test_no_workspace_open(self):
        session = GuideSession(None)
        self.assertIsInstance(session.refresh(), NotFound)
        self.assertTrue(session.tree.is_empty)

    def test_malformed_first_load(self):
        """ParseFailure on first load: empty tree, OutlineLoadFailed with message."""
        self.write_toc('{"categories": [}')
        session = self.make_session()
        outcome = session.refresh()
        self.assertIsInstance(outcome, ParseFailure)
        self.assertIs(session.tree, EMPTY_OUTLINE)
        self.assertEqual(len(self.events), 1)
        self.assertIsInstance(self.events[0], OutlineLoadFailed)
        self.assertIn(outcome.message, self.events[0].reason)

    def test_unrecognized_first_load(self):
        self.write_toc({"weeks": []})
        session = self.make_session()
        self.assertIsInstance(session.refresh(), UnrecognizedSchema)
        self.assertIs(session.tree, EMPTY_OUTLINE)
        self.assertIsInstance(self.events[0], OutlineLoadFailed)

    def test_malformed_assignments_silently_skipped(self):
        self.write_toc(_WEEK1_TOC)
        self.write_toc("{not json", name="assignments.json")
        tree = build_outline(self.root)
        self.assertEqual(tree.group_titles(), ["Week 1"])

    def test_unrecognized_assignments_silently_skipped(self):
        self.write_toc(_WEEK1_TOC)
        self.write_toc({"title": "HW"}, name="assignments.json")
        self.assertEqual(build_outline(self.root).group_titles(), ["Week 1"])


# ---------------------------------------------------------------------------
# 2. Refresh
# ---------------------------------------------------------------------------

class TestGuideSessionRefresh(_TempWorkspace):

    def test_idempotent_refresh(self):
        """Two loads of an unchanged document give element-wise equal trees."""
        self.write_toc(_WEEK1_TOC)
        session = self.make_session()
        session.refresh()
        first = session.tree
        session.refresh()
        second = session.tree
        self.assertEqual(first, second)
        self.assertIsNot(first, second)

    def test_failed_refresh_keeps_previous_tree(self):
        """Malformed JSON on refresh keeps the prior valid tree."""
        self.write_toc(_WEEK1_TOC)
        session = self.make_session()
        session.refresh()
        previous = session.tree

        self.write_toc('{"categories": ')
        outcome = session.refresh()

        self.assertIsInstance(outcome, ParseFailure)
        self.assertIs(session.tree, previous)
        self.assertIsInstance(self.events[-1], OutlineLoadFailed)

    def test_deleted_toc_clears_tree(self):
        """Removing toc.json empties the outline instead of keeping stale entries."""
        self.write_toc(_WEEK1_TOC)
        session = self.make_session()
        session.refresh()
        (self.root / ".guide" / "toc.json").unlink()
        self.assertIsInstance(session.refresh(), NotFound)
        self.assertIs(session.tree, EMPTY_OUTLINE)
        self.assertEqual(self.events[-1], OutlineLoaded(EMPTY_OUTLINE))

    def test_refresh_swaps_whole_tree(self):
        """A reader's old tree is unchanged after a successful refresh."""
        self.write_toc(_WEEK1_TOC)
        session = self.make_session()
        session.refresh()
        held = session.tree

        self.write_toc({"categories": [{"title": "Week 2", "steps": []}]})
        session.refresh()

        self.assertEqual(held.group_titles(), ["Week 1"])
        self.assertEqual(session.tree.group_titles(), ["Week 2"])
        self.assertEqual(self.events[-1], OutlineLoaded(session.tree))


# ---------------------------------------------------------------------------
# 3. Selection
# ---------------------------------------------------------------------------

class _Collaborator:

    def __init__(self):
        self.calls = []
        self.errors = []

    def present_document(self, path):
        self.calls.append(("document", path.name))
        return True

    def open_notebook(self, path):
        self.calls.append(("notebook", path.name))
        return True

    def run_dependency_check(self):
        self.calls.append(("check", None))

    def report_error(self, message):
        self.errors.append(message)


class TestGuideSessionSelection(_TempWorkspace):

    def setUp(self):
        super().setUp()
        self.write_toc(_WEEK1_TOC)
        (self.root / "w1").mkdir()
        (self.root / "w1" / "setup.md").write_text("# Setup", encoding="utf-8")
        self.collab = _Collaborator()
        self.session = self.make_session(ActionDispatcher(self.root, self.collab))
        self.session.refresh()

    def test_select_emits_event_and_dispatches(self):
        actions, failures = self.session.select_at(0, 0)
        self.assertEqual(actions, (OpenDocument("w1/setup.md"), RunDependencyCheck()))
        self.assertEqual(failures, ())
        self.assertEqual(
            self.events[-1],
            SelectionResolved(self.session.tree.entry_at(0, 0), actions),
        )
        self.assertEqual(self.collab.calls, [("document", "setup.md"), ("check", None)])

    def test_select_informational_entry(self):
        actions, failures = self.session.select_at(0, 1)
        self.assertEqual(actions, (NoOp(),))
        self.assertEqual(failures, ())
        self.assertEqual(self.collab.calls, [])

    def test_missing_file_does_not_touch_outline(self):
        (self.root / "w1" / "setup.md").unlink()
        tree_before = self.session.tree
        _, failures = self.session.select_at(0, 0)
        self.assertEqual(len(failures), 1)
        self.assertEqual(len(self.collab.errors), 1)
        self.assertIs(self.session.tree, tree_before)
        self.assertEqual(self.collab.calls, [("check", None)])

    def test_select_without_dispatcher_only_resolves(self):
        session = GuideSession(self.root)
        session.refresh()
        actions, failures = session.select_at(0, 0)
        self.assertEqual(len(actions), 2)
        self.assertEqual(failures, ())

    def test_select_at_out_of_range(self):
        with self.assertRaises(IndexError):
            self.session.select_at(3, 0)


# ---------------------------------------------------------------------------
# 4. describe_outcome
# ---------------------------------------------------------------------------

class TestDescribeOutcome(unittest.TestCase):

    def test_messages(self):
        self.assertIn("0 section", describe_outcome(EMPTY_OUTLINE))
        self.assertEqual(
            describe_outcome(NotFound(Path("/ws/.guide/toc.json"))), "No toc.json found."
        )
        self.assertIn(
            "Expecting value",
            describe_outcome(ParseFailure(Path("toc.json"), "Expecting value: line 1")),
        )
        self.assertIn("layout", describe_outcome(UnrecognizedSchema("bad")))


if __name__ == "__main__":
    unittest.main()
