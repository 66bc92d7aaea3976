"""
course_guide/host/panel_collaborator.py

GuideCollaborator implementation that fills a ContentPanel.

The host UI renders whatever the panel holds. Documents are read as
markdown text; notebooks are parsed from their .ipynb JSON into cells.
"""

from __future__ import annotations

import json
import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from pathlib import Path
from typing import Callable

from course_guide.host.content_panel import ContentPanel, NotebookCell, PanelContent
from course_guide.host.run_dependency_check import (
    DependencyCheckReport,
    run_dependency_check,
)
from course_guide.session.guide_session import GuideEvent, SelectionResolved

logger = logging.getLogger(__name__)


class PanelCollaborator:
    """Route guide actions into a single ContentPanel.

    Args:
        panel:          The session's ContentPanel handle.
        workspace_root: Working directory for the dependency check.
        check_runner:   Callable(workspace_root) -> DependencyCheckReport.
        executor:       Runs the dependency check off the caller's thread;
                        defaults to a single-worker pool.
    """

    def __init__(
        self,
        panel: ContentPanel,
        workspace_root: str | Path,
        check_runner: Callable[[Path], DependencyCheckReport] = run_dependency_check,
        executor: Executor | None = None,
    ):
        self.panel = panel
        self.workspace_root = Path(workspace_root)
        self.check_runner = check_runner
        self.executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="depcheck"
        )
        self.pending_check: Future | None = None

    @property
    def check_in_progress(self) -> bool:
        return self.pending_check is not None and not self.pending_check.done()

    # -- event listener ------------------------------------------------------

    def handle_event(self, event: GuideEvent) -> None:
        """Open the panel on the selected entry before any action runs."""
        if isinstance(event, SelectionResolved):
            self.panel.show(PanelContent.for_entry(event.entry))

    # -- GuideCollaborator ---------------------------------------------------

    def present_document(self, path: Path) -> bool:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read document %s: %s", path, exc)
            return False

        content = self.panel.require_content()
        content.kind = "document"
        content.source_path = str(path)
        content.body = text
        content.cells = ()
        return True

    def open_notebook(self, path: Path) -> bool:
        try:
            cells = load_notebook_cells(path)
        except (OSError, ValueError) as exc:
            logger.warning("Could not open notebook %s: %s", path, exc)
            return False

        content = self.panel.require_content()
        content.kind = "notebook"
        content.source_path = str(path)
        content.body = ""
        content.cells = cells
        return True

    def run_dependency_check(self) -> None:
        """Start the check in the background and return immediately.

        The report lands on the panel content that was showing when the
        check started. A second request while one is running is ignored.
        """
        if self.check_in_progress:
            logger.info("Dependency check already running; request ignored")
            return
        content = self.panel.require_content()
        content.check_report = None
        self.pending_check = self.executor.submit(self._run_check, content)

    def shutdown(self, wait: bool = True) -> None:
        self.executor.shutdown(wait=wait)

    def _run_check(self, content: PanelContent) -> None:
        try:
            content.check_report = self.check_runner(self.workspace_root)
        except Exception as exc:
            logger.exception("Dependency check crashed")
            content.errors.append(f"Dependency check failed: {exc}")

    def report_error(self, message: str) -> None:
        self.panel.require_content().errors.append(message)


def load_notebook_cells(path: Path) -> tuple[NotebookCell, ...]:
    """Parse an .ipynb file into its cells, in order.

    Raises:
        ValueError: If the file is not JSON or has no 'cells' list.
        OSError:    If the file cannot be read.
    """
    with path.open(encoding="utf-8") as fh:
        raw = json.load(fh)  # JSONDecodeError is a ValueError

    cells_raw = raw.get("cells") if isinstance(raw, dict) else None
    if not isinstance(cells_raw, list):
        raise ValueError(f"{path.name}: notebook has no 'cells' list")

    cells = []
    for cell in cells_raw:
        if not isinstance(cell, dict):
            continue
        source = cell.get("source", "")
        if isinstance(source, list):
            source = "".join(str(part) for part in source)
        cells.append(
            NotebookCell(
                cell_type=str(cell.get("cell_type", "raw")),
                source=str(source),
            )
        )
    return tuple(cells)
