"""
ui/guide_app.py

Course Guide — sidebar outline + single content panel.

Reads <workspace>/.guide/toc.json (and the optional assignments.json).
Set GUIDE_WORKSPACE to point at a course workspace; defaults to the
bundled sample_workspace/.

Run from the repository root:
    streamlit run ui/guide_app.py
"""

import logging
import sys
from pathlib import Path

import streamlit as st

# ---------------------------------------------------------------------------
# Ensure repo root is on sys.path so course_guide.* imports work regardless
# of where Streamlit is launched from.
# ---------------------------------------------------------------------------
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from course_guide.guide_config import get_workspace_root                      # noqa: E402
from course_guide.host.content_panel import ContentPanel, panel_buttons       # noqa: E402
from course_guide.host.panel_collaborator import PanelCollaborator            # noqa: E402
from course_guide.outline.render_outline import outline_rows                  # noqa: E402
from course_guide.selection.dispatch_actions import ActionDispatcher          # noqa: E402
from course_guide.session.guide_session import (                              # noqa: E402
    GuideSession,
    OutlineLoadFailed,
    OutlineLoaded,
    describe_outcome,
)
from course_guide.toc.load_toc_source import NotFound                         # noqa: E402
from ui.theme import apply_guide_theme, render_eyebrow, render_group_title    # noqa: E402


# ---------------------------------------------------------------------------
# Page config — must be the first Streamlit call in the file.
# ---------------------------------------------------------------------------
st.set_page_config(page_title="Course Guide", layout="wide")
apply_guide_theme("Course Guide", "Step-by-step course outline")


# ---------------------------------------------------------------------------
# Session state initialisation — one session, one panel, one dispatcher.
# ---------------------------------------------------------------------------
def _on_guide_event(event) -> None:
    """Forward session events to the panel and keep the load status."""
    st.session_state["guide_collaborator"].handle_event(event)
    if isinstance(event, OutlineLoadFailed):
        st.session_state["guide_load_error"] = event.reason
    elif isinstance(event, OutlineLoaded):
        st.session_state["guide_load_error"] = None
        selected = st.session_state["guide_selected"]
        if selected is not None and not event.tree.contains_entry(selected):
            # the open step is gone from the reloaded outline
            st.session_state["guide_panel"].dispose()
            st.session_state["guide_selected"] = None


if "guide_session" not in st.session_state:
    workspace_root = get_workspace_root()
    panel = ContentPanel()
    collaborator = PanelCollaborator(panel, workspace_root)
    st.session_state["guide_panel"] = panel
    st.session_state["guide_collaborator"] = collaborator
    st.session_state["guide_load_error"] = None
    st.session_state["guide_selected"] = None  # Entry or None
    session = GuideSession(
        workspace_root,
        dispatcher=ActionDispatcher(workspace_root, collaborator),
        listener=_on_guide_event,
    )
    st.session_state["guide_session"] = session
    session.refresh()

session: GuideSession = st.session_state["guide_session"]
panel: ContentPanel = st.session_state["guide_panel"]
collaborator: PanelCollaborator = st.session_state["guide_collaborator"]


# ---------------------------------------------------------------------------
# Sidebar — outline
# ---------------------------------------------------------------------------
with st.sidebar:
    st.title("Course Outline")
    st.caption(str(session.workspace_root))

    if st.button("Refresh", use_container_width=True):
        try:
            session.refresh()
        except Exception:
            logging.exception("Unexpected error refreshing the outline")
            st.error("An unexpected error occurred. See console for details.")

    if st.session_state["guide_load_error"]:
        st.error(st.session_state["guide_load_error"])

    tree = session.tree
    if tree.is_empty:
        if isinstance(session.last_outcome, NotFound):
            st.info(describe_outcome(session.last_outcome))
        else:
            st.info("The outline is empty.")

    for row in outline_rows(tree):
        if not row.selectable:
            render_group_title(row.label)
            continue
        if st.button(
            row.label,
            key=f"outline_{row.key}",
            help=row.description or None,
            use_container_width=True,
        ):
            entry = tree.entry_at(row.group_index, row.entry_index)
            st.session_state["guide_selected"] = entry
            try:
                session.select(entry)
            except Exception:
                logging.exception("Unexpected error opening %s", row.label)
                st.error("An unexpected error occurred. See console for details.")


# ---------------------------------------------------------------------------
# Main area — content panel
# ---------------------------------------------------------------------------
content = panel.content
if content is None:
    st.info("Select a step from the outline to open it here.")
    st.stop()

render_eyebrow(content.eyebrow)
st.title(content.title)

selected_entry = st.session_state["guide_selected"]
buttons = panel_buttons(selected_entry) if selected_entry is not None else ()

columns = st.columns(len(buttons) + 1)
for column, button in zip(columns, buttons):
    with column:
        if st.button(button.label, key=f"panel_{button.label}", use_container_width=True):
            try:
                session.dispatcher.dispatch((button.action,))
            except Exception:
                logging.exception("Unexpected error running %s", button.label)
                st.error("An unexpected error occurred. See console for details.")
with columns[-1]:
    if st.button("Close panel", use_container_width=True):
        panel.dispose()
        st.session_state["guide_selected"] = None
        st.rerun()

for message in content.errors:
    st.error(message)

report = content.check_report
if collaborator.check_in_progress:
    st.info("Dependency check running in the background…")
    if st.button("Refresh status"):
        st.rerun()
elif report is not None:
    if report.ok:
        st.success("Environment ready.")
    else:
        st.error("Dependency check failed.")
    for step in report.steps:
        with st.expander(f"$ {step.command_line}", expanded=not step.ok):
            st.code(step.output or "(no output)", language="text")

st.divider()

if content.kind == "document":
    st.markdown(content.body)
elif content.kind == "notebook":
    st.caption(content.source_path)
    for cell in content.cells:
        if cell.cell_type == "markdown":
            st.markdown(cell.source)
        elif cell.cell_type == "code":
            st.code(cell.source, language="python")
        else:
            st.text(cell.source)
elif content.description:
    st.markdown(content.description)
else:
    st.caption("No content for this step.")
