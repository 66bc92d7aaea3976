"""
ui/theme.py

Shared theme helper for the course guide.
Call apply_guide_theme() immediately after st.set_page_config() to inject
the guide styling and render the header bar.

Tokens:
    accent blue:   #2F6FEB
    dark ink:      #111418
    sidebar gray:  #F1F2F4
    muted gray:    #6B7280
"""

from __future__ import annotations

import html

import streamlit as st

# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------
_ACCENT_BLUE  = "#2F6FEB"
_DARK_INK     = "#111418"
_SIDEBAR_GRAY = "#F1F2F4"
_MUTED_GRAY   = "#6B7280"

# ---------------------------------------------------------------------------
# CSS — injected once per page render.
# Double braces {{ }} produce literal CSS braces in the f-string.
# ---------------------------------------------------------------------------
_CSS = f"""
<style>
.block-container {{
    padding-top: 0.75rem !important;
    padding-bottom: 2rem !important;
    max-width: 900px;
}}

#MainMenu {{ visibility: hidden; }}
footer {{ visibility: hidden; }}

section[data-testid="stSidebar"] > div:first-child {{
    background-color: {_SIDEBAR_GRAY};
    padding-top: 0.75rem;
}}

/* Outline group headers */
.guide-group-title {{
    font-size: 0.75rem;
    font-weight: 700;
    letter-spacing: 1.2px;
    text-transform: uppercase;
    color: {_MUTED_GRAY};
    margin: 0.9rem 0 0.3rem 0;
}}

/* Outline entries render as flat, left-aligned buttons */
section[data-testid="stSidebar"] .stButton > button {{
    justify-content: flex-start;
    text-align: left;
    border: none !important;
    background: transparent;
    font-weight: 700;
}}
section[data-testid="stSidebar"] .stButton > button:hover {{
    background: #E3E6EA;
}}

/* Panel eyebrow above the title */
.guide-eyebrow {{
    font-size: 0.85em;
    font-weight: 700;
    letter-spacing: 1.5px;
    color: {_MUTED_GRAY};
    text-transform: uppercase;
    margin-bottom: 0.4rem;
}}

.stButton > button[kind="primary"] {{
    background-color: {_ACCENT_BLUE} !important;
    color: white !important;
    border: none !important;
    border-radius: 6px !important;
}}
</style>
"""


def apply_guide_theme(
    portal_title: str,
    subtitle: str | None = None,
) -> None:
    """Inject the guide CSS and render the top bar.

    Must be called immediately after st.set_page_config().
    """
    st.markdown(_CSS, unsafe_allow_html=True)

    subtitle_html = (
        f"<div style='color:{_SIDEBAR_GRAY}; font-size:0.85rem; margin-top:0.15rem;'>"
        f"{html.escape(subtitle)}</div>"
        if subtitle else
        ""
    )

    st.markdown(
        f"""
        <div style="
            background: {_DARK_INK};
            border-bottom: 3px solid {_ACCENT_BLUE};
            padding: 0.65rem 1.25rem;
            margin: -0.75rem -1rem 1.0rem -1rem;
            display: flex;
            flex-direction: column;
            line-height: 1.1;
        ">
            <div style="color:white; font-size:1.25rem; font-weight:650;">
                {html.escape(portal_title)}
            </div>
            {subtitle_html}
        </div>
        """,
        unsafe_allow_html=True,
    )


def render_eyebrow(text: str) -> None:
    """Render the small upper-case label above a panel title."""
    st.markdown(
        f"<div class='guide-eyebrow'>{html.escape(text)}</div>",
        unsafe_allow_html=True,
    )


def render_group_title(text: str) -> None:
    """Render an outline group header in the sidebar."""
    st.markdown(
        f"<div class='guide-group-title'>{html.escape(text)}</div>",
        unsafe_allow_html=True,
    )
