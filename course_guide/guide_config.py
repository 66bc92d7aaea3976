"""
course_guide/guide_config.py

Workspace locations and dependency-check settings for the course guide.

Pure constants and helpers only. Environment overrides:
    GUIDE_WORKSPACE         workspace root holding .guide/toc.json
    GUIDE_DEPCHECK_TIMEOUT  per-command timeout in seconds
"""

from __future__ import annotations

import os
from pathlib import Path

# Repo root: course_guide/ -> repo root
_REPO_ROOT: Path = Path(__file__).resolve().parents[1]

# ---------------------------------------------------------------------------
# TOC documents (workspace-relative)
# ---------------------------------------------------------------------------
TOC_RELATIVE_PATH: str = ".guide/toc.json"
ASSIGNMENTS_RELATIVE_PATH: str = ".guide/assignments.json"
ASSIGNMENTS_FALLBACK_TITLE: str = "Assignments"

# Bundled demo content used when GUIDE_WORKSPACE is not set.
SAMPLE_WORKSPACE: Path = _REPO_ROOT / "sample_workspace"

# ---------------------------------------------------------------------------
# Dependency check: fixed argv lists, never built from TOC text.
# ---------------------------------------------------------------------------
DEPENDENCY_CHECK_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("uv", "sync"),
    (
        "uv", "run", "python", "-c",
        "import leafmap; print('OpenGeos Stack Ready!')",
    ),
)
DEFAULT_DEPCHECK_TIMEOUT_S: float = 600.0


def get_workspace_root() -> Path:
    """Return the workspace root the guide should read from.

    Uses GUIDE_WORKSPACE when set to a non-blank value; otherwise the
    bundled sample workspace.
    """
    configured = os.environ.get("GUIDE_WORKSPACE", "").strip()
    if configured:
        return Path(configured).expanduser().resolve()
    return SAMPLE_WORKSPACE


def get_depcheck_timeout() -> float:
    """Return the per-command dependency-check timeout in seconds.

    Raises:
        ValueError: If GUIDE_DEPCHECK_TIMEOUT is set but not a positive number.
    """
    raw = os.environ.get("GUIDE_DEPCHECK_TIMEOUT", "").strip()
    if not raw:
        return DEFAULT_DEPCHECK_TIMEOUT_S
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(
            f"GUIDE_DEPCHECK_TIMEOUT must be a number, got {raw!r}"
        ) from None
    if value <= 0:
        raise ValueError(
            f"GUIDE_DEPCHECK_TIMEOUT must be positive, got {value}"
        )
    return value
