"""
course_guide/host/run_dependency_check.py

Runs the workspace environment check (uv sync + import probe) and
captures each step's output for display.

Commands are fixed argv lists from guide_config and run without a shell.
A missing executable or a timeout is recorded as a failed step.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence

from course_guide.guide_config import DEPENDENCY_CHECK_COMMANDS, get_depcheck_timeout

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckStep:
    argv: tuple[str, ...]
    returncode: int | None  # None when the command never completed
    output: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def command_line(self) -> str:
        return " ".join(self.argv)


@dataclass(frozen=True)
class DependencyCheckReport:
    steps: tuple[CheckStep, ...]

    @property
    def ok(self) -> bool:
        return bool(self.steps) and all(step.ok for step in self.steps)


def run_dependency_check(
    workspace_root: str | Path,
    commands: Sequence[Sequence[str]] = DEPENDENCY_CHECK_COMMANDS,
    timeout: float | None = None,
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
) -> DependencyCheckReport:
    """Run each command in workspace_root, stopping at the first failure.

    Args:
        workspace_root: Working directory for every command.
        commands:       argv sequences, run in order.
        timeout:        Per-command timeout in seconds; defaults to
                        get_depcheck_timeout().
        runner:         subprocess.run-compatible callable.

    Returns:
        DependencyCheckReport with one CheckStep per command attempted.
    """
    if timeout is None:
        timeout = get_depcheck_timeout()

    steps: list[CheckStep] = []
    for argv in commands:
        argv = tuple(argv)
        logger.info("Dependency check: %s", " ".join(argv))
        try:
            completed = runner(
                list(argv),
                cwd=str(workspace_root),
                capture_output=True,
                text=True,
                timeout=timeout,
                check=False,
            )
        except FileNotFoundError:
            step = CheckStep(argv, None, f"Command not found: {argv[0]}")
        except subprocess.TimeoutExpired:
            step = CheckStep(argv, None, f"Timed out after {timeout:g}s")
        else:
            output = (completed.stdout or "") + (completed.stderr or "")
            step = CheckStep(argv, completed.returncode, output.strip())

        steps.append(step)
        if not step.ok:
            logger.warning("Dependency check step failed: %s", step.command_line)
            break

    return DependencyCheckReport(steps=tuple(steps))
