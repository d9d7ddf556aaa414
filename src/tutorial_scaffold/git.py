"""Feature branch creation for new tutorials."""

import logging
import pathlib
import subprocess

from .console import Reporter

logger = logging.getLogger(__name__)


def branch_name(slug: str) -> str:
    return f"feat/tutorial-{slug}"


def create_git_branch(slug: str, cwd: pathlib.Path, reporter: Reporter) -> bool:
    """Check out ``feat/tutorial-<slug>``. Failure only produces a warning."""
    branch = branch_name(slug)
    try:
        result = subprocess.run(
            ["git", "checkout", "-b", branch],
            cwd=cwd,
            capture_output=True,
            text=True,
        )
    except OSError as e:
        logger.debug(f"git could not be started: {e}")
        result = None

    if result is not None and result.returncode == 0:
        reporter.success(f"Created branch: {branch}")
        return True

    if result is not None and result.stderr:
        logger.debug(result.stderr.strip())
    reporter.error("Failed to create git branch")
    reporter.warning("You may already be on a feature branch. Continue anyway.")
    return False
