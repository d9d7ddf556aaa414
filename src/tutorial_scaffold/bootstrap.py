"""Test environment setup through the package manager."""

import logging
import pathlib
import subprocess
from typing import List

from .console import Reporter
from .errors import ScaffoldError
from .templates import generate_pyproject
from .validator import slug_to_title

logger = logging.getLogger(__name__)

PACKAGE_MANAGER = "uv"
DEV_DEPENDENCIES = ["pytest", "pytest-asyncio"]
DEPENDENCIES = ["websockets"]


def run_package_manager(args: List[str], cwd: pathlib.Path) -> None:
    command = [PACKAGE_MANAGER, *args]
    logger.debug(f"Running {' '.join(command)} in {cwd}")
    try:
        result = subprocess.run(command, cwd=cwd)
    except FileNotFoundError as e:
        raise ScaffoldError(
            f"{PACKAGE_MANAGER} not found",
            hint="Install it from https://docs.astral.sh/uv/ and re-run, or pass --skip-install.",
        ) from e
    if result.returncode != 0:
        raise ScaffoldError(
            f"Command failed with exit code {result.returncode}: {' '.join(command)}"
        )


def create_project_file(tutorial_dir: pathlib.Path, slug: str) -> bool:
    """Write pyproject.toml unless one exists. Returns True if written."""
    path = tutorial_dir / "pyproject.toml"
    if path.exists():
        return False
    path.write_text(generate_pyproject(slug, slug_to_title(slug)), encoding="utf-8")
    return True


def install_dev_dependencies(tutorial_dir: pathlib.Path, reporter: Reporter) -> None:
    reporter.info(f"Installing dev dependencies ({', '.join(DEV_DEPENDENCIES)})...")
    run_package_manager(["add", "--dev", *DEV_DEPENDENCIES], tutorial_dir)


def install_dependencies(tutorial_dir: pathlib.Path, reporter: Reporter) -> None:
    reporter.info(f"Installing dependencies ({', '.join(DEPENDENCIES)})...")
    run_package_manager(["add", *DEPENDENCIES], tutorial_dir)


def bootstrap_tests(
    tutorial_dir: pathlib.Path, slug: str, reporter: Reporter, install: bool = True
) -> None:
    """Create the project file and install the fixed test dependencies."""
    if not tutorial_dir.is_dir():
        raise ScaffoldError(f"Tutorial directory not found: {tutorial_dir}")

    create_project_file(tutorial_dir, slug)

    if install:
        install_dev_dependencies(tutorial_dir, reporter)
        install_dependencies(tutorial_dir, reporter)
    else:
        reporter.warning(
            f"Skipping dependency install; run `{PACKAGE_MANAGER} sync` in {tutorial_dir} later."
        )

    reporter.success("Test environment ready")
    reporter.info("  - pyproject.toml created")
    if install:
        reporter.info(f"  - {', '.join(DEV_DEPENDENCIES + DEPENDENCIES)} installed")
    reporter.info("  - pytest configured for tests/")
