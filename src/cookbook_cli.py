"""CLI interface for cookbook-tools."""

import asyncio
import logging
import pathlib
import sys

import click
from rich.logging import RichHandler

from tutorial_preview.server import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    PreviewConfig,
    PreviewServer,
)
from tutorial_scaffold.console import Reporter
from tutorial_scaffold.errors import ScaffoldError
from tutorial_scaffold.scaffold import ScaffoldOptions
from tutorial_scaffold.scaffold import create_tutorial as scaffold_tutorial

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False, markup=False)],
    )


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="cookbook-tools")
def main():
    """Tooling for writing Polkadot Cookbook tutorials."""
    pass


@main.command(context_settings=CONTEXT_SETTINGS)
@click.argument(
    "tutorial_dir",
    required=False,
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=pathlib.Path),
)
@click.option(
    "--port",
    "-p",
    type=int,
    envvar="PORT",
    default=DEFAULT_PORT,
    show_default=True,
    help="Port to listen on (also read from $PORT)",
)
@click.option(
    "--host",
    type=str,
    default=DEFAULT_HOST,
    show_default=True,
    help="Interface to bind",
)
@click.option(
    "--open/--no-open",
    "open_url",
    default=True,
    help="Open the preview in a browser (default: True)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def preview(
    tutorial_dir: pathlib.Path, port: int, host: str, open_url: bool, verbose: bool
):
    """Preview TUTORIAL_DIR/README.md with live reload (default: current directory)."""
    configure_logging(verbose)

    config = PreviewConfig(
        tutorial_dir=tutorial_dir.resolve(),
        host=host,
        port=port,
        open_url=open_url,
        verbose=verbose,
    )

    click.echo("\n🚀 Tutorial Preview Server")
    click.echo(f"📂 Tutorial: {config.tutorial_name}")
    click.echo(f"🌐 Server: {config.url}")
    click.echo(f"👀 Watching: {config.readme_path}\n")
    logger.debug(f"Reading metadata from {config.metadata_path}")

    server = PreviewServer(config)
    try:
        asyncio.run(server.serve())
    except KeyboardInterrupt:
        click.echo("\n👋 Shutting down preview server...")
    except OSError as e:
        raise click.ClickException(f"Could not serve on {config.url}: {e}")


@main.command(
    "create-tutorial",
    context_settings=CONTEXT_SETTINGS,
    epilog="""\b
Examples:
  create-tutorial zero-to-hero
  create-tutorial add-nft-pallet
  create-tutorial custom-runtime

For more information, see CONTRIBUTING.md""",
)
@click.argument("slug")
@click.option(
    "--skip-install",
    is_flag=True,
    help="Write the project file but do not run the package manager",
)
@click.option(
    "--no-branch",
    is_flag=True,
    help="Do not create a feat/tutorial-<slug> git branch",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def create_tutorial(slug: str, skip_install: bool, no_branch: bool, verbose: bool):
    """Create a new Polkadot Cookbook tutorial with all necessary scaffolding.

    SLUG names the tutorial (e.g. "my-tutorial"). It must be lowercase with
    words separated by dashes. Run from the repository root.
    """
    configure_logging(verbose)
    reporter = Reporter()
    options = ScaffoldOptions(create_branch=not no_branch, install=not skip_install)

    try:
        scaffold_tutorial(slug, pathlib.Path.cwd(), options, reporter)
    except ScaffoldError as e:
        reporter.error(e.message)
        if e.hint:
            for line in e.hint.splitlines():
                reporter.info(line)
        sys.exit(1)


if __name__ == "__main__":
    main()
