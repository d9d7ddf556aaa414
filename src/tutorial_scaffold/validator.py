"""Precondition checks for creating a tutorial."""

import pathlib
import re

from .errors import ScaffoldError

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")

TUTORIALS_DIRNAME = "tutorials"
VERSIONS_FILENAME = "versions.yml"


def is_valid_slug(slug: str) -> bool:
    """Lowercase letters and digits, words separated by single dashes."""
    return SLUG_PATTERN.fullmatch(slug) is not None


def slug_to_title(slug: str) -> str:
    """'my-tutorial' -> 'My Tutorial'"""
    return " ".join(word[:1].upper() + word[1:] for word in slug.split("-"))


def slug_to_module(slug: str) -> str:
    return slug.replace("-", "_")


def validate_working_directory(root: pathlib.Path) -> None:
    """Raise ScaffoldError unless ``root`` looks like the cookbook repository."""
    if not (root / TUTORIALS_DIRNAME).is_dir():
        raise ScaffoldError(
            "This command must be run from the repository root!",
            hint=f"Expected directory structure: ./{TUTORIALS_DIRNAME}/, ./{VERSIONS_FILENAME}, etc.",
        )
    if not (root / VERSIONS_FILENAME).exists():
        raise ScaffoldError(
            f"{VERSIONS_FILENAME} not found. Are you in the correct repository?"
        )


def validate_slug(slug: str) -> None:
    if not is_valid_slug(slug):
        raise ScaffoldError(
            "Invalid tutorial slug format!",
            hint=(
                "Slug must be lowercase, with words separated by dashes.\n"
                'Examples: "my-tutorial", "add-nft-pallet", "zero-to-hero"'
            ),
        )


def validate_new_tutorial(root: pathlib.Path, slug: str) -> pathlib.Path:
    """Run every precondition in order and return the target directory."""
    validate_working_directory(root)
    validate_slug(slug)

    tutorial_dir = root / TUTORIALS_DIRNAME / slug
    if tutorial_dir.exists():
        raise ScaffoldError(
            f'Tutorial "{slug}" already exists!',
            hint=f"Directory: {tutorial_dir}",
        )
    return tutorial_dir
