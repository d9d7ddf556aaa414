"""Scaffolding for new cookbook tutorials."""

__version__ = "2025.10.1"

from .errors import ScaffoldError
from .scaffold import ScaffoldOptions, create_tutorial
from .validator import is_valid_slug, slug_to_title

__all__ = [
    "__version__",
    "ScaffoldError",
    "ScaffoldOptions",
    "create_tutorial",
    "is_valid_slug",
    "slug_to_title",
]
