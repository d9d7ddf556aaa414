"""Best-effort extraction of tutorial.yml fields."""

import logging
import pathlib
import re
from dataclasses import dataclass
from typing import Dict, Optional

logger = logging.getLogger(__name__)

METADATA_FILENAME = "tutorial.yml"
DEFAULT_CATEGORY = "Unknown"

_FIELD_RE = re.compile(r"^\s*(name|category|description)\s*:\s*(.*?)\s*$")


@dataclass
class TutorialMetadata:
    name: str
    category: str = DEFAULT_CATEGORY
    description: str = ""


def _clean_value(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def extract_fields(text: str) -> Dict[str, str]:
    """Pick ``name``, ``category`` and ``description`` out of loose YAML-ish text.

    Only top-level ``key: value`` lines are considered and the first
    non-empty occurrence of each key wins. Anything else is ignored.
    """
    fields: Dict[str, str] = {}
    for line in text.splitlines():
        match = _FIELD_RE.match(line)
        if not match:
            continue
        key, value = match.groups()
        value = _clean_value(value)
        if value and key not in fields:
            fields[key] = value
    return fields


def read_metadata(
    tutorial_dir: pathlib.Path, default_name: Optional[str] = None
) -> Optional[TutorialMetadata]:
    """Read tutorial.yml next to the tracked document.

    Returns None when there is no metadata file or it cannot be read;
    missing fields fall back to defaults.
    """
    path = tutorial_dir / METADATA_FILENAME
    if not path.is_file():
        return None

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read {path}: {e}")
        return None

    fields = extract_fields(text)
    return TutorialMetadata(
        name=fields.get("name") or default_name or tutorial_dir.name,
        category=fields.get("category", DEFAULT_CATEGORY),
        description=fields.get("description", ""),
    )
