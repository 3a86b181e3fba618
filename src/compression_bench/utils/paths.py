"""Path and filesystem helper functions."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Iterable

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def ensure_directories(paths: Iterable[Path]) -> list[Path]:
    """Create all directories in the iterable if they do not exist."""

    created_or_existing: list[Path] = []
    for directory in paths:
        directory.mkdir(parents=True, exist_ok=True)
        created_or_existing.append(directory)
    return created_or_existing


def slugify(value: str) -> str:
    """Lowercase `value` and collapse every non-alphanumeric run into a single dash."""

    return _NON_SLUG_CHARS.sub("-", value.lower()).strip("-")


def relative_posix(path: Path, start: Path) -> str:
    """Relative path from `start` to `path` using forward slashes, for Markdown links."""

    return Path(os.path.relpath(path, start)).as_posix()
