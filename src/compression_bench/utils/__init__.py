"""Shared utility helpers."""

from compression_bench.utils.paths import ensure_directories, relative_posix, slugify
from compression_bench.utils.time_utils import now_utc, utc_iso_string

__all__ = [
    "ensure_directories",
    "relative_posix",
    "slugify",
    "now_utc",
    "utc_iso_string",
]
