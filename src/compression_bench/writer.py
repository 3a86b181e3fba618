"""Atomic writers for benchmark artifacts."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable
from uuid import uuid4

import polars as pl

from compression_bench.errors import WriteError


def _atomic_temp_path(target_path: Path) -> Path:
    return target_path.parent / f".{target_path.name}.{uuid4().hex}.tmp"


def _write_atomically(output_path: Path, write: Callable[[Path], object]) -> Path:
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = _atomic_temp_path(output_path)
        try:
            write(temp_path)
            os.replace(temp_path, output_path)
        finally:
            if temp_path.exists():
                temp_path.unlink()
    except OSError as exc:
        raise WriteError(output_path, str(exc)) from exc
    return output_path


def write_bytes_atomically(payload: bytes, output_path: Path) -> Path:
    """Write raw bytes (chart images) atomically."""

    return _write_atomically(output_path, lambda path: path.write_bytes(payload))


def write_json_atomically(payload: dict[str, Any], output_path: Path) -> Path:
    """Write JSON payload atomically."""

    rendered = json.dumps(payload, indent=2, sort_keys=True, default=str) + "\n"
    return _write_atomically(output_path, lambda path: path.write_text(rendered, encoding="utf-8"))


def write_csv_atomically(df: pl.DataFrame, output_path: Path) -> Path:
    """Write CSV dataframe atomically."""

    return _write_atomically(output_path, lambda path: df.write_csv(path))


def write_markdown_atomically(text: str, output_path: Path) -> Path:
    """Write markdown text atomically."""

    return _write_atomically(output_path, lambda path: path.write_text(text, encoding="utf-8"))
