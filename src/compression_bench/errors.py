"""Error taxonomy for benchmark runs."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class BenchmarkError(RuntimeError):
    """Base class for failures that abort a benchmark run."""


class ArtifactNotFoundError(BenchmarkError):
    """Raised when no candidate path exists for a declared artifact."""

    def __init__(self, artifact_id: str, package_name: str, attempted: Sequence[str]) -> None:
        self.artifact_id = artifact_id
        self.package_name = package_name
        self.attempted = list(attempted)
        super().__init__(
            f"Required file not found for {package_name} (artifact={artifact_id}). "
            f"Tried: {', '.join(self.attempted)}"
        )


class CompressionError(BenchmarkError):
    """Raised when a codec rejects its input or level."""

    def __init__(self, algorithm: str, level: int, message: str) -> None:
        self.algorithm = algorithm
        self.level = level
        super().__init__(f"{algorithm} level {level}: {message}")


class RenderError(BenchmarkError):
    """Raised when the chart renderer fails for an artifact."""

    def __init__(self, artifact_id: str, message: str) -> None:
        self.artifact_id = artifact_id
        super().__init__(f"Failed to generate chart for {artifact_id}: {message}")


class WriteError(BenchmarkError):
    """Raised when a chart or report file cannot be written."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"Failed to write {path}: {message}")
