"""Typed result models shared by the sweep engine, charts and reports."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any

import polars as pl

from compression_bench.utils.time_utils import now_utc

MEASUREMENT_SCHEMA: dict[str, Any] = {
    "artifact_id": pl.String,
    "display_name": pl.String,
    "original_size": pl.Int64,
    "algorithm": pl.String,
    "level": pl.Int64,
    "time_ms": pl.Float64,
    "size_bytes": pl.Int64,
    "ratio": pl.Float64,
}


@dataclass(frozen=True, slots=True)
class Measurement:
    """One compression call at one level."""

    level: int
    time: float
    size: int
    ratio: float

    def to_dict(self) -> dict[str, Any]:
        return {"level": self.level, "time": self.time, "size": self.size, "ratio": self.ratio}


@dataclass(frozen=True, slots=True)
class AlgorithmResult:
    """All measurements for one (artifact, algorithm) pair in sweep order."""

    name: str
    measurements: tuple[Measurement, ...]

    @property
    def levels(self) -> list[int]:
        return [measurement.level for measurement in self.measurements]

    def best(self) -> Measurement:
        """Return the measurement with the lowest ratio (earliest level on ties)."""

        if not self.measurements:
            raise ValueError(f"No measurements recorded for {self.name}.")
        return min(self.measurements, key=lambda measurement: measurement.ratio)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "measurements": [m.to_dict() for m in self.measurements]}


@dataclass(frozen=True, slots=True)
class FileResult:
    """Sweep output for one artifact plus its chart reference."""

    id: str
    display_name: str
    original_size: int
    algorithms: tuple[AlgorithmResult, ...]
    chart_path: str | None = None

    def with_chart(self, chart_path: str) -> "FileResult":
        return replace(self, chart_path=chart_path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "display_name": self.display_name,
            "original_size": self.original_size,
            "chart_path": self.chart_path,
            "algorithms": [algorithm.to_dict() for algorithm in self.algorithms],
        }


@dataclass(frozen=True, slots=True)
class RunResult:
    """Ordered file results for a whole run."""

    files: tuple[FileResult, ...]
    generated_at: datetime = field(default_factory=now_utc)

    def to_frame(self) -> pl.DataFrame:
        """Flatten to one row per measurement."""

        rows: list[dict[str, Any]] = []
        for file_result in self.files:
            for algorithm in file_result.algorithms:
                for measurement in algorithm.measurements:
                    rows.append(
                        {
                            "artifact_id": file_result.id,
                            "display_name": file_result.display_name,
                            "original_size": file_result.original_size,
                            "algorithm": algorithm.name,
                            "level": measurement.level,
                            "time_ms": measurement.time,
                            "size_bytes": measurement.size,
                            "ratio": measurement.ratio,
                        }
                    )
        if not rows:
            return pl.DataFrame(schema=MEASUREMENT_SCHEMA)
        return pl.DataFrame(rows, schema=MEASUREMENT_SCHEMA)

    def best_ratio(self) -> dict[str, dict[str, Measurement]]:
        """Best (lowest-ratio) measurement per artifact id and algorithm."""

        return {
            file_result.id: {algorithm.name: algorithm.best() for algorithm in file_result.algorithms}
            for file_result in self.files
        }

    def to_dict(self) -> dict[str, Any]:
        best = self.best_ratio()
        return {
            "generated_at": self.generated_at.isoformat(),
            "file_count": len(self.files),
            "measurement_count": sum(
                len(algorithm.measurements) for file_result in self.files for algorithm in file_result.algorithms
            ),
            "best_ratio": {
                artifact_id: {name: measurement.to_dict() for name, measurement in per_algorithm.items()}
                for artifact_id, per_algorithm in best.items()
            },
            "files": [file_result.to_dict() for file_result in self.files],
        }
