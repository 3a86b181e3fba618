"""Benchmark run orchestration: resolve, sweep, chart, report."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence
from uuid import uuid4

from compression_bench.algorithms import AlgorithmRegistry, default_registry
from compression_bench.artifacts.catalog import DEFAULT_ARTIFACTS, select_artifacts
from compression_bench.artifacts.models import ArtifactSpec, ResolvedArtifact
from compression_bench.artifacts.resolve import PackageRootFinder, find_package_root, resolve_artifact
from compression_bench.charts import ChartRenderer, PlotlyChartRenderer, build_chart_spec
from compression_bench.config import AppSettings
from compression_bench.errors import RenderError
from compression_bench.models import FileResult, RunResult
from compression_bench.report import render_markdown_report
from compression_bench.sweep import sweep_buffer
from compression_bench.utils.paths import ensure_directories, relative_posix, slugify
from compression_bench.utils.time_utils import now_utc
from compression_bench.writer import (
    write_bytes_atomically,
    write_csv_atomically,
    write_json_atomically,
    write_markdown_atomically,
)

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BenchmarkRunOptions:
    """Runtime options for one benchmark run."""

    verbose: bool = False
    artifact_ids: tuple[str, ...] = ()
    algorithms: tuple[str, ...] = ()
    write_report: bool = True
    write_table: bool = True
    write_summary: bool = True

    @classmethod
    def from_settings(cls, settings: AppSettings, **overrides: object) -> "BenchmarkRunOptions":
        values: dict[str, object] = {"verbose": settings.verbose}
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)  # type: ignore[arg-type]


@dataclass(frozen=True, slots=True)
class BenchmarkRunResult:
    """Return object for benchmark run outcomes."""

    run_id: str
    run_result: RunResult
    chart_paths: tuple[Path, ...]
    report_path: Path | None
    table_path: Path | None
    summary_path: Path | None


def benchmark_artifact(
    resolved: ResolvedArtifact,
    registry: AlgorithmRegistry,
    *,
    renderer: ChartRenderer,
    charts_dir: Path,
    report_dir: Path,
    image_format: str = "svg",
    progress_level: int = logging.DEBUG,
    logger: logging.Logger | None = None,
) -> tuple[FileResult, Path]:
    """Sweep one resolved artifact and write its chart.

    Returns the file result (with its chart reference relative to `report_dir`)
    and the absolute chart path.
    """

    effective_logger = logger or LOGGER
    raw = resolved.absolute_path.read_bytes()
    effective_logger.log(
        progress_level,
        "artifact.processing artifact=%s name=%s bytes=%s",
        resolved.id,
        resolved.display_name,
        len(raw),
    )

    algorithm_results = sweep_buffer(
        raw,
        registry,
        label=resolved.id,
        logger=effective_logger,
        progress_level=progress_level,
    )
    file_result = FileResult(
        id=resolved.id,
        display_name=resolved.display_name,
        original_size=len(raw),
        algorithms=algorithm_results,
    )

    effective_logger.log(progress_level, "artifact.chart_rendering artifact=%s", resolved.id)
    try:
        chart_bytes = renderer(build_chart_spec(file_result))
    except Exception as exc:
        effective_logger.error("artifact.chart_failed artifact=%s name=%s", resolved.id, resolved.display_name)
        raise RenderError(resolved.id, str(exc) or type(exc).__name__) from exc

    chart_path = charts_dir / f"{slugify(resolved.display_name)}.{image_format}"
    write_bytes_atomically(chart_bytes, chart_path)
    effective_logger.log(progress_level, "artifact.chart_saved artifact=%s path=%s", resolved.id, chart_path)

    return file_result.with_chart(relative_posix(chart_path, report_dir)), chart_path


def run_benchmark(
    settings: AppSettings,
    *,
    options: BenchmarkRunOptions | None = None,
    artifacts: Sequence[ArtifactSpec] | None = None,
    registry: AlgorithmRegistry | None = None,
    renderer: ChartRenderer | None = None,
    package_root_finder: PackageRootFinder = find_package_root,
    logger: logging.Logger | None = None,
) -> BenchmarkRunResult:
    """Run the full benchmark sequentially over every configured artifact.

    Any failure aborts the run before the report is written.
    """

    effective_logger = logger or LOGGER
    run_options = options or BenchmarkRunOptions(verbose=settings.verbose)
    progress_level = logging.INFO if run_options.verbose else logging.DEBUG

    selected = select_artifacts(
        list(run_options.artifact_ids) or None,
        tuple(artifacts) if artifacts is not None else DEFAULT_ARTIFACTS,
    )
    effective_registry = registry or default_registry()
    if run_options.algorithms:
        effective_registry = effective_registry.select(run_options.algorithms)
    effective_renderer = renderer or PlotlyChartRenderer(
        width=settings.chart.width,
        height=settings.chart.height,
        image_format=settings.chart.image_format,
    )

    run_id = f"bench-run-{uuid4().hex[:12]}"
    started_ts = now_utc()
    started_mono = time.monotonic()
    report_path = settings.paths.report_file
    report_dir = report_path.parent
    ensure_directories([settings.paths.charts_dir, report_dir])

    effective_logger.info(
        "benchmark.start run_id=%s artifacts=%s algorithms=%s",
        run_id,
        len(selected),
        ",".join(effective_registry.names),
    )

    file_results: list[FileResult] = []
    chart_paths: list[Path] = []
    for spec in selected:
        resolved = resolve_artifact(spec, package_root_finder=package_root_finder, logger=effective_logger)
        file_result, chart_path = benchmark_artifact(
            resolved,
            effective_registry,
            renderer=effective_renderer,
            charts_dir=settings.paths.charts_dir,
            report_dir=report_dir,
            image_format=settings.chart.image_format,
            progress_level=progress_level,
            logger=effective_logger,
        )
        file_results.append(file_result)
        chart_paths.append(chart_path)

    run_result = RunResult(files=tuple(file_results), generated_at=started_ts)

    written_report: Path | None = None
    if run_options.write_report:
        written_report = write_markdown_atomically(
            render_markdown_report(run_result, title=settings.report.title),
            report_path,
        )

    table_path: Path | None = None
    if run_options.write_table:
        table_path = write_csv_atomically(
            run_result.to_frame(),
            settings.paths.results_dir / settings.report.table_file_name,
        )

    summary_path: Path | None = None
    if run_options.write_summary:
        payload = run_result.to_dict()
        payload["run_id"] = run_id
        payload["duration_sec"] = round(time.monotonic() - started_mono, 3)
        payload["algorithms"] = [
            {"name": algorithm.name, "levels": list(algorithm.levels)} for algorithm in effective_registry
        ]
        summary_path = write_json_atomically(payload, settings.paths.results_dir / settings.report.summary_file_name)

    effective_logger.info(
        "benchmark.done run_id=%s files=%s duration_sec=%.3f report=%s",
        run_id,
        len(file_results),
        time.monotonic() - started_mono,
        written_report,
    )
    return BenchmarkRunResult(
        run_id=run_id,
        run_result=run_result,
        chart_paths=tuple(chart_paths),
        report_path=written_report,
        table_path=table_path,
        summary_path=summary_path,
    )
