"""Typer CLI entrypoint for compression_bench."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
import yaml

from compression_bench.algorithms import default_registry
from compression_bench.artifacts.catalog import DEFAULT_ARTIFACTS, artifact_ids
from compression_bench.artifacts.resolve import resolve_artifact
from compression_bench.config import AppSettings, load_settings
from compression_bench.errors import ArtifactNotFoundError, BenchmarkError
from compression_bench.logging_utils import configure_logging, console_level_for
from compression_bench.pipeline import BenchmarkRunOptions, run_benchmark

app = typer.Typer(
    add_completion=False,
    help="compression_bench command line interface.",
    no_args_is_help=True,
)

_CONFIG_FILE_OPTION = typer.Option(
    None,
    "--config-file",
    help="Optional settings YAML path.",
    exists=False,
    file_okay=True,
    dir_okay=False,
    readable=True,
)


def _load_and_optionally_configure_logger(
    config_file: Path | None,
    configure: bool,
    verbose: bool | None = None,
) -> tuple[AppSettings, logging.Logger]:
    settings = load_settings(config_file=config_file)
    if verbose is not None:
        settings = settings.model_copy(update={"verbose": verbose})
    if configure:
        logger = configure_logging(
            settings.paths.logs_root / "benchmark.log",
            console_level=console_level_for(settings.verbose),
        )
    else:
        logger = logging.getLogger("compression_bench")
    return settings, logger


def _normalize_names(
    values: list[str] | None,
    allowed: list[str],
    option_name: str,
    *,
    lowercase: bool = False,
) -> tuple[str, ...]:
    names: list[str] = []
    for value in values or []:
        names.extend(part.strip() for part in value.split(",") if part.strip())
    if lowercase:
        names = [name.lower() for name in names]
    unknown = sorted(set(names) - set(allowed))
    if unknown:
        raise typer.BadParameter(
            f"{option_name} must be one of: {', '.join(allowed)} (got {', '.join(unknown)})."
        )
    return tuple(dict.fromkeys(names))


@app.command("show-config")
def show_config(config_file: Path | None = _CONFIG_FILE_OPTION) -> None:
    """Print the effective configuration after env overrides."""

    settings, _ = _load_and_optionally_configure_logger(config_file, configure=False)
    rendered = yaml.safe_dump(settings.as_dict(), sort_keys=False)
    typer.echo(rendered)


@app.command("list-algorithms")
def list_algorithms() -> None:
    """Print each algorithm and its swept level range."""

    for algorithm in default_registry():
        low, high = algorithm.level_range
        typer.echo(f"{algorithm.name}: levels {low}..{high} ({len(algorithm.levels)} levels)")


@app.command("list-artifacts")
def list_artifacts(
    resolve: bool = typer.Option(
        False,
        "--resolve",
        help="Resolve each artifact to its installed file path.",
    ),
) -> None:
    """Print the artifact catalog, optionally with resolved paths."""

    missing = 0
    for spec in DEFAULT_ARTIFACTS:
        if not resolve:
            candidates = " | ".join(candidate.relative_path() for candidate in spec.candidates)
            typer.echo(f"{spec.id}: {spec.package_name} [{candidates}]")
            continue
        try:
            resolved = resolve_artifact(spec)
        except ArtifactNotFoundError as exc:
            missing += 1
            typer.echo(f"{spec.id}: MISSING ({exc})")
            continue
        typer.echo(f"{spec.id}: {resolved.display_name} -> {resolved.absolute_path}")
    if missing:
        raise typer.Exit(code=1)


@app.command("run")
def run(
    artifact: list[str] | None = typer.Option(
        None,
        "--artifact",
        "-a",
        help="Artifact id to benchmark (repeatable or comma-separated). Defaults to all.",
    ),
    algorithm: list[str] | None = typer.Option(
        None,
        "--algorithm",
        help="Algorithm name to sweep (repeatable or comma-separated). Defaults to all.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Narrate progress on the console. Also enabled by BENCHMARK_VERBOSE=1.",
    ),
    no_report: bool = typer.Option(
        False,
        "--no-report",
        help="Skip writing the Markdown report.",
    ),
    config_file: Path | None = _CONFIG_FILE_OPTION,
) -> None:
    """Sweep every artifact across all algorithms and levels, then write charts and report."""

    artifact_filter = _normalize_names(artifact, artifact_ids(), "artifact")
    algorithm_filter = _normalize_names(
        algorithm,
        default_registry().names,
        "algorithm",
        lowercase=True,
    )

    settings, logger = _load_and_optionally_configure_logger(
        config_file,
        configure=True,
        verbose=True if verbose else None,
    )
    options = BenchmarkRunOptions.from_settings(
        settings,
        artifact_ids=artifact_filter,
        algorithms=algorithm_filter,
        write_report=not no_report,
    )
    try:
        result = run_benchmark(settings, options=options, logger=logger)
    except (BenchmarkError, OSError, ValueError) as exc:
        logger.error("benchmark.failed error=%s", exc)
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(f"run_id: {result.run_id}")
    typer.echo(f"files_benchmarked: {len(result.run_result.files)}")
    typer.echo(f"charts_written: {len(result.chart_paths)}")
    typer.echo(f"report_path: {result.report_path}")
    typer.echo(f"table_path: {result.table_path}")
    typer.echo(f"summary_path: {result.summary_path}")


def main() -> None:
    """CLI script entrypoint."""

    app()


if __name__ == "__main__":
    main()
