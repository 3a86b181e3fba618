from __future__ import annotations

import json
import logging

import polars as pl
import pytest

from compression_bench.algorithms import Algorithm, AlgorithmRegistry, default_registry
from compression_bench.artifacts.models import ArtifactSpec, PathCandidate
from compression_bench.errors import ArtifactNotFoundError, CompressionError, RenderError
from compression_bench.pipeline import BenchmarkRunOptions, run_benchmark

ARTIFACTS = (
    ArtifactSpec.single("alpha", "alpha", "dist", "alpha.min.js", display_name="alpha/dist/alpha.min.js"),
    ArtifactSpec(
        id="beta",
        package_name="beta",
        candidates=(
            PathCandidate(("css", "beta.css"), display_name="beta/css/beta.css"),
            PathCandidate(("beta.css",), display_name="beta/beta.css"),
        ),
    ),
)


def _run(settings, finder, renderer, registry, **kwargs):
    return run_benchmark(
        settings,
        artifacts=kwargs.pop("artifacts", ARTIFACTS),
        registry=registry,
        renderer=renderer,
        package_root_finder=finder,
        **kwargs,
    )


def test_end_to_end_writes_charts_report_and_tables(settings, finder, renderer, stub_registry):
    result = _run(settings, finder, renderer, stub_registry)

    files = result.run_result.files
    assert [f.id for f in files] == ["alpha", "beta"]
    assert files[1].display_name == "beta/beta.css"
    assert [m.ratio for m in files[0].algorithms[0].measurements] == pytest.approx(
        [500 / files[0].original_size, 400 / files[0].original_size, 300 / files[0].original_size]
    )

    assert [path.name for path in result.chart_paths] == ["alpha-dist-alpha-min-js.svg", "beta-beta-css.svg"]
    assert all(path.is_file() for path in result.chart_paths)
    assert files[0].chart_path == "charts/alpha-dist-alpha-min-js.svg"
    assert [spec.title for spec in renderer.specs] == [
        "alpha/dist/alpha.min.js Compression Ratio",
        "beta/beta.css Compression Ratio",
    ]

    report = result.report_path.read_text(encoding="utf-8")
    assert result.report_path == settings.paths.report_file
    assert report.index("## alpha/dist/alpha.min.js") < report.index("## beta/beta.css")
    assert "](charts/alpha-dist-alpha-min-js.svg)" in report

    table = pl.read_csv(result.table_path)
    assert table.height == 6
    summary = json.loads(result.summary_path.read_text(encoding="utf-8"))
    assert summary["run_id"] == result.run_id
    assert summary["file_count"] == 2
    assert summary["algorithms"] == [{"name": "stub", "levels": [1, 2, 3]}]


def test_report_keeps_declaration_order_when_reversed(settings, finder, renderer, stub_registry):
    result = _run(settings, finder, renderer, stub_registry, artifacts=tuple(reversed(ARTIFACTS)))
    report = result.report_path.read_text(encoding="utf-8")
    assert report.index("## beta/beta.css") < report.index("## alpha/dist/alpha.min.js")


def test_missing_artifact_aborts_before_report(settings, finder, renderer, stub_registry):
    artifacts = ARTIFACTS + (
        ArtifactSpec(
            id="gamma",
            package_name="alpha",
            candidates=(PathCandidate(("gamma.js",)), PathCandidate(("dist", "gamma.js"))),
        ),
    )
    with pytest.raises(ArtifactNotFoundError) as excinfo:
        _run(settings, finder, renderer, stub_registry, artifacts=artifacts)

    assert len(excinfo.value.attempted) == 2
    assert not settings.paths.report_file.exists()
    assert not (settings.paths.results_dir / settings.report.summary_file_name).exists()


def test_render_failure_is_fatal(settings, finder, stub_registry):
    def broken_renderer(spec):
        raise RuntimeError("no browser available")

    with pytest.raises(RenderError) as excinfo:
        _run(settings, finder, broken_renderer, stub_registry)

    assert excinfo.value.artifact_id == "alpha"
    assert "no browser available" in str(excinfo.value)
    assert not settings.paths.report_file.exists()


def test_compression_failure_is_fatal(settings, finder, renderer):
    def failing(data: bytes, level: int) -> bytes:
        raise ValueError("unsupported")

    registry = AlgorithmRegistry([Algorithm(name="failing", levels=(1, 2), codec=failing)])
    with pytest.raises(CompressionError):
        _run(settings, finder, renderer, registry)
    assert renderer.specs == []
    assert not settings.paths.report_file.exists()


def test_rerun_reproduces_sizes_and_ratios(settings, finder, renderer):
    registry = default_registry().select(["gzip", "zstd"])

    def sizes(result):
        return [
            [(a.name, m.level, m.size, m.ratio) for a in f.algorithms for m in a.measurements]
            for f in result.run_result.files
        ]

    first = _run(settings, finder, renderer, registry)
    second = _run(settings, finder, renderer, registry)
    assert sizes(first) == sizes(second)
    assert first.run_id != second.run_id


def test_options_filter_artifacts_and_algorithms(settings, finder, renderer):
    options = BenchmarkRunOptions(artifact_ids=("beta",), algorithms=("gzip",), write_table=False)
    result = _run(settings, finder, renderer, default_registry(), options=options)

    assert [f.id for f in result.run_result.files] == ["beta"]
    assert [a.name for a in result.run_result.files[0].algorithms] == ["gzip"]
    assert len(result.run_result.files[0].algorithms[0].measurements) == 9
    assert result.table_path is None
    assert result.summary_path is not None


def test_no_report_option(settings, finder, renderer, stub_registry):
    result = _run(settings, finder, renderer, stub_registry, options=BenchmarkRunOptions(write_report=False))
    assert result.report_path is None
    assert not settings.paths.report_file.exists()


def test_verbose_narrates_progress(settings, finder, renderer, stub_registry, caplog):
    caplog.set_level(logging.INFO, logger="compression_bench")
    _run(settings, finder, renderer, stub_registry, options=BenchmarkRunOptions(verbose=True))
    messages = [record.getMessage() for record in caplog.records]
    assert any(message.startswith("artifact.processing artifact=alpha") for message in messages)
    assert any(message.startswith("artifact.chart_saved artifact=beta") for message in messages)
    assert any(message.startswith("sweep.algorithm_done artifact=alpha") for message in messages)


def test_quiet_mode_keeps_progress_below_info(settings, finder, renderer, stub_registry, caplog):
    caplog.set_level(logging.INFO, logger="compression_bench")
    _run(settings, finder, renderer, stub_registry, options=BenchmarkRunOptions(verbose=False))
    assert not any(record.getMessage().startswith("artifact.processing") for record in caplog.records)
    assert not any(record.getMessage().startswith("sweep.algorithm_done") for record in caplog.records)


def test_options_from_settings(settings):
    verbose_settings = settings.model_copy(update={"verbose": True})
    options = BenchmarkRunOptions.from_settings(verbose_settings, artifact_ids=("alpha",), algorithms=None)
    assert options.verbose is True
    assert options.artifact_ids == ("alpha",)
    assert options.algorithms == ()
