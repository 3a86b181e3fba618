from __future__ import annotations

import itertools
from pathlib import Path
from typing import Callable

import pytest

from compression_bench.algorithms import Algorithm, AlgorithmRegistry
from compression_bench.charts import ChartSpec
from compression_bench.config import AppSettings, PathsConfig


STUB_SIZES = {1: 500, 2: 400, 3: 300}


def stub_codec(data: bytes, level: int) -> bytes:
    return b"z" * STUB_SIZES[level]


@pytest.fixture(autouse=True)
def _quiet_env(monkeypatch):
    monkeypatch.delenv("BENCHMARK_VERBOSE", raising=False)
    monkeypatch.delenv("BENCHMARK_SETTINGS_FILE", raising=False)


@pytest.fixture
def stub_registry() -> AlgorithmRegistry:
    return AlgorithmRegistry([Algorithm(name="stub", levels=(1, 2, 3), codec=stub_codec)])


@pytest.fixture
def fake_timer() -> Callable[[], float]:
    """Monotonic clock that advances 2 ms per reading."""

    counter = itertools.count()
    return lambda: next(counter) * 0.002


class RecordingRenderer:
    def __init__(self) -> None:
        self.specs: list[ChartSpec] = []

    def __call__(self, spec: ChartSpec) -> bytes:
        self.specs.append(spec)
        return b"<svg xmlns='http://www.w3.org/2000/svg'></svg>"


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def package_roots(tmp_path: Path) -> dict[str, Path]:
    """Two fake installed packages with a few files each."""

    alpha = tmp_path / "site" / "alpha"
    (alpha / "dist").mkdir(parents=True)
    (alpha / "dist" / "alpha.min.js").write_bytes(b"function alpha(){return 1}\n" * 200)

    beta = tmp_path / "site" / "beta"
    beta.mkdir(parents=True)
    (beta / "beta.css").write_bytes(b".beta { color: red; margin: 0 auto; }\n" * 150)

    return {"alpha": alpha, "beta": beta}


@pytest.fixture
def finder(package_roots: dict[str, Path]) -> Callable[[str], Path | None]:
    return package_roots.get


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    out = tmp_path / "out"
    return AppSettings(
        verbose=False,
        paths=PathsConfig(
            charts_dir=out / "charts",
            report_file=out / "README.md",
            results_dir=out / "results",
            logs_root=out / "logs",
        ),
    )
