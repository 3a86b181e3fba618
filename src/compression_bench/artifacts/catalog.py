"""Default artifacts benchmarked on every run.

Each entry points at a real file shipped by a package this project already
depends on. Packages move files between releases, so some entries list more
than one candidate location.
"""

from __future__ import annotations

from compression_bench.artifacts.models import ArtifactSpec, PathCandidate

DEFAULT_ARTIFACTS: tuple[ArtifactSpec, ...] = (
    ArtifactSpec.single(
        "plotly-js",
        "plotly",
        "package_data",
        "plotly.min.js",
        display_name="plotly/package_data/plotly.min.js",
    ),
    ArtifactSpec.single(
        "plotly-template",
        "plotly",
        "package_data",
        "templates",
        "plotly.json",
        display_name="plotly/package_data/templates/plotly.json",
    ),
    ArtifactSpec(
        id="polars-frame",
        package_name="polars",
        candidates=(
            PathCandidate(("dataframe", "frame.py")),
            PathCandidate(("internals", "dataframe", "frame.py")),
        ),
    ),
    ArtifactSpec.single(
        "pydantic-main",
        "pydantic",
        "main.py",
        display_name="pydantic/main.py",
    ),
    ArtifactSpec(
        id="pydantic-settings-sources",
        package_name="pydantic_settings",
        candidates=(
            PathCandidate(("sources", "base.py"), display_name="pydantic_settings/sources/base.py"),
            PathCandidate(("sources.py",), display_name="pydantic_settings/sources.py"),
        ),
    ),
    ArtifactSpec.single(
        "rich-emoji",
        "rich",
        "_emoji_codes.py",
        display_name="rich/_emoji_codes.py",
    ),
    ArtifactSpec.single(
        "typer-main",
        "typer",
        "main.py",
        display_name="typer/main.py",
    ),
    ArtifactSpec.single(
        "yaml-constructor",
        "yaml",
        "constructor.py",
        display_name="yaml/constructor.py",
    ),
)


def artifact_ids(artifacts: tuple[ArtifactSpec, ...] = DEFAULT_ARTIFACTS) -> list[str]:
    return [artifact.id for artifact in artifacts]


def select_artifacts(
    ids: list[str] | None,
    artifacts: tuple[ArtifactSpec, ...] = DEFAULT_ARTIFACTS,
) -> tuple[ArtifactSpec, ...]:
    """Filter `artifacts` to `ids`, keeping declaration order."""

    if not ids:
        return artifacts
    wanted = set(ids)
    unknown = sorted(wanted - set(artifact_ids(artifacts)))
    if unknown:
        raise ValueError(f"Unknown artifact id(s): {', '.join(unknown)}")
    return tuple(artifact for artifact in artifacts if artifact.id in wanted)
