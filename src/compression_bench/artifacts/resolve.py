"""Resolve artifact declarations to files inside installed packages."""

from __future__ import annotations

import importlib.util
import logging
from pathlib import Path
from typing import Callable, Iterable

from compression_bench.artifacts.models import ArtifactSpec, ResolvedArtifact
from compression_bench.errors import ArtifactNotFoundError

LOGGER = logging.getLogger(__name__)

PackageRootFinder = Callable[[str], Path | None]


def find_package_root(package_name: str) -> Path | None:
    """Return the install directory of an importable package, or None when not installed."""

    try:
        spec = importlib.util.find_spec(package_name)
    except (ImportError, ValueError):
        return None
    if spec is None:
        return None
    if spec.submodule_search_locations:
        return Path(next(iter(spec.submodule_search_locations))).resolve()
    if spec.origin and spec.origin not in {"built-in", "frozen"}:
        return Path(spec.origin).resolve().parent
    return None


def resolve_artifact(
    spec: ArtifactSpec,
    *,
    package_root_finder: PackageRootFinder = find_package_root,
    logger: logging.Logger | None = None,
) -> ResolvedArtifact:
    """Return the first existing candidate for `spec`.

    Candidates are tried in declaration order. When none exists, or the owning
    package cannot be located at all, ArtifactNotFoundError lists every path tried.
    """

    effective_logger = logger or LOGGER
    package_root = package_root_finder(spec.package_name)
    attempted: list[str] = []

    if package_root is None:
        effective_logger.warning("resolve.package_missing artifact=%s package=%s", spec.id, spec.package_name)
        attempted = [f"{spec.package_name}/{candidate.relative_path()}" for candidate in spec.candidates]
        raise ArtifactNotFoundError(spec.id, spec.package_name, attempted)

    for index, candidate in enumerate(spec.candidates):
        absolute_path = package_root.joinpath(*candidate.path_segments)
        if absolute_path.is_file():
            display_name = spec.display_name_for(candidate)
            effective_logger.debug(
                "resolve.hit artifact=%s candidate=%s path=%s", spec.id, index, absolute_path
            )
            return ResolvedArtifact(
                id=spec.id,
                display_name=display_name,
                package_name=spec.package_name,
                absolute_path=absolute_path,
                candidate_index=index,
            )
        attempted.append(f"{spec.package_name}/{candidate.relative_path()} ({absolute_path})")

    raise ArtifactNotFoundError(spec.id, spec.package_name, attempted)


def resolve_artifacts(
    specs: Iterable[ArtifactSpec],
    *,
    package_root_finder: PackageRootFinder = find_package_root,
    logger: logging.Logger | None = None,
) -> list[ResolvedArtifact]:
    """Resolve specs in order, failing on the first one that cannot be found."""

    return [
        resolve_artifact(spec, package_root_finder=package_root_finder, logger=logger)
        for spec in specs
    ]
