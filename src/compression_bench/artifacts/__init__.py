"""Artifact declarations, default catalog and package-path resolution."""

from compression_bench.artifacts.catalog import DEFAULT_ARTIFACTS, artifact_ids, select_artifacts
from compression_bench.artifacts.models import ArtifactSpec, PathCandidate, ResolvedArtifact
from compression_bench.artifacts.resolve import (
    PackageRootFinder,
    find_package_root,
    resolve_artifact,
    resolve_artifacts,
)

__all__ = [
    "DEFAULT_ARTIFACTS",
    "artifact_ids",
    "select_artifacts",
    "ArtifactSpec",
    "PathCandidate",
    "ResolvedArtifact",
    "PackageRootFinder",
    "find_package_root",
    "resolve_artifact",
    "resolve_artifacts",
]
