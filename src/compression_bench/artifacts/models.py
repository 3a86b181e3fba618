"""Typed artifact declarations and resolution results."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class PathCandidate:
    """One location an artifact file may live at inside its package."""

    path_segments: tuple[str, ...]
    display_name: str | None = None

    def __post_init__(self) -> None:
        if not self.path_segments:
            raise ValueError("PathCandidate requires at least one path segment.")

    def relative_path(self) -> str:
        return "/".join(self.path_segments)


@dataclass(frozen=True, slots=True)
class ArtifactSpec:
    """Static declaration of an input artifact and where to look for it."""

    id: str
    package_name: str
    candidates: tuple[PathCandidate, ...]
    display_name: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ArtifactSpec id must be non-empty.")
        if not self.candidates:
            raise ValueError(f"ArtifactSpec {self.id} must declare at least one candidate.")

    @classmethod
    def single(
        cls,
        id: str,
        package_name: str,
        *path_segments: str,
        display_name: str | None = None,
    ) -> "ArtifactSpec":
        """Shorthand for an artifact with exactly one candidate location."""

        return cls(
            id=id,
            package_name=package_name,
            candidates=(PathCandidate(path_segments=tuple(path_segments)),),
            display_name=display_name,
        )

    def display_name_for(self, candidate: PathCandidate) -> str:
        if candidate.display_name:
            return candidate.display_name
        if self.display_name:
            return self.display_name
        return f"{self.package_name}/{candidate.relative_path()}"


@dataclass(frozen=True, slots=True)
class ResolvedArtifact:
    """Artifact bound to an existing file on disk."""

    id: str
    display_name: str
    package_name: str
    absolute_path: Path
    candidate_index: int
