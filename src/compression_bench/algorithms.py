"""Compression algorithm catalog swept by the benchmark."""

from __future__ import annotations

import gzip
import zlib
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator

import brotli
import zstandard

from compression_bench.errors import CompressionError

Codec = Callable[[bytes, int], bytes]

GZIP_LEVELS = tuple(range(1, 10))
BROTLI_LEVELS = tuple(range(0, 12))
ZSTD_LEVELS = tuple(range(1, 23))

_CODEC_ERRORS: tuple[type[BaseException], ...] = (
    zlib.error,
    brotli.error,
    zstandard.ZstdError,
    ValueError,
    TypeError,
)


def gzip_codec(data: bytes, level: int) -> bytes:
    """Gzip with a fixed header mtime so output is byte-stable."""

    return gzip.compress(data, compresslevel=level, mtime=0)


def brotli_codec(data: bytes, level: int) -> bytes:
    return brotli.compress(data, quality=level)


def zstd_codec(data: bytes, level: int) -> bytes:
    return zstandard.ZstdCompressor(level=level).compress(data)


@dataclass(frozen=True, slots=True)
class Algorithm:
    """One codec and the full range of levels it supports."""

    name: str
    levels: tuple[int, ...]
    codec: Codec

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Algorithm name must be non-empty.")
        if not self.levels:
            raise ValueError(f"Algorithm {self.name} must declare at least one level.")
        if list(self.levels) != sorted(set(self.levels)):
            raise ValueError(f"Algorithm {self.name} levels must be strictly ascending.")

    @property
    def level_range(self) -> tuple[int, int]:
        return self.levels[0], self.levels[-1]

    def compress(self, buffer: bytes, level: int) -> bytes:
        """Compress `buffer` at `level`, raising CompressionError on any codec failure."""

        if level not in self.levels:
            low, high = self.level_range
            raise CompressionError(self.name, level, f"level must be within {low}..{high}")
        try:
            return self.codec(buffer, level)
        except _CODEC_ERRORS as exc:
            raise CompressionError(self.name, level, str(exc) or type(exc).__name__) from exc


class AlgorithmRegistry:
    """Ordered, immutable collection of algorithms."""

    __slots__ = ("_algorithms",)

    def __init__(self, algorithms: Iterable[Algorithm]) -> None:
        items = tuple(algorithms)
        names = [algorithm.name for algorithm in items]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate algorithm names: {', '.join(duplicates)}")
        self._algorithms = items

    def __iter__(self) -> Iterator[Algorithm]:
        return iter(self._algorithms)

    def __len__(self) -> int:
        return len(self._algorithms)

    def __repr__(self) -> str:
        return f"AlgorithmRegistry({', '.join(self.names)})"

    @property
    def names(self) -> list[str]:
        return [algorithm.name for algorithm in self._algorithms]

    def get(self, name: str) -> Algorithm:
        for algorithm in self._algorithms:
            if algorithm.name == name:
                return algorithm
        raise KeyError(f"Unknown algorithm: {name}. Available: {', '.join(self.names)}")

    def select(self, names: Iterable[str]) -> "AlgorithmRegistry":
        """Return a registry narrowed to `names`, keeping registry order."""

        wanted = {name.strip().lower() for name in names if name.strip()}
        unknown = sorted(wanted - set(self.names))
        if unknown:
            raise ValueError(f"Unknown algorithm(s): {', '.join(unknown)}. Available: {', '.join(self.names)}")
        return AlgorithmRegistry(algorithm for algorithm in self._algorithms if algorithm.name in wanted)


def default_registry() -> AlgorithmRegistry:
    """Build the gzip, brotli and zstd catalog."""

    return AlgorithmRegistry(
        [
            Algorithm(name="gzip", levels=GZIP_LEVELS, codec=gzip_codec),
            Algorithm(name="brotli", levels=BROTLI_LEVELS, codec=brotli_codec),
            Algorithm(name="zstd", levels=ZSTD_LEVELS, codec=zstd_codec),
        ]
    )
