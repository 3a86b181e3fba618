"""Algorithm x level sweep over a single in-memory buffer."""

from __future__ import annotations

import logging
import time
from typing import Callable

from compression_bench.algorithms import AlgorithmRegistry
from compression_bench.models import AlgorithmResult, Measurement

LOGGER = logging.getLogger(__name__)

Timer = Callable[[], float]


def sweep_buffer(
    raw: bytes,
    registry: AlgorithmRegistry,
    *,
    timer: Timer = time.perf_counter,
    label: str = "buffer",
    logger: logging.Logger | None = None,
    progress_level: int = logging.INFO,
) -> tuple[AlgorithmResult, ...]:
    """Compress `raw` with every algorithm at every declared level.

    Each call is timed once with `timer` (seconds, monotonic) and reported in
    milliseconds. A CompressionError from any call aborts the whole sweep.
    """

    effective_logger = logger or LOGGER
    original_size = len(raw)
    if original_size == 0:
        raise ValueError(f"Cannot sweep empty input ({label}): compression ratio is undefined.")

    results: list[AlgorithmResult] = []
    for algorithm in registry:
        measurements: list[Measurement] = []
        for level in algorithm.levels:
            start = timer()
            compressed = algorithm.compress(raw, level)
            end = timer()

            size = len(compressed)
            measurements.append(
                Measurement(
                    level=level,
                    time=max(0.0, (end - start) * 1000.0),
                    size=size,
                    ratio=size / original_size,
                )
            )
            effective_logger.debug(
                "sweep.level artifact=%s algorithm=%s level=%s size=%s",
                label,
                algorithm.name,
                level,
                size,
            )

        results.append(AlgorithmResult(name=algorithm.name, measurements=tuple(measurements)))
        effective_logger.log(
            progress_level,
            "sweep.algorithm_done artifact=%s algorithm=%s levels=%s",
            label,
            algorithm.name,
            len(measurements),
        )
    return tuple(results)
