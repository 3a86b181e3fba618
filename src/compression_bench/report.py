"""Markdown report builder for benchmark runs."""

from __future__ import annotations

from compression_bench.models import FileResult, RunResult
from compression_bench.utils.time_utils import utc_iso_string

DEFAULT_TITLE = "Compression Benchmark"
INTRO = (
    "This benchmark measures compression time, output size, and compression ratios for files "
    "shipped by several popular Python packages across all gzip, Brotli, and Zstandard "
    "compression levels."
)
TABLE_HEADER = "| Algorithm | Level | Time (ms) | Size (bytes) | Compression Ratio |"
TABLE_DIVIDER = "| --- | --- | --- | --- | --- |"


def format_number(value: float, fraction_digits: int = 3) -> str:
    return f"{float(value):.{fraction_digits}f}"


def render_file_section(file_result: FileResult) -> list[str]:
    """Render one artifact section: header, sizes, chart link and measurement table."""

    lines: list[str] = []
    lines.append(f"## {file_result.display_name}")
    lines.append("")
    lines.append(f"- Original size: {file_result.original_size} bytes")
    if file_result.chart_path:
        lines.append(
            f"- Chart: ![Compression ratio chart for {file_result.display_name}]({file_result.chart_path})"
        )
    lines.append("")
    lines.append(TABLE_HEADER)
    lines.append(TABLE_DIVIDER)
    for algorithm in file_result.algorithms:
        for measurement in algorithm.measurements:
            lines.append(
                f"| {algorithm.name} | {measurement.level} | {format_number(measurement.time)} | "
                f"{measurement.size} | {format_number(measurement.ratio, 4)} |"
            )
    lines.append("")
    return lines


def render_markdown_report(run_result: RunResult, *, title: str = DEFAULT_TITLE) -> str:
    """Render the full benchmark report, one section per artifact in run order."""

    lines: list[str] = []
    lines.append(f"# {title}")
    lines.append("")
    lines.append(f"Last updated: {utc_iso_string(run_result.generated_at)}")
    lines.append("")
    lines.append(INTRO)
    lines.append("")
    for file_result in run_result.files:
        lines.extend(render_file_section(file_result))
    return "\n".join(lines)
