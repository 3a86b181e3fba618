"""Plotly chart builders for per-artifact compression ratio curves."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import plotly.graph_objects as go

from compression_bench.models import FileResult

_SERIES_COLORS = [
    "#0d6efd",
    "#ff7f0e",
    "#2ca02c",
    "#d62728",
    "#9467bd",
    "#8c564b",
]


@dataclass(frozen=True, slots=True)
class ChartSeries:
    label: str
    points: tuple[tuple[int, float], ...]


@dataclass(frozen=True, slots=True)
class ChartSpec:
    """Declarative line chart: one series per algorithm, x = level, y = ratio."""

    title: str
    series: tuple[ChartSeries, ...]
    x_title: str = "Compression Level"
    y_title: str = "Compression Ratio"


ChartRenderer = Callable[[ChartSpec], bytes]


def build_chart_spec(file_result: FileResult) -> ChartSpec:
    """Describe the ratio-by-level chart for one artifact."""

    return ChartSpec(
        title=f"{file_result.display_name} Compression Ratio",
        series=tuple(
            ChartSeries(
                label=algorithm.name.upper(),
                points=tuple((measurement.level, measurement.ratio) for measurement in algorithm.measurements),
            )
            for algorithm in file_result.algorithms
        ),
    )


def build_figure(spec: ChartSpec) -> go.Figure:
    fig = go.Figure()
    for index, series in enumerate(spec.series):
        fig.add_trace(
            go.Scatter(
                x=[level for level, _ in series.points],
                y=[ratio for _, ratio in series.points],
                mode="lines+markers",
                line={"color": _SERIES_COLORS[index % len(_SERIES_COLORS)], "width": 2, "shape": "spline", "smoothing": 0.4},
                marker={"size": 5},
                name=series.label,
                hovertemplate=f"{series.label} (level %{{x}}): %{{y:.4f}}<extra></extra>",
            )
        )

    fig.update_layout(
        template="plotly_white",
        title={"text": spec.title, "x": 0.5, "xanchor": "center"},
        margin={"l": 60, "r": 25, "t": 60, "b": 40},
        legend={"orientation": "h", "yanchor": "top", "y": -0.15, "xanchor": "center", "x": 0.5},
        paper_bgcolor="white",
        plot_bgcolor="white",
    )
    fig.update_xaxes(title_text=spec.x_title, tickmode="linear", dtick=1, tickformat="d")
    fig.update_yaxes(title_text=spec.y_title)
    return fig


@dataclass(frozen=True, slots=True)
class PlotlyChartRenderer:
    """Render a ChartSpec to image bytes through plotly's static export (kaleido)."""

    width: int = 960
    height: int = 480
    image_format: str = "svg"

    def __call__(self, spec: ChartSpec) -> bytes:
        fig = build_figure(spec)
        return fig.to_image(format=self.image_format, width=self.width, height=self.height)
