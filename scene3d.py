# scene3d.py
# Declarative 3D scene for the planned vs actual well path, plus the Plotly
# adapter that turns it into a figure. build_scene is pure; the Streamlit
# layer mounts the figure with st.plotly_chart.

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import plotly.graph_objects as go

from config_types import AxisSpec, ColorPolicy, SceneConfig
from deviation import DeviationResult
from wellpath import Position3D, ShapeMismatchError, as_positions

logger = logging.getLogger(__name__)

WITHIN_LABEL = "Within Threshold"
BEYOND_LABEL = "Beyond Threshold"


@dataclass(frozen=True)
class Polyline:
    name: str
    vertices: tuple[Position3D, ...]
    colors: tuple[str, ...]  # one per vertex
    line_width: int
    marker_size: int


@dataclass(frozen=True)
class LegendEntry:
    name: str
    color: str
    line_width: int


@dataclass(frozen=True)
class SceneDescription:
    planned: Polyline
    actual: Polyline
    legend: tuple[LegendEntry, ...]
    x_axis: AxisSpec
    y_axis: AxisSpec
    z_axis: AxisSpec
    camera_eye: tuple[float, float, float]
    config: SceneConfig


def vertex_colors(deviations: Sequence[DeviationResult], palette: ColorPolicy) -> tuple[str, ...]:
    return tuple(palette.beyond if d.exceeds_threshold else palette.within for d in deviations)


def build_scene(planned: Sequence, actual: Sequence, deviations: Sequence[DeviationResult],
                palette: ColorPolicy, scene_config: Optional[SceneConfig] = None) -> SceneDescription:
    """
    Assemble the scene for one trajectory snapshot.

    Actual-path colours come only from deviations[i].exceeds_threshold.
    Axis ranges and camera are taken from scene_config as-is (no auto-fit).
    """
    cfg = scene_config or SceneConfig()
    planned = as_positions(planned, "planned")
    actual = as_positions(actual, "actual")
    if len(deviations) != len(actual):
        raise ShapeMismatchError(
            f"{len(deviations)} deviation results for {len(actual)} actual samples")
    if len(planned) != len(actual):
        raise ShapeMismatchError(
            f"planned has {len(planned)} samples but actual has {len(actual)}")

    planned_line = Polyline(
        name="Planned Path",
        vertices=planned,
        colors=(palette.planned,) * len(planned),
        line_width=cfg.line_width,
        marker_size=cfg.planned_marker_size,
    )
    actual_line = Polyline(
        name="Actual Path",
        vertices=actual,
        colors=vertex_colors(deviations, palette),
        line_width=cfg.line_width,
        marker_size=cfg.marker_size,
    )
    # legend-only entries so both categories show even if every sample is in one
    legend = (
        LegendEntry(WITHIN_LABEL, palette.within, cfg.line_width),
        LegendEntry(BEYOND_LABEL, palette.beyond, cfg.line_width),
    )

    logger.debug("Built scene with %d vertices per path", len(actual))
    return SceneDescription(
        planned=planned_line,
        actual=actual_line,
        legend=legend,
        x_axis=cfg.x_axis,
        y_axis=cfg.y_axis,
        z_axis=cfg.z_axis,
        camera_eye=cfg.camera_eye,
        config=cfg,
    )


def _xyz(vertices):
    return ([p.x for p in vertices], [p.y for p in vertices], [p.z for p in vertices])


def _polyline_trace(line: Polyline) -> go.Scatter3d:
    x, y, z = _xyz(line.vertices)
    colors = list(line.colors)
    return go.Scatter3d(
        x=x, y=y, z=z, mode="lines+markers", name=line.name,
        line=dict(color=colors, width=line.line_width),
        marker=dict(size=line.marker_size, color=colors),
    )


def _axis_layout(axis: AxisSpec, cfg: SceneConfig) -> dict:
    return dict(
        title=dict(text=axis.title, font=dict(color=cfg.title_color)),
        tickfont=dict(color=cfg.font_color),
        range=list(axis.range),
    )


def scene_to_figure(scene: SceneDescription) -> go.Figure:
    """Plotly figure for a SceneDescription (traces: planned, actual, then legend entries)."""
    cfg = scene.config
    fig = go.Figure()
    fig.add_trace(_polyline_trace(scene.planned))
    fig.add_trace(_polyline_trace(scene.actual))
    for entry in scene.legend:
        fig.add_trace(go.Scatter3d(
            x=[None], y=[None], z=[None], mode="lines", name=entry.name,
            line=dict(color=entry.color, width=entry.line_width), showlegend=True,
        ))

    ex, ey, ez = scene.camera_eye
    fig.update_layout(
        scene=dict(
            xaxis=_axis_layout(scene.x_axis, cfg),
            yaxis=_axis_layout(scene.y_axis, cfg),
            zaxis=_axis_layout(scene.z_axis, cfg),
            bgcolor=cfg.background,
            camera=dict(eye=dict(x=ex, y=ey, z=ez)),
        ),
        paper_bgcolor=cfg.background,
        plot_bgcolor=cfg.background,
        font=dict(color=cfg.font_color),
        legend=dict(font=dict(color=cfg.title_color, size=12), bgcolor=cfg.legend_background,
                    bordercolor=cfg.legend_border, borderwidth=1, x=0.02, y=0.98),
        margin=dict(l=0, r=0, t=0, b=0),
    )
    return fig
