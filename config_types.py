"""
Configuration types for deviation analysis and the 3D path scene.

All values are passed explicitly into deviation.analyze / scene3d.build_scene
so thresholds and framing can vary per well without touching module state.

Usage:
    thresholds = ThresholdConfig.from_dict({"lateral_threshold_cm": 20})
    palette = ColorPolicy()
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple
import math


def _require_non_negative(name: str, value: float) -> None:
    if not isinstance(value, (int, float)) or not math.isfinite(value) or value < 0:
        raise ValueError(f"{name} must be a finite non-negative number, got {value!r}")


# ============================================================================
# THRESHOLDS
# ============================================================================


@dataclass(frozen=True)
class ThresholdConfig:
    """
    Deviation alert thresholds.

    Attributes:
        lateral_threshold_cm: Lateral deviation above which a sample is
            flagged (strictly greater).
        angular_threshold_deg: Angular deviation above which a sample is
            flagged (strictly greater).
    """

    lateral_threshold_cm: float = 15.0
    angular_threshold_deg: float = 2.0

    def __post_init__(self) -> None:
        _require_non_negative("lateral_threshold_cm", self.lateral_threshold_cm)
        _require_non_negative("angular_threshold_deg", self.angular_threshold_deg)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ThresholdConfig":
        """Create ThresholdConfig from a plain dictionary."""
        return cls(
            lateral_threshold_cm=float(d.get("lateral_threshold_cm", 15.0)),
            angular_threshold_deg=float(d.get("angular_threshold_deg", 2.0)),
        )


@dataclass(frozen=True)
class AngularBands:
    """Status bands for the deviation dial (ok / caution / critical)."""

    caution_deg: float = 3.0
    critical_deg: float = 5.0

    def __post_init__(self) -> None:
        _require_non_negative("caution_deg", self.caution_deg)
        _require_non_negative("critical_deg", self.critical_deg)
        if self.critical_deg < self.caution_deg:
            raise ValueError("critical_deg must be >= caution_deg")

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "AngularBands":
        return cls(
            caution_deg=float(d.get("caution_deg", 3.0)),
            critical_deg=float(d.get("critical_deg", 5.0)),
        )


# ============================================================================
# COLOURS AND SCENE FRAMING
# ============================================================================


@dataclass(frozen=True)
class ColorPolicy:
    """Colours for the actual path (per threshold state) and the planned path."""

    within: str = "#EAB308"
    beyond: str = "#EF4444"
    planned: str = "#10B981"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ColorPolicy":
        return cls(
            within=d.get("within", "#EAB308"),
            beyond=d.get("beyond", "#EF4444"),
            planned=d.get("planned", "#10B981"),
        )


@dataclass(frozen=True)
class AxisSpec:
    title: str
    range: Tuple[float, float]


@dataclass(frozen=True)
class SceneConfig:
    """
    Static framing and styling for the 3D path scene.

    Ranges and camera are fixed; the scene never auto-fits to the data.
    """

    x_axis: AxisSpec = AxisSpec("X (meters)", (-8.0, 1.0))
    y_axis: AxisSpec = AxisSpec("Y (meters)", (-0.5, 1.0))
    z_axis: AxisSpec = AxisSpec("Depth (meters)", (-8.0, 0.5))
    camera_eye: Tuple[float, float, float] = (1.2, 1.2, 0.8)
    line_width: int = 6
    marker_size: int = 6
    planned_marker_size: int = 5
    background: str = "rgba(17, 24, 39, 1)"
    font_color: str = "#9CA3AF"
    title_color: str = "#FFFFFF"
    legend_background: str = "rgba(31, 41, 55, 0.9)"
    legend_border: str = "#4B5563"

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]] = None) -> "SceneConfig":
        """Create SceneConfig from a dictionary; ranges given as [lo, hi] lists."""
        d = d or {}
        base = cls()

        def _axis(key: str, default: AxisSpec) -> AxisSpec:
            spec = d.get(key)
            if spec is None:
                return default
            lo, hi = spec.get("range", default.range)
            return AxisSpec(spec.get("title", default.title), (float(lo), float(hi)))

        return cls(
            x_axis=_axis("x_axis", base.x_axis),
            y_axis=_axis("y_axis", base.y_axis),
            z_axis=_axis("z_axis", base.z_axis),
            camera_eye=tuple(d.get("camera_eye", base.camera_eye)),
            line_width=int(d.get("line_width", base.line_width)),
            marker_size=int(d.get("marker_size", base.marker_size)),
            planned_marker_size=int(d.get("planned_marker_size", base.planned_marker_size)),
            background=d.get("background", base.background),
            font_color=d.get("font_color", base.font_color),
        )
