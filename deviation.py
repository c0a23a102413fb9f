# deviation.py
# Planned-vs-actual deviation analysis: per-sample lateral and angular
# deviation, threshold flags, dashboard summary and a tabular view.
# Pure functions over index-aligned position sequences; no I/O.

from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from config_types import AngularBands, ThresholdConfig
from wellpath import (
    EmptyInputError,
    ShapeMismatchError,
    angle_between_deg,
    as_positions,
    segment_tangents,
)

logger = logging.getLogger(__name__)

CM_PER_M = 100.0


@dataclass(frozen=True)
class DeviationResult:
    index: int
    lateral_deviation_cm: float
    angular_deviation_deg: Optional[float]  # None = undefined (first sample, zero-length segment)
    exceeds_threshold: bool
    exceeds_angular_threshold: bool = False


@dataclass(frozen=True)
class DeviationSummary:
    sample_count: int
    current_lateral_cm: float
    max_lateral_cm: float
    max_lateral_index: int
    current_angular_deg: Optional[float]
    exceedance_count: int
    angular_status: str
    dogleg_severity: Optional[float] = None


def _check_pair(planned, actual):
    planned = as_positions(planned, "planned")
    actual = as_positions(actual, "actual")
    if not planned or not actual:
        raise EmptyInputError("planned and actual paths must each hold at least one sample")
    if len(planned) != len(actual):
        raise ShapeMismatchError(
            f"planned has {len(planned)} samples but actual has {len(actual)}")
    return planned, actual


def lateral_deviation_cm(planned_pt, actual_pt) -> float:
    # Horizontal (x, y) offset only; z is along-hole and not part of drift.
    dx = actual_pt[0] - planned_pt[0]
    dy = actual_pt[1] - planned_pt[1]
    return math.hypot(dx, dy) * CM_PER_M


def angular_deviations(planned, actual) -> list[Optional[float]]:
    """
    Angle (deg) between the planned and actual segment arriving at each sample.
    Sample 0 has no preceding segment and is None; so is any sample where
    either segment has zero length.
    """
    t_plan = segment_tangents(planned)
    t_act = segment_tangents(actual)
    out: list[Optional[float]] = [None]
    for u, v in zip(t_plan, t_act):
        out.append(angle_between_deg(u, v))
    return out


def analyze(planned: Sequence, actual: Sequence,
            config: ThresholdConfig) -> tuple[DeviationResult, ...]:
    """
    Per-sample deviation of the actual path from the planned path.

    Raises EmptyInputError, ShapeMismatchError or InvalidValueError before
    any result is produced.
    """
    planned, actual = _check_pair(planned, actual)
    lateral = [lateral_deviation_cm(p, a) for p, a in zip(planned, actual)]
    angles = angular_deviations(planned, actual)

    results = tuple(
        DeviationResult(
            index=i,
            lateral_deviation_cm=lat,
            angular_deviation_deg=ang,
            exceeds_threshold=lat > config.lateral_threshold_cm,
            exceeds_angular_threshold=ang is not None and ang > config.angular_threshold_deg,
        )
        for i, (lat, ang) in enumerate(zip(lateral, angles))
    )

    logger.debug("Analyzed %d samples: %d beyond %.2f cm lateral threshold",
                 len(results), sum(r.exceeds_threshold for r in results),
                 config.lateral_threshold_cm)
    return results


def classify_angular(angle_deg: Optional[float], bands: AngularBands) -> str:
    if angle_deg is None:
        return "undefined"
    if angle_deg < bands.caution_deg:
        return "ok"
    if angle_deg <= bands.critical_deg:
        return "caution"
    return "critical"


def summarize(deviations: Sequence[DeviationResult], bands: AngularBands = AngularBands(),
              dogleg_severity: Optional[float] = None) -> DeviationSummary:
    """Scalars for the dashboard cards. Dogleg severity is an external reading passed through."""
    if not deviations:
        raise EmptyInputError("no deviation results to summarize")

    lateral = [d.lateral_deviation_cm for d in deviations]
    i_max = int(np.argmax(lateral))
    defined = [d.angular_deviation_deg for d in deviations if d.angular_deviation_deg is not None]
    current_ang = defined[-1] if defined else None

    return DeviationSummary(
        sample_count=len(deviations),
        current_lateral_cm=lateral[-1],
        max_lateral_cm=lateral[i_max],
        max_lateral_index=deviations[i_max].index,
        current_angular_deg=current_ang,
        exceedance_count=sum(d.exceeds_threshold for d in deviations),
        angular_status=classify_angular(current_ang, bands),
        dogleg_severity=dogleg_severity,
    )


def results_frame(planned, actual, deviations: Sequence[DeviationResult]) -> pd.DataFrame:
    # One row per sample for tables and downloads; undefined angles become NaN here only
    planned, actual = _check_pair(planned, actual)
    if len(deviations) != len(actual):
        raise ShapeMismatchError(
            f"{len(deviations)} deviation results for {len(actual)} samples")

    p = np.asarray(planned, dtype=float)
    a = np.asarray(actual, dtype=float)
    return pd.DataFrame({
        "index": [d.index for d in deviations],
        "planned_x": p[:, 0], "planned_y": p[:, 1], "planned_z": p[:, 2],
        "actual_x": a[:, 0], "actual_y": a[:, 1], "actual_z": a[:, 2],
        "lateral_dev_cm": [d.lateral_deviation_cm for d in deviations],
        "angular_dev_deg": [np.nan if d.angular_deviation_deg is None else d.angular_deviation_deg
                            for d in deviations],
        "exceeds_threshold": [d.exceeds_threshold for d in deviations],
        "exceeds_angular_threshold": [d.exceeds_angular_threshold for d in deviations],
    })
