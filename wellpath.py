# wellpath.py
# Position types, input checks and segment geometry for planned/actual
# well paths. Coordinates are metres: x East, y North, z elevation from the
# collar (0 at surface, negative downhole). ASCII-only.

from __future__ import annotations
import logging
import math
from typing import Iterable, NamedTuple, Sequence

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

RAD2DEG = 180.0 / math.pi

# header aliases accepted from uploaded tables
_COLUMN_ALIASES = {
    "east": "x", "e": "x", "easting": "x",
    "north": "y", "n": "y", "northing": "y",
    "tvd": "z", "depth": "z", "elev": "z", "elevation": "z",
}


class DeviationError(ValueError):
    """Base class for trajectory input errors."""


class ShapeMismatchError(DeviationError):
    """Planned/actual (or derived) sequences are not index-aligned."""


class EmptyInputError(DeviationError):
    """A trajectory with zero samples was supplied."""


class InvalidValueError(DeviationError):
    """A coordinate is NaN or infinite."""


class Position3D(NamedTuple):
    x: float
    y: float
    z: float


def _check_finite(values, what: str) -> None:
    for v in values:
        if not math.isfinite(v):
            raise InvalidValueError(f"{what}: non-finite coordinate {v!r}")


def as_position(p, what: str = "position") -> Position3D:
    if isinstance(p, Position3D):
        coords = tuple(p)
    else:
        coords = tuple(float(c) for c in p)
        if len(coords) != 3:
            raise ShapeMismatchError(f"{what}: expected 3 coordinates, got {len(coords)}")
    _check_finite(coords, what)
    return Position3D(*(float(c) for c in coords))


def as_positions(seq: Iterable, name: str = "path") -> tuple[Position3D, ...]:
    """Coerce an iterable of (x, y, z) triples into an immutable tuple of
    Position3D, failing fast on wrong arity or non-finite values."""
    return tuple(as_position(p, f"{name}[{i}]") for i, p in enumerate(seq))


def normalize_depth(positions: Sequence, positive_down: bool) -> tuple[Position3D, ...]:
    # Sources that record depth as a positive accumulator get z negated so
    # the whole project sees elevation (negative = deeper).
    pts = as_positions(positions)
    if not positive_down:
        return pts
    return tuple(Position3D(p.x, p.y, -p.z) for p in pts)


def _normalize_headers(df: pd.DataFrame) -> pd.DataFrame:
    out = df.copy()
    out.columns = [str(c).strip().lower() for c in out.columns]
    return out


def positions_from_frame(df: pd.DataFrame, x: str = "x", y: str = "y", z: str = "z",
                         positive_down: bool = False) -> tuple[Position3D, ...]:
    """
    Read a path from DataFrame columns. Headers are stripped and lowercased;
    when x/y/z are the defaults, the usual aliases (east/north/tvd...) are
    accepted too.
    """
    df = _normalize_headers(df)
    cols = [x.lower(), y.lower(), z.lower()]
    if cols == ["x", "y", "z"]:
        alias = {c: _COLUMN_ALIASES[c] for c in df.columns
                 if c in _COLUMN_ALIASES and _COLUMN_ALIASES[c] not in df.columns}
        df = df.rename(columns=alias)
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise KeyError(f"missing column(s): {', '.join(missing)}")
    arr = df[cols].to_numpy(dtype=float)
    return normalize_depth([tuple(row) for row in arr], positive_down)


def paths_from_frame(df: pd.DataFrame, positive_down: bool = False):
    """Split a combined table (planned_x .. actual_z) into planned and actual paths."""
    df = _normalize_headers(df)
    planned = positions_from_frame(df, "planned_x", "planned_y", "planned_z", positive_down)
    actual = positions_from_frame(df, "actual_x", "actual_y", "actual_z", positive_down)
    logger.debug("Loaded %d planned / %d actual samples from table", len(planned), len(actual))
    return planned, actual


def to_array(positions: Sequence[Position3D]) -> np.ndarray:
    return np.asarray(positions, dtype=float).reshape(-1, 3)


def segment_tangents(positions: Sequence[Position3D]) -> np.ndarray:
    # Difference vectors from sample i-1 to i; shape (n-1, 3)
    return np.diff(to_array(positions), axis=0)


def angle_between_deg(u: np.ndarray, v: np.ndarray) -> float | None:
    """Angle between two vectors in degrees, or None if either has zero length."""
    nu = float(np.linalg.norm(u))
    nv = float(np.linalg.norm(v))
    if nu < 1e-12 or nv < 1e-12:
        return None
    cos_a = float(np.dot(u, v)) / (nu * nv)
    # Clamp for safety
    cos_a = max(-1.0, min(1.0, cos_a))
    return math.acos(cos_a) * RAD2DEG


# Sample dataset shown by the dashboard: vertical plan to 7 m, actual path
# drifting west/north.
DEMO_PLANNED = as_positions(zip(
    [0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0],
    [0, -1, -2, -3, -4, -5, -6, -7],
))

DEMO_ACTUAL = as_positions(zip(
    [0, -0.1, -0.1, -0.1, -0.3, -0.35, -0.4, -0.5],
    [0, 0.05, 0.08, 0.1, 0.12, 0.15, 0.18, 0.2],
    [0, -1.05, -2.0, -3.0, -4.05, -5.05, -6.0, -7.0],
))
