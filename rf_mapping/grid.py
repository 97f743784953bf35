"""Fixation and peripheral target grids for receptive-field mapping.

Two kinds of grid are used when generating trials.  A :class:`FixationGrid`
holds the absolute locations (in degrees of visual angle) where the center
cross is drawn.  A :class:`RadialGrid` holds the saccade target *vectors*,
expressed as a compass angle plus radius and resolved to x/y offsets from the
fixation point.  Both are finite and restartable: every call to ``iter()``
returns a fresh cursor, so the generator can sweep the peripheral grid once per
fixation point.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence

from psychopy.tools.coordinatetools import pol2cart

# ---------------------------------------------------------------------------
# Default spacings (degrees)
# ---------------------------------------------------------------------------

DEFAULT_SEPARATION_HORIZONTAL: float = 30.0
DEFAULT_SEPARATION_VERTICAL: float = 15.0
DEFAULT_ANGLE_STEP: float = 45.0


@dataclass(frozen=True)
class Point:
    """A location in degrees of visual angle."""

    x_deg: float
    y_deg: float


@dataclass(frozen=True)
class PeripheralVector:
    """Saccade target offset plus the polar values it was built from.

    ``a_deg``/``r_deg`` are kept for display and event codes; they are never
    recomputed from ``x_deg``/``y_deg``.
    """

    x_deg: float
    y_deg: float
    a_deg: float
    r_deg: float


class FixationGrid:
    """Ordered collection of fixation-cross locations."""

    def __init__(self, points: Iterable[Point] = ()) -> None:
        self._points: List[Point] = list(points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __repr__(self) -> str:
        return f"FixationGrid({len(self._points)} points)"


class RadialGrid:
    """Ordered collection of peripheral target vectors."""

    def __init__(self, vectors: Iterable[PeripheralVector] = ()) -> None:
        self._vectors: List[PeripheralVector] = list(vectors)

    def __iter__(self) -> Iterator[PeripheralVector]:
        return iter(self._vectors)

    def __len__(self) -> int:
        return len(self._vectors)

    def __repr__(self) -> str:
        return f"RadialGrid({len(self._vectors)} vectors)"


def peripheral_vector(angle_deg: float, radius_deg: float) -> PeripheralVector:
    """Resolve a compass angle and radius into a :class:`PeripheralVector`."""

    x_deg, y_deg = pol2cart(angle_deg, radius_deg, units="deg")
    return PeripheralVector(
        x_deg=float(x_deg),
        y_deg=float(y_deg),
        a_deg=float(angle_deg),
        r_deg=float(radius_deg),
    )


def make_fixation_grid(
    columns: int = 1,
    rows: int = 1,
    h_separation_deg: float = DEFAULT_SEPARATION_HORIZONTAL,
    v_separation_deg: float = DEFAULT_SEPARATION_VERTICAL,
) -> FixationGrid:
    """Return a rectangular grid centred on the origin.

    Points are ordered row by row, top row first, left to right.  A 1x1 grid
    is the single point ``(0, 0)``; zero rows or columns give an empty grid.
    """

    x_start = -0.5 * (columns - 1) * h_separation_deg
    y_start = 0.5 * (rows - 1) * v_separation_deg
    points = [
        Point(x_start + col * h_separation_deg, y_start - row * v_separation_deg)
        for row in range(max(0, rows))
        for col in range(max(0, columns))
    ]
    return FixationGrid(points)


def make_radial_grid(
    radii_deg: Sequence[float],
    angle_step_deg: float = DEFAULT_ANGLE_STEP,
    angle_offset_deg: float = 0.0,
) -> RadialGrid:
    """Return target vectors on concentric rings.

    Each ring in ``radii_deg`` receives ``360 / angle_step_deg`` targets
    starting at ``angle_offset_deg``.  Angles carry the offset so event codes
    can be derived later with :func:`rf_mapping.trial.angle_to_code`.
    """

    if angle_step_deg <= 0:
        raise ValueError("Angle step must be positive")

    steps = int(round(360.0 / angle_step_deg))
    vectors = [
        peripheral_vector(angle_offset_deg + step * angle_step_deg, radius)
        for radius in radii_deg
        for step in range(steps)
    ]
    return RadialGrid(vectors)


__all__ = [
    "DEFAULT_SEPARATION_HORIZONTAL",
    "DEFAULT_SEPARATION_VERTICAL",
    "DEFAULT_ANGLE_STEP",
    "Point",
    "PeripheralVector",
    "FixationGrid",
    "RadialGrid",
    "peripheral_vector",
    "make_fixation_grid",
    "make_radial_grid",
]
