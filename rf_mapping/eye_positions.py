"""Fixating and deviated eye positions for strabismic approximation.

The helpers here convert a nominal fixation point into the apparent position
of each eye.  Every model caches one point at a time: call
:meth:`EyePositions.set_point` with the fixation location, then query the
``get_*`` accessors for the eye you need.  For example, for a red center cross
(right eye) at the origin::

    model = CyclopeanEyePositions(deviation_deg=10.0)
    model.set_point(0.0, 0.0)
    cross = model.get_right_eye_fix()

``*_fix`` accessors give the position of an eye when it is the one looking at
the cross; ``*_dev`` accessors give its position when the other eye fixates.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional

from .codes import Eye
from .grid import Point

GazeSource = Callable[[Eye], Point]


class EyePositions(ABC):
    """Base class holding the cached point and the fixed ocular deviation."""

    def __init__(self, deviation_deg: float) -> None:
        self._deviation_deg = float(deviation_deg)
        self._x_deg = 0.0
        self._y_deg = 0.0

    def set_point(self, x_deg: float, y_deg: float) -> None:
        """Cache a new fixation point."""

        self._x_deg = float(x_deg)
        self._y_deg = float(y_deg)

    def get_deviation(self) -> float:
        return self._deviation_deg

    @property
    def point(self) -> Point:
        return Point(self._x_deg, self._y_deg)

    @abstractmethod
    def get_left_eye_fix(self) -> Point: ...

    @abstractmethod
    def get_right_eye_fix(self) -> Point: ...

    @abstractmethod
    def get_left_eye_dev(self) -> Point: ...

    @abstractmethod
    def get_right_eye_dev(self) -> Point: ...

    def get_eye_fix(self, eye: Eye) -> Point:
        if eye is Eye.RIGHT:
            return self.get_right_eye_fix()
        return self.get_left_eye_fix()

    def get_eye_dev(self, eye: Eye) -> Point:
        if eye is Eye.RIGHT:
            return self.get_right_eye_dev()
        return self.get_left_eye_dev()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(deviation_deg={self._deviation_deg}, "
            f"point=({self._x_deg}, {self._y_deg}))"
        )


class CyclopeanEyePositions(EyePositions):
    """Both eyes sit half a deviation either side of the cached point.

    Fixation and deviation positions are identical for each eye.
    """

    def get_left_eye_fix(self) -> Point:
        return Point(self._x_deg - 0.5 * self._deviation_deg, self._y_deg)

    def get_right_eye_fix(self) -> Point:
        return Point(self._x_deg + 0.5 * self._deviation_deg, self._y_deg)

    def get_left_eye_dev(self) -> Point:
        return self.get_left_eye_fix()

    def get_right_eye_dev(self) -> Point:
        return self.get_right_eye_fix()


class RandomEyePositions(EyePositions):
    """One eye fixates the cached point and the other is deviated.

    Which eye fixates is not stored here.  Trial construction picks it from
    the center color: the eye whose ``*_fix`` accessor drew the cross is the
    fixating one, and the other eye is read through its ``*_dev`` accessor,
    offset by the full deviation (right eye to the right, left eye to the
    left).
    """

    def get_left_eye_fix(self) -> Point:
        return self.point

    def get_right_eye_fix(self) -> Point:
        return self.point

    def get_left_eye_dev(self) -> Point:
        return Point(self._x_deg - self._deviation_deg, self._y_deg)

    def get_right_eye_dev(self) -> Point:
        return Point(self._x_deg + self._deviation_deg, self._y_deg)


class TrackedEyePositions(EyePositions):
    """Real-time tracking variant.

    The center cross still uses the nominal fixation positions of
    ``fallback``; deviated positions come from ``gaze_source``, a callable
    returning the latest tracked position for an eye.
    """

    def __init__(
        self,
        deviation_deg: float,
        gaze_source: GazeSource,
        fallback: Optional[EyePositions] = None,
    ) -> None:
        if gaze_source is None:
            raise ValueError("TrackedEyePositions requires a gaze source")
        super().__init__(deviation_deg)
        self._gaze_source = gaze_source
        self._fallback = fallback or RandomEyePositions(deviation_deg)

    def set_point(self, x_deg: float, y_deg: float) -> None:
        super().set_point(x_deg, y_deg)
        self._fallback.set_point(x_deg, y_deg)

    def get_left_eye_fix(self) -> Point:
        return self._fallback.get_left_eye_fix()

    def get_right_eye_fix(self) -> Point:
        return self._fallback.get_right_eye_fix()

    def get_left_eye_dev(self) -> Point:
        return self._gaze_source(Eye.LEFT)

    def get_right_eye_dev(self) -> Point:
        return self._gaze_source(Eye.RIGHT)


EYE_MODELS = ("cyclopean", "random", "tracked")


def make_eye_positions(
    model: str,
    deviation_deg: float,
    gaze_source: Optional[GazeSource] = None,
) -> EyePositions:
    """Return the eye-position strategy named by ``model``."""

    name = (model or "").strip().lower()
    if name == "cyclopean":
        return CyclopeanEyePositions(deviation_deg)
    if name == "random":
        return RandomEyePositions(deviation_deg)
    if name == "tracked":
        if gaze_source is None:
            raise ValueError("Eye model 'tracked' needs a gaze source")
        return TrackedEyePositions(deviation_deg, gaze_source)
    raise ValueError(
        f"Unknown eye model '{model}'. Expected one of: {', '.join(EYE_MODELS)}"
    )


__all__ = [
    "EyePositions",
    "CyclopeanEyePositions",
    "RandomEyePositions",
    "TrackedEyePositions",
    "EYE_MODELS",
    "make_eye_positions",
]
