"""Binocular receptive-field mapping trials.

A :class:`RFMappingTrial` records where the center cross appears, which eye is
being mapped, and where the saccade target lands.  Trials are immutable;
:func:`new_trial` builds one from an eye-position model and a peripheral
vector, and the predicates :func:`is_crossover` and :func:`is_over_midline`
label finished trials for the generator and for downstream analysis.
"""
from __future__ import annotations

import random
from dataclasses import dataclass

from .codes import ColorCode, Eye, StimColor, stim_code_to_string
from .eye_positions import EyePositions
from .grid import PeripheralVector, Point


class TrialCodeError(ValueError):
    """Raised when a trial carries a color code a classifier cannot handle."""


@dataclass(frozen=True)
class RFMappingTrial:
    """A single stimulus presentation.

    ``ctr_*`` is the center cross, ``per_x_deg``/``per_y_deg`` the absolute
    target, and ``per_a_deg``/``per_r_deg`` the polar values of the original
    target vector (display metadata only).
    """

    color_code: ColorCode
    stim_eye: Eye
    ctr_x_deg: float
    ctr_y_deg: float
    per_x_deg: float
    per_y_deg: float
    per_a_deg: float
    per_r_deg: float

    def is_center_red(self) -> bool:
        return self.color_code.is_center_red()

    def is_center_blue(self) -> bool:
        return self.color_code.is_center_blue()

    def is_periph_red(self) -> bool:
        return self.color_code.is_periph_red()

    def is_periph_blue(self) -> bool:
        return self.color_code.is_periph_blue()

    def __str__(self) -> str:
        return format_trial(self)


def _color_name(color: StimColor) -> str:
    if color is StimColor.RED:
        return "Red"
    if color is StimColor.BLUE:
        return "Blue"
    return "Purple"


def format_trial(trial: RFMappingTrial) -> str:
    """Return a tab-separated, human-readable summary of ``trial``."""

    return (
        f"{_color_name(trial.color_code.center)}\t"
        f"Ctr Deg: ({trial.ctr_x_deg:g}, {trial.ctr_y_deg:g}) \t"
        f"{_color_name(trial.color_code.periphery)}\t"
        f"Per Deg: ({trial.per_x_deg:g}, {trial.per_y_deg:g}) \t"
        f"{int(trial.color_code)}"
    )


def new_trial(
    stim_eye: Eye,
    color_code: ColorCode,
    eye_positions: EyePositions,
    vector: PeripheralVector,
    *,
    use_approx: bool = True,
    rng: random.Random | None = None,
) -> RFMappingTrial:
    """Build a trial for ``stim_eye`` and ``color_code``.

    ``eye_positions`` must already hold the fixation point.  A red center is
    drawn where the right eye fixates, a blue center where the left eye
    fixates, and a purple center picks one of the two with a coin flip.  In
    approximation mode the target vector is added to the position of the
    stimulated eye: its fixating position if it drew the cross, otherwise its
    deviated position.  The same coin flip decides both the cross and the
    offset, so the two always describe one physical trial.
    """

    random_right = (rng or random).random() < 0.5

    if color_code.is_center_red():
        fixating_eye = Eye.RIGHT
    elif color_code.is_center_blue():
        fixating_eye = Eye.LEFT
    else:
        fixating_eye = Eye.RIGHT if random_right else Eye.LEFT

    cross: Point = eye_positions.get_eye_fix(fixating_eye)
    x_targ_deg = vector.x_deg
    y_targ_deg = vector.y_deg

    if use_approx:
        if stim_eye == fixating_eye:
            sacc_eye = cross
        else:
            sacc_eye = eye_positions.get_eye_dev(stim_eye)
        x_targ_deg += sacc_eye.x_deg
        y_targ_deg += sacc_eye.y_deg

    return RFMappingTrial(
        color_code=color_code,
        stim_eye=stim_eye,
        ctr_x_deg=cross.x_deg,
        ctr_y_deg=cross.y_deg,
        per_x_deg=x_targ_deg,
        per_y_deg=y_targ_deg,
        per_a_deg=vector.a_deg,
        per_r_deg=vector.r_deg,
    )


def is_crossover(trial: RFMappingTrial) -> bool:
    """True when the target color belongs to the other eye's filter.

    Purple targets are never crossover.
    """

    periphery = trial.color_code.periphery
    if periphery not in (StimColor.RED, StimColor.BLUE):
        return False
    return periphery is not Eye(trial.stim_eye).natural_color


def is_over_midline(trial: RFMappingTrial, deviation_deg: float) -> bool:
    """True when the target lands across the midline of the fixating eye.

    The target is read from the stimulated eye's line of sight, so a cross
    drawn for the other eye is shifted by the full deviation before the
    comparison.  Only the four plain red/blue codes can be classified.
    """

    half_dev = 0.5 * deviation_deg
    ctr_x_deg = trial.ctr_x_deg
    target_x_deg = trial.per_x_deg + ctr_x_deg

    if trial.stim_eye == Eye.RIGHT and trial.is_center_blue():
        target_x_deg += deviation_deg
    elif trial.stim_eye == Eye.LEFT and trial.is_center_red():
        target_x_deg -= deviation_deg

    code = trial.color_code
    if code is ColorCode.CENTER_RED_PERIPH_RED:
        return target_x_deg < ctr_x_deg - half_dev
    if code is ColorCode.CENTER_RED_PERIPH_BLUE:
        return target_x_deg > ctr_x_deg - half_dev
    if code is ColorCode.CENTER_BLUE_PERIPH_RED:
        return target_x_deg < ctr_x_deg + half_dev
    if code is ColorCode.CENTER_BLUE_PERIPH_BLUE:
        return target_x_deg > ctr_x_deg + half_dev
    raise TrialCodeError(
        f"Bad stim code to is_over_midline(): {stim_code_to_string(code)}"
    )


def angle_to_code(angle_deg: float, offset_deg: float) -> int:
    """Return the single-byte event code for a radial angle.

    The grid offset is removed first and the angle wrapped into [0, 360).
    """

    angle = int(angle_deg - offset_deg) % 360
    return (0x21 + angle // 5) & 0xFF


def radius_to_code(radius_deg: float, offset_deg: float) -> int:
    """Return the single-byte event code for a target radius."""

    return (0x21 + int(radius_deg - offset_deg) // 5) & 0xFF


__all__ = [
    "TrialCodeError",
    "RFMappingTrial",
    "format_trial",
    "new_trial",
    "is_crossover",
    "is_over_midline",
    "angle_to_code",
    "radius_to_code",
]
