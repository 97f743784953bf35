from __future__ import annotations

import dataclasses

import pytest

from rf_mapping.codes import PLAIN_CODES, ColorCode, Eye, StimColor, stim_code_to_string
from rf_mapping.eye_positions import CyclopeanEyePositions, RandomEyePositions
from rf_mapping.grid import PeripheralVector
from rf_mapping.trial import (
    RFMappingTrial,
    TrialCodeError,
    angle_to_code,
    is_crossover,
    is_over_midline,
    new_trial,
    radius_to_code,
)

VECTOR = PeripheralVector(x_deg=4.0, y_deg=-2.0, a_deg=333.0, r_deg=4.5)


class FixedRng:
    """Stand-in for random.Random that always draws the same value."""

    def __init__(self, value: float) -> None:
        self.value = value
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self.value


def make_trial(code, eye, ctr_x=0.0, per_x=0.0):
    return RFMappingTrial(
        color_code=code,
        stim_eye=eye,
        ctr_x_deg=ctr_x,
        ctr_y_deg=0.0,
        per_x_deg=per_x,
        per_y_deg=0.0,
        per_a_deg=0.0,
        per_r_deg=0.0,
    )


def random_model(deviation=10.0):
    model = RandomEyePositions(deviation)
    model.set_point(0.0, 0.0)
    return model


def test_color_code_components():
    assert ColorCode.CENTER_RED_PERIPH_BLUE.center is StimColor.RED
    assert ColorCode.CENTER_RED_PERIPH_BLUE.periphery is StimColor.BLUE
    assert ColorCode.CENTER_PURPLE_PERIPH_RED.is_periph_red()
    assert not ColorCode.CENTER_PURPLE_PERIPH_RED.is_center_red()
    assert not ColorCode.CENTER_PURPLE_PERIPH_RED.is_center_blue()


def test_plain_codes_sweep_order():
    assert [int(code) for code in PLAIN_CODES] == [0, 1, 2, 3]
    assert list(Eye) == [Eye.RIGHT, Eye.LEFT]


def test_stim_code_labels():
    assert stim_code_to_string(ColorCode.CENTER_RED_PERIPH_RED) == "Red  Red"
    assert stim_code_to_string(ColorCode.CENTER_BLUE_PERIPH_PURPLE) == "Blue Prpl"
    assert stim_code_to_string(8) == "Prpl Prpl"
    assert stim_code_to_string(99) == "unknown"


def test_center_red_uses_right_eye_and_fixating_offset():
    trial = new_trial(Eye.RIGHT, ColorCode.CENTER_RED_PERIPH_RED, random_model(), VECTOR)

    assert (trial.ctr_x_deg, trial.ctr_y_deg) == (0.0, 0.0)
    assert (trial.per_x_deg, trial.per_y_deg) == (4.0, -2.0)


def test_mismatched_center_adds_deviated_offset():
    model = random_model()
    trial = new_trial(Eye.RIGHT, ColorCode.CENTER_BLUE_PERIPH_RED, model, VECTOR)

    deviated = model.get_right_eye_dev()
    assert (trial.ctr_x_deg, trial.ctr_y_deg) == (0.0, 0.0)
    assert (trial.per_x_deg, trial.per_y_deg) == (4.0 + deviated.x_deg, -2.0 + deviated.y_deg)
    assert trial.per_x_deg == 14.0


def test_left_eye_with_red_center_uses_left_deviation():
    model = CyclopeanEyePositions(10.0)
    model.set_point(0.0, 0.0)
    trial = new_trial(Eye.LEFT, ColorCode.CENTER_RED_PERIPH_BLUE, model, VECTOR)

    assert trial.ctr_x_deg == 5.0
    assert trial.per_x_deg == -1.0
    assert trial.per_y_deg == -2.0


def test_without_approximation_target_is_raw_vector():
    trial = new_trial(
        Eye.RIGHT,
        ColorCode.CENTER_BLUE_PERIPH_RED,
        random_model(),
        VECTOR,
        use_approx=False,
    )

    assert (trial.per_x_deg, trial.per_y_deg) == (VECTOR.x_deg, VECTOR.y_deg)


def test_polar_values_are_copied():
    trial = new_trial(Eye.LEFT, ColorCode.CENTER_BLUE_PERIPH_BLUE, random_model(), VECTOR)

    assert trial.per_a_deg == 333.0
    assert trial.per_r_deg == 4.5


@pytest.mark.parametrize(
    "draw, expected_ctr_x",
    [(0.1, 5.0), (0.9, -5.0)],
)
def test_purple_center_follows_coin_flip(draw, expected_ctr_x):
    model = CyclopeanEyePositions(10.0)
    model.set_point(0.0, 0.0)
    trial = new_trial(
        Eye.RIGHT,
        ColorCode.CENTER_PURPLE_PERIPH_RED,
        model,
        VECTOR,
        rng=FixedRng(draw),
    )

    assert trial.ctr_x_deg == expected_ctr_x


@pytest.mark.parametrize(
    "draw, expected_per_x",
    [
        # right eye drew the cross, so the left eye is deviated
        (0.1, 4.0 - 10.0),
        # left eye drew the cross and is the stimulated eye
        (0.9, 4.0),
    ],
)
def test_purple_offset_uses_same_coin_flip(draw, expected_per_x):
    trial = new_trial(
        Eye.LEFT,
        ColorCode.CENTER_PURPLE_PERIPH_RED,
        random_model(),
        VECTOR,
        rng=FixedRng(draw),
    )

    assert trial.per_x_deg == expected_per_x


def test_one_random_draw_per_trial():
    rng = FixedRng(0.3)
    new_trial(Eye.RIGHT, ColorCode.CENTER_PURPLE_PERIPH_PURPLE, random_model(), VECTOR, rng=rng)

    assert rng.calls == 1


def test_trials_are_immutable():
    trial = make_trial(ColorCode.CENTER_RED_PERIPH_RED, Eye.RIGHT)

    with pytest.raises(dataclasses.FrozenInstanceError):
        trial.per_x_deg = 1.0  # type: ignore[misc]


def test_trial_string_format():
    trial = make_trial(ColorCode.CENTER_BLUE_PERIPH_RED, Eye.LEFT, ctr_x=1.5, per_x=-2.0)

    assert str(trial) == "Blue\tCtr Deg: (1.5, 0) \tRed\tPer Deg: (-2, 0) \t2"


@pytest.mark.parametrize(
    "eye, code, expected",
    [
        (Eye.RIGHT, ColorCode.CENTER_RED_PERIPH_RED, False),
        (Eye.RIGHT, ColorCode.CENTER_RED_PERIPH_BLUE, True),
        (Eye.RIGHT, ColorCode.CENTER_BLUE_PERIPH_RED, False),
        (Eye.RIGHT, ColorCode.CENTER_BLUE_PERIPH_BLUE, True),
        (Eye.LEFT, ColorCode.CENTER_RED_PERIPH_RED, True),
        (Eye.LEFT, ColorCode.CENTER_RED_PERIPH_BLUE, False),
        (Eye.LEFT, ColorCode.CENTER_BLUE_PERIPH_RED, True),
        (Eye.LEFT, ColorCode.CENTER_BLUE_PERIPH_BLUE, False),
        (Eye.RIGHT, ColorCode.CENTER_RED_PERIPH_PURPLE, False),
        (Eye.LEFT, ColorCode.CENTER_PURPLE_PERIPH_PURPLE, False),
    ],
)
def test_is_crossover(eye, code, expected):
    assert is_crossover(make_trial(code, eye)) is expected


def test_crossover_ignores_coordinates():
    near = make_trial(ColorCode.CENTER_RED_PERIPH_BLUE, Eye.RIGHT, ctr_x=0.0, per_x=0.0)
    far = make_trial(ColorCode.CENTER_RED_PERIPH_BLUE, Eye.RIGHT, ctr_x=-40.0, per_x=25.0)

    assert is_crossover(near) and is_crossover(far)


@pytest.mark.parametrize(
    "eye, code, per_x, expected",
    [
        (Eye.RIGHT, ColorCode.CENTER_RED_PERIPH_RED, -6.0, True),
        (Eye.RIGHT, ColorCode.CENTER_RED_PERIPH_RED, -3.0, False),
        (Eye.RIGHT, ColorCode.CENTER_RED_PERIPH_BLUE, -4.0, True),
        (Eye.RIGHT, ColorCode.CENTER_RED_PERIPH_BLUE, -6.0, False),
        # right eye under a blue cross is shifted by the full deviation
        (Eye.RIGHT, ColorCode.CENTER_BLUE_PERIPH_RED, -12.0, True),
        (Eye.RIGHT, ColorCode.CENTER_BLUE_PERIPH_RED, -4.0, False),
        (Eye.RIGHT, ColorCode.CENTER_BLUE_PERIPH_BLUE, -4.0, True),
        # left eye under a red cross is shifted the other way
        (Eye.LEFT, ColorCode.CENTER_RED_PERIPH_RED, 1.0, True),
        (Eye.LEFT, ColorCode.CENTER_RED_PERIPH_RED, 6.0, False),
        (Eye.LEFT, ColorCode.CENTER_BLUE_PERIPH_BLUE, 6.0, True),
        (Eye.LEFT, ColorCode.CENTER_BLUE_PERIPH_BLUE, 4.0, False),
    ],
)
def test_is_over_midline(eye, code, per_x, expected):
    trial = make_trial(code, eye, ctr_x=0.0, per_x=per_x)

    assert is_over_midline(trial, 10.0) is expected


def test_over_midline_is_relative_to_cross():
    trial = make_trial(ColorCode.CENTER_RED_PERIPH_RED, Eye.RIGHT, ctr_x=20.0, per_x=-6.0)

    # target = -6 + 20 = 14, threshold = 20 - 5 = 15
    assert is_over_midline(trial, 10.0)


@pytest.mark.parametrize(
    "code",
    [
        ColorCode.CENTER_RED_PERIPH_PURPLE,
        ColorCode.CENTER_PURPLE_PERIPH_RED,
        ColorCode.CENTER_PURPLE_PERIPH_PURPLE,
    ],
)
def test_over_midline_rejects_purple_codes(code):
    trial = make_trial(code, Eye.RIGHT)

    with pytest.raises(TrialCodeError, match=stim_code_to_string(code)):
        is_over_midline(trial, 10.0)


def test_trial_code_error_is_value_error():
    assert issubclass(TrialCodeError, ValueError)


@pytest.mark.parametrize(
    "angle, offset, expected",
    [
        (0.0, 0.0, 0x21),
        (90.0, 0.0, 0x33),
        (45.0, 45.0, 0x21),
        (-90.0, 0.0, 0x57),
        (360.0, 0.0, 0x21),
    ],
)
def test_angle_to_code(angle, offset, expected):
    assert angle_to_code(angle, offset) == expected


def test_radius_to_code():
    assert radius_to_code(10.0, 0.0) == 0x23
    assert radius_to_code(7.5, 2.5) == 0x22
    assert radius_to_code(2.0, 0.0) == 0x21
